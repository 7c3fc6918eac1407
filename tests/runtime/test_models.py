"""Tests for container job models."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from pydantic import ValidationError

from boxrun.runtime.models import ContainerJob, RunnerSettings


class TestContainerJob:
    def test_minimal(self) -> None:
        job = ContainerJob(image="alpine", input_dir="/in", output_dir="/out")
        assert job.args == []
        assert job.input_dir == Path("/in")
        assert job.log_sink is None
        assert job.pull_options == {}
        assert job.env == {}
        assert job.pull is True

    def test_empty_image_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ContainerJob(image="", input_dir="/in", output_dir="/out")

    def test_sink_kept_by_identity(self) -> None:
        sink = io.BytesIO()
        job = ContainerJob(image="alpine", input_dir="/in", output_dir="/out", log_sink=sink)
        assert job.log_sink is sink

    def test_sink_must_be_writable(self) -> None:
        with pytest.raises(ValidationError, match="writable"):
            ContainerJob(image="alpine", input_dir="/in", output_dir="/out", log_sink=42)

    def test_sink_without_flush_accepted(self) -> None:
        class WriteOnlySink:
            def write(self, data: bytes) -> int:
                return len(data)

        sink = WriteOnlySink()
        job = ContainerJob(image="alpine", input_dir="/in", output_dir="/out", log_sink=sink)
        assert job.log_sink is sink

    def test_frozen(self) -> None:
        job = ContainerJob(image="alpine", input_dir="/in", output_dir="/out")
        with pytest.raises(ValidationError):
            job.image = "busybox"  # type: ignore[misc]


class TestRunnerSettings:
    def test_defaults(self) -> None:
        settings = RunnerSettings()
        assert settings.strict_exit is False
        assert settings.auto_remove is True
        assert settings.docker_binary == "docker"
