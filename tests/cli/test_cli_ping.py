"""Tests for ``boxrun ping`` CLI command."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from boxrun.cli import main
from boxrun.runtime.errors import EngineUnavailableError


class TestPingCommand:
    def test_available(self) -> None:
        with patch("boxrun.runtime.runner.ContainerRunner") as mock_runner_cls:
            mock_runner_cls.return_value.ping = AsyncMock(return_value=None)

            result = CliRunner().invoke(main, ["ping"])

        assert result.exit_code == 0
        assert "available" in result.output

    def test_unavailable(self) -> None:
        with patch("boxrun.runtime.runner.ContainerRunner") as mock_runner_cls:
            mock_runner_cls.return_value.ping = AsyncMock(
                side_effect=EngineUnavailableError("Cannot connect to the Docker daemon")
            )

            result = CliRunner().invoke(main, ["ping"])

        assert result.exit_code == 1
        assert "Engine error" in result.output

    def test_docker_binary_option(self) -> None:
        with patch("boxrun.runtime.runner.ContainerRunner") as mock_runner_cls:
            mock_runner_cls.return_value.ping = AsyncMock(return_value=None)

            CliRunner().invoke(main, ["ping", "--docker-binary", "podman"])

        settings = mock_runner_cls.call_args.kwargs["settings"]
        assert settings.docker_binary == "podman"
