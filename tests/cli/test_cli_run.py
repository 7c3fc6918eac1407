"""Tests for ``boxrun run`` CLI command."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from boxrun.cli import main
from boxrun.runtime.errors import ContainerCommandError

if TYPE_CHECKING:
    from pathlib import Path

_VALID_YAML = """\
version: "1"
name: echo-job
image: org/image
args: [bash, -c, echo test]
input_dir: in
output_dir: out
"""


def _write_job(tmp_path: Path, text: str = _VALID_YAML) -> Path:
    (tmp_path / "in").mkdir(exist_ok=True)
    (tmp_path / "out").mkdir(exist_ok=True)
    f = tmp_path / "job.yaml"
    f.write_text(text)
    return f


class TestRunCommand:
    def test_dry_run(self, tmp_path: Path) -> None:
        f = _write_job(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["run", str(f), "--dry-run"])

        assert result.exit_code == 0
        assert "validated successfully" in result.output
        assert "org/image" in result.output

    def test_dry_run_invalid_yaml(self, tmp_path: Path) -> None:
        f = _write_job(tmp_path, "name: only-name\n")

        runner = CliRunner()
        result = runner.invoke(main, ["run", str(f), "--dry-run"])

        assert result.exit_code != 0
        assert "Validation error" in result.output

    def test_missing_file(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["run", "/nonexistent/job.yaml"])

        assert result.exit_code != 0

    def test_run_success(self, tmp_path: Path) -> None:
        f = _write_job(tmp_path)

        with patch("boxrun.sdk.job.JobRunner") as mock_runner_cls:
            mock_runner_cls.return_value.run = AsyncMock(return_value=None)

            runner = CliRunner()
            result = runner.invoke(main, ["run", str(f), "--verbose"])

        assert result.exit_code == 0
        assert "Running job: echo-job" in result.output
        assert "completed successfully" in result.output

    def test_run_failure(self, tmp_path: Path) -> None:
        f = _write_job(tmp_path)

        with patch("boxrun.sdk.job.JobRunner") as mock_runner_cls:
            mock_runner_cls.return_value.run = AsyncMock(
                side_effect=ContainerCommandError("boom")
            )

            runner = CliRunner()
            result = runner.invoke(main, ["run", str(f)])

        assert result.exit_code == 1
        assert "Execution error" in result.output
        assert "boom" in result.output

    def test_strict_flag(self, tmp_path: Path) -> None:
        f = _write_job(tmp_path)

        with patch("boxrun.sdk.job.JobRunner") as mock_runner_cls:
            mock_runner_cls.return_value.run = AsyncMock(return_value=None)

            runner = CliRunner()
            result = runner.invoke(main, ["run", str(f), "--strict"])

        assert result.exit_code == 0
        spec = mock_runner_cls.call_args.args[0]
        assert spec.strict_exit is True

    def test_telemetry_flag(self, tmp_path: Path) -> None:
        f = _write_job(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["run", str(f), "--dry-run", "--telemetry"])

        assert result.exit_code == 0
