"""Tests for engine data models."""

from boxrun.runtime.engine.models import ContainerResult, RunConfig


class TestRunConfig:
    def test_defaults(self) -> None:
        cfg = RunConfig()
        assert cfg.binds == []
        assert cfg.volumes == {}
        assert cfg.user is None
        assert cfg.env == []
        assert cfg.working_dir is None
        assert cfg.auto_remove is True

    def test_engine_dict_minimal(self) -> None:
        cfg = RunConfig(
            binds=["/a:/input", "/b:/output"],
            volumes={"/input": {}, "/output": {}},
        )
        assert cfg.to_engine_dict() == {
            "Volumes": {"/input": {}, "/output": {}},
            "HostConfig": {"Binds": ["/a:/input", "/b:/output"], "AutoRemove": True},
        }

    def test_engine_dict_full(self) -> None:
        cfg = RunConfig(
            binds=["/a:/input"],
            volumes={"/input": {}},
            user="1000:1000",
            env=["HOME=/tmp"],
            working_dir="/input",
        )
        body = cfg.to_engine_dict()
        assert body["User"] == "1000:1000"
        assert body["Env"] == ["HOME=/tmp"]
        assert body["WorkingDir"] == "/input"


class TestContainerResult:
    def test_minimal(self) -> None:
        result = ContainerResult(status_code=0)
        assert result.error is None

    def test_with_error(self) -> None:
        result = ContainerResult(status_code=1, error="boom")
        assert result.status_code == 1
        assert result.error == "boom"
