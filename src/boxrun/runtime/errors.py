"""Shared error types for container execution."""


class ContainerRunError(Exception):
    """Base error for all container execution failures."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail or "Container run failed")


class InvalidJobError(ContainerRunError):
    """The job description cannot be executed (e.g. a bound directory is missing)."""


class EngineError(ContainerRunError):
    """An engine client failed to talk to the container engine."""


class EngineUnavailableError(ContainerRunError):
    """The container engine did not answer the availability probe."""

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(
            "Container engine is not available. "
            f"Make sure Docker is installed and running: {cause}"
        )


class ImagePullError(ContainerRunError):
    """The image could not be pulled."""

    def __init__(self, image: str, cause: str) -> None:
        self.image = image
        self.cause = cause
        super().__init__(f"Failed to pull image '{image}': {cause}")


class EngineRunError(ContainerRunError):
    """The engine could not orchestrate the container run."""

    def __init__(self, image: str, cause: str) -> None:
        self.image = image
        self.cause = cause
        super().__init__(f"Failed to run container from image '{image}': {cause}")


class ContainerCommandError(ContainerRunError):
    """The command inside the container reported an error."""

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(f"Container failed to run with the following error message: {error}")


class ContainerExitError(ContainerCommandError):
    """The container exited with a non-zero status code (strict mode only)."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"container exited with non-zero status code {status_code}")
