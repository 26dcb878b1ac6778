from __future__ import annotations


class CleanupError(Exception):
    """Base class for every failure the cleanup tool reports."""


class ValidationError(CleanupError):
    """The target path is not a usable plugin package. Raised before any mutation."""


class MissingDirectory(ValidationError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Plugin directory not found: {path}")
        self.path = path


class MissingManifest(ValidationError):
    def __init__(self, path: str) -> None:
        super().__init__(f"No package.json found in {path} - not a valid plugin directory")
        self.path = path


class InvalidManifest(ValidationError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not read {path}: {reason}")
        self.path = path
        self.reason = reason


class MissingIdentifier(ValidationError):
    def __init__(self, path: str) -> None:
        super().__init__(
            f"No backstage.pluginId found in {path} - not a valid Backstage plugin"
        )
        self.path = path


class MutationError(CleanupError):
    """A filesystem operation failed partway through a run."""

    def __init__(self, step: str, path: str, reason: str) -> None:
        super().__init__(f"{step} failed for {path}: {reason}")
        self.step = step
        self.path = path
        self.reason = reason
