"""Exception types raised by slngen."""


class SlngenError(Exception):
    """Base class for all slngen errors."""

    pass


class ConfigError(SlngenError, ValueError):
    """Raised when generation options cannot be loaded or validated."""

    pass


class ManifestError(SlngenError, ValueError):
    """Raised when the assembly unit manifest is malformed."""

    pass


class IdentityError(SlngenError, RuntimeError):
    """Raised when a project identifier cannot be derived.

    This signals a broken invariant (wrong digest size) rather than a
    recoverable runtime condition.
    """

    pass


class GenerationError(SlngenError, OSError):
    """Raised when descriptor files cannot be written.

    Attributes:
        path: File that was being written when the failure happened.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path
