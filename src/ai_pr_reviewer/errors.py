# src/ai_pr_reviewer/errors.py


class ReviewError(Exception):
    """Base exception for the reviewer."""


class ConfigurationError(ReviewError):
    """Settings or event input are unusable."""


class UnsupportedTriggerError(ReviewError):
    """The event action is not one we review on."""

    def __init__(self, action: str | None):
        self.action = action
        super().__init__(f"Unsupported pull request action: {action!r}")


class AcquisitionError(ReviewError):
    """Pull request metadata or diff could not be fetched."""


class EngineError(ReviewError):
    """The text-generation engine call failed (transport, timeout, quota, empty reply)."""


class ResponseDecodeError(ReviewError):
    """Engine output could not be decoded into review items."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class PublishError(ReviewError):
    """The report was built but could not be posted."""
