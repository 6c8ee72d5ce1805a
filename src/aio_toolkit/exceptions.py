"""Domain exceptions for the Adobe I/O toolkit.

Every exception carries a human-readable ``message``; the onboarding pipeline
only ever reads that attribute when it records a failed result.
"""


class AioToolkitError(Exception):
    """Base exception for toolkit errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail or message


class ConfigurationError(AioToolkitError):
    """Raised when required configuration is missing or blank."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, status_code=400, detail=detail or message)


class OnboardingError(AioToolkitError):
    """Raised when the onboarding pipeline is invoked with unusable input."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, status_code=400, detail=detail or message)


class IOEventsApiError(AioToolkitError):
    """Raised when an Adobe I/O Events API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, detail=details or message)
        self.error_code = error_code
        self.details = details
