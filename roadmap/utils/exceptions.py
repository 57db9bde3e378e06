"""Custom exceptions for Notion API integration."""


class NotionAPIError(Exception):
    """Base Notion API exception; ``status`` is the upstream HTTP status when known."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class NotionUnavailableError(NotionAPIError):
    def __init__(self, message: str = "Notion API is temporarily unavailable.", status: int | None = None) -> None:
        super().__init__(message, status=status)


class NotionNotFoundError(NotionAPIError):
    def __init__(self, message: str = "Notion object not found.", status: int | None = 404) -> None:
        super().__init__(message, status=status)


class NotionValidationError(NotionAPIError):
    def __init__(self, message: str = "Invalid request to Notion.", status: int | None = 400) -> None:
        super().__init__(message, status=status)


class NotionRateLimitError(NotionAPIError):
    def __init__(self, message: str = "Notion rate limit exceeded.", status: int | None = 429) -> None:
        super().__init__(message, status=status)


class NotionAuthError(NotionAPIError):
    def __init__(self, message: str = "Notion authorization failed.", status: int | None = 401) -> None:
        super().__init__(message, status=status)


def error_for_status(status: int, message: str) -> NotionAPIError:
    """Map an HTTP status from Notion to the matching exception."""
    if status in (401, 403):
        return NotionAuthError(message, status=status)
    if status == 404:
        return NotionNotFoundError(message, status=status)
    if status == 429:
        return NotionRateLimitError(message, status=status)
    if status >= 500:
        return NotionUnavailableError(message, status=status)
    return NotionValidationError(message, status=status)


class RoadmapFetchError(Exception):
    """Raised by the UI when the roadmap JSON cannot be loaded."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
