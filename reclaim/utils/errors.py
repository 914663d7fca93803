class ResolutionError(Exception):
    def __init__(self, message: str, status_code: int):
        """
        Base class for outcomes of the claim resolution core.

        Args:
            message (str): Human readable reason, surfaced as the response detail.
            status_code (int): The HTTP status code the outcome maps to.
        """
        super().__init__(message)

        self.message = message
        self.status_code = status_code


class NotFound(ResolutionError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, 404)


class Forbidden(ResolutionError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, 403)


class Conflict(ResolutionError):
    """Expected under contention; the user may simply retry or pick another item."""

    def __init__(self, message: str = "Conflict"):
        super().__init__(message, 409)


class InternalError(ResolutionError):
    """A reserved item could not be handed over; the transaction was rolled back."""

    def __init__(self, message: str = "Internal error"):
        super().__init__(message, 500)
