"""Error taxonomy surfaced to API callers."""


class ContestError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthenticated(ContestError):
    status_code = 401


class Forbidden(ContestError):
    status_code = 403


class InvalidArgument(ContestError):
    status_code = 400


class NotFound(ContestError):
    status_code = 404


class PayloadTooLarge(ContestError):
    status_code = 413


class UnsupportedMediaType(ContestError):
    status_code = 415
