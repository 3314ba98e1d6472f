"""Domain error taxonomy shared by the service layer."""


class ServiceError(Exception):
    """Raised when a business rule rejects a request."""

    status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    """Bad or empty input."""


class ConflictError(ServiceError):
    """Request collides with existing state (duplicates, invalid transitions)."""


class NotFoundError(ServiceError):
    status_code = 404


class UnauthorizedError(ServiceError):
    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403
