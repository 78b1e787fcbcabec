"""Error kinds raised by the model layer and translated to HTTP statuses by the api."""


class ExpressError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class BadRequestError(ExpressError):
    """Invalid input: empty update, missing referenced entity, malformed filter."""

    status = 400

    def __init__(self, message="Bad Request"):
        super().__init__(message)


class NotFoundError(ExpressError):
    """Target row does not exist."""

    status = 404

    def __init__(self, message="Not Found"):
        super().__init__(message)


class UnauthorizedError(ExpressError):
    status = 401

    def __init__(self, message="Unauthorized"):
        super().__init__(message)


class ForbiddenError(ExpressError):
    status = 403

    def __init__(self, message="Forbidden"):
        super().__init__(message)
