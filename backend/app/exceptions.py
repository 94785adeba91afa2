"""Domain exceptions raised by services and rendered by the API layer."""


class ServiceError(Exception):
    """A business rule rejected the request."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    """The resource is in a state that does not allow the operation."""

    status_code = 409


class ConfigurationError(ServiceError):
    """A required setting (API key, etc.) is missing."""

    status_code = 503
