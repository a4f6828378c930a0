"""Service error taxonomy.

Services and repositories raise these; the HTTP adapters catch
`ServiceError` at the handler boundary and turn it into a 400 response.
"""


class ServiceError(Exception):
    """Base class for every failure a client can be told about."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedInputError(ServiceError):
    """Input could not be parsed (bad JSON, non-numeric id)."""


class BlankFieldError(ServiceError):
    """A required text field is empty after trimming."""

    def __init__(self, field: str):
        super().__init__(f"{field.capitalize()} cannot be blank")
        self.field = field


class NotFoundError(ServiceError):
    """No row matches the requested key."""


class DuplicateError(ServiceError):
    """The username is already taken."""

    def __init__(self, message: str = "Duplicate data"):
        super().__init__(message)


class StorageError(ServiceError):
    """A database operation did not complete."""
