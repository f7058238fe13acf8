"""
Error taxonomy for the workflow services and the Record Store.
Services raise these; main.py renders them as {"detail": message} with status_code.
"""


class TableMasterError(Exception):
    """Base class. status_code is the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class AuthenticationError(TableMasterError):
    """Actor is not identified."""

    status_code = 401

    def __init__(self, message: str = "You must be signed in."):
        super().__init__(message)


class PermissionDeniedError(TableMasterError):
    status_code = 403


class NotFoundError(TableMasterError):
    status_code = 404

    def __init__(self, what: str, identifier: str | None = None):
        message = f"{what} not found" if identifier is None else f"{what} '{identifier}' not found"
        super().__init__(message)


class ValidationError(TableMasterError):
    """A required field could not be resolved or a payload has the wrong shape."""

    status_code = 422


class StateError(TableMasterError):
    """Request is no longer pending."""

    status_code = 409


class UnsupportedEntityError(TableMasterError):
    status_code = 400

    def __init__(self, entity_type: str | None):
        super().__init__(f"Unsupported entity type: {entity_type or 'unknown'}")


class WriteError(TableMasterError):
    """Record Store write failed; the original database error is chained."""

    status_code = 500
