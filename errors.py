"""HTTP error kinds raised by routes and services."""

from werkzeug.exceptions import BadRequest, Conflict, NotFound, Unauthorized


class ValidationFailed(BadRequest):
    """Request body or query failed schema validation."""


class EmailConflict(Conflict):
    description = "Email in use"


class Unauthenticated(Unauthorized):
    description = "Not authorized"


class InvalidCredentials(Unauthenticated):
    # Same message for unknown email and wrong password.
    description = "Email or password is wrong"


class EmailNotVerified(Unauthenticated):
    description = "Please verify your email"


class ResourceNotFound(NotFound):
    description = "Not found"


class AlreadyVerified(BadRequest):
    description = "Verification has already been passed"
