"""Domain errors raised by the service layer.

Both kinds subclass ``RuntimeError`` and carry a short text ``code`` so
the request layer can translate them with ``handle_service_errors``.
"""


class FilmorateError(RuntimeError):
    code = "internal_error"


class ValidationError(FilmorateError):
    """Input is well-formed but violates a business rule."""

    code = "validation_error"


class NotFoundError(FilmorateError):
    """A referenced film, user, genre or rating does not exist."""

    code = "not_found"
