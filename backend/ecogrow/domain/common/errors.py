"""Domain error types.

Every error carries a user-facing ``message``; the API layer turns it into
an error notice with the matching status code.
"""


class DomainError(Exception):
    """Base domain error."""

    default_message = "Something went wrong"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with id {identifier} not found")


class ValidationError(DomainError):
    """Input rejected before any remote call was made."""


class AuthenticationError(DomainError):
    """No valid signed-in identity."""

    default_message = "Not authenticated"


class AuthorizationError(DomainError):
    default_message = "Not authorized"


class ConflictError(DomainError):
    """E.g. signing up with an email that is already registered."""


class RemoteCallError(DomainError):
    """A call against the data service failed; the message is shown to the user verbatim.

    ``operation`` names the table and verb (``orders.update``) for the logs.
    """

    def __init__(self, message: str, operation: str = ""):
        self.operation = operation
        super().__init__(message)
