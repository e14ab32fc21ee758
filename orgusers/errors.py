"""
Exceptions raised by orgusers
"""
from typing import Any, List, Optional, Union


class MembershipError(Exception):
    """Base class for all orgusers errors."""


class ValidationError(MembershipError):
    """
    Exception raised when an action is refused before any store call is made.

    Attributes:
        errors (list): A list of error messages.
    """

    def __init__(self, errors: Union[str, List[str]]):
        if isinstance(errors, str):
            errors = [errors]
        elif not isinstance(errors, list):
            raise ValueError("Errors should be a string or a list of strings")
        self.errors = errors
        super().__init__(self.format_errors())

    def format_errors(self):
        return "\n".join(self.errors)

    def __str__(self):
        return self.format_errors()


class SelfActionError(ValidationError):
    """The target assignment belongs to the acting viewer."""


class InvalidTransition(ValidationError):
    """The target assignment's status does not allow the requested action."""


class AssignmentNotFound(ValidationError):
    """The target assignment id is not in the loaded assignment list."""


class StoreError(MembershipError):
    """
    A document store call failed.

    Attributes:
        message (str): User facing message derived from the underlying error.
        original (Exception): The underlying error, if any.
    """

    def __init__(self, message: str, original: Optional[BaseException] = None):
        self.message = message
        self.original = original
        super().__init__(message)


class PartialCascadeFailure(StoreError):
    """
    The assignment delete of a cascading delete succeeded but the persona
    update did not. The persona still references the organization.
    """

    def __init__(self, message: str, assignment: Any, persona_id: Optional[str],
                 original: Optional[BaseException] = None):
        super().__init__(message, original)
        self.assignment = assignment
        self.persona_id = persona_id


class ConfigError(MembershipError):
    """Configuration is missing or invalid."""


class InvalidStateError(MembershipError):
    """A state machine was asked for a transition its current state does not allow."""


def get_error_message(exc: BaseException) -> str:
    """
    Extract a user facing message from a store error.

    Transport errors may carry an ``errors`` list of ``{"message": ...}``
    entries (GraphQL style); the first message wins. Falls back to a
    ``message`` attribute and finally to ``str(exc)``.
    """
    if isinstance(exc, StoreError):
        return exc.message
    errors = getattr(exc, 'errors', None)
    if isinstance(errors, (list, tuple)):
        for error in errors:
            if isinstance(error, dict) and error.get('message'):
                return str(error['message'])
    message = getattr(exc, 'message', None)
    if isinstance(message, str) and message:
        return message
    return str(exc)
