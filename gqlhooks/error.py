__all__ = [
    "DirectiveError",
    "Unauthorized",
    "ValidationFailed",
    "InvalidDirectiveUsage",
    "DirectiveConfigurationError",
]


class DirectiveError(Exception):
    """Base error of directive hooks

    ``code`` is reported in the ``extensions`` of a GraphQL error
    """

    code = "DIRECTIVE_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(DirectiveError):
    """Raised by a validation hook when the caller may not see the field"""

    code = "UNAUTHORIZED"


class ValidationFailed(DirectiveError):
    """Raised by a validation hook when the field may not be resolved"""

    code = "VALIDATION_FAILED"


class InvalidDirectiveUsage(DirectiveError):
    """Directive arguments can not be decoded against their definition"""

    code = "INVALID_DIRECTIVE_USAGE"


class DirectiveConfigurationError(DirectiveError):
    """Directive annotation and schema definitions do not match"""

    code = "DIRECTIVE_CONFIGURATION_ERROR"
