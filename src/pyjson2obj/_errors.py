"""Exception hierarchy for JSON-to-object mapping."""


class MappingError(Exception):
    """Base exception for JSON-to-object mapping errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging (document content never reaches the
    user message).
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class ParseError(MappingError):
    """Raised when the input text is not well-formed JSON."""


class MissingRootError(MappingError):
    """Raised when a configured root element is absent from the document."""


class TypeCoercionError(MappingError):
    """Raised when a JSON scalar cannot be converted to the member's type."""


class UnmatchedMemberError(MappingError):
    """Raised under a strict policy when a member has no matching JSON key."""


class UnsupportedShapeError(MappingError):
    """Raised under a strict policy when a node cannot fill a member's shape."""


class InvalidTargetTypeError(MappingError):
    """Raised when a target type cannot be introspected or constructed."""


# Sanitized user-facing error message constants
ERR_MSG_MALFORMED_JSON = "malformed JSON document"
ERR_MSG_MISSING_ROOT = "root element not found"
ERR_MSG_COERCION_FAILED = "value cannot be converted to the member type"
ERR_MSG_INVALID_DATE = "invalid date value"
ERR_MSG_UNMATCHED_MEMBER = "no JSON value for member"
ERR_MSG_UNSUPPORTED_SHAPE = "unsupported value shape"
ERR_MSG_INVALID_TARGET = "invalid target type"
