"""
Scanner error models

ParseError is raised only for structurally malformed wikitext. A template
that simply is not present is never an error.
"""

from enum import Enum


class ParseErrorKind(Enum):
    """
    Categories of scanner failure

    Each ParseError carries one of these so callers can tell what went wrong
    without matching on message text.
    """
    UNTERMINATED_COMMENT = "unterminated-comment"
    UNTERMINATED_EXTENSION_ELEMENT = "unterminated-extension-element"
    MARKUP_ASSERTION_FAILED = "markup-assertion-failed"
    NESTING_TOO_DEEP = "nesting-too-deep"


class ParseError(SyntaxError):
    """
    Raised when the input text does not match the restricted template grammar

    Attributes:
        offset: Character offset in the input where the problem was detected
        message: Human-readable description (without the offset prefix)
        kind: ParseErrorKind classifying the failure

    Example:
        >>> err = ParseError(12, "missing comment terminator",
        ...                  ParseErrorKind.UNTERMINATED_COMMENT)
        >>> str(err)
        'Syntax error parsing template at offset 12: missing comment terminator'
    """

    def __init__(self, offset: int, message: str, kind: ParseErrorKind):
        super().__init__(f"Syntax error parsing template at offset {offset}: {message}")
        self.offset = offset
        self.message = message
        self.kind = kind
