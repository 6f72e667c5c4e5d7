"""
wishtext - Template invocation extraction for wikitext records

Reads fixed-schema records (wishes, votes, focus areas) out of {{template}}
calls in wikitext and writes them back, without rendering the page.
"""

__version__ = "1.0.0"

from .lib import (
    Scanner,
    invocationArgs_find,
    invocations_collect,
    invocation_serialize,
    values_toList,
    values_fromList,
    translationMarkup_strip,
    RecordTemplate,
    SchemaRegistry,
    LOG,
    state_connectToLogger,
)
from .models import ParseError, ParseErrorKind, RecordSchema

__all__ = [
    "Scanner",
    "invocationArgs_find",
    "invocations_collect",
    "invocation_serialize",
    "values_toList",
    "values_fromList",
    "translationMarkup_strip",
    "RecordTemplate",
    "SchemaRegistry",
    "RecordSchema",
    "ParseError",
    "ParseErrorKind",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
