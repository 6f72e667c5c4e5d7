"""
wishtext - Template invocation extraction for wikitext records

Reads fixed-schema records out of {{template}} calls in wikitext and writes
them back, without rendering the page.
"""

__version__ = "1.0.0"

from .scanner import Scanner
from .tree import TreeBuilder, document_preprocess
from .locator import (
    Locator,
    TextScanningLocator,
    ParsedTreeLocator,
    invocations_collect,
    invocations_list,
    invocationArgs_find,
    invocation_find,
    functionArgs_find,
    locator_select,
    name_normalize,
    templateTitle_normalize,
)
from .normalizer import values_normalize, values_toList, values_fromList
from .serializer import invocation_serialize
from .translate import translationMarkup_strip
from .record import RecordTemplate, SchemaRegistry
from .log import LOG, state_connectToLogger

__all__ = [
    "Scanner",
    "TreeBuilder",
    "document_preprocess",
    "Locator",
    "TextScanningLocator",
    "ParsedTreeLocator",
    "invocations_collect",
    "invocations_list",
    "invocationArgs_find",
    "invocation_find",
    "functionArgs_find",
    "locator_select",
    "name_normalize",
    "templateTitle_normalize",
    "values_normalize",
    "values_toList",
    "values_fromList",
    "invocation_serialize",
    "translationMarkup_strip",
    "RecordTemplate",
    "SchemaRegistry",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
