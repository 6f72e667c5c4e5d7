"""
Models package for wishtext

Contains data structures and type definitions for scanning, locating and
serializing template invocations.
"""

from .state import ProgramState, pipeline
from .errors import ParseError, ParseErrorKind
from .invocation import Invocation, ArgKey, ArgMap
from .tree import PPNode, ParsedDocument
from .record import (
    Record,
    RecordSchema,
    SchemaError,
    WISH_SCHEMA,
    VOTE_SCHEMA,
    FOCUS_AREA_SCHEMA,
    BUILTIN_SCHEMAS,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "ParseError",
    "ParseErrorKind",
    "Invocation",
    "ArgKey",
    "ArgMap",
    "PPNode",
    "ParsedDocument",
    "Record",
    "RecordSchema",
    "SchemaError",
    "WISH_SCHEMA",
    "VOTE_SCHEMA",
    "FOCUS_AREA_SCHEMA",
    "BUILTIN_SCHEMAS",
]
