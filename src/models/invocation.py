"""
Template invocation data models

Type-safe structures for the values produced by the scanner and locators.
"""

from dataclasses import dataclass, field
from typing import Dict, Union


# Positional arguments use int keys (1, 2, ...), named arguments use str keys
ArgKey = Union[int, str]
ArgMap = Dict[ArgKey, str]


@dataclass
class Invocation:
    """
    A single template call found in wikitext

    Attributes:
        name: Template name as written, trimmed (not normalized)
        args: Arguments in source order. Positional keys are 1-based ints and
              keep their raw value; named keys and values are trimmed.

    Example:
        For source "{{Tgt| a |b = c}}":
        Invocation(name="Tgt", args={1: " a ", "b": "c"})
    """
    name: str
    args: ArgMap = field(default_factory=dict)

    def positional_get(self) -> Dict[int, str]:
        """Only the positional arguments, keyed by index"""
        return {k: v for k, v in self.args.items() if isinstance(k, int)}

    def named_get(self) -> Dict[str, str]:
        """Only the named arguments"""
        return {k: v for k, v in self.args.items() if isinstance(k, str)}
