"""
Record schema models

A record is a flat mapping of declared field names to string values, stored
as the named arguments of one template invocation on a page. The schema fixes
which fields exist and the order they are written in.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


# A record maps field name -> value. A missing key is "absent", "" is "empty".
Record = Dict[str, str]


class SchemaError(KeyError):
    """Raised for unknown schema names or malformed schema definitions"""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass(frozen=True)
class RecordSchema:
    """
    Declared layout of one record type

    Attributes:
        name: Registry key (e.g., "wish", "vote")
        template_name: Template the record is stored in, without namespace
        fields: Field names in serialization order
        list_fields: Fields whose value is a delimiter-joined list

    Example:
        >>> schema = RecordSchema("vote", "Community Wishlist/Vote",
        ...                       ("username", "comment", "timestamp"))
        >>> schema.field_isDeclared("comment")
        True
    """
    name: str
    template_name: str
    fields: Tuple[str, ...]
    list_fields: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        undeclared = [f for f in self.list_fields if f not in self.fields]
        if undeclared:
            raise SchemaError(
                f"Schema '{self.name}': list fields not declared as fields: {', '.join(undeclared)}"
            )
        if len(set(self.fields)) != len(self.fields):
            raise SchemaError(f"Schema '{self.name}': duplicate field names")

    def field_isDeclared(self, name: str) -> bool:
        return name in self.fields

    def field_isList(self, name: str) -> bool:
        return name in self.list_fields


WISH_FIELDS: Tuple[str, ...] = (
    'status',
    'type',
    'title',
    'focusarea',
    'description',
    'audience',
    'projects',
    'otherproject',
    'phabtasks',
    'proposer',
    'created',
    'baselang',
)

VOTE_FIELDS: Tuple[str, ...] = (
    'username',
    'comment',
    'timestamp',
)

FOCUS_AREA_FIELDS: Tuple[str, ...] = (
    'status',
    'title',
    'description',
    'shortdescription',
    'owners',
    'volunteers',
    'created',
    'baselang',
)

WISH_SCHEMA = RecordSchema(
    name='wish',
    template_name='Community Wishlist/Wish',
    fields=WISH_FIELDS,
    list_fields=('projects', 'phabtasks'),
)

VOTE_SCHEMA = RecordSchema(
    name='vote',
    template_name='Community Wishlist/Vote',
    fields=VOTE_FIELDS,
)

FOCUS_AREA_SCHEMA = RecordSchema(
    name='focusarea',
    template_name='Community Wishlist/Focus area',
    fields=FOCUS_AREA_FIELDS,
)

BUILTIN_SCHEMAS: Tuple[RecordSchema, ...] = (WISH_SCHEMA, VOTE_SCHEMA, FOCUS_AREA_SCHEMA)
