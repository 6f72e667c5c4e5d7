"""
Record templates and schema registry

RecordTemplate ties a RecordSchema to the scanner and serializer: it reads a
record out of a page's wikitext and writes a record back as the canonical
template call. SchemaRegistry holds the known schemas, including custom ones
loaded from YAML:

    # petition.yaml
    name: petition
    template: Petition
    fields: [title, description, signers]
    list_fields: [signers]
"""

from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

import yaml

from ..models.record import Record, RecordSchema, SchemaError, BUILTIN_SCHEMAS
from ..models.tree import ParsedDocument
from .locator import invocation_find
from .normalizer import values_fromList, values_toList
from .serializer import invocation_serialize, templateName_clean
from .translate import translationMarkup_strip
from .log import LOG


FieldValue = Union[str, Sequence[str], None]


class RecordTemplate:
    """
    Reads and writes one record type in wikitext

    Attributes:
        schema: Record layout
        template_name: Schema template name without "Template:" prefix
        strip_translations: Remove translation markup from extracted values
        delimiter: Delimiter for list fields
        extension_tags: Opaque extension element names (None = settings default)
    """

    def __init__(
        self,
        schema: RecordSchema,
        strip_translations: bool = False,
        delimiter: Optional[str] = None,
        extension_tags: Optional[Iterable[str]] = None,
    ):
        from ..config import appsettings

        self.schema = schema
        self.template_name = templateName_clean(schema.template_name)
        self.strip_translations = strip_translations
        self.delimiter = delimiter or appsettings.value_delimiter
        self.extension_tags = None if extension_tags is None else frozenset(extension_tags)

    def record_extract(
        self,
        source: Union[str, ParsedDocument],
        strip_translations: Optional[bool] = None,
    ) -> Optional[Record]:
        """
        Read the record from a page

        Only declared fields given as named arguments are kept, in schema
        order; positional arguments and unknown names are ignored.

        Args:
            source: Page wikitext, or a pre-built ParsedDocument
            strip_translations: Override the instance setting for this call

        Returns:
            Record, or None if the template is absent or the text is malformed

        Example:
            >>> from wishtext.models import VOTE_SCHEMA
            >>> RecordTemplate(VOTE_SCHEMA).record_extract(
            ...     "{{Community Wishlist/Vote|username=Ex|x=y}}")
            {'username': 'Ex'}
        """
        if strip_translations is None:
            strip_translations = self.strip_translations

        args = invocation_find(source, self.template_name, self.extension_tags)
        if args is None:
            return None

        record: Record = {}
        for field in self.schema.fields:
            if field not in args:
                continue
            value = args[field]
            if strip_translations:
                value = translationMarkup_strip(value)
            record[field] = value

        LOG(f"Extracted {self.schema.name} record with {len(record)} field(s)", level=2)
        return record

    def wikitext_make(self, record: Mapping[str, FieldValue]) -> str:
        """
        Write a record as template wikitext

        List fields may be given as lists; they are normalized and joined.

        Raises:
            TypeError: If a value is not a string, or a list field is given
                       anything but a list of strings
        """
        prepared: Dict[str, Optional[str]] = {}
        for field in self.schema.fields:
            value = record.get(field)
            if value is None or isinstance(value, str):
                prepared[field] = value
            elif self.schema.field_isList(field):
                if not isinstance(value, (list, tuple)):
                    raise TypeError(
                        f"Field '{field}' of {self.schema.name} takes a string or a list, "
                        f"not {type(value).__name__}"
                    )
                for entry in value:
                    if not isinstance(entry, str):
                        raise TypeError(
                            f"Field '{field}' of {self.schema.name} takes string entries, "
                            f"not {type(entry).__name__}"
                        )
                prepared[field] = values_fromList(value, self.delimiter)
            else:
                raise TypeError(f"Field '{field}' of {self.schema.name} takes a string, not {type(value).__name__}")
        return invocation_serialize(self.template_name, self.schema.fields, prepared)

    def values_get(self, record: Mapping[str, str], field: str) -> List[str]:
        """
        Entries of a list field

        Raises:
            SchemaError: If field is not a list field of this schema
        """
        if not self.schema.field_isList(field):
            raise SchemaError(f"'{field}' is not a list field of {self.schema.name}")
        return values_toList(record.get(field) or '', self.delimiter)

    def edit_validate(self, record: Mapping[str, FieldValue]) -> bool:
        """
        Check that a record survives a write/read/write cycle unchanged

        Values containing bare "|" or "}}", or surrounding whitespace, do not.

        Returns:
            True if both serializations are identical
        """
        first = self.wikitext_make(record)
        extracted = self.record_extract(first, strip_translations=False)
        if extracted is None:
            LOG(f"Edit rejected: serialized {self.schema.name} record does not parse", level=2)
            return False
        second = self.wikitext_make(extracted)
        if first != second:
            LOG(f"Edit rejected: {self.schema.name} record does not round-trip", level=2)
            return False
        return True


class SchemaRegistry:
    """
    Registry of record schemas by name

    Built-in schemas (wish, vote, focusarea) are registered on creation with
    template names taken from settings.
    """

    def __init__(self) -> None:
        self.schemas: Dict[str, RecordSchema] = {}
        self.builtinSchemas_register()

    def builtinSchemas_register(self) -> None:
        from ..config import appsettings

        templates = {
            'wish': appsettings.wish_template,
            'vote': appsettings.vote_template,
            'focusarea': appsettings.focus_area_template,
        }
        for schema in BUILTIN_SCHEMAS:
            self.register(replace(schema, template_name=templates[schema.name]))

    def register(self, schema: RecordSchema) -> None:
        """Register a schema, replacing any with the same name"""
        self.schemas[schema.name] = schema

    def get(self, name: str) -> RecordSchema:
        """
        Raises:
            SchemaError: If no schema has this name
        """
        if name not in self.schemas:
            raise SchemaError(
                f"Unknown schema '{name}'. Known: {', '.join(sorted(self.schemas))}"
            )
        return self.schemas[name]

    def names_list(self) -> List[str]:
        return sorted(self.schemas)

    def schema_loadFromYAML(self, path: Union[str, Path]) -> RecordSchema:
        """
        Load a schema definition from YAML and register it

        Args:
            path: YAML file with keys name, template, fields, and optionally
                  list_fields

        Returns:
            The registered schema

        Raises:
            SchemaError: If the file is missing, unreadable, or malformed
        """
        path = Path(path)
        if not path.exists():
            raise SchemaError(f"Schema file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SchemaError(f"Invalid YAML in schema file {path}: {e}") from e

        if not isinstance(data, dict):
            raise SchemaError(f"Schema file {path} must contain a mapping")

        missing = [key for key in ('name', 'template', 'fields') if key not in data]
        if missing:
            raise SchemaError(f"Schema file {path} missing keys: {', '.join(missing)}")

        fields = data['fields']
        list_fields = data.get('list_fields') or []
        if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
            raise SchemaError(f"Schema file {path}: 'fields' must be a list of strings")
        if not isinstance(list_fields, list) or not all(isinstance(f, str) for f in list_fields):
            raise SchemaError(f"Schema file {path}: 'list_fields' must be a list of strings")

        schema = RecordSchema(
            name=str(data['name']),
            template_name=str(data['template']),
            fields=tuple(fields),
            list_fields=tuple(list_fields),
        )
        self.register(schema)
        return schema
