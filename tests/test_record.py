"""
Record tests - schema-bound extraction, serialization and the registry
"""

import pytest

from wishtext.lib.record import RecordTemplate, SchemaRegistry
from wishtext.lib.tree import document_preprocess
from wishtext.models.record import (
    RecordSchema,
    SchemaError,
    WISH_SCHEMA,
    VOTE_SCHEMA,
)


WISH_PAGE = """Some intro text.
{{Community Wishlist/Wish
| status = submitted
| type = feature
| title = <translate><!--T:1--> Better search</translate>
| description = <translate><!--T:2--> Search should find [[Help:Search|help pages]].</translate>
| projects = wikipedia, commons,wikipedia
| phabtasks = T123,T456
| proposer = Example
| created = 2025-01-01T00:00:00Z
| unknownfield = ignored
| stray positional
}}
[[Category:Wishes]]
"""


class TestRecordExtract:
    """Test reading records from pages"""

    def test_declared_fields_only(self):
        """Unknown names and positional arguments are dropped"""
        record = RecordTemplate(WISH_SCHEMA).record_extract(WISH_PAGE)

        assert "unknownfield" not in record
        assert 1 not in record
        assert record["status"] == "submitted"
        assert record["created"] == "2025-01-01T00:00:00Z"

    def test_schema_order(self):
        """Fields come back in schema order"""
        record = RecordTemplate(WISH_SCHEMA).record_extract(WISH_PAGE)
        assert list(record) == [
            "status", "type", "title", "description",
            "projects", "phabtasks", "proposer", "created",
        ]

    def test_translation_markup_kept_by_default(self):
        """Values are returned raw unless stripping is requested"""
        record = RecordTemplate(WISH_SCHEMA).record_extract(WISH_PAGE)
        assert record["title"] == "<translate><!--T:1--> Better search</translate>"

    def test_translation_markup_stripped(self):
        """Stripping removes translation markup from every value"""
        record = RecordTemplate(WISH_SCHEMA, strip_translations=True).record_extract(WISH_PAGE)
        assert record["title"] == "Better search"
        assert record["description"] == "Search should find [[Help:Search|help pages]]."

    def test_not_found(self):
        """A page without the template gives None"""
        assert RecordTemplate(VOTE_SCHEMA).record_extract(WISH_PAGE) is None

    def test_from_parsed_document(self):
        """A pre-built tree can be used instead of text"""
        doc = document_preprocess(WISH_PAGE)
        record = RecordTemplate(WISH_SCHEMA).record_extract(doc)
        assert record == RecordTemplate(WISH_SCHEMA).record_extract(WISH_PAGE)

    def test_list_values(self):
        """List fields are split and normalized"""
        template = RecordTemplate(WISH_SCHEMA)
        record = template.record_extract(WISH_PAGE)
        assert template.values_get(record, "projects") == ["wikipedia", "commons"]
        assert template.values_get(record, "phabtasks") == ["T123", "T456"]

    def test_list_values_absent(self):
        """A missing list field has no entries"""
        assert RecordTemplate(WISH_SCHEMA).values_get({}, "projects") == []

    def test_values_get_non_list(self):
        """Only list fields can be split"""
        with pytest.raises(SchemaError):
            RecordTemplate(WISH_SCHEMA).values_get({"title": "x"}, "title")


class TestWikitextMake:
    """Test writing records"""

    def test_vote(self):
        """Vote records use the vote field order"""
        out = RecordTemplate(VOTE_SCHEMA).wikitext_make(
            {"timestamp": "2025-01-01T00:00:00Z", "username": "Example", "comment": ""}
        )
        assert out == (
            "{{Community Wishlist/Vote\n"
            "| username = Example\n"
            "| comment =\n"
            "| timestamp = 2025-01-01T00:00:00Z\n"
            "}}"
        )

    def test_list_field_from_list(self):
        """List fields given as lists are joined"""
        out = RecordTemplate(WISH_SCHEMA).wikitext_make({"projects": ["a ", "b", "a", ""]})
        assert "| projects = a,b\n" in out

    def test_list_for_plain_field(self):
        """A list for a plain field is a type error"""
        with pytest.raises(TypeError):
            RecordTemplate(WISH_SCHEMA).wikitext_make({"title": ["a"]})

    def test_non_string_list_entries(self):
        """List entries that are not strings are a type error"""
        with pytest.raises(TypeError, match="string entries"):
            RecordTemplate(WISH_SCHEMA).wikitext_make({"projects": [1, 2]})

    def test_non_list_for_list_field(self):
        """A list field given a number is a type error"""
        with pytest.raises(TypeError):
            RecordTemplate(WISH_SCHEMA).wikitext_make({"projects": 3})

    def test_non_string_plain_field(self):
        """A plain field given a number is a type error"""
        with pytest.raises(TypeError):
            RecordTemplate(WISH_SCHEMA).wikitext_make({"title": 3})

    def test_namespace_prefix(self):
        """A schema template with a namespace prefix is written without it"""
        schema = RecordSchema("x", "Template:Petition", ("a",))
        assert RecordTemplate(schema).wikitext_make({"a": "1"}) == "{{Petition\n| a = 1\n}}"

    def test_round_trip(self):
        """A written record reads back unchanged"""
        template = RecordTemplate(WISH_SCHEMA)
        record = {"status": "open", "title": "T", "audience": "", "projects": "wikipedia"}
        assert template.record_extract(template.wikitext_make(record)) == record


class TestEditValidate:
    """Test the write/read/write consistency check"""

    def test_clean_record(self):
        """Ordinary records pass"""
        record = {"status": "open", "title": "Search", "description": "[[a|b]] {{c|d}}"}
        assert RecordTemplate(WISH_SCHEMA).edit_validate(record) is True

    def test_bare_pipe(self):
        """A bare '|' in a value splits it, so the check fails"""
        assert RecordTemplate(WISH_SCHEMA).edit_validate({"title": "a|b"}) is False

    def test_surrounding_whitespace(self):
        """Whitespace around a value is not preserved"""
        assert RecordTemplate(WISH_SCHEMA).edit_validate({"title": " padded"}) is False

    def test_unbalanced_braces(self):
        """A value that breaks the call's structure fails"""
        assert RecordTemplate(WISH_SCHEMA).edit_validate({"title": "}} oops"}) is False

    def test_unterminated_comment(self):
        """A value that makes the text malformed fails"""
        assert RecordTemplate(WISH_SCHEMA).edit_validate({"title": "<!-- oops"}) is False


class TestSchemaRegistry:
    """Test schema lookup and loading"""

    def test_builtins(self):
        """Built-in schemas are registered"""
        assert SchemaRegistry().names_list() == ["focusarea", "vote", "wish"]

    def test_get(self):
        """Built-ins keep their fields"""
        assert SchemaRegistry().get("wish").fields == WISH_SCHEMA.fields

    def test_unknown(self):
        """Unknown names raise SchemaError"""
        with pytest.raises(SchemaError, match="Unknown schema 'nope'"):
            SchemaRegistry().get("nope")

    def test_register(self):
        """Custom schemas can be added"""
        registry = SchemaRegistry()
        schema = RecordSchema("petition", "Petition", ("title",))
        registry.register(schema)
        assert registry.get("petition") is schema

    def test_load_yaml(self, tmp_path):
        """Schemas can be defined in YAML"""
        path = tmp_path / "petition.yaml"
        path.write_text(
            "name: petition\n"
            "template: Petition\n"
            "fields: [title, signers]\n"
            "list_fields: [signers]\n"
        )
        registry = SchemaRegistry()
        schema = registry.schema_loadFromYAML(path)

        assert schema.template_name == "Petition"
        assert schema.fields == ("title", "signers")
        assert schema.field_isList("signers")
        assert registry.get("petition") == schema

    def test_load_missing_file(self, tmp_path):
        """A missing file raises SchemaError"""
        with pytest.raises(SchemaError, match="not found"):
            SchemaRegistry().schema_loadFromYAML(tmp_path / "none.yaml")

    def test_load_missing_keys(self, tmp_path):
        """Required keys are checked"""
        path = tmp_path / "bad.yaml"
        path.write_text("name: bad\n")
        with pytest.raises(SchemaError, match="missing keys: template, fields"):
            SchemaRegistry().schema_loadFromYAML(path)

    def test_load_invalid_yaml(self, tmp_path):
        """Unparseable YAML raises SchemaError"""
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(SchemaError, match="Invalid YAML"):
            SchemaRegistry().schema_loadFromYAML(path)

    def test_list_field_must_be_declared(self):
        """List fields must also be fields"""
        with pytest.raises(SchemaError):
            RecordSchema("x", "X", ("a",), list_fields=("b",))

    def test_duplicate_fields(self):
        """Field names must be unique"""
        with pytest.raises(SchemaError):
            RecordSchema("x", "X", ("a", "a"))
