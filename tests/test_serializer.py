"""
Serializer tests - writing records as template calls
"""

import pytest

from wishtext.lib.serializer import invocation_serialize
from wishtext.lib.locator import invocationArgs_find


FIELDS = ["status", "title", "description", "projects"]


class TestSerialize:
    """Test output layout"""

    def test_full_record(self):
        """Every field present, in declared order"""
        record = {"title": "T", "status": "open", "description": "D", "projects": "a,b"}
        assert invocation_serialize("Wish", FIELDS, record) == (
            "{{Wish\n"
            "| status = open\n"
            "| title = T\n"
            "| description = D\n"
            "| projects = a,b\n"
            "}}"
        )

    def test_empty_value_bare_key(self):
        """An empty value is written as a bare key"""
        assert invocation_serialize("Wish", ["a"], {"a": ""}) == "{{Wish\n| a =\n}}"

    def test_absent_omitted(self):
        """Missing and None values are left out"""
        out = invocation_serialize("Wish", ["a", "b", "c"], {"a": "x", "c": None})
        assert out == "{{Wish\n| a = x\n}}"

    def test_empty_record(self):
        """No values give an empty call"""
        assert invocation_serialize("Wish", FIELDS, {}) == "{{Wish\n}}"

    def test_undeclared_ignored(self):
        """Keys outside the field order are not written"""
        out = invocation_serialize("Wish", ["a"], {"a": "x", "zzz": "y"})
        assert "zzz" not in out

    def test_namespace_dropped(self):
        """A Template: prefix is not part of the call"""
        assert invocation_serialize("Template:Wish", ["a"], {"a": "x"}) == "{{Wish\n| a = x\n}}"


class TestRoundTrip:
    """Test that serialized records extract unchanged"""

    @pytest.mark.parametrize("record", [
        {"status": "open", "title": "Better search"},
        {"status": "", "title": "Empty status"},
        {},
        {"description": "Line one\n\nLine two"},
        {"description": "See [[Help:Links|the help page]] and {{PAGENAME}}"},
        {"description": "Code: <nowiki>{{x|y}}</nowiki>"},
        {"title": "a = b"},
        {"status": "open", "title": "T", "description": "D", "projects": "wikipedia,commons"},
    ])
    def test_round_trip(self, record):
        """extract(serialize(record)) == record"""
        text = invocation_serialize("Community Wishlist/Wish", FIELDS, record)
        assert invocationArgs_find(text, "Community Wishlist/Wish", {"nowiki"}) == record

    def test_embedded_in_page(self):
        """The call extracts unchanged when surrounded by other content"""
        record = {"status": "open", "title": "T"}
        page = "Intro\n" + invocation_serialize("Wish", FIELDS, record) + "\n{{Other|x=y}}"
        assert invocationArgs_find(page, "wish") == record
