"""
Settings tests - environment-driven configuration bounds
"""

import pytest
from pydantic import ValidationError

from wishtext.config import AppSettings


class TestScannerMaxDepth:
    """Test the nesting limit setting"""

    def test_default(self):
        """The default limit is accepted"""
        assert AppSettings().scanner_max_depth == 100

    def test_from_environment(self, monkeypatch):
        """The limit is read from WISHTEXT_SCANNER_MAX_DEPTH"""
        monkeypatch.setenv("WISHTEXT_SCANNER_MAX_DEPTH", "150")
        assert AppSettings().scanner_max_depth == 150

    def test_upper_bound(self, monkeypatch):
        """Limits deep enough to exhaust the interpreter stack are rejected"""
        monkeypatch.setenv("WISHTEXT_SCANNER_MAX_DEPTH", "100000")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_lower_bound(self):
        """A limit of zero is rejected"""
        with pytest.raises(ValidationError):
            AppSettings(scanner_max_depth=0)
