"""
Translation markup stripper

Values extracted from translatable pages carry a second markup dialect used
by the translation system: <translate> wrappers, <tvar> variables and
<!--T:id--> unit markers. translationMarkup_strip() removes it, leaving the
text a reader would see.

Example:
    >>> translationMarkup_strip("<translate><!--T:1--> Hello <tvar name=x>{{PAGENAME}}</tvar></translate>")
    'Hello {{PAGENAME}}'
"""

import re

TRANSLATE_OPEN = re.compile(r'<translate( nowrap)?>\n?')
TRANSLATE_CLOSE = re.compile(r'\n?</translate>')
TVAR = re.compile(r'<tvar\s+name\s*=\s*(?:\'[^\']*\'|"[^"]*"|[^"\'\s>]*)\s*>(.*?)</tvar\s*>')
HEADING_UNIT_MARKER = re.compile(r'^(=.*=) <!--T:[^_/\n<>]+-->$', re.MULTILINE)
UNIT_MARKER = re.compile(r'<!--T:[^_/\n<>]+-->[\n ]?')


def translationMarkup_strip(text: str) -> str:
    """
    Remove translation markup from an extracted value

    Applied in order:
        1. <translate>, <translate nowrap> (with one following newline) and
           </translate> (with one preceding newline) are dropped
        2. <tvar name=...>inner</tvar> is replaced by inner
        3. a unit marker ending a heading line is dropped, keeping the heading
        4. any other unit marker is dropped with one following newline or space

    Args:
        text: Extracted value

    Returns:
        Value without translation markup
    """
    text = TRANSLATE_OPEN.sub('', text)
    text = TRANSLATE_CLOSE.sub('', text)
    text = TVAR.sub(r'\1', text)
    text = HEADING_UNIT_MARKER.sub(r'\1', text)
    text = UNIT_MARKER.sub('', text)
    return text
