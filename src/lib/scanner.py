"""
Scanner for template invocations in wikitext

A single-pass recursive-descent reader over a restricted wikitext grammar:

    wikitext  ::= (template | link | comment | extension | literal)*
    template  ::= "{{" wikitext ("|" wikitext ("=" wikitext)?)* "}}"
    link      ::= "[[" wikitext "]]"
    comment   ::= "<!--" .*? "-->"
    extension ::= "<" NAME .*? ( "/>" | ">" .*? "</" NAME ">" )

Each *_consume method takes a start offset and returns the offset just past
what it consumed. A span of wikitext ends at end of input or at the first of
the caller's terminators (e.g. "|" or "}}"), which is left unconsumed.

The scanner does not build anything. It reports each template it completes
to a callback as (name, args); inner templates report before the template
that contains them.

Example:
    >>> found = []
    >>> Scanner("{{a|{{b|x=y}}}}", lambda n, a: found.append(n)).execute()
    15
    >>> found
    ['b', 'a']
"""

import re
from typing import Callable, Iterable, Optional, Sequence

from ..models.errors import ParseError, ParseErrorKind
from ..models.invocation import ArgMap
from .log import LOG


InvocationCallback = Callable[[str, ArgMap], None]

# Characters that may start or end a construct; anything else is literal
LITERAL_RUN = re.compile(r'[^\[{|=}\]<]*')
EXT_NAME = re.compile(r'[a-zA-Z0-9_-]*')


class Scanner:
    """
    Recursive-descent scanner for {{template}} calls

    Handles:
    - Nested templates, including templates inside argument values
    - Links, whose bodies are scanned for templates
    - HTML comments, skipped verbatim
    - Extension elements (<nowiki>, <pre>, ...), whose bodies are opaque
    """

    def __init__(
        self,
        text: str,
        callback: Optional[InvocationCallback] = None,
        extension_tags: Optional[Iterable[str]] = None,
        max_depth: Optional[int] = None,
    ):
        """
        Initialize scanner over source text

        Args:
            text: Wikitext to scan
            callback: Called with (name, args) for every template completed
            extension_tags: Allow-list of opaque extension element names.
                            Defaults to appsettings.extension_tags.
            max_depth: Maximum nesting of templates and links.
                       Defaults to appsettings.scanner_max_depth.

        Attributes:
            text: Source being scanned
            callback: Invocation callback (may be None)
            extension_tags: frozenset copy of the allow-list
            max_depth: Nesting limit
            depth: Current template/link nesting level
        """
        from ..config import appsettings

        self.text = text
        self.callback = callback
        if extension_tags is None:
            self.extension_tags = appsettings.extensionTags_get()
        else:
            self.extension_tags = frozenset(extension_tags)
        self.max_depth = appsettings.scanner_max_depth if max_depth is None else max_depth
        self.depth = 0

    def execute(self) -> int:
        """
        Scan the whole text

        Returns:
            Final offset (always len(text) on success)

        Raises:
            ParseError: If the text is structurally malformed
        """
        self.depth = 0
        return self.wikitext_consume(0, ())

    def wikitext_consume(self, pos: int, terminators: Sequence[str]) -> int:
        """
        Consume the top-level grammar rule

        Args:
            pos: Offset at which to begin
            terminators: Markup which, if found at the current offset, ends
                         the span without being consumed

        Returns:
            Offset of the terminator found, or len(text)
        """
        text = self.text
        while pos < len(text):
            for terminator in terminators:
                if text.startswith(terminator, pos):
                    return pos

            if text.startswith('{{', pos):
                pos = self.template_consume(pos)
            elif text.startswith('[[', pos):
                pos = self.link_consume(pos)
            elif text.startswith('<!--', pos):
                pos = self.comment_consume(pos)
            elif text[pos] == '<' and self.extension_isAllowed(self.extName_peek(pos + 1)):
                pos = self.extension_consume(pos)
            else:
                pos = self.literal_consume(pos)
        return pos

    def template_consume(self, pos: int) -> int:
        """
        Consume a template call and report it

        The name is trimmed. An argument containing "=" (outside nested
        constructs) is named: key and value are both trimmed. Otherwise it is
        positional: it takes the next 1-based index and keeps its raw text.

        Args:
            pos: Offset of the opening "{{"

        Returns:
            Offset beyond the closing "}}"
        """
        self.depth_enter(pos)
        next_index = 1
        pos = self.markup_consume(pos, '{{')
        name_start = pos
        pos = self.wikitext_consume(pos, ('|', '}}'))
        name = self.text[name_start:pos].strip()

        args: ArgMap = {}
        while pos < len(self.text) and self.text[pos] == '|':
            pos = self.markup_consume(pos, '|')
            part_start = pos
            pos = self.wikitext_consume(pos, ('=', '|', '}}'))
            if self.text.startswith('=', pos):
                key = self.text[part_start:pos].strip()
                pos = self.markup_consume(pos, '=')
                value_start = pos
                pos = self.wikitext_consume(pos, ('|', '}}'))
                args[key] = self.text[value_start:pos].strip()
            else:
                args[next_index] = self.text[part_start:pos]
                next_index += 1

        self.invocation_report(name, args)
        pos = self.markup_consume(pos, '}}')
        self.depth -= 1
        return pos

    def link_consume(self, pos: int) -> int:
        """
        Consume a link; templates inside its body are still reported

        Args:
            pos: Offset of the opening "[["

        Returns:
            Offset beyond the closing "]]"
        """
        self.depth_enter(pos)
        pos = self.markup_consume(pos, '[[')
        pos = self.wikitext_consume(pos, (']]',))
        pos = self.markup_consume(pos, ']]')
        self.depth -= 1
        return pos

    def comment_consume(self, pos: int) -> int:
        """
        Consume an HTML comment

        Args:
            pos: Offset of the opening "<!--"

        Returns:
            Offset beyond the first "-->"

        Raises:
            ParseError: UNTERMINATED_COMMENT if there is no "-->"
        """
        pos = self.markup_consume(pos, '<!--')
        end_pos = self.text.find('-->', pos)
        if end_pos == -1:
            self.error(pos, 'missing comment terminator', ParseErrorKind.UNTERMINATED_COMMENT)
        return end_pos + len('-->')

    def extension_consume(self, pos: int) -> int:
        """
        Consume an xmlish extension element without looking inside it

        The end tag is found by plain substring search, so an inner element
        of the same name is not balanced: the first "</name>" closes it.

        Args:
            pos: Offset of the opening "<"

        Returns:
            Offset beyond "/>" for a self-closing tag, else beyond "</name>"

        Raises:
            ParseError: UNTERMINATED_EXTENSION_ELEMENT if the opening tag has
                        no ">" or the end tag is missing
        """
        pos = self.markup_consume(pos, '<')
        name = self.extName_peek(pos)
        pos += len(name)
        tag_end = self.text.find('>', pos)
        if tag_end == -1:
            self.error(pos, 'missing end of extension tag',
                       ParseErrorKind.UNTERMINATED_EXTENSION_ELEMENT)
        pos = tag_end + 1
        if self.text[tag_end - 1] == '/':
            return pos

        end_tag = f'</{name}>'
        end_pos = self.text.find(end_tag, pos)
        if end_pos == -1:
            self.error(pos, 'missing extension end tag',
                       ParseErrorKind.UNTERMINATED_EXTENSION_ELEMENT)
        return end_pos + len(end_tag)

    def literal_consume(self, pos: int) -> int:
        """
        Consume at least one literal character

        Returns:
            Offset beyond a run of uninteresting characters, or beyond a
            single interesting character that no other rule consumed
        """
        end = LITERAL_RUN.match(self.text, pos).end()
        if end > pos:
            return end
        if pos < len(self.text):
            return pos + 1
        return pos

    def markup_consume(self, pos: int, markup: str) -> int:
        """
        Assert that the given markup exists at the given offset

        Returns:
            Offset beyond the markup

        Raises:
            ParseError: MARKUP_ASSERTION_FAILED if the markup is absent
        """
        if not self.text.startswith(markup, pos):
            self.error(pos, f'expected "{markup}"', ParseErrorKind.MARKUP_ASSERTION_FAILED)
        return pos + len(markup)

    def extName_peek(self, pos: int) -> str:
        """Look ahead for the name of a prospective extension tag"""
        return EXT_NAME.match(self.text, pos).group(0)

    def extension_isAllowed(self, name: str) -> bool:
        return bool(name) and name in self.extension_tags

    def depth_enter(self, pos: int) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            self.error(pos, f'nesting deeper than {self.max_depth} levels',
                       ParseErrorKind.NESTING_TOO_DEEP)

    def invocation_report(self, name: str, args: ArgMap) -> None:
        LOG(f"Invocation '{name}' with {len(args)} argument(s)", level=3)
        if self.callback is not None:
            self.callback(name, args)

    def error(self, pos: int, message: str, kind: ParseErrorKind) -> None:
        """
        Raise a parse error

        Raises:
            ParseError: Always
        """
        raise ParseError(pos, message, kind)
