"""
Preprocessor tree builder

Builds a PPNode tree for a wikitext document using the same grammar as the
Scanner. Hosts that already own a document processor hand their own tree to
ParsedTreeLocator; this builder produces an equivalent tree for everyone else
and for tests.

Every consumed span becomes a node, so the children of any node cover its
source span without gaps:

    "{{tgt|a=b}}"  ->  root
                       └── template [0:11]
                           ├── title [2:5]   └── text "tgt"
                           └── part  [6:9]
                               ├── name   [6:7]  └── text "a"
                               ├── equals [7:8]
                               └── value  [8:9]  └── text "b"
"""

from typing import Iterable, List, Optional, Sequence

from ..models.tree import (
    PPNode,
    ParsedDocument,
    NODE_ROOT,
    NODE_TEMPLATE,
    NODE_TITLE,
    NODE_PART,
    NODE_NAME,
    NODE_EQUALS,
    NODE_VALUE,
    NODE_LINK,
    NODE_COMMENT,
    NODE_EXT,
    NODE_TEXT,
)
from .scanner import Scanner


class TreeBuilder(Scanner):
    """
    Scanner that records what it consumes as a PPNode tree

    Attributes:
        stack: Nodes currently being filled, innermost last
    """

    def __init__(
        self,
        text: str,
        extension_tags: Optional[Iterable[str]] = None,
        max_depth: Optional[int] = None,
    ):
        super().__init__(text, callback=None, extension_tags=extension_tags, max_depth=max_depth)
        self.stack: List[PPNode] = []

    def build(self) -> ParsedDocument:
        """
        Parse the whole text into a tree

        Returns:
            ParsedDocument pairing the text with its root node

        Raises:
            ParseError: If the text is structurally malformed
        """
        root = PPNode(NODE_ROOT, 0, len(self.text))
        self.stack = [root]
        self.execute()
        self.stack = []
        return ParsedDocument(text=self.text, root=root)

    def node_append(self, node: PPNode) -> None:
        self.stack[-1].children.append(node)

    def span_build(self, node: PPNode, pos: int, terminators: Sequence[str]) -> int:
        """Fill node with the wikitext span starting at pos"""
        self.stack.append(node)
        try:
            pos = self.wikitext_consume(pos, terminators)
        finally:
            self.stack.pop()
        node.end = pos
        return pos

    def template_consume(self, pos: int) -> int:
        self.depth_enter(pos)
        template = PPNode(NODE_TEMPLATE, pos, pos)
        pos = self.markup_consume(pos, '{{')

        title = PPNode(NODE_TITLE, pos, pos)
        pos = self.span_build(title, pos, ('|', '}}'))
        template.children.append(title)

        next_index = 1
        while pos < len(self.text) and self.text[pos] == '|':
            pos = self.markup_consume(pos, '|')
            part = PPNode(NODE_PART, pos, pos)
            # Named or positional is only known once the span ends
            first = PPNode(NODE_VALUE, pos, pos)
            pos = self.span_build(first, pos, ('=', '|', '}}'))
            if self.text.startswith('=', pos):
                first.name = NODE_NAME
                equals = PPNode(NODE_EQUALS, pos, pos + 1)
                pos = self.markup_consume(pos, '=')
                value = PPNode(NODE_VALUE, pos, pos)
                pos = self.span_build(value, pos, ('|', '}}'))
                part.children = [first, equals, value]
            else:
                part.index = next_index
                next_index += 1
                part.children = [first]
            part.end = pos
            template.children.append(part)

        pos = self.markup_consume(pos, '}}')
        self.depth -= 1
        template.end = pos
        self.node_append(template)
        return pos

    def link_consume(self, pos: int) -> int:
        link = PPNode(NODE_LINK, pos, pos)
        self.stack.append(link)
        try:
            end = super().link_consume(pos)
        finally:
            self.stack.pop()
        link.end = end
        self.node_append(link)
        return end

    def comment_consume(self, pos: int) -> int:
        end = super().comment_consume(pos)
        self.node_append(PPNode(NODE_COMMENT, pos, end))
        return end

    def extension_consume(self, pos: int) -> int:
        end = super().extension_consume(pos)
        self.node_append(PPNode(NODE_EXT, pos, end))
        return end

    def literal_consume(self, pos: int) -> int:
        end = super().literal_consume(pos)
        if end == pos:
            return end
        siblings = self.stack[-1].children
        # Adjacent literal runs share one text node
        if siblings and siblings[-1].name == NODE_TEXT and siblings[-1].end == pos:
            siblings[-1].end = end
        else:
            siblings.append(PPNode(NODE_TEXT, pos, end))
        return end


def document_preprocess(
    text: str,
    extension_tags: Optional[Iterable[str]] = None,
    max_depth: Optional[int] = None,
) -> ParsedDocument:
    """
    Build the preprocessor tree for a document

    Args:
        text: Wikitext
        extension_tags: Opaque extension element names (default from settings)
        max_depth: Nesting limit while building (default from settings)

    Returns:
        ParsedDocument

    Raises:
        ParseError: If the text is structurally malformed

    Example:
        >>> doc = document_preprocess("{{tgt|a}}")
        >>> doc.root.children[0].name
        'template'
    """
    return TreeBuilder(text, extension_tags=extension_tags, max_depth=max_depth).build()
