"""
Preprocessor tree models

A PPNode tree is the pre-parsed form of a wikitext document, as a host
document processor would hand it over. Every node records the source span it
covers, so the original text of any part can be recovered by slicing.

Shape of a template node:

    template
    ├── title          (children: text/comment/... nodes of the name)
    ├── part           (named: children name, equals, value)
    └── part index=1   (positional: child value only)
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


NODE_ROOT = "root"
NODE_TEMPLATE = "template"
NODE_TITLE = "title"
NODE_PART = "part"
NODE_NAME = "name"
NODE_EQUALS = "equals"
NODE_VALUE = "value"
NODE_LINK = "link"
NODE_COMMENT = "comment"
NODE_EXT = "ext"
NODE_TEXT = "text"


@dataclass
class PPNode:
    """
    One node of a preprocessor tree

    Attributes:
        name: Node type (one of the NODE_* constants)
        start: Offset of the first character covered by this node
        end: Offset just past the last character covered by this node
        children: Child nodes in source order
        index: Positional argument number, set on positional "part" nodes only
    """
    name: str
    start: int
    end: int
    children: List['PPNode'] = field(default_factory=list)
    index: Optional[int] = None

    def child_get(self, name: str) -> Optional['PPNode']:
        """First direct child with the given node name"""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def children_byName(self, name: str) -> Iterator['PPNode']:
        return (child for child in self.children if child.name == name)


@dataclass
class ParsedDocument:
    """
    Source text paired with its preprocessor tree

    Attributes:
        text: Original wikitext
        root: Root PPNode spanning the whole text
    """
    text: str
    root: PPNode

    def slice(self, node: PPNode) -> str:
        """Original source text covered by a node"""
        return self.text[node.start:node.end]
