"""
Invocation collector and target locators

Finds the arguments of the first call to a named template in a document.
Two interchangeable strategies implement the Locator interface:

- TextScanningLocator scans raw wikitext with the Scanner. Malformed input
  (unterminated comment, unclosed extension element, ...) is reported as
  "not found" rather than raised.
- ParsedTreeLocator walks a PPNode tree that a document processor has
  already built, with a fixed depth budget against adversarial nesting.

Both compare names after name_normalize(), and both return the first match
in document order; later calls to the same template are ignored.

Example:
    >>> invocationArgs_find("{{not|b=c}}{{tgt|c=d}}", "tgt")
    {'c': 'd'}
    >>> invocationArgs_find("no templates here", "tgt") is None
    True
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Union

from ..models.errors import ParseError
from ..models.invocation import ArgMap, Invocation
from ..models.tree import (
    PPNode,
    ParsedDocument,
    NODE_TEMPLATE,
    NODE_TITLE,
    NODE_PART,
    NODE_NAME,
    NODE_VALUE,
    NODE_COMMENT,
)
from .scanner import Scanner, InvocationCallback
from .serializer import TEMPLATE_NAMESPACE
from .tree import document_preprocess
from .log import LOG


def name_normalize(name: str) -> str:
    """
    Canonical form of a template name for comparison

    Uppercases the first character and treats underscores as spaces,
    following the host wiki's title rules.

    Example:
        >>> name_normalize("foo_bar")
        'Foo bar'
    """
    name = name[:1].upper() + name[1:]
    return name.replace('_', ' ')


def templateTitle_normalize(title: str) -> str:
    """
    Canonical form of a template title that may name its namespace

    A leading "Template:" (any case, "_" for spaces) is dropped before
    name_normalize(), so "Template:Foo_bar" and "foo bar" compare equal.
    """
    head, sep, rest = title.partition(':')
    if sep and head.replace('_', ' ').strip().lower() == TEMPLATE_NAMESPACE[:-1].lower():
        title = rest.strip()
    return name_normalize(title)


def invocations_collect(
    text: str,
    callback: InvocationCallback,
    extension_tags: Optional[Iterable[str]] = None,
    max_depth: Optional[int] = None,
) -> None:
    """
    Report every template invocation in a document

    Inner templates are reported before the template containing them.

    Args:
        text: Wikitext to scan
        callback: Called with (name, args) for each invocation
        extension_tags: Opaque extension element names (default from settings)
        max_depth: Nesting limit (default from settings)

    Raises:
        ParseError: If the document is malformed
    """
    Scanner(text, callback, extension_tags=extension_tags, max_depth=max_depth).execute()


def invocations_list(
    text: str,
    extension_tags: Optional[Iterable[str]] = None,
    max_depth: Optional[int] = None,
) -> List[Invocation]:
    """
    Collect every template invocation in a document into a list

    Raises:
        ParseError: If the document is malformed
    """
    found: List[Invocation] = []
    invocations_collect(
        text,
        lambda name, args: found.append(Invocation(name=name, args=args)),
        extension_tags=extension_tags,
        max_depth=max_depth,
    )
    return found


class Locator(ABC):
    """Finds the arguments of the first call to a named template"""

    @abstractmethod
    def find(self, source, target_name: str) -> Optional[ArgMap]:
        """
        Args:
            source: Document in the form this strategy reads
            target_name: Template name, compared after name_normalize()

        Returns:
            Argument map of the first matching invocation, or None
        """


class TextScanningLocator(Locator):
    """
    Locator over raw wikitext

    Attributes:
        extension_tags: Opaque extension element names (None = settings default)
        max_depth: Scanner nesting limit (None = settings default)
    """

    def __init__(
        self,
        extension_tags: Optional[Iterable[str]] = None,
        max_depth: Optional[int] = None,
    ):
        self.extension_tags = None if extension_tags is None else frozenset(extension_tags)
        self.max_depth = max_depth

    def find(self, source: str, target_name: str) -> Optional[ArgMap]:
        """
        Find the first invocation of target_name in wikitext

        A ParseError anywhere in the document means None, even if a match was
        seen before the error. Any other exception propagates.
        """
        target = name_normalize(target_name)
        found: Optional[ArgMap] = None

        def invocation_check(name: str, args: ArgMap) -> None:
            nonlocal found
            if found is None and name_normalize(name) == target:
                found = args

        try:
            invocations_collect(
                source,
                invocation_check,
                extension_tags=self.extension_tags,
                max_depth=self.max_depth,
            )
        except ParseError as e:
            LOG(f"Malformed text, '{target}' treated as not found: {e}", level=2)
            return None

        if found is None:
            LOG(f"No invocation of '{target}'", level=2)
        else:
            LOG(f"Located '{target}' with {len(found)} argument(s)", level=2)
        return found


class ParsedTreeLocator(Locator):
    """
    Locator over a pre-built preprocessor tree

    Template titles and argument names are compared with comments removed,
    and a title may carry an explicit "Template:" namespace. Named values are
    trimmed, positional values are the raw source slice.

    The same walk finds parser-function calls such as
    {{#communityrequests: vote|...}} by function name and first argument.

    Attributes:
        max_depth: Tree levels searched below the root. Nodes at the last
                   level are examined but not descended into.
    """

    def __init__(self, max_depth: Optional[int] = None):
        from ..config import appsettings

        self.max_depth = appsettings.tree_max_depth if max_depth is None else max_depth

    def find(self, source: ParsedDocument, target_name: str) -> Optional[ArgMap]:
        target = templateTitle_normalize(target_name)
        found = self.node_search(
            source,
            source.root,
            lambda title: templateTitle_normalize(title) == target,
            self.max_depth,
        )
        LOG(
            f"Tree search for '{target}': {'found' if found is not None else 'not found'}",
            level=2,
        )
        return found

    def function_find(
        self, document: ParsedDocument, func: str, sub_func: str
    ) -> Optional[ArgMap]:
        """
        Find the first call to a parser function with a given first argument

        Args:
            document: Preprocessor tree
            func: Function name, with or without the leading "#"
            sub_func: Text between the ":" and the first "|", compared trimmed

        Returns:
            Arguments after the first, or None

        Example:
            >>> ParsedTreeLocator().function_find(
            ...     document_preprocess("{{#communityrequests: vote|username=Ex}}"),
            ...     "communityrequests", "vote")
            {'username': 'Ex'}
        """
        target = '#' + func.lstrip('#')

        def title_matches(title: str) -> bool:
            name, sep, rest = title.partition(':')
            return bool(sep) and name.strip() == target and rest.strip() == sub_func

        found = self.node_search(document, document.root, title_matches, self.max_depth)
        LOG(
            f"Tree search for '{target}: {sub_func}': {'found' if found is not None else 'not found'}",
            level=2,
        )
        return found

    def node_search(
        self,
        document: ParsedDocument,
        node: PPNode,
        title_matches: Callable[[str], bool],
        max_depth: int,
    ) -> Optional[ArgMap]:
        """Depth-bounded search of node's children, in document order"""
        for child in node.children:
            if child.name == NODE_TEMPLATE:
                title = child.child_get(NODE_TITLE)
                if title is not None:
                    if title_matches(self.text_withoutComments(document, title).strip()):
                        return self.args_extract(document, child)
            if max_depth > 0:
                result = self.node_search(document, child, title_matches, max_depth - 1)
                if result is not None:
                    return result
        return None

    def args_extract(self, document: ParsedDocument, template: PPNode) -> ArgMap:
        args: ArgMap = {}
        for part in template.children_byName(NODE_PART):
            value_node = part.child_get(NODE_VALUE)
            value = document.slice(value_node) if value_node is not None else ''
            if part.index is None:
                name_node = part.child_get(NODE_NAME)
                name = self.text_withoutComments(document, name_node).strip() if name_node else ''
                args[name] = value.strip()
            else:
                args[part.index] = value
        return args

    def text_withoutComments(self, document: ParsedDocument, node: PPNode) -> str:
        return ''.join(
            document.slice(child) for child in node.children if child.name != NODE_COMMENT
        )


def locator_select(
    source: Union[str, ParsedDocument],
    extension_tags: Optional[Iterable[str]] = None,
) -> Locator:
    """
    Pick the locator strategy for a document

    Returns:
        ParsedTreeLocator when a tree is available, else TextScanningLocator
    """
    if isinstance(source, ParsedDocument):
        return ParsedTreeLocator()
    return TextScanningLocator(extension_tags=extension_tags)


def invocation_find(
    source: Union[str, ParsedDocument],
    target_name: str,
    extension_tags: Optional[Iterable[str]] = None,
) -> Optional[ArgMap]:
    """Find target_name's arguments with whichever strategy fits the source"""
    return locator_select(source, extension_tags).find(source, target_name)


def invocationArgs_find(
    text: str,
    target_name: str,
    allowed_elements: Optional[Iterable[str]] = None,
) -> Optional[ArgMap]:
    """
    Extraction entry point: arguments of the first call to target_name

    Args:
        text: Wikitext to search
        target_name: Template name (first letter case and "_" vs " " ignored)
        allowed_elements: Opaque extension element names (default from settings)

    Returns:
        Argument map, or None if there is no such call or the text is malformed

    Example:
        >>> invocationArgs_find("{{tgt| a |b=c}}", "tgt")
        {1: ' a ', 'b': 'c'}
    """
    return TextScanningLocator(extension_tags=allowed_elements).find(text, target_name)


def functionArgs_find(
    source: Union[str, ParsedDocument],
    func: str,
    sub_func: str,
    extension_tags: Optional[Iterable[str]] = None,
) -> Optional[ArgMap]:
    """
    Arguments of the first {{#func: sub_func|...}} call

    Plain text is preprocessed into a tree first; malformed text gives None.

    Example:
        >>> functionArgs_find("{{#communityrequests: wish|title=T}}", "communityrequests", "wish")
        {'title': 'T'}
    """
    if not isinstance(source, ParsedDocument):
        call = f"#{func.lstrip('#')}: {sub_func}"
        try:
            source = document_preprocess(source, extension_tags=extension_tags)
        except ParseError as e:
            LOG(f"Malformed text, '{call}' treated as not found: {e}", level=2)
            return None
    return ParsedTreeLocator().function_find(source, func, sub_func)
