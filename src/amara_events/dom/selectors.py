"""CSS selector matching backed by cssselect and lxml."""

from __future__ import annotations

from functools import lru_cache

from cssselect import HTMLTranslator
from lxml import etree

_TRANSLATOR = HTMLTranslator()


@lru_cache(maxsize=512)
def compile_selector(selector: str) -> etree.XPath:
    """Compile a selector group to an XPath rooted at the document."""

    return etree.XPath(
        _TRANSLATOR.css_to_xpath(selector, prefix="descendant-or-self::")
    )


def matches(node: etree._Element, selector: str) -> bool:
    """Return whether ``node`` satisfies ``selector`` within its own tree.

    The selector is evaluated from the tree root so combinators such as
    ``ul > li`` or ``.menu a`` see the node's ancestors.
    """

    root = node.getroottree().getroot()
    return any(hit is node for hit in compile_selector(selector)(root))


__all__ = ["compile_selector", "matches"]
