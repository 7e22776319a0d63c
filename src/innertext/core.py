"""
Core entry point for innertext.

Implements the rendered-text ("innerText") extraction in two phases:
- collect: walk the tree, emitting text fragments and break-marker weights
- normalize: collapse marker runs to newlines and join

Both phases are pure. The optional style resolver is the only call out of
the core, and whatever it raises propagates unchanged.
"""

from __future__ import annotations

import logging

from .collect import NON_RENDERED_TAGS, Collector
from .display import DisplayClassifier, StyleResolver
from .dom import TreeNode, is_element
from .normalize import normalize

logger = logging.getLogger(__name__)


def inner_text(root: TreeNode, style_resolver: StyleResolver | None = None) -> str:
    """
    Text a reader would see when the subtree at root is rendered.

    A root that is not rendered (script, style, ..., or display: none)
    returns its raw text content instead of running collection.
    """
    classifier = DisplayClassifier(style_resolver)
    if is_element(root) and (root.local_name in NON_RENDERED_TAGS or classifier.is_hidden(root)):
        logger.debug("root <%s> is not rendered, returning raw text content", root.local_name)
        return root.text_content

    items = Collector(classifier).collect(root)
    logger.debug(
        "collected %d items from %s using %s",
        len(items),
        f"<{root.local_name}>" if is_element(root) else "text node",
        "style resolver" if classifier.uses_resolver else "default stylesheet",
    )
    return normalize(items)
