"""
Clue index - plain (unbalanced) binary search tree keyed by clue text.

Keys compare with ordinary str ordering, which is case-sensitive and
matches byte order for UTF-8 text. Inserting a key already present is a
no-op, so an in-order walk yields each collected clue once, sorted.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ClueNode:
    text: str
    left: Optional["ClueNode"] = None
    right: Optional["ClueNode"] = None


def insert_clue(root: Optional[ClueNode], text: str) -> Optional[ClueNode]:
    """Insert `text` and return the (possibly new) subtree root.

    Callers must rebind their root to the return value.
    """
    if not text:
        return root
    if root is None:
        logger.debug("New clue node: %s", text)
        return ClueNode(text)

    if text < root.text:
        root.left = insert_clue(root.left, text)
    elif text > root.text:
        root.right = insert_clue(root.right, text)
    return root


def traverse_in_order(root: Optional[ClueNode], visit: Callable[[str], None]):
    _walk(root, visit)


def _walk(node: Optional[ClueNode], visit: Callable[[str], None]):
    if node is None:
        return
    _walk(node.left, visit)
    visit(node.text)
    _walk(node.right, visit)


def collect_clues(root: Optional[ClueNode]) -> list[str]:
    clues: list[str] = []
    traverse_in_order(root, clues.append)
    return clues


def count_clues(root: Optional[ClueNode]) -> int:
    if root is None:
        return 0
    return 1 + count_clues(root.left) + count_clues(root.right)


def contains_clue(root: Optional[ClueNode], text: str) -> bool:
    node = root
    while node is not None:
        if text == node.text:
            return True
        node = node.left if text < node.text else node.right
    return False


def release_clues(root: Optional[ClueNode]) -> int:
    if root is None:
        return 0
    released = release_clues(root.left) + release_clues(root.right)
    root.left = root.right = None
    return released + 1
