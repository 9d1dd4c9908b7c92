"""Binary search tree node implementation"""

from __future__ import annotations
import logging
from typing import Any, List, Optional, Type

from binartree.base import RemovalResult
from binartree.seqbuf import SeqBufferBase

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


class Branch:
    """
    The payload of a non-empty node: one key plus an owned left and right
    child. Children are always nodes, possibly empty, never None.
    """
    __slots__ = ("key", "left", "right")

    def __init__(self, key: Any, left: NodeBase, right: NodeBase) -> None:
        self.key = key
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f"Branch(key={self.key!r})"


class NodeBase:
    """
    A node is either empty or holds a single Branch.

    Ordering invariant: every key in `left` is strictly less than the
    branch key, every key in `right` is greater than or equal to it. Equal
    keys therefore chain down the right side and in-order traversal keeps
    them in insertion order.

    All walks are iterative; a tree built from sorted input is a single
    right-leaning path as tall as it is long.
    """
    __slots__ = ("branch",)

    # Will be overridden by factory-created subclasses
    BufferClass: Type[SeqBufferBase] = SeqBufferBase

    def __init__(self, branch: Optional[Branch] = None) -> None:
        self.branch: Optional[Branch] = branch

    def is_empty(self) -> bool:
        return self.branch is None

    def get_key(self) -> Any:
        if self.branch is None:
            raise IndexError("get_key(): empty tree")
        return self.branch.key

    def insert(self, value: Any) -> None:
        """
        Descend right on `key <= value`, left otherwise, and turn the empty
        node reached into a leaf holding `value`.
        """
        NodeClass = type(self)
        cur = self
        while cur.branch is not None:
            branch = cur.branch
            cur = branch.right if branch.key <= value else branch.left
        cur.branch = Branch(value, NodeClass(), NodeClass())

    def find(self, value: Any) -> NodeBase:
        """
        Return the first node on the search path whose key equals `value`,
        or an empty node if the search falls off the tree.
        """
        cur = self
        while cur.branch is not None:
            key = cur.branch.key
            if value < key:
                cur = cur.branch.left
            elif key < value:
                cur = cur.branch.right
            else:
                return cur
        return type(self)()

    def min(self) -> NodeBase:
        if self.branch is None:
            raise IndexError("min(): empty tree")
        cur = self
        while cur.branch.left.branch is not None:
            cur = cur.branch.left
        return cur

    def max(self) -> NodeBase:
        if self.branch is None:
            raise IndexError("max(): empty tree")
        cur = self
        while cur.branch.right.branch is not None:
            cur = cur.branch.right
        return cur

    def walk(self) -> SeqBufferBase:
        """
        In-order traversal (left, key, right). Returns a new ascending
        buffer on every call; the tree is not modified.
        """
        keys: List[Any] = []
        stack: List[Branch] = []
        cur = self
        while stack or cur.branch is not None:
            while cur.branch is not None:
                stack.append(cur.branch)
                cur = cur.branch.left
            branch = stack.pop()
            keys.append(branch.key)
            cur = branch.right
        return self.BufferClass._wrap(keys)

    def rec_drop(self) -> None:
        """Empty this node and every node below it."""
        stack: List[NodeBase] = [self]
        while stack:
            node = stack.pop()
            branch = node.branch
            if branch is None:
                continue
            node.branch = None
            stack.append(branch.left)
            stack.append(branch.right)

    def remove(self, value: Any) -> RemovalResult:
        """
        Discard the first node on the search path holding `value` together
        with its whole subtree.

        No successor is promoted. The keys that lived below the discarded
        node are returned as orphaned keys (left subtree in order, then
        right subtree in order) and must be reinserted by the caller.

        Returns:
            RemovalResult: (found, orphaned_keys)
        """
        target = self.find(value)
        if target.branch is None:
            return RemovalResult(found=False, orphaned_keys=None)

        orphaned = target.branch.left.walk()
        orphaned.append(target.branch.right.walk())
        target.rec_drop()
        logger.debug(f"remove({value!r}): discarded subtree with {len(orphaned)} orphaned keys")
        return RemovalResult(found=True, orphaned_keys=orphaned)

    def height(self) -> int:
        """Number of non-empty nodes on the longest root-to-leaf path."""
        best = 0
        stack = [(self, 1)]
        while stack:
            node, depth = stack.pop()
            if node.branch is None:
                continue
            if depth > best:
                best = depth
            stack.append((node.branch.left, depth + 1))
            stack.append((node.branch.right, depth + 1))
        return best

    def copy(self) -> NodeBase:
        """Deep copy preserving shape."""
        NodeClass = type(self)
        root = NodeClass()
        stack = [(self, root)]
        while stack:
            src, dst = stack.pop()
            if src.branch is None:
                continue
            dst.branch = Branch(src.branch.key, NodeClass(), NodeClass())
            stack.append((src.branch.left, dst.branch.left))
            stack.append((src.branch.right, dst.branch.right))
        return root

    def __eq__(self, other: object) -> bool:
        """Structural equality: same shape and same key in every position."""
        if not isinstance(other, NodeBase):
            return NotImplemented
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a.branch is None or b.branch is None:
                if a.branch is not b.branch:
                    return False
                continue
            if a.branch.key != b.branch.key:
                return False
            stack.append((a.branch.left, b.branch.left))
            stack.append((a.branch.right, b.branch.right))
        return True

    __hash__ = None

    def __repr__(self) -> str:
        if self.branch is None:
            return f"{self.__class__.__name__}(Empty)"
        return f"{self.__class__.__name__}(key={self.branch.key!r})"
