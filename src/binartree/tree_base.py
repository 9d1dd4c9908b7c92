"""Binary search tree multiset base implementation"""

from __future__ import annotations
import bisect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar

from binartree.base import AbstractMultisetDataStructure, check_key
from binartree.node import NodeBase
from binartree.seqbuf import SeqBufferBase
from binartree.profiling import track_performance, PerformanceTracker

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

t = TypeVar("t", bound="BinaryTreeBase")


class BinaryTreeBase(AbstractMultisetDataStructure):
    """
    A sorted multiset on top of an unbalanced binary search tree.

    The tree owns one root node and a size counter. `size` always equals the
    number of non-empty nodes below `top`, which is also the length of
    `iter()`. Equal keys are kept, in insertion order, on the right.

    Set algebra flattens both trees to ascending lists and binary-searches
    the second one. Bulk edits (drain_filter, multi_remove, replace_val)
    stage the surviving keys in a buffer, clear the tree and reinsert them.
    """
    __slots__ = ("top", "size")

    # Will be overridden by factory-created subclasses
    KEY_TYPE: Optional[type] = None
    NodeClass: Type[NodeBase] = NodeBase
    BufferClass: Type[SeqBufferBase] = SeqBufferBase

    def __init__(self, values: Optional[Iterable[Any]] = None) -> None:
        self.top: NodeBase = self.NodeClass()
        self.size: int = 0
        if values is not None:
            self.extend(values)

    @classmethod
    def new(cls: Type[t]) -> t:
        return cls()

    @classmethod
    def from_iter(cls: Type[t], values: Iterable[Any]) -> t:
        """Build a tree by inserting every value in the order given."""
        return cls(values)

    # Size

    def len(self) -> int:
        return self.size

    def __len__(self) -> int:
        return self.size

    def is_empty(self) -> bool:
        return self.size == 0

    # Single-key operations

    def insert(self, value: Any) -> None:
        check_key(value, self.KEY_TYPE, "insert")
        self.top.insert(value)
        self.size += 1

    def contains(self, value: Any) -> bool:
        check_key(value, self.KEY_TYPE, "contains")
        return not self.top.find(value).is_empty()

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def first(self) -> Any:
        """Smallest key. Raises IndexError on an empty tree."""
        if self.top.is_empty():
            raise IndexError("first(): empty tree")
        return self.top.min().get_key()

    def last(self) -> Any:
        """Largest key. Raises IndexError on an empty tree."""
        if self.top.is_empty():
            raise IndexError("last(): empty tree")
        return self.top.max().get_key()

    @track_performance
    def remove(self, value: Any) -> bool:
        """
        Remove exactly one occurrence of `value`.

        The matched node is discarded together with its whole subtree; the
        keys that lived below it are reinserted one by one from the root.
        The net effect on `size` is always -1, but the shape of the tree can
        change a lot and the cost grows with the size of the discarded
        subtree.

        Returns:
            bool: True if an occurrence was removed.
        """
        check_key(value, self.KEY_TYPE, "remove")
        res = self.top.remove(value)
        if not res.found:
            return False
        self.size -= len(res.orphaned_keys) + 1
        self.extend(res.orphaned_keys)
        return True

    def pop_first(self) -> Any:
        """Remove and return one occurrence of the smallest key."""
        if self.top.is_empty():
            raise IndexError("pop_first(): empty tree")
        key = self.first()
        self.remove(key)
        return key

    def pop_last(self) -> Any:
        """Remove and return one occurrence of the largest key."""
        if self.top.is_empty():
            raise IndexError("pop_last(): empty tree")
        key = self.last()
        self.remove(key)
        return key

    # Traversal

    def iter(self) -> SeqBufferBase:
        """Ascending keys as a new, destructively iterated buffer."""
        return self.top.walk()

    def __iter__(self) -> SeqBufferBase:
        return self.iter()

    def to_buffer(self) -> SeqBufferBase:
        return self.top.walk()

    def to_list(self) -> List[Any]:
        return self.top.walk().to_list()

    # Whole-tree editing

    def clear(self) -> None:
        self.top.rec_drop()
        self.size = 0

    def extend(self, values: Iterable[Any]) -> None:
        for value in values:
            self.insert(value)

    def append(self, other: BinaryTreeBase) -> None:
        """Insert every key of `other`; `other` is left unchanged."""
        self.extend(other.iter())

    def _rebuild(self, values: Iterable[Any]) -> None:
        self.clear()
        self.extend(values)
        logger.debug(f"{type(self).__name__}: rebuilt with {self.size} keys")

    @track_performance
    def drain_filter(self, predicate: Callable[[Any], bool]) -> SeqBufferBase:
        """
        Remove every key for which `predicate` is true and return them in
        ascending order. The tree is rebuilt from the kept keys.
        """
        kept = self.BufferClass()
        removed = self.BufferClass()
        for value in self.top.walk():
            if predicate(value):
                removed.push_back(value)
            else:
                kept.push_back(value)
        self._rebuild(kept)
        return removed

    def retain(self, predicate: Callable[[Any], bool]) -> None:
        """Keep only the keys for which `predicate` is true."""
        self.drain_filter(lambda value: not predicate(value))

    @track_performance
    def multi_remove(self, values: Iterable[Any]) -> None:
        """
        Remove one occurrence of the tree's keys for each entry of `values`.
        Entries with no remaining counterpart in the tree are ignored.
        """
        pending = sorted(check_key(v, self.KEY_TYPE, "multi_remove") for v in values)
        kept = self.BufferClass()
        j = 0
        for value in self.top.walk():
            while j < len(pending) and pending[j] < value:
                j += 1
            if j < len(pending) and pending[j] == value:
                j += 1
            else:
                kept.push_back(value)
        self._rebuild(kept)

    @track_performance
    def replace_val(self, old: Any, new: Any) -> None:
        """Replace every occurrence of `old` with `new`."""
        check_key(old, self.KEY_TYPE, "replace_val")
        check_key(new, self.KEY_TYPE, "replace_val")
        if old == new:
            return
        staged = self.BufferClass()
        count = 0
        for value in self.top.walk():
            if value == old:
                count += 1
            else:
                staged.push_back(value)
        staged.extend([new] * count)
        self._rebuild(staged)

    # Set algebra

    @track_performance
    def difference(self, other: BinaryTreeBase) -> SeqBufferBase:
        """Keys of this tree that do not occur in `other`, ascending."""
        mine = self.to_list()
        theirs = other.to_list()
        return self.BufferClass._wrap(v for v in mine if not _bsearch(theirs, v))

    @track_performance
    def intersection(self, other: BinaryTreeBase) -> SeqBufferBase:
        """Keys of this tree that also occur in `other`, ascending."""
        mine = self.to_list()
        theirs = other.to_list()
        return self.BufferClass._wrap(v for v in mine if _bsearch(theirs, v))

    @track_performance
    def symmetric_difference(self, other: BinaryTreeBase) -> SeqBufferBase:
        """
        Keys of this tree missing from `other`, followed by keys of `other`
        missing from this tree. Two ascending runs, not globally sorted.
        """
        mine = self.to_list()
        theirs = other.to_list()
        out = [v for v in mine if not _bsearch(theirs, v)]
        out.extend(v for v in theirs if not _bsearch(mine, v))
        return self.BufferClass._wrap(out)

    @track_performance
    def union(self, other: BinaryTreeBase) -> SeqBufferBase:
        """symmetric_difference(other) followed by intersection(other)."""
        out = self.symmetric_difference(other)
        out.append(self.intersection(other))
        return out

    def is_disjoint(self, other: BinaryTreeBase) -> bool:
        return self.intersection(other).is_empty()

    def intersect(self: t, other: BinaryTreeBase) -> t:
        return type(self)(self.intersection(other))

    def union_with(self: t, other: BinaryTreeBase) -> t:
        return type(self)(self.union(other))

    def symmetric_difference_with(self: t, other: BinaryTreeBase) -> t:
        return type(self)(self.symmetric_difference(other))

    __and__ = intersect
    __or__ = union_with
    __xor__ = symmetric_difference_with

    # Misc

    def copy(self: t) -> t:
        """Copy with identical shape."""
        dup = type(self)()
        dup.top = self.top.copy()
        dup.size = self.size
        return dup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryTreeBase):
            return NotImplemented
        return self.size == other.size and self.top == other.top

    __hash__ = None

    def __str__(self):
        return "Empty BinaryTree" if self.is_empty() else f"{type(self).__name__}(size={self.size}, top={self.top})"

    __repr__ = __str__

    def print_structure(self, indent: int = 0, max_depth: int = 8) -> str:
        """Indented dump of the tree for debugging, cut off below max_depth."""
        if self.top.is_empty():
            return f"{' ' * indent}Empty {self.__class__.__name__}"

        lines = []
        stack = [(self.top, "Root", 0)]
        while stack:
            node, label, depth = stack.pop()
            prefix = ' ' * (indent + 4 * depth)
            if depth > max_depth:
                lines.append(f"{prefix}... (max depth reached)")
                continue
            if node.is_empty():
                lines.append(f"{prefix}{label}: Empty")
                continue
            lines.append(f"{prefix}{label}: {node.branch.key!r}")
            stack.append((node.branch.right, "Right", depth + 1))
            stack.append((node.branch.left, "Left", depth + 1))
        return "\n".join(lines)

    @staticmethod
    def get_performance_report() -> str:
        return PerformanceTracker.get_instance().report()

    @staticmethod
    def reset_performance_metrics() -> None:
        PerformanceTracker.get_instance().reset()


def _bsearch(sorted_keys: List[Any], value: Any) -> bool:
    i = bisect.bisect_left(sorted_keys, value)
    return i < len(sorted_keys) and sorted_keys[i] == value


@dataclass
class TreeStats:
    node_count: int
    height: int
    size: int
    least_item: Optional[Any]
    greatest_item: Optional[Any]
    is_search_tree: bool
    size_consistent: bool
    in_order_sorted: bool


_NO_BOUND = object()


def tree_stats_(tree: BinaryTreeBase) -> TreeStats:
    """
    Returns aggregated statistics for a tree in **O(n)** time.

    `is_search_tree` checks the ordering invariant with its tie rule: a key
    must be >= every ancestor it sits to the right of and < every ancestor
    it sits to the left of.
    """
    node_count = 0
    height = 0
    is_search_tree = True

    # (node, lower bound inclusive, upper bound exclusive, depth)
    stack = [(tree.top, _NO_BOUND, _NO_BOUND, 1)]
    while stack:
        node, lo, hi, depth = stack.pop()
        branch = node.branch
        if branch is None:
            continue
        node_count += 1
        height = max(height, depth)
        key = branch.key
        if lo is not _NO_BOUND and key < lo:
            is_search_tree = False
        if hi is not _NO_BOUND and not key < hi:
            is_search_tree = False
        stack.append((branch.left, lo, key, depth + 1))
        stack.append((branch.right, key, hi, depth + 1))

    keys = collect_keys(tree)
    in_order_sorted = all(keys[i] <= keys[i + 1] for i in range(len(keys) - 1))

    return TreeStats(
        node_count      = node_count,
        height          = height,
        size            = tree.size,
        least_item      = keys[0] if keys else None,
        greatest_item   = keys[-1] if keys else None,
        is_search_tree  = is_search_tree,
        size_consistent = node_count == tree.size == len(keys),
        in_order_sorted = in_order_sorted,
    )


def collect_keys(tree: BinaryTreeBase) -> List[Any]:
    """In-order keys of a tree as a plain list."""
    return tree.top.walk().to_list()
