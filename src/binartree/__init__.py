"""
Sorted multiset backed by an unbalanced binary search tree.

Equal keys are kept and traversed in insertion order. Traversals and set
operations return a destructively iterated, double-ended sequence buffer.
"""

from binartree.base import AbstractMultisetDataStructure, RemovalResult
from binartree.seqbuf import SeqBufferBase
from binartree.node import NodeBase, Branch
from binartree.tree_base import BinaryTreeBase, TreeStats, tree_stats_, collect_keys
from binartree.factory import make_tree_classes, create_tree

__all__ = [
    'AbstractMultisetDataStructure',
    'RemovalResult',
    'SeqBufferBase',
    'NodeBase',
    'Branch',
    'BinaryTreeBase',
    'TreeStats',
    'tree_stats_',
    'collect_keys',
    'make_tree_classes',
    'create_tree',
]
