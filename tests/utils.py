"""Utility functions for testing tree invariants."""

from binartree.tree_base import (
    BinaryTreeBase,
    TreeStats,
)

TREE_FLAGS = (
    "is_search_tree",
    "size_consistent",
    "in_order_sorted",
)


def assert_tree_invariants_tc(tc, t: BinaryTreeBase, stats: TreeStats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        len(t.iter()), t.size,
        f"Invariant failed: traversal length ≠ size={t.size}"
    )

    if t.is_empty():
        tc.assertEqual(stats.node_count, 0, "Invariant failed: empty tree has nodes")
        tc.assertIsNone(stats.least_item)
        tc.assertIsNone(stats.greatest_item)
        return

    tc.assertGreater(
        stats.height, 0,
        f"Invariant failed: height={stats.height} ≤ 0 for non-empty tree"
    )
    tc.assertEqual(
        stats.least_item, t.first(),
        f"Invariant failed: least_item={stats.least_item} ≠ first()={t.first()}"
    )
    tc.assertEqual(
        stats.greatest_item, t.last(),
        f"Invariant failed: greatest_item={stats.greatest_item} ≠ last()={t.last()}"
    )
