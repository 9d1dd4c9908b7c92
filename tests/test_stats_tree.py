"""Tests for tree statistics and generators"""
# pylint: skip-file

import unittest
import logging

from binartree.factory import create_tree
from binartree.node import Branch
from binartree.tree_base import tree_stats_, TreeStats
from tests.stats_tree import (
    assert_invariants,
    random_keys,
    random_tree_of_size,
    sorted_tree_of_size,
    repeated_tree_stats,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TestTreeStats(unittest.TestCase):

    def test_empty_tree(self):
        stats = tree_stats_(create_tree(int))
        self.assertEqual(stats, TreeStats(
            node_count=0, height=0, size=0,
            least_item=None, greatest_item=None,
            is_search_tree=True, size_consistent=True, in_order_sorted=True,
        ))

    def test_sorted_tree_is_a_path(self):
        tree = sorted_tree_of_size(500)
        stats = tree_stats_(tree)
        self.assertEqual(stats.height, 500)
        self.assertEqual(stats.node_count, 500)
        self.assertEqual(stats.least_item, 0)
        self.assertEqual(stats.greatest_item, 499)
        self.assertTrue(stats.is_search_tree)

    def test_random_tree(self):
        tree = random_tree_of_size(300, 100, seed=1)
        stats = tree_stats_(tree)
        self.assertTrue(stats.is_search_tree)
        self.assertTrue(stats.size_consistent)
        self.assertTrue(stats.in_order_sorted)
        self.assertLess(stats.height, 300)
        self.assertEqual(tree.to_list(), sorted(random_keys(300, 100, seed=1)))

    def test_detects_equal_key_on_the_left(self):
        tree = create_tree(int, [5])
        # equal keys must never sit in a left subtree
        tree.top.branch.left = tree.NodeClass(Branch(5, tree.NodeClass(), tree.NodeClass()))
        tree.size += 1
        stats = tree_stats_(tree)
        self.assertFalse(stats.is_search_tree)
        self.assertTrue(stats.size_consistent)

    def test_detects_size_drift(self):
        tree = create_tree(int, [1, 2])
        tree.size = 3
        stats = tree_stats_(tree)
        self.assertFalse(stats.size_consistent)
        with self.assertLogs(level="ERROR"):
            assert_invariants(tree, stats)

    def test_repeated_tree_stats(self):
        summary = repeated_tree_stats(100, 1000, trials=5, seed=0)
        self.assertEqual(summary["n"], 100)
        self.assertEqual(summary["trials"], 5)
        self.assertGreaterEqual(summary["height_max"], summary["height_mean"])
        self.assertGreaterEqual(summary["height_mean"], 7)


if __name__ == "__main__":
    unittest.main()
