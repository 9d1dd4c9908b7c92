"""Tests for opt-in performance tracking"""
# pylint: skip-file

import unittest
from unittest.mock import patch

from binartree.factory import create_tree
from binartree.profiling import PerformanceTracker, MethodMetrics, track_performance
from binartree.tree_base import BinaryTreeBase


class TestPerformanceTracker(unittest.TestCase):

    def setUp(self):
        self.tracker = PerformanceTracker.get_instance()
        self.tracker.reset()

    def tearDown(self):
        self.tracker.disable()
        self.tracker.reset()

    def test_singleton(self):
        self.assertIs(PerformanceTracker.get_instance(), self.tracker)

    def test_disabled_by_default_records_nothing(self):
        tree = create_tree(int, [3, 1, 2])
        tree.remove(1)
        self.assertEqual(self.tracker.report(), "No performance data collected.")

    def test_enabled_records_tree_operations(self):
        self.tracker.enable()
        tree = create_tree(int, range(20))
        tree.remove(10)
        tree.remove(11)
        tree.multi_remove([1, 2])
        self.assertEqual(self.tracker.metrics["BinaryTreeBase.remove"].call_count, 2)
        self.assertEqual(self.tracker.metrics["BinaryTreeBase.multi_remove"].call_count, 1)
        report = BinaryTreeBase.get_performance_report()
        self.assertIn("BinaryTreeBase.remove", report)

        BinaryTreeBase.reset_performance_metrics()
        self.assertEqual(self.tracker.report(), "No performance data collected.")

    def test_union_records_nested_calls(self):
        self.tracker.enable()
        a = create_tree(int, [1, 2])
        b = create_tree(int, [2, 3])
        a.union(b)
        self.assertEqual(self.tracker.metrics["BinaryTreeBase.union"].call_count, 1)
        self.assertEqual(self.tracker.metrics["BinaryTreeBase.intersection"].call_count, 1)
        self.assertEqual(self.tracker.metrics["BinaryTreeBase.symmetric_difference"].call_count, 1)

    def test_custom_tag_and_timing(self):
        @track_performance(tag="custom")
        def work():
            return 42

        self.tracker.enable()
        with patch("binartree.profiling.time.perf_counter", side_effect=[1.0, 1.5]):
            self.assertEqual(work(), 42)
        metrics = self.tracker.metrics["custom"]
        self.assertEqual(metrics.call_count, 1)
        self.assertAlmostEqual(metrics.total_time, 0.5)

    def test_records_even_when_call_raises(self):
        @track_performance
        def boom():
            raise ValueError("boom")

        self.tracker.enable()
        with self.assertRaises(ValueError):
            boom()
        self.assertEqual(len(self.tracker.metrics), 1)


    def test_record_ignored_while_disabled(self):
        self.tracker.record("noop", 0.25)
        self.assertNotIn("noop", self.tracker.metrics)

    def test_report_ranks_by_total_time(self):
        self.tracker.enable()
        self.tracker.record("fast", 0.1)
        self.tracker.record("slow", 0.4)
        self.tracker.record("slow", 0.2)
        report = self.tracker.report()
        self.assertLess(report.index("slow"), report.index("fast"))
        self.assertIn("0.300000", report)


class TestMethodMetrics(unittest.TestCase):

    def test_average(self):
        m = MethodMetrics(call_count=4, total_time=1.0)
        self.assertAlmostEqual(m.avg_time, 0.25)

    def test_empty(self):
        m = MethodMetrics()
        self.assertEqual(m.call_count, 0)
        self.assertEqual(m.avg_time, 0)


if __name__ == "__main__":
    unittest.main()
