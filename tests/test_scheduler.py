"""
Tests for the deferred callback schedulers
"""
import threading
import unittest

from services.scheduler import ThreadingScheduler
from support import ManualScheduler


class TestManualScheduler(unittest.TestCase):

    def test_fires_in_deadline_order(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(20, lambda: fired.append("b"))
        scheduler.call_later(5, lambda: fired.append("a"))
        scheduler.call_later(20, lambda: fired.append("c"))

        self.assertEqual(scheduler.advance(4), 0)
        self.assertEqual(scheduler.advance(16), 3)
        self.assertEqual(fired, ["a", "b", "c"])
        self.assertEqual(scheduler.now, 20)

    def test_callbacks_scheduled_while_advancing(self):
        scheduler = ManualScheduler()
        fired = []

        def first():
            fired.append(scheduler.now)
            scheduler.call_later(3, lambda: fired.append(scheduler.now))

        scheduler.call_later(2, first)
        scheduler.advance(10)
        self.assertEqual(fired, [2, 5])

    def test_cancel(self):
        scheduler = ManualScheduler()
        fired = []
        call = scheduler.call_later(1, lambda: fired.append(1))
        call.cancel()

        self.assertEqual(scheduler.pending, 0)
        self.assertEqual(scheduler.run_all(), 0)
        self.assertEqual(fired, [])


class TestThreadingScheduler(unittest.TestCase):

    def test_runs_callback(self):
        done = threading.Event()
        ThreadingScheduler().call_later(0.01, done.set)
        self.assertTrue(done.wait(2))

    def test_cancelled_callback_does_not_run(self):
        done = threading.Event()
        call = ThreadingScheduler().call_later(0.2, done.set)
        call.cancel()
        self.assertFalse(done.wait(0.4))


if __name__ == '__main__':
    unittest.main()
