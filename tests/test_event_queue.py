"""Tests for the simulation event queue."""

import unittest

import numpy as np

from hopsim.core.event_queue import SimulationEvent, EventType, EventQueue


def arrival(time, request_id=0):
    return SimulationEvent(time=time, event_type=EventType.ARRIVAL, request_id=request_id)


class TestEventQueue(unittest.TestCase):
    """Test cases for EventQueue."""

    def test_empty_queue(self):
        """Test empty queue behavior."""
        queue = EventQueue()

        self.assertTrue(queue.is_empty())
        self.assertEqual(queue.size(), 0)
        self.assertEqual(len(queue), 0)
        self.assertIsNone(queue.peek())

        with self.assertRaises(IndexError):
            queue.pop()

    def test_push_pop(self):
        """Test push and pop operations."""
        queue = EventQueue()

        queue.push(arrival(1.0))

        self.assertFalse(queue.is_empty())
        self.assertEqual(queue.size(), 1)

        popped = queue.pop()
        self.assertEqual(popped.time, 1.0)
        self.assertTrue(queue.is_empty())

    def test_pop_all_is_sorted(self):
        """Popping everything yields ascending times."""
        queue = EventQueue()
        times = [50, 30, 70, 10, 40, 60, 20, 80, 5, 90]
        for i, t in enumerate(times):
            queue.push(arrival(float(t), i))

        popped = [queue.pop().time for _ in range(len(times))]

        self.assertEqual(popped, [5, 10, 20, 30, 40, 50, 60, 70, 80, 90])
        self.assertTrue(queue.is_empty())

    def test_peek_does_not_remove(self):
        """Peek returns the minimum and leaves it in place."""
        queue = EventQueue()
        queue.push(arrival(3.0))
        queue.push(arrival(1.0))

        self.assertEqual(queue.peek().time, 1.0)
        self.assertEqual(queue.size(), 2)
        self.assertEqual(queue.pop().time, 1.0)
        self.assertEqual(queue.peek().time, 3.0)

    def test_interleaved_operations_return_minimum(self):
        """Pop always returns the smallest time currently queued."""
        rng = np.random.default_rng(3)
        queue = EventQueue()
        present = []

        for step in range(500):
            if present and rng.random() < 0.4:
                event = queue.pop()
                self.assertEqual(event.time, min(present))
                present.remove(event.time)
            else:
                t = float(rng.uniform(0, 100))
                queue.push(arrival(t, step))
                present.append(t)

        self.assertEqual(queue.size(), len(present))

    def test_equal_times_pop_in_insertion_order(self):
        """Events at the same time come out in the order pushed."""
        queue = EventQueue()
        for request_id in range(5):
            queue.push(arrival(2.0, request_id))
        queue.push(SimulationEvent(time=1.0, event_type=EventType.DEPARTURE, request_id=99))

        self.assertEqual(queue.pop().request_id, 99)
        self.assertEqual([queue.pop().request_id for _ in range(5)], [0, 1, 2, 3, 4])

    def test_clear(self):
        """Clear empties the queue."""
        queue = EventQueue()
        queue.push(arrival(1.0))
        queue.push(arrival(2.0))
        queue.clear()

        self.assertTrue(queue.is_empty())


class TestSimulationEvent(unittest.TestCase):
    """Test cases for SimulationEvent."""

    def test_negative_time_rejected(self):
        """Test events cannot be created in the past."""
        with self.assertRaises(ValueError):
            arrival(-1.0)

    def test_events_are_immutable(self):
        """Test events cannot be changed after creation."""
        event = arrival(1.0)
        with self.assertRaises(AttributeError):
            event.time = 2.0

    def test_ordering_uses_time_only(self):
        """Test comparison ignores type and request id."""
        early = SimulationEvent(time=1.0, event_type=EventType.DEPARTURE, request_id=7)
        late = SimulationEvent(time=2.0, event_type=EventType.ARRIVAL, request_id=1)

        self.assertLess(early, late)


if __name__ == '__main__':
    unittest.main()
