"""Tests for the status feed EventLog."""

import unittest

from geocoin.core.enums import EventCategory
from geocoin.utils.event_log import EventLog


class TestEventLog(unittest.TestCase):

    def test_sequence_numbers_increase(self):
        log = EventLog()
        a = log.record(EventCategory.MOVE, "a")
        b = log.record(EventCategory.COLLECT, "b", ("0:0#1",))
        self.assertEqual((a.seq, b.seq), (1, 2))
        self.assertEqual(b.token_ids, ("0:0#1",))

    def test_since_and_latest(self):
        log = EventLog()
        for i in range(5):
            log.record(EventCategory.MOVE, f"m{i}")
        self.assertEqual([e.message for e in log.since(3)], ["m3", "m4"])
        self.assertEqual([e.message for e in log.latest(2)], ["m3", "m4"])
        self.assertEqual(log.latest(0), [])

    def test_bounded_buffer(self):
        log = EventLog(maxlen=3)
        for i in range(10):
            log.record(EventCategory.SYSTEM, str(i))
        self.assertEqual(len(log), 3)
        self.assertEqual(log.latest(10)[0].message, "7")

    def test_clear_keeps_counting(self):
        log = EventLog()
        log.record(EventCategory.MOVE, "x")
        log.clear()
        self.assertEqual(len(log), 0)
        self.assertEqual(log.record(EventCategory.MOVE, "y").seq, 2)


if __name__ == "__main__":
    unittest.main()
