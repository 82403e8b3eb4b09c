import threading
import time
import unittest

import helpers  # noqa: F401  (puts the project root on sys.path)
from mazeviz.core.sequencer import Playback, Sequencer


class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self):
        return self.t


class TestIteration(unittest.TestCase):
    def test_order_preserved(self):
        for speed in (0, 1, 3):
            seq = Sequencer(speed_ms=speed)
            self.assertEqual(list(seq.play(range(10))), list(range(10)))

    def test_empty_sequence_completes_immediately(self):
        seq = Sequencer(speed_ms=10_000)
        pb = seq.play([])
        t0 = time.monotonic()
        self.assertEqual(list(pb), [])
        self.assertLess(time.monotonic() - t0, 1.0)
        self.assertTrue(pb.done)
        self.assertEqual(pb.emitted, 0)

    def test_negative_speed_means_no_delay(self):
        seq = Sequencer(speed_ms=0)
        seq.set_speed(-500)
        t0 = time.monotonic()
        self.assertEqual(list(seq.play("abc")), ["a", "b", "c"])
        self.assertLess(time.monotonic() - t0, 1.0)

    def test_steps_are_snapshotted(self):
        steps = [1, 2, 3]
        pb = Sequencer(speed_ms=0).play(steps)
        steps.append(4)
        self.assertEqual(list(pb), [1, 2, 3])

    def test_cancel_after_two_of_ten(self):
        seq = Sequencer(speed_ms=5)
        pb = seq.play(range(10))
        seen = []
        for step in pb:
            seen.append(step)
            if len(seen) == 2:
                pb.cancel()
        time.sleep(10 * 0.005 + 0.1)
        self.assertEqual(seen, [0, 1])
        self.assertEqual(pb.emitted, 2)
        self.assertEqual(pb.remaining, 8)
        self.assertTrue(pb.cancelled)
        self.assertFalse(pb.done)
        self.assertEqual(list(pb), [])

    def test_cancel_is_idempotent(self):
        pb = Sequencer(speed_ms=0).play([1])
        pb.cancel()
        pb.cancel()
        self.assertTrue(pb.cancelled)
        self.assertFalse(pb.active)

    def test_play_cancels_previous(self):
        seq = Sequencer(speed_ms=0)
        first = seq.play(range(10))
        second = seq.play(range(3))
        self.assertTrue(first.cancelled)
        self.assertFalse(second.cancelled)
        self.assertIs(seq.current, second)
        self.assertEqual(list(first), [])
        self.assertEqual(list(second), [0, 1, 2])

    def test_sequencer_cancel(self):
        seq = Sequencer(speed_ms=0)
        pb = seq.play([1, 2])
        seq.cancel()
        self.assertTrue(pb.cancelled)
        self.assertIsNone(seq.current)
        seq.cancel()  # nothing active, still fine


class TestPoll(unittest.TestCase):
    def test_poll_follows_deadlines(self):
        clock = FakeClock()
        seq = Sequencer(speed_ms=1000, clock=clock)
        pb = seq.play("abcde")
        self.assertEqual(pb.poll(), [])         # schedules the first step at t=1
        clock.t = 0.5
        self.assertEqual(pb.poll(), [])
        clock.t = 1.0
        self.assertEqual(pb.poll(), ["a"])
        clock.t = 3.5
        self.assertEqual(pb.poll(), ["b", "c"])  # catches up in order
        clock.t = 10.0
        self.assertEqual(pb.poll(), ["d", "e"])
        self.assertTrue(pb.done)
        self.assertEqual(pb.poll(), [])

    def test_speed_change_applies_to_next_scheduled_step(self):
        clock = FakeClock()
        seq = Sequencer(speed_ms=1000, clock=clock)
        pb = seq.play("abcde")
        pb.poll()
        clock.t = 1.0
        self.assertEqual(pb.poll(), ["a"])      # "b" already scheduled for t=2
        seq.set_speed(100)
        clock.t = 1.5
        self.assertEqual(pb.poll(), [])
        clock.t = 2.0
        self.assertEqual(pb.poll(), ["b"])
        clock.t = 2.5
        self.assertEqual(pb.poll(), ["c", "d", "e"])
        self.assertTrue(pb.done)

    def test_poll_with_zero_speed_drains(self):
        clock = FakeClock()
        pb = Sequencer(speed_ms=0, clock=clock).play(range(50))
        self.assertEqual(pb.poll(), list(range(50)))

    def test_poll_after_cancel(self):
        clock = FakeClock()
        pb = Sequencer(speed_ms=0, clock=clock).play(range(5))
        pb.cancel()
        self.assertEqual(pb.poll(), [])
        self.assertEqual(pb.emitted, 0)

    def test_playback_directly(self):
        clock = FakeClock()
        pb = Playback([1, 2], lambda: 0.25, clock)
        self.assertEqual(pb.poll(), [])
        clock.t = 0.5
        self.assertEqual(pb.poll(), [1, 2])


class TestThreaded(unittest.TestCase):
    def test_start_runs_to_completion(self):
        seq = Sequencer(speed_ms=1)
        seen = []
        finished = threading.Event()
        pb = seq.start(range(5), seen.append, on_complete=finished.set)
        self.assertTrue(finished.wait(5.0))
        pb.join(1.0)
        self.assertEqual(seen, [0, 1, 2, 3, 4])
        self.assertTrue(pb.done)

    def test_cancel_after_two_from_callback(self):
        seq = Sequencer(speed_ms=5)
        seen = []
        completed = []

        def on_step(step):
            seen.append(step)
            if len(seen) == 2:
                seq.cancel()

        pb = seq.start(range(10), on_step, on_complete=lambda: completed.append(True))
        pb.join(5.0)
        time.sleep(10 * 0.005 + 0.1)
        self.assertEqual(seen, [0, 1])
        self.assertEqual(completed, [])

    def test_cancel_releases_pending_wait(self):
        seq = Sequencer(speed_ms=60_000)
        seen = []
        pb = seq.start(range(3), seen.append)
        time.sleep(0.05)
        t0 = time.monotonic()
        pb.cancel()
        pb.join(5.0)
        self.assertLess(time.monotonic() - t0, 5.0)
        self.assertEqual(seen, [])
        self.assertEqual(pb.emitted, 0)

    def test_cancel_while_scheduling_emits_nothing_more(self):
        calls = []

        def delay():
            calls.append(True)
            if len(calls) == 3:
                pb.cancel()
            return 0.0

        pb = Playback(range(5), delay)
        seen = []
        finished = []
        pb._drive(seen.append, lambda: finished.append(True))
        self.assertEqual(seen, [0, 1])
        self.assertEqual(pb.emitted, 2)
        self.assertEqual(finished, [])

    def test_cancel_between_yield_and_callback(self):
        # the cancel lands after the step left the stream but before on_step
        class CancelledInFlight(Playback):
            def __iter__(self):
                for step in super().__iter__():
                    self.cancel()
                    yield step

        pb = CancelledInFlight(range(5), lambda: 0.0)
        seen = []
        pb._drive(seen.append, None)
        self.assertEqual(seen, [])
        self.assertTrue(pb.cancelled)

    def test_speed_is_read_before_every_step(self):
        seq = Sequencer(speed_ms=0)
        seen = []
        two_seen = threading.Event()

        def on_step(step):
            seen.append(step)
            if len(seen) == 2:
                seq.set_speed(60_000)
                two_seen.set()

        pb = seq.start(range(6), on_step)
        self.assertTrue(two_seen.wait(5.0))
        time.sleep(0.1)
        self.assertEqual(seen, [0, 1])   # third step now waits on the new speed
        pb.cancel()
        pb.join(5.0)
        self.assertEqual(seen, [0, 1])


if __name__ == '__main__':
    unittest.main()
