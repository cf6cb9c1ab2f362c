"""Shared execution cooldown."""

import threading
import time

from flasharb.throttle import ExecutionGate

from tests.fakes import FakeClock


class TestExecutionGate:
    def test_first_attempt_passes(self, clock):
        gate = ExecutionGate(30, clock=clock)

        assert gate.remaining() == 0.0
        assert gate.try_acquire()
        assert gate.last_trade_timestamp == clock.now

    def test_second_attempt_inside_cooldown_is_blocked(self, clock):
        gate = ExecutionGate(30, clock=clock)
        assert gate.try_acquire()

        clock.advance(5)

        assert not gate.try_acquire()
        assert gate.remaining() == 25

    def test_blocked_attempt_does_not_extend_cooldown(self, clock):
        gate = ExecutionGate(30, clock=clock)
        first = clock.now
        gate.try_acquire()

        clock.advance(29)
        gate.try_acquire()

        assert gate.last_trade_timestamp == first

    def test_attempt_at_cooldown_boundary_passes(self, clock):
        gate = ExecutionGate(30, clock=clock)
        gate.try_acquire()

        clock.advance(30)

        assert gate.try_acquire()
        assert gate.remaining() == 30

    def test_concurrent_attempts_admit_exactly_one(self):
        gate = ExecutionGate(30, clock=FakeClock())
        barrier = threading.Barrier(16)
        results = []
        results_lock = threading.Lock()

        def attempt():
            barrier.wait()
            acquired = gate.try_acquire()
            with results_lock:
                results.append(acquired)

        threads = [threading.Thread(target=attempt) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        assert len(results) == 16

    def test_default_clock_ignores_wall_clock_jumps(self):
        gate = ExecutionGate(30)

        assert gate._clock is time.monotonic
        assert gate.try_acquire()
        assert 0 < gate.remaining() <= 30
