"""Tests for the playback engine."""

import threading

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from algorithms.bubble_sort import generate_bubble_sort
from engine.stepper import (
    SPEED_PRESETS,
    ManualScheduler,
    Player,
    PlayerState,
    ThreadingScheduler,
    speed_for_level,
)


@pytest.fixture
def trace():
    return generate_bubble_sort([5, 3, 8, 1])      # 16 snapshots


@pytest.fixture
def sched():
    return ManualScheduler()


class RecordingScheduler:
    """Keeps every callback so a test can fire one after it was cancelled."""

    def __init__(self):
        self.callbacks = []

    def call_later(self, delay_ms, callback):
        self.callbacks.append(callback)
        return _NoopHandle()


class _NoopHandle:
    def cancel(self):
        pass


class TestNavigation:
    def test_starts_idle_at_zero(self, trace) -> None:
        player = Player(trace)
        assert player.step == 0
        assert player.state is PlayerState.IDLE
        assert player.total_steps == 16
        assert player.current is trace.initial

    def test_next_and_prev_clamp(self, trace) -> None:
        player = Player(trace)
        assert not player.prev()
        assert player.step == 0
        player.jump_to(15)
        assert not player.next()
        assert player.step == 15

    def test_jump_out_of_range_ignored(self, trace) -> None:
        player = Player(trace)
        player.jump_to(4)
        for bad in (-1, 16, 100, "3", 2.0, True):
            assert not player.jump_to(bad)
            assert player.step == 4

    def test_progress(self, trace) -> None:
        player = Player(trace)
        assert player.progress == pytest.approx(100 / 16)
        player.jump_to(15)
        assert player.progress == 100

    def test_current_line(self, trace) -> None:
        player = Player(trace)
        player.next()
        assert player.current_line == "    IF array[j] > array[j+1]:"
        assert player.state is PlayerState.PAUSED

    def test_reset(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        player.jump_to(7)
        player.play()
        player.reset()
        assert player.step == 0
        assert not player.is_playing
        assert sched.armed == 0

    def test_load_new_trace_resets(self, trace) -> None:
        player = Player(trace)
        player.jump_to(9)
        player.load(generate_bubble_sort([2, 1]))
        assert player.step == 0
        assert player.total_steps == len(generate_bubble_sort([2, 1]))

    def test_load_same_trace_keeps_cursor(self, trace) -> None:
        player = Player(trace)
        player.jump_to(9)
        player.load(trace)
        assert player.step == 9

    @given(ops=st.lists(st.tuples(
        st.sampled_from(["next", "prev", "jump", "reset", "play", "tick", "pause"]),
        st.integers(min_value=-5, max_value=25),
    ), max_size=60))
    @settings(max_examples=100, deadline=None)
    def test_bounds_hold_under_any_sequence(self, ops) -> None:
        trace = generate_bubble_sort([5, 3, 8, 1])
        player = Player(trace)
        for op, arg in ops:
            if op == "jump":
                player.jump_to(arg)
            else:
                getattr(player, op)()
            assert 0 <= player.step < player.total_steps
            assert 0 < player.progress <= 100
            assert (player.progress == 100) == player.at_end
            assert not (player.is_playing and player.at_end)


class TestPlayback:
    def test_play_arms_one_timer(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        assert player.play()
        assert player.state is PlayerState.PLAYING
        assert sched.armed == 1
        player.play()
        assert sched.armed == 1

    def test_each_tick_advances_one_step(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        player.play()
        sched.fire_next()
        sched.fire_next()
        assert player.step == 2
        assert sched.armed == 1

    def test_auto_pauses_at_final_step(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        player.play()
        fired = sched.run_until_idle()
        assert fired == 15
        assert player.step == 15
        assert player.state is PlayerState.PAUSED
        assert sched.armed == 0

    def test_pause_cancels_synchronously(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        player.play()
        player.pause()
        assert sched.armed == 0
        assert not sched.fire_next()
        assert player.step == 0

    def test_navigation_pauses(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        player.play()
        player.next()
        assert not player.is_playing
        assert player.step == 1
        assert sched.armed == 0

    def test_stale_callback_is_ignored(self, trace) -> None:
        sched = RecordingScheduler()
        player = Player(trace, scheduler=sched)
        player.play()
        stale = sched.callbacks[-1]
        player.pause()
        player.play()
        stale()
        assert player.step == 0
        sched.callbacks[-1]()
        assert player.step == 1

    def test_toggle_at_final_step_is_noop(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        player.jump_to(15)
        assert player.toggle_play() is False
        assert player.step == 15
        assert sched.armed == 0

    def test_toggle_flips(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        assert player.toggle_play() is True
        assert player.toggle_play() is False

    def test_host_driven_ticks(self, trace) -> None:
        player = Player(trace)
        assert not player.tick()
        player.play()
        assert player.tick()
        assert player.step == 1

    def test_speed_change_rearms(self, trace, sched) -> None:
        player = Player(trace, scheduler=sched)
        player.play()
        player.set_speed_preset("slow")
        assert player.speed_ms == SPEED_PRESETS["slow"]
        assert sched.armed == 1

    def test_on_change_fires(self, trace, sched) -> None:
        seen = []
        player = Player(trace, scheduler=sched, on_change=lambda p: seen.append(p.step))
        player.next()
        player.play()
        sched.fire_next()
        player.pause()
        assert seen == [1, 1, 2, 2]

    def test_threading_scheduler_reaches_end(self, trace) -> None:
        done = threading.Event()

        def on_change(player):
            if player.at_end:
                done.set()

        player = Player(trace, speed_ms=10, scheduler=ThreadingScheduler(), on_change=on_change)
        player.play()
        assert done.wait(timeout=5)
        assert player.step == 15
        assert not player.is_playing


class TestSpeed:
    def test_levels(self) -> None:
        assert speed_for_level(1) == 2000
        assert speed_for_level(10) == 50
        levels = [speed_for_level(i) for i in range(1, 11)]
        assert levels == sorted(levels, reverse=True)

    @pytest.mark.parametrize("level", [0, 11, "5", True])
    def test_bad_level(self, level) -> None:
        with pytest.raises(ValueError):
            speed_for_level(level)

    def test_unknown_preset(self, trace) -> None:
        with pytest.raises(ValueError):
            Player(trace).set_speed_preset("ludicrous")

    def test_too_fast(self, trace) -> None:
        with pytest.raises(ValueError):
            Player(trace, speed_ms=1)
