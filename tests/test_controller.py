"""Tests for the playback controller state machine and its scheduler."""

import pytest

from elements import ConfigurationError, ValidationError
from engine import Phase, Scheduler
from engine.config import START_DELAY_MS

from conftest import FakeClock, drive_to_completion


class TestScheduler:
    def test_fires_only_when_due(self):
        clock = FakeClock()
        fired = []
        sched = Scheduler(clock=clock)
        sched.schedule(200, lambda: fired.append(1))

        assert sched.tick() is False
        clock.advance(0.199)
        assert sched.tick() is False
        clock.advance(0.002)
        assert sched.tick() is True
        assert fired == [1]
        assert not sched.pending

    def test_cancel_forgets_callback(self):
        clock = FakeClock()
        sched = Scheduler(clock=clock)
        sched.schedule(0, lambda: pytest.fail("cancelled callback fired"))
        sched.cancel()
        clock.advance(1)
        assert sched.tick() is False

    def test_new_schedule_replaces_old(self):
        clock = FakeClock()
        fired = []
        sched = Scheduler(clock=clock)
        sched.schedule(10, lambda: fired.append("old"))
        sched.schedule(10, lambda: fired.append("new"))
        clock.advance(1)
        sched.tick()
        assert fired == ["new"]


class TestInitialState:
    def test_starts_idle_with_loaded_array(self, make_controller):
        ctrl = make_controller()
        assert ctrl.phase is Phase.IDLE
        assert ctrl.trace is None
        assert [e.value for e in ctrl.array] == [5, 3, 8, 1]
        assert ctrl.cursor == 0

    def test_prepare_moves_to_ready(self, make_controller):
        ctrl = make_controller()
        trace = ctrl.prepare()
        assert ctrl.phase is Phase.READY
        assert ctrl.stats.total_steps == len(trace)
        assert ctrl.message == "Starting Bubble Sort"


class TestTogglePlayback:
    def test_toggle_pauses_and_resumes_at_same_cursor(self, make_controller, clock):
        ctrl = make_controller()
        assert ctrl.toggle() is True
        assert ctrl.phase is Phase.PLAYING

        clock.advance(START_DELAY_MS / 1000)
        assert ctrl.tick() is True
        for _ in range(2):
            clock.advance(ctrl.config.step_delay_ms / 1000)
            assert ctrl.tick() is True
        assert ctrl.cursor == 3

        assert ctrl.toggle() is True
        assert ctrl.phase is Phase.PAUSED
        assert not ctrl.scheduler.pending
        assert ctrl.message == f"Paused at step 3/{ctrl.total_steps}"

        clock.advance(10)
        assert ctrl.tick() is False
        assert ctrl.cursor == 3

        assert ctrl.toggle() is True
        assert ctrl.phase is Phase.PLAYING
        clock.advance(START_DELAY_MS / 1000)
        ctrl.tick()
        assert ctrl.cursor == 4

    def test_start_while_playing_is_ignored(self, make_controller):
        ctrl = make_controller()
        ctrl.start()
        assert ctrl.start() is False
        assert ctrl.phase is Phase.PLAYING

    def test_runs_to_completion(self, make_controller, clock, notifications):
        ctrl = make_controller()
        ctrl.toggle()
        drive_to_completion(ctrl, clock)

        assert ctrl.phase is Phase.COMPLETED
        assert ctrl.cursor == ctrl.total_steps
        assert [e.value for e in ctrl.array] == [1, 3, 5, 8]
        assert ctrl.message.startswith("Bubble Sort completed! 6 comparisons, 4 swaps, ")
        assert ctrl.stats.time_elapsed > 0
        assert ("success", ctrl.message) in notifications

    def test_toggle_after_completion_is_refused(self, make_controller, clock, notifications):
        ctrl = make_controller()
        ctrl.toggle()
        drive_to_completion(ctrl, clock)

        assert ctrl.toggle() is False
        assert ctrl.phase is Phase.COMPLETED
        assert notifications[-1] == ("info", "Algorithm already completed! Click Reset to start over.")


class TestSwapAcknowledgement:
    def _play_until_swap(self, ctrl, clock):
        ctrl.toggle()
        self._tick_until_swap(ctrl, clock)

    def _tick_until_swap(self, ctrl, clock):
        for _ in range(50):
            if ctrl.pending_swap is not None:
                return
            clock.advance(5)
            ctrl.tick()
        pytest.fail("no swap reached")

    def test_playback_waits_for_acknowledgement(self, make_controller, clock):
        ctrl = make_controller()
        swaps = []
        ctrl.on_swap = swaps.append
        self._play_until_swap(ctrl, clock)

        assert swaps == [ctrl.pending_swap]
        assert [e.value for e in ctrl.array] == [5, 3, 8, 1]
        assert not ctrl.scheduler.pending
        cursor = ctrl.cursor

        clock.advance(10)
        assert ctrl.tick() is False
        assert ctrl.cursor == cursor

        assert ctrl.acknowledge_swap() is True
        assert [e.value for e in ctrl.array] == [3, 5, 8, 1]
        assert ctrl.pending_swap is None
        assert ctrl.scheduler.pending

    def test_acknowledge_without_pending_swap(self, make_controller):
        ctrl = make_controller()
        assert ctrl.acknowledge_swap() is False

    def test_stale_acknowledgement_is_ignored(self, make_controller, clock):
        ctrl = make_controller(speed=100)
        self._play_until_swap(ctrl, clock)
        first_cursor = ctrl.cursor
        assert ctrl.acknowledge_swap(first_cursor) is True

        self._tick_until_swap(ctrl, clock)
        pair = ctrl.pending_swap
        assert (pair.from_index, pair.to_index) == (2, 3)
        assert [e.value for e in ctrl.array] == [3, 5, 8, 1]

        # a late duplicate for the first swap must not commit the second
        assert ctrl.acknowledge_swap(first_cursor) is False
        assert [e.value for e in ctrl.array] == [3, 5, 8, 1]
        assert ctrl.pending_swap == pair

        assert ctrl.acknowledge_swap(ctrl.cursor) is True
        assert [e.value for e in ctrl.array] == [3, 5, 1, 8]


class TestManualStepping:
    def test_step_forward_from_idle_prepares_trace(self, make_controller):
        ctrl = make_controller()
        assert ctrl.step_forward() is True
        assert ctrl.phase is Phase.PAUSED
        assert ctrl.cursor == 1
        assert ctrl.message == "Starting Bubble Sort"

    def test_step_backward_to_start_restores_input(self, make_controller):
        ctrl = make_controller()
        ctrl.step_forward()
        ctrl.step_forward()
        assert ctrl.step_backward() is True
        assert ctrl.cursor == 1
        assert ctrl.step_backward() is True
        assert ctrl.cursor == 0
        assert ctrl.message == "Ready to sort"
        assert [e.value for e in ctrl.array] == [5, 3, 8, 1]
        assert ctrl.stats.comparisons == 0

    def test_step_backward_at_start_is_a_no_op(self, make_controller):
        ctrl = make_controller()
        ctrl.prepare()
        assert ctrl.step_backward() is False
        assert ctrl.phase is Phase.READY

    def test_stepping_refused_while_playing(self, make_controller):
        ctrl = make_controller()
        ctrl.start()
        assert ctrl.step_forward() is False
        assert ctrl.step_backward() is False
        assert ctrl.cursor == 0

    def test_step_to_end_completes_and_back_reopens(self, make_controller):
        ctrl = make_controller()
        while ctrl.step_forward():
            pass
        assert ctrl.phase is Phase.COMPLETED
        assert [e.value for e in ctrl.array] == [1, 3, 5, 8]

        assert ctrl.step_backward() is True
        assert ctrl.phase is Phase.PAUSED
        assert ctrl.cursor == ctrl.total_steps - 1

    def test_step_mode_pauses_after_each_step(self, make_controller, clock):
        ctrl = make_controller(step_by_step=True)
        ctrl.toggle()
        clock.advance(START_DELAY_MS / 1000)
        ctrl.tick()
        assert ctrl.phase is Phase.PAUSED
        assert ctrl.cursor == 1
        assert not ctrl.scheduler.pending


class TestResetAndConfig:
    def test_reset_draws_fresh_array(self, make_controller, clock):
        ctrl = make_controller(array_size=6)
        ctrl.toggle()
        clock.advance(1)
        ctrl.tick()

        ctrl.reset()
        assert ctrl.phase is Phase.IDLE
        assert ctrl.trace is None
        assert not ctrl.scheduler.pending
        assert [e.value for e in ctrl.array] == [6, 5, 4, 3, 2, 1]
        assert ctrl.message == "Reset complete. Array size: 6, Algorithm: Bubble Sort"

    def test_set_algorithm_discards_trace(self, make_controller):
        ctrl = make_controller()
        ctrl.step_forward()
        ctrl.set_algorithm("quick", "hoare")
        assert ctrl.phase is Phase.IDLE
        assert ctrl.trace is None
        assert ctrl.config.variant == "hoare"
        assert ctrl.message == "Algorithm changed to Quick Sort (Hoare partition). Ready to sort."

    def test_set_algorithm_defaults_variant(self, make_controller):
        ctrl = make_controller()
        ctrl.set_algorithm("shell")
        assert ctrl.config.variant == "ciura"

    def test_unknown_algorithm_propagates(self, make_controller):
        ctrl = make_controller()
        with pytest.raises(ConfigurationError):
            ctrl.set_algorithm("bogo")
        assert ctrl.config.algorithm == "bubble"

    def test_load_custom_rejects_and_keeps_array(self, make_controller, notifications):
        ctrl = make_controller()
        assert ctrl.load_custom("abc, 0, 9999") is False
        assert [e.value for e in ctrl.array] == [5, 3, 8, 1]
        assert notifications[-1][0] == "error"

    def test_load_custom_example_sorts_with_every_algorithm(self, make_controller):
        ctrl = make_controller()
        assert ctrl.load_custom("64, 34, 25, 12, 22, 11, 90") is True
        assert ctrl.config.array_size == 7
        for algorithm in ("merge", "heap", "cocktail"):
            ctrl.set_algorithm(algorithm)
            while ctrl.step_forward():
                pass
            assert [e.value for e in ctrl.array] == [11, 12, 22, 25, 34, 64, 90]

    def test_update_config_mixed_changes(self, make_controller):
        ctrl = make_controller()
        cfg = ctrl.update_config(algorithm="merge", variant="bottomUp", speed="fast", color_theme="neon")
        assert (cfg.algorithm, cfg.variant, cfg.speed, cfg.color_theme) == ("merge", "bottomUp", 80, "neon")

    def test_non_numeric_size_is_a_validation_error(self, make_controller):
        ctrl = make_controller()
        with pytest.raises(ValidationError, match="array_size"):
            ctrl.update_config(array_size="big")
        assert ctrl.config.array_size == 30
        assert [e.value for e in ctrl.array] == [5, 3, 8, 1]

    def test_speed_clamped(self, make_controller):
        ctrl = make_controller()
        ctrl.set_speed(500)
        assert ctrl.config.speed == 100
        assert ctrl.config.step_delay_ms == 100


class TestHooks:
    def test_sound_cues_follow_steps(self, make_controller):
        ctrl = make_controller()
        cues = []
        ctrl.on_sound = cues.append
        ctrl.step_forward()     # starting narration, silent
        ctrl.step_forward()     # pass narration, silent
        ctrl.step_forward()     # first comparison
        assert [c.kind for c in cues] == ["compare"]
        assert cues[0].frequency == 405

    def test_sound_disabled(self, make_controller):
        ctrl = make_controller(sound_enabled=False)
        cues = []
        ctrl.on_sound = cues.append
        for _ in range(4):
            ctrl.step_forward()
        assert cues == []

    def test_on_step_receives_views(self, make_controller):
        ctrl = make_controller()
        views = []
        ctrl.on_step = views.append
        ctrl.step_forward()
        assert views[-1].cursor == 1
        assert views[-1].to_dict()["phase"] == "paused"
