"""Tests for EffectChain scheduling."""

from __future__ import annotations

import pytest

from haptic_player.feedback import EffectKind, ImpactStyle, NotificationType, seconds
from helpers import fired, ms


class TestChainBuilding:
    """Effect calls schedule at the accumulated time; then() moves it."""

    def test_effect_calls_return_the_chain(self, chain):
        assert chain.selection_changed() is chain
        assert chain.impact_occurred(ImpactStyle.MEDIUM) is chain
        assert chain.notification_occurred(NotificationType.ERROR) is chain
        assert chain.then(ms(10)) is chain
        assert chain.then() is chain

    def test_initial_state(self, chain, clock):
        assert chain.accumulated_time == clock.now()
        assert chain.last_effect is EffectKind.NONE
        assert chain.last_interval == ms(0)

    def test_three_ticks_then_play(self, chain, backend, dispatcher):
        """selection, 200ms, selection, 200ms, selection, 200ms, play -> 0/200/400."""
        (chain
            .selection_changed().then(ms(200))
            .selection_changed().then(ms(200))
            .selection_changed().then(ms(200))
            .play())

        assert chain.accumulated_time == ms(0)
        dispatcher.run_all()
        assert fired(backend) == [
            ("selection_changed", ms(0)),
            ("selection_changed", ms(200)),
            ("selection_changed", ms(400)),
        ]

    def test_impact_then_notification(self, chain, backend, dispatcher):
        """Light impact at 0ms, success notification at 1000ms."""
        (chain
            .impact_occurred(ImpactStyle.LIGHT).then(seconds(1))
            .notification_occurred(NotificationType.SUCCESS)
            .play())

        dispatcher.run_all()
        assert fired(backend) == [
            ("light_impact", ms(0)),
            ("notification_success", ms(1000)),
        ]

    def test_offset_is_sum_of_delays(self, chain, backend, dispatcher):
        for delay in (10, 20, 30, 45):
            chain.then(ms(delay))
        chain.impact_occurred(ImpactStyle.HEAVY)

        dispatcher.run_all()
        assert fired(backend) == [("heavy_impact", ms(105))]

    def test_repeated_effect_without_delay_schedules_each_time(self, chain, dispatcher):
        chain.selection_changed().selection_changed().selection_changed()

        assert dispatcher.deadlines() == [ms(0), ms(0), ms(0)]

    def test_then_records_last_interval(self, chain):
        chain.then(ms(50)).then(ms(75))
        assert chain.last_interval == ms(75)
        assert chain.accumulated_time == ms(125)

    def test_bare_then_changes_nothing(self, chain):
        chain.then(ms(40))
        chain.then()
        assert chain.accumulated_time == ms(40)
        assert chain.last_interval == ms(40)

    def test_last_effect_tracks_effect_calls_only(self, chain):
        chain.impact_occurred(ImpactStyle.MEDIUM).then(ms(10))
        assert chain.last_effect is EffectKind.MEDIUM_IMPACT

        chain.notification_occurred(NotificationType.WARNING).then(ms(10)).then()
        assert chain.last_effect is EffectKind.NOTIFICATION_WARNING

    def test_initial_delay_offsets_first_effect(self, make_chain, backend, dispatcher):
        make_chain(after=ms(500)).selection_changed().play()

        dispatcher.run_all()
        assert fired(backend) == [("selection_changed", ms(500))]

    def test_equal_times_keep_call_order(self, chain, backend, dispatcher):
        (chain
            .selection_changed()
            .impact_occurred(ImpactStyle.LIGHT)
            .notification_occurred(NotificationType.ERROR))

        dispatcher.run_all()
        assert backend.effects == [
            EffectKind.SELECTION_CHANGED,
            EffectKind.LIGHT_IMPACT,
            EffectKind.NOTIFICATION_ERROR,
        ]

    def test_prepare_hint_on_every_scheduled_effect(self, chain, backend):
        chain.selection_changed().then(ms(200)).replay(3)

        assert backend.prepared["selection"] == 3
        assert backend.prepared["impact"] == 0

    def test_nothing_fires_before_dispatch(self, chain, backend, dispatcher):
        chain.selection_changed().impact_occurred(ImpactStyle.LIGHT)

        assert backend.triggers == []
        assert dispatcher.pending == 2


class TestPlay:
    """play() only resets the virtual clock."""

    def test_play_resets_to_now(self, chain, clock):
        chain.then(ms(300))
        clock.advance(ms(1000))

        assert chain.play() is None
        assert chain.accumulated_time == ms(1000)

    def test_play_keeps_last_effect_and_interval(self, chain):
        chain.impact_occurred(ImpactStyle.HEAVY).then(ms(80)).play()

        assert chain.last_effect is EffectKind.HEAVY_IMPACT
        assert chain.last_interval == ms(80)

    def test_play_keeps_scheduled_triggers(self, chain, dispatcher):
        chain.selection_changed().then(ms(100)).selection_changed().play()

        assert dispatcher.deadlines() == [ms(0), ms(100)]

    def test_chain_reusable_after_play(self, chain, backend, dispatcher):
        chain.selection_changed().then(ms(100)).play()
        chain.then(ms(50)).impact_occurred(ImpactStyle.LIGHT)

        dispatcher.run_all()
        assert fired(backend) == [
            ("selection_changed", ms(0)),
            ("light_impact", ms(50)),
        ]


class TestReplayOwnInterval:
    """replay(times): trigger-then-advance on last_interval, then play()."""

    def test_tick_replay_scenario(self, chain, backend, dispatcher):
        """selection, 200ms, replay(3): the original plus two repeats."""
        result = chain.selection_changed().then(ms(200)).replay(3)

        assert result is None
        assert chain.accumulated_time == ms(0)
        dispatcher.run_all()
        assert fired(backend) == [
            ("selection_changed", ms(0)),
            ("selection_changed", ms(200)),
            ("selection_changed", ms(400)),
        ]

    def test_replay_zero_is_noop(self, chain, dispatcher):
        chain.impact_occurred(ImpactStyle.LIGHT).then(ms(200))

        assert chain.replay(0) is None
        assert dispatcher.pending == 1
        assert chain.accumulated_time == ms(200)
        assert chain.last_effect is EffectKind.LIGHT_IMPACT
        assert chain.last_interval == ms(200)

    def test_replay_once_adds_nothing_but_resets(self, chain, clock, dispatcher):
        chain.selection_changed().then(ms(200))
        clock.advance(ms(5))

        chain.replay(1)

        assert dispatcher.pending == 1
        assert chain.accumulated_time == ms(5)

    def test_replay_n_adds_n_minus_one(self, chain, backend, dispatcher):
        chain.notification_occurred(NotificationType.ERROR).then(ms(150)).replay(5)

        assert dispatcher.deadlines() == [ms(0), ms(150), ms(300), ms(450), ms(600)]
        dispatcher.run_all()
        assert set(backend.effects) == {EffectKind.NOTIFICATION_ERROR}

    def test_replay_without_prior_delay_stacks_at_same_time(self, chain, dispatcher):
        chain.impact_occurred(ImpactStyle.MEDIUM).replay(3)

        assert dispatcher.deadlines() == [ms(0), ms(0), ms(0)]

    def test_replay_with_no_effect_schedules_nothing(self, chain, backend, dispatcher):
        chain.then(ms(100)).replay(4)

        assert dispatcher.pending == 0
        assert backend.prepared == {"selection": 0, "impact": 0, "notification": 0}
        assert chain.accumulated_time == ms(0)


class TestReplayWithInterval:
    """replay(times, interval): advance-then-trigger, no reset."""

    def test_returns_chain_and_keeps_time(self, chain, dispatcher):
        result = chain.selection_changed().replay(2, ms(300))

        assert result is chain
        assert chain.accumulated_time == ms(300)
        assert dispatcher.deadlines() == [ms(0), ms(300)]

    def test_does_not_touch_last_interval(self, chain, backend, dispatcher):
        chain.selection_changed().then(ms(100)).replay(3, ms(50))

        assert chain.last_interval == ms(100)
        assert chain.accumulated_time == ms(200)
        dispatcher.run_all()
        assert fired(backend) == [
            ("selection_changed", ms(0)),
            ("selection_changed", ms(150)),
            ("selection_changed", ms(200)),
        ]

    def test_replay_zero_is_noop(self, chain, dispatcher):
        chain.impact_occurred(ImpactStyle.HEAVY).then(ms(20))

        assert chain.replay(0, ms(500)) is chain
        assert dispatcher.pending == 1
        assert chain.accumulated_time == ms(20)
        assert chain.last_interval == ms(20)
        assert chain.last_effect is EffectKind.HEAVY_IMPACT

    def test_continues_chaining(self, chain, backend, dispatcher):
        """Double tick every 300ms, 150ms gap, light impact, 1s, success."""
        (chain
            .selection_changed().replay(2, ms(300)).then(ms(150))
            .impact_occurred(ImpactStyle.LIGHT).then(seconds(1))
            .notification_occurred(NotificationType.SUCCESS)
            .play())

        dispatcher.run_all()
        assert fired(backend) == [
            ("selection_changed", ms(0)),
            ("selection_changed", ms(300)),
            ("light_impact", ms(450)),
            ("notification_success", ms(1450)),
        ]

    def test_no_effect_advances_time_only(self, chain, backend, dispatcher):
        chain.replay(3, ms(50))

        assert dispatcher.pending == 0
        assert backend.triggers == []
        assert chain.accumulated_time == ms(100)


class TestInputChecks:
    """Bad arguments are rejected before any state changes."""

    def test_negative_delay(self, chain):
        with pytest.raises(ValueError, match="must not be negative"):
            chain.then(ms(-1))
        assert chain.accumulated_time == ms(0)
        assert chain.last_interval == ms(0)

    def test_non_timedelta_delay(self, chain):
        with pytest.raises(TypeError, match="timedelta"):
            chain.then(200)

    def test_negative_times(self, chain, dispatcher):
        chain.selection_changed()
        with pytest.raises(ValueError, match="times"):
            chain.replay(-1)
        assert dispatcher.pending == 1

    @pytest.mark.parametrize("times", [1.5, "3", True])
    def test_non_int_times(self, chain, times):
        with pytest.raises(TypeError):
            chain.replay(times)

    def test_negative_interval(self, chain):
        with pytest.raises(ValueError):
            chain.replay(2, ms(-10))

    def test_negative_initial_delay(self, make_chain):
        with pytest.raises(ValueError):
            make_chain(after=ms(-5))
