"""Tests for match lifecycle: joining, deck selection, start, disconnects."""

import random
from unittest.mock import MagicMock

import pytest

from riftclash.core.commands import AttackNexus
from riftclash.core.constants import MatchRules
from riftclash.core.errors import (
    ErrorCode,
    LifecycleViolation,
    MatchFull,
    RuleViolation,
    SelectionFailure,
)
from riftclash.core.match import Match, MatchState

from conftest import GAREN, start_match

DECK = [(GAREN, 0)] * 10


@pytest.fixture
def match():
    return Match(rng=random.Random(11))


class TestJoining:
    """add_participant tests."""

    def test_first_join_waits(self, match):
        pid = match.add_participant()

        assert len(pid) == 6
        assert match.state == MatchState.WAITING

    def test_second_join_opens_selection(self, match):
        first = match.add_participant()
        second = match.add_participant()

        assert first != second
        assert match.state == MatchState.NOT_STARTED

    def test_third_join_rejected(self, match):
        match.add_participant()
        match.add_participant()

        with pytest.raises(MatchFull) as exc:
            match.add_participant()
        assert exc.value.code == ErrorCode.MATCH_FULL
        assert isinstance(exc.value, LifecycleViolation)
        assert len(match.participants) == 2

    def test_match_id(self, match):
        assert len(match.id) == 12
        assert Match(match_id="fixed").id == "fixed"


class TestDeckSelection:
    """select_deck tests."""

    def test_selection_before_second_join(self, match):
        pid = match.add_participant()

        with pytest.raises(LifecycleViolation) as exc:
            match.select_deck(pid, DECK)
        assert exc.value.code == ErrorCode.WRONG_STATE

    def test_unknown_participant(self, match):
        match.add_participant()
        match.add_participant()

        with pytest.raises(SelectionFailure) as exc:
            match.select_deck("nobody", DECK)
        assert exc.value.code == ErrorCode.UNKNOWN_PARTICIPANT

    def test_small_deck_leaves_participant_unready(self, match):
        pid = match.add_participant()
        match.add_participant()

        with pytest.raises(SelectionFailure):
            match.select_deck(pid, DECK[:5])

        assert not match.get_participant(pid).ready
        assert match.state == MatchState.NOT_STARTED

    def test_out_of_range_level_changes_nothing(self, match):
        first = match.add_participant()
        second = match.add_participant()
        match.select_deck(first, DECK)

        with pytest.raises(SelectionFailure) as exc:
            match.select_deck(second, [(GAREN, 5000)] * 10)

        assert exc.value.code == ErrorCode.INVALID_DECK
        assert match.state == MatchState.NOT_STARTED
        assert match.units == {}
        assert not match.get_participant(second).ready
        assert len(match.get_participant(first).deck) == 10

    def test_first_selection_does_not_start(self, match):
        pid = match.add_participant()
        match.add_participant()

        assert match.select_deck(pid, DECK, "Alice", 7) is None
        assert match.get_participant(pid).display_name == "Alice"
        assert match.state == MatchState.NOT_STARTED

    def test_second_selection_starts(self, match):
        first = match.add_participant()
        second = match.add_participant()
        match.select_deck(first, DECK, "Alice", 7)

        inits = match.select_deck(second, DECK, "Bob", 9)

        assert match.state == MatchState.STARTED
        assert match.turn_number == 1
        assert match.moves_remaining == 2
        assert set(inits) == {first, second}
        assert len(inits[first].hand) == 5
        assert len(inits[second].hand) == 5
        assert inits[first].first_mover_id == second
        assert inits[first].opponent_name == "Bob"
        assert inits[second].opponent_icon == 7
        assert inits[first].nexus_health == 5

    def test_hands_drawn_from_decks(self):
        match, first, second = start_match()

        assert len(match.hand_of(first)) == 5
        assert len(match.get_participant(first).deck) == 5

    def test_selection_after_start(self):
        match, first, second = start_match()

        with pytest.raises(LifecycleViolation):
            match.select_deck(first, DECK)

    def test_custom_rules(self):
        rules = MatchRules(nexus_starting_health=3, hand_size=4, min_deck_size=4)
        match, first, second = start_match(rules=rules, deck_a=DECK[:4], deck_b=DECK[:4])

        assert match.get_participant(first).nexus_health == 3
        assert len(match.hand_of(second)) == 4


class TestMovesBeforeStart:
    def test_apply_move_rejected(self, match):
        pid = match.add_participant()

        with pytest.raises(LifecycleViolation):
            match.apply_move(pid, AttackNexus("x"))

    def test_pass_rejected(self, match):
        pid = match.add_participant()

        with pytest.raises(LifecycleViolation):
            match.request_pass(pid)


class TestDisconnect:
    def test_disconnect_before_start_has_no_victor(self, match):
        pid = match.add_participant()
        match.add_participant()

        over = match.disconnect(pid)

        assert over.victor_id is None
        assert match.state == MatchState.OVER
        assert not match.get_participant(pid).connected

    def test_disconnect_after_start_awards_opponent(self):
        match, first, second = start_match()
        match.timer = MagicMock()

        over = match.disconnect(first)

        assert over.victor_id == second
        assert match.is_over
        match.timer.cancel.assert_called_once()

    def test_disconnect_is_idempotent(self):
        match, first, second = start_match()
        match.disconnect(first)

        assert match.disconnect(second).victor_id == second

    def test_no_moves_after_over(self):
        match, first, second = start_match()
        match.disconnect(first)

        with pytest.raises(LifecycleViolation):
            match.request_pass(second)


class TestPassAndForcedAdvance:
    def test_force_advance(self):
        """A timer expiry advances the turn without touching units."""
        match, first, second = start_match()
        before = {uid: (u.health, u.location) for uid, u in match.units.items()}

        update = match.force_advance()

        assert match.turn_number == 2
        assert match.moves_remaining == 3
        assert update.turn_number == 2
        assert update.mover_id == first
        assert update.moves_remaining == 3
        assert update.moved == [] and update.damaged == []
        assert {uid: (u.health, u.location) for uid, u in match.units.items()} == before

    def test_pass_by_mover(self):
        match, first, second = start_match()
        match.timer = MagicMock()

        match.request_pass(second)

        assert match.turn_number == 2
        assert match.current_mover.id == first
        match.timer.restart.assert_called_once()

    def test_pass_by_other_participant(self):
        match, first, second = start_match()

        with pytest.raises(RuleViolation) as exc:
            match.request_pass(first)
        assert exc.value.code == ErrorCode.NOT_YOUR_TURN
        assert match.turn_number == 1


class TestSummary:
    def test_to_summary(self):
        match, first, second = start_match()

        summary = match.to_summary()

        assert summary["state"] == "started"
        assert summary["mover_id"] == second
        assert summary["participant_count"] == 2
        assert summary["participants"][0]["id"] == first
