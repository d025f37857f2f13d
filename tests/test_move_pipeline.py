"""Tests for move validation and resolution."""

from unittest.mock import MagicMock

import pytest

from riftclash.combat.location import Location
from riftclash.combat.status_effects import StatusKind
from riftclash.core.commands import AttackNexus, AttackUnit, CastAbility, MoveUnit
from riftclash.core.constants import MatchRules
from riftclash.core.deck import DeckEntry
from riftclash.core.errors import ErrorCode, RuleViolation
from riftclash.core.match import MatchState

from conftest import ANNIE, CORKI, GAREN, clear_hands, place, start_match


def reject(match, pid, command, code):
    """Assert a move is rejected with the given code and consumes nothing."""
    turn, moves = match.turn_number, match.moves_remaining
    with pytest.raises(RuleViolation) as exc:
        match.apply_move(pid, command)
    assert exc.value.code == code
    assert (match.turn_number, match.moves_remaining) == (turn, moves)
    return exc.value


@pytest.fixture
def board():
    """Started match with empty hands and a mocked turn timer."""
    match, first, second = start_match()
    clear_hands(match)
    match.timer = MagicMock()
    return match, first, second


class TestTurnOrder:
    def test_only_mover_may_move(self, started):
        match, first, second = started
        uid = match.hand_of(first)[0].uid

        reject(match, first, MoveUnit(uid, Location.LANE_TOP), ErrorCode.NOT_YOUR_TURN)

    def test_unknown_command(self, started):
        match, first, second = started

        reject(match, second, object(), ErrorCode.INVALID_MOVE)

    def test_first_turn_has_two_moves(self, started):
        match, first, second = started
        hand = match.hand_of(second)

        match.apply_move(second, MoveUnit(hand[0].uid, Location.LANE_TOP))
        assert match.current_mover.id == second
        match.apply_move(second, MoveUnit(hand[1].uid, Location.LANE_MID))

        assert match.turn_number == 2
        assert match.moves_remaining == 3
        assert match.current_mover.id == first

    def test_turn_number_never_decreases(self, started):
        match, first, second = started
        seen = [match.turn_number]
        for _ in range(3):
            mover = match.current_mover.id
            unit = match.hand_of(mover)[0]
            match.apply_move(mover, MoveUnit(unit.uid, Location.LANE_TOP))
            seen.append(match.turn_number)

        assert seen == sorted(seen)
        assert seen[-1] == 2


class TestMoveUnit:
    def test_move_from_hand(self, started):
        """A unit leaving the hand is replaced by one draw."""
        match, first, second = started
        unit = match.hand_of(second)[0]

        result = match.apply_move(second, MoveUnit(unit.uid, Location.LANE_TOP))

        assert unit.location == Location.LANE_TOP
        assert len(match.hand_of(second)) == 5
        assert match.moves_remaining == 1
        assert len(result.self_update.hand_draws) == 1
        assert result.self_update.moved[0].uid == unit.uid
        assert result.opponent_update.hand_draws == []
        assert result.opponent_update.moved == []
        assert result.opponent_update.enemy_spawns[0]["uid"] == unit.uid
        assert result.over is None

    def test_empty_deck_means_no_replacement(self):
        rules = MatchRules(min_deck_size=5)
        deck = [(GAREN, 0)] * 5
        match, first, second = start_match(rules=rules, deck_a=deck, deck_b=deck)
        unit = match.hand_of(second)[0]

        result = match.apply_move(second, MoveUnit(unit.uid, Location.LANE_MID))

        assert len(match.hand_of(second)) == 4
        assert result.self_update.hand_draws == []

    def test_lane_to_lane(self, board):
        match, first, second = board
        unit = place(match, second, GAREN, Location.LANE_TOP)

        result = match.apply_move(second, MoveUnit(unit.uid, Location.LANE_MID))

        assert unit.location == Location.LANE_MID
        assert result.opponent_update.moved[0].uid == unit.uid
        match.timer.restart.assert_called_once()

    def test_moving_opponent_unit(self, board):
        match, first, second = board
        unit = place(match, first)

        reject(match, second, MoveUnit(unit.uid, Location.LANE_MID), ErrorCode.NOT_OWNER)

    def test_unknown_unit(self, board):
        match, first, second = board

        reject(match, second, MoveUnit("nope", Location.LANE_MID), ErrorCode.INVALID_SOURCE)

    def test_same_location(self, board):
        match, first, second = board
        unit = place(match, second, location=Location.LANE_MID)

        reject(match, second, MoveUnit(unit.uid, Location.LANE_MID), ErrorCode.SAME_LOCATION)

    def test_back_to_hand(self, board):
        match, first, second = board
        unit = place(match, second)

        reject(match, second, MoveUnit(unit.uid, Location.HAND), ErrorCode.MOVE_TO_HAND)

    def test_jungle(self, board):
        match, first, second = board
        unit = place(match, second, location=Location.LANE_MID)

        reject(match, second, MoveUnit(unit.uid, Location.JUNGLE_TOP), ErrorCode.JUNGLE)

    def test_top_to_bot_not_adjacent(self, board):
        match, first, second = board
        unit = place(match, second, location=Location.LANE_TOP)

        reject(match, second, MoveUnit(unit.uid, Location.LANE_BOT), ErrorCode.NOT_ADJACENT)

    def test_invalid_location_value(self, board):
        match, first, second = board
        unit = place(match, second)

        reject(match, second, MoveUnit(unit.uid, "river"), ErrorCode.INVALID_MOVE)

    def test_field_cap(self, started):
        match, first, second = started
        for _ in range(5):
            place(match, second, location=Location.LANE_BOT)
        unit = match.hand_of(second)[0]

        reject(match, second, MoveUnit(unit.uid, Location.LANE_TOP), ErrorCode.FIELD_FULL)
        assert unit.in_hand
        assert len(match.hand_of(second)) == 5

    def test_stunned_unit_cannot_move(self, board):
        match, first, second = board
        unit = place(match, second)
        unit.statuses.apply(StatusKind.STUN, match.turn_number)

        reject(match, second, MoveUnit(unit.uid, Location.LANE_MID), ErrorCode.STUNNED)

    def test_one_action_per_turn(self, board):
        match, first, second = board
        unit = place(match, second, location=Location.LANE_TOP)
        match.apply_move(second, MoveUnit(unit.uid, Location.LANE_MID))

        reject(match, second, MoveUnit(unit.uid, Location.LANE_BOT), ErrorCode.ALREADY_ACTED)


class TestAttackUnit:
    def test_kill_sends_unit_to_fountain(self, board):
        """A lethal attack removes the target and queues it with a death timer of 5."""
        match, first, second = board
        attacker = place(match, second, CORKI)
        target = place(match, first, ANNIE)
        target.health = 5

        result = match.apply_move(second, AttackUnit(attacker.uid, target.uid))

        assert target.uid not in match.units
        fountain = match.get_participant(first).fountain
        assert len(fountain) == 1
        assert fountain.entries[0].death_timer == 5
        assert fountain.entries[0].archetype_id == ANNIE
        assert result.self_update.killed[0].uid == target.uid
        assert result.self_update.killed[0].killer_uid == attacker.uid
        assert result.opponent_update.killed[0].owner_id == first

    def test_dead_unit_returns_after_five_moves(self, board):
        match, first, second = board
        attacker = place(match, second, CORKI, Location.LANE_TOP)
        runner = place(match, second, GAREN, Location.LANE_MID)
        victim = place(match, first, ANNIE, Location.LANE_TOP)
        victim.health = 1
        defenders = [place(match, first, GAREN, Location.LANE_BOT) for _ in range(3)]
        fountain = match.get_participant(first).fountain
        deck = match.get_participant(first).deck

        match.apply_move(second, AttackUnit(attacker.uid, victim.uid))
        match.apply_move(second, MoveUnit(runner.uid, Location.LANE_BOT))
        for unit in defenders:
            match.apply_move(first, MoveUnit(unit.uid, Location.LANE_MID))
        assert fountain.entries[0].death_timer == 1

        match.apply_move(second, MoveUnit(runner.uid, Location.LANE_MID))

        assert len(fountain) == 0
        assert DeckEntry(ANNIE, 0) in deck.entries

    def test_surviving_target(self, board):
        match, first, second = board
        attacker = place(match, second, CORKI)
        target = place(match, first, GAREN)

        result = match.apply_move(second, AttackUnit(attacker.uid, target.uid))

        assert target.health == 28
        assert result.opponent_update.damaged[0].health == 28
        assert attacker.has_acted(match.turn_number)

    def test_missing_units(self, board):
        match, first, second = board
        attacker = place(match, second)

        reject(match, second, AttackUnit(attacker.uid, "nope"), ErrorCode.INVALID_TARGET)

    def test_attacker_not_owned(self, board):
        match, first, second = board
        a = place(match, first)
        b = place(match, first)

        reject(match, second, AttackUnit(a.uid, b.uid), ErrorCode.NOT_OWNER)

    def test_own_target(self, board):
        match, first, second = board
        a = place(match, second)
        b = place(match, second)

        reject(match, second, AttackUnit(a.uid, b.uid), ErrorCode.OWN_TARGET)

    def test_from_hand(self, started):
        match, first, second = started
        source = match.hand_of(second)[0]
        target = place(match, first)

        reject(match, second, AttackUnit(source.uid, target.uid), ErrorCode.IN_HAND)

    def test_different_lane(self, board):
        match, first, second = board
        a = place(match, second, location=Location.LANE_TOP)
        b = place(match, first, location=Location.LANE_MID)

        reject(match, second, AttackUnit(a.uid, b.uid), ErrorCode.DIFFERENT_LANE)

    def test_invulnerable_target_untouched(self, board):
        match, first, second = board
        a = place(match, second)
        b = place(match, first)
        b.statuses.apply(StatusKind.INVULNERABLE, match.turn_number)

        reject(match, second, AttackUnit(a.uid, b.uid), ErrorCode.TARGET_INVULNERABLE)
        assert b.health == b.max_health
        assert not a.has_acted(match.turn_number)
        match.timer.restart.assert_not_called()

    def test_stasis_target_untouched(self, board):
        match, first, second = board
        a = place(match, second)
        b = place(match, first)
        b.statuses.apply(StatusKind.STASIS, match.turn_number)

        reject(match, second, AttackUnit(a.uid, b.uid), ErrorCode.TARGET_UNTARGETABLE)
        assert b.health == b.max_health

    def test_stunned_attacker(self, board):
        match, first, second = board
        a = place(match, second)
        b = place(match, first)
        a.statuses.apply(StatusKind.STUN, match.turn_number)

        reject(match, second, AttackUnit(a.uid, b.uid), ErrorCode.STUNNED)

    def test_attack_twice(self, board):
        match, first, second = board
        a = place(match, second)
        b = place(match, first)
        match.apply_move(second, AttackUnit(a.uid, b.uid))

        reject(match, second, AttackUnit(a.uid, b.uid), ErrorCode.ALREADY_ACTED)

    def test_health_stays_in_bounds(self, board):
        match, first, second = board
        a = place(match, second, CORKI)
        b = place(match, first, ANNIE)
        b.health = 3

        result = match.apply_move(second, AttackUnit(a.uid, b.uid))

        assert result.self_update.damaged[0].health == 0


class TestAttackNexus:
    def test_blocked_by_enemy_in_lane(self, board):
        match, first, second = board
        match.turn_number = 4
        attacker = place(match, first, location=Location.LANE_TOP)
        place(match, second, location=Location.LANE_TOP)

        reject(match, first, AttackNexus(attacker.uid), ErrorCode.LANE_OCCUPIED)
        assert match.get_participant(second).nexus_health == 5

    def test_nexus_invulnerable_early(self, board):
        match, first, second = board
        attacker = place(match, second)

        reject(match, second, AttackNexus(attacker.uid), ErrorCode.NEXUS_INVULNERABLE)
        assert match.get_participant(first).nexus_health == 5

    def test_fixed_damage(self, board):
        match, first, second = board
        match.turn_number = 4
        attacker = place(match, first, CORKI)

        result = match.apply_move(first, AttackNexus(attacker.uid))

        assert match.get_participant(second).nexus_health == 4
        assert result.opponent_update.nexus_health == {second: 4}

    def test_attacker_damage_rule(self):
        match, first, second = start_match(rules=MatchRules(nexus_damage_from_attacker=True))
        clear_hands(match)
        match.turn_number = 4
        attacker = place(match, first, ANNIE)
        match.get_participant(second).nexus_health = 10

        match.apply_move(first, AttackNexus(attacker.uid))

        assert match.get_participant(second).nexus_health == 3

    def test_destroying_nexus_ends_match(self, board):
        match, first, second = board
        match.turn_number = 4
        attacker = place(match, first)
        match.get_participant(second).nexus_health = 1

        result = match.apply_move(first, AttackNexus(attacker.uid))

        assert result.over is not None
        assert result.over.victor_id == first
        assert match.state == MatchState.OVER
        match.timer.cancel.assert_called_once()
        match.timer.restart.assert_not_called()

    def test_from_hand(self, started):
        match, first, second = started
        match.turn_number = 4
        unit = match.hand_of(first)[0]

        reject(match, first, AttackNexus(unit.uid), ErrorCode.IN_HAND)


class TestCastAbilityValidation:
    def test_cast_from_hand(self, started):
        match, first, second = started
        unit = match.hand_of(second)[0]

        reject(match, second, CastAbility(unit.uid), ErrorCode.IN_HAND)

    def test_cast_while_stunned(self, board):
        match, first, second = board
        unit = place(match, second)
        unit.statuses.apply(StatusKind.STUN, match.turn_number)

        reject(match, second, CastAbility(unit.uid), ErrorCode.STUNNED)

    def test_cast_after_attacking(self, board):
        match, first, second = board
        a = place(match, second, CORKI)
        b = place(match, first)
        match.apply_move(second, AttackUnit(a.uid, b.uid))

        reject(match, second, CastAbility(a.uid, b.uid), ErrorCode.ALREADY_ACTED)
