"""Tests for the ability system and the champion ability table."""

from unittest.mock import MagicMock

import pytest

from riftclash.combat.ability import AbilityTargetType
from riftclash.combat.champion_abilities import (
    CHAMPION_ABILITIES,
    DEFAULT_ABILITY,
    get_ability_for_champion,
)
from riftclash.combat.location import Location
from riftclash.combat.status_effects import StatusKind
from riftclash.core.commands import AttackUnit, CastAbility
from riftclash.core.constants import AOE_RESOLUTION_HELPER, MatchRules
from riftclash.core.errors import ErrorCode, RuleViolation
from riftclash.data.loaders import load_archetypes

from conftest import CORKI, GAREN, clear_hands, place, start_match

FIDDLESTICKS = 9
ZILEAN = 26
KARMA = 43
ZIGGS = 115
BARD = 432


def make_board(rules=None):
    match, first, second = start_match(rules=rules)
    clear_hands(match)
    match.timer = MagicMock()
    return match, first, second


@pytest.fixture
def board():
    return make_board()


class TestAbilityTable:
    def test_every_entry_is_a_catalog_champion(self):
        keys = {a.key for a in load_archetypes()}
        assert set(CHAMPION_ABILITIES) <= keys

    def test_only_two_champions_use_default(self):
        defaults = [
            a.key for a in load_archetypes()
            if get_ability_for_champion(a.key) is DEFAULT_ABILITY
        ]
        assert sorted(defaults) == ["fiddlesticks", "reksai"]

    def test_ability_ids_unique(self):
        ids = [a.ability_id for a in CHAMPION_ABILITIES.values()]
        assert len(ids) == len(set(ids))

    def test_lookup_normalizes_key(self):
        assert get_ability_for_champion("Miss Fortune").name == "Bullet Time"

    def test_default_is_stun(self):
        assert DEFAULT_ABILITY.target_type == AbilityTargetType.SINGLE_ENEMY_SAME_LANE


class TestDefaultStun:
    """Cast pipeline through the default Stun."""

    def test_cast_stuns_and_sets_cooldown(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS)
        target = place(match, first, GAREN)

        result = match.apply_move(second, CastAbility(caster.uid, target.uid))

        assert target.statuses.is_stunned(2)
        assert not target.statuses.is_stunned(3)
        assert caster.ready_turn == 6
        assert caster.has_acted(1)
        assert result.opponent_update.cooldown_changes[0].ready_turn == 6
        assert result.opponent_update.status_changes[0].kind == "stun"

    def test_stunned_target_cannot_attack(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS)
        target = place(match, first, GAREN)
        match.apply_move(second, CastAbility(caster.uid, target.uid))
        match.force_advance()

        with pytest.raises(RuleViolation) as exc:
            match.apply_move(first, AttackUnit(target.uid, caster.uid))
        assert exc.value.code == ErrorCode.STUNNED

    def test_on_cooldown(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS)
        target = place(match, first, GAREN)
        caster.ready_turn = 1

        with pytest.raises(RuleViolation) as exc:
            match.apply_move(second, CastAbility(caster.uid, target.uid))
        assert exc.value.code == ErrorCode.ON_COOLDOWN

    def test_ready_once_turn_passes(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS)
        target = place(match, first, GAREN)
        caster.ready_turn = 0

        match.apply_move(second, CastAbility(caster.uid, target.uid))

        assert target.statuses.is_stunned(1)

    def test_missing_target(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS)

        with pytest.raises(RuleViolation) as exc:
            match.apply_move(second, CastAbility(caster.uid))
        assert exc.value.code == ErrorCode.INVALID_TARGET
        assert not caster.has_acted(1)

    def test_ally_target(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS)
        ally = place(match, second, GAREN)

        with pytest.raises(RuleViolation) as exc:
            match.apply_move(second, CastAbility(caster.uid, ally.uid))
        assert exc.value.code == ErrorCode.INVALID_TARGET

    def test_target_in_other_lane(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS, Location.LANE_TOP)
        target = place(match, first, GAREN, Location.LANE_BOT)

        with pytest.raises(RuleViolation) as exc:
            match.apply_move(second, CastAbility(caster.uid, target.uid))
        assert exc.value.code == ErrorCode.DIFFERENT_LANE

    def test_target_in_stasis(self, board):
        match, first, second = board
        caster = place(match, second, FIDDLESTICKS)
        target = place(match, first, GAREN)
        target.statuses.apply(StatusKind.STASIS, 1)

        with pytest.raises(RuleViolation) as exc:
            match.apply_move(second, CastAbility(caster.uid, target.uid))
        assert exc.value.code == ErrorCode.TARGET_UNTARGETABLE
        assert caster.ready_turn == 0


class TestAreaAnyLaneResolution:
    """Enemy any-lane area abilities under both resolution rules."""

    def setup_lane(self, rules=None):
        match, first, second = make_board(rules)
        caster = place(match, second, CORKI, Location.LANE_TOP)
        enemies = [place(match, first, GAREN, Location.LANE_MID) for _ in range(2)]
        ally = place(match, second, GAREN, Location.LANE_MID)
        bystander = place(match, first, GAREN, Location.LANE_BOT)
        return match, second, caster, enemies, ally, bystander

    def test_declared_rule_hits_enemies(self):
        match, second, caster, enemies, ally, bystander = self.setup_lane()

        match.apply_move(second, CastAbility(caster.uid, enemies[0].uid))

        # Corki deals 8 * 0.5
        assert [e.health for e in enemies] == [32, 32]
        assert ally.health == ally.max_health
        assert bystander.health == bystander.max_health

    def test_helper_rule_hits_casters_side(self):
        rules = MatchRules(aoe_any_lane_resolution=AOE_RESOLUTION_HELPER)
        match, second, caster, enemies, ally, bystander = self.setup_lane(rules)

        match.apply_move(second, CastAbility(caster.uid, enemies[0].uid))

        assert [e.health for e in enemies] == [36, 36]
        assert ally.health == 32

    def test_ability_kill_goes_to_fountain(self):
        match, second, caster, enemies, ally, bystander = self.setup_lane()
        enemies[1].health = 3

        result = match.apply_move(second, CastAbility(caster.uid, enemies[0].uid))

        assert enemies[1].uid not in match.units
        assert result.self_update.killed[0].killer_uid == caster.uid
        assert len(match.get_participant(enemies[1].owner_id).fountain) == 1


class TestBespokeAbilities:
    def test_nexus_strike_respects_grace_period(self, board):
        match, first, second = board
        caster = place(match, second, ZIGGS)

        match.apply_move(second, CastAbility(caster.uid))

        assert match.get_participant(first).nexus_health == 5
        assert match.moves_remaining == 1
        assert caster.ready_turn == 9

    def test_nexus_strike_after_grace_period(self, board):
        match, first, second = board
        match.turn_number = 4
        caster = place(match, first, ZIGGS)

        result = match.apply_move(first, CastAbility(caster.uid))

        assert match.get_participant(second).nexus_health == 4
        assert result.opponent_update.nexus_health == {second: 4}

    def test_time_warp_lets_ally_act_again(self, board):
        match, first, second = board
        match.moves_remaining = 3
        attacker = place(match, second, GAREN)
        zilean = place(match, second, ZILEAN, Location.LANE_BOT)
        target = place(match, first, GAREN)
        match.apply_move(second, AttackUnit(attacker.uid, target.uid))

        result = match.apply_move(second, CastAbility(zilean.uid, attacker.uid))
        match.apply_move(second, AttackUnit(attacker.uid, target.uid))

        assert result.self_update.action_resets == [attacker.uid]
        assert target.health == 36 - 12

    def test_mantra_refreshes_cooldown(self, board):
        match, first, second = board
        karma = place(match, second, KARMA)
        ally = place(match, second, GAREN, Location.LANE_BOT)
        ally.ready_turn = 10

        match.apply_move(second, CastAbility(karma.uid, ally.uid))

        assert ally.ready_turn == 0
        assert karma.ready_turn == 6

    def test_mantra_on_self_keeps_cooldown(self, board):
        match, first, second = board
        karma = place(match, second, KARMA)

        match.apply_move(second, CastAbility(karma.uid, karma.uid))

        assert karma.ready_turn == 6
        assert karma.has_acted(1)

    def test_tempered_fate_puts_lane_in_stasis(self, board):
        match, first, second = board
        bard = place(match, second, BARD, Location.LANE_TOP)
        enemy = place(match, first, GAREN, Location.LANE_MID)
        ally = place(match, second, GAREN, Location.LANE_MID)
        match.moves_remaining = 3

        match.apply_move(second, CastAbility(bard.uid, enemy.uid))

        assert enemy.statuses.in_stasis(2)
        assert ally.statuses.in_stasis(2)
        assert not bard.statuses.in_stasis(1)
        assert match.query.enemies_in_lane(ally) == []
