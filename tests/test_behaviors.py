"""Tests for per-archetype combat behaviours."""

import pytest

from riftclash.combat.behaviors import BEHAVIORS, build_hooks
from riftclash.combat.location import Location
from riftclash.combat.resolution import CombatContext
from riftclash.combat.status_effects import StatusKind
from riftclash.core.commands import AttackUnit
from riftclash.core.updates import MatchUpdate
from riftclash.data.loaders import load_archetypes

from conftest import ANNIE, CORKI, GAREN, clear_hands, place, start_match

MASTER_YI = 11
SION = 14
TRYNDAMERE = 23
RAMMUS = 33
NASUS = 75
ZAC = 154
BRAUM = 201
GALIO = 3
WARWICK = 19


@pytest.fixture
def arena():
    match, first, second = start_match()
    clear_hands(match)
    ctx = CombatContext(match.query, MatchUpdate())
    return match, first, second, ctx


@pytest.fixture
def board_match():
    match, first, second = start_match()
    clear_hands(match)
    return match, first, second


class TestRegistry:
    def test_keys_are_catalog_champions(self):
        keys = {a.key for a in load_archetypes()}
        assert set(BEHAVIORS) <= keys

    def test_unlisted_champion_has_no_overrides(self):
        hooks = build_hooks("garen")
        assert hooks.attack_enemy is None
        assert hooks.take_damage is None
        assert hooks.set_location is None

    def test_state_is_per_unit(self, arena):
        """Two Annies count their attacks separately."""
        match, first, second, ctx = arena
        annie_a = place(match, second, ANNIE)
        annie_b = place(match, second, ANNIE)
        target = place(match, first, GAREN)
        target.max_health = target.health = 500

        for _ in range(3):
            annie_a.attack_enemy(ctx, target)
        annie_b.attack_enemy(ctx, target)

        assert not target.statuses.is_stunned(1)


class TestAttackBehaviours:
    def test_annie_stuns_every_fourth_attack(self, arena):
        match, first, second, ctx = arena
        annie = place(match, second, ANNIE)
        target = place(match, first, GAREN)
        target.max_health = target.health = 500

        for _ in range(4):
            annie.attack_enemy(ctx, target)

        assert target.statuses.is_stunned(2)

    def test_kill_refunds_action(self, board_match):
        match, first, second = board_match
        yi = place(match, second, MASTER_YI)
        first_victim = place(match, first, ANNIE)
        second_victim = place(match, first, ANNIE)
        first_victim.health = second_victim.health = 1

        match.apply_move(second, AttackUnit(yi.uid, first_victim.uid))
        match.apply_move(second, AttackUnit(yi.uid, second_victim.uid))

        assert first_victim.uid not in match.units
        assert second_victim.uid not in match.units

    def test_lifesteal(self, arena):
        match, first, second, ctx = arena
        warwick = place(match, second, WARWICK)
        warwick.health = 20
        target = place(match, first, GAREN)

        warwick.attack_enemy(ctx, target)

        # 6 damage dealt, 30% returned
        assert warwick.health == 22

    def test_stack_on_kill(self, arena):
        match, first, second, ctx = arena
        nasus = place(match, second, NASUS)
        target = place(match, first, ANNIE)
        target.health = 1

        assert nasus.attack_enemy(ctx, target)
        assert nasus.damage == 9
        assert ctx.update.damage_changes[0].damage == 9


class TestTakeDamageBehaviours:
    def test_rammus_thorns(self, arena):
        match, first, second, ctx = arena
        attacker = place(match, second, CORKI)
        rammus = place(match, first, RAMMUS)

        attacker.attack_enemy(ctx, rammus)

        assert rammus.health == 36 - 8
        assert attacker.health == 30 - 2

    def test_tryndamere_survives_first_lethal_hit(self, arena):
        match, first, second, ctx = arena
        tryndamere = place(match, first, TRYNDAMERE)

        assert not tryndamere.take_damage(ctx, 100, None)
        assert tryndamere.health == 1
        assert tryndamere.statuses.is_invulnerable(1)

        tryndamere.statuses.remove(StatusKind.INVULNERABLE)
        assert tryndamere.take_damage(ctx, 100, None)

    def test_zac_revives_at_quarter_health(self, arena):
        match, first, second, ctx = arena
        zac = place(match, first, ZAC)

        assert not zac.take_damage(ctx, 100, None)
        assert zac.health == 9
        assert zac.take_damage(ctx, 100, None)

    def test_braum_blocks_every_third_hit(self, arena):
        match, first, second, ctx = arena
        braum = place(match, first, BRAUM)

        for _ in range(3):
            braum.take_damage(ctx, 4, None)

        assert braum.health == braum.max_health - 8

    def test_sion_strikes_back_on_death(self, arena):
        match, first, second, ctx = arena
        attacker = place(match, second, CORKI)
        sion = place(match, first, SION)
        sion.health = 1

        attacker.attack_enemy(ctx, sion)

        assert sion.health == 0
        assert attacker.health == 30 - sion.damage


class TestMovementBehaviours:
    def test_galio_shield_on_arrival(self, arena):
        match, first, second, ctx = arena
        galio = place(match, second, GALIO, Location.HAND)

        galio.set_location(ctx, Location.LANE_TOP)

        assert galio.statuses.value(StatusKind.SHIELD, 2) == 10

    def test_galio_no_shield_between_lanes(self, arena):
        match, first, second, ctx = arena
        galio = place(match, second, GALIO, Location.LANE_TOP)

        galio.set_location(ctx, Location.LANE_MID)

        assert not galio.statuses.is_active(StatusKind.SHIELD, 1)
