"""Champion behaviours for Rift Clash combat.

Each entry in BEHAVIORS is a factory returning the hook overrides for one
archetype. Factories run once per unit, so counters and remembered target
ids kept in the closures belong to that unit alone. Hooks left as None fall
back to the defaults in resolution.py.

Hook signatures:
    attack_enemy(ctx, source, target) -> bool   (target died)
    take_damage(ctx, unit, raw, attacker) -> bool   (unit died)
    set_location(ctx, unit, location) -> None
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, TYPE_CHECKING

from riftclash.core.stat_calculator import round_half_up

from .location import Location
from .resolution import (
    apply_damage,
    default_attack_enemy,
    default_set_location,
    default_take_damage,
    heal,
    reset_action,
)
from .status_effects import StatusKind

if TYPE_CHECKING:
    from .resolution import CombatContext
    from .unit import Unit


AttackHook = Callable[["CombatContext", "Unit", "Unit"], bool]
TakeDamageHook = Callable[["CombatContext", "Unit", int, Optional["Unit"]], bool]
SetLocationHook = Callable[["CombatContext", "Unit", Location], None]


@dataclass
class BehaviorHooks:
    """Optional per-archetype overrides of the combat hooks."""

    attack_enemy: Optional[AttackHook] = None
    take_damage: Optional[TakeDamageHook] = None
    set_location: Optional[SetLocationHook] = None


def _hit(ctx: "CombatContext", source: "Unit", target: "Unit", raw: int) -> bool:
    return target.take_damage(ctx, raw, source)


def _dealt(target: "Unit", before: int) -> int:
    return max(0, before - target.health)


def _can_retaliate(ctx: "CombatContext", attacker: Optional["Unit"]) -> bool:
    return (
        attacker is not None
        and attacker.is_alive
        and not attacker.statuses.is_invulnerable(ctx.turn)
    )


# =============================================================================
# ATTACK OVERRIDES
# =============================================================================


def _annie() -> BehaviorHooks:
    """Pyromania: every 4th attack stuns the target through next turn."""
    attacks = 0

    def attack_enemy(ctx, source, target):
        nonlocal attacks
        attacks += 1
        died = default_attack_enemy(ctx, source, target)
        if attacks % 4 == 0 and not died:
            ctx.apply_status(target, StatusKind.STUN, ctx.turn + 1)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


def _olaf() -> BehaviorHooks:
    """Berserker Rage: damage grows with Olaf's missing health."""

    def attack_enemy(ctx, source, target):
        missing = 1 - source.health / source.max_health
        return _hit(ctx, source, target, round_half_up(source.damage * (1 + missing)))

    return BehaviorHooks(attack_enemy=attack_enemy)


def _kill_reset() -> BehaviorHooks:
    """Kills refund the unit's action for the turn."""

    def attack_enemy(ctx, source, target):
        died = default_attack_enemy(ctx, source, target)
        if died:
            reset_action(ctx, source)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


def _darius() -> BehaviorHooks:
    """Hemorrhage: consecutive attacks on one target stack bleed damage."""
    marked_uid: Optional[str] = None
    stacks = 0

    def attack_enemy(ctx, source, target):
        nonlocal marked_uid, stacks
        if target.uid != marked_uid:
            marked_uid, stacks = target.uid, 0
        stacks = min(stacks + 1, 5)
        died = _hit(ctx, source, target, source.damage + 2 * (stacks - 1))
        if not died:
            ctx.apply_status(target, StatusKind.MARK, ctx.turn + 2, stacks)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


def _vayne() -> BehaviorHooks:
    """Silver Bolts: every 3rd consecutive hit on a target adds 10% of its max health."""
    last_uid: Optional[str] = None
    hits = 0

    def attack_enemy(ctx, source, target):
        nonlocal last_uid, hits
        hits = hits + 1 if target.uid == last_uid else 1
        last_uid = target.uid
        raw = source.damage
        if hits % 3 == 0:
            raw += round_half_up(target.max_health * 0.1)
        return _hit(ctx, source, target, raw)

    return BehaviorHooks(attack_enemy=attack_enemy)


def _jax() -> BehaviorHooks:
    """Grandmaster's Might: every 3rd attack deals 50% more."""
    attacks = 0

    def attack_enemy(ctx, source, target):
        nonlocal attacks
        attacks += 1
        raw = source.damage
        if attacks % 3 == 0:
            raw = round_half_up(raw * 1.5)
        return _hit(ctx, source, target, raw)

    return BehaviorHooks(attack_enemy=attack_enemy)


def _lifesteal(ratio: float) -> Callable[[], BehaviorHooks]:
    def factory() -> BehaviorHooks:
        def attack_enemy(ctx, source, target):
            before = target.health
            died = default_attack_enemy(ctx, source, target)
            heal(ctx, source, round_half_up(_dealt(target, before) * ratio))
            return died

        return BehaviorHooks(attack_enemy=attack_enemy)

    return factory


def _jinx() -> BehaviorHooks:
    """Get Excited: kills grant a damage buff through next turn."""

    def attack_enemy(ctx, source, target):
        died = default_attack_enemy(ctx, source, target)
        if died:
            ctx.apply_status(source, StatusKind.DAMAGE_BUFF, ctx.turn + 1, 0.5)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


def _stack_on_kill(bonus: int) -> Callable[[], BehaviorHooks]:
    """Kills permanently raise damage."""

    def factory() -> BehaviorHooks:
        def attack_enemy(ctx, source, target):
            died = default_attack_enemy(ctx, source, target)
            if died:
                ctx.change_damage(source, bonus)
            return died

        return BehaviorHooks(attack_enemy=attack_enemy)

    return factory


def _talon() -> BehaviorHooks:
    """Blade's End: double damage against targets at or below 30% health."""

    def attack_enemy(ctx, source, target):
        raw = source.damage
        if target.health <= target.max_health * 0.3:
            raw *= 2
        return _hit(ctx, source, target, raw)

    return BehaviorHooks(attack_enemy=attack_enemy)


def _cassiopeia() -> BehaviorHooks:
    """Twin Fang: 50% more damage against stunned targets."""

    def attack_enemy(ctx, source, target):
        raw = source.damage
        if target.statuses.is_stunned(ctx.turn):
            raw = round_half_up(raw * 1.5)
        return _hit(ctx, source, target, raw)

    return BehaviorHooks(attack_enemy=attack_enemy)


def _kogmaw() -> BehaviorHooks:
    """Bio-Arcane Barrage: attacks add 5% of the target's max health."""

    def attack_enemy(ctx, source, target):
        raw = source.damage + round_half_up(target.max_health * 0.05)
        return _hit(ctx, source, target, raw)

    return BehaviorHooks(attack_enemy=attack_enemy)


def _zed() -> BehaviorHooks:
    """Contempt for the Weak: +2 damage against targets below half health."""

    def attack_enemy(ctx, source, target):
        raw = source.damage
        if target.health * 2 < target.max_health:
            raw += 2
        return _hit(ctx, source, target, raw)

    return BehaviorHooks(attack_enemy=attack_enemy)


def _udyr() -> BehaviorHooks:
    """Every 2nd attack grants a 5 point shield through next turn."""
    attacks = 0

    def attack_enemy(ctx, source, target):
        nonlocal attacks
        attacks += 1
        died = default_attack_enemy(ctx, source, target)
        if attacks % 2 == 0:
            ctx.apply_status(source, StatusKind.SHIELD, ctx.turn + 1, 5)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


def _riven() -> BehaviorHooks:
    """Valor: each attack grants a 3 point shield through next turn."""

    def attack_enemy(ctx, source, target):
        died = default_attack_enemy(ctx, source, target)
        ctx.apply_status(source, StatusKind.SHIELD, ctx.turn + 1, 3)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


def _fiora() -> BehaviorHooks:
    """Duelist's Dance: the first attack on a new target deals 25% more."""
    last_uid: Optional[str] = None

    def attack_enemy(ctx, source, target):
        nonlocal last_uid
        raw = source.damage
        if target.uid != last_uid:
            raw = round_half_up(raw * 1.25)
            last_uid = target.uid
        return _hit(ctx, source, target, raw)

    return BehaviorHooks(attack_enemy=attack_enemy)


def _kayle() -> BehaviorHooks:
    """Divine Ascent: each attack permanently adds 1 damage, up to 5."""
    gained = 0

    def attack_enemy(ctx, source, target):
        nonlocal gained
        died = default_attack_enemy(ctx, source, target)
        if gained < 5:
            gained += 1
            ctx.change_damage(source, 1)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


def _twitch() -> BehaviorHooks:
    """Deadly Venom: marks targets; marked targets take 2 extra damage."""

    def attack_enemy(ctx, source, target):
        raw = source.damage
        if target.statuses.is_active(StatusKind.MARK, ctx.turn):
            raw += 2
        died = _hit(ctx, source, target, raw)
        if not died:
            ctx.apply_status(target, StatusKind.MARK, ctx.turn + 1)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy)


# =============================================================================
# TAKE DAMAGE OVERRIDES
# =============================================================================


def _tryndamere() -> BehaviorHooks:
    """Undying Rage: the first lethal hit leaves 1 health and invulnerability this turn."""
    used = False

    def take_damage(ctx, unit, raw, attacker):
        nonlocal used
        died = default_take_damage(ctx, unit, raw, attacker)
        if died and not used:
            used = True
            unit.health = 1
            ctx.record_heal(unit, 1)
            ctx.apply_status(unit, StatusKind.INVULNERABLE, ctx.turn)
            return False
        return died

    return BehaviorHooks(take_damage=take_damage)


def _zac() -> BehaviorHooks:
    """Cell Division: the first lethal hit leaves Zac at a quarter health."""
    used = False

    def take_damage(ctx, unit, raw, attacker):
        nonlocal used
        died = default_take_damage(ctx, unit, raw, attacker)
        if died and not used:
            used = True
            heal_to = max(1, unit.max_health // 4)
            unit.health = heal_to
            ctx.record_heal(unit, heal_to)
            return False
        return died

    return BehaviorHooks(take_damage=take_damage)


def _rammus() -> BehaviorHooks:
    """Defensive Ball Curl: attackers take back 25% of the raw hit."""

    def take_damage(ctx, unit, raw, attacker):
        died = default_take_damage(ctx, unit, raw, attacker)
        thorns = round_half_up(raw * 0.25)
        if thorns > 0 and _can_retaliate(ctx, attacker):
            apply_damage(ctx, attacker, thorns, unit)
        return died

    return BehaviorHooks(take_damage=take_damage)


def _flat_reduction(amount: int) -> Callable[[], BehaviorHooks]:
    def factory() -> BehaviorHooks:
        def take_damage(ctx, unit, raw, attacker):
            return default_take_damage(ctx, unit, max(0, raw - amount), attacker)

        return BehaviorHooks(take_damage=take_damage)

    return factory


def _malphite() -> BehaviorHooks:
    """Granite Shield: a shield of 20% max health before the first hit."""
    used = False

    def take_damage(ctx, unit, raw, attacker):
        nonlocal used
        if not used:
            used = True
            shield = round_half_up(unit.max_health * 0.2)
            ctx.apply_status(unit, StatusKind.SHIELD, ctx.turn, shield)
        return default_take_damage(ctx, unit, raw, attacker)

    return BehaviorHooks(take_damage=take_damage)


def _braum() -> BehaviorHooks:
    """Unbreakable: every 3rd hit taken is blocked."""
    hits = 0

    def take_damage(ctx, unit, raw, attacker):
        nonlocal hits
        hits += 1
        if hits % 3 == 0:
            ctx.record_damage(unit, 0, attacker)
            return False
        return default_take_damage(ctx, unit, raw, attacker)

    return BehaviorHooks(take_damage=take_damage)


def _leona() -> BehaviorHooks:
    """Eclipse: incoming hits are reduced by 20%."""

    def take_damage(ctx, unit, raw, attacker):
        return default_take_damage(ctx, unit, round_half_up(raw * 0.8), attacker)

    return BehaviorHooks(take_damage=take_damage)


def _sion() -> BehaviorHooks:
    """Glory in Death: on death, strike back at the killer."""

    def take_damage(ctx, unit, raw, attacker):
        died = default_take_damage(ctx, unit, raw, attacker)
        if died and _can_retaliate(ctx, attacker):
            apply_damage(ctx, attacker, unit.damage, unit)
        return died

    return BehaviorHooks(take_damage=take_damage)


def _poppy() -> BehaviorHooks:
    """Steadfast Presence: no single hit exceeds 30% of max health."""

    def take_damage(ctx, unit, raw, attacker):
        cap = max(1, round_half_up(unit.max_health * 0.3))
        return default_take_damage(ctx, unit, min(raw, cap), attacker)

    return BehaviorHooks(take_damage=take_damage)


# =============================================================================
# MOVEMENT OVERRIDES
# =============================================================================


def _galio() -> BehaviorHooks:
    """Hero's Entrance: arriving from hand grants a 10 point shield through next turn."""

    def set_location(ctx, unit, location):
        from_hand = unit.in_hand
        default_set_location(ctx, unit, location)
        if from_hand:
            ctx.apply_status(unit, StatusKind.SHIELD, ctx.turn + 1, 10)

    return BehaviorHooks(set_location=set_location)


def _hecarim() -> BehaviorHooks:
    """Onslaught: lane changes grant a damage buff this turn."""

    def set_location(ctx, unit, location):
        was_lane = unit.location.is_lane
        default_set_location(ctx, unit, location)
        if was_lane:
            ctx.apply_status(unit, StatusKind.DAMAGE_BUFF, ctx.turn, 0.5)

    return BehaviorHooks(set_location=set_location)


def _rengar() -> BehaviorHooks:
    """Unseen Predator: moving primes a doubled attack, spent on the next hit."""

    def set_location(ctx, unit, location):
        default_set_location(ctx, unit, location)
        ctx.apply_status(unit, StatusKind.DAMAGE_BUFF, ctx.turn + 1, 1.0)

    def attack_enemy(ctx, source, target):
        died = default_attack_enemy(ctx, source, target)
        ctx.remove_status(source, StatusKind.DAMAGE_BUFF)
        return died

    return BehaviorHooks(attack_enemy=attack_enemy, set_location=set_location)


def _shaco() -> BehaviorHooks:
    """Deceive: the first arrival from hand grants invulnerability this turn."""
    used = False

    def set_location(ctx, unit, location):
        nonlocal used
        from_hand = unit.in_hand
        default_set_location(ctx, unit, location)
        if from_hand and not used:
            used = True
            ctx.apply_status(unit, StatusKind.INVULNERABLE, ctx.turn)

    return BehaviorHooks(set_location=set_location)


def _bard() -> BehaviorHooks:
    """Traveler's Call: every move heals Bard for 5."""

    def set_location(ctx, unit, location):
        default_set_location(ctx, unit, location)
        heal(ctx, unit, 5)

    return BehaviorHooks(set_location=set_location)


# =============================================================================
# BEHAVIOR REGISTRY
# =============================================================================

BEHAVIORS: Dict[str, Callable[[], BehaviorHooks]] = {
    # Attack
    "annie": _annie,
    "olaf": _olaf,
    "master_yi": _kill_reset,
    "katarina": _kill_reset,
    "darius": _darius,
    "vayne": _vayne,
    "jax": _jax,
    "warwick": _lifesteal(0.3),
    "aatrox": _lifesteal(0.25),
    "vladimir": _lifesteal(0.2),
    "jinx": _jinx,
    "nasus": _stack_on_kill(3),
    "draven": _stack_on_kill(2),
    "talon": _talon,
    "cassiopeia": _cassiopeia,
    "kogmaw": _kogmaw,
    "zed": _zed,
    "udyr": _udyr,
    "riven": _riven,
    "fiora": _fiora,
    "kayle": _kayle,
    "twitch": _twitch,

    # Take damage
    "tryndamere": _tryndamere,
    "zac": _zac,
    "rammus": _rammus,
    "dr_mundo": _flat_reduction(1),
    "amumu": _flat_reduction(1),
    "malphite": _malphite,
    "braum": _braum,
    "leona": _leona,
    "sion": _sion,
    "poppy": _poppy,

    # Movement
    "galio": _galio,
    "hecarim": _hecarim,
    "rengar": _rengar,
    "shaco": _shaco,
    "bard": _bard,
}


def build_hooks(key: str) -> BehaviorHooks:
    """Build a fresh set of hooks for one unit of the given archetype."""
    factory = BEHAVIORS.get(key)
    return factory() if factory else BehaviorHooks()
