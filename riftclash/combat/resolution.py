"""Combat resolution for Rift Clash.

Default implementations of the unit hooks and the context they run in. The
context pairs the read-only match query with the update record being built
for the current move, so every mutation a hook makes is also reported.
"""

from typing import Optional, TYPE_CHECKING

from riftclash.core.stat_calculator import round_half_up
from riftclash.core.updates import (
    CooldownChange,
    DamageChange,
    DamageRecord,
    HealRecord,
    MatchUpdate,
    MovedRecord,
    StatusChange,
)

from .status_effects import StatusKind

if TYPE_CHECKING:
    from riftclash.core.match import MatchQuery
    from .location import Location
    from .unit import Unit


class CombatContext:
    """
    Mutation context handed to hooks while a move resolves.

    Attributes:
        query: Read-only view of the match.
        update: Shared update record for the move.
    """

    def __init__(self, query: "MatchQuery", update: MatchUpdate):
        self.query = query
        self.update = update

    @property
    def turn(self) -> int:
        return self.query.turn_number

    def record_damage(self, unit: "Unit", amount: int, attacker: Optional["Unit"]) -> None:
        self.update.damaged.append(
            DamageRecord(
                uid=unit.uid,
                amount=amount,
                health=unit.health,
                attacker_uid=attacker.uid if attacker else None,
            )
        )

    def record_heal(self, unit: "Unit", amount: int) -> None:
        self.update.healed.append(HealRecord(uid=unit.uid, amount=amount, health=unit.health))

    def record_move(self, unit: "Unit") -> None:
        self.update.moved.append(MovedRecord(uid=unit.uid, location=unit.location.value))

    def apply_status(
        self, unit: "Unit", kind: StatusKind, expires_turn: int, value: float = 0.0
    ) -> None:
        entry = unit.statuses.apply(kind, expires_turn, value)
        self.update.status_changes.append(
            StatusChange(
                uid=unit.uid,
                kind=kind.name.lower(),
                applied=True,
                expires_turn=entry.expires_turn,
                value=entry.value,
            )
        )

    def remove_status(self, unit: "Unit", kind: StatusKind) -> None:
        if unit.statuses.remove(kind) is not None:
            self.update.status_changes.append(
                StatusChange(uid=unit.uid, kind=kind.name.lower(), applied=False)
            )

    def change_damage(self, unit: "Unit", delta: int) -> None:
        unit.damage = max(0, unit.damage + delta)
        self.update.damage_changes.append(DamageChange(uid=unit.uid, damage=unit.damage))

    def set_ready_turn(self, unit: "Unit", ready_turn: int) -> None:
        unit.ready_turn = ready_turn
        self.update.cooldown_changes.append(CooldownChange(uid=unit.uid, ready_turn=ready_turn))


# =============================================================================
# DEFAULT HOOKS
# =============================================================================


def default_attack_enemy(ctx: CombatContext, source: "Unit", target: "Unit") -> bool:
    """Hit the target for the source's damage. Returns whether it died."""
    return target.take_damage(ctx, source.damage, source)


def default_take_damage(
    ctx: CombatContext, unit: "Unit", raw: int, attacker: Optional["Unit"]
) -> bool:
    """
    Apply modifiers, then shield, then health.

    Args:
        ctx: Combat context.
        unit: Unit being hit.
        raw: Damage before modifiers.
        attacker: Unit dealing the damage, if any.

    Returns:
        Whether the unit died.
    """
    turn = ctx.turn
    unit.statuses.expire(turn)

    if unit.statuses.is_invulnerable(turn):
        return False

    buff = attacker.statuses.value(StatusKind.DAMAGE_BUFF, turn) if attacker else 0.0
    reduction = unit.statuses.value(StatusKind.DAMAGE_REDUCTION, turn)
    effective = max(0, round_half_up(raw * (1 + buff) * (1 - reduction)))
    return apply_damage(ctx, unit, effective, attacker)


def apply_damage(
    ctx: CombatContext, unit: "Unit", amount: int, attacker: Optional["Unit"]
) -> bool:
    """Apply already-modified damage: shield first, then health clamped at 0."""
    turn = ctx.turn
    had_shield = unit.statuses.is_active(StatusKind.SHIELD, turn)
    remaining = unit.statuses.absorb(amount, turn)

    if had_shield:
        shield = unit.statuses.get(StatusKind.SHIELD, turn)
        ctx.update.status_changes.append(
            StatusChange(
                uid=unit.uid,
                kind=StatusKind.SHIELD.name.lower(),
                applied=shield is not None,
                expires_turn=shield.expires_turn if shield else None,
                value=shield.value if shield else 0.0,
            )
        )

    unit.health = max(0, unit.health - remaining)
    ctx.record_damage(unit, amount, attacker)
    return unit.health == 0


def default_set_location(ctx: CombatContext, unit: "Unit", location: "Location") -> None:
    unit.location = location
    ctx.record_move(unit)


def heal(ctx: CombatContext, unit: "Unit", amount: int) -> int:
    """
    Restore health, clamped at max_health.

    Returns:
        Health actually restored.
    """
    if amount <= 0 or unit.health <= 0:
        return 0
    restored = min(amount, unit.max_health - unit.health)
    unit.health += restored
    ctx.record_heal(unit, restored)
    return restored


def reset_action(ctx: CombatContext, unit: "Unit") -> None:
    """Let a unit act again this turn."""
    unit.last_acted_turn = ctx.turn - 1
    ctx.update.action_resets.append(unit.uid)
