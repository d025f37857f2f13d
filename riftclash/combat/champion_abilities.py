"""Champion Abilities for Rift Clash.

Defines each champion's ability: its target shape and a pure effect that
reads the match and returns an AbilityOutcome. Champions without an entry
use the default Stun.

Durations are expressed as an expiry turn; "through next turn" means
turn_number + 1.
"""

import re
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

from riftclash.core.constants import DEFAULT_ABILITY_COOLDOWN
from riftclash.core.stat_calculator import round_half_up

from .ability import (
    AbilityData,
    AbilityEffectFn,
    AbilityOutcome,
    AbilityTargetType,
    CooldownEffect,
    DamageChangeEffect,
    DamageEffect,
    Effect,
    HealEffect,
    MoveEffect,
    NexusDamageEffect,
    ResetActionEffect,
    StatusEffectApplication,
)
from .location import Location
from .status_effects import StatusKind

if TYPE_CHECKING:
    from riftclash.core.match import MatchQuery
    from .unit import Unit


T = AbilityTargetType


def targets_for(
    shape: AbilityTargetType,
    query: "MatchQuery",
    source: "Unit",
    target: Optional["Unit"],
) -> List["Unit"]:
    """Units an ability of the given shape affects."""
    if shape == T.SELF:
        return [source]
    if shape == T.AOE_ENEMY_SAME_LANE:
        return query.enemies_in_lane(source)
    if shape == T.AOE_ALLY_SAME_LANE:
        return query.allies_in_lane(source)
    if shape == T.AOE_ENEMY_ANY_LANE:
        return query.aoe_any_lane_targets(source, target, enemy=True)
    if shape == T.AOE_ALLY_ANY_LANE:
        return query.aoe_any_lane_targets(source, target, enemy=False)
    if shape == T.GLOBAL_ENEMY:
        return query.all_enemies(source)
    if shape == T.GLOBAL_ALLY:
        return query.all_allies(source)
    return [target] if target is not None else []


def _scaled(source: "Unit", multiplier: float = 1.0, bonus: int = 0) -> int:
    return max(0, round_half_up(source.damage * multiplier) + bonus)


def _knockback(location: Location) -> Location:
    """Lane a unit is knocked into: the sides fall back to mid, mid falls to bot."""
    return Location.LANE_BOT if location == Location.LANE_MID else Location.LANE_MID


# =============================================================================
# EFFECT BUILDERS
# =============================================================================


def damage(
    shape: AbilityTargetType,
    multiplier: float = 1.0,
    bonus: int = 0,
    cooldown: int = 3,
    status: Optional[StatusKind] = None,
    turns: int = 1,
    value: float = 0.0,
) -> AbilityEffectFn:
    """Damage every unit of the shape, optionally applying a status to each."""

    def effect(query, source, target):
        amount = _scaled(source, multiplier, bonus)
        effects: List[Effect] = []
        for unit in targets_for(shape, query, source, target):
            effects.append(DamageEffect(unit.uid, amount))
            if status is not None:
                effects.append(
                    StatusEffectApplication(unit.uid, status, query.turn_number + turns, value)
                )
        return AbilityOutcome(cooldown, effects)

    return effect


def status(
    shape: AbilityTargetType,
    kind: StatusKind,
    turns: int = 1,
    value: float = 0.0,
    cooldown: int = 4,
) -> AbilityEffectFn:
    """Apply a status to every unit of the shape."""

    def effect(query, source, target):
        expires = query.turn_number + turns
        return AbilityOutcome(
            cooldown,
            [
                StatusEffectApplication(unit.uid, kind, expires, value)
                for unit in targets_for(shape, query, source, target)
            ],
        )

    return effect


def restore(
    shape: AbilityTargetType,
    amount: int = 0,
    ratio: float = 0.0,
    cooldown: int = 3,
) -> AbilityEffectFn:
    """Heal every unit of the shape by a flat amount plus a share of its max health."""

    def effect(query, source, target):
        return AbilityOutcome(
            cooldown,
            [
                HealEffect(unit.uid, amount + round_half_up(unit.max_health * ratio))
                for unit in targets_for(shape, query, source, target)
            ],
        )

    return effect


def combine(cooldown: int, *parts: AbilityEffectFn) -> AbilityEffectFn:
    """Concatenate the effects of several builders under one cooldown."""

    def effect(query, source, target):
        effects: List[Effect] = []
        for part in parts:
            effects.extend(part(query, source, target).effects)
        return AbilityOutcome(cooldown, effects)

    return effect


# =============================================================================
# BESPOKE EFFECTS
# =============================================================================


def _default_stun(query, source, target):
    return AbilityOutcome(
        DEFAULT_ABILITY_COOLDOWN,
        [StatusEffectApplication(target.uid, StatusKind.STUN, query.turn_number + 1)],
    )


def _execute(threshold: float, cooldown: int = 4) -> AbilityEffectFn:
    """Double damage against targets at or below a health threshold."""

    def effect(query, source, target):
        multiplier = 2.0 if target.health <= target.max_health * threshold else 1.0
        return AbilityOutcome(cooldown, [DamageEffect(target.uid, _scaled(source, multiplier))])

    return effect


def _missing_health_strike(query, source, target):
    bonus = round_half_up((target.max_health - target.health) * 0.5)
    return AbilityOutcome(4, [DamageEffect(target.uid, source.damage + bonus)])


def _mark_detonate(query, source, target):
    """Bonus damage on a marked target, consuming the mark."""
    marked = target.statuses.is_active(StatusKind.MARK, query.turn_number)
    effects: List[Effect] = [DamageEffect(target.uid, _scaled(source, 2.0 if marked else 1.0))]
    if not marked:
        effects.append(
            StatusEffectApplication(target.uid, StatusKind.MARK, query.turn_number + 2)
        )
    return AbilityOutcome(3, effects)


def _headbutt(query, source, target):
    return AbilityOutcome(
        4,
        [
            DamageEffect(target.uid, _scaled(source, 0.5)),
            MoveEffect(target.uid, _knockback(target.location)),
        ],
    )


def _death_sentence(query, source, target):
    """Pull an enemy from any lane into the caster's lane and stun it."""
    return AbilityOutcome(
        5,
        [
            MoveEffect(target.uid, source.location),
            StatusEffectApplication(target.uid, StatusKind.STUN, query.turn_number),
        ],
    )


def _rocket_grab(query, source, target):
    return AbilityOutcome(
        5,
        [
            DamageEffect(target.uid, _scaled(source, 0.5)),
            MoveEffect(target.uid, source.location),
        ],
    )


def _stand_united(query, source, target):
    """Join an ally's lane and shield it."""
    effects: List[Effect] = []
    if target.location != source.location:
        effects.append(MoveEffect(source.uid, target.location))
    effects.append(
        StatusEffectApplication(target.uid, StatusKind.SHIELD, query.turn_number + 1, 10)
    )
    return AbilityOutcome(5, effects)


def _time_warp(query, source, target):
    """Let an ally act again this turn."""
    return AbilityOutcome(5, [ResetActionEffect(target.uid)])


def _mantra(query, source, target):
    """Refresh another ally's ability cooldown. The caster's own is kept."""
    if target.uid == source.uid:
        return AbilityOutcome(5, [])
    return AbilityOutcome(5, [CooldownEffect(target.uid, 0)])


def _siphoning_strike(query, source, target):
    return AbilityOutcome(
        2,
        [DamageEffect(target.uid, source.damage), DamageChangeEffect(source.uid, 1)],
    )


def _feast(query, source, target):
    """Heavy strike that permanently grows the caster."""
    return AbilityOutcome(
        4,
        [DamageEffect(target.uid, _scaled(source, 1.5)), DamageChangeEffect(source.uid, 2)],
    )


def _weaken(query, source, target):
    return AbilityOutcome(
        3,
        [
            DamageEffect(target.uid, _scaled(source, 0.5)),
            DamageChangeEffect(target.uid, -2),
        ],
    )


def _nexus_strike(amount: int, cooldown: int) -> AbilityEffectFn:
    """Damage the opposing nexus directly."""

    def effect(query, source, target):
        opponent_id = query.opponent_of(source.owner_id)
        return AbilityOutcome(cooldown, [NexusDamageEffect(opponent_id, amount)])

    return effect


def _requiem(query, source, target):
    """Damage every enemy on the field and the opposing nexus."""
    effects: List[Effect] = [
        DamageEffect(unit.uid, _scaled(source, 0.5)) for unit in query.all_enemies(source)
    ]
    effects.append(NexusDamageEffect(query.opponent_of(source.owner_id), 1))
    return AbilityOutcome(7, effects)


def _infuse(query, source, target):
    """Heal the most wounded ally on the field."""
    allies = query.all_allies(source)
    if not allies:
        return AbilityOutcome(3, [])
    wounded = min(allies, key=lambda u: u.health / u.max_health)
    return AbilityOutcome(3, [HealEffect(wounded.uid, round_half_up(wounded.max_health * 0.3))])


def _drain(query, source, target):
    amount = _scaled(source)
    return AbilityOutcome(3, [DamageEffect(target.uid, amount), HealEffect(source.uid, amount)])


def _chronoshift(query, source, target):
    return AbilityOutcome(
        6,
        [
            StatusEffectApplication(target.uid, StatusKind.INVULNERABLE, query.turn_number),
            HealEffect(target.uid, round_half_up(target.max_health * 0.2)),
        ],
    )


def _tempered_fate(query, source, target):
    """Place every unit in the target's lane, friend or foe, in stasis through next turn."""
    lane = [u for u in query.field_units() if u.location == target.location]
    expires = query.turn_number + 1
    return AbilityOutcome(
        6,
        [StatusEffectApplication(u.uid, StatusKind.STASIS, expires) for u in lane],
    )


def _flash_strike(query, source, target):
    """Blink to the target's lane and strike it."""
    effects: List[Effect] = []
    if target.location != source.location:
        effects.append(MoveEffect(source.uid, target.location))
    effects.append(DamageEffect(target.uid, _scaled(source, 1.25)))
    return AbilityOutcome(4, effects)


def _reposition(query, source, target):
    """Move to an adjacent lane and refresh the action."""
    return AbilityOutcome(
        3,
        [MoveEffect(source.uid, _knockback(source.location)), ResetActionEffect(source.uid)],
    )


# =============================================================================
# ABILITY DEFINITIONS
# =============================================================================


def ability(
    key: str,
    name: str,
    description: str,
    target_type: AbilityTargetType,
    effect: AbilityEffectFn,
) -> Tuple[str, AbilityData]:
    """Build a registry entry keyed by champion key."""
    slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
    return key, AbilityData(
        ability_id=f"{key}_{slug}",
        name=name,
        description=description,
        target_type=target_type,
        effect=effect,
    )


DEFAULT_ABILITY = AbilityData(
    ability_id="stun",
    name="Stun",
    description="Stuns an enemy in the same lane through next turn.",
    target_type=T.SINGLE_ENEMY_SAME_LANE,
    effect=_default_stun,
)

CHAMPION_ABILITIES: Dict[str, AbilityData] = dict([
    # Marksmen
    ability("ashe", "Volley", "Hits every enemy in the lane and stuns them this turn.",
            T.AOE_ENEMY_SAME_LANE,
            damage(T.AOE_ENEMY_SAME_LANE, 0.5, cooldown=4, status=StatusKind.STUN, turns=0)),
    ability("caitlyn", "Piltover Peacemaker", "Snipes an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, damage(T.SINGLE_ENEMY_ANY_LANE, 1.25, cooldown=3)),
    ability("corki", "Missile Barrage", "Bombards every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.5, cooldown=3)),
    ability("draven", "Whirling Death", "Heavy strike on an enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, damage(T.SINGLE_ENEMY_SAME_LANE, 1.75, cooldown=3)),
    ability("ezreal", "Trueshot Barrage", "Damages every enemy on the field.",
            T.GLOBAL_ENEMY, damage(T.GLOBAL_ENEMY, 0.5, cooldown=5)),
    ability("graves", "Collateral Damage", "Blasts an enemy lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.75, cooldown=4)),
    ability("jhin", "Curtain Call", "Executes a wounded enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, _execute(0.3, cooldown=5)),
    ability("jinx", "Super Mega Death Rocket", "Damages every enemy on the field.",
            T.GLOBAL_ENEMY, damage(T.GLOBAL_ENEMY, 0.75, cooldown=6)),
    ability("kalista", "Rend", "Detonates a mark on the target, or applies one.",
            T.SINGLE_ENEMY_SAME_LANE, _mark_detonate),
    ability("kogmaw", "Living Artillery", "Shells an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, damage(T.SINGLE_ENEMY_ANY_LANE, 1.0, cooldown=2)),
    ability("lucian", "Relentless Pursuit", "Dashes and refreshes the action.",
            T.SELF, _reposition),
    ability("miss_fortune", "Bullet Time", "Sprays every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 1.0, cooldown=4)),
    ability("quinn", "Blinding Assault", "Strikes and marks an enemy.",
            T.SINGLE_ENEMY_SAME_LANE, _mark_detonate),
    ability("sivir", "On The Hunt", "Grants every ally a damage buff through next turn.",
            T.GLOBAL_ALLY, status(T.GLOBAL_ALLY, StatusKind.DAMAGE_BUFF, 1, 0.25, cooldown=5)),
    ability("tristana", "Buster Shot", "Knocks an enemy into another lane.",
            T.SINGLE_ENEMY_SAME_LANE, _headbutt),
    ability("twitch", "Spray and Pray", "Hits every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=3)),
    ability("varus", "Chain of Corruption", "Roots and damages an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE,
            damage(T.SINGLE_ENEMY_ANY_LANE, 0.5, cooldown=5, status=StatusKind.STUN)),
    ability("vayne", "Final Hour", "Gains a large damage buff through next turn.",
            T.SELF, status(T.SELF, StatusKind.DAMAGE_BUFF, 1, 0.5, cooldown=4)),

    # Mages
    ability("ahri", "Orb of Deception", "Strikes an enemy and heals for the damage.",
            T.SINGLE_ENEMY_SAME_LANE, _drain),
    ability("anivia", "Rebirth", "Enters stasis through next turn.",
            T.SELF, status(T.SELF, StatusKind.STASIS, 1, cooldown=7)),
    ability("annie", "Summon Tibbers", "Burns every enemy in the lane and stuns them this turn.",
            T.AOE_ENEMY_SAME_LANE,
            damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=5, status=StatusKind.STUN, turns=0)),
    ability("brand", "Pyroclasm", "Ignites every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.75, cooldown=4)),
    ability("cassiopeia", "Petrifying Gaze", "Stuns every enemy in the lane through next turn.",
            T.AOE_ENEMY_SAME_LANE, status(T.AOE_ENEMY_SAME_LANE, StatusKind.STUN, 1, cooldown=6)),
    ability("heimerdinger", "Upgrade", "Empowers every ally in the lane.",
            T.AOE_ALLY_SAME_LANE,
            status(T.AOE_ALLY_SAME_LANE, StatusKind.DAMAGE_BUFF, 1, 0.25, cooldown=4)),
    ability("karthus", "Requiem", "Damages every enemy and the enemy nexus.",
            T.GLOBAL_ENEMY, _requiem),
    ability("kassadin", "Riftwalk", "Blinks to an enemy's lane and strikes it.",
            T.SINGLE_ENEMY_ANY_LANE, _flash_strike),
    ability("leblanc", "Mimic", "Strikes and marks an enemy.",
            T.SINGLE_ENEMY_SAME_LANE, _mark_detonate),
    ability("lissandra", "Frozen Tomb", "Enters stasis through next turn.",
            T.SELF, status(T.SELF, StatusKind.STASIS, 1, cooldown=6)),
    ability("lux", "Final Spark", "Blasts every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 1.0, cooldown=5)),
    ability("malzahar", "Nether Grasp", "Suppresses an enemy in any lane through next turn.",
            T.SINGLE_ENEMY_ANY_LANE,
            damage(T.SINGLE_ENEMY_ANY_LANE, 0.5, cooldown=6, status=StatusKind.STUN)),
    ability("morgana", "Black Shield", "Shields an ally in any lane.",
            T.SINGLE_ALLY_ANY_LANE,
            status(T.SINGLE_ALLY_ANY_LANE, StatusKind.SHIELD, 1, 12, cooldown=4)),
    ability("orianna", "Command: Protect", "Shields an ally in the lane.",
            T.SINGLE_ALLY_SAME_LANE,
            status(T.SINGLE_ALLY_SAME_LANE, StatusKind.SHIELD, 1, 10, cooldown=3)),
    ability("ryze", "Realm Warp", "Moves to another lane and refreshes the action.",
            T.SELF, _reposition),
    ability("swain", "Demonic Ascension", "Drains an enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _drain),
    ability("syndra", "Unleashed Power", "Heavy strike on an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, damage(T.SINGLE_ENEMY_ANY_LANE, 1.5, cooldown=5)),
    ability("twisted_fate", "Pick a Card", "Stuns and damages an enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE,
            damage(T.SINGLE_ENEMY_SAME_LANE, 0.5, cooldown=4, status=StatusKind.STUN)),
    ability("veigar", "Primordial Burst", "Executes a wounded enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _execute(0.5, cooldown=4)),
    ability("velkoz", "Life Form Disintegration Ray", "Damages every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.75, cooldown=4)),
    ability("viktor", "Chaos Storm", "Damages every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 1.0, cooldown=4)),
    ability("vladimir", "Transfusion", "Drains an enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _drain),
    ability("xerath", "Rite of the Arcane", "Damages every enemy on the field.",
            T.GLOBAL_ENEMY, damage(T.GLOBAL_ENEMY, 0.5, cooldown=5)),
    ability("ziggs", "Mega Inferno Bomb", "Hits the enemy nexus directly.",
            T.SELF, _nexus_strike(1, 8)),
    ability("zilean", "Time Warp", "Lets an ally act again this turn.",
            T.SINGLE_ALLY_ANY_LANE, _time_warp),
    ability("zyra", "Stranglethorns", "Roots every enemy in a lane this turn.",
            T.AOE_ENEMY_ANY_LANE,
            damage(T.AOE_ENEMY_ANY_LANE, 0.5, cooldown=5, status=StatusKind.STUN, turns=0)),

    # Supports
    ability("bard", "Tempered Fate", "Places every unit in a lane in stasis through next turn.",
            T.AOE_ENEMY_ANY_LANE, _tempered_fate),
    ability("blitzcrank", "Rocket Grab", "Pulls an enemy from any lane.",
            T.SINGLE_ENEMY_ANY_LANE, _rocket_grab),
    ability("janna", "Monsoon", "Heals every ally in the lane.",
            T.AOE_ALLY_SAME_LANE, restore(T.AOE_ALLY_SAME_LANE, 4, 0.1, cooldown=4)),
    ability("karma", "Mantra", "Refreshes an ally's ability.",
            T.SINGLE_ALLY_ANY_LANE, _mantra),
    ability("lulu", "Wild Growth", "Heals an ally and shields it through next turn.",
            T.SINGLE_ALLY_ANY_LANE,
            combine(5, restore(T.SINGLE_ALLY_ANY_LANE, ratio=0.25),
                    status(T.SINGLE_ALLY_ANY_LANE, StatusKind.SHIELD, 1, 8))),
    ability("nami", "Ebb and Flow", "Heals every ally in a lane.",
            T.AOE_ALLY_ANY_LANE, restore(T.AOE_ALLY_ANY_LANE, 3, 0.1, cooldown=4)),
    ability("sona", "Aria of Perseverance", "Heals every ally on the field.",
            T.GLOBAL_ALLY, restore(T.GLOBAL_ALLY, 3, cooldown=4)),
    ability("soraka", "Astral Infusion", "Heals the most wounded ally.",
            T.SELF, _infuse),
    ability("taric", "Cosmic Radiance", "Makes every ally in the lane invulnerable this turn.",
            T.AOE_ALLY_SAME_LANE,
            status(T.AOE_ALLY_SAME_LANE, StatusKind.INVULNERABLE, 0, cooldown=7)),
    ability("thresh", "Death Sentence", "Pulls an enemy into the lane and stuns it this turn.",
            T.SINGLE_ENEMY_ANY_LANE, _death_sentence),

    # Tanks
    ability("alistar", "Headbutt", "Knocks an enemy into another lane.",
            T.SINGLE_ENEMY_SAME_LANE, _headbutt),
    ability("amumu", "Curse of the Sad Mummy", "Stuns every enemy in the lane through next turn.",
            T.AOE_ENEMY_SAME_LANE, status(T.AOE_ENEMY_SAME_LANE, StatusKind.STUN, 1, cooldown=6)),
    ability("braum", "Unbreakable", "Reduces damage to every ally in the lane.",
            T.AOE_ALLY_SAME_LANE,
            status(T.AOE_ALLY_SAME_LANE, StatusKind.DAMAGE_REDUCTION, 1, 0.5, cooldown=5)),
    ability("chogath", "Feast", "Devours an enemy and grows permanently.",
            T.SINGLE_ENEMY_SAME_LANE, _feast),
    ability("galio", "Hero's Entrance", "Shields every ally in a lane.",
            T.AOE_ALLY_ANY_LANE,
            status(T.AOE_ALLY_ANY_LANE, StatusKind.SHIELD, 1, 8, cooldown=5)),
    ability("leona", "Solar Flare", "Stuns every enemy in a lane this turn.",
            T.AOE_ENEMY_ANY_LANE,
            damage(T.AOE_ENEMY_ANY_LANE, 0.5, cooldown=5, status=StatusKind.STUN, turns=0)),
    ability("malphite", "Unstoppable Force", "Slams every enemy in the lane and stuns them.",
            T.AOE_ENEMY_SAME_LANE,
            damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=6, status=StatusKind.STUN)),
    ability("maokai", "Sapling Toss", "Damages every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.5, cooldown=3)),
    ability("nautilus", "Depth Charge", "Stuns an enemy in any lane through next turn.",
            T.SINGLE_ENEMY_ANY_LANE,
            damage(T.SINGLE_ENEMY_ANY_LANE, 0.75, cooldown=6, status=StatusKind.STUN)),
    ability("nunu", "Consume", "Devours an enemy and heals.",
            T.SINGLE_ENEMY_SAME_LANE, _drain),
    ability("rammus", "Defensive Ball Curl", "Reduces incoming damage through next turn.",
            T.SELF, status(T.SELF, StatusKind.DAMAGE_REDUCTION, 1, 0.5, cooldown=4)),
    ability("sejuani", "Glacial Prison", "Stuns every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, status(T.AOE_ENEMY_ANY_LANE, StatusKind.STUN, 1, cooldown=7)),
    ability("shen", "Stand United", "Joins an ally's lane and shields it.",
            T.SINGLE_ALLY_ANY_LANE, _stand_united),
    ability("singed", "Insanity Potion", "Reduces incoming damage and buffs outgoing damage.",
            T.SELF,
            combine(5, status(T.SELF, StatusKind.DAMAGE_REDUCTION, 1, 0.25),
                    status(T.SELF, StatusKind.DAMAGE_BUFF, 1, 0.25))),
    ability("sion", "Soul Furnace", "Gains a large shield through next turn.",
            T.SELF, status(T.SELF, StatusKind.SHIELD, 1, 15, cooldown=4)),
    ability("tahm_kench", "Devour", "Protects an ally in the lane with stasis.",
            T.SINGLE_ALLY_SAME_LANE,
            status(T.SINGLE_ALLY_SAME_LANE, StatusKind.STASIS, 0, cooldown=6)),
    ability("zac", "Let's Bounce", "Knocks an enemy into another lane.",
            T.SINGLE_ENEMY_SAME_LANE, _headbutt),

    # Fighters
    ability("aatrox", "World Ender", "Gains a damage buff and heals.",
            T.SELF,
            combine(5, status(T.SELF, StatusKind.DAMAGE_BUFF, 1, 0.5),
                    restore(T.SELF, ratio=0.2))),
    ability("darius", "Noxian Guillotine", "Executes a wounded enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _execute(0.4)),
    ability("dr_mundo", "Sadism", "Heals a large share of max health.",
            T.SELF, restore(T.SELF, ratio=0.4, cooldown=5)),
    ability("fiora", "Grand Challenge", "Strikes an enemy harder the more it is wounded.",
            T.SINGLE_ENEMY_SAME_LANE, _missing_health_strike),
    ability("garen", "Demacian Justice", "Executes a wounded enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _execute(0.5)),
    ability("gnar", "GNAR!", "Slams every enemy in the lane and stuns them this turn.",
            T.AOE_ENEMY_SAME_LANE,
            damage(T.AOE_ENEMY_SAME_LANE, 0.5, cooldown=5, status=StatusKind.STUN, turns=0)),
    ability("gragas", "Explosive Cask", "Knocks an enemy into another lane.",
            T.SINGLE_ENEMY_SAME_LANE, _headbutt),
    ability("hecarim", "Onslaught of Shadows", "Charges every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.75, cooldown=5)),
    ability("illaoi", "Leap of Faith", "Slams every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 1.0, cooldown=4)),
    ability("irelia", "Bladesurge", "Strikes an enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, damage(T.SINGLE_ENEMY_SAME_LANE, 1.25, cooldown=2)),
    ability("jarvan_iv", "Cataclysm", "Traps every enemy in the lane this turn.",
            T.AOE_ENEMY_SAME_LANE,
            damage(T.AOE_ENEMY_SAME_LANE, 0.5, cooldown=6, status=StatusKind.STUN, turns=0)),
    ability("jax", "Counter Strike", "Reduces incoming damage and hits back.",
            T.SINGLE_ENEMY_SAME_LANE,
            combine(4, damage(T.SINGLE_ENEMY_SAME_LANE, 0.5),
                    status(T.SELF, StatusKind.DAMAGE_REDUCTION, 1, 0.5))),
    ability("jayce", "Thundering Blow", "Knocks an enemy into another lane.",
            T.SINGLE_ENEMY_SAME_LANE, _headbutt),
    ability("lee_sin", "Dragon's Rage", "Kicks an enemy into another lane.",
            T.SINGLE_ENEMY_SAME_LANE, _headbutt),
    ability("mordekaiser", "Realm of Death", "Drains an enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _drain),
    ability("nasus", "Siphoning Strike", "Strikes and permanently gains damage.",
            T.SINGLE_ENEMY_SAME_LANE, _siphoning_strike),
    ability("olaf", "Ragnarok", "Becomes invulnerable this turn.",
            T.SELF, status(T.SELF, StatusKind.INVULNERABLE, 0, cooldown=7)),
    ability("pantheon", "Grand Starfall", "Leaps to an enemy's lane and strikes it.",
            T.SINGLE_ENEMY_ANY_LANE, _flash_strike),
    ability("renekton", "Dominus", "Gains a shield and damage buff.",
            T.SELF,
            combine(5, status(T.SELF, StatusKind.SHIELD, 1, 10),
                    status(T.SELF, StatusKind.DAMAGE_BUFF, 1, 0.25))),
    ability("riven", "Wind Slash", "Damages every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 1.0, cooldown=4)),
    ability("skarner", "Impale", "Pulls an enemy from any lane.",
            T.SINGLE_ENEMY_ANY_LANE, _rocket_grab),
    ability("trundle", "Subjugate", "Saps an enemy's damage.",
            T.SINGLE_ENEMY_SAME_LANE, _weaken),
    ability("tryndamere", "Undying Rage", "Becomes invulnerable this turn.",
            T.SELF, status(T.SELF, StatusKind.INVULNERABLE, 0, cooldown=6)),
    ability("udyr", "Turtle Stance", "Gains a shield through next turn.",
            T.SELF, status(T.SELF, StatusKind.SHIELD, 1, 8, cooldown=3)),
    ability("urgot", "Fear Beyond Death", "Executes a wounded enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, _execute(0.25, cooldown=6)),
    ability("vi", "Assault and Battery", "Dives an enemy in any lane and stuns it.",
            T.SINGLE_ENEMY_ANY_LANE,
            damage(T.SINGLE_ENEMY_ANY_LANE, 0.75, cooldown=6, status=StatusKind.STUN, turns=0)),
    ability("volibear", "Stormbringer", "Strikes every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=4)),
    ability("warwick", "Infinite Duress", "Suppresses and drains an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, _drain),
    ability("wukong", "Cyclone", "Knocks up every enemy in the lane this turn.",
            T.AOE_ENEMY_SAME_LANE,
            damage(T.AOE_ENEMY_SAME_LANE, 0.5, cooldown=6, status=StatusKind.STUN, turns=0)),
    ability("xin_zhao", "Crescent Guard", "Damages every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=3)),
    ability("yasuo", "Last Breath", "Strikes an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, _flash_strike),
    ability("yorick", "Eulogy of the Isles", "Marks an enemy and strikes it.",
            T.SINGLE_ENEMY_SAME_LANE, _mark_detonate),

    # Assassins
    ability("akali", "Twilight Shroud", "Becomes untargetable this turn.",
            T.SELF, status(T.SELF, StatusKind.STASIS, 0, cooldown=5)),
    ability("diana", "Moonfall", "Marks every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE,
            damage(T.AOE_ENEMY_SAME_LANE, 0.5, cooldown=4, status=StatusKind.MARK, turns=2)),
    ability("ekko", "Chronobreak", "Heals a large share of max health.",
            T.SELF, restore(T.SELF, ratio=0.35, cooldown=6)),
    ability("evelynn", "Last Caress", "Executes a wounded enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _execute(0.35)),
    ability("fizz", "Playful Trickster", "Becomes untargetable this turn.",
            T.SELF, status(T.SELF, StatusKind.STASIS, 0, cooldown=4)),
    ability("katarina", "Death Lotus", "Damages every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 1.0, cooldown=4)),
    ability("khazix", "Taste Their Fear", "Executes a wounded enemy in the lane.",
            T.SINGLE_ENEMY_SAME_LANE, _execute(0.4, cooldown=3)),
    ability("master_yi", "Alpha Strike", "Strikes every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.75, cooldown=4)),
    ability("nocturne", "Paranoia", "Leaps to an enemy's lane and strikes it.",
            T.SINGLE_ENEMY_ANY_LANE, _flash_strike),
    ability("rengar", "Thrill of the Hunt", "Leaps to an enemy's lane and strikes it.",
            T.SINGLE_ENEMY_ANY_LANE, _flash_strike),
    ability("shaco", "Hallucinate", "Becomes untargetable this turn.",
            T.SELF, status(T.SELF, StatusKind.STASIS, 0, cooldown=5)),
    ability("talon", "Shadow Assault", "Damages every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=4)),
    ability("zed", "Death Mark", "Marks an enemy, then detonates the mark.",
            T.SINGLE_ENEMY_SAME_LANE, _mark_detonate),

    # Mixed
    ability("azir", "Emperor's Divide", "Sand soldiers strike every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 0.5, cooldown=5)),
    ability("elise", "Cocoon", "Stuns an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE,
            status(T.SINGLE_ENEMY_ANY_LANE, StatusKind.STUN, 1, cooldown=5)),
    ability("gangplank", "Cannon Barrage", "Bombards every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.5, cooldown=4)),
    ability("kayle", "Divine Judgment", "Makes an ally invulnerable this turn and heals it.",
            T.SINGLE_ALLY_ANY_LANE, _chronoshift),
    ability("kennen", "Slicing Maelstrom", "Damages every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=4)),
    ability("nidalee", "Primal Surge", "Heals every ally in the lane.",
            T.AOE_ALLY_SAME_LANE, restore(T.AOE_ALLY_SAME_LANE, 5, cooldown=3)),
    ability("poppy", "Keeper's Verdict", "Knocks an enemy into another lane.",
            T.SINGLE_ENEMY_SAME_LANE, _headbutt),
    ability("rumble", "The Equalizer", "Scorches every enemy in a lane.",
            T.AOE_ENEMY_ANY_LANE, damage(T.AOE_ENEMY_ANY_LANE, 0.5, cooldown=4)),
    ability("shyvana", "Dragon's Descent", "Damages every enemy in the lane.",
            T.AOE_ENEMY_SAME_LANE, damage(T.AOE_ENEMY_SAME_LANE, 0.75, cooldown=4)),
    ability("teemo", "Noxious Trap", "Poisons an enemy in any lane.",
            T.SINGLE_ENEMY_ANY_LANE, _weaken),
])


def get_ability_for_champion(champion_key: str) -> AbilityData:
    """Get the ability for a champion key, or the default Stun."""
    normalized = champion_key.lower().replace(" ", "_").replace("'", "")
    return CHAMPION_ABILITIES.get(normalized, DEFAULT_ABILITY)
