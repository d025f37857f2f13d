"""Match: the authoritative state machine of one Rift Clash game.

Lifecycle: WAITING -> NOT_STARTED (second join) -> STARTED (both decks
attached) -> OVER (a nexus falls or a participant disconnects).

Every mutating operation validates completely before it changes anything,
so a raised MatchError leaves the match untouched. Callers must serialize
access to a Match (see MatchRoom in the api layer).
"""

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from riftclash.combat.ability import (
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
from riftclash.combat.location import Location, is_adjacent
from riftclash.combat.resolution import CombatContext, reset_action
from riftclash.combat.unit import Unit

from .commands import AttackNexus, AttackUnit, CastAbility, MoveCommand, MoveUnit
from .constants import AOE_RESOLUTION_HELPER, MAX_PARTICIPANTS, MatchRules
from .deck import Deck
from .errors import ErrorCode, LifecycleViolation, MatchFull, RuleViolation, SelectionFailure
from .ids import MATCH_ID_LENGTH, PARTICIPANT_ID_LENGTH, generate_id
from .participant import Participant
from .updates import KillRecord, MatchInit, MatchOver, MatchUpdate, MoveResult

if TYPE_CHECKING:
    from .turn_timer import TurnTimer

logger = logging.getLogger(__name__)


class MatchState(str, Enum):
    WAITING = "waiting"
    NOT_STARTED = "not_started"
    STARTED = "started"
    OVER = "over"


SINGLE_ENEMY_SHAPES = (
    AbilityTargetType.SINGLE_ENEMY_SAME_LANE,
    AbilityTargetType.SINGLE_ENEMY_ANY_LANE,
)
SINGLE_ALLY_SHAPES = (
    AbilityTargetType.SINGLE_ALLY_SAME_LANE,
    AbilityTargetType.SINGLE_ALLY_ANY_LANE,
)
SAME_LANE_SHAPES = (
    AbilityTargetType.SINGLE_ENEMY_SAME_LANE,
    AbilityTargetType.SINGLE_ALLY_SAME_LANE,
)


class MatchQuery:
    """
    Read-only view of a match for ability effects and hooks.

    Helpers that return groups of units skip units in stasis.
    """

    def __init__(self, match: "Match"):
        self._match = match

    @property
    def turn_number(self) -> int:
        return self._match.turn_number

    @property
    def rules(self) -> MatchRules:
        return self._match.rules

    def get_unit(self, uid: str) -> Optional[Unit]:
        return self._match.units.get(uid)

    def field_units(self, participant_id: Optional[str] = None) -> List[Unit]:
        """Units on a lane, optionally only those of one participant."""
        return [
            u for u in self._match.units.values()
            if not u.in_hand and (participant_id is None or u.owner_id == participant_id)
        ]

    def _targetable(self) -> List[Unit]:
        turn = self.turn_number
        return [u for u in self.field_units() if u.is_targetable(turn)]

    def enemies_in_lane(self, unit: Unit) -> List[Unit]:
        return [
            u for u in self._targetable()
            if u.owner_id != unit.owner_id and u.location == unit.location
        ]

    def allies_in_lane(self, unit: Unit) -> List[Unit]:
        """Allies sharing the unit's lane, the unit included."""
        return [
            u for u in self._targetable()
            if u.owner_id == unit.owner_id and u.location == unit.location
        ]

    def all_enemies(self, unit: Unit) -> List[Unit]:
        return [u for u in self._targetable() if u.owner_id != unit.owner_id]

    def all_allies(self, unit: Unit) -> List[Unit]:
        return [u for u in self._targetable() if u.owner_id == unit.owner_id]

    def aoe_any_lane_targets(
        self, source: Unit, lane_unit: Optional[Unit], enemy: bool = True
    ) -> List[Unit]:
        """
        Units hit by an any-lane area ability aimed through lane_unit.

        Under the "helper" resolution rule, enemy area abilities select the
        caster's allies in that lane instead.
        """
        if lane_unit is None:
            return []
        if enemy and self.rules.aoe_any_lane_resolution == AOE_RESOLUTION_HELPER:
            enemy = False
        return [
            u for u in self._targetable()
            if u.location == lane_unit.location and (u.owner_id != source.owner_id) == enemy
        ]

    def opponent_of(self, participant_id: str) -> Optional[str]:
        opponent = self._match.opponent_of(participant_id)
        return opponent.id if opponent else None

    def nexus_health(self, participant_id: str) -> Optional[int]:
        participant = self._match.get_participant(participant_id)
        return participant.nexus_health if participant else None


class Match:
    """
    One two-player game.

    Args:
        match_id: Optional fixed id; a random 12-character id otherwise.
        rules: Tunable rules for this match.
        rng: Random source for ids and deck draws.
        timer: Turn timer restarted on every turn change.
    """

    def __init__(
        self,
        match_id: Optional[str] = None,
        rules: Optional[MatchRules] = None,
        rng: Optional[random.Random] = None,
        timer: Optional["TurnTimer"] = None,
    ):
        self.rng = rng or random.Random()
        self.id = match_id or generate_id(MATCH_ID_LENGTH, self.rng)
        self.rules = rules or MatchRules()
        self.timer = timer

        self.state = MatchState.WAITING
        self.turn_number = 0
        self.moves_remaining = 0
        self.participants: List[Participant] = []
        self.units: Dict[str, Unit] = {}
        self.victor_id: Optional[str] = None

        self.query = MatchQuery(self)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def opponent_of(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id != participant_id:
                return participant
        return None

    @property
    def current_mover(self) -> Optional[Participant]:
        if not self.participants:
            return None
        return self.participants[self.turn_number % len(self.participants)]

    def hand_of(self, participant_id: str) -> List[Unit]:
        return [u for u in self.units.values() if u.owner_id == participant_id and u.in_hand]

    def field_count(self, participant_id: str) -> int:
        return len(self.query.field_units(participant_id))

    @property
    def is_over(self) -> bool:
        return self.state == MatchState.OVER

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def add_participant(self) -> str:
        """
        Join the match.

        Returns:
            The new participant's id.

        Raises:
            MatchFull: If the match is full or already past selection.
        """
        if self.state not in (MatchState.WAITING, MatchState.NOT_STARTED):
            raise MatchFull()
        if len(self.participants) >= MAX_PARTICIPANTS:
            raise MatchFull()

        participant = Participant(
            id=self._new_participant_id(),
            nexus_health=self.rules.nexus_starting_health,
            invulnerable_until_turn=self.rules.nexus_invulnerable_until_turn,
        )
        self.participants.append(participant)
        if len(self.participants) == MAX_PARTICIPANTS:
            self.state = MatchState.NOT_STARTED

        logger.info("Match %s: participant %s joined (%d/%d)",
                    self.id, participant.id, len(self.participants), MAX_PARTICIPANTS)
        return participant.id

    def _new_participant_id(self) -> str:
        while True:
            pid = generate_id(PARTICIPANT_ID_LENGTH, self.rng)
            if self.get_participant(pid) is None:
                return pid

    def select_deck(
        self,
        participant_id: str,
        pairs: Sequence[Tuple[int, int]],
        display_name: str = "",
        icon_id: Optional[int] = None,
    ) -> Optional[Dict[str, MatchInit]]:
        """
        Attach a deck to a participant.

        Args:
            participant_id: Selecting participant.
            pairs: (archetype_id, level) pool.
            display_name: Decorative summoner name.
            icon_id: Decorative profile icon id.

        Returns:
            One MatchInit per participant if this selection started the
            match, otherwise None.

        Raises:
            LifecycleViolation: If the match is not awaiting selection.
            SelectionFailure: Unknown participant or unusable pool.
        """
        if self.state != MatchState.NOT_STARTED:
            raise LifecycleViolation(ErrorCode.WRONG_STATE, "Deck selection is not open.")

        participant = self.get_participant(participant_id)
        if participant is None:
            raise SelectionFailure(ErrorCode.UNKNOWN_PARTICIPANT, "Unknown participant.")

        deck = Deck.from_pairs(pairs, self.rules.min_deck_size, self.rng)

        participant.deck = deck
        participant.display_name = display_name
        participant.icon_id = icon_id
        logger.info("Match %s: participant %s selected a deck of %d",
                    self.id, participant_id, len(deck))

        if all(p.ready for p in self.participants):
            return self._start()
        return None

    def _start(self) -> Dict[str, MatchInit]:
        # Both hands are materialized before the match itself changes.
        drawn: List[Unit] = []
        for participant in self.participants:
            for _ in range(self.rules.hand_size):
                unit = participant.draw()
                if unit is not None:
                    drawn.append(unit)

        self.state = MatchState.STARTED
        self.turn_number = 1
        self.moves_remaining = self.rules.first_turn_moves
        self.units.update((unit.uid, unit) for unit in drawn)

        self._restart_timer()
        mover = self.current_mover
        logger.info("Match %s: started, %s moves first", self.id, mover.id)

        inits: Dict[str, MatchInit] = {}
        for participant in self.participants:
            opponent = self.opponent_of(participant.id)
            inits[participant.id] = MatchInit(
                participant_id=participant.id,
                hand=[u.to_dict(self.turn_number) for u in self.hand_of(participant.id)],
                first_mover_id=mover.id,
                nexus_health=participant.nexus_health,
                opponent_id=opponent.id,
                opponent_name=opponent.display_name,
                opponent_icon=opponent.icon_id,
                turn_number=self.turn_number,
                moves_remaining=self.moves_remaining,
            )
        return inits

    def disconnect(self, participant_id: str) -> MatchOver:
        """
        Force the match to end because a participant left.

        The remaining participant wins only if the match had started.
        """
        if self.state == MatchState.OVER:
            return MatchOver(self.victor_id)

        participant = self.get_participant(participant_id)
        if participant is not None:
            participant.connected = False

        victor_id = None
        if self.state == MatchState.STARTED:
            opponent = self.opponent_of(participant_id)
            victor_id = opponent.id if opponent else None

        logger.info("Match %s: participant %s disconnected", self.id, participant_id)
        return self._end(victor_id)

    def _end(self, victor_id: Optional[str]) -> MatchOver:
        self.state = MatchState.OVER
        self.victor_id = victor_id
        if self.timer is not None:
            self.timer.cancel()
        logger.info("Match %s: over, victor %s", self.id, victor_id)
        return MatchOver(victor_id)

    # -------------------------------------------------------------------------
    # Turn advance
    # -------------------------------------------------------------------------

    def force_advance(self) -> MatchUpdate:
        """Advance to the next turn without a move. Used by the timer and passes."""
        self._require_started()
        self.turn_number += 1
        self.moves_remaining = self.rules.moves_per_turn
        self._restart_timer()
        logger.debug("Match %s: forced advance to turn %d", self.id, self.turn_number)
        return MatchUpdate(
            turn_number=self.turn_number,
            mover_id=self.current_mover.id,
            moves_remaining=self.moves_remaining,
        )

    def request_pass(self, participant_id: str) -> MatchUpdate:
        """Let the current mover end their turn early."""
        self._require_started()
        self._require_mover(participant_id)
        return self.force_advance()

    def _restart_timer(self) -> None:
        if self.timer is not None:
            self.timer.restart()

    def _require_started(self) -> None:
        if self.state != MatchState.STARTED:
            raise LifecycleViolation(ErrorCode.WRONG_STATE, "The game is not in progress.")

    def _require_mover(self, participant_id: str) -> Participant:
        mover = self.current_mover
        if mover is None or mover.id != participant_id:
            raise RuleViolation(ErrorCode.NOT_YOUR_TURN, "It is not your turn to make a move.")
        return mover

    # -------------------------------------------------------------------------
    # Move pipeline
    # -------------------------------------------------------------------------

    def apply_move(self, participant_id: str, command: MoveCommand) -> MoveResult:
        """
        Validate and resolve one move.

        Args:
            participant_id: Participant submitting the move.
            command: One of AttackNexus, AttackUnit, CastAbility, MoveUnit.

        Returns:
            The mover's update, the opponent's update and, if the move ended
            the match, the MatchOver.

        Raises:
            LifecycleViolation: If the match is not in progress.
            RuleViolation: If the move is not allowed. Nothing is changed.
        """
        self._require_started()
        mover = self._require_mover(participant_id)

        handler = self._handler_for(command)
        if handler is None:
            raise RuleViolation(ErrorCode.INVALID_MOVE, "Invalid move")

        update = MatchUpdate()
        ctx = CombatContext(self.query, update)
        left_hand = handler(mover, command, ctx)

        spawned = drawn = None
        if left_hand is not None:
            spawned = left_hand.to_dict(self.turn_number)
            replacement = mover.draw()
            if replacement is not None:
                self.units[replacement.uid] = replacement
                drawn = replacement.to_dict(self.turn_number)

        dead = self._remove_dead(update)

        self.moves_remaining -= 1
        if self.moves_remaining <= 0:
            self.moves_remaining = self.rules.moves_per_turn
            self.turn_number += 1

        for participant in self.participants:
            participant.tick_fountain()
        for unit in dead:
            owner = self.get_participant(unit.owner_id)
            owner.send_to_fountain(unit, self.rules.death_timer)

        over = self._check_nexus()
        if over is None:
            self._restart_timer()

        update.turn_number = self.turn_number
        update.mover_id = self.current_mover.id
        update.moves_remaining = self.moves_remaining

        own, other = update.split(spawned=spawned, drawn=drawn)
        return MoveResult(self_update=own, opponent_update=other, over=over)

    def _handler_for(
        self, command: object
    ) -> Optional[Callable[[Participant, MoveCommand, CombatContext], Optional[Unit]]]:
        if isinstance(command, AttackNexus):
            return self._attack_nexus
        if isinstance(command, AttackUnit):
            return self._attack_unit
        if isinstance(command, CastAbility):
            return self._cast_ability
        if isinstance(command, MoveUnit):
            return self._move_unit
        return None

    def _remove_dead(self, update: MatchUpdate) -> List[Unit]:
        dead = [u for u in self.units.values() if u.health <= 0]
        for unit in dead:
            del self.units[unit.uid]
            update.killed.append(
                KillRecord(
                    uid=unit.uid,
                    owner_id=unit.owner_id,
                    killer_uid=update.last_attacker(unit.uid),
                )
            )
        return dead

    def _check_nexus(self) -> Optional[MatchOver]:
        for participant in self.participants:
            if participant.nexus_health <= 0:
                opponent = self.opponent_of(participant.id)
                return self._end(opponent.id if opponent else None)
        return None

    def _own_unit(
        self, mover: Participant, uid: str, message: str = "Invalid champion"
    ) -> Unit:
        unit = self.units.get(uid)
        if unit is None:
            raise RuleViolation(ErrorCode.INVALID_SOURCE, message)
        if unit.owner_id != mover.id:
            raise RuleViolation(ErrorCode.NOT_OWNER, "Cannot use an opponent champion")
        return unit

    # AttackNexus

    def _attack_nexus(
        self, mover: Participant, command: AttackNexus, ctx: CombatContext
    ) -> None:
        turn = self.turn_number
        source = self._own_unit(mover, command.source_uid)

        if source.in_hand:
            raise RuleViolation(ErrorCode.IN_HAND, "Cannot attack from hand")
        if not source.can_act(turn):
            raise RuleViolation(ErrorCode.STUNNED, "This champion is stunned.")
        if source.has_acted(turn):
            raise RuleViolation(
                ErrorCode.ALREADY_ACTED, "Champion has already made a move this turn"
            )

        opponent = self.opponent_of(mover.id)
        if any(u.location == source.location for u in self.query.field_units(opponent.id)):
            raise RuleViolation(ErrorCode.LANE_OCCUPIED, "Enemy champion in the lane")
        if opponent.nexus_invulnerable(turn):
            raise RuleViolation(ErrorCode.NEXUS_INVULNERABLE, "Opponent nexus is invulnerable")

        amount = (
            source.damage if self.rules.nexus_damage_from_attacker
            else self.rules.nexus_attack_damage
        )
        source.mark_acted(turn)
        opponent.damage_nexus(amount)
        ctx.update.nexus_health[opponent.id] = opponent.nexus_health
        logger.debug("Match %s: %s hit nexus of %s for %d",
                     self.id, source.uid, opponent.id, amount)

    # AttackUnit

    def _attack_unit(
        self, mover: Participant, command: AttackUnit, ctx: CombatContext
    ) -> None:
        turn = self.turn_number
        source = self.units.get(command.source_uid)
        target = self.units.get(command.target_uid)

        if source is None or target is None:
            raise RuleViolation(ErrorCode.INVALID_TARGET, "Invalid source or target")
        if source.owner_id != mover.id:
            raise RuleViolation(ErrorCode.NOT_OWNER, "Attacking champion is not owned by player")
        if target.owner_id == mover.id:
            raise RuleViolation(ErrorCode.OWN_TARGET, "Cannot attack your own champion")
        if source.in_hand:
            raise RuleViolation(ErrorCode.IN_HAND, "Cannot attack from hand")
        if source.location != target.location:
            raise RuleViolation(
                ErrorCode.DIFFERENT_LANE, "Cannot attack a champion in a different lane"
            )
        if target.statuses.is_invulnerable(turn):
            raise RuleViolation(ErrorCode.TARGET_INVULNERABLE, "Target is invulnerable")
        if not target.is_targetable(turn):
            raise RuleViolation(ErrorCode.TARGET_UNTARGETABLE, "Target cannot be targeted")
        if not source.can_act(turn):
            raise RuleViolation(ErrorCode.STUNNED, "Cannot attack while stunned")
        if source.has_acted(turn):
            raise RuleViolation(
                ErrorCode.ALREADY_ACTED, "Champion has already made a move this turn"
            )

        source.mark_acted(turn)
        source.attack_enemy(ctx, target)

    # CastAbility

    def _cast_ability(
        self, mover: Participant, command: CastAbility, ctx: CombatContext
    ) -> None:
        turn = self.turn_number
        source = self._own_unit(mover, command.source_uid)

        if not source.can_act(turn):
            raise RuleViolation(ErrorCode.STUNNED, "This champion is stunned.")
        if source.in_hand:
            raise RuleViolation(ErrorCode.IN_HAND, "Cannot use an ability from hand")
        if not source.ability_ready(turn):
            raise RuleViolation(ErrorCode.ON_COOLDOWN, "Ability is on cooldown")
        if source.has_acted(turn):
            raise RuleViolation(
                ErrorCode.ALREADY_ACTED, "Champion has already made a move this turn"
            )
        target = self._ability_target(source, command.target_uid)

        outcome = source.ability.effect(self.query, source, target)

        source.mark_acted(turn)
        ctx.set_ready_turn(source, turn + outcome.cooldown)
        for effect in outcome.effects:
            self._apply_effect(ctx, source, effect)
        logger.debug("Match %s: %s cast %s", self.id, source.uid, source.ability.ability_id)

    def _ability_target(self, source: Unit, target_uid: Optional[str]) -> Optional[Unit]:
        """Resolve and validate a cast's target against the ability's shape."""
        shape = source.ability.target_type
        turn = self.turn_number

        if shape == AbilityTargetType.SELF:
            if target_uid is not None and target_uid != source.uid:
                raise RuleViolation(ErrorCode.INVALID_TARGET, "This ability targets its caster")
            return source
        if not shape.needs_target:
            return None

        target = self.units.get(target_uid) if target_uid else None
        if target is None or target.in_hand:
            raise RuleViolation(ErrorCode.INVALID_TARGET, "Invalid ability target")
        if shape in (AbilityTargetType.AOE_ENEMY_ANY_LANE, AbilityTargetType.AOE_ALLY_ANY_LANE):
            return target

        if not target.is_targetable(turn):
            raise RuleViolation(ErrorCode.TARGET_UNTARGETABLE, "Target cannot be targeted")
        if shape in SINGLE_ENEMY_SHAPES and target.owner_id == source.owner_id:
            raise RuleViolation(ErrorCode.INVALID_TARGET, "Ability must target an enemy")
        if shape in SINGLE_ALLY_SHAPES and target.owner_id != source.owner_id:
            raise RuleViolation(ErrorCode.INVALID_TARGET, "Ability must target an ally")
        if shape in SAME_LANE_SHAPES and target.location != source.location:
            raise RuleViolation(ErrorCode.DIFFERENT_LANE, "Target must be in the same lane")
        return target

    def _apply_effect(self, ctx: CombatContext, source: Unit, effect: Effect) -> None:
        if isinstance(effect, NexusDamageEffect):
            participant = self.get_participant(effect.participant_id)
            if participant is not None and not participant.nexus_invulnerable(self.turn_number):
                participant.damage_nexus(effect.amount)
                ctx.update.nexus_health[participant.id] = participant.nexus_health
            return

        unit = self.units.get(effect.target_uid)
        if unit is None or not unit.is_alive:
            return

        if isinstance(effect, DamageEffect):
            unit.take_damage(ctx, effect.amount, source)
        elif isinstance(effect, HealEffect):
            unit.heal(ctx, effect.amount)
        elif isinstance(effect, StatusEffectApplication):
            ctx.apply_status(unit, effect.kind, effect.expires_turn, effect.value)
        elif isinstance(effect, MoveEffect):
            if unit.in_hand or not effect.location.is_lane:
                return
            if effect.location != unit.location:
                unit.set_location(ctx, effect.location)
        elif isinstance(effect, ResetActionEffect):
            reset_action(ctx, unit)
        elif isinstance(effect, DamageChangeEffect):
            ctx.change_damage(unit, effect.delta)
        elif isinstance(effect, CooldownEffect):
            ctx.set_ready_turn(unit, effect.ready_turn)

    # MoveUnit

    def _move_unit(
        self, mover: Participant, command: MoveUnit, ctx: CombatContext
    ) -> Optional[Unit]:
        turn = self.turn_number
        unit = self.units.get(command.uid)
        if unit is None:
            raise RuleViolation(ErrorCode.INVALID_SOURCE, "Invalid champion")
        if unit.owner_id != mover.id:
            raise RuleViolation(ErrorCode.NOT_OWNER, "Cannot move opponent champion")

        try:
            destination = Location(command.target_location)
        except ValueError as exc:
            raise RuleViolation(ErrorCode.INVALID_MOVE, "Invalid move") from exc

        if destination == unit.location:
            raise RuleViolation(ErrorCode.SAME_LOCATION, "Champion is already at this location")
        if destination == Location.HAND:
            raise RuleViolation(ErrorCode.MOVE_TO_HAND, "Cannot move champion to hand")
        if unit.has_acted(turn):
            raise RuleViolation(
                ErrorCode.ALREADY_ACTED, "Champion has already made a move this turn"
            )
        if destination.is_jungle:
            raise RuleViolation(ErrorCode.JUNGLE, "Jungles not yet implemented")
        if not is_adjacent(unit.location, destination):
            raise RuleViolation(ErrorCode.NOT_ADJACENT, "Cannot move more than one lane over")
        if unit.in_hand and self.field_count(mover.id) >= self.rules.max_field_units:
            raise RuleViolation(
                ErrorCode.FIELD_FULL,
                f"Cannot have more than {self.rules.max_field_units} champions out at a time.",
            )
        if not unit.can_act(turn):
            raise RuleViolation(ErrorCode.STUNNED, "This champion is stunned.")

        from_hand = unit.in_hand
        unit.mark_acted(turn)
        unit.set_location(ctx, destination)
        return unit if from_hand else None

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def to_summary(self) -> dict:
        """Lobby-level status safe to show anyone."""
        mover = self.current_mover if self.state == MatchState.STARTED else None
        return {
            "match_id": self.id,
            "state": self.state.value,
            "turn_number": self.turn_number,
            "moves_remaining": self.moves_remaining,
            "mover_id": mover.id if mover else None,
            "participant_count": len(self.participants),
            "participants": [p.to_dict() for p in self.participants],
            "victor_id": self.victor_id,
        }
