"""
WebSocket handlers for real-time match play.

One connection is one participant. The connection loop decodes inbound
envelopes and hands them to the match room; everything the room sends goes
back through ``send_json``.
"""

import logging
from typing import Any, Dict

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from riftclash.core.errors import ErrorCode, MatchError, RuleViolation

from ..schemas.match import ClientEvent, ClientMessage, MoveRequest, SelectRequest
from ..services.match_service import MatchRoom, event

logger = logging.getLogger(__name__)


def _validation_error(exc: ValidationError) -> Dict[str, Any]:
    return event("error", {"code": ErrorCode.INVALID_MOVE.value, "message": str(exc)})


class MatchConnection:
    """Bridge between one WebSocket and one participant of a room."""

    def __init__(self, websocket: WebSocket, room: MatchRoom):
        self.websocket = websocket
        self.room = room
        self.participant_id = None

    async def send(self, message: Dict[str, Any]) -> None:
        """Sender handed to the room. A closed socket is logged, not raised."""
        try:
            await self.websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.warning("Match %s: could not deliver %s to %s: %s",
                           self.room.match_id, message.get("event"), self.participant_id, exc)

    async def run(self) -> None:
        """Accept, join, and serve messages until the socket closes."""
        await self.websocket.accept()
        try:
            self.participant_id = await self.room.join(self.send)
        except MatchError as exc:
            await self.websocket.send_json(event("error", exc.to_dict()))
            await self.websocket.close()
            return

        try:
            while True:
                raw = await self.websocket.receive_text()
                await self.handle(raw)
        except WebSocketDisconnect:
            logger.info("Match %s: socket closed for %s", self.room.match_id, self.participant_id)
        finally:
            await self.room.disconnect(self.participant_id)

    async def handle(self, raw: str) -> None:
        try:
            message = ClientMessage.model_validate_json(raw)
        except ValidationError as exc:
            await self.send(_validation_error(exc))
            return

        if message.event == ClientEvent.SELECT:
            try:
                request = SelectRequest.model_validate(message.data)
            except ValidationError as exc:
                await self.send(_validation_error(exc))
                return
            await self.room.select(
                self.participant_id,
                request.summoner_name,
                pairs=request.pairs,
                icon_id=request.icon_id,
            )
        elif message.event == ClientEvent.MOVE:
            try:
                request = MoveRequest.model_validate(message.data)
            except ValidationError as exc:
                await self.send(_validation_error(exc))
                return
            command = request.to_command()
            if command is None:
                error = RuleViolation(ErrorCode.INVALID_MOVE, "Invalid move")
                await self.send(event("error", error.to_dict()))
                return
            await self.room.move(self.participant_id, command)
        elif message.event == ClientEvent.PASS:
            await self.room.request_pass(self.participant_id)
