"""
Match API routes.
"""

from fastapi import APIRouter, Depends, HTTPException, WebSocket

from ..dependencies import get_match_service
from ..schemas.match import CreateMatchResponse, MatchSummarySchema
from ..services.match_service import MatchService
from ..websocket.handlers import MatchConnection

router = APIRouter()


@router.post("/create", response_model=CreateMatchResponse)
async def create_match(
    service: MatchService = Depends(get_match_service),
) -> CreateMatchResponse:
    """Create a new empty match."""
    room = service.create_match()
    return CreateMatchResponse(match_id=room.match_id)


@router.get("/{match_id}", response_model=MatchSummarySchema)
async def get_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
) -> MatchSummarySchema:
    """Get lobby status of a match."""
    match = service.get_match(match_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Match not found")
    return MatchSummarySchema(**match.to_summary())


@router.websocket("/{match_id}/ws")
async def match_socket(
    websocket: WebSocket,
    match_id: str,
    service: MatchService = Depends(get_match_service),
):
    """Join a match as a participant and play it over this socket."""
    room = service.get_room(match_id)
    if room is None:
        await websocket.close(code=4404)
        return
    await MatchConnection(websocket, room).run()
