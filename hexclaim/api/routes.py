from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from hexclaim.api.deps import get_game_session
from hexclaim.api.models import BoardSnapshot, ClickResponse, GameCreateRequest
from hexclaim.config import GameConfig
from hexclaim.session import GameSession, SessionBusy, get_config, new_session
from hexclaim.websocket_hub import hub

router = APIRouter()


@router.websocket("/ws/board")
async def board_updates_ws(websocket: WebSocket) -> None:
    await hub.connect(websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(websocket)
    except Exception:
        await hub.disconnect(websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/board", response_model=BoardSnapshot)
async def get_board_route(session: GameSession = Depends(get_game_session)) -> BoardSnapshot:
    return BoardSnapshot.from_game(session.controller.game)


@router.post("/game", response_model=BoardSnapshot, status_code=status.HTTP_201_CREATED)
async def create_game_route(payload: GameCreateRequest) -> BoardSnapshot:
    overrides = payload.model_dump(exclude_none=True)
    try:
        config = GameConfig.model_validate({**get_config().model_dump(), **overrides})
        session = await new_session(config)
    except SessionBusy as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    return BoardSnapshot.from_game(session.controller.game)


@router.post("/board/fields/{x}/{y}/click", response_model=ClickResponse)
async def click_field_route(
    x: int,
    y: int,
    session: GameSession = Depends(get_game_session),
) -> ClickResponse:
    game = session.controller.game
    if game.board.find(x, y) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No field at ({x}, {y})")

    accepted = await session.controller.on_field_clicked(x, y)
    return ClickResponse(accepted=accepted, board=BoardSnapshot.from_game(game))


@router.get("/board/events")
async def recent_events_route(
    count: int = 50,
    session: GameSession = Depends(get_game_session),
) -> dict[str, object]:
    """Debug endpoint: most recent board events, oldest first."""

    events = list(session.history.events)[-count:] if count > 0 else []
    return {"count": len(events), "events": [e.to_payload() for e in events]}
