"""
Game routes for the Str8ts service.
Each request is one event on the live board held by the GameSession.
"""

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel
from typing import Annotated, Optional
import logging

from str8ts.game import GameMode, GameSession
from str8ts.storage import ValidationError
import str8ts.config as config

logger = logging.getLogger("str8ts_routes")

router = APIRouter(tags=["game"])

_session: Optional[GameSession] = None


def init_session(session: GameSession):
    global _session
    _session = session


def get_session() -> GameSession:
    """The single live game. Created lazily if startup did not provide one."""
    global _session
    if _session is None:
        _session = GameSession()
    return _session


# Request Models
class ModeRequest(BaseModel):
    mode: GameMode


class KeyRequest(BaseModel):
    text: str


CellIndex = Annotated[int, Path(ge=0, le=80)]


@router.get("/board")
def get_board(session: GameSession = Depends(get_session)):
    with session.lock:
        return session.to_dict()


@router.post("/mode")
def set_mode(request: ModeRequest, session: GameSession = Depends(get_session)):
    with session.lock:
        session.set_mode(request.mode)
        return session.to_dict()


@router.post("/cells/{index}/click")
def click_cell(index: CellIndex, session: GameSession = Depends(get_session)):
    with session.lock:
        session.cell_clicked(index)
        return session.to_dict()


@router.post("/cells/{index}/key")
def press_key(request: KeyRequest, index: CellIndex, session: GameSession = Depends(get_session)):
    """Enter a digit or clear the editing cell. `solved` tells the client to flash the board."""
    with session.lock:
        result = session.cell_key_pressed(index, request.text)
        return {
            "handled": result is not None,
            "solved": bool(result),
            "board": session.to_dict(),
        }


@router.post("/solve")
def solve(session: GameSession = Depends(get_session)):
    with session.lock:
        solution = session.solve_puzzle()
        return {"result": solution.kind.value, "board": session.to_dict()}


@router.post("/generate")
def generate(session: GameSession = Depends(get_session)):
    with session.lock:
        generated = session.generate_puzzle()
        return {"generated": generated, "board": session.to_dict()}


@router.post("/reset")
def reset(session: GameSession = Depends(get_session)):
    with session.lock:
        session.reset()
        return session.to_dict()


@router.post("/save")
def save(session: GameSession = Depends(get_session)):
    with session.lock:
        session.save()
    return {"status": "success"}


@router.post("/save/delete")
def delete_save(session: GameSession = Depends(get_session)):
    with session.lock:
        if not session.delete_save():
            raise HTTPException(status_code=404, detail="No saved game found")
    return {"status": "success"}


@router.post("/load")
def load(session: GameSession = Depends(get_session)):
    with session.lock:
        try:
            loaded = session.load()
        except ValidationError as e:
            logger.error(f"Rejected save game {config.SAVEGAME_PATH}: {e}")
            raise HTTPException(status_code=400, detail=str(e))
        if not loaded:
            raise HTTPException(status_code=404, detail="No saved game found")
        return session.to_dict()
