from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
import logging
import uvicorn

from str8ts.board import random_board
from str8ts.game import GameSession
from str8ts.storage import load_game
from routes.game_routes import router as game_router, init_session
import str8ts.config as config

# Configure logging
root_logger = logging.getLogger()
root_logger.setLevel(logging.DEBUG)

# Clear existing handlers to avoid duplicates during reload
if root_logger.hasHandlers():
    root_logger.handlers.clear()

file_handler = logging.FileHandler("str8ts_debug.log", mode='a')
file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
root_logger.addHandler(file_handler)

stream_handler = logging.StreamHandler()
stream_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
root_logger.addHandler(stream_handler)

logger = logging.getLogger("str8ts_main")
logger.info("Logging initialized or re-initialized")

app = FastAPI(title="Str8ts", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(game_router)


def create_session() -> GameSession:
    """Load the save game if there is one, otherwise start from a random board."""
    cells = load_game(config.SAVEGAME_PATH) if config.is_savegame_present() else None
    if cells is None:
        cells = random_board(config.P_FIXED, config.P_WHITE)
    return GameSession(cells)


@app.on_event("startup")
def startup_event():
    init_session(create_session())
    logger.info("Game session initialized")


if __name__ == "__main__":
    is_frozen = getattr(sys, 'frozen', False)
    if is_frozen:
        uvicorn.run(app, host=config.APP_HOST, port=config.APP_PORT, reload=False)
    else:
        uvicorn.run("main:app", host=config.APP_HOST, port=config.APP_PORT, reload=True)
