"""
Configuration settings for the Str8ts game service.
Values can be overridden with environment variables or a .env file.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Random board used on startup and reset (no save game present)
P_WHITE = float(os.getenv("STR8TS_P_WHITE", "1.0"))
P_FIXED = float(os.getenv("STR8TS_P_FIXED", "0.0"))

# Puzzle generator tuning
GENERATOR_P_WHITE = float(os.getenv("STR8TS_GENERATOR_P_WHITE", "0.6"))
GENERATOR_P_FIXED = float(os.getenv("STR8TS_GENERATOR_P_FIXED", "0.0"))
GENERATOR_P_FILL_BLACK = float(os.getenv("STR8TS_GENERATOR_P_FILL_BLACK", "0.3"))
GENERATOR_MAX_ITERATIONS = int(os.getenv("STR8TS_GENERATOR_MAX_ITERATIONS", "1000"))

# Save game location
SAVEGAME_PATH = os.getenv("STR8TS_SAVEGAME_PATH", "./game_state.json")

# Application settings
APP_HOST = os.getenv("APP_HOST", "127.0.0.1")
APP_PORT = int(os.getenv("APP_PORT", "8008"))


def is_savegame_present() -> bool:
    """Check if a save game exists at SAVEGAME_PATH."""
    return os.path.exists(SAVEGAME_PATH)
