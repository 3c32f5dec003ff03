import threading
from enum import Enum
from typing import List, Optional
import logging

import str8ts.config as config
from str8ts import storage
from str8ts.board import EMPTY, NUM_CELLS, Cell, ObservableBoard, empty_board, random_board
from str8ts.generator import PuzzleGenerator
from str8ts.groups import ConstraintGroup, compute_rows_columns
from str8ts.solver import SolutionKind, Str8tsSolution, solve_backtrack
from str8ts.validator import validate_board

logger = logging.getLogger("str8ts_game")

# Backspace and delete as sent by the front end
CLEAR_KEYS = ("\x07", "\x08", "\x7f")


class GameMode(str, Enum):
    NONE = "none"
    EDIT_BLACK_WHITE = "edit-black-white"
    EDIT_FIXED_NUMBERS = "edit-fixed-numbers"
    PLAY_ENTER_NUMBERS = "play-enter-numbers"
    PLAY_ENTER_SMALL_NUMBERS = "play-enter-small-numbers"

    @property
    def edits_numbers(self) -> bool:
        return self in (GameMode.EDIT_FIXED_NUMBERS, GameMode.PLAY_ENTER_NUMBERS,
                        GameMode.PLAY_ENTER_SMALL_NUMBERS)


class GameSession:
    """
    Owner of the live board. Every front-end event is one method call; the
    lock keeps events from overlapping when the web server uses threads.
    """

    def __init__(self, cells: Optional[List[Cell]] = None, generator: Optional[PuzzleGenerator] = None):
        self.board = ObservableBoard(cells if cells is not None else random_board(config.P_FIXED, config.P_WHITE))
        self.generator = generator or PuzzleGenerator()
        self.mode = GameMode.NONE
        self.editing_cell_index: Optional[int] = None
        self.rows_columns: List[ConstraintGroup] = []
        self.lock = threading.Lock()
        self.setup_rows_columns()
        self.validate_board()

    def setup_rows_columns(self):
        self.rows_columns = compute_rows_columns(self.board)

    def validate_board(self) -> bool:
        return validate_board(self.board, self.rows_columns)

    def is_complete(self) -> bool:
        return not any(cell.value <= 0 and cell.is_white for cell in self.board)

    def set_board(self, cells: List[Cell]):
        cells = [c.copy() for c in cells]
        for cell in cells:
            cell.is_editing = False
        self.board.set_board(cells)
        self.editing_cell_index = None
        self.setup_rows_columns()
        self.validate_board()

    def _stop_editing(self):
        if self.editing_cell_index is not None:
            cell = self.board.get(self.editing_cell_index).copy()
            cell.is_editing = False
            self.board.set(self.editing_cell_index, cell)
            self.editing_cell_index = None

    def set_mode(self, mode: GameMode):
        mode = GameMode(mode)
        if mode == GameMode.EDIT_BLACK_WHITE:
            self._stop_editing()
        self.mode = mode
        logger.debug(f"Mode set to {mode.value}")

    def cell_clicked(self, index: int):
        self._check_index(index)
        cell = self.board.get(index).copy()

        if self.mode == GameMode.EDIT_BLACK_WHITE:
            cell.is_white = not cell.is_white
            self.board.set(index, cell)
            self.setup_rows_columns()
            self.validate_board()

        elif self.mode.edits_numbers:
            was_editing = self.editing_cell_index == index
            self._stop_editing()
            if (not cell.is_fixed and cell.is_white) or self.mode == GameMode.EDIT_FIXED_NUMBERS:
                cell.is_editing = not was_editing
                if cell.is_editing:
                    self.editing_cell_index = index
            else:
                cell.is_editing = False
            self.board.set(index, cell)

    def cell_key_pressed(self, index: int, text: str) -> Optional[bool]:
        """
        Handles a key typed into the editing cell.
        Returns None if the key was not used, otherwise whether the board is
        now complete and valid.
        """
        self._check_index(index)
        if not self.mode.edits_numbers:
            return None

        cell = self.board.get(index).copy()
        if not cell.is_editing:
            return None

        if len(text) == 1 and text in "123456789":
            new_value = int(text)
        elif text in CLEAR_KEYS:
            new_value = EMPTY
        else:
            return None

        if self.mode in (GameMode.EDIT_FIXED_NUMBERS, GameMode.PLAY_ENTER_NUMBERS):
            cell.value = new_value
            cell.is_editing = False
            cell.is_fixed = self.mode == GameMode.EDIT_FIXED_NUMBERS and new_value > 0
            self.editing_cell_index = None
        elif new_value > 0:
            cell.small_values[new_value - 1] = not cell.small_values[new_value - 1]
        self.board.set(index, cell)

        is_valid = self.validate_board()
        return is_valid and self.is_complete()

    def solve_puzzle(self) -> Str8tsSolution:
        solution = solve_backtrack(self.board.snapshot())
        if solution.kind == SolutionKind.NONE:
            logger.info("No solution found.")
        else:
            self.set_board(solution.cells)
            if solution.is_unique:
                logger.info("Unique solution found.")
            else:
                logger.info("Multiple solutions found.")
        return solution

    def generate_puzzle(self) -> bool:
        puzzle = self.generator.generate()
        if puzzle is None:
            logger.info("No puzzle generated.")
            return False
        logger.info("Puzzle with unique solution generated.")
        self.set_board(puzzle)
        return True

    def reset(self):
        self.set_board(empty_board())

    def save(self, path: Optional[str] = None):
        storage.save_game(self.board.snapshot(), path or config.SAVEGAME_PATH)

    def load(self, path: Optional[str] = None) -> bool:
        cells = storage.load_game(path or config.SAVEGAME_PATH)
        if cells is None:
            return False
        self.set_board(cells)
        return True

    def delete_save(self, path: Optional[str] = None) -> bool:
        """Removes the save game. The live board is left as it is."""
        path = path or config.SAVEGAME_PATH
        deleted = storage.delete_game(path)
        if deleted:
            logger.info(f"Save game {path} deleted")
        return deleted

    def to_dict(self):
        return {
            "mode": self.mode.value,
            "editing_cell_index": self.editing_cell_index,
            "cells": [cell.to_dict() for cell in self.board],
        }

    @staticmethod
    def _check_index(index: int):
        if not 0 <= index < NUM_CELLS:
            raise IndexError(f"Cell index {index} outside 0..{NUM_CELLS - 1}")

