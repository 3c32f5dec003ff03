import os
import json
from typing import List, Optional
import logging

from str8ts.board import BOARD_SIZE, EMPTY, NUM_CELLS, Cell

logger = logging.getLogger("str8ts_storage")


class ValidationError(ValueError):
    """A save game that does not describe a valid board."""


def cells_to_data(cells: List[Cell]) -> List[list]:
    # One [value, is_white, is_fixed, small_values] entry per cell
    return [[cell.value, cell.is_white, cell.is_fixed, list(cell.small_values)] for cell in cells]


def data_to_cells(data) -> List[Cell]:
    if not isinstance(data, list) or len(data) != NUM_CELLS:
        raise ValidationError(f"Unable to load game: expected {NUM_CELLS} cells.")

    cells = []
    for i, entry in enumerate(data):
        if not isinstance(entry, list) or len(entry) != 4:
            raise ValidationError(f"Unable to load game: malformed cell {i}.")
        value, is_white, is_fixed, small_values = entry

        if isinstance(value, bool) or not isinstance(value, int) or not (value == EMPTY or 1 <= value <= 9):
            raise ValidationError(f"Unable to load game: invalid cell value {value!r} at cell {i}.")
        if not isinstance(is_white, bool) or not isinstance(is_fixed, bool):
            raise ValidationError(f"Unable to load game: invalid flags at cell {i}.")
        if not isinstance(small_values, list) or len(small_values) != BOARD_SIZE \
                or not all(isinstance(v, bool) for v in small_values):
            raise ValidationError(f"Unable to load game: invalid small values at cell {i}.")

        cell = Cell(i, value, is_white, is_fixed)
        cell.small_values = list(small_values)
        cells.append(cell)
    return cells


def dumps_cells(cells: List[Cell]) -> str:
    return json.dumps(cells_to_data(cells))


def loads_cells(text: str) -> List[Cell]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Unable to load game: unable to parse JSON ({e}).") from e
    return data_to_cells(data)


def save_game(cells: List[Cell], path: str):
    directory = os.path.dirname(os.path.abspath(path))
    if not os.path.exists(directory):
        os.makedirs(directory)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_cells(cells))
    logger.info(f"Game saved to {path}")


def load_game(path: str) -> Optional[List[Cell]]:
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ValidationError(f"Unable to load game: file is not UTF-8 ({e}).") from e
    cells = loads_cells(text)
    logger.info(f"Game loaded from {path}")
    return cells


def delete_game(path: str) -> bool:
    if os.path.exists(path):
        os.remove(path)
        return True
    return False
