import random
from typing import Callable, Iterator, List, Optional
import logging

logger = logging.getLogger("str8ts_board")

BOARD_SIZE = 9
NUM_CELLS = BOARD_SIZE * BOARD_SIZE
EMPTY = -1


class Cell:
    def __init__(self, index: int, value: int = EMPTY, is_white: bool = True, is_fixed: bool = False):
        self.index = index
        self.value = value
        self.is_white = is_white
        self.is_fixed = is_fixed
        self.small_values: List[bool] = [False] * BOARD_SIZE # Pencil marks
        self.is_editing = False
        self.is_valid_in_row = True
        self.is_valid_in_straight = True

    @property
    def pos_x(self) -> int:
        return self.index % BOARD_SIZE

    @property
    def pos_y(self) -> int:
        return self.index // BOARD_SIZE

    def copy(self) -> 'Cell':
        cell = Cell(self.index, self.value, self.is_white, self.is_fixed)
        cell.small_values = list(self.small_values)
        cell.is_editing = self.is_editing
        cell.is_valid_in_row = self.is_valid_in_row
        cell.is_valid_in_straight = self.is_valid_in_straight
        return cell

    def to_dict(self):
        return {
            "index": self.index,
            "value": self.value,
            "is_white": self.is_white,
            "is_fixed": self.is_fixed,
            "small_values": list(self.small_values),
            "is_editing": self.is_editing,
            "is_valid_in_row": self.is_valid_in_row,
            "is_valid_in_straight": self.is_valid_in_straight,
        }

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        color = "W" if self.is_white else "B"
        return f"({self.pos_y},{self.pos_x}:{color}{self.value})"


class BoardView:
    """
    Indexed get/set access to the 81 cells of a board.
    The candidate engine, the validator and the solver only talk to this
    interface, so they work the same on a scratch array and on the live grid.
    """

    def get(self, index: int) -> Cell:
        raise NotImplementedError

    def set(self, index: int, cell: Cell):
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Cell]:
        for i in range(len(self)):
            yield self.get(i)

    def snapshot(self) -> List[Cell]:
        """Detached copy of every cell."""
        return [cell.copy() for cell in self]


class CellArray(BoardView):
    """Plain list of cells, used for search copies. Wraps the list without copying it."""

    def __init__(self, cells: List[Cell]):
        self.cells = cells

    def get(self, index: int) -> Cell:
        return self.cells[index]

    def set(self, index: int, cell: Cell):
        self.cells[index] = cell

    def __len__(self) -> int:
        return len(self.cells)


class ObservableBoard(BoardView):
    """
    The live board. Every write is reported to the subscribed listeners as
    (index, cell), which is how a front end keeps its display in sync.
    """

    def __init__(self, cells: Optional[List[Cell]] = None):
        self._cells: List[Cell] = [c.copy() for c in cells] if cells is not None else empty_board()
        self._listeners: List[Callable[[int, Cell], None]] = []

    def subscribe(self, listener: Callable[[int, Cell], None]):
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[int, Cell], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get(self, index: int) -> Cell:
        return self._cells[index]

    def set(self, index: int, cell: Cell):
        self._cells[index] = cell
        for listener in self._listeners:
            listener(index, cell)

    def __len__(self) -> int:
        return len(self._cells)

    def set_board(self, cells: List[Cell]):
        """Replaces every cell, notifying listeners once per cell."""
        if len(cells) != NUM_CELLS:
            raise ValueError(f"A board has {NUM_CELLS} cells, got {len(cells)}")
        for i, cell in enumerate(cells):
            self.set(i, cell.copy())


def random_board(p_fixed: float, p_white: float, rng: Optional[random.Random] = None) -> List[Cell]:
    """
    Random board with the given probabilities for fixed-number cells and white
    cells. The result is usually not valid, let alone uniquely solvable.
    """
    rng = rng or random.Random()
    cells = []
    for i in range(NUM_CELLS):
        is_fixed = rng.random() < p_fixed
        is_white = rng.random() < p_white
        value = rng.randint(1, 9) if is_fixed else EMPTY
        cells.append(Cell(i, value, is_white, is_fixed))
    logger.debug(f"Random board: p_fixed={p_fixed}, p_white={p_white}")
    return cells


def empty_board() -> List[Cell]:
    return random_board(0.0, 1.0)


def board_from_rows(colors: List[str], values: Optional[List[List[int]]] = None) -> List[Cell]:
    """
    Builds a board from 9 strings of 'W'/'B' (one per row) and optional 9x9 values.
    Lower-case letters mark fixed cells, e.g. "WWbWW" fixes the value at column 2.
    """
    if len(colors) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in colors):
        raise ValueError("Expected 9 rows of 9 colors")
    cells = []
    for r, row in enumerate(colors):
        for c, ch in enumerate(row):
            if ch.upper() not in ("W", "B"):
                raise ValueError(f"Unknown color {ch!r} at ({r}, {c})")
            value = values[r][c] if values is not None else EMPTY
            cells.append(Cell(r * BOARD_SIZE + c, value, ch.upper() == "W", ch.islower() and value > 0))
    return cells
