from typing import List

from str8ts.board import BOARD_SIZE, BoardView
from str8ts.groups import ConstraintGroup


def compute_possible_values(cell_index: int, board: BoardView, rows_columns: List[ConstraintGroup]) -> List[int]:
    """
    Digits that can go into the cell right now without a duplicate in its row
    or column and, for white cells, without stretching either straight too far.
    Only local consistency; the board may still be unsolvable.
    """
    row = rows_columns[cell_index // BOARD_SIZE]
    column = rows_columns[BOARD_SIZE + cell_index % BOARD_SIZE]

    possible_values = row.missing_values(None, board)
    possible_values = column.missing_values(possible_values, board)

    if board.get(cell_index).is_white:
        possible_values = row.possible_straight_values(cell_index, possible_values, board)
        possible_values = column.possible_straight_values(cell_index, possible_values, board)

    return possible_values
