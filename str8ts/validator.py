from typing import List

from str8ts.board import BoardView
from str8ts.groups import ConstraintGroup


def validate_board(board: BoardView, rows_columns: List[ConstraintGroup]) -> bool:
    """
    Checks every row and column and marks the offending cells.
    Cells with a duplicate value lose is_valid_in_row, every cell of an
    over-stretched straight loses is_valid_in_straight. Returns whether the
    whole board is valid.
    """
    cell_data = []
    for cell in board:
        cell = cell.copy()
        cell.is_valid_in_row = True
        cell.is_valid_in_straight = True
        cell_data.append(cell)

    for group in rows_columns:
        violation = group.validate(board)
        if violation is None:
            continue
        duplicates, invalid_straights = violation
        for indices in duplicates:
            for i in indices:
                cell_data[i].is_valid_in_row = False
        for straight in invalid_straights:
            for i in straight:
                cell_data[i].is_valid_in_straight = False

    for i, cell in enumerate(cell_data):
        board.set(i, cell)

    return all(cell.is_valid_in_row and cell.is_valid_in_straight for cell in cell_data)
