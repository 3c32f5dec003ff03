import sys
import os

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from str8ts.board import Cell, EMPTY, NUM_CELLS


def make_board(white=None, values=None, fixed=()):
    """
    All-black empty board, then `white` indices turned white and `values`
    ({index: digit}) filled in. Indices in `fixed` become clues.
    """
    cells = [Cell(i, EMPTY, False, False) for i in range(NUM_CELLS)]
    for i in white or ():
        cells[i].is_white = True
    for i, value in (values or {}).items():
        cells[i].value = value
    for i in fixed:
        cells[i].is_fixed = True
    return cells


@pytest.fixture
def board_factory():
    return make_board
