from enum import Enum
from typing import List, Optional
import logging

from str8ts.board import EMPTY, Cell, CellArray
from str8ts.candidates import compute_possible_values
from str8ts.groups import compute_rows_columns

logger = logging.getLogger("str8ts_solver")


class SolutionKind(str, Enum):
    NONE = "none"
    UNIQUE = "unique"
    MULTIPLE = "multiple"


class Str8tsSolution:
    """
    Whether a board has no, one or several solutions.
    For UNIQUE and MULTIPLE, `cells` holds the first solution found.
    """

    def __init__(self, kind: SolutionKind, cells: Optional[List[Cell]] = None):
        self.kind = kind
        self.cells = cells

    @property
    def is_unique(self) -> bool:
        return self.kind == SolutionKind.UNIQUE

    def __repr__(self):
        return f"Str8tsSolution({self.kind.value})"


def solve_backtrack(cells: List[Cell]) -> Str8tsSolution:
    """
    Solves the board by backtracking, stopping as soon as a second solution
    turns up. Can take a long time on sparse boards. The given cells are not
    modified.
    Givens that already break a rule, black cells included, give NONE
    without searching.
    """
    cells = [c.copy() for c in cells]
    board = CellArray(cells)
    rows_columns = compute_rows_columns(board)

    if any(group.validate(board) is not None for group in rows_columns):
        logger.debug("Given values already break a rule, nothing to search")
        return Str8tsSolution(SolutionKind.NONE)

    # For every j < i, cell j is black, had a value beforehand, or holds
    # possible_values_stack[j][indices_stack[j] - 1]
    possible_values_stack: List[List[int]] = []
    indices_stack: List[int] = []
    i = 0
    n = len(cells)

    found_solutions: List[List[Cell]] = []
    nodes = 0
    while len(found_solutions) < 2:
        while i < n:
            # Cells that need no decision still get a frame to keep the stacks aligned with i
            if (not cells[i].is_white or cells[i].value > 0) and i >= len(possible_values_stack):
                possible_values_stack.append([])
                indices_stack.append(0)
                i += 1
                continue

            if i >= len(possible_values_stack):
                possible_values_stack.append(compute_possible_values(i, board, rows_columns))
                indices_stack.append(0)
                nodes += 1
            possible_values = possible_values_stack[i]

            if indices_stack[i] < len(possible_values):
                cells[i].value = possible_values[indices_stack[i]]
                indices_stack[i] += 1
                i += 1
            else:
                number_of_possibilities = len(possible_values_stack.pop())
                indices_stack.pop()
                if number_of_possibilities > 0:
                    cells[i].value = EMPTY
                if i == 0:
                    break
                i -= 1

        # Leaving the inner loop anywhere but at 0 means every cell is decided
        if i != 0:
            found_solutions.append([c.copy() for c in cells])
            logger.debug(f"Solution {len(found_solutions)} found after {nodes} nodes")
            i -= 1
        else:
            break

    if not found_solutions:
        return Str8tsSolution(SolutionKind.NONE)
    if len(found_solutions) == 1:
        return Str8tsSolution(SolutionKind.UNIQUE, found_solutions[0])
    return Str8tsSolution(SolutionKind.MULTIPLE, found_solutions[0])
