"""
Puzzle generation: start from a random layout and keep adding or lifting
fixed numbers until the solver reports exactly one solution.
"""

import random
from dataclasses import dataclass
from typing import Callable, List, Optional
import logging

import str8ts.config as config
from str8ts.board import EMPTY, NUM_CELLS, Cell, CellArray, random_board
from str8ts.candidates import compute_possible_values
from str8ts.groups import compute_rows_columns
from str8ts.solver import SolutionKind, Str8tsSolution, solve_backtrack

logger = logging.getLogger("str8ts_generator")


@dataclass
class GeneratorSettings:
    p_white: float = config.GENERATOR_P_WHITE
    p_fixed: float = config.GENERATOR_P_FIXED
    p_fill_black: float = config.GENERATOR_P_FILL_BLACK
    max_iterations: int = config.GENERATOR_MAX_ITERATIONS


class PuzzleGenerator:
    def __init__(self,
                 settings: Optional[GeneratorSettings] = None,
                 rng: Optional[random.Random] = None,
                 solve: Callable[[List[Cell]], Str8tsSolution] = solve_backtrack):
        self.settings = settings or GeneratorSettings()
        self.rng = rng or random.Random()
        self.solve = solve

    def generate(self, board: Optional[List[Cell]] = None) -> Optional[List[Cell]]:
        """
        Returns a board whose fixed cells admit exactly one solution, with all
        other values cleared, or None if no such board was reached.
        A given board contributes its colors and fixed numbers; otherwise a
        random layout is drawn.
        """
        if board is None:
            cells = random_board(0.0, self.settings.p_white, self.rng)
        else:
            cells = [c.copy() for c in board]
            for cell in cells:
                if not cell.is_fixed:
                    cell.value = EMPTY

        # Clues in the order they were added, so the newest can be lifted first
        fixed_indices = [c.index for c in cells if c.is_fixed and c.value > 0]

        # Colors never change from here on
        all_cells = CellArray(cells)
        rows_columns = compute_rows_columns(all_cells)

        for i in range(len(cells)):
            if self.rng.random() < self.settings.p_fixed and not cells[i].is_fixed:
                possible_values = compute_possible_values(i, all_cells, rows_columns)
                if possible_values:
                    cells[i].value = self.rng.choice(possible_values)
                    cells[i].is_fixed = True
                    fixed_indices.append(i)

        solution = None
        for i in range(self.settings.max_iterations):
            result = self.solve(cells)

            if result.kind == SolutionKind.NONE:
                logger.info(f"Generating puzzle: i = {i}. Lifting restriction.")
                if not fixed_indices:
                    logger.info("Cannot find any solution even without fixed numbers.")
                    break
                cell_index = fixed_indices.pop()
                cells[cell_index].value = EMPTY
                cells[cell_index].is_fixed = False

            elif result.kind == SolutionKind.UNIQUE:
                solution = result.cells
                break

            else:
                cell_index = self._pick_restriction(cells, result.cells, all_cells, rows_columns)
                if cell_index is None:
                    logger.info("No cell left to fix, giving up.")
                    break

                witness_value = result.cells[cell_index].value
                if witness_value > 0:
                    cells[cell_index].value = witness_value
                else:
                    possible_values = compute_possible_values(cell_index, all_cells, rows_columns)
                    cells[cell_index].value = self.rng.choice(possible_values)
                cells[cell_index].is_fixed = True
                fixed_indices.append(cell_index)
                logger.info(f"Generating puzzle: i = {i}. Imposing restriction. "
                            f"cell {cell_index} = {cells[cell_index].value}")

        if solution is None:
            return None

        puzzle = [c.copy() for c in solution]
        for cell in puzzle:
            if not cell.is_fixed:
                cell.value = EMPTY
        return puzzle

    def _pick_restriction(self, cells, witness, all_cells, rows_columns) -> Optional[int]:
        """
        Draws random cells until one can be fixed: a free cell with a value in
        the witness solution, or (gated by p_fill_black) an empty black cell
        that still has candidates.
        """
        def fillable_black(j):
            return (not cells[j].is_white and witness[j].value <= 0
                    and len(compute_possible_values(j, all_cells, rows_columns)) > 0)

        has_free = any(not cells[j].is_fixed and witness[j].value > 0 for j in range(NUM_CELLS))
        if not has_free and (self.settings.p_fill_black <= 0
                             or not any(fillable_black(j) for j in range(NUM_CELLS))):
            return None

        while True:
            j = self.rng.randrange(NUM_CELLS)
            if not cells[j].is_fixed and witness[j].value > 0:
                return j
            if fillable_black(j) and self.rng.random() < self.settings.p_fill_black:
                return j


def generate_puzzle(settings: Optional[GeneratorSettings] = None,
                    rng: Optional[random.Random] = None) -> Optional[List[Cell]]:
    return PuzzleGenerator(settings, rng).generate()
