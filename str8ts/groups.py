from typing import List, Optional, Sequence, Tuple

from str8ts.board import BOARD_SIZE, BoardView

DIGITS = range(1, BOARD_SIZE + 1)


class ConstraintGroup:
    """A row or column of the board together with the straights it splits into."""

    def __init__(self, cells: List[int], board: BoardView):
        self.cells = cells
        self.straights: List[List[int]] = []

        current_straight = []
        for i in cells:
            if board.get(i).is_white:
                current_straight.append(i)
            elif current_straight:
                self.straights.append(current_straight)
                current_straight = []
        if current_straight:
            self.straights.append(current_straight)

    def straight_of(self, cell_index: int) -> Optional[List[int]]:
        for straight in self.straights:
            if cell_index in straight:
                return straight
        return None

    def validate(self, board: BoardView) -> Optional[Tuple[List[List[int]], List[List[int]]]]:
        """
        Finds duplicate values and invalid straights.
        Returns None if the group is fine, otherwise (duplicate index lists, invalid straights).
        """
        occurrences: List[List[int]] = [[] for _ in DIGITS]
        for i in self.cells:
            value = board.get(i).value
            if value > 0:
                occurrences[value - 1].append(i)
        duplicates = [indices for indices in occurrences if len(indices) > 1]

        # Even a partially filled straight must keep its span below its length
        invalid_straights = []
        for straight in self.straights:
            values = [board.get(i).value for i in straight if board.get(i).value > 0]
            if values and max(values) - min(values) >= len(straight):
                invalid_straights.append(list(straight))

        if duplicates or invalid_straights:
            return duplicates, invalid_straights
        return None

    def missing_values(self, candidates: Optional[Sequence[int]], board: BoardView) -> List[int]:
        """Digits not present in the group, restricted to candidates if given."""
        present = {board.get(i).value for i in self.cells}
        allowed = set(candidates) if candidates is not None else None
        return [v for v in DIGITS if v not in present and (allowed is None or v in allowed)]

    def possible_straight_values(self, cell_index: int, candidates: Sequence[int], board: BoardView) -> List[int]:
        """Candidates that keep the span of the cell's straight within its length."""
        straight = self.straight_of(cell_index)
        if straight is None:
            raise ValueError(f"Cell {cell_index} is not in any straight")

        values = [board.get(i).value for i in straight if board.get(i).value > 0]
        if not values:
            return list(candidates)

        low, high = min(values), max(values)
        length = len(straight)
        return [v for v in candidates
                if low < v < high
                or (v < low and high - v < length)
                or (v > high and v - low < length)]

    def __repr__(self):
        return f"ConstraintGroup({self.cells}, straights={self.straights})"


def compute_rows_columns(board: BoardView) -> List[ConstraintGroup]:
    """The 9 rows followed by the 9 columns."""
    groups = []
    for row in range(BOARD_SIZE):
        groups.append(ConstraintGroup([BOARD_SIZE * row + j for j in range(BOARD_SIZE)], board))
    for column in range(BOARD_SIZE):
        groups.append(ConstraintGroup([column + BOARD_SIZE * j for j in range(BOARD_SIZE)], board))
    return groups
