import random

import pytest

from conftest import make_board
import str8ts.config as config
from str8ts.board import EMPTY
from str8ts.game import GameMode, GameSession
from str8ts.generator import GeneratorSettings, PuzzleGenerator
from str8ts.solver import SolutionKind
from str8ts.storage import ValidationError


@pytest.fixture
def session():
    # Row 0 straight [0, 1] with a clue of 1, everything else black
    return GameSession(make_board(white=[0, 1], values={0: 1}, fixed=[0]))


class TestModes:
    """Interaction modes of the session"""

    def test_modes_from_strings(self):
        """Modes parse from their wire names only"""
        assert GameMode("play-enter-small-numbers") == GameMode.PLAY_ENTER_SMALL_NUMBERS
        with pytest.raises(ValueError):
            GameMode("edit-everything")

    def test_set_mode_accepts_strings(self, session):
        session.set_mode("edit-fixed-numbers")
        assert session.mode == GameMode.EDIT_FIXED_NUMBERS
        with pytest.raises(ValueError):
            session.set_mode("sideways")

    def test_black_white_mode_stops_editing(self, session):
        """Switching to color editing drops the editing cell"""
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(1)
        assert session.board.get(1).is_editing
        session.set_mode(GameMode.EDIT_BLACK_WHITE)
        assert not session.board.get(1).is_editing
        assert session.editing_cell_index is None


class TestClicks:
    """Cell clicks in each mode"""

    def test_toggle_color_rebuilds_straights(self, session):
        """Turning a black cell white extends the straight"""
        session.set_mode(GameMode.EDIT_BLACK_WHITE)
        session.cell_clicked(2)
        assert session.board.get(2).is_white
        assert session.rows_columns[0].straights == [[0, 1, 2]]

    def test_toggle_color_revalidates(self):
        """Joining two cells into one straight flags the gap"""
        session = GameSession(make_board(white=[0, 2], values={0: 1, 2: 4}))
        assert session.board.get(0).is_valid_in_straight
        session.set_mode(GameMode.EDIT_BLACK_WHITE)
        session.cell_clicked(1)
        assert not session.board.get(0).is_valid_in_straight

    def test_only_one_editing_cell(self):
        session = GameSession(make_board(white=[0, 1, 2]))
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(0)
        session.cell_clicked(2)
        assert [session.board.get(i).is_editing for i in range(3)] == [False, False, True]
        assert session.editing_cell_index == 2

    def test_click_again_stops_editing(self, session):
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(1)
        session.cell_clicked(1)
        assert not session.board.get(1).is_editing
        assert session.editing_cell_index is None

    def test_fixed_and_black_cells_not_editable_in_play(self, session):
        """While playing, clues and black cells cannot be edited"""
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(0)
        session.cell_clicked(5)
        assert not session.board.get(0).is_editing
        assert not session.board.get(5).is_editing

    def test_any_cell_editable_when_editing_clues(self, session):
        session.set_mode(GameMode.EDIT_FIXED_NUMBERS)
        session.cell_clicked(5)
        assert session.board.get(5).is_editing

    def test_no_mode_ignores_clicks(self, session):
        session.cell_clicked(1)
        assert not session.board.get(1).is_editing

    def test_index_out_of_range(self, session):
        with pytest.raises(IndexError):
            session.cell_clicked(81)


class TestKeys:
    """Keys typed into the editing cell"""

    def test_entering_last_number_solves(self, session):
        """The final correct digit reports a solved board"""
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(1)
        assert session.cell_key_pressed(1, "2") is True
        assert session.board.get(1).value == 2
        assert not session.board.get(1).is_fixed
        assert not session.board.get(1).is_editing

    def test_invalid_number_is_flagged(self, session):
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(1)
        assert session.cell_key_pressed(1, "5") is False
        assert not session.board.get(1).is_valid_in_straight

    @pytest.mark.parametrize("key", ["\x07", "\x08", "\x7f"])
    def test_clear_keys(self, session, key):
        """Each clear key empties the cell"""
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(1)
        session.cell_key_pressed(1, "2")
        session.cell_clicked(1)
        assert session.cell_key_pressed(1, key) is False
        assert session.board.get(1).value == EMPTY
        assert not session.board.get(1).is_editing

    def test_fixed_numbers(self, session):
        """Digits typed while editing clues become fixed"""
        session.set_mode(GameMode.EDIT_FIXED_NUMBERS)
        session.cell_clicked(1)
        session.cell_key_pressed(1, "2")
        assert session.board.get(1).is_fixed

    def test_clearing_a_clue_unfixes_it(self, session):
        session.set_mode(GameMode.EDIT_FIXED_NUMBERS)
        session.cell_clicked(0)
        session.cell_key_pressed(0, "\x08")
        assert session.board.get(0).value == EMPTY
        assert not session.board.get(0).is_fixed

    def test_small_numbers_toggle(self, session):
        """Pencil marks toggle and keep the cell in editing"""
        session.set_mode(GameMode.PLAY_ENTER_SMALL_NUMBERS)
        session.cell_clicked(1)
        session.cell_key_pressed(1, "3")
        assert session.board.get(1).small_values[2]
        assert session.board.get(1).is_editing
        session.cell_key_pressed(1, "3")
        assert not session.board.get(1).small_values[2]
        assert session.board.get(1).value == EMPTY

    @pytest.mark.parametrize("text", ["0", "a", "12", "", "²"])
    def test_ignored_keys(self, session, text):
        """Anything but a single digit 1..9 or a clear key is not handled"""
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(1)
        assert session.cell_key_pressed(1, text) is None

    def test_cell_not_editing(self, session):
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        assert session.cell_key_pressed(1, "2") is None

    def test_wrong_mode(self, session):
        session.set_mode(GameMode.EDIT_BLACK_WHITE)
        assert session.cell_key_pressed(1, "2") is None


class TestActions:
    """Solve, generate, reset and board observers"""

    def test_solve_writes_solution(self, session):
        """A unique solution replaces the live board"""
        solution = session.solve_puzzle()
        assert solution.kind == SolutionKind.UNIQUE
        assert session.board.get(1).value == 2
        assert session.is_complete()

    def test_solve_without_solution_keeps_board(self):
        session = GameSession(make_board(white=[0, 1], values={0: 1, 10: 2}))
        assert session.solve_puzzle().kind == SolutionKind.NONE
        assert session.board.get(1).value == EMPTY

    def test_generate(self):
        """An all-black draw is a trivially unique puzzle"""
        settings = GeneratorSettings(p_white=0.0, p_fixed=0.0, p_fill_black=0.0, max_iterations=5)
        session = GameSession(make_board(white=range(81)), PuzzleGenerator(settings, random.Random(0)))
        assert session.generate_puzzle()
        assert not any(c.is_white for c in session.board)
        assert session.rows_columns[0].straights == []

    def test_generate_failure_keeps_board(self):
        settings = GeneratorSettings(p_white=0.0, max_iterations=0)
        session = GameSession(make_board(white=[0, 1]), PuzzleGenerator(settings, random.Random(0)))
        assert not session.generate_puzzle()
        assert session.board.get(1).is_white

    def test_reset(self, session):
        """Reset gives an empty all-white board with full-length straights"""
        session.reset()
        assert all(c.is_white and c.value == EMPTY for c in session.board)
        assert len(session.rows_columns[0].straights[0]) == 9

    def test_to_dict(self, session):
        data = session.to_dict()
        assert data["mode"] == "none"
        assert len(data["cells"]) == 81

    def test_observers_see_edits(self, session):
        """Listeners hear about every cell write"""
        seen = []
        session.board.subscribe(lambda index, cell: seen.append(index))
        session.set_mode(GameMode.PLAY_ENTER_NUMBERS)
        session.cell_clicked(1)
        assert seen == [1]


class TestSaveGames:
    """Saving, loading and deleting the save game"""

    def test_save_and_load(self, session, tmp_path):
        path = str(tmp_path / "game_state.json")
        session.save(path)
        session.reset()
        assert session.load(path)
        assert session.board.get(0).value == 1
        assert session.board.get(0).is_fixed
        assert not session.board.get(2).is_white

    def test_load_missing(self, session, tmp_path):
        assert not session.load(str(tmp_path / "missing.json"))

    def test_default_path_read_at_call_time(self, session, tmp_path, monkeypatch):
        """Without a path the configured save game location at call time is used"""
        path = tmp_path / "configured.json"
        monkeypatch.setattr(config, "SAVEGAME_PATH", str(path))
        session.save()
        assert path.exists()
        session.reset()
        assert session.load()
        assert session.board.get(0).value == 1

    def test_load_rejects_non_utf8(self, session, tmp_path):
        """An undecodable file raises ValidationError and leaves the board alone"""
        path = tmp_path / "game_state.json"
        path.write_bytes(b"[\xff\xfe]")
        with pytest.raises(ValidationError):
            session.load(str(path))
        assert session.board.get(0).value == 1

    def test_delete_save(self, session, tmp_path, monkeypatch):
        """Deleting removes the file but keeps the live board"""
        path = tmp_path / "game_state.json"
        monkeypatch.setattr(config, "SAVEGAME_PATH", str(path))
        session.save()
        assert session.delete_save()
        assert not path.exists()
        assert session.board.get(0).value == 1
        assert not session.delete_save()
        assert not session.load()
