"""
Tests for win/tie detection and the game engine.
"""

import pytest

from connectfour.config import GameConfig
from connectfour.exceptions import ColumnFull, InvalidColumn, InvalidMove
from connectfour.game.board import Board
from connectfour.game.events import MoveApplied, StatusChanged, TurnGranted, drain
from connectfour.game.rules import GameEngine, has_winning_line, is_tied
from connectfour.utils import ROWS, COLS, GameResult, GameStatus, Player

ONE, TWO = Player.ONE, Player.TWO


def board_with(drops, rows=ROWS, cols=COLS, debug=None):
    """Build a board from (column, player) drops."""
    board = Board(rows, cols, debug=debug)
    for col, player in drops:
        board.drop(col, player)
    return board


class TestWinDetection:
    """has_winning_line over the whole board."""
    
    def test_horizontal_four_on_bottom_row(self, quiet):
        """ONE at (0,5),(1,5),(2,5),(3,5) as (col,row) is a win."""
        board = board_with([(c, ONE) for c in range(4)], debug=quiet)
        assert [board.contents_at(5, c) for c in range(4)] == [ONE] * 4
        assert has_winning_line(board)
    
    def test_horizontal_three_is_not_a_win(self, quiet):
        board = board_with([(c, ONE) for c in range(3)], debug=quiet)
        assert not has_winning_line(board)
    
    def test_horizontal_four_at_right_edge(self, quiet):
        board = board_with([(c, TWO) for c in range(3, 7)], debug=quiet)
        assert has_winning_line(board)
    
    def test_vertical_four(self, quiet):
        board = board_with([(2, TWO)] * 4, debug=quiet)
        assert has_winning_line(board)
    
    def test_vertical_four_reaching_top_row(self, quiet):
        board = board_with([(6, ONE), (6, ONE)] + [(6, TWO)] * 4, debug=quiet)
        assert has_winning_line(board)
    
    def test_rising_diagonal(self, quiet):
        """ONE climbs from bottom-left to top-right over TWO supports."""
        drops = [(0, ONE),
                 (1, TWO), (1, ONE),
                 (2, TWO), (2, TWO), (2, ONE),
                 (3, TWO), (3, TWO), (3, TWO), (3, ONE)]
        assert has_winning_line(board_with(drops, debug=quiet))
    
    def test_falling_diagonal(self, quiet):
        """Mirror image: ONE climbs from bottom-right to top-left."""
        drops = [(6, ONE),
                 (5, TWO), (5, ONE),
                 (4, TWO), (4, TWO), (4, ONE),
                 (3, TWO), (3, TWO), (3, TWO), (3, ONE)]
        assert has_winning_line(board_with(drops, debug=quiet))
    
    def test_diagonal_broken_by_opponent(self, quiet):
        drops = [(0, ONE),
                 (1, TWO), (1, ONE),
                 (2, TWO), (2, TWO), (2, TWO),
                 (3, TWO), (3, TWO), (3, TWO), (3, ONE)]
        assert not has_winning_line(board_with(drops, debug=quiet))
    
    def test_diagonal_broken_by_gap(self, quiet):
        drops = [(0, ONE),
                 (1, TWO), (1, ONE),
                 (2, TWO), (2, TWO),
                 (3, TWO), (3, TWO), (3, TWO), (3, ONE)]
        assert not has_winning_line(board_with(drops, debug=quiet))
    
    def test_mixed_run_is_not_a_win(self, quiet):
        board = board_with([(0, ONE), (1, ONE), (2, TWO), (3, ONE)], debug=quiet)
        assert not has_winning_line(board)
    
    def test_empty_board(self, quiet):
        assert not has_winning_line(Board(debug=quiet))
    
    def test_custom_line_length(self, quiet):
        """The required length is a parameter, not a constant."""
        board = board_with([(c, ONE) for c in range(4)], debug=quiet)
        assert not has_winning_line(board, 5)
        board.drop(4, ONE)
        assert has_winning_line(board, 5)
        assert has_winning_line(board, 3)


class TestTieDetection:
    """is_tied requires a full board without any line."""
    
    def test_full_board_without_line_is_tied(self, tie_moves, quiet):
        engine = GameEngine(debug=quiet)
        for col in tie_moves:
            engine.apply_move(col)
        assert engine.board.is_full()
        assert not has_winning_line(engine.board)
        assert is_tied(engine.board)
    
    def test_full_board_with_line_is_not_tied(self, tie_moves, quiet):
        """A filled board containing four in a row counts as a win."""
        engine = GameEngine(debug=quiet)
        for col in tie_moves:
            engine.apply_move(col)
        engine.board.grid[ROWS - 1, 0:4] = ONE.value
        assert has_winning_line(engine.board)
        assert not is_tied(engine.board)
    
    def test_partial_board_is_not_tied(self, tie_moves, quiet):
        engine = GameEngine(debug=quiet)
        for col in tie_moves[:-1]:
            engine.apply_move(col)
        assert not engine.is_tied()


class TestGameEngine:
    """Turn bookkeeping and move application."""
    
    def test_player_one_moves_first(self, quiet):
        engine = GameEngine(debug=quiet)
        assert engine.current_player == ONE
        assert engine.status == GameStatus.in_progress()
    
    def test_turn_alternates(self, tie_moves, quiet):
        """Move n+1 is made by ONE exactly when n is even."""
        engine = GameEngine(debug=quiet)
        for n, col in enumerate(tie_moves[:20]):
            assert engine.current_player == (ONE if n % 2 == 0 else TWO)
            outcome = engine.apply_move(col)
            assert outcome.mover == (ONE if n % 2 == 0 else TWO)
        assert engine.moves_applied == 20
    
    def test_outcome_reports_landing_row(self, quiet):
        engine = GameEngine(debug=quiet)
        assert engine.apply_move(3).row == ROWS - 1
        outcome = engine.apply_move(3)
        assert outcome == (3, ROWS - 2, TWO)
        assert engine.board.contents_at(ROWS - 2, 3) == TWO
    
    @pytest.mark.parametrize("col,cause", [(-1, InvalidColumn), (COLS, InvalidColumn)])
    def test_invalid_column_wrapped(self, col, cause, quiet):
        """Board errors surface as InvalidMove and leave the turn alone."""
        engine = GameEngine(debug=quiet)
        with pytest.raises(InvalidMove) as excinfo:
            engine.apply_move(col)
        assert isinstance(excinfo.value.__cause__, cause)
        assert excinfo.value.column == col
        assert engine.current_player == ONE
    
    def test_full_column_wrapped(self, quiet):
        engine = GameEngine(GameConfig(rows=2, cols=3, win_len=3), debug=quiet)
        engine.apply_move(0)
        engine.apply_move(0)
        with pytest.raises(InvalidMove) as excinfo:
            engine.apply_move(0)
        assert isinstance(excinfo.value.__cause__, ColumnFull)
        assert engine.current_player == ONE
    
    def test_engine_does_not_decide_status(self, quiet):
        """A winning move leaves the status alone until finish() is called."""
        engine = GameEngine(debug=quiet)
        for col in [0, 6, 1, 6, 2, 6, 3]:
            engine.apply_move(col)
        assert engine.has_winning_line()
        assert engine.status.result == GameResult.IN_PROGRESS
        
        engine.finish(GameStatus.won_by(ONE))
        assert engine.status.winner == ONE
        assert engine.status.is_terminal()
    
    def test_finish_only_once(self, quiet):
        engine = GameEngine(debug=quiet)
        engine.finish(GameStatus.tied())
        engine.finish(GameStatus.aborted("late"))
        assert engine.status == GameStatus.tied()


class TestEngineEvents:
    """The engine publishes to every subscriber."""
    
    def test_move_and_status_events(self, quiet):
        engine = GameEngine(debug=quiet)
        first = engine.events.subscribe()
        second = engine.events.subscribe()
        
        engine.apply_move(4)
        engine.finish(GameStatus.aborted("stop"))
        
        expected = [MoveApplied(4, ROWS - 1, ONE), TurnGranted(TWO),
                    StatusChanged(GameStatus.aborted("stop"))]
        assert drain(first) == expected
        assert drain(second) == expected
    
    def test_unsubscribe(self, quiet):
        engine = GameEngine(debug=quiet)
        listener = engine.events.subscribe()
        engine.events.unsubscribe(listener)
        engine.apply_move(0)
        assert drain(listener) == []
        assert len(engine.events) == 0
    
    def test_failed_move_publishes_nothing(self, quiet):
        engine = GameEngine(debug=quiet)
        listener = engine.events.subscribe()
        with pytest.raises(InvalidMove):
            engine.apply_move(99)
        assert drain(listener) == []


class TestGameStatus:
    
    def test_terminal_statuses(self):
        assert not GameStatus.in_progress().is_terminal()
        assert GameStatus.won_by(TWO).is_terminal()
        assert GameStatus.tied().is_terminal()
        assert GameStatus.aborted("x").is_terminal()
    
    def test_str(self):
        assert str(GameStatus.won_by(ONE)) == "WON_BY(ONE)"
        assert str(GameStatus.aborted("bad")) == "ABORTED(bad)"
        assert str(GameStatus.tied()) == "TIED"


class TestGameConfig:
    
    @pytest.mark.parametrize("kwargs", [
        dict(rows=0), dict(cols=0), dict(win_len=0), dict(rows=3, cols=3, win_len=5)])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)
    
    def test_defaults(self):
        config = GameConfig()
        assert (config.rows, config.cols, config.win_len) == (6, 7, 4)
