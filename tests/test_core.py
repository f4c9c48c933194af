import pytest

from block_drop.game import Action, GameConfig, GameController, GameState, PieceKind

from conftest import FixedKinds, Recorder, fill_row


@pytest.fixture
def game() -> GameController:
    return GameController(rng=FixedKinds(PieceKind.O))


def test_starts_idle_and_ignores_input(game):
    assert game.state is GameState.IDLE
    assert not game.move_left()
    assert not game.rotate()
    assert not game.move_down()
    assert game.advance(5000) == 0


def test_start_spawns_current_and_next(game):
    assert game.start()

    assert game.state is GameState.RUNNING
    assert game.board.current_piece.position == (3, 0)
    assert game.next_piece is not None
    assert game.next_piece.grid is game.preview
    assert int(game.preview.occupancy().sum()) == 4
    assert game.timer.running


def test_timer_drives_descent(game):
    game.start()

    assert game.advance(999) == 0
    assert game.board.current_piece.position == (3, 0)
    assert game.advance(1) == 1
    assert game.board.current_piece.position == (3, 1)


def test_pause_and_resume(game):
    game.start()
    assert game.pause()
    assert game.state is GameState.PAUSED

    assert not game.move_right()
    assert game.advance(3000) == 0
    assert game.board.current_piece.position == (3, 0)

    assert game.resume()
    assert game.move_right()
    assert game.board.current_piece.position == (4, 0)


def test_toggle_cycles_like_a_single_button(game):
    states = Recorder()
    game.state_changed.connect(states)

    game.toggle()
    game.toggle()
    game.toggle()

    assert [call[0] for call in states.calls] == [
        GameState.RUNNING,
        GameState.PAUSED,
        GameState.RUNNING,
    ]


def test_step_maps_actions(game):
    game.start()

    assert game.step(Action.LEFT)
    assert game.board.current_piece.position == (2, 0)
    assert game.step(Action.DOWN)
    assert game.board.current_piece.position == (2, 1)
    assert game.step(Action.RIGHT)
    assert not game.step(Action.NONE)
    assert game.board.current_piece.position == (3, 1)


def test_score_accumulates_from_line_events(game):
    scores = Recorder()
    game.score_changed.connect(scores)
    game.start()

    game.board.lines_cleared.emit(2)
    game.board.lines_cleared.emit(1)
    game.board.lines_cleared.emit(4)

    assert game.score == 25 + 10 + 85
    assert game.lines_cleared == 7
    assert scores.calls[-1] == (120, 7)


def test_lock_hands_over_next_piece_and_scores(game):
    game.start()
    fill_row(game.board, 19, skip=(3, 4))
    preview_piece = game.next_piece

    for _ in range(19):
        game.advance(1000)

    assert game.score == 10
    assert game.lines_cleared == 1
    assert game.board.current_piece is preview_piece
    assert preview_piece.grid is game.board
    assert preview_piece.position == (3, 0)
    assert game.next_piece is not preview_piece
    assert game.timer.running
    assert game.board.to_array()[19, 3:5].tolist() == [1, 1]


def test_obstructed_hand_over_ends_game(game):
    game.start()
    for row in range(2, 20):
        fill_row(game.board, row, skip=(9,))

    game.move_down()

    assert game.state is GameState.GAME_OVER
    assert game.board.current_piece is None
    assert not game.timer.running
    assert not game.move_left()
    assert game.advance(10000) == 0


def test_restart_after_game_over(game):
    game.start()
    for row in range(2, 20):
        fill_row(game.board, row, skip=(9,))
    game.move_down()
    game.score = 40

    assert game.start()

    assert game.state is GameState.RUNNING
    assert game.score == 0
    assert int(game.board.occupancy().sum()) == 4


def test_start_is_rejected_while_running(game):
    game.start()
    assert not game.start()


def test_seeded_config_is_reproducible():
    first = GameController(GameConfig(random_seed=99))
    second = GameController(GameConfig(random_seed=99))
    first.start()
    second.start()

    assert first.snapshot()["current_piece"] == second.snapshot()["current_piece"]
    assert first.snapshot()["next_piece"] == second.snapshot()["next_piece"]


def test_snapshot_reports_state(game):
    game.start()
    snap = game.snapshot()

    assert snap["state"] is GameState.RUNNING
    assert snap["current_piece"] is PieceKind.O
    assert snap["grid"].shape == (20, 10)
    assert snap["score"] == 0
