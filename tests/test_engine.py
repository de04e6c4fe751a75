import random

import pytest

from tetrisgame.block import SHAPES
from tetrisgame.constants import HEIGHT, SPAWN_X, WIDTH
from tetrisgame.engine import Landing, TetrisEngine, color_for


def _engine(seed=1):
    return TetrisEngine(random.Random(seed))


def _occupied(block):
    return {
        (block.x + j, block.y + i)
        for i, row in enumerate(block.shape)
        for j, cell in enumerate(row)
        if cell
    }


def test_new_engine_state():
    engine = _engine()
    assert engine.score == 0
    assert engine.running
    assert all(cell == 0 for row in engine.board for cell in row)
    assert len(engine.board) == HEIGHT and len(engine.board[0]) == WIDTH
    assert engine.current.x == SPAWN_X and engine.current.y == 0
    assert engine.current.type == engine.block_list[0]
    assert engine.next_block.type == engine.block_list[1]


def test_color_for():
    assert color_for(0) == (30, 30, 30)
    assert color_for(3) == (255, 165, 0)
    assert color_for(99) == color_for(0)


def test_check_collision_walls_and_cells():
    engine = _engine()
    o_shape = SHAPES[3]
    assert not engine.check_collision(0, 0, o_shape)
    assert engine.check_collision(-2, 0, o_shape)
    assert engine.check_collision(WIDTH - 2, 0, o_shape)
    assert engine.check_collision(0, HEIGHT - 2, o_shape)
    assert not engine.check_collision(0, -2, o_shape)
    engine.board[2][1] = 4
    assert engine.check_collision(0, 1, o_shape)


@pytest.mark.parametrize("lines,points", [(1, 100), (2, 300), (3, 500), (4, 800)])
def test_clear_lines_scores(lines, points):
    engine = _engine()
    for r in range(HEIGHT - lines, HEIGHT):
        engine.board[r] = [1] * WIDTH
    engine.board[HEIGHT - lines - 1][0] = 7
    assert engine.clear_lines() == lines
    assert engine.score == points
    assert engine.board[HEIGHT - 1][0] == 7
    assert sum(cell != 0 for row in engine.board for cell in row) == 1


def test_clear_lines_none_full():
    engine = _engine()
    engine.board[HEIGHT - 1] = [1] * (WIDTH - 1) + [0]
    before = [row[:] for row in engine.board]
    assert engine.clear_lines() == 0
    assert engine.board == before
    assert engine.score == 0


def test_move_left_stops_at_wall():
    engine = _engine()
    while engine.move_left():
        pass
    block = engine.current
    assert not engine.check_collision(block.x, block.y, block.shape)
    assert engine.check_collision(block.x - 1, block.y, block.shape)


def test_move_right_stops_at_wall():
    engine = _engine()
    while engine.move_right():
        pass
    block = engine.current
    assert engine.check_collision(block.x + 1, block.y, block.shape)


def test_move_down_and_gravity():
    engine = _engine()
    y = engine.current.y
    assert engine.move_down()
    assert engine.gravity_step()
    assert engine.current.y == y + 2


def test_hard_drop_rests_on_floor():
    engine = _engine()
    rows = engine.hard_drop()
    block = engine.current
    assert rows == block.y
    assert engine.check_collision(block.x, block.y + 1, block.shape)
    assert not engine.gravity_step()
    assert not engine.move_down()


def test_merge_current_writes_board_and_advances_queue():
    engine = _engine()
    engine.hard_drop()
    upcoming = engine.block_list[1]
    cells = _occupied(engine.current)
    engine.merge_current()
    for x, y in cells:
        assert engine.board[y][x] == engine.current.type + 1
    assert engine.block_list[0] == upcoming
    assert 0 <= engine.block_list[1] < len(SHAPES)


def test_settle_falling_when_free():
    engine = _engine()
    assert engine.settle() is Landing.FALLING
    assert all(cell == 0 for row in engine.board for cell in row)


def test_settle_lands_and_spawns_next():
    engine = _engine()
    engine.hard_drop()
    upcoming = engine.block_list[1]
    assert engine.settle() is Landing.LANDED
    assert engine.current.type == upcoming
    assert engine.current.y == 0
    assert any(cell for cell in engine.board[HEIGHT - 1])


def test_settle_game_over_when_spawn_blocked():
    engine = _engine()
    for r in range(1, HEIGHT):
        engine.board[r] = [1] * (WIDTH - 1) + [0]
    engine.current.init_shape(3, 0)
    assert engine.settle() is Landing.GAME_OVER
    assert not engine.running
    assert engine.game_over
    assert not engine.move_left()


def test_rotate_o_keeps_shape():
    engine = _engine()
    engine.current.init_shape(3, 0)
    assert engine.rotate()
    assert engine.current.shape == SHAPES[3]


def test_rotate_kicks_off_wall():
    engine = _engine()
    engine.current.init_shape(0, 1)
    engine.hard_drop()
    while engine.move_left():
        pass
    assert engine.rotate()
    block = engine.current
    assert not engine.check_collision(block.x, block.y, block.shape)


def test_rotate_blocked_restores():
    engine = _engine()
    engine.current.init_shape(0, 0)
    engine.current.y = 5
    free = _occupied(engine.current)
    for y in range(HEIGHT):
        for x in range(WIDTH):
            if (x, y) not in free:
                engine.board[y][x] = 2
    x, y = engine.current.x, engine.current.y
    assert not engine.rotate()
    assert engine.current.shape == SHAPES[0]
    assert (engine.current.x, engine.current.y) == (x, y)


def test_reset_clears_board_and_score():
    engine = _engine()
    engine.board[HEIGHT - 1][0] = 3
    engine.score = 100
    engine.reset()
    assert engine.score == 0
    assert all(cell == 0 for row in engine.board for cell in row)


def test_spawn_uses_block_list():
    engine = _engine()
    engine.block_list = [4, 6]
    engine.current.y = 10
    engine.spawn()
    assert engine.current.type == 4
    assert engine.next_block.type == 6
    assert engine.current.shape == SHAPES[4]
    assert engine.current.y == 0


def test_moves_ignored_when_not_running():
    engine = _engine()
    engine.running = False
    x, y = engine.current.x, engine.current.y
    assert not engine.move_right()
    assert not engine.rotate()
    assert engine.hard_drop() == 0
    assert (engine.current.x, engine.current.y) == (x, y)