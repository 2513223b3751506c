"""Tests for board construction and movement range."""

from questboard.engine.board_builder import available_positions, build_board, ordered_path_tiles
from questboard.engine.path_generator import generate_layout
from questboard.utils.constants import BOARD_HEIGHT, BOARD_WIDTH
from questboard.utils.naming import IdSequence
from questboard.utils.rng import GameRNG

from game_helpers import ScriptedRNG


def create_board(seed=42):
    rng = GameRNG(seed)
    layout = generate_layout(rng)
    return layout, build_board(rng, IdSequence(), layout)


class TestBuildBoard:
    """Tests for build_board."""

    def test_one_tile_per_cell(self):
        _, board = create_board()
        assert len(board) == BOARD_WIDTH * BOARD_HEIGHT

    def test_row_major_ids(self):
        _, board = create_board()
        for index, tile in enumerate(board):
            assert tile.id == index
            assert tile.id == tile.y * BOARD_WIDTH + tile.x

    def test_single_start_and_castle(self):
        for seed in range(10):
            layout, board = create_board(seed)
            starts = [t for t in board if t.kind == "start"]
            castles = [t for t in board if t.kind == "castle"]

            assert len(starts) == 1
            assert len(castles) == 1
            assert (starts[0].x, starts[0].y) == layout.main[0]
            assert (castles[0].x, castles[0].y) == layout.main[-1]
            assert castles[0].path_index == len(layout.main) - 1

    def test_path_tiles_match_layout(self):
        layout, board = create_board()
        path_tiles = {(t.x, t.y) for t in board if t.is_path}
        assert path_tiles == layout.path_cells

    def test_branch_tiles_have_no_path_index(self):
        for seed in range(10):
            layout, board = create_board(seed)
            for tile in board:
                if (tile.x, tile.y) in layout.branch_cells:
                    assert tile.is_path
                    assert tile.path_index is None

    def test_off_path_tiles_are_plain(self):
        _, board = create_board()
        for tile in board:
            if not tile.is_path:
                assert tile.kind == "normal"
                assert tile.enemy is None

    def test_battle_tiles_have_their_own_enemy(self):
        _, board = create_board()
        battles = [t for t in board if t.kind == "battle"]
        assert battles

        enemy_ids = [t.enemy.id for t in battles]
        reward_ids = [t.enemy.reward.id for t in battles]
        assert len(set(enemy_ids)) == len(battles)
        assert len(set(reward_ids)) == len(battles)
        for tile in battles:
            assert tile.enemy.reward.category in ("weapon", "armor")

    def test_tile_kind_thresholds(self):
        """Draws below 0.40 are battles, below 0.54 bonuses, the rest plain."""
        rng = ScriptedRNG(randoms=[0.1, 0.45, 0.9])
        path = [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]
        board = build_board(rng, IdSequence(), path, width=5, height=1)

        assert [t.kind for t in board] == ["start", "battle", "bonus", "normal", "castle"]

    def test_deterministic_with_seed(self):
        _, first = create_board(5)
        _, second = create_board(5)
        assert [t.kind for t in first] == [t.kind for t in second]

    def test_ordered_path_tiles(self):
        layout, board = create_board()
        ordered = ordered_path_tiles(board)
        assert [(t.x, t.y) for t in ordered] == layout.main


class TestAvailablePositions:
    """Tests for available_positions."""

    def test_both_directions(self):
        assert available_positions(5, 3, 10) == [2, 3, 4, 6, 7, 8]

    def test_clamped_at_start(self):
        assert available_positions(0, 6, 10) == [1, 2, 3, 4, 5, 6]

    def test_clamped_at_castle(self):
        assert available_positions(8, 2, 10) == [6, 7, 9]

    def test_never_includes_current(self):
        for current in range(10):
            for dice in range(1, 7):
                assert current not in available_positions(current, dice, 10)
