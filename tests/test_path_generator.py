"""Tests for procedural path generation."""

import logging

from questboard.engine.path_generator import generate_layout, generate_path
from questboard.utils.constants import BOARD_HEIGHT, BOARD_WIDTH, MAX_PATH_LENGTH
from questboard.utils.distance import manhattan_distance
from questboard.utils.rng import GameRNG


def assert_connected(path):
    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        assert manhattan_distance(x1, y1, x2, y2) == 1


class TestGeneratePath:
    """Tests for the main route walk."""

    def test_starts_bottom_left(self):
        for seed in range(20):
            path = generate_path(GameRNG(seed))
            assert path[0] == (0, BOARD_HEIGHT - 1)

    def test_consecutive_cells_are_adjacent(self):
        for seed in range(30):
            assert_connected(generate_path(GameRNG(seed)))

    def test_no_cell_visited_twice(self):
        for seed in range(30):
            path = generate_path(GameRNG(seed))
            assert len(set(path)) == len(path)

    def test_cells_in_bounds(self):
        for seed in range(30):
            for x, y in generate_path(GameRNG(seed)):
                assert 0 <= x < BOARD_WIDTH
                assert 0 <= y < BOARD_HEIGHT

    def test_never_exceeds_max_length(self):
        for seed in range(30):
            assert len(generate_path(GameRNG(seed))) <= MAX_PATH_LENGTH

    def test_reaches_easy_target(self):
        """A short target on the full grid is always reachable."""
        for seed in range(20):
            path = generate_path(GameRNG(seed), min_length=10, max_length=15)
            assert 10 <= len(path) <= 15

    def test_deterministic_with_seed(self):
        assert generate_path(GameRNG(7)) == generate_path(GameRNG(7))

    def test_exhaustion_returns_longest_walk(self, caplog):
        """A grid too small for the target yields a shorter, still connected path."""
        with caplog.at_level(logging.WARNING, logger="questboard.engine.path_generator"):
            path = generate_path(GameRNG(1), width=3, height=3, min_length=20, max_length=20)

        assert 2 <= len(path) < 20
        assert path[0] == (0, 2)
        assert_connected(path)
        assert len(set(path)) == len(path)
        assert "exhausted" in caplog.text

    def test_walk_cells_only_touch_neighbours_in_order(self):
        """Before any upward extension, a cell touches only its predecessor and successor."""
        for seed in range(10):
            # Target equals the cap, so the upward extension never adds cells
            path = generate_path(GameRNG(seed), min_length=10, max_length=10)
            for i, (x, y) in enumerate(path):
                for j, (ox, oy) in enumerate(path):
                    if abs(i - j) > 1:
                        assert manhattan_distance(x, y, ox, oy) > 1


class TestGenerateLayout:
    """Tests for side branches."""

    def test_branch_cells_avoid_main_route(self):
        for seed in range(30):
            layout = generate_layout(GameRNG(seed))
            assert not (layout.branch_cells & set(layout.main))

    def test_branches_are_connected_walks(self):
        for seed in range(30):
            layout = generate_layout(GameRNG(seed))
            for branch in layout.branches:
                fx, fy = layout.main[branch.fork_index]
                first_x, first_y = branch.cells[0]
                assert manhattan_distance(fx, fy, first_x, first_y) == 1
                assert_connected(branch.cells)

    def test_branches_rejoin_later(self):
        for seed in range(30):
            layout = generate_layout(GameRNG(seed))
            for branch in layout.branches:
                assert branch.rejoin_index > branch.fork_index
                rx, ry = layout.main[branch.rejoin_index]
                assert any(manhattan_distance(x, y, rx, ry) == 1 for x, y in branch.cells)

    def test_at_most_two_branches(self):
        for seed in range(30):
            assert len(generate_layout(GameRNG(seed)).branches) <= 2

    def test_branch_cells_do_not_overlap(self):
        for seed in range(30):
            layout = generate_layout(GameRNG(seed))
            cells = [cell for branch in layout.branches for cell in branch.cells]
            assert len(cells) == len(set(cells))

    def test_short_route_gets_no_branches(self):
        layout = generate_layout(GameRNG(3), width=3, height=2, min_length=4, max_length=4)
        assert layout.branches == []
        assert len(layout.main) < 8
