"""Tests for SeededRandom, Maze and MazeGenerator."""

import pytest

from maze.seeded_random import SeededRandom
from maze.maze_core import Maze, bfs_shortest_path, reachable_cells, manhattan
from maze.generator import MazeGenerator, place_event_cells
from utils.constants import DIRS, TOP, RIGHT, BOTTOM, LEFT, ALL_WALLS

# MazeGenerator(15, 15, 42).generate(), one wall bitmask per cell
SEED_42_LAYOUT = [
    [11, 9, 1, 7, 9, 3, 9, 1, 7, 9, 5, 3, 9, 5, 3],
    [10, 10, 10, 9, 6, 12, 6, 12, 5, 6, 11, 12, 6, 9, 2],
    [10, 10, 14, 10, 9, 5, 1, 5, 5, 5, 4, 5, 7, 10, 14],
    [10, 8, 5, 6, 12, 3, 10, 9, 5, 3, 9, 5, 3, 12, 3],
    [10, 12, 3, 9, 5, 6, 10, 8, 7, 12, 4, 7, 8, 3, 10],
    [10, 11, 10, 12, 5, 3, 12, 6, 9, 5, 5, 5, 6, 10, 10],
    [10, 12, 4, 5, 3, 14, 9, 3, 12, 5, 3, 9, 5, 6, 10],
    [12, 3, 9, 3, 10, 9, 6, 12, 5, 5, 6, 12, 3, 11, 10],
    [9, 6, 10, 12, 6, 10, 9, 1, 5, 7, 9, 3, 12, 2, 10],
    [12, 3, 12, 3, 13, 2, 10, 12, 5, 5, 6, 12, 5, 6, 10],
    [9, 6, 13, 0, 5, 6, 10, 13, 1, 5, 7, 9, 5, 3, 10],
    [10, 9, 3, 14, 9, 3, 12, 5, 2, 9, 3, 10, 13, 2, 10],
    [12, 6, 12, 5, 6, 12, 5, 3, 14, 10, 10, 12, 3, 10, 10],
    [9, 7, 9, 1, 7, 9, 3, 10, 9, 6, 12, 5, 6, 10, 10],
    [12, 5, 6, 12, 5, 6, 12, 4, 6, 13, 5, 5, 5, 4, 6],
]

SEED_42_EVENT_CELLS = {
    (0, 3), (0, 5), (1, 0), (2, 14), (4, 0), (4, 11),
    (5, 7), (9, 2), (12, 4), (12, 14), (13, 11),
}


class TestSeededRandom:
    def test_same_seed_same_sequence(self):
        a = SeededRandom(42)
        b = SeededRandom(42)
        assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]

    def test_first_value(self):
        rng = SeededRandom(42)
        assert rng.next() == pytest.approx(206659 / 233280)

    def test_values_in_unit_interval(self):
        rng = SeededRandom(7)
        for _ in range(1000):
            value = rng.next()
            assert 0 <= value < 1

    def test_instances_are_independent(self):
        a = SeededRandom(5)
        b = SeededRandom(5)
        first = a.next()
        for _ in range(10):
            b.next()
        c = SeededRandom(5)
        assert c.next() == first

    def test_randrange_bounds(self):
        rng = SeededRandom(3)
        assert all(0 <= rng.randrange(4) < 4 for _ in range(200))
        with pytest.raises(ValueError):
            rng.randrange(0)

    def test_choice_on_empty(self):
        with pytest.raises(IndexError):
            SeededRandom(1).choice([])

    def test_time_seed_when_omitted(self):
        assert isinstance(SeededRandom().seed, int)


class TestMaze:
    def test_starts_fully_walled(self):
        maze = Maze(3, 4)
        assert all(c.walls == ALL_WALLS for c in maze.iter_cells())
        assert maze.start == (0, 0)
        assert maze.goal == (2, 3)

    def test_carve_passage_opens_both_sides(self):
        maze = Maze(2, 2)
        maze.carve_passage(0, 0, 0, 1)
        assert not maze.cell(0, 0).has_wall(RIGHT)
        assert not maze.cell(0, 1).has_wall(LEFT)
        assert maze.is_open_between(0, 0, 0, 1)
        assert maze.can_move(0, 0, 0, 1)
        assert not maze.can_move(0, 0, 1, 0)

    def test_wall_flags(self):
        maze = Maze(1, 2)
        maze.carve_passage(0, 0, 0, 1)
        assert maze.cell(0, 0).wall_flags() == {
            "top": True, "right": False, "bottom": True, "left": True,
        }

    def test_carve_ignores_non_adjacent(self):
        maze = Maze(3, 3)
        maze.carve_passage(0, 0, 2, 2)
        assert maze.removed_wall_count() == 0

    def test_can_move_out_of_bounds(self):
        maze = Maze(1, 1)
        assert not maze.can_move(0, 0, -1, 0)
        assert maze.neighbors_open(0, 0) == []

    def test_manhattan(self):
        assert manhattan((0, 0), (14, 14)) == 28
        assert manhattan((3, 1), (1, 4)) == 5


class TestMazeGenerator:
    @pytest.mark.parametrize("rows,cols,seed", [
        (15, 15, 42),
        (20, 20, 1),
        (25, 25, 1234),
        (5, 7, 99),
    ])
    def test_perfect_maze(self, rows, cols, seed):
        maze = MazeGenerator(rows, cols, seed).generate()

        assert maze.removed_wall_count() == rows * cols - 1
        assert len(reachable_cells(maze, maze.start)) == rows * cols

    def test_same_seed_same_maze(self):
        a = MazeGenerator(15, 15, 42).generate()
        b = MazeGenerator(15, 15, 42).generate()

        assert a.wall_layout() == b.wall_layout()
        assert a.event_cells() == b.event_cells()

    def test_pinned_layout_for_seed_42(self):
        maze = MazeGenerator(15, 15, 42).generate()

        assert maze.wall_layout() == SEED_42_LAYOUT
        assert maze.event_cells() == SEED_42_EVENT_CELLS

    def test_generate_is_repeatable_on_one_instance(self):
        generator = MazeGenerator(10, 10, 8)
        assert generator.generate().wall_layout() == generator.generate().wall_layout()

    def test_different_seeds_differ(self):
        a = MazeGenerator(15, 15, 1).generate()
        b = MazeGenerator(15, 15, 2).generate()
        assert a.wall_layout() != b.wall_layout()

    def test_walls_are_symmetric(self):
        maze = MazeGenerator(12, 9, 17).generate()
        for cell in maze.iter_cells():
            for drow, dcol, wall, opp in DIRS:
                nr, nc = cell.row + drow, cell.col + dcol
                if maze.in_bounds(nr, nc):
                    assert cell.has_wall(wall) == maze.cell(nr, nc).has_wall(opp)

    def test_outer_border_stays_closed(self):
        maze = MazeGenerator(8, 6, 21).generate()
        for c in range(maze.cols):
            assert maze.cell(0, c).has_wall(TOP)
            assert maze.cell(maze.rows - 1, c).has_wall(BOTTOM)
        for r in range(maze.rows):
            assert maze.cell(r, 0).has_wall(LEFT)
            assert maze.cell(r, maze.cols - 1).has_wall(RIGHT)

    def test_start_and_goal_connected(self):
        maze = MazeGenerator(20, 20, 5).generate()
        path = bfs_shortest_path(maze, maze.start, maze.goal)

        assert path[0] == maze.start
        assert path[-1] == maze.goal
        for (ar, ac), (br, bc) in zip(path, path[1:]):
            assert maze.is_open_between(ar, ac, br, bc)

    def test_event_cells_never_on_start_or_goal(self):
        for seed in range(50):
            maze = MazeGenerator(5, 5, seed, event_density=0.5).generate()
            events = maze.event_cells()
            assert maze.start not in events
            assert maze.goal not in events

    def test_event_cells_are_sparse(self):
        maze = MazeGenerator(20, 20, 3).generate()
        # 20 samples at the default density, duplicates collapse
        assert len(maze.event_cells()) <= 20
        assert all(not maze.cell(r, c).consumed for r, c in maze.event_cells())

    def test_zero_density_places_nothing(self):
        maze = MazeGenerator(10, 10, 4, event_density=0).generate()
        assert maze.event_cells() == set()

    def test_place_event_cells_returns_marked_count(self):
        maze = Maze(1, 1)
        assert place_event_cells(maze, SeededRandom(1), density=1.0) == 0

    def test_single_cell_maze(self):
        maze = MazeGenerator(1, 1, 10).generate()
        assert maze.removed_wall_count() == 0
        assert maze.start == maze.goal
        assert bfs_shortest_path(maze, maze.start, maze.goal) == [(0, 0)]

    @pytest.mark.parametrize("rows,cols,density", [
        (0, 5, 0.05),
        (5, 0, 0.05),
        (5, 5, -0.1),
        (5, 5, 1.5),
    ])
    def test_invalid_arguments(self, rows, cols, density):
        with pytest.raises(ValueError):
            MazeGenerator(rows, cols, 1, event_density=density)

    def test_steps_end_with_done(self):
        steps = list(MazeGenerator(6, 6, 11).steps())
        carved = [s for s in steps if s["carved"] is not None]

        assert steps[-1]["done"] is True
        assert not any(s["done"] for s in steps[:-1])
        assert len(carved) == 6 * 6 - 1

    def test_seed_defaults_to_time(self):
        assert isinstance(MazeGenerator(3, 3).seed, int)
