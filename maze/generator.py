"""
Maze generation - seeded DFS backtracker and event cell placement
"""

import logging

from utils.constants import DIRS, EVENT_CELL_DENSITY
from maze.maze_core import Maze
from maze.seeded_random import SeededRandom

logger = logging.getLogger(__name__)


# ========== GENERATOR: DFS BACKTRACKER ==========

def gen_dfs_backtracker(maze, rng):
    """
    Depth-First Search with backtracking - animated generator

    Args:
        maze: Maze with all walls closed
        rng: SeededRandom driving neighbour choice

    Yields:
        Step dicts with the current cell, the carved edge (or None) and done flag
    """
    start = maze.cell(0, 0)
    start.visited = True
    stack = [start]

    yield {"maze": maze, "current": (0, 0), "carved": None, "done": False}

    while stack:
        current = stack[-1]
        neighbors = []

        for drow, dcol, _, _ in DIRS:
            nr, nc = current.row + drow, current.col + dcol
            if maze.in_bounds(nr, nc) and not maze.cell(nr, nc).visited:
                neighbors.append(maze.cell(nr, nc))

        if neighbors:
            nxt = rng.choice(neighbors)
            maze.carve_passage(current.row, current.col, nxt.row, nxt.col)
            nxt.visited = True
            stack.append(nxt)

            yield {
                "maze": maze,
                "current": (nxt.row, nxt.col),
                "carved": ((current.row, current.col), (nxt.row, nxt.col)),
                "done": False,
            }
        else:
            stack.pop()
            yield {"maze": maze, "current": (current.row, current.col), "carved": None, "done": False}

    yield {"maze": maze, "current": (0, 0), "carved": None, "done": True}


def place_event_cells(maze, rng, density=EVENT_CELL_DENSITY):
    """
    Mark a sparse random subset of cells as event cells

    Draws floor(rows * cols * density) (row, col) pairs. Start and goal are
    skipped and repeated draws are no-ops, so fewer cells may end up marked.

    Returns:
        Number of distinct cells marked
    """
    samples = int(maze.rows * maze.cols * density)
    excluded = (maze.start, maze.goal)

    for _ in range(samples):
        row = rng.randrange(maze.rows)
        col = rng.randrange(maze.cols)
        if (row, col) in excluded:
            continue
        maze.cell(row, col).is_event_cell = True

    marked = len(maze.event_cells())
    logger.debug("Placed %d event cells from %d samples", marked, samples)
    return marked


class MazeGenerator:
    """
    Builds a perfect maze from (rows, cols, seed)
    """
    def __init__(self, rows, cols, seed=None, event_density=EVENT_CELL_DENSITY):
        """
        Args:
            rows, cols: Maze dimensions (at least 1 each)
            seed: Integer seed; time-based when omitted
            event_density: Fraction of cells sampled as event cells (0-1)
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"maze needs at least one row and column, got {rows}x{cols}")
        if not 0 <= event_density <= 1:
            raise ValueError(f"event density must be within [0, 1], got {event_density}")

        self.rows = rows
        self.cols = cols
        self.seed = SeededRandom(seed).seed
        self.event_density = event_density

    def steps(self):
        """
        Animated generation: yields every carve/backtrack step,
        event cells are placed right before the final step
        """
        rng = SeededRandom(self.seed)
        maze = Maze(self.rows, self.cols, self.seed)
        for state in gen_dfs_backtracker(maze, rng):
            if state["done"]:
                place_event_cells(maze, rng, self.event_density)
            yield state

    def generate(self):
        """Generate instantly and return the finished Maze"""
        last_state = None
        for state in self.steps():
            last_state = state

        maze = last_state["maze"]
        logger.info("Generated %dx%d maze (seed=%s)", self.rows, self.cols, self.seed)
        return maze

    def __repr__(self):
        return f"MazeGenerator({self.rows}x{self.cols}, seed={self.seed})"
