"""
Core maze structures - cells, grid, wall queries and pathfinding
"""

from collections import deque
from utils.constants import TOP, RIGHT, BOTTOM, LEFT, ALL_WALLS, WALL_NAMES, DIRS, DIR_TO_BITS


class Cell:
    """
    One maze grid unit
    Walls are a bitmask of TOP, RIGHT, BOTTOM, LEFT; a set bit blocks movement
    """
    __slots__ = ('row', 'col', 'walls', 'visited', 'is_event_cell', 'consumed')

    def __init__(self, row, col):
        self.row = row
        self.col = col
        self.walls = ALL_WALLS
        self.visited = False
        self.is_event_cell = False
        self.consumed = False

    @property
    def id(self):
        """Stable identifier, used for the visited event cell set"""
        return f"{self.row}-{self.col}"

    def has_wall(self, wall_bit):
        return (self.walls & wall_bit) != 0

    def wall_flags(self):
        """Walls as {top, right, bottom, left} booleans"""
        return {name: self.has_wall(bit) for bit, name in WALL_NAMES.items()}

    def is_pending_event(self):
        """Event cell whose question has not fired yet"""
        return self.is_event_cell and not self.consumed

    def __repr__(self):
        return f"Cell({self.row},{self.col}, walls={self.walls})"


class Maze:
    """
    Maze grid with wall-based representation
    Cells are addressed as (row, col); start is (0, 0), goal the opposite corner
    """
    def __init__(self, rows, cols, seed=None):
        self.rows = rows
        self.cols = cols
        self.seed = seed
        # Initialize all walls closed
        self.cells = [[Cell(r, c) for c in range(cols)] for r in range(rows)]

    @property
    def start(self):
        return (0, 0)

    @property
    def goal(self):
        return (self.rows - 1, self.cols - 1)

    def in_bounds(self, row, col):
        """Check if coordinates are within grid bounds"""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row, col):
        return self.cells[row][col]

    def iter_cells(self):
        for row in self.cells:
            yield from row

    def carve_passage(self, ar, ac, br, bc):
        """Carve a passage between two adjacent cells"""
        bits = DIR_TO_BITS.get((br - ar, bc - ac))
        if bits is None:
            return
        wall_bit, opp_bit = bits
        self.cells[ar][ac].walls &= ~wall_bit
        self.cells[br][bc].walls &= ~opp_bit

    def is_open_between(self, ar, ac, br, bc):
        """Check if passage is open between two adjacent cells"""
        bits = DIR_TO_BITS.get((br - ar, bc - ac))
        if bits is None:
            return False
        wall_bit, _ = bits
        return not self.cells[ar][ac].has_wall(wall_bit)

    def can_move(self, row, col, drow, dcol):
        """Check if player can move in direction (drow, dcol) from (row, col)"""
        if not self.in_bounds(row + drow, col + dcol):
            return False

        w = self.cells[row][col].walls

        if drow == -1 and dcol == 0:   # up
            return (w & TOP) == 0
        if drow == 0 and dcol == 1:    # right
            return (w & RIGHT) == 0
        if drow == 1 and dcol == 0:    # down
            return (w & BOTTOM) == 0
        if drow == 0 and dcol == -1:   # left
            return (w & LEFT) == 0
        return False

    def neighbors_open(self, row, col):
        """Get list of open neighbor cells"""
        res = []
        for drow, dcol, _, _ in DIRS:
            if self.can_move(row, col, drow, dcol):
                res.append((row + drow, col + dcol))
        return res

    def removed_wall_count(self):
        """Number of wall pairs removed between neighbours"""
        count = 0
        for cell in self.iter_cells():
            if cell.col + 1 < self.cols and not cell.has_wall(RIGHT):
                count += 1
            if cell.row + 1 < self.rows and not cell.has_wall(BOTTOM):
                count += 1
        return count

    def event_cells(self):
        """Coordinates of all cells marked as event cells"""
        return {(c.row, c.col) for c in self.iter_cells() if c.is_event_cell}

    def wall_layout(self):
        """Walls as a list of bitmask rows, for fixtures and comparison"""
        return [[c.walls for c in row] for row in self.cells]

    def __repr__(self):
        return f"Maze({self.rows}x{self.cols}, seed={self.seed})"


# ========== PATHFINDING ==========

def reconstruct_path(prev, goal):
    """Reconstruct path from prev dictionary"""
    path = []
    cur = goal
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    path.reverse()
    return path


def bfs_shortest_path(maze, start, goal):
    """BFS shortest path finder"""
    if start == goal:
        return [start]

    q = deque([start])
    prev = {start: None}

    while q:
        row, col = q.popleft()
        for n in maze.neighbors_open(row, col):
            if n not in prev:
                prev[n] = (row, col)
                if n == goal:
                    return reconstruct_path(prev, goal)
                q.append(n)
    return []


def reachable_cells(maze, start=(0, 0)):
    """All cells reachable from start through open passages"""
    seen = {start}
    q = deque([start])
    while q:
        row, col = q.popleft()
        for n in maze.neighbors_open(row, col):
            if n not in seen:
                seen.add(n)
                q.append(n)
    return seen


def manhattan(a, b):
    """Manhattan distance between two (row, col) cells"""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
