"""
Global constants for Q-Maze
"""

# Screen settings
CELL_SIZE = 50
FPS = 60
WALL_THICK = 4

# HUD panel width
PANEL_W = 250

# Wall bit flags (for maze generation)
TOP = 1
RIGHT = 2
BOTTOM = 4
LEFT = 8
ALL_WALLS = TOP | RIGHT | BOTTOM | LEFT

WALL_NAMES = {
    TOP: 'top',
    RIGHT: 'right',
    BOTTOM: 'bottom',
    LEFT: 'left',
}

# Direction vectors with wall bits, as (drow, dcol, wall_bit, opp_bit)
DIRS = [
    (-1, 0, TOP, BOTTOM),    # up
    (0, 1, RIGHT, LEFT),     # right
    (1, 0, BOTTOM, TOP),     # down
    (0, -1, LEFT, RIGHT),    # left
]

# Direction to bit mapping
DIR_TO_BITS = {
    (-1, 0): (TOP, BOTTOM),
    (0, 1): (RIGHT, LEFT),
    (1, 0): (BOTTOM, TOP),
    (0, -1): (LEFT, RIGHT),
}

# Maze generation
EVENT_CELL_DENSITY = 0.05

# Input timings (milliseconds)
INPUT_MIN_SPEED = 50
INPUT_ACCELERATION_MS = 100
INPUT_DIRECTION_TIMEOUT_MS = 80
INPUT_REMOTE_PRIORITY_MS = 500
INPUT_BUTTON_PULSE_MS = 50

DIRECTIONS = ('up', 'down', 'left', 'right')
BUTTONS = ('select', 'pause')

# Session timings (seconds)
WALL_TOUCH_COOLDOWN = 0.5
DEFAULT_QUESTION_TIME_LIMIT = 10
MIN_QUESTION_TIME_LIMIT = 1

# Player collision radius as a fraction of the cell size
PLAYER_RADIUS_RATIO = 1 / 3.5

# Tolerance when testing whether the player edge sits on a grid line
COLLISION_EPSILON = 1e-6

# Difficulty keys
DIFFICULTY_EASY = 'easy'
DIFFICULTY_MEDIUM = 'medium'
DIFFICULTY_HARD = 'hard'

DIFFICULTY_KEYS = [
    DIFFICULTY_EASY,
    DIFFICULTY_MEDIUM,
    DIFFICULTY_HARD,
]

# Question trigger reasons
REASON_WALL = 'wall'
REASON_TIME = 'time'
REASON_ZONE = 'zone'

# Session results
RESULT_WIN = 'win'
RESULT_LOSS = 'loss'

OUTCOME_GOAL = 'goal'
OUTCOME_TIMEOUT = 'timeout'
OUTCOME_LIVES_EXHAUSTED = 'lives_exhausted'

# Player settings
DEFAULT_PLAYER_NAME = 'Runner'
ALL_CATEGORIES = 'all'

# Storage
RESULTS_DIR = "results"
CONTENT_FILE = "data/content.json"
