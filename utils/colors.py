"""
Color palette for Q-Maze
"""

# Background colors
COLOR_BG = (20, 22, 28)           # Main background
COLOR_MAZE_BG = (52, 73, 94)      # Maze floor
COLOR_PANEL_BG = (44, 62, 80)     # Panel background
COLOR_OVERLAY = (0, 0, 0, 215)    # Question overlay

# UI colors
COLOR_WALL = (231, 76, 60)        # Maze walls
COLOR_TEXT = (236, 240, 241)      # Normal text
COLOR_TEXT_HIGHLIGHT = (243, 156, 18)  # Highlighted text
COLOR_TEXT_DIM = (127, 140, 141)  # Dimmed text
COLOR_OPTION_BG = (52, 73, 94)
COLOR_OPTION_SELECTED = (74, 95, 127)

# Maze cells
COLOR_START = (46, 204, 113)      # Start cell
COLOR_GOAL = (243, 156, 18)       # Goal cell
COLOR_EVENT_CELL = (52, 152, 219)  # Unanswered question zone
COLOR_EVENT_DONE = (149, 165, 166)  # Consumed question zone

# Player
COLOR_PLAYER = (236, 240, 241)
COLOR_PLAYER_INVULNERABLE = (243, 156, 18)

# Results
COLOR_WIN = (39, 174, 96)
COLOR_LOSS = (192, 57, 43)
