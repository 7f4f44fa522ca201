"""
Difficulty level configurations for Q-Maze
Defines 3 difficulty levels with increasing challenge
"""

from utils.constants import (
    DIFFICULTY_EASY, DIFFICULTY_MEDIUM, DIFFICULTY_HARD, DIFFICULTY_KEYS
)


class DifficultyConfig:
    """Configuration for a single difficulty level (read-only once built)"""
    def __init__(self, **kwargs):
        values = {
            'key': kwargs.get('key', DIFFICULTY_MEDIUM),

            # Lives and timers (seconds)
            'lives': kwargs.get('lives', 3),
            'total_time_limit': kwargs.get('total_time_limit', 270),
            'question_interval': kwargs.get('question_interval', 18),
            'question_time_modifier': kwargs.get('question_time_modifier', 0),
            'invulnerability_duration': kwargs.get('invulnerability_duration', 1.0),

            # Maze dimensions
            'rows': kwargs.get('rows', 20),
            'cols': kwargs.get('cols', 20),

            # Player speed (pixels per second)
            'player_speed': kwargs.get('player_speed', 100),

            # Scoring
            'score_multiplier': kwargs.get('score_multiplier', 1.0),
            'max_progress_points': kwargs.get('max_progress_points', 800),
            'completion_bonus': kwargs.get('completion_bonus', 200),
            'points_per_second_left': kwargs.get('points_per_second_left', 2),
            'points_per_life_left': kwargs.get('points_per_life_left', 150),

            # Interface
            'name': kwargs.get('name', 'Medium'),
            'description': kwargs.get('description', ''),
        }
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"DifficultyConfig is read-only (tried to set {name!r})")

    def replace(self, **overrides):
        """Copy with some fields changed"""
        values = self.to_dict()
        values.update(overrides)
        return DifficultyConfig(**values)

    def to_dict(self):
        return dict(vars(self))

    def __repr__(self):
        return f"DifficultyConfig(key={self.key!r}, maze={self.rows}x{self.cols}, lives={self.lives})"


# ========== DIFFICULTY LEVEL DEFINITIONS ==========

LEVEL_EASY = DifficultyConfig(
    key=DIFFICULTY_EASY,
    lives=4,
    total_time_limit=420,
    question_interval=20,
    question_time_modifier=2,  # +2 seconds on every question
    rows=15,
    cols=15,
    player_speed=100,
    score_multiplier=0.5,
    completion_bonus=150,
    points_per_second_left=1,
    points_per_life_left=100,
    name='Easy',
    description='More time, more lives, smaller maze.'
)

LEVEL_MEDIUM = DifficultyConfig(
    key=DIFFICULTY_MEDIUM,
    lives=3,
    total_time_limit=270,
    question_interval=18,
    question_time_modifier=0,
    rows=20,
    cols=20,
    player_speed=100,
    score_multiplier=1.0,
    completion_bonus=200,
    points_per_second_left=2,
    points_per_life_left=150,
    name='Medium',
    description='Balanced challenge.'
)

LEVEL_HARD = DifficultyConfig(
    key=DIFFICULTY_HARD,
    lives=2,
    total_time_limit=240,
    question_interval=15,
    question_time_modifier=-2,  # 2 seconds less on every question
    rows=25,
    cols=25,
    player_speed=100,
    score_multiplier=1.5,
    completion_bonus=300,
    points_per_second_left=3,
    points_per_life_left=250,
    name='Hard',
    description='Less time, fewer lives, bigger maze.'
)

# Difficulty level mapping
DIFFICULTY_CONFIGS = {
    DIFFICULTY_EASY: LEVEL_EASY,
    DIFFICULTY_MEDIUM: LEVEL_MEDIUM,
    DIFFICULTY_HARD: LEVEL_HARD,
}


def get_difficulty_config(difficulty_key):
    """
    Get configuration for a difficulty level

    Args:
        difficulty_key: 'easy', 'medium' or 'hard' (case-insensitive)

    Returns:
        DifficultyConfig object; unknown keys fall back to medium
    """
    if isinstance(difficulty_key, DifficultyConfig):
        return difficulty_key
    if isinstance(difficulty_key, str):
        difficulty_key = difficulty_key.lower()
    return DIFFICULTY_CONFIGS.get(difficulty_key, LEVEL_MEDIUM)


def get_difficulty_description(difficulty_key):
    """Get detailed description of difficulty level"""
    config = get_difficulty_config(difficulty_key)

    minutes = config.total_time_limit // 60
    seconds = config.total_time_limit % 60

    desc = f"{config.name}\n"
    desc += f"{config.description}\n"
    desc += f"Maze: {config.rows}x{config.cols}\n"
    desc += f"Lives: {config.lives}\n"
    desc += f"Time Limit: {minutes}:{seconds:02d}\n"
    desc += f"Question every {config.question_interval}s\n"
    desc += f"Score x{config.score_multiplier}\n"
    return desc


def next_difficulty(difficulty_key, step=1):
    """Cycle through difficulty keys"""
    config = get_difficulty_config(difficulty_key)
    index = DIFFICULTY_KEYS.index(config.key)
    return DIFFICULTY_KEYS[(index + step) % len(DIFFICULTY_KEYS)]
