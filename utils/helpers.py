"""
Helper utility functions for Q-Maze
"""

import math
import time


def clamp(value, min_value, max_value):
    """Clamp a value between min and max"""
    return max(min_value, min(value, max_value))


def lerp(a, b, t):
    """Linear interpolation between a and b by factor t (0-1)"""
    return a + (b - a) * t


def floor_int(value):
    """Floor a float to int"""
    return int(math.floor(value))


def now_ms():
    """Monotonic clock in milliseconds"""
    return time.monotonic() * 1000.0


def time_seed():
    """Time-based seed, used when the caller does not supply one"""
    return int(time.time() * 1000)


def format_time(seconds):
    """Format seconds to MM:SS string"""
    seconds = max(0, seconds)
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes:02d}:{secs:02d}"


def format_score(score):
    """Format score with thousands separator"""
    return f"{score:,}"
