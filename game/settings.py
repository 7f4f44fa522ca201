"""
Player settings passed explicitly into a session
"""

from utils.constants import DEFAULT_PLAYER_NAME, ALL_CATEGORIES


class PlayerSettings:
    """Player name and question categories chosen before a session"""
    def __init__(self, **kwargs):
        self.player_name = kwargs.get('player_name') or DEFAULT_PLAYER_NAME
        self.categories = list(kwargs.get('categories') or [ALL_CATEGORIES])

    def __repr__(self):
        return f"PlayerSettings(player_name={self.player_name!r}, categories={self.categories})"
