"""
Game State Machine - session phases and allowed transitions
"""

import logging
from enum import Enum, auto

from game.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Session phases"""
    LOADING = auto()
    PLAYING = auto()
    QUESTION_ACTIVE = auto()
    PAUSED = auto()
    ENDED = auto()


TRANSITIONS = {
    GamePhase.LOADING: {GamePhase.PLAYING},
    GamePhase.PLAYING: {GamePhase.QUESTION_ACTIVE, GamePhase.PAUSED, GamePhase.ENDED},
    GamePhase.QUESTION_ACTIVE: {GamePhase.PLAYING, GamePhase.ENDED},
    GamePhase.PAUSED: {GamePhase.PLAYING, GamePhase.ENDED},
    GamePhase.ENDED: set(),
}


class GameStateManager:
    """
    Manages phase transitions for one session
    """
    def __init__(self):
        self.current_state = GamePhase.LOADING
        self.previous_state = None
        self.state_data = {}  # For passing data between states

    def transition_to(self, new_state, **kwargs):
        """
        Transition to a new state

        Args:
            new_state: GamePhase enum value
            **kwargs: Additional data attached to the new state

        Raises:
            InvalidTransitionError: if the move is not allowed
        """
        if new_state not in TRANSITIONS[self.current_state]:
            raise InvalidTransitionError(self.current_state, new_state)

        logger.debug("Phase %s -> %s %s", self.current_state.name, new_state.name, kwargs or "")
        self.previous_state = self.current_state
        self.current_state = new_state
        self.state_data = kwargs

    def can_transition(self, new_state):
        return new_state in TRANSITIONS[self.current_state]

    def is_state(self, state):
        """Check if current state matches"""
        return self.current_state == state

    def can_pause(self):
        """Check if game can be paused"""
        return self.current_state == GamePhase.PLAYING

    def can_resume(self):
        """Check if game can be resumed"""
        return self.current_state == GamePhase.PAUSED

    def is_ended(self):
        return self.current_state == GamePhase.ENDED

    def get_state_name(self):
        """Get current state name"""
        return self.current_state.name

    def __repr__(self):
        return f"GameStateManager(state={self.current_state.name})"
