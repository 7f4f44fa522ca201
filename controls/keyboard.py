"""
Keyboard adapter - polls pygame key state into InputState
"""

import pygame

from utils.constants import DIRECTIONS

KEY_BINDINGS = {
    'up': (pygame.K_UP, pygame.K_w),
    'down': (pygame.K_DOWN, pygame.K_s),
    'left': (pygame.K_LEFT, pygame.K_a),
    'right': (pygame.K_RIGHT, pygame.K_d),
    'select': (pygame.K_SPACE, pygame.K_RETURN),
    'pause': (pygame.K_p, pygame.K_ESCAPE),
}


def read_bindings(pressed, bindings=KEY_BINDINGS):
    """Map a key state sequence to {action: held}"""
    return {name: any(pressed[k] for k in keys) for name, keys in bindings.items()}


class KeyboardAdapter:
    """
    Polled every frame; hands the held state to InputState
    """
    def __init__(self, input_state, bindings=None):
        self.input_state = input_state
        self.bindings = bindings or KEY_BINDINGS

    def poll(self, pressed=None):
        """
        Args:
            pressed: Key state indexable by pygame key code,
                pygame.key.get_pressed() when omitted

        Returns:
            True if the keyboard drove the input state this frame
        """
        if pressed is None:
            pressed = pygame.key.get_pressed()

        held = read_bindings(pressed, self.bindings)
        directions = {d: held[d] for d in DIRECTIONS}
        return self.input_state.update_from_keyboard(
            directions, select=held['select'], pause=held['pause']
        )
