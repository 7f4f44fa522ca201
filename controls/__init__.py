"""
Input Module - keyboard and remote controller merged into one state
"""

from .input_state import InputState, InputTuning, SOURCE_KEYBOARD, SOURCE_REMOTE
from .keyboard import KeyboardAdapter, KEY_BINDINGS
from .remote import RemoteAdapter, normalize_event

__all__ = ['InputState', 'InputTuning', 'SOURCE_KEYBOARD', 'SOURCE_REMOTE',
           'KeyboardAdapter', 'KEY_BINDINGS', 'RemoteAdapter', 'normalize_event']
