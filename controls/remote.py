"""
Remote controller adapter - feeds parsed controller events into InputState
The transport and its wire protocol live outside this package
"""

import logging

from utils.constants import DIRECTIONS, BUTTONS

logger = logging.getLogger(__name__)


def normalize_event(raw):
    """
    Validate one parsed controller event

    Returns:
        Normalized event dict, or None when the event should be dropped
    """
    if not isinstance(raw, dict):
        return None

    event_type = raw.get('type')

    if event_type == 'direction':
        state = raw.get('state')
        if not isinstance(state, dict):
            return None
        return {'type': 'direction', 'state': {d: bool(state.get(d, False)) for d in DIRECTIONS}}

    if event_type == 'button':
        key = raw.get('key')
        # Only presses are reported; a release carries no information
        if key not in BUTTONS or raw.get('pressed', True) is False:
            return None
        return {'type': 'button', 'key': key}

    return None


class RemoteAdapter:
    """
    Receives event batches from the controller transport
    """
    def __init__(self, input_state):
        self.input_state = input_state
        self.events_received = 0
        self.events_dropped = 0

    def on_events(self, events):
        """
        Transport 'data' callback

        Args:
            events: List of parsed events (may be empty or None)

        Returns:
            Number of events applied
        """
        if not events:
            return 0

        accepted = []
        for raw in events:
            event = normalize_event(raw)
            if event is None:
                self.events_dropped += 1
                logger.debug("Dropped controller event: %r", raw)
                continue
            accepted.append(event)

        if accepted:
            self.events_received += len(accepted)
            self.input_state.update_from_remote(accepted)
        return len(accepted)

    __call__ = on_events

    def __repr__(self):
        return f"RemoteAdapter(received={self.events_received}, dropped={self.events_dropped})"
