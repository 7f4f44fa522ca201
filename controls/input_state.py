"""
Unified input state - keyboard poll and remote controller events
merged into one directional/button state
"""

from utils.constants import (
    DIRECTIONS, BUTTONS,
    INPUT_MIN_SPEED, INPUT_ACCELERATION_MS, INPUT_DIRECTION_TIMEOUT_MS,
    INPUT_REMOTE_PRIORITY_MS, INPUT_BUTTON_PULSE_MS
)
from utils.helpers import lerp, now_ms

SOURCE_KEYBOARD = 'keyboard'
SOURCE_REMOTE = 'remote'


class InputTuning:
    """Timing and speed parameters for InputState (milliseconds)"""
    def __init__(self, **kwargs):
        # Speed at the moment a direction becomes active
        self.min_speed = kwargs.get('min_speed', INPUT_MIN_SPEED)
        # Time to ramp from min_speed to the requested max speed
        self.acceleration_ms = kwargs.get('acceleration_ms', INPUT_ACCELERATION_MS)
        # A remote direction not refreshed within this window is released
        self.direction_timeout_ms = kwargs.get('direction_timeout_ms', INPUT_DIRECTION_TIMEOUT_MS)
        # Keyboard is ignored while a remote event is this recent
        self.remote_priority_ms = kwargs.get('remote_priority_ms', INPUT_REMOTE_PRIORITY_MS)
        # Unread button pulses expire after this long
        self.button_pulse_ms = kwargs.get('button_pulse_ms', INPUT_BUTTON_PULSE_MS)

    def __repr__(self):
        return (f"InputTuning(min_speed={self.min_speed}, accel={self.acceleration_ms}ms, "
                f"timeout={self.direction_timeout_ms}ms)")


class InputState:
    """
    Directional state plus momentary select/pause buttons

    Two producers write here: a keyboard adapter polled every frame and a
    remote adapter pushed discrete snapshots. Writes are last-write-wins per
    direction; the remote priority window and the stale-direction timeout
    arbitrate between them. Readers get velocities and button pulses.
    """
    def __init__(self, tuning=None, clock=None):
        """
        Args:
            tuning: InputTuning (defaults used when omitted)
            clock: Callable returning the current time in milliseconds
        """
        self.tuning = tuning or InputTuning()
        self.clock = clock or now_ms
        self.input_source = SOURCE_KEYBOARD
        self.last_remote_update = None
        self.reset()

    def reset(self):
        """Reset the state"""
        self.state = {d: False for d in DIRECTIONS}
        # Activation time per direction, for the acceleration ramp
        self.direction_start_time = {d: None for d in DIRECTIONS}
        # Last remote refresh per direction, for the stale timeout
        self.direction_last_update = {d: None for d in DIRECTIONS}
        # Pulse deadline per button (None = not pressed)
        self._pulses = {b: None for b in BUTTONS}
        self._observed = set()
        self._keyboard_held = {b: False for b in BUTTONS}

    # ========== PRODUCERS ==========

    def update_from_keyboard(self, directions, select=False, pause=False):
        """
        Apply a keyboard poll

        Args:
            directions: Mapping of direction name to held state
            select, pause: Whether the select/pause keys are held

        Returns:
            True if the keyboard was authoritative for this poll
        """
        now = self.clock()
        authoritative = not self._remote_is_recent(now)

        if authoritative:
            self.input_source = SOURCE_KEYBOARD
            for d in DIRECTIONS:
                self._set_direction(d, bool(directions.get(d, False)), now)

        # Just-pressed edges
        for name, held in (('select', select), ('pause', pause)):
            held = bool(held)
            if authoritative and held and not self._keyboard_held[name]:
                self._press(name, now)
            self._keyboard_held[name] = held

        return authoritative

    def update_from_remote(self, events):
        """
        Apply parsed remote controller events

        Args:
            events: List of {'type': 'direction', 'state': {...}} or
                {'type': 'button', 'key': 'select'|'pause'} dicts
        """
        if not events:
            return

        now = self.clock()
        self.input_source = SOURCE_REMOTE
        self.last_remote_update = now

        for event in events:
            if not isinstance(event, dict):
                continue

            if event.get('type') == 'direction' and isinstance(event.get('state'), dict):
                snapshot = event['state']
                for d in DIRECTIONS:
                    active = bool(snapshot.get(d, False))
                    self._set_direction(d, active, now)
                    self.direction_last_update[d] = now if active else None

            elif event.get('type') == 'button' and event.get('key') in BUTTONS:
                self._press(event['key'], now)

    # ========== READERS ==========

    def velocity_x(self, max_speed):
        """Horizontal velocity with acceleration ramp (negative = left)"""
        return self._axis_velocity('left', 'right', max_speed)

    def velocity_y(self, max_speed):
        """Vertical velocity with acceleration ramp (negative = up)"""
        return self._axis_velocity('up', 'down', max_speed)

    def is_select_pressed(self):
        return self._read_pulse('select')

    def is_pause_pressed(self):
        return self._read_pulse('pause')

    def end_frame(self):
        """Clear button pulses that were read during this frame"""
        for name in self._observed:
            self._pulses[name] = None
        self._observed.clear()

    def get_state(self):
        """Snapshot of directions and pending buttons"""
        snapshot = dict(self.state)
        for name in BUTTONS:
            snapshot[name] = self._pulses[name] is not None
        return snapshot

    def get_input_source(self):
        return self.input_source

    # ========== INTERNALS ==========

    def _remote_is_recent(self, now):
        if self.last_remote_update is None:
            return False
        return now - self.last_remote_update <= self.tuning.remote_priority_ms

    def _set_direction(self, direction, active, now):
        if active and not self.state[direction]:
            self.direction_start_time[direction] = now
        elif not active and self.state[direction]:
            self.direction_start_time[direction] = None
        self.state[direction] = active

    def _press(self, name, now):
        self._pulses[name] = now + self.tuning.button_pulse_ms
        self._observed.discard(name)

    def _read_pulse(self, name):
        deadline = self._pulses[name]
        if deadline is None:
            return False
        if name not in self._observed and self.clock() > deadline:
            self._pulses[name] = None
            return False
        self._observed.add(name)
        return True

    def _check_direction_timeout(self, now):
        """Release remote directions that stopped receiving refreshes"""
        for d in DIRECTIONS:
            if not self.state[d]:
                continue
            last = self.direction_last_update[d]
            if last is None or now - last > self.tuning.direction_timeout_ms:
                self.state[d] = False
                self.direction_start_time[d] = None
                self.direction_last_update[d] = None

    def _axis_velocity(self, negative, positive, max_speed):
        now = self.clock()
        if self.input_source == SOURCE_REMOTE:
            self._check_direction_timeout(now)

        if self.state[negative] and not self.state[positive]:
            return -self._accelerated_speed(negative, now, max_speed)
        if self.state[positive] and not self.state[negative]:
            return self._accelerated_speed(positive, now, max_speed)
        return 0.0

    def _accelerated_speed(self, direction, now, max_speed):
        """Linear ramp from min_speed to max_speed over acceleration_ms"""
        min_speed = min(self.tuning.min_speed, max_speed)
        start = self.direction_start_time[direction]
        if start is None:
            return float(min_speed)

        elapsed = now - start
        if elapsed < self.tuning.acceleration_ms:
            return lerp(min_speed, max_speed, elapsed / self.tuning.acceleration_ms)
        return float(max_speed)

    def __repr__(self):
        active = [d for d in DIRECTIONS if self.state[d]]
        return f"InputState(source={self.input_source}, active={active})"
