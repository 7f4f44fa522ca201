"""
Exceptions raised by the game core
"""


class QMazeError(Exception):
    """Base class for game core errors"""


class SessionLoadError(QMazeError):
    """Configuration or question data could not be loaded; the session never starts"""


class InvalidTransitionError(QMazeError):
    """A phase change that the session state machine does not allow"""

    def __init__(self, current, target):
        super().__init__(f"cannot go from {current.name} to {target.name}")
        self.current = current
        self.target = target


class QuestionFormatError(QMazeError, ValueError):
    """A question record is missing fields or has an invalid answer index"""


class ConfigFormatError(QMazeError, ValueError):
    """The server configuration has a known key with an invalid value"""
