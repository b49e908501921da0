class TerminvadersError(Exception):
    """Base class for errors raised by the game"""


class SetupError(TerminvadersError):
    """The terminal or keyboard can't be prepared; the game can't start"""
