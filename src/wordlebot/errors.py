"""Exceptions raised by the solver core."""


class WordleError(Exception):
    """Base class for solver errors."""


class InvalidGuessError(WordleError, ValueError):
    """Guess has the wrong shape or is not a legal word."""


class InvalidMaskError(WordleError, ValueError):
    """Feedback mask has the wrong length or uses symbols outside 0/1/2."""


class EmptyCandidatesError(WordleError):
    """A guess was requested but no candidates are left."""


class UnknownStrategyError(WordleError, ValueError):
    """No strategy is registered under the requested id."""
