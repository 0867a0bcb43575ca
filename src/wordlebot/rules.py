"""Game constants and shared aliases for the solver and the CLIs."""

from typing import Callable

# Word size to be used
WORD_SIZE = 5

# Maximum number of attempts per game
MAX_STEPS = 6

LogFn = Callable[[str], None]
