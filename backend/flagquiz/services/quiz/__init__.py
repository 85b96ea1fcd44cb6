"""Quiz domain services: game state, sessions, reveal timer and results.

State is plain Python and importable without Flask. Sessions read the
rounds default from the app config when one is active; the scheduler and
results modules need an application context.
"""

from .state import (
    QuizState,
    AnswerResult,
    InvalidSelectionError,
    CHOICES_PER_ROUND,
    DEFAULT_TOTAL_ROUNDS,
    STAGE_AWAITING_INPUT,
    STAGE_REVEALED,
    STAGE_GAME_OVER,
)
from .countries import COUNTRIES, flag_asset
from .sessions import SessionRegistry, sessions

__all__ = [
    'QuizState',
    'AnswerResult',
    'InvalidSelectionError',
    'CHOICES_PER_ROUND',
    'DEFAULT_TOTAL_ROUNDS',
    'STAGE_AWAITING_INPUT',
    'STAGE_REVEALED',
    'STAGE_GAME_OVER',
    'COUNTRIES',
    'flag_asset',
    'SessionRegistry',
    'sessions',
]
