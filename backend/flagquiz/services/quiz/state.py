import random
from dataclasses import dataclass, asdict
from typing import Callable, List, Optional, Sequence

from .countries import COUNTRIES, flag_asset


CHOICES_PER_ROUND = 3
DEFAULT_TOTAL_ROUNDS = 8

STAGE_AWAITING_INPUT = 'awaiting_input'
STAGE_REVEALED = 'revealed'
STAGE_GAME_OVER = 'game_over'


class InvalidSelectionError(ValueError):
    """Raised when an answer is out of range or the round is already answered."""


@dataclass
class AnswerResult:
    correct: bool
    chosen_country: str
    round: int
    round_id: int
    selection: int
    correct_country: str
    title: str
    score: int
    rounds_played: int
    game_over: bool
    final_message: Optional[str] = None

    def to_dict(self):
        return asdict(self)


class QuizState:
    """Round data and transitions for one game of Guess the Flag.

    Stages: awaiting_input -> revealed -> (awaiting_input | game_over).
    ``answer`` moves to revealed, ``next_round`` acknowledges the reveal and
    ``reset`` is the only way out of game_over.
    """

    def __init__(self, countries: Sequence[str] = COUNTRIES, total_rounds: int = DEFAULT_TOTAL_ROUNDS,
                 rng: Optional[random.Random] = None):
        if len(countries) < CHOICES_PER_ROUND:
            raise ValueError(f"At least {CHOICES_PER_ROUND} countries are required")
        if isinstance(total_rounds, bool) or not isinstance(total_rounds, int):
            raise ValueError(f"total_rounds must be an integer, got {total_rounds!r}")
        if total_rounds < 1:
            raise ValueError('total_rounds must be at least 1')
        self.pool: List[str] = list(countries)
        self.total_rounds = total_rounds
        self.rng = rng or random.Random()
        self.choices: List[str] = []
        self.correct_index = 0
        self.score = 0
        self.rounds_played = 0
        self.round_number = 0
        # Never rewound, so a reveal from before a reset cannot match a later round
        self.round_id = 0
        self.selected: Optional[int] = None
        self.history: List[dict] = []
        self._listeners: List[Callable[[AnswerResult], None]] = []
        self.start_round()

    @property
    def stage(self) -> str:
        if self.is_game_over():
            return STAGE_GAME_OVER
        if self.selected is not None:
            return STAGE_REVEALED
        return STAGE_AWAITING_INPUT

    @property
    def target_country(self) -> str:
        return self.choices[self.correct_index]

    def subscribe(self, listener: Callable[[AnswerResult], None]) -> None:
        self._listeners.append(listener)

    def start_round(self) -> None:
        self.rng.shuffle(self.pool)
        self.choices = self.pool[:CHOICES_PER_ROUND]
        self.correct_index = self.rng.randrange(CHOICES_PER_ROUND)
        self.selected = None
        self.round_number = self.rounds_played + 1
        self.round_id += 1

    def answer(self, selection: int) -> AnswerResult:
        if self.selected is not None:
            raise InvalidSelectionError('A flag has already been chosen this round')
        if isinstance(selection, bool) or not isinstance(selection, int):
            raise InvalidSelectionError(f"Selection must be an integer, got {selection!r}")
        if not 0 <= selection < CHOICES_PER_ROUND:
            raise InvalidSelectionError(f"Selection {selection} is out of range")

        self.selected = selection
        chosen = self.choices[selection]
        correct = selection == self.correct_index
        if correct:
            self.score += 1
            title = 'Correct'
        else:
            self.score -= 1
            title = f"Wrong! That’s the flag of {chosen}."
        self.rounds_played += 1
        self.history.append({
            'round': self.round_number,
            'choices': list(self.choices),
            'correct_index': self.correct_index,
            'selection': selection,
            'correct': correct,
        })

        result = AnswerResult(
            correct=correct,
            chosen_country=chosen,
            round=self.round_number,
            round_id=self.round_id,
            selection=selection,
            correct_country=self.target_country,
            title=title,
            score=self.score,
            rounds_played=self.rounds_played,
            game_over=self.is_game_over(),
            final_message=self.final_message(),
        )
        for listener in list(self._listeners):
            listener(result)
        return result

    def is_game_over(self) -> bool:
        return self.rounds_played >= self.total_rounds

    def final_message(self) -> Optional[str]:
        if not self.is_game_over():
            return None
        return f"Your final score is {self.score} out of {self.total_rounds}."

    def next_round(self) -> bool:
        """Acknowledge a revealed answer. Returns True if a new round started."""
        if self.stage != STAGE_REVEALED:
            return False
        self.start_round()
        return True

    def reset(self) -> None:
        self.score = 0
        self.rounds_played = 0
        self.history = []
        self.start_round()

    def to_dict(self):
        return {
            'stage': self.stage,
            'choices': [{'country': c, 'flag': flag_asset(c) if c in COUNTRIES else None} for c in self.choices],
            'target_country': self.target_country,
            'correct_index': self.correct_index,
            'selected': self.selected,
            'score': self.score,
            'round_number': self.round_number,
            'rounds_played': self.rounds_played,
            'total_rounds': self.total_rounds,
            'game_over': self.is_game_over(),
            'final_message': self.final_message(),
        }
