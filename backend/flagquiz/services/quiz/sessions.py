import random
import string
from typing import Dict, Optional, Tuple

from flask import current_app, has_app_context

from .state import QuizState, DEFAULT_TOTAL_ROUNDS


def generate_session_code(taken, length=4):
    """Generate a unique, short session code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in taken:
            return code


class SessionRegistry:
    """Process-local map of session code -> QuizState."""

    def __init__(self):
        self._sessions: Dict[str, QuizState] = {}

    def create(self, total_rounds: Optional[int] = None, seed=None) -> Tuple[str, QuizState]:
        if total_rounds is None:
            total_rounds = DEFAULT_TOTAL_ROUNDS
            if has_app_context():
                total_rounds = int(current_app.config.get('TOTAL_ROUNDS', DEFAULT_TOTAL_ROUNDS))
        rng = random.Random(seed) if seed is not None else None
        state = QuizState(total_rounds=total_rounds, rng=rng)
        code = generate_session_code(self._sessions)
        self._sessions[code] = state
        return code, state

    def get(self, code: Optional[str]) -> Optional[QuizState]:
        if not code:
            return None
        return self._sessions.get(code.upper())

    def discard(self, code: str) -> bool:
        return self._sessions.pop(code.upper(), None) is not None

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, code):
        return bool(code) and code.upper() in self._sessions


sessions = SessionRegistry()
