import json
from typing import List

from flagquiz import db
from flagquiz.models import GameResult
from .state import QuizState


def record_game_result(session_code: str, state: QuizState) -> GameResult:
    """Persist the final score and round history of a finished game."""
    if not state.is_game_over():
        raise ValueError(f"Session {session_code} is not finished")
    result = GameResult(
        session_code=session_code.upper(),
        score=state.score,
        total_rounds=state.total_rounds,
        correct_answers=sum(1 for r in state.history if r['correct']),
        round_history=json.dumps(state.history),
    )
    db.session.add(result)
    db.session.commit()
    return result


def recent_results(limit: int = 20) -> List[GameResult]:
    return (
        GameResult.query
        .order_by(GameResult.finished_at.desc(), GameResult.id.desc())
        .limit(limit)
        .all()
    )
