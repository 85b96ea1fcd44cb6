import time
from typing import Set, Tuple

from flagquiz import socketio
from .sessions import sessions
from .state import AnswerResult


_scheduled_reveal_keys: Set[Tuple[str, int]] = set()


def schedule_reveal(app, session_code: str, result: AnswerResult) -> None:
    """Emit ``answer_result`` for the current round after the reveal delay.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Ensures a single pending reveal per (session_code, round_id)
    - Drops the reveal if the session moved on (next round or reset) or was discarded
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return

    code = session_code.upper()
    round_no = result.round
    key = (code, result.round_id)
    if key in _scheduled_reveal_keys:
        app.logger.info(f"[reveal-skip] session={code} round={round_no} already scheduled")
        return
    _scheduled_reveal_keys.add(key)

    delay = max(0, int(app.config.get('REVEAL_DELAY_MS', 600))) / 1000.0
    app.logger.info(f"[reveal-set] session={code} round={round_no} delay={delay}s")

    def _worker(expected_code: str, expected_round: int, round_id: int, delay_sec: float):
        if delay_sec:
            time.sleep(delay_sec)
        _scheduled_reveal_keys.discard((expected_code, round_id))
        current = sessions.get(expected_code)
        stale = current is None or current.round_id != round_id
        if stale:
            app.logger.info(f"[reveal-abort] session={expected_code} round={expected_round} no longer current")
            return
        app.logger.info(f"[reveal-fire] session={expected_code} round={expected_round} correct={result.correct}")
        payload = result.to_dict()
        payload['session_code'] = expected_code
        socketio.emit('answer_result', payload, to=f"quiz:{expected_code}", namespace='/ws')

    if app.config.get('TESTING'):
        _worker(code, round_no, result.round_id, delay)
    else:
        socketio.start_background_task(_worker, code, round_no, result.round_id, delay)
