from flask import Blueprint, jsonify, request, current_app, abort
from sqlalchemy.exc import SQLAlchemyError
from flagquiz import db, socketio
from flagquiz.services.quiz import sessions, InvalidSelectionError
from flagquiz.services.quiz.countries import catalogue
from flagquiz.services.quiz.results import record_game_result, recent_results
from flagquiz.services.quiz.scheduler import schedule_reveal


quiz = Blueprint('quiz', __name__)

MAX_TOTAL_ROUNDS = 50


def _get_state_or_404(session_code):
    state = sessions.get(session_code)
    if state is None:
        abort(404)
    return state

def _emit_state_update(session_code: str) -> None:
    code = session_code.upper()
    socketio.emit('state_update', {'session_code': code}, to=f"quiz:{code}", namespace='/ws')

def _state_payload(session_code, state):
    payload = state.to_dict()
    payload['session_code'] = session_code.upper()
    payload['reveal_delay_ms'] = int(current_app.config.get('REVEAL_DELAY_MS', 600))
    return payload


@quiz.errorhandler(404)
def session_not_found(_exc):
    return jsonify({'error': 'Session not found'}), 404


@quiz.route('/countries', methods=['GET'])
def list_countries():
    return jsonify(catalogue())


@quiz.route('/create', methods=['POST'])
def create_session():
    data = request.get_json(silent=True) or {}
    total_rounds = data.get('total_rounds')
    if total_rounds is None:
        total_rounds = int(current_app.config.get('TOTAL_ROUNDS', 8))
    else:
        if isinstance(total_rounds, bool) or not isinstance(total_rounds, int):
            return jsonify({'error': 'total_rounds must be an integer'}), 400
        if not 1 <= total_rounds <= MAX_TOTAL_ROUNDS:
            return jsonify({'error': f'total_rounds must be between 1 and {MAX_TOTAL_ROUNDS}'}), 400

    seed = data.get('seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
        return jsonify({'error': 'seed must be an integer or string'}), 400

    code, state = sessions.create(total_rounds=total_rounds, seed=seed)
    current_app.logger.info(f"[session-create] session={code} total_rounds={total_rounds}")
    return jsonify({
        'session_code': code,
        'state': _state_payload(code, state),
    }), 201


@quiz.route('/<string:session_code>/state', methods=['GET'])
def get_state(session_code):
    state = _get_state_or_404(session_code)
    return jsonify(_state_payload(session_code, state))


@quiz.route('/<string:session_code>/answer', methods=['POST'])
def submit_answer(session_code):
    state = _get_state_or_404(session_code)
    data = request.get_json(silent=True) or {}
    try:
        result = state.answer(data.get('selection'))
    except InvalidSelectionError as exc:
        current_app.logger.info(f"[answer-rejected] session={session_code.upper()} reason={exc}")
        return jsonify({'error': str(exc)}), 400

    current_app.logger.info(
        f"[answer] session={session_code.upper()} round={state.round_number} correct={result.correct} score={state.score}"
    )
    if result.game_over:
        current_app.logger.info(f"[game-over] session={session_code.upper()} score={state.score}")
        try:
            record_game_result(session_code, state)
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"[result-save-failed] session={session_code.upper()}")

    _emit_state_update(session_code)
    schedule_reveal(current_app._get_current_object(), session_code, result)
    return jsonify(result.to_dict())


@quiz.route('/<string:session_code>/continue', methods=['POST'])
def continue_round(session_code):
    state = _get_state_or_404(session_code)
    if state.next_round():
        current_app.logger.info(f"[next-round] session={session_code.upper()} round={state.round_number}")
        _emit_state_update(session_code)
    return jsonify(_state_payload(session_code, state))


@quiz.route('/<string:session_code>/reset', methods=['POST'])
def reset_session(session_code):
    state = _get_state_or_404(session_code)
    state.reset()
    current_app.logger.info(f"[reset] session={session_code.upper()}")
    _emit_state_update(session_code)
    return jsonify(_state_payload(session_code, state))


@quiz.route('/<string:session_code>', methods=['DELETE'])
def end_session(session_code):
    _get_state_or_404(session_code)
    sessions.discard(session_code)
    code = session_code.upper()
    socketio.emit('session_ended', {'session_code': code}, to=f"quiz:{code}", namespace='/ws')
    return jsonify({'ok': True})


@quiz.route('/results', methods=['GET'])
def list_results():
    default_limit = int(current_app.config.get('RESULTS_PAGE_SIZE', 20))
    limit = request.args.get('limit', default_limit, type=int)
    if limit is None or limit < 1:
        limit = default_limit
    return jsonify([r.to_dict() for r in recent_results(limit)])
