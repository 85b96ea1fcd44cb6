from flagquiz.services.quiz import COUNTRIES


def _create(client, **body):
    res = client.post('/api/quiz/create', json=body)
    assert res.status_code == 201
    return res.get_json()


def _answer(client, code, selection):
    return client.post(f'/api/quiz/{code}/answer', json={'selection': selection})


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'Guess the Flag' in res.get_json()['message']


def test_countries_catalogue(client):
    res = client.get('/api/quiz/countries')
    assert res.status_code == 200
    data = res.get_json()
    assert [c['country'] for c in data] == COUNTRIES
    assert data[0]['flag'] == 'flags/Estonia.png'


def test_create_session_and_state(client):
    created = _create(client, seed=1)
    code = created['session_code']
    assert len(code) == 4
    state = created['state']
    assert state['stage'] == 'awaiting_input'
    assert state['total_rounds'] == 8
    assert len(state['choices']) == 3
    assert 0 <= state['correct_index'] < 3

    res = client.get(f'/api/quiz/{code.lower()}/state')
    assert res.status_code == 200
    fetched = res.get_json()
    assert fetched['session_code'] == code
    assert fetched['choices'] == state['choices']
    assert fetched['reveal_delay_ms'] == 0


def test_create_rejects_bad_total_rounds(client):
    assert client.post('/api/quiz/create', json={'total_rounds': 0}).status_code == 400
    assert client.post('/api/quiz/create', json={'total_rounds': 'many'}).status_code == 400
    assert client.post('/api/quiz/create', json={'total_rounds': 51}).status_code == 400
    assert client.post('/api/quiz/create', json={'total_rounds': 2.7}).status_code == 400
    assert client.post('/api/quiz/create', json={'total_rounds': 3}).status_code == 201


def test_unknown_session_is_404(client):
    res = client.get('/api/quiz/ZZZZ/state')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'Session not found'
    assert _answer(client, 'ZZZZ', 0).status_code == 404


def test_answer_correct_then_continue(client):
    created = _create(client, seed=2)
    code = created['session_code']
    correct_index = created['state']['correct_index']

    res = _answer(client, code, correct_index)
    assert res.status_code == 200
    result = res.get_json()
    assert result['correct'] is True
    assert result['title'] == 'Correct'
    assert result['score'] == 1

    state = client.get(f'/api/quiz/{code}/state').get_json()
    assert state['stage'] == 'revealed'
    assert state['selected'] == correct_index

    nxt = client.post(f'/api/quiz/{code}/continue').get_json()
    assert nxt['stage'] == 'awaiting_input'
    assert nxt['round_number'] == 2
    assert nxt['selected'] is None
    # Acknowledging twice does not skip a round
    again = client.post(f'/api/quiz/{code}/continue').get_json()
    assert again['round_number'] == 2


def test_double_answer_rejected(client):
    created = _create(client, seed=3)
    code = created['session_code']
    wrong = (created['state']['correct_index'] + 1) % 3
    assert _answer(client, code, wrong).get_json()['score'] == -1

    res = _answer(client, code, created['state']['correct_index'])
    assert res.status_code == 400
    assert 'error' in res.get_json()
    state = client.get(f'/api/quiz/{code}/state').get_json()
    assert state['score'] == -1
    assert state['rounds_played'] == 1


def test_out_of_range_answer_rejected(client):
    code = _create(client)['session_code']
    assert _answer(client, code, 3).status_code == 400
    assert _answer(client, code, None).status_code == 400
    state = client.get(f'/api/quiz/{code}/state').get_json()
    assert state['stage'] == 'awaiting_input'
    assert state['rounds_played'] == 0


def test_full_game_records_result(client):
    code = _create(client, seed=4)['session_code']
    # 5 correct then 3 wrong
    for i in range(8):
        state = client.get(f'/api/quiz/{code}/state').get_json()
        idx = state['correct_index'] if i < 5 else (state['correct_index'] + 1) % 3
        result = _answer(client, code, idx).get_json()
        client.post(f'/api/quiz/{code}/continue')
    assert result['game_over'] is True
    final = client.get(f'/api/quiz/{code}/state').get_json()
    assert final['stage'] == 'game_over'
    assert final['score'] == 2
    assert _answer(client, code, 0).status_code == 400

    results = client.get('/api/quiz/results').get_json()
    assert len(results) == 1
    assert results[0]['session_code'] == code
    assert results[0]['score'] == 2
    assert results[0]['correct_answers'] == 5
    assert len(results[0]['round_history']) == 8


def test_reset_after_game_over(client):
    code = _create(client, total_rounds=1)['session_code']
    _answer(client, code, 0)
    assert client.get(f'/api/quiz/{code}/state').get_json()['game_over'] is True
    fresh = client.post(f'/api/quiz/{code}/reset').get_json()
    assert fresh['stage'] == 'awaiting_input'
    assert fresh['score'] == 0
    assert fresh['rounds_played'] == 0
    assert fresh['round_number'] == 1


def test_results_limit(client):
    for _ in range(3):
        code = _create(client, total_rounds=1)['session_code']
        _answer(client, code, 0)
    assert len(client.get('/api/quiz/results').get_json()) == 3
    assert len(client.get('/api/quiz/results?limit=2').get_json()) == 2


def test_delete_session(client):
    code = _create(client)['session_code']
    assert client.delete(f'/api/quiz/{code}').status_code == 200
    assert client.get(f'/api/quiz/{code}/state').status_code == 404


def test_results_reset_command(flask_app, client):
    code = _create(client, total_rounds=1)['session_code']
    _answer(client, code, 0)
    runner = flask_app.test_cli_runner()
    out = runner.invoke(args=['results-reset'])
    assert 'Results have been reset!' in out.output
    assert client.get('/api/quiz/results').get_json() == []


def test_create_uses_configured_total_rounds(flask_app, client):
    flask_app.config['TOTAL_ROUNDS'] = 3
    assert _create(client)['state']['total_rounds'] == 3

    from flagquiz.services.quiz import sessions
    _code, state = sessions.create()
    assert state.total_rounds == 3


def test_final_answer_carries_final_message(client):
    code = _create(client, total_rounds=1)['session_code']
    state = client.get(f'/api/quiz/{code}/state').get_json()
    result = _answer(client, code, state['correct_index']).get_json()
    assert result['game_over'] is True
    assert result['final_message'] == 'Your final score is 1 out of 1.'
    assert client.get(f'/api/quiz/{code}/state').get_json()['final_message'] == result['final_message']


def test_final_answer_survives_result_save_failure(client, monkeypatch):
    from sqlalchemy.exc import OperationalError
    import flagquiz.api.quiz as quiz_api

    def _fail(*_args, **_kwargs):
        raise OperationalError('INSERT INTO game_result', {}, Exception('disk I/O error'))

    monkeypatch.setattr(quiz_api, 'record_game_result', _fail)
    code = _create(client, total_rounds=1)['session_code']
    res = _answer(client, code, 0)
    assert res.status_code == 200
    assert res.get_json()['game_over'] is True
    assert client.get(f'/api/quiz/{code}/state').get_json()['stage'] == 'game_over'


def test_default_config_finishes_game(monkeypatch):
    from config import Config
    from flagquiz import create_app, socketio
    from flagquiz.services.quiz import sessions

    class LiveConfig(Config):
        SQLALCHEMY_DATABASE_URI = 'sqlite://'
        REVEAL_DELAY_MS = 0

    tasks = []
    monkeypatch.setattr(socketio, 'start_background_task', lambda fn, *args: tasks.append((fn, args)))
    application = create_app(LiveConfig)
    assert not application.config.get('TESTING')
    live = application.test_client()
    try:
        code = live.post('/api/quiz/create', json={'total_rounds': 1}).get_json()['session_code']
        res = live.post(f'/api/quiz/{code}/answer', json={'selection': 0})
        assert res.status_code == 200
        assert res.get_json()['game_over'] is True
        results = live.get('/api/quiz/results').get_json()
        assert [r['session_code'] for r in results] == [code]
        assert len(tasks) == 1
    finally:
        sessions.clear()
