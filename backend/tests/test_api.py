def _new_board(client):
    res = client.post('/api/boards/create')
    assert res.status_code == 201
    return res.get_json()['board_code']


def _add(client, code):
    res = client.post(f'/api/boards/{code}/participants')
    assert res.status_code == 201
    return res.get_json()['participant']


def test_create_board(client):
    res = client.post('/api/boards/create')
    assert res.status_code == 201
    data = res.get_json()
    assert len(data['board_code']) == 4


def test_unknown_board_is_404(client):
    res = client.get('/api/boards/ZZZZ/state')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'Board not found'
    assert client.post('/api/boards/ZZZZ/participants').status_code == 404


def test_add_and_state(client):
    code = _new_board(client)
    a = _add(client, code)
    b = _add(client, code)
    assert a['name'] == 'Knight 1'
    assert b['name'] == 'Knight 2'
    state = client.get(f'/api/boards/{code.lower()}/state').get_json()
    assert state['board_code'] == code
    assert [p['id'] for p in state['participants']] == [a['id'], b['id']]
    assert state['current_round'] == 1
    assert state['leader']['id'] == a['id']


def test_score_adjust_clamps_and_ranks(client):
    code = _new_board(client)
    a = _add(client, code)
    b = _add(client, code)
    res = client.post(f"/api/boards/{code}/participants/{a['id']}/score", json={'delta': -1})
    assert res.status_code == 200
    for _ in range(2):
        res = client.post(f"/api/boards/{code}/participants/{b['id']}/score", json={'delta': 1})
    data = res.get_json()
    scores = {p['id']: p['score'] for p in data['participants']}
    assert scores == {a['id']: 0, b['id']: 2}
    assert data['ranking'] == [b['id'], a['id']]
    assert data['leader']['id'] == b['id']
    assert 'is leading with 2 points!' in data['html']


def test_score_rejects_non_integer_delta(client):
    code = _new_board(client)
    a = _add(client, code)
    for bad in ('1', 1.5, True, None):
        res = client.post(f"/api/boards/{code}/participants/{a['id']}/score", json={'delta': bad})
        assert res.status_code == 400


def test_rename_rejects_non_string_name(client):
    code = _new_board(client)
    a = _add(client, code)
    for bad in (5, ['Tristan'], {'first': 'Tristan'}):
        res = client.post(f"/api/boards/{code}/participants/{a['id']}/rename/commit", json={'name': bad})
        assert res.status_code == 400
        assert res.get_json()['error'] == 'name must be a string'
    state = client.get(f'/api/boards/{code}/state').get_json()
    assert state['participants'][0]['name'] == 'Knight 1'


def test_missing_participant_is_noop(client):
    code = _new_board(client)
    _add(client, code)
    before = client.get(f'/api/boards/{code}/state').get_json()
    res = client.post(f'/api/boards/{code}/participants/999/score', json={'delta': 3})
    assert res.status_code == 200
    res = client.delete(f'/api/boards/{code}/participants/999')
    assert res.get_json()['removed'] is False
    assert client.get(f'/api/boards/{code}/state').get_json() == before


def test_remove_preserves_order(client):
    code = _new_board(client)
    a, b, c = (_add(client, code) for _ in range(3))
    res = client.delete(f"/api/boards/{code}/participants/{b['id']}")
    data = res.get_json()
    assert data['removed'] is True
    assert [p['id'] for p in data['participants']] == [a['id'], c['id']]


def test_rename_flow(client):
    code = _new_board(client)
    a = _add(client, code)
    res = client.post(f"/api/boards/{code}/participants/{a['id']}/rename/begin")
    data = res.get_json()
    assert data['participants'][0]['is_editing'] is True
    assert f'id="name-input-{a["id"]}"' in data['html']

    res = client.post(f"/api/boards/{code}/participants/{a['id']}/rename/commit", json={'name': '  Percival '})
    data = res.get_json()
    assert data['participants'][0] == {'id': a['id'], 'name': 'Percival', 'score': 0, 'is_editing': False}

    client.post(f"/api/boards/{code}/participants/{a['id']}/rename/begin")
    res = client.post(f"/api/boards/{code}/participants/{a['id']}/rename/commit", json={'name': '   '})
    assert res.get_json()['participants'][0]['name'] == 'Knight 1'


def test_rename_cancel(client):
    code = _new_board(client)
    a = _add(client, code)
    client.post(f"/api/boards/{code}/participants/{a['id']}/rename/begin")
    res = client.post(f"/api/boards/{code}/participants/{a['id']}/rename/cancel")
    p = res.get_json()['participants'][0]
    assert p['name'] == 'Knight 1'
    assert p['is_editing'] is False


def test_reset_requires_confirmation(client):
    code = _new_board(client)
    a = _add(client, code)
    client.post(f"/api/boards/{code}/participants/{a['id']}/score", json={'delta': 4})

    res = client.post(f'/api/boards/{code}/reset', json={'confirm': False})
    data = res.get_json()
    assert data['applied'] is False
    assert data['participants'][0]['score'] == 4

    res = client.post(f'/api/boards/{code}/reset')
    assert res.get_json()['applied'] is False

    res = client.post(f'/api/boards/{code}/reset', json={'confirm': True})
    data = res.get_json()
    assert data['applied'] is True
    assert data['participants'][0]['score'] == 0
    assert data['participants'][0]['name'] == 'Knight 1'
    assert data['current_round'] == 1


def test_new_game_clears_board(client):
    code = _new_board(client)
    _add(client, code)
    _add(client, code)
    res = client.post(f'/api/boards/{code}/new-game', json={'confirm': False})
    assert len(res.get_json()['participants']) == 2
    res = client.post(f'/api/boards/{code}/new-game', json={'confirm': True})
    data = res.get_json()
    assert data['applied'] is True
    assert data['participants'] == []
    assert data['leader'] is None
    assert 'Ready to Begin?' in data['html']


def test_discard_board(client):
    code = _new_board(client)
    assert client.delete(f'/api/boards/{code}').status_code == 200
    assert client.delete(f'/api/boards/{code}').status_code == 404
    assert client.get(f'/api/boards/{code}/state').status_code == 404


def test_render_endpoint(client):
    code = _new_board(client)
    res = client.get(f'/api/boards/{code}/render')
    assert res.status_code == 200
    assert b'Add First Knight' in res.data


def test_index_creates_fresh_board_per_load(client):
    first = client.get('/')
    second = client.get('/')
    assert first.status_code == 200
    assert b'Knights Score Tracker' in first.data
    assert client.get('/health').get_json() == {'ok': True, 'boards': 2}
    assert first.data != second.data


def test_show_board_page(client):
    code = _new_board(client)
    _add(client, code)
    res = client.get(f'/boards/{code}')
    assert res.status_code == 200
    assert b'Add Knight' in res.data
    assert client.get('/boards/ZZZZ').status_code == 404


def test_board_capacity_evicts_oldest(client, flask_app):
    codes = [_new_board(client) for _ in range(flask_app.config['MAX_BOARDS'] + 1)]
    assert client.get(f'/api/boards/{codes[0]}/state').status_code == 404
    assert client.get(f'/api/boards/{codes[-1]}/state').status_code == 200


def test_boards_clear_command(flask_app, client):
    _new_board(client)
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['boards-clear'])
    assert 'Discarded 1 board(s).' in result.output
    assert client.get('/health').get_json()['boards'] == 0
