from conftest import auth_headers

ALICE = auth_headers('alice')
BOB = auth_headers('bob')
CARA = auth_headers('cara')


def _create(client, headers=ALICE, **body):
    res = client.post('/api/rooms/create', json=body, headers=headers)
    assert res.status_code == 201
    return res.get_json()


def _started_room(client):
    room = _create(client, target_score=3)
    for headers in (BOB, CARA):
        assert client.post('/api/rooms/join', json={'code': room['code']}, headers=headers).status_code == 200
    res = client.post(f"/api/rooms/{room['room_id']}/start", headers=ALICE)
    assert res.get_json() == {'success': True}
    return room['room_id']


def test_index(client):
    assert client.get('/').status_code == 200


def test_requires_identity(client):
    res = client.post('/api/rooms/create', json={})
    assert res.status_code == 401
    assert client.get('/api/auth/user').status_code == 401


def test_current_user(client):
    res = client.get('/api/auth/user', headers=ALICE)
    assert res.status_code == 200
    assert res.get_json()['id'] == 'alice'


def test_create_room(client):
    data = _create(client, target_score=4)
    assert data['success'] is True
    assert len(data['code']) == 6
    state = client.get(f"/api/rooms/{data['room_id']}/state", headers=ALICE).get_json()
    assert state['room']['target_score'] == 4
    assert state['room']['state'] == 'waiting'
    assert [p['user_id'] for p in state['players']] == ['alice']


def test_create_room_rejects_bad_target(client):
    res = client.post('/api/rooms/create', json={'target_score': 0}, headers=ALICE)
    assert res.status_code == 400
    res = client.post('/api/rooms/create', json={'target_score': 'ten'}, headers=ALICE)
    assert res.status_code == 400


def test_join_room(client):
    room = _create(client)
    res = client.post('/api/rooms/join', json={'code': room['code'].lower()}, headers=BOB)
    assert res.status_code == 200
    assert res.get_json() == {'success': True, 'room_id': room['room_id']}

    res = client.post('/api/rooms/join', json={'code': room['code']}, headers=BOB)
    assert res.status_code == 409
    assert res.get_json()['error_code'] == 'already_joined'


def test_join_room_errors(client):
    assert client.post('/api/rooms/join', json={}, headers=BOB).status_code == 400
    res = client.post('/api/rooms/join', json={'code': 'NOPE00'}, headers=BOB)
    assert res.status_code == 404
    body = res.get_json()
    assert body['success'] is False
    assert body['error'] == 'Room not found'


def test_start_requires_host_and_players(client):
    room = _create(client)
    client.post('/api/rooms/join', json={'code': room['code']}, headers=BOB)

    res = client.post(f"/api/rooms/{room['room_id']}/start", headers=BOB)
    assert res.status_code == 403
    res = client.post(f"/api/rooms/{room['room_id']}/start", headers=ALICE)
    assert res.status_code == 400
    assert res.get_json()['error_code'] == 'not_enough_players'


def test_full_round_over_http(client):
    room_id = _started_room(client)

    state = client.get(f'/api/rooms/{room_id}/state', headers=BOB).get_json()
    assert state['room']['state'] == 'playing'
    assert state['judge']['user_id'] == 'alice'
    assert state['prompt_card']['text']

    for headers in (BOB, CARA):
        hand = client.get(f'/api/rooms/{room_id}/hand', headers=headers).get_json()
        assert len(hand) == 7
        res = client.post(f'/api/rooms/{room_id}/submit', json={'card_id': hand[0]['id']}, headers=headers)
        assert res.status_code == 200
        assert res.get_json()['success'] is True

    state = client.get(f'/api/rooms/{room_id}/state', headers=ALICE).get_json()
    assert len(state['submissions']) == 2
    cara_submission = next(s for s in state['submissions'] if s['player']['user_id'] == 'cara')

    res = client.post(f'/api/rooms/{room_id}/judge', json={'submission_id': cara_submission['id']}, headers=BOB)
    assert res.status_code == 403
    res = client.post(f'/api/rooms/{room_id}/judge', json={'submission_id': cara_submission['id']}, headers=ALICE)
    assert res.get_json()['success'] is True

    state = client.get(f'/api/rooms/{room_id}/state', headers=ALICE).get_json()
    scores = {p['user_id']: p['score'] for p in state['players']}
    assert scores == {'alice': 0, 'bob': 0, 'cara': 1}
    assert next(s for s in state['submissions'] if s['id'] == cara_submission['id'])['is_winner']


def test_submit_validation(client):
    room_id = _started_room(client)
    assert client.post(f'/api/rooms/{room_id}/submit', json={}, headers=BOB).status_code == 400
    assert client.post(f'/api/rooms/{room_id}/submit', json={'card_id': 'x'}, headers=BOB).status_code == 400

    hand = client.get(f'/api/rooms/{room_id}/hand', headers=ALICE).get_json()
    res = client.post(f'/api/rooms/{room_id}/submit', json={'card_id': hand[0]['id']}, headers=ALICE)
    assert res.status_code == 400
    assert res.get_json()['error_code'] == 'judge_cannot_submit'

    bob_hand = client.get(f'/api/rooms/{room_id}/hand', headers=BOB).get_json()
    client.post(f'/api/rooms/{room_id}/submit', json={'card_id': bob_hand[0]['id']}, headers=BOB)
    res = client.post(f'/api/rooms/{room_id}/submit', json={'card_id': bob_hand[1]['id']}, headers=BOB)
    assert res.status_code == 409
    assert res.get_json()['error_code'] == 'already_submitted'


def test_judge_validation(client):
    room_id = _started_room(client)
    assert client.post(f'/api/rooms/{room_id}/judge', json={}, headers=ALICE).status_code == 400
    res = client.post(f'/api/rooms/{room_id}/judge', json={'submission_id': 4242}, headers=ALICE)
    assert res.status_code == 404


def test_state_and_hand_for_unknown_room(client):
    assert client.get('/api/rooms/9999/state', headers=ALICE).status_code == 404
    assert client.get('/api/rooms/9999/hand', headers=ALICE).get_json() == []


def test_invite_list(flask_app, client):
    flask_app.config['ALLOWED_IDENTITIES'] = ['alice']
    room = _create(client)
    res = client.post('/api/rooms/join', json={'code': room['code']}, headers=BOB)
    assert res.status_code == 403
    assert client.post('/api/rooms/create', json={}, headers=BOB).status_code == 403


def test_identity_follows_each_request(client):
    assert client.get('/api/auth/user', headers=ALICE).get_json()['id'] == 'alice'
    assert client.get('/api/auth/user', headers=BOB).get_json()['id'] == 'bob'
    assert client.get('/api/auth/user').status_code == 401
