def _events(sio_client, name):
    return [pkt for pkt in sio_client.get_received('/ws') if pkt['name'] == name]


def test_socket_connect_and_join(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    # Flush any initial events
    try:
        sio_client.get_received('/ws')
    except Exception:
        pass

    sio_client.emit('join_bout', {'bout_code': 'ABCD'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' for pkt in received)


def test_join_requires_code(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_bout', {}, namespace='/ws')
    assert _events(sio_client, 'error')


def test_join_live_bout_sends_snapshot(client, sio_client):
    code = client.post('/api/bouts/create', json={'default_time': 60}).get_json()['bout_code']
    client.post(f'/api/bouts/{code}/touch', json={'side': 'left'})
    sio_client.get_received('/ws')

    sio_client.emit('join_bout', {'bout_code': code.lower()}, namespace='/ws')
    snapshots = _events(sio_client, 'state_update')
    assert snapshots
    payload = snapshots[-1]['args'][0]
    assert payload['bout_code'] == code
    assert payload['left']['score'] == 1


def test_actions_render_to_room(client, sio_client):
    code = client.post('/api/bouts/create', json={'default_time': 60}).get_json()['bout_code']
    sio_client.emit('join_bout', {'bout_code': code}, namespace='/ws')
    sio_client.get_received('/ws')

    client.post(f'/api/bouts/{code}/touch', json={'side': 'right'})
    client.post(f'/api/bouts/{code}/card', json={'side': 'left', 'card': 'red'})
    received = sio_client.get_received('/ws')

    scores = [pkt['args'][0] for pkt in received if pkt['name'] == 'score_update']
    cards = [pkt['args'][0] for pkt in received if pkt['name'] == 'card_update']
    assert scores[0] == {'side': 'right', 'score': 1, 'bout_code': code}
    assert scores[-1] == {'side': 'right', 'score': 2, 'bout_code': code}
    assert cards == [{'side': 'left', 'card': 'red', 'bout_code': code}]


def test_clock_expiry_renders_stop(client, sio_client):
    from piste.services.bout import registry

    code = client.post('/api/bouts/create', json={'default_time': 0.1}).get_json()['bout_code']
    sio_client.emit('join_bout', {'bout_code': code}, namespace='/ws')
    sio_client.get_received('/ws')

    client.post(f'/api/bouts/{code}/start')
    registry.get_bout(code).clock.tick()
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'timer_stopped' for pkt in received)
    times = [pkt['args'][0]['current_time'] for pkt in received if pkt['name'] == 'time_update']
    assert times[-1] == 0.0


def test_ping_pong(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    pongs = _events(sio_client, 'pong')
    assert pongs and pongs[0]['args'][0] == {'n': 1}
