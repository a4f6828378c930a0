def _create(client, username="alice", name="Alice A", phone="12345"):
    return client.post('/v1/users', json={'username': username, 'name': name, 'phone': phone})


def test_create_read_update_delete_flow(client):
    r = _create(client, username='  alice  ')
    assert r.status_code == 200
    user_id = r.json()['data']
    assert isinstance(user_id, int)

    r = client.get(f'/v1/users/{user_id}')
    assert r.status_code == 200
    assert r.json()['data'] == {'id': user_id, 'username': 'alice', 'name': 'Alice A', 'phone': '12345'}

    r = client.put(f'/v1/users/{user_id}', json={'username': 'alice', 'name': ' Alice B ', 'phone': '999'})
    assert r.status_code == 200
    assert r.json() == {'data': True}
    assert client.get(f'/v1/users/{user_id}').json()['data']['name'] == 'Alice B'

    r = client.delete(f'/v1/users/{user_id}')
    assert r.status_code == 200
    assert r.json() == {'data': True}

    r = client.get(f'/v1/users/{user_id}')
    assert r.status_code == 400
    assert 'not found' in r.json()['error']


def test_create_blank_fields_report_which_field(client):
    assert _create(client, username='   ').json() == {'error': 'Username cannot be blank'}
    assert _create(client, name='').json() == {'error': 'Name cannot be blank'}
    r = client.post('/v1/users', json={'username': 'bob', 'name': 'Bob'})
    assert r.status_code == 400
    assert r.json() == {'error': 'Phone cannot be blank'}


def test_create_duplicate_username(client):
    assert _create(client).status_code == 200
    r = _create(client, username=' alice ', name='Someone else')
    assert r.status_code == 400
    assert r.json() == {'error': 'Duplicate data'}
    assert client.get('/v1/users').json()['paging']['total'] == 1


def test_non_numeric_id_is_rejected(client):
    for method in ('get', 'delete'):
        r = getattr(client, method)('/v1/users/abc')
        assert r.status_code == 400
        assert 'invalid user id' in r.json()['error']
    r = client.put('/v1/users/abc', json={'username': 'a', 'name': 'b', 'phone': 'c'})
    assert r.status_code == 400


def test_update_validates_body_and_existence(client):
    user_id = _create(client).json()['data']
    r = client.put(f'/v1/users/{user_id}', json={'username': 'alice', 'name': '  ', 'phone': '1'})
    assert r.status_code == 400
    assert r.json() == {'error': 'Name cannot be blank'}
    assert client.get(f'/v1/users/{user_id}').json()['data']['name'] == 'Alice A'

    r = client.put('/v1/users/9999', json={'username': 'x', 'name': 'y', 'phone': 'z'})
    assert r.status_code == 400
    assert 'not found' in r.json()['error']


def test_update_to_taken_username_is_duplicate(client):
    _create(client, username='bob')
    carol_id = _create(client, username='carol').json()['data']
    r = client.put(f'/v1/users/{carol_id}', json={'username': 'bob', 'name': 'C', 'phone': '1'})
    assert r.status_code == 400
    assert r.json() == {'error': 'Duplicate data'}


def test_delete_unknown_id(client):
    r = client.delete('/v1/users/12345')
    assert r.status_code == 400
    assert 'not found' in r.json()['error']


def test_list_empty_and_defaults(client):
    r = client.get('/v1/users')
    assert r.status_code == 200
    assert r.json() == {'data': [], 'paging': {'page': 1, 'limit': 10, 'total': 0}}
    r = client.get('/v1/users', params={'page': 0, 'limit': -5})
    assert r.json()['paging'] == {'page': 1, 'limit': 10, 'total': 0}


def test_list_pages_and_caps_results(client):
    for i in range(12):
        _create(client, username=f'user{i:02d}')
    first = client.get('/v1/users').json()
    assert len(first['data']) == 10
    assert first['data'][0]['username'] == 'user11'
    assert first['paging']['total'] == 12
    second = client.get('/v1/users', params={'page': 2, 'limit': 10}).json()
    assert [u['username'] for u in second['data']] == ['user01', 'user00']
    small = client.get('/v1/users', params={'page': 2, 'limit': 5}).json()
    assert [u['username'] for u in small['data']] == ['user06', 'user05', 'user04', 'user03', 'user02']


def test_list_rejects_non_integer_paging(client):
    r = client.get('/v1/users', params={'page': 'first'})
    assert r.status_code == 400
    assert 'page' in r.json()['error']


def test_malformed_json_body_is_400(client):
    r = client.post('/v1/users', content=b'{not json', headers={'Content-Type': 'application/json'})
    assert r.status_code == 400
    assert 'error' in r.json()


def test_list_respects_configured_default_limit(make_client):
    c = make_client('rest', DEFAULT_LIMIT=2)
    for i in range(3):
        _create(c, username=f'u{i}')
    body = c.get('/v1/users').json()
    assert len(body['data']) == 2
    assert body['paging']['limit'] == 2


def test_health_and_request_id_header(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert r.headers['X-Request-ID']
    r = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert r.headers['X-Request-ID'] == 'abc123'


def test_envelope_routes_not_mounted_in_rest_style(client):
    r = client.post('/search-user', json={'data': {'username': 'alice'}})
    assert r.status_code == 404


def test_out_of_range_id_is_rejected(client):
    for method in ('get', 'delete'):
        r = getattr(client, method)('/v1/users/99999999999999999999')
        assert r.status_code == 400
        assert 'out of range' in r.json()['error']
    r = client.put('/v1/users/-99999999999999999999', json={'username': 'a', 'name': 'b', 'phone': 'c'})
    assert r.status_code == 400
    assert 'out of range' in r.json()['error']


def test_out_of_range_paging_is_rejected(client):
    r = client.get('/v1/users', params={'page': 10**19})
    assert r.status_code == 400
    assert 'error' in r.json()
    r = client.get('/v1/users', params={'page': 2**40, 'limit': 2**40})
    assert r.status_code == 400
    assert 'out of range' in r.json()['error']
    r = client.get('/v1/users', params={'limit': 10**19})
    assert r.status_code == 400
