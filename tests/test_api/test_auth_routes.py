"""HTTP tests for registration, login and the profile endpoint."""


def register(client, name='Ann', email='ann@example.com', password='plain-pass'):
    return client.post('/api/auth/register', json={'name': name, 'email': email, 'password': password})


def test_register_creates_account(client):
    response = register(client)

    assert response.status_code == 201
    assert response.json() == {'message': 'user created'}


def test_register_duplicate_email(client):
    register(client)

    response = register(client, name='Other', email='ANN@example.com', password='else')

    assert response.status_code == 400
    assert response.json() == {'message': 'email already exists'}


def test_register_missing_fields(client):
    response = client.post('/api/auth/register', json={'email': 'ann@example.com'})

    assert response.status_code == 400


def test_register_malformed_body(client):
    response = client.post('/api/auth/register', content='not json', headers={'Content-Type': 'application/json'})

    assert response.status_code == 400


def test_login_sets_http_only_cookie(client):
    register(client)

    response = client.post('/api/auth/login', json={'email': 'ann@example.com', 'password': 'plain-pass'})

    assert response.status_code == 200
    assert response.json() == {'user': {'id': 1, 'name': 'Ann', 'email': 'ann@example.com'}}
    set_cookie = response.headers['set-cookie']
    assert set_cookie.startswith('token=')
    assert 'HttpOnly' in set_cookie
    assert 'Max-Age=604800' in set_cookie
    assert 'samesite=strict' in set_cookie.lower()
    assert 'plain-pass' not in response.text


def test_login_wrong_password(client):
    register(client)

    response = client.post('/api/auth/login', json={'email': 'ann@example.com', 'password': 'nope'})

    assert response.status_code == 401
    assert response.json() == {'message': 'Invalid credentials'}
    assert 'set-cookie' not in response.headers


def test_login_unknown_email(client):
    response = client.post('/api/auth/login', json={'email': 'ghost@example.com', 'password': 'pw'})

    assert response.status_code == 401


def test_profile_with_login_cookie(client):
    register(client)
    login = client.post('/api/auth/login', json={'email': 'ann@example.com', 'password': 'plain-pass'})
    client.cookies.set('token', login.cookies['token'])

    response = client.get('/api/auth/get')

    assert response.status_code == 200
    assert response.json() == {'id': 1, 'name': 'Ann', 'email': 'ann@example.com'}
    assert 'password' not in response.text.lower()


def test_profile_with_bearer_header(client, user, auth_headers):
    response = client.get('/api/auth/get', headers=auth_headers(user))

    assert response.json()['email'] == 'test@example.com'


def test_profile_requires_token(client):
    response = client.get('/api/auth/get')

    assert response.status_code == 401
    assert response.json() == {'message': 'Not authenticated: token missing'}


def test_profile_rejects_forged_token(client):
    client.cookies.set('token', 'forged.token.value')

    response = client.get('/api/auth/get')

    assert response.status_code == 401
    assert response.json() == {'message': 'Invalid or expired token'}


def test_profile_of_deleted_user(client, app):
    token = app.state.token_service.issue(999)

    response = client.get('/api/auth/get', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 404


def test_logout_clears_cookie(client):
    response = client.post('/api/auth/logout')

    assert response.status_code == 200
    assert 'token=' in response.headers['set-cookie']
    assert 'Max-Age=0' in response.headers['set-cookie']
