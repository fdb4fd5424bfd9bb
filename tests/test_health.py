from gallery_api import create_app
from gallery_api.services.access_code_store import AccessCodeStore


def test_health(client):
    response = client.get('/api/health/')

    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_database_health(client):
    response = client.get('/api/health/database')

    assert response.status_code == 200
    assert response.get_json()['database'] == 'connected'


def test_server_test_endpoint(client):
    assert client.get('/api/test').get_json() == {'message': 'Admin server is running'}


def test_unknown_route_is_json_404(client):
    response = client.get('/api/nowhere')

    assert response.status_code == 404
    assert response.get_json() == {'message': 'Resource not found'}


def test_metrics_expose_business_counters(client):
    client.post('/api/access-codes/use/MISSING')

    body = client.get('/api/health/metrics').get_data(as_text=True)

    assert 'access_code_consumptions_total' in body


def test_initial_access_code_is_seeded_once(tmp_path):
    overrides = {
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'seeded.db'}",
        'INITIAL_ACCESS_CODE': ' first-admin ',
        'INITIAL_ACCESS_CODE_MAX_USES': 2,
    }
    app = create_app('testing', config_overrides=overrides)
    create_app('testing', config_overrides=overrides)

    with app.app_context():
        codes = AccessCodeStore().list_codes()
        assert [(c.code, c.max_uses) for c in codes] == [('FIRST-ADMIN', 2)]


def test_request_metrics_are_recorded_when_enabled(tmp_path):
    app = create_app('testing', config_overrides={
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'metrics.db'}",
        'METRICS_ENABLED': True,
    })
    client = app.test_client()

    client.get('/api/test')
    body = client.get('/api/health/metrics').get_data(as_text=True)

    assert 'gallery_http_requests_total{' in body
    assert 'endpoint="server_test"' in body
    assert 'gallery_http_request_duration_seconds' in body
