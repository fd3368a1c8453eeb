import json

from app import create_app
from config import ProductionConfig, TestingConfig, get_config


def test_root_banner(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.get_json() == {'ok': True, 'message': 'Portfolio Backend is running'}


def test_health_check(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'database': 'ok'}


def test_health_check_reports_database_error(app, client, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from extensions import db

    def fail(*args, **kwargs):
        raise OperationalError('SELECT 1', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session, 'execute', fail)
    response = client.get('/health')

    assert response.status_code == 503
    assert response.get_json() == {'status': 'ok', 'database': 'error'}


def test_unknown_route_is_json_404(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}


def test_wrong_method_is_json_405(client):
    response = client.put('/api/experience', json={})
    assert response.status_code == 405
    assert response.get_json() == {'error': 'Method not allowed'}


def test_oversized_body_is_rejected(client):
    response = client.post('/api/projects', data='x' * (210 * 1024), content_type='application/json')
    assert response.status_code == 413
    assert response.get_json() == {'error': 'Request body too large'}


def test_unhandled_errors_are_generic_500(app, client, monkeypatch):
    import blueprints.projects.routes as routes

    def explode():
        raise RuntimeError('database went away')

    monkeypatch.setattr(routes, 'list_projects', explode)
    response = client.get('/api/projects')

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Server error'}


def test_security_headers(client):
    response = client.get('/')
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert response.headers['X-Frame-Options'] == 'SAMEORIGIN'
    assert response.headers['Referrer-Policy'] == 'no-referrer'
    assert 'Strict-Transport-Security' not in response.headers


def test_cors_allows_dev_origin(client):
    response = client.get('/api/projects', headers={'Origin': 'http://localhost:5173'})
    assert response.headers.get('Access-Control-Allow-Origin') == 'http://localhost:5173'


def test_cors_ignores_unknown_origin(client):
    response = client.get('/api/projects', headers={'Origin': 'https://evil.example.com'})
    assert response.status_code == 200
    assert 'Access-Control-Allow-Origin' not in response.headers


def test_general_rate_limit(app, client):
    app.config.update(RATELIMIT_ENABLED=True, RATELIMIT_GENERAL=(3, 60))

    assert [client.get('/').status_code for _ in range(3)] == [200, 200, 200]
    response = client.get('/')
    assert response.status_code == 429
    assert response.get_json() == {'error': 'Too many requests, please try again later.'}


def test_config_selection(monkeypatch):
    assert get_config('testing') is TestingConfig
    assert get_config('production') is ProductionConfig
    monkeypatch.setenv('FLASK_ENV', 'production')
    assert get_config() is ProductionConfig
    monkeypatch.setenv('FLASK_ENV', 'unknown')
    assert get_config().__name__ == 'DevelopmentConfig'


def test_production_adds_hsts(monkeypatch):
    monkeypatch.setattr(ProductionConfig, 'SQLALCHEMY_DATABASE_URI', 'sqlite:///:memory:')
    monkeypatch.setattr(ProductionConfig, 'SQLALCHEMY_ENGINE_OPTIONS', {})
    app = create_app('production')

    response = app.test_client().get('/')
    assert response.headers['Strict-Transport-Security'] == 'max-age=31536000; includeSubDomains'


def test_seed_command(app, tmp_path):
    content = {
        'projects': [
            {'name': 'Portfolio', 'tech': ['React']},
            {'name': 'Portfolio'},
            {'description': 'missing name'},
        ],
        'experience': [{'role': 'Engineer', 'company': 'Acme', 'startDate': '2020-01-01'}],
        'achievements': [{'title': 'Award'}, 'not an object'],
    }
    path = tmp_path / 'content.json'
    path.write_text(json.dumps(content), encoding='utf-8')

    result = app.test_cli_runner().invoke(args=['seed-data', str(path)])

    assert result.exit_code == 0, result.output
    assert 'projects: 1 created, 2 skipped' in result.output
    assert 'experience: 1 created, 0 skipped' in result.output
    assert 'achievements: 1 created, 1 skipped' in result.output

    client = app.test_client()
    assert [p['name'] for p in client.get('/api/projects').get_json()] == ['Portfolio']
