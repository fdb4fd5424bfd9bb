"""
Shared pytest fixtures

Every test gets its own SQLite file database so that threads opening their
own connections see the same data.
"""
import threading

import pytest

from gallery_api import create_app, db
from gallery_api.models.admin import Admin
from gallery_api.services.access_code_store import AccessCodeStore
from gallery_api.services.access_gate import AccessGate
from gallery_api.utils.jwt_utils import create_jwt_token


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', config_overrides={
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'gallery.db'}"
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def store(app_ctx):
    return AccessCodeStore()


@pytest.fixture
def gate(store):
    return AccessGate(store)


@pytest.fixture
def admin_token(app):
    with app.app_context():
        admin = Admin(first_name='Ada', last_name='Lovelace', username='ada', access_code='SEED')
        admin.set_password('analytical-engine')
        db.session.add(admin)
        db.session.commit()
        token, _ = create_jwt_token(admin.id, admin.username)
    return token


@pytest.fixture
def auth_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture
def run_concurrently(app):
    """Run fn() in N threads, each with its own app context, released together"""
    def runner(fn, count):
        barrier = threading.Barrier(count)
        results = []
        errors = []

        def worker():
            with app.app_context():
                barrier.wait()
                try:
                    results.append(fn())
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert not errors, errors
        assert len(results) == count
        return results

    return runner
