from collections.abc import Iterator

import pytest

from bp_tracker import create_app
from bp_tracker.storage import MemoryEntryStore


def _test_config(tmp_path) -> dict:
    return {
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'AUDIT_LOG_FILE': str(tmp_path / 'logs' / 'audit.log'),
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'bp_tracker.db'}",
    }


@pytest.fixture
def store() -> MemoryEntryStore:
    return MemoryEntryStore()


@pytest.fixture
def app(tmp_path, store):
    return create_app(_test_config(tmp_path), store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_app(tmp_path) -> Iterator:
    from bp_tracker import db

    config = _test_config(tmp_path)
    config['BP_STORAGE'] = 'sql'
    app = create_app(config)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
