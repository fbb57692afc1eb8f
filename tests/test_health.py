import json
import logging

import pytest

from app.api.routes import health
from app.config import Settings
from app.core.logging import RequestIdFilter, request_id_var
from app.models import Subscription


def test_health_check_reports_database():
    response = health.health_check()
    assert response.status_code == 200


def test_health_check_probes_database_once(monkeypatch):
    calls = []

    def fake_health():
        calls.append(1)
        return {'ok': False, 'error': 'connection refused'}

    monkeypatch.setattr(health, 'database_health', fake_health)
    response = health.health_check()

    assert calls == [1]
    assert response.status_code == 503
    assert json.loads(response.body)['status'] == 'degraded'


def test_request_id_filter_stamps_current_request():
    record = logging.LogRecord('app', logging.INFO, __file__, 1, 'hello', None, None)
    token = request_id_var.set('req-42')
    try:
        assert RequestIdFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == 'req-42'


def test_subscription_table_holds_only_billing_columns():
    assert set(Subscription.__table__.columns.keys()) == {
        'id', 'service_name', 'price', 'user_id', 'start_date', 'end_date',
    }


def test_database_url_is_assembled_from_postgres_vars():
    settings = Settings(
        _env_file=None,
        DATABASE_URL='',
        POSTGRES_USER='svc',
        POSTGRES_PASSWORD='secret',
        POSTGRES_HOST='db',
        POSTGRES_PORT=6543,
        POSTGRES_DB='subs',
    )
    assert settings.database_url == 'postgresql+psycopg2://svc:secret@db:6543/subs'


def test_database_url_must_be_supported():
    with pytest.raises(ValueError):
        Settings(_env_file=None, DATABASE_URL='mysql://localhost/db')


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv('CORS_ORIGINS', 'http://a.example, http://b.example')
    settings = Settings(_env_file=None)
    assert settings.cors_origins == ['http://a.example', 'http://b.example']


def test_log_level_is_normalized():
    assert Settings(_env_file=None, LOG_LEVEL='debug').log_level == 'DEBUG'
