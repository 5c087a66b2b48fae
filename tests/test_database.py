import pymysql
import pytest

from payment_service import database
from payment_service.database import DatabaseError, connect, connection_settings


class _FakeConnection:
    def __init__(self, settings):
        self.settings = settings
        self.pings = 0

    def ping(self, reconnect=False):
        self.pings += 1


@pytest.fixture
def env_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(database, "_instance", None)
    monkeypatch.chdir(tmp_path)
    password = "password"
    monkeypatch.setenv("DB_USER", "user")
    monkeypatch.setenv("DB_PASSWORD", password)
    monkeypatch.setenv("DB_HOST", "db.example.com")
    monkeypatch.setenv("DB_PORT", "3307")
    monkeypatch.setenv("DB_NAME", "payments")
    (tmp_path / ".env").write_text("# settings\n")
    return tmp_path


def test_connection_settings_reads_variables():
    password = "password"
    env = {
        "DB_USER": "user",
        "DB_PASSWORD": password,
        "DB_HOST": "db.example.com",
        "DB_PORT": "3310",
        "DB_NAME": "payments",
    }
    settings = connection_settings(env)
    assert settings["user"] == "user"
    assert settings["password"] == password
    assert settings["host"] == "db.example.com"
    assert settings["port"] == 3310
    assert settings["database"] == "payments"
    assert settings["charset"] == "utf8mb4"


def test_connection_settings_default_port():
    assert connection_settings({})["port"] == 3306


def test_connection_settings_rejects_bad_port():
    with pytest.raises(DatabaseError):
        connection_settings({"DB_PORT": "abc"})


def test_connect_without_env_file_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(database, "_instance", None)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(DatabaseError):
        connect()


def test_connect_opens_once_and_caches(env_dir, monkeypatch):
    created = []

    def fake_connect(**kwargs):
        conn = _FakeConnection(kwargs)
        created.append(conn)
        return conn

    monkeypatch.setattr(pymysql, "connect", fake_connect)
    first = connect()
    second = connect()
    assert first is second
    assert len(created) == 1
    assert first.pings == 1
    assert first.settings["autocommit"] is True
    assert first.settings["port"] == 3307
    assert first.settings["host"] == "db.example.com"


def test_connect_failure_is_wrapped_and_not_cached(env_dir, monkeypatch):
    def failing_connect(**kwargs):
        raise pymysql.err.OperationalError(2003, "refused")

    monkeypatch.setattr(pymysql, "connect", failing_connect)
    with pytest.raises(DatabaseError):
        connect()
    assert database._instance is None