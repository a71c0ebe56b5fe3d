import mysql.connector
import pytest

from gaji_kita.core.exceptions import StorageError
from gaji_kita.database.connection import DBConfig, DatabaseConnection


class FakeMySQLConnection:
    def __init__(self, *, fail_commit=False):
        self.fail_commit = fail_commit
        self.calls = []

    def commit(self):
        self.calls.append("commit")
        if self.fail_commit:
            raise mysql.connector.Error("Lost connection to MySQL server during query")

    def rollback(self):
        self.calls.append("rollback")

    def close(self):
        self.calls.append("close")


@pytest.fixture
def conn():
    return DatabaseConnection(DBConfig(host="localhost", port=3306, user="gaji", password="x", database="gaji_kita"))


def test_connect_failure_is_a_storage_error(conn, monkeypatch):
    def refuse():
        raise mysql.connector.Error("Can't connect to MySQL server")

    monkeypatch.setattr(conn, "connect", refuse)

    with pytest.raises(StorageError, match="Can't connect to MySQL server"):
        with conn.transaction():
            pass
    assert conn.active_connection() is None


def test_commit_failure_rolls_back_and_is_a_storage_error(conn, monkeypatch):
    fake = FakeMySQLConnection(fail_commit=True)
    monkeypatch.setattr(conn, "connect", lambda: fake)

    with pytest.raises(StorageError, match="Lost connection"):
        with conn.transaction():
            assert conn.active_connection() is fake

    assert fake.calls == ["commit", "rollback", "close"]
    assert conn.active_connection() is None


def test_nested_transaction_commits_once(conn, monkeypatch):
    fake = FakeMySQLConnection()
    monkeypatch.setattr(conn, "connect", lambda: fake)

    with conn.transaction() as outer:
        with conn.transaction() as inner:
            assert inner is outer

    assert fake.calls == ["commit", "close"]


def test_domain_error_inside_transaction_rolls_back(conn, monkeypatch):
    fake = FakeMySQLConnection()
    monkeypatch.setattr(conn, "connect", lambda: fake)

    with pytest.raises(StorageError, match="Duplicate entry"):
        with conn.transaction():
            raise StorageError("Duplicate entry for key 'uq_attendance_employee_date'")

    assert fake.calls == ["rollback", "close"]
