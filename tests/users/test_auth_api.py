from types import SimpleNamespace

import pytest
from flask import Flask
from werkzeug.security import generate_password_hash

from gaji_kita.core.enums import Role
from gaji_kita.core.exceptions import AuthenticationError
from gaji_kita.payroll.controller import register as register_payroll
from gaji_kita.payroll.service import PayrollComputer, PayrollHistoryService
from gaji_kita.users.controller import register as register_users
from gaji_kita.users.model import User
from gaji_kita.users.service import AuthService


class FakeUserRepo:
    def __init__(self):
        self.users = {
            "admin": User(1, "Administrator", "admin", generate_password_hash("rahasia123"), Role.ADMIN),
            "lama": User(2, "Akun Lama", "lama", generate_password_hash("rahasia123"), Role.ADMIN, is_active=False),
            "rusak": User(3, "Hash Rusak", "rusak", "CHANGE_ME", Role.ADMIN),
        }

    def get_by_username(self, username):
        return self.users.get(username)


def test_authenticate():
    service = AuthService(FakeUserRepo())

    s_user = service.authenticate(" admin ", "rahasia123")
    assert (s_user.user_id, s_user.role) == (1, Role.ADMIN)

    for username, password in [("admin", "salah"), ("lama", "rahasia123"), ("rusak", "x"), ("tidakada", "x")]:
        with pytest.raises(AuthenticationError, match="Username atau password salah"):
            service.authenticate(username, password)


@pytest.fixture
def client(payroll_repo, employees_repo):
    app = Flask(__name__)
    app.secret_key = "test"
    container = SimpleNamespace(
        auth_service=AuthService(FakeUserRepo()),
        payroll_computer=PayrollComputer(payroll_repo, employees_repo),
        payroll_history_service=PayrollHistoryService(payroll_repo),
    )
    register_users(app, container)
    register_payroll(app, container)
    return app.test_client()


def _login(client):
    return client.post("/api/login", json={"username": "admin", "password": "rahasia123"})


def test_login_me_logout(client):
    assert client.get("/api/me").status_code == 401
    assert client.post("/api/login", json={"username": "admin", "password": "salah"}).status_code == 401

    res = _login(client)
    assert res.status_code == 200
    assert res.get_json()["user"] == {"full_name": "Administrator", "role": "admin"}
    assert client.get("/api/me").get_json()["user"]["user_id"] == 1

    client.post("/api/logout")
    assert client.get("/api/me").status_code == 401


def test_payroll_endpoints_require_login(client):
    res = client.post("/api/payroll/process", json={"period_start": "2025-04-01", "period_end": "2025-04-30"})

    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "Silakan login terlebih dahulu"}


def test_process_payroll_and_error_mapping(client):
    _login(client)
    body = {"period_start": "2025-04-01", "period_end": "2025-04-30", "payment_date": "2025-04-30"}

    res = client.post("/api/payroll/process", json=body)
    assert res.status_code == 201
    rows = res.get_json()["payroll"]
    assert rows[0]["employee_name"] == "Ahmad Surya"
    assert rows[0]["net_salary"] == "4835000.00"
    assert rows[0]["deductions"] == "465000.00"
    assert rows[0]["payment_status"] == "paid"

    again = client.post("/api/payroll/process", json=body)
    assert again.status_code == 400
    assert "sudah diproses" in again.get_json()["message"]

    bad_date = client.post("/api/payroll/process", json={"period_start": "01-04-2025", "period_end": "2025-04-30"})
    assert bad_date.status_code == 400

    assert client.get("/api/payroll/periods/2025-05-01/2025-05-31").status_code == 404
    periods = client.get("/api/payroll/periods").get_json()["periods"]
    assert periods[0]["label"] == "April 2025"
    assert periods[0]["employee_count"] == 3
