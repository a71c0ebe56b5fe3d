from types import SimpleNamespace

import pytest
from flask import Flask

from gaji_kita.attendance.reconciler import AttendanceReconciler
from gaji_kita.core.enums import AttendanceStatus
from gaji_kita.employees.service import EmployeeService
from gaji_kita.settings.model import ApiKey
from gaji_kita.settings.service import ApiKeyService
from gaji_kita.sync.controller import register

TOKEN = "mesin-lobi-0123456789"


class SingleKeyRepo:
    def __init__(self):
        self.key = ApiKey(api_key_id=7, name="Mesin Lobi", key=TOKEN)
        self.touched = 0

    def get_active_by_key(self, key):
        return self.key if key == TOKEN else None

    def touch(self, api_key_id, used_at):
        self.touched += 1


@pytest.fixture
def client(employees_repo, attendance_repo, calendar_repo):
    app = Flask(__name__)
    app.config["TESTING"] = True
    container = SimpleNamespace(
        api_key_service=ApiKeyService(SingleKeyRepo()),
        employee_service=EmployeeService(employees_repo),
        attendance_reconciler=AttendanceReconciler(employees_repo, attendance_repo, calendar_repo),
    )
    register(app, container)
    return app.test_client()


def _post(client, body, token=TOKEN):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return client.post("/api/attendance-sync", json=body, headers=headers)


def test_missing_or_wrong_key_is_401(client):
    assert _post(client, {"action": "get_employees"}, token=None).status_code == 401
    res = _post(client, {"action": "get_employees"}, token="salah")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_get_employees(client):
    res = _post(client, {"action": "get_employees"})

    assert res.status_code == 200
    employees = res.get_json()["employees"]
    assert employees[0] == {"id": 1, "first_name": "Ahmad", "last_name": "Surya", "nik": "EMP001"}
    assert len(employees) == 3


def test_add_employee_created_or_existing(client, employees_repo):
    res = _post(client, {"action": "add_employee", "data": {"nik": "EMP050", "first_name": "Eko"}})
    assert res.status_code == 201
    assert employees_repo.get_by_id(res.get_json()["employee_id"]).nik == "EMP050"

    res = _post(client, {"action": "add_employee", "data": {"nik": "EMP001"}})
    assert res.status_code == 200
    assert res.get_json()["employee_id"] == 1

    assert _post(client, {"action": "add_employee", "data": {}}).status_code == 400


def test_add_attendance_records_then_updates(client, attendance_repo):
    body = {
        "action": "add_attendance",
        "data": {"nik": "EMP002", "date": "2025-04-10", "check_in": "2025-04-10T09:20:00"},
    }

    first = _post(client, body)
    assert first.status_code == 201
    assert first.get_json()["message"] == "Data kehadiran tercatat"
    attendance_id = first.get_json()["attendance_id"]
    assert attendance_repo.records[attendance_id].status == AttendanceStatus.LATE

    body["data"]["check_in"] = "2025-04-10T08:45:00"
    second = _post(client, body)
    assert second.status_code == 201
    assert second.get_json() == {
        "success": True,
        "message": "Data kehadiran diperbarui",
        "attendance_id": attendance_id,
    }
    assert attendance_repo.records[attendance_id].status == AttendanceStatus.PRESENT
    assert len(attendance_repo.records) == 1


def test_add_attendance_unknown_nik_is_404(client):
    res = _post(client, {"action": "add_attendance", "data": {"nik": "EMP999", "date": "2025-04-10"}})

    assert res.status_code == 404


def test_add_attendance_requires_employee_reference(client):
    res = _post(client, {"action": "add_attendance", "data": {"date": "2025-04-10"}})

    assert res.status_code == 400


def test_unknown_action_is_400(client):
    res = _post(client, {"action": "hapus_semua"})

    assert res.status_code == 400
    assert res.get_json()["message"] == "Aksi tidak dikenal"
