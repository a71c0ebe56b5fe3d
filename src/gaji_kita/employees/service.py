from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import optional_text, parse_amount, parse_optional_id, require_non_empty
from ..core.context import SessionContext
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .department_model import Department
from .department_repository import DepartmentRepository
from .model import Employee, EmployeeData
from .position_model import Position
from .position_repository import PositionRepository
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _parse_date(value: Any, field_name: str, *, required: bool = False) -> Optional[date]:
    try:
        parsed = coerce_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} tidak valid (format YYYY-MM-DD)")
    if parsed is None and required:
        raise ValidationError(f"{field_name} harus diisi")
    return parsed


def parse_employee_data(payload: Mapping[str, Any]) -> EmployeeData:
    """Validate form/JSON fields into EmployeeData."""
    return EmployeeData(
        first_name=require_non_empty(str(payload.get("first_name") or ""), "Nama depan"),
        last_name=optional_text(payload.get("last_name")),
        nik=optional_text(payload.get("nik")),
        email=optional_text(payload.get("email")),
        phone=optional_text(payload.get("phone")),
        birth_date=_parse_date(payload.get("birth_date"), "Tanggal lahir"),
        hire_date=_parse_date(payload.get("hire_date"), "Tanggal masuk", required=True),
        bank_name=optional_text(payload.get("bank_name")),
        bank_account=optional_text(payload.get("bank_account")),
        npwp_account=optional_text(payload.get("npwp_account")),
        bpjs_account=optional_text(payload.get("bpjs_account")),
        basic_salary=parse_amount(payload.get("basic_salary"), "Gaji pokok", required=True),
        incentive=parse_amount(payload.get("incentive"), "Insentif"),
        transportation_fee=parse_amount(payload.get("transportation_fee"), "Uang transport"),
        department_id=parse_optional_id(payload.get("department_id"), "Departemen"),
        position_id=parse_optional_id(payload.get("position_id"), "Jabatan"),
    )


class EmployeeService:
    """Use case: manage the employee roster."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(
        self, ctx: SessionContext, *, search: Optional[str] = None, active_only: bool = False
    ) -> Sequence[Employee]:
        ctx.require(Role.ADMIN, Role.INTEGRATION)
        return self._employees.list_all(active_only=active_only, search=search)

    def get_employee(self, ctx: SessionContext, employee_id: int) -> Employee:
        ctx.require(Role.ADMIN)
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Karyawan tidak ditemukan")
        return employee

    def _ensure_nik_free(self, nik: Optional[str], *, employee_id: Optional[int] = None) -> None:
        if not nik:
            return
        other = self._employees.get_by_nik(nik)
        if other and other.employee_id != employee_id:
            raise ValidationError(f"NIK {nik} sudah digunakan oleh {other.full_name}")

    def create_employee(self, ctx: SessionContext, payload: Mapping[str, Any]) -> int:
        ctx.require(Role.ADMIN)
        data = parse_employee_data(payload)
        self._ensure_nik_free(data.nik)
        employee_id = self._employees.create(data)
        logger.info("Employee %s created by %s", employee_id, ctx.full_name)
        return employee_id

    def update_employee(self, ctx: SessionContext, employee_id: int, payload: Mapping[str, Any]) -> None:
        ctx.require(Role.ADMIN)
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Karyawan tidak ditemukan")
        data = parse_employee_data(payload)
        self._ensure_nik_free(data.nik, employee_id=employee_id)
        self._employees.update(employee_id, data)

    def deactivate_employee(self, ctx: SessionContext, employee_id: int) -> None:
        ctx.require(Role.ADMIN)
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Karyawan tidak ditemukan")
        self._employees.set_active(employee_id, is_active=False)

    def delete_employee(self, ctx: SessionContext, employee_id: int) -> None:
        ctx.require(Role.ADMIN)
        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError("Karyawan tidak ditemukan")
        logger.info("Employee %s deleted by %s", employee_id, ctx.full_name)

    def register_from_machine(self, ctx: SessionContext, payload: Mapping[str, Any]) -> tuple[int, bool]:
        """Create an employee pushed by the attendance machine.

        Returns (employee_id, created). An existing NIK is not an error: the
        known id is returned with created=False.
        """
        ctx.require(Role.INTEGRATION, Role.ADMIN)
        nik = optional_text(payload.get("nik"))
        if not nik:
            raise ValidationError("NIK wajib diisi")

        existing = self._employees.get_by_nik(nik)
        if existing:
            return existing.employee_id, False

        data = EmployeeData(
            first_name=optional_text(payload.get("first_name")) or "Unknown",
            last_name=optional_text(payload.get("last_name")),
            nik=nik,
            hire_date=_parse_date(payload.get("hire_date"), "Tanggal masuk") or date.today(),
            basic_salary=Decimal("0"),
        )
        employee_id = self._employees.create(data, api_key_id=ctx.api_key_id)
        logger.info("Employee %s registered from api key %s", employee_id, ctx.api_key_id)
        return employee_id, True


class DepartmentService:
    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_departments(self, ctx: SessionContext) -> Sequence[Department]:
        ctx.require(Role.ADMIN)
        return self._departments.list_all()

    def create_department(self, ctx: SessionContext, *, name: str, description: Optional[str] = None) -> int:
        ctx.require(Role.ADMIN)
        name = require_non_empty(name, "Nama departemen")
        if self._departments.get_by_name(name):
            raise ValidationError("Nama departemen sudah ada")
        return self._departments.create(name=name, description=optional_text(description))

    def update_department(
        self, ctx: SessionContext, department_id: int, *, name: str, description: Optional[str] = None
    ) -> None:
        ctx.require(Role.ADMIN)
        name = require_non_empty(name, "Nama departemen")
        other = self._departments.get_by_name(name)
        if other and other.department_id != department_id:
            raise ValidationError("Nama departemen sudah ada")
        if not self._departments.get_by_id(department_id):
            raise NotFoundError("Departemen tidak ditemukan")
        self._departments.update(department_id, name=name, description=optional_text(description))

    def delete_department(self, ctx: SessionContext, department_id: int) -> None:
        ctx.require(Role.ADMIN)
        if not self._departments.delete_by_id(department_id):
            raise NotFoundError("Departemen tidak ditemukan")


class PositionService:
    def __init__(self, positions: PositionRepository, departments: DepartmentRepository):
        self._positions = positions
        self._departments = departments

    def list_positions(self, ctx: SessionContext, *, department_id: Optional[int] = None) -> Sequence[Position]:
        ctx.require(Role.ADMIN)
        return self._positions.list_all(department_id=department_id)

    def _validate(self, payload: Mapping[str, Any]) -> tuple[str, Optional[int], Decimal]:
        name = require_non_empty(str(payload.get("name") or ""), "Nama jabatan")
        department_id = parse_optional_id(payload.get("department_id"), "Departemen")
        if department_id is not None and not self._departments.get_by_id(department_id):
            raise ValidationError("Departemen tidak ditemukan")
        base_salary = parse_amount(payload.get("base_salary"), "Gaji pokok") or Decimal("0")
        return name, department_id, base_salary

    def create_position(self, ctx: SessionContext, payload: Mapping[str, Any]) -> int:
        ctx.require(Role.ADMIN)
        name, department_id, base_salary = self._validate(payload)
        return self._positions.create(name=name, department_id=department_id, base_salary=base_salary)

    def update_position(self, ctx: SessionContext, position_id: int, payload: Mapping[str, Any]) -> None:
        ctx.require(Role.ADMIN)
        if not self._positions.get_by_id(position_id):
            raise NotFoundError("Jabatan tidak ditemukan")
        name, department_id, base_salary = self._validate(payload)
        self._positions.update(position_id, name=name, department_id=department_id, base_salary=base_salary)

    def delete_position(self, ctx: SessionContext, position_id: int) -> None:
        ctx.require(Role.ADMIN)
        if not self._positions.delete_by_id(position_id):
            raise NotFoundError("Jabatan tidak ditemukan")
