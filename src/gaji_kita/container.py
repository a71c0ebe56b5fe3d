from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.importer import AttendanceImporter
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import AttendanceReconciler
from .attendance.service import AttendanceService
from .calendar.mysql_calendar_repository import MySQLCalendarRepository
from .calendar.service import CalendarService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_department_repository import MySQLDepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.mysql_position_repository import MySQLPositionRepository
from .employees.service import DepartmentService, EmployeeService, PositionService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollComputer, PayrollHistoryService
from .reports.service import ReportService
from .settings.mysql_api_key_repository import MySQLApiKeyRepository
from .settings.mysql_settings_repository import MySQLBpjsSettingRepository, MySQLTaxSettingRepository
from .settings.service import ApiKeyService, SettingsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    auth_service: AuthService
    employee_service: EmployeeService
    department_service: DepartmentService
    position_service: PositionService
    attendance_reconciler: AttendanceReconciler
    attendance_importer: AttendanceImporter
    attendance_service: AttendanceService
    payroll_computer: PayrollComputer
    payroll_history_service: PayrollHistoryService
    calendar_service: CalendarService
    settings_service: SettingsService
    api_key_service: ApiKeyService
    report_service: ReportService


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = MySQLUserRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    positions_repo = MySQLPositionRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    calendar_repo = MySQLCalendarRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    attendance_reconciler = AttendanceReconciler(
        employees_repo,
        attendance_repo,
        calendar_repo,
        strategy_factory=AttendanceStrategyFactory(),
        transaction=conn.transaction,
    )

    return Container(
        conn=conn,
        auth_service=AuthService(users_repo),
        employee_service=EmployeeService(employees_repo),
        department_service=DepartmentService(departments_repo),
        position_service=PositionService(positions_repo, departments_repo),
        attendance_reconciler=attendance_reconciler,
        attendance_importer=AttendanceImporter(attendance_reconciler),
        attendance_service=AttendanceService(attendance_repo, employees_repo, attendance_reconciler),
        payroll_computer=PayrollComputer(
            payroll_repo,
            employees_repo,
            calculator=StandardPayrollCalculator(),
            transaction=conn.transaction,
        ),
        payroll_history_service=PayrollHistoryService(payroll_repo),
        calendar_service=CalendarService(calendar_repo, payroll_repo),
        settings_service=SettingsService(MySQLTaxSettingRepository(conn), MySQLBpjsSettingRepository(conn)),
        api_key_service=ApiKeyService(MySQLApiKeyRepository(conn)),
        report_service=ReportService(payroll_repo, attendance_repo, employees_repo),
    )
