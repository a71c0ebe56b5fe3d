from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from gaji_kita.core.enums import PaymentStatus
from gaji_kita.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PayrollPeriodExistsError,
    ValidationError,
)
from gaji_kita.payroll.service import STATUS_DONE, PayrollComputer, PayrollHistoryService

APRIL = dict(period_start=date(2025, 4, 1), period_end=date(2025, 4, 30))


@pytest.fixture
def computer(payroll_repo, employees_repo, transaction):
    return PayrollComputer(payroll_repo, employees_repo, transaction=transaction)


def test_process_period_writes_paid_rows_for_active_employees(computer, admin_ctx, payroll_repo, transaction):
    entries = computer.process_period(admin_ctx, payment_date=date(2025, 4, 30), notes="April", **APRIL)

    assert [e.employee_name for e in entries] == ["Ahmad Surya", "Budi Santoso", "Citra Dewi"]
    assert len(payroll_repo.records) == 3
    assert payroll_repo.insert_calls == 1
    assert transaction.outcomes == ["commit"]
    assert all(r.payment_status == PaymentStatus.PAID for r in payroll_repo.records)
    assert all(r.payment_date == date(2025, 4, 30) for r in payroll_repo.records)

    ahmad, budi, citra = (e.components for e in entries)
    assert ahmad.net_salary == Decimal("4835000.00")
    assert budi.net_salary == Decimal("3840000.00")
    # no own salary: position base salary is used
    assert citra.basic_salary == Decimal("4500000.00")


def test_payment_date_defaults_to_today(computer, admin_ctx):
    entries = computer.process_period(admin_ctx, **APRIL)

    assert entries[0].payment_date == date.today()


def test_already_processed_period_is_rejected(computer, admin_ctx, payroll_repo):
    computer.process_period(admin_ctx, **APRIL)

    with pytest.raises(PayrollPeriodExistsError, match="April 2025 sudah diproses"):
        computer.process_period(admin_ctx, **APRIL)

    assert len(payroll_repo.records) == 3
    assert payroll_repo.insert_calls == 1


def test_employee_without_salary_rejects_whole_batch(computer, admin_ctx, employees_repo, payroll_repo):
    employees_repo._rows[3] = replace(employees_repo._rows[3], position_base_salary=None)

    with pytest.raises(ValidationError, match="Gaji pokok untuk Citra Dewi belum diatur"):
        computer.process_period(admin_ctx, **APRIL)

    assert payroll_repo.records == []


def test_inactive_employees_are_skipped(computer, admin_ctx, employees_repo):
    employees_repo.set_active(2, is_active=False)

    entries = computer.process_period(admin_ctx, **APRIL)

    assert [e.employee_id for e in entries] == [1, 3]


def test_period_end_before_start(computer, admin_ctx):
    with pytest.raises(ValidationError):
        computer.process_period(admin_ctx, period_start=date(2025, 4, 30), period_end=date(2025, 4, 1))


def test_only_admin_can_process(computer, machine_ctx):
    with pytest.raises(AuthorizationError):
        computer.process_period(machine_ctx, **APRIL)


def test_history_summarises_periods(computer, admin_ctx, payroll_repo):
    computer.process_period(admin_ctx, **APRIL)
    history = PayrollHistoryService(payroll_repo)

    (summary,) = history.list_periods(admin_ctx)

    assert summary.label == "April 2025"
    assert summary.employee_count == 3
    assert summary.total_pph21 == Decimal("265000.00")
    assert summary.total_net == Decimal("4835000.00") + Decimal("3840000.00") + Decimal("4320000.00")
    assert summary.status == STATUS_DONE

    details = history.period_details(admin_ctx, **APRIL)
    assert len(details) == 3
    with pytest.raises(NotFoundError):
        history.period_details(admin_ctx, period_start=date(2025, 5, 1), period_end=date(2025, 5, 31))
