from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ...core import constants as c
from ..model import PayrollComponents
from .base import PayrollCalculator


def money(value: Decimal) -> Decimal:
    return value.quantize(c.MONEY_PLACES, rounding=ROUND_HALF_UP)


def pph21_from_annual(annual_income: Decimal) -> Decimal:
    """Monthly PPh21: annual income x 5% / 12 above the 60 juta threshold, else zero."""
    if annual_income <= c.PPH21_ANNUAL_THRESHOLD:
        return Decimal("0.00")
    return money(annual_income * c.PPH21_FLAT_RATE / c.MONTHS_PER_YEAR)


class StandardPayrollCalculator(PayrollCalculator):
    """Fixed BPJS percentages of base salary plus flat-rate PPh21.

    Each component is rounded to whole sen before deductions and net pay are
    summed, so net == basic + allowances - deductions holds exactly.
    """

    def compute(
        self,
        *,
        basic_salary: Decimal,
        incentive: Optional[Decimal] = None,
        transportation_fee: Optional[Decimal] = None,
    ) -> PayrollComponents:
        basic = money(basic_salary)
        allowances = money((incentive or Decimal("0")) + (transportation_fee or Decimal("0")))

        kes_employee = money(basic * c.BPJS_KES_EMPLOYEE_RATE)
        jht_employee = money(basic * c.BPJS_JHT_EMPLOYEE_RATE)
        jp_employee = money(basic * c.BPJS_JP_EMPLOYEE_RATE)
        pph21 = pph21_from_annual((basic + allowances) * c.MONTHS_PER_YEAR)

        deductions = kes_employee + jht_employee + jp_employee + pph21
        return PayrollComponents(
            basic_salary=basic,
            allowances=allowances,
            bpjs_kes_employee=kes_employee,
            bpjs_kes_company=money(basic * c.BPJS_KES_COMPANY_RATE),
            bpjs_tk_jht_employee=jht_employee,
            bpjs_tk_jht_company=money(basic * c.BPJS_JHT_COMPANY_RATE),
            bpjs_tk_jp_employee=jp_employee,
            bpjs_tk_jp_company=money(basic * c.BPJS_JP_COMPANY_RATE),
            bpjs_tk_jkk=money(basic * c.BPJS_JKK_RATE),
            bpjs_tk_jkm=money(basic * c.BPJS_JKM_RATE),
            pph21=pph21,
            net_salary=basic + allowances - deductions,
        )
