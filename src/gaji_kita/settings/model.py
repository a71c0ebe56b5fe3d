from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from ..core.enums import BpjsType


@dataclass(frozen=True)
class TaxSetting:
    """PTKP (non-taxable income) per tax status, e.g. TK/0 or K/1."""

    tax_setting_id: int
    name: str
    ptkp_amount: Decimal
    tax_rate: Decimal


@dataclass(frozen=True)
class BpjsSetting:
    bpjs_setting_id: int
    name: str
    type: BpjsType
    employee_percentage: Decimal
    company_percentage: Decimal


@dataclass(frozen=True)
class ApiKey:
    api_key_id: int
    name: str
    key: str
    is_active: bool = True
    last_used_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def masked_key(self) -> str:
        return f"{self.key[:6]}...{self.key[-4:]}" if len(self.key) > 10 else "***"


@dataclass(frozen=True)
class TaxPreview:
    tax_status: str
    monthly_gross: Decimal
    annual_gross: Decimal
    ptkp_amount: Decimal
    taxable_income: Decimal
    annual_tax: Decimal
    monthly_tax: Decimal


@dataclass(frozen=True)
class ContributionSplit:
    employee: Decimal
    company: Decimal


@dataclass(frozen=True)
class BpjsPreview:
    salary: Decimal
    contributions: Dict[str, ContributionSplit]

    @property
    def employee_total(self) -> Decimal:
        return sum((c.employee for c in self.contributions.values()), Decimal("0"))

    @property
    def company_total(self) -> Decimal:
        return sum((c.company for c in self.contributions.values()), Decimal("0"))
