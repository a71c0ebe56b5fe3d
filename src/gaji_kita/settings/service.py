from __future__ import annotations

import logging
import secrets
from decimal import Decimal
from typing import Any, Callable, Dict, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_amount, require_non_empty
from ..core import constants as c
from ..core.context import SessionContext
from ..core.enums import BpjsType, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..payroll.calculator.standard_calculator import money
from .model import ApiKey, BpjsPreview, BpjsSetting, ContributionSplit, TaxPreview, TaxSetting
from .repository import ApiKeyRepository, BpjsSettingRepository, TaxSettingRepository

logger = logging.getLogger(__name__)

_HUNDRED = Decimal("100")

# Percentages used when bpjs_settings has no row for a programme.
DEFAULT_BPJS_PERCENTAGES: Dict[BpjsType, tuple[Decimal, Decimal]] = {
    BpjsType.KESEHATAN: (c.BPJS_KES_EMPLOYEE_RATE * _HUNDRED, c.BPJS_KES_COMPANY_RATE * _HUNDRED),
    BpjsType.JHT: (c.BPJS_JHT_EMPLOYEE_RATE * _HUNDRED, c.BPJS_JHT_COMPANY_RATE * _HUNDRED),
    BpjsType.JKK: (Decimal("0"), c.BPJS_JKK_RATE * _HUNDRED),
    BpjsType.JKM: (Decimal("0"), c.BPJS_JKM_RATE * _HUNDRED),
    BpjsType.JP: (c.BPJS_JP_EMPLOYEE_RATE * _HUNDRED, c.BPJS_JP_COMPANY_RATE * _HUNDRED),
}


def _positive(value: Any, field_name: str) -> Decimal:
    amount = parse_amount(value, field_name, required=True)
    if amount is None or amount <= 0:
        raise ValidationError(f"{field_name} harus lebih dari 0")
    return amount


class SettingsService:
    """Tax/BPJS reference tables and the what-if calculators on the settings page."""

    def __init__(self, tax_settings: TaxSettingRepository, bpjs_settings: BpjsSettingRepository):
        self._tax = tax_settings
        self._bpjs = bpjs_settings

    def list_tax_settings(self, ctx: SessionContext) -> Sequence[TaxSetting]:
        ctx.require(Role.ADMIN)
        return self._tax.list_all()

    def list_bpjs_settings(self, ctx: SessionContext) -> Sequence[BpjsSetting]:
        ctx.require(Role.ADMIN)
        return self._bpjs.list_all()

    def preview_tax(self, ctx: SessionContext, *, monthly_gross: Any, tax_status: str) -> TaxPreview:
        """PTKP-based estimate; payroll processing itself uses the flat rule."""
        ctx.require(Role.ADMIN)
        gross = _positive(monthly_gross, "Penghasilan bruto")
        setting = self._tax.get_by_name(require_non_empty(tax_status or "", "Status pajak"))
        if not setting:
            raise NotFoundError("Status pajak tidak ditemukan")

        annual = gross * c.MONTHS_PER_YEAR
        taxable = max(annual - setting.ptkp_amount, Decimal("0"))
        annual_tax = taxable * setting.tax_rate / _HUNDRED
        return TaxPreview(
            tax_status=setting.name,
            monthly_gross=gross,
            annual_gross=annual,
            ptkp_amount=setting.ptkp_amount,
            taxable_income=taxable,
            annual_tax=money(annual_tax),
            monthly_tax=money(annual_tax / c.MONTHS_PER_YEAR),
        )

    def preview_bpjs(self, ctx: SessionContext, *, salary: Any) -> BpjsPreview:
        ctx.require(Role.ADMIN)
        amount = _positive(salary, "Gaji")
        configured = {s.type: (s.employee_percentage, s.company_percentage) for s in self._bpjs.list_all()}

        contributions: Dict[str, ContributionSplit] = {}
        for bpjs_type, defaults in DEFAULT_BPJS_PERCENTAGES.items():
            employee_pct, company_pct = configured.get(bpjs_type, defaults)
            contributions[bpjs_type.value] = ContributionSplit(
                employee=money(amount * employee_pct / _HUNDRED),
                company=money(amount * company_pct / _HUNDRED),
            )
        return BpjsPreview(salary=amount, contributions=contributions)


class ApiKeyService:
    """Keys used by attendance machines to call the sync endpoint."""

    def __init__(self, keys: ApiKeyRepository, *, clock: Callable = now_local):
        self._keys = keys
        self._clock = clock

    def list_keys(self, ctx: SessionContext) -> Sequence[ApiKey]:
        ctx.require(Role.ADMIN)
        return self._keys.list_all()

    def create_key(self, ctx: SessionContext, *, name: str) -> ApiKey:
        ctx.require(Role.ADMIN)
        name = require_non_empty(name or "", "Nama API key")
        token = secrets.token_urlsafe(32)
        api_key_id = self._keys.create(name=name, key=token)
        logger.info("API key %s (%s) created by %s", api_key_id, name, ctx.full_name)
        return ApiKey(api_key_id=api_key_id, name=name, key=token, is_active=True)

    def deactivate_key(self, ctx: SessionContext, api_key_id: int) -> None:
        ctx.require(Role.ADMIN)
        if not self._keys.get_by_id(api_key_id):
            raise NotFoundError("API key tidak ditemukan")
        self._keys.deactivate(api_key_id)

    def authenticate(self, token: Optional[str]) -> SessionContext:
        """Resolve a bearer token into an integration context and record its use."""
        if not token:
            raise AuthenticationError("API key tidak ditemukan")
        api_key = self._keys.get_active_by_key(token)
        if not api_key:
            raise AuthenticationError("API key tidak valid atau tidak aktif")
        self._keys.touch(api_key.api_key_id, self._clock())
        return SessionContext(
            user_id=None,
            full_name=api_key.name,
            role=Role.INTEGRATION,
            api_key_id=api_key.api_key_id,
        )
