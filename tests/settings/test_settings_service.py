from datetime import datetime
from decimal import Decimal

import pytest

from gaji_kita.core.enums import BpjsType, Role
from gaji_kita.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from gaji_kita.settings.model import ApiKey, BpjsSetting, TaxSetting
from gaji_kita.settings.service import ApiKeyService, SettingsService


class FakeTaxRepo:
    def __init__(self):
        self.rows = [TaxSetting(1, "TK/0", Decimal("54000000"), Decimal("5"))]

    def list_all(self):
        return self.rows

    def get_by_name(self, name):
        return next((s for s in self.rows if s.name == name), None)


class FakeBpjsRepo:
    def __init__(self, rows=()):
        self.rows = list(rows)

    def list_all(self):
        return self.rows


class FakeApiKeyRepo:
    def __init__(self):
        self.rows = {}
        self.touched = []

    def list_all(self):
        return list(self.rows.values())

    def create(self, *, name, key):
        api_key_id = len(self.rows) + 1
        self.rows[api_key_id] = ApiKey(api_key_id=api_key_id, name=name, key=key)
        return api_key_id

    def get_by_id(self, api_key_id):
        return self.rows.get(api_key_id)

    def get_active_by_key(self, key):
        return next((k for k in self.rows.values() if k.key == key and k.is_active), None)

    def touch(self, api_key_id, used_at):
        self.touched.append((api_key_id, used_at))

    def deactivate(self, api_key_id):
        k = self.rows[api_key_id]
        self.rows[api_key_id] = ApiKey(k.api_key_id, k.name, k.key, is_active=False)
        return True


def test_tax_preview_uses_ptkp(admin_ctx):
    service = SettingsService(FakeTaxRepo(), FakeBpjsRepo())

    preview = service.preview_tax(admin_ctx, monthly_gross="10000000", tax_status="TK/0")

    assert preview.annual_gross == Decimal("120000000")
    assert preview.taxable_income == Decimal("66000000")
    assert preview.annual_tax == Decimal("3300000.00")
    assert preview.monthly_tax == Decimal("275000.00")


def test_tax_preview_below_ptkp_is_zero(admin_ctx):
    preview = SettingsService(FakeTaxRepo(), FakeBpjsRepo()).preview_tax(
        admin_ctx, monthly_gross=4000000, tax_status="TK/0"
    )

    assert preview.taxable_income == Decimal("0")
    assert preview.monthly_tax == Decimal("0.00")


def test_tax_preview_validation(admin_ctx):
    service = SettingsService(FakeTaxRepo(), FakeBpjsRepo())

    with pytest.raises(ValidationError, match="harus lebih dari 0"):
        service.preview_tax(admin_ctx, monthly_gross="0", tax_status="TK/0")
    with pytest.raises(NotFoundError):
        service.preview_tax(admin_ctx, monthly_gross="5000000", tax_status="K/9")


def test_bpjs_preview_defaults_and_overrides(admin_ctx):
    configured = BpjsSetting(1, "BPJS Kesehatan", BpjsType.KESEHATAN, Decimal("1"), Decimal("5"))
    service = SettingsService(FakeTaxRepo(), FakeBpjsRepo([configured]))

    preview = service.preview_bpjs(admin_ctx, salary="5000000")

    assert preview.contributions["kesehatan"].company == Decimal("250000.00")
    assert preview.contributions["jht"].employee == Decimal("100000.00")
    assert preview.contributions["jkk"].employee == Decimal("0.00")
    assert preview.employee_total == Decimal("200000.00")
    assert preview.company_total == Decimal("250000.00") + Decimal("185000.00") + Decimal("12000.00") + Decimal(
        "15000.00"
    ) + Decimal("100000.00")


def test_api_key_lifecycle(admin_ctx):
    repo = FakeApiKeyRepo()
    used_at = datetime(2025, 4, 10, 8, 0)
    service = ApiKeyService(repo, clock=lambda: used_at)

    created = service.create_key(admin_ctx, name="Mesin Lobi")
    assert len(created.key) >= 40
    assert created.masked_key.startswith(created.key[:6])

    ctx = service.authenticate(created.key)
    assert ctx.role == Role.INTEGRATION
    assert ctx.api_key_id == created.api_key_id
    assert ctx.full_name == "Mesin Lobi"
    assert repo.touched == [(created.api_key_id, used_at)]

    service.deactivate_key(admin_ctx, created.api_key_id)
    with pytest.raises(AuthenticationError):
        service.authenticate(created.key)
    with pytest.raises(AuthenticationError):
        service.authenticate(None)
    with pytest.raises(NotFoundError):
        service.deactivate_key(admin_ctx, 99)
