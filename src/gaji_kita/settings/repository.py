from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import ApiKey, BpjsSetting, TaxSetting


class TaxSettingRepository(Protocol):
    def list_all(self) -> Sequence[TaxSetting]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[TaxSetting]:
        raise NotImplementedError


class BpjsSettingRepository(Protocol):
    def list_all(self) -> Sequence[BpjsSetting]:
        raise NotImplementedError


class ApiKeyRepository(Protocol):
    def list_all(self) -> Sequence[ApiKey]:
        raise NotImplementedError

    def create(self, *, name: str, key: str) -> int:
        raise NotImplementedError

    def get_by_id(self, api_key_id: int) -> Optional[ApiKey]:
        raise NotImplementedError

    def get_active_by_key(self, key: str) -> Optional[ApiKey]:
        raise NotImplementedError

    def touch(self, api_key_id: int, used_at: datetime) -> None:
        raise NotImplementedError

    def deactivate(self, api_key_id: int) -> bool:
        raise NotImplementedError
