from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SettingType
from .model import Setting


class SettingsRepository(Protocol):
    def get(self, key: str) -> Optional[Setting]:
        raise NotImplementedError

    def upsert(self, *, key: str, value: str, type: SettingType) -> Setting:
        raise NotImplementedError

    def list_all(self) -> Sequence[Setting]:
        raise NotImplementedError
