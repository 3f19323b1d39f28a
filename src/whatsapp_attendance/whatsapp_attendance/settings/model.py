from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SettingType


@dataclass(frozen=True)
class Setting:
    key: str
    value: str
    type: SettingType = SettingType.STRING
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "value": self.value,
            "type": self.type.value,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
