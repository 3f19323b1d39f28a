from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import SettingType
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_row, require_value
from .model import Setting
from .repository import SettingsRepository

_COLUMNS = "setting_key, setting_value, setting_type, updated_at"


def _row_to_setting(r: Dict[str, Any]) -> Setting:
    return Setting(
        key=str(require_value(r, "setting_key")),
        value=str(require_value(r, "setting_value")),
        type=SettingType(r["setting_type"]),
        updated_at=r.get("updated_at"),
    )


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[Setting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM settings WHERE setting_key=%s", (key,))
            row = fetchone(cur)
            return map_row(row, _row_to_setting, entity="setting") if row else None

    def upsert(self, *, key: str, value: str, type: SettingType) -> Setting:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(setting_key, setting_value, setting_type)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value), setting_type=VALUES(setting_type)
                """,
                (key, value, type.value),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM settings WHERE setting_key=%s", (key,))
            row = fetchone(cur)
            if not row:
                raise StorageError(f"Setting {key!r} missing after upsert")
            return map_row(row, _row_to_setting, entity="setting")

    def list_all(self) -> Sequence[Setting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM settings ORDER BY setting_key")
            return [map_row(r, _row_to_setting, entity="setting") for r in fetchall(cur)]
