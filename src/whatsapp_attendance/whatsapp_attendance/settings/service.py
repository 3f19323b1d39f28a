from __future__ import annotations

import logging
from typing import Sequence, Union

from ..common.validators import require_non_empty
from ..core.constants import AUTO_REPLY_KEY, ENFORCE_TRANSITIONS_KEY
from ..core.enums import SettingType
from ..core.exceptions import ValidationError
from .model import Setting
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

SettingValue = Union[str, int, float, bool]

# Read by the message pipeline; stored values must parse as booleans.
BOOLEAN_KEYS = frozenset({ENFORCE_TRANSITIONS_KEY, AUTO_REPLY_KEY})

_TRUE = {"true", "1", "yes", "sim"}
_FALSE = {"false", "0", "no", "nao", "não"}


def _to_bool(raw: str) -> bool:
    value = raw.strip().casefold()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValidationError(f"Valor booleano inválido: {raw!r}")


def _to_number(raw: str) -> Union[int, float]:
    try:
        number = float(raw)
    except ValueError:
        raise ValidationError(f"Valor numérico inválido: {raw!r}") from None
    return int(number) if number.is_integer() else number


def convert(setting: Setting) -> SettingValue:
    if setting.type is SettingType.BOOLEAN:
        return _to_bool(setting.value)
    if setting.type is SettingType.NUMBER:
        return _to_number(setting.value)
    return setting.value


class SettingsService:
    """Use case: typed runtime settings stored as key/value rows."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def list_all(self) -> Sequence[Setting]:
        return self._settings.list_all()

    def get_value(self, key: str, default: SettingValue | None = None) -> SettingValue | None:
        setting = self._settings.get(key)
        if setting is None:
            return default
        return convert(setting)

    def get_bool(self, key: str, *, default: bool) -> bool:
        setting = self._settings.get(key)
        if setting is None:
            return default
        try:
            return _to_bool(setting.value)
        except ValidationError:
            logger.warning("Setting %s has non-boolean value %r, using default %s", key, setting.value, default)
            return default

    def set_value(self, key: str, value: SettingValue, type: SettingType | str = SettingType.STRING) -> Setting:
        key = require_non_empty(key, "Chave")
        try:
            setting_type = SettingType(type)
        except ValueError:
            raise ValidationError(f"Tipo inválido: {type!r}") from None
        if key in BOOLEAN_KEYS and setting_type is not SettingType.BOOLEAN:
            raise ValidationError(f"{key} deve ser do tipo boolean")

        if isinstance(value, bool):
            raw = "true" if value else "false"
        else:
            raw = str(value).strip()

        if setting_type is SettingType.BOOLEAN:
            raw = "true" if _to_bool(raw) else "false"
        elif setting_type is SettingType.NUMBER:
            raw = str(_to_number(raw))

        return self._settings.upsert(key=key, value=raw, type=setting_type)
