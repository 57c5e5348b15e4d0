"""Accessibility settings model and the stores the voice assistant reads and writes."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal, Protocol, Union, get_args

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

FontSize = Literal["small", "medium", "large", "extra-large"]
ColorBlindMode = Literal["protanopia", "deuteranopia", "tritanopia", "none"]
Language = Literal["en", "ur"]

SettingValue = Union[bool, str]

_logger = logging.getLogger("access_assistant.settings_store")

_TRUE_WORDS = frozenset({"true", "on", "yes", "1", "enable", "enabled"})
_FALSE_WORDS = frozenset({"false", "off", "no", "0", "disable", "disabled"})


class UnknownSettingError(KeyError):
    """Raised when a setting key is not part of the accessibility catalogue."""


class InvalidSettingValueError(ValueError):
    """Raised when a value does not fit the setting's kind or allowed values."""


class AccessibilitySettings(BaseModel):
    """User accessibility preferences, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    font_size: FontSize = "medium"
    high_contrast: bool = False
    reduced_motion: bool = False
    text_spacing: bool = False
    readable_font: bool = False
    link_highlight: bool = False
    large_text_mode: bool = False
    large_button_mode: bool = False
    reading_mode: bool = False
    audio_assistance: bool = False
    pictorial_menu: bool = False
    color_blind_mode: ColorBlindMode = "none"
    language: Language = "en"


class SettingKind(str, Enum):
    """Value kinds a setting can hold."""

    BOOLEAN = "boolean"
    ENUM = "enum"


@dataclass(frozen=True, slots=True)
class SettingSpec:
    """Describes one setting: its camelCase key, model field, label and allowed values."""

    key: str
    field_name: str
    label: str
    kind: SettingKind
    values: tuple[str, ...] = ()


def setting_label(key: str) -> str:
    """Turn a camelCase key into a spoken label, e.g. ``highContrast`` -> ``High Contrast``."""
    return re.sub(r"([A-Z])", r" \1", key).strip().title()


def _build_specs() -> dict[str, SettingSpec]:
    specs: dict[str, SettingSpec] = {}
    for field_name, info in AccessibilitySettings.model_fields.items():
        key = info.alias or to_camel(field_name)
        if info.annotation is bool:
            kind, values = SettingKind.BOOLEAN, ()
        else:
            kind, values = SettingKind.ENUM, tuple(get_args(info.annotation))
        specs[key] = SettingSpec(key=key, field_name=field_name, label=setting_label(key), kind=kind, values=values)
    return specs


SETTING_SPECS: dict[str, SettingSpec] = _build_specs()


def get_spec(key: str) -> SettingSpec:
    """Return the catalogue entry for ``key`` or raise :class:`UnknownSettingError`."""
    try:
        return SETTING_SPECS[key]
    except KeyError:
        raise UnknownSettingError(f"Unknown accessibility setting: {key}") from None


def coerce_setting_value(key: str, raw: str) -> SettingValue:
    """Convert user-typed text into a valid value for ``key``."""
    spec = get_spec(key)
    text = raw.strip().lower()
    if spec.kind is SettingKind.BOOLEAN:
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
        raise InvalidSettingValueError(f"{spec.label} expects on/off, got {raw!r}")

    if text not in spec.values:
        raise InvalidSettingValueError(f"{spec.label} must be one of: {', '.join(spec.values)}")
    return text


class SettingsStore(Protocol):
    """Read/write contract the voice assistant uses for accessibility settings."""

    def get_setting(self, key: str) -> SettingValue:
        """Return the current value for ``key``."""

    def set_setting(self, key: str, value: SettingValue) -> None:
        """Replace the value for ``key``."""


class InMemorySettingsStore:
    """Settings kept in memory for the lifetime of the process."""

    def __init__(self, initial: AccessibilitySettings | None = None) -> None:
        self._settings = initial.model_copy() if initial is not None else AccessibilitySettings()

    def get_setting(self, key: str) -> SettingValue:
        spec = get_spec(key)
        return getattr(self._settings, spec.field_name)

    def set_setting(self, key: str, value: SettingValue) -> None:
        spec = get_spec(key)
        if spec.kind is SettingKind.BOOLEAN:
            if not isinstance(value, bool):
                raise InvalidSettingValueError(f"{spec.label} expects a boolean, got {value!r}")
        elif value not in spec.values:
            raise InvalidSettingValueError(f"{spec.label} must be one of: {', '.join(spec.values)}")

        setattr(self._settings, spec.field_name, value)
        _logger.info("setting_changed", extra={"setting": key, "value": value})

    def reset_settings(self) -> None:
        self._settings = AccessibilitySettings()
        _logger.info("settings_reset")

    def snapshot(self) -> AccessibilitySettings:
        return self._settings.model_copy()


class JsonSettingsStore(InMemorySettingsStore):
    """JSON-file-backed settings, rewritten on every change."""

    def __init__(self, file_path: str | Path) -> None:
        self._path = Path(file_path).expanduser()
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def set_setting(self, key: str, value: SettingValue) -> None:
        super().set_setting(key, value)
        self._save()

    def reset_settings(self) -> None:
        super().reset_settings()
        self._save()

    def _load(self) -> AccessibilitySettings:
        if not self._path.exists():
            return AccessibilitySettings()

        try:
            return AccessibilitySettings.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError):
            _logger.warning("settings_file_unreadable", extra={"path": str(self._path)}, exc_info=True)
            return AccessibilitySettings()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = self._settings.model_dump_json(by_alias=True, indent=2)
        self._path.write_text(payload + "\n", encoding="utf-8")
