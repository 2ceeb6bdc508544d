"""Theme profile schema and resolver."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from reportlab.lib import colors


@dataclass(frozen=True)
class ThemeProfile:
    """Serializable theme profile values."""

    background: str = "#FFFFFF"
    brand: str = "#2563EB"
    brand_light: str = "#EFF6FF"
    brand_muted: str = "#DBEAFE"
    text_primary: str = "#111827"
    text_body: str = "#374151"
    text_secondary: str = "#6B7280"
    text_faint: str = "#9CA3AF"
    surface: str = "#F9FAFB"
    surface_alt: str = "#F3F4F6"
    border: str = "#E5E7EB"
    success: str = "#16A34A"
    success_light: str = "#F0FDF4"
    success_dark: str = "#166534"
    font_regular: str = "DejaVuSans.ttf"
    font_bold: str = "DejaVuSans-Bold.ttf"

    def to_theme_class(self) -> type:
        """Return a runtime Theme-like class with parsed color objects."""
        return type(
            "Theme",
            (),
            {
                "BACKGROUND": _parse_opaque_color(self.background, key="background"),
                "BRAND": _parse_color(self.brand, key="brand"),
                "BRAND_LIGHT": _parse_color(self.brand_light, key="brand_light"),
                "BRAND_MUTED": _parse_color(self.brand_muted, key="brand_muted"),
                "TEXT_PRIMARY": _parse_color(self.text_primary, key="text_primary"),
                "TEXT_BODY": _parse_color(self.text_body, key="text_body"),
                "TEXT_SECONDARY": _parse_color(self.text_secondary, key="text_secondary"),
                "TEXT_FAINT": _parse_color(self.text_faint, key="text_faint"),
                "SURFACE": _parse_color(self.surface, key="surface"),
                "SURFACE_ALT": _parse_color(self.surface_alt, key="surface_alt"),
                "BORDER": _parse_color(self.border, key="border"),
                "SUCCESS": _parse_color(self.success, key="success"),
                "SUCCESS_LIGHT": _parse_color(self.success_light, key="success_light"),
                "SUCCESS_DARK": _parse_color(self.success_dark, key="success_dark"),
                "FONT_REGULAR": _parse_font(self.font_regular, key="font_regular"),
                "FONT_BOLD": _parse_font(self.font_bold, key="font_bold"),
            },
        )


_BUILTIN_THEME_PROFILES: dict[str, ThemeProfile] = {
    "default": ThemeProfile(),
    "slate": ThemeProfile(
        brand="#334155",
        brand_light="#F1F5F9",
        brand_muted="#CBD5E1",
        text_primary="#0F172A",
        text_body="#334155",
    ),
}


def available_theme_profiles() -> tuple[str, ...]:
    """Return built-in theme profile names."""
    return tuple(sorted(_BUILTIN_THEME_PROFILES))


def resolve_theme(
    *,
    profile: str = "default",
    theme_file: str | Path | None = None,
) -> type:
    """Resolve one built-in theme plus optional file overrides."""
    if profile not in _BUILTIN_THEME_PROFILES:
        valid = ", ".join(available_theme_profiles())
        msg = f"unknown theme profile '{profile}'. Valid profiles: {valid}."
        raise ValueError(msg)

    resolved_profile = _BUILTIN_THEME_PROFILES[profile]
    if theme_file is not None:
        resolved_profile = replace(resolved_profile, **_load_theme_file(Path(theme_file)))
    return resolved_profile.to_theme_class()


def _load_theme_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        msg = f"theme file '{path}' does not exist."
        raise ValueError(msg)

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"theme file '{path}' is not valid JSON: {exc}."
        raise ValueError(msg) from exc

    if not isinstance(payload, dict):
        msg = "theme file content must be a JSON object."
        raise ValueError(msg)

    allowed = set(ThemeProfile.__dataclass_fields__)
    unknown = sorted(key for key in payload if key not in allowed)
    if unknown:
        msg = f"unknown theme key(s): {', '.join(unknown)}."
        raise ValueError(msg)

    return payload


def _parse_color(raw_value: str, *, key: str) -> colors.Color:
    if not isinstance(raw_value, str) or not raw_value.strip():
        msg = f"theme key '{key}' must be a non-empty color string."
        raise ValueError(msg)
    try:
        if raw_value.startswith("#"):
            return colors.HexColor(raw_value, hasAlpha=len(raw_value) == 9)
        return colors.toColor(raw_value)
    except Exception as exc:  # noqa: BLE001
        msg = f"invalid color value '{raw_value}' for theme key '{key}'."
        raise ValueError(msg) from exc


def _parse_opaque_color(raw_value: str, *, key: str) -> colors.Color:
    color = _parse_color(raw_value, key=key)
    if getattr(color, "alpha", 1) != 1:
        msg = f"theme key '{key}' must be an opaque color."
        raise ValueError(msg)
    return color


def _parse_font(raw_value: str, *, key: str) -> str:
    if not isinstance(raw_value, str) or not raw_value.strip():
        msg = f"theme key '{key}' must be a non-empty font name string."
        raise ValueError(msg)
    return raw_value
