"""
Website content document model.

A tenant's website is stored as one JSON document. Documents written by older
versions of the builder may lack fields added since, so every read goes
through ``materialize`` which fills the gaps from ``DEFAULT_CONTENT``
(read-repair) instead of migrating the stored rows.
"""
import copy
import re
from collections.abc import Mapping
from typing import Any

LEAD_FORM_FIELDS = ("name", "email", "phone", "message")

DEFAULT_CONTENT: dict[str, Any] = {
    "businessName": "",
    "aboutUs": "",
    "services": [""],
    "contactInfo": {
        "phone": "",
        "email": "",
        "address": "",
    },
    "leadForm": {
        "enabled": True,
        "fields": {field: True for field in LEAD_FORM_FIELDS},
    },
    "theme": {
        "primaryColor": "#2563eb",
        "secondaryColor": "#1e40af",
        "fontFamily": "Inter",
        "topImage": "",
        "overlayOpacity": 80,
    },
}

HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def default_content() -> dict[str, Any]:
    """Return a fresh, independently mutable copy of the default document."""
    return copy.deepcopy(DEFAULT_CONTENT)


def _merge(defaults: dict[str, Any], stored: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(defaults)
    for key, value in stored.items():
        default = defaults.get(key)
        if isinstance(default, dict) and isinstance(value, Mapping):
            merged[key] = _merge(default, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def materialize(raw: Any) -> dict[str, Any]:
    """
    Merge a stored document over the defaults.

    Stored values always win, including values of an unexpected type; the
    defaults only supply keys that are absent. Keys unknown to the default
    shape are kept. Anything that is not a mapping materializes to the
    defaults.
    """
    if not isinstance(raw, Mapping):
        return default_content()
    return _merge(default_content(), raw)


def validate_content(document: Mapping[str, Any]) -> list[str]:
    """Advisory checks for theme values. Returns human-readable warnings."""
    warnings = []
    theme = document.get("theme")
    if not isinstance(theme, Mapping):
        return warnings

    for key in ("primaryColor", "secondaryColor"):
        color = theme.get(key)
        if color is not None and not (isinstance(color, str) and HEX_COLOR_RE.match(color)):
            warnings.append(f"theme.{key} is not a hex colour: {color!r}")

    opacity = theme.get("overlayOpacity")
    if opacity is not None:
        if isinstance(opacity, bool) or not isinstance(opacity, int):
            warnings.append(f"theme.overlayOpacity is not an integer: {opacity!r}")
        elif not 0 <= opacity <= 100:
            warnings.append(f"theme.overlayOpacity out of range 0-100: {opacity}")

    return warnings
