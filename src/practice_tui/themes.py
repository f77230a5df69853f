from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from textual.theme import Theme

logger = logging.getLogger("practice")

LIGHT_THEME = "practice-light"
DARK_THEME = "practice-dark"

DEFAULT_THEMES: Dict[str, Theme] = {
    LIGHT_THEME: Theme(
        name=LIGHT_THEME,
        primary="#4f46e5",
        secondary="#0ea5e9",
        accent="#7c3aed",
        foreground="#1f2937",
        background="#f9fafb",
        surface="#ffffff",
        panel="#e5e7eb",
        success="#16a34a",
        warning="#d97706",
        error="#dc2626",
        dark=False,
    ),
    DARK_THEME: Theme(
        name=DARK_THEME,
        primary="#818cf8",
        secondary="#38bdf8",
        accent="#a78bfa",
        foreground="#e5e7eb",
        background="#111827",
        surface="#1f2937",
        panel="#374151",
        success="#4ade80",
        warning="#fbbf24",
        error="#f87171",
        dark=True,
    ),
}


def load_themes(config: Optional[Dict[str, Any]] = None) -> Dict[str, Theme]:
    """Return the built-in themes merged with any defined under ``themes`` in the config."""
    themes = DEFAULT_THEMES.copy()
    for name, definition in (config or {}).get("themes", {}).items():
        try:
            themes[name] = Theme(name=name, **definition)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring invalid theme definition for '%s': %s", name, e)
    return themes


def toggled_theme(themes: Dict[str, Theme], current: str) -> str:
    """Pick the built-in theme of the opposite brightness."""
    theme = themes.get(current)
    if theme is not None and not theme.dark:
        return DARK_THEME
    return LIGHT_THEME
