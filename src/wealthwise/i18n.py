"""Message catalogue for WealthWise.

Every user-facing string (insights, assistant templates, report headings,
CLI messages) lives in a YAML locale file under ``wealthwise/locales``. Code
refers to messages by dotted key and fills them in with keyword arguments.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

import yaml

DEFAULT_LANGUAGE = "en"
FALLBACK_LANGUAGE = "en"

_CATALOGUES: Dict[str, Dict[str, Any]] = {}


def _locales_dir() -> Path:
    return Path(__file__).resolve().parent / "locales"


def _catalogue(language: str) -> Dict[str, Any]:
    """Load (and cache) the catalogue for ``language``.

    Unknown languages give an empty catalogue, so lookups fall through to
    the fallback language.
    """
    lang = (language or DEFAULT_LANGUAGE).lower()
    cached = _CATALOGUES.get(lang)
    if cached is not None:
        return cached

    path = _locales_dir() / f"{lang}.yaml"
    data: Dict[str, Any] = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if isinstance(loaded, dict):
            data = loaded

    _CATALOGUES[lang] = data
    return data


def _lookup(catalogue: Dict[str, Any], key: str) -> Any:
    """Resolve a dotted key such as ``assistant.balance.title``."""
    node: Any = catalogue
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def get_translator(language: str | None = None) -> Callable[..., str]:
    """Return ``t(key, **kwargs) -> str`` bound to ``language``.

    Missing keys fall back to the fallback language and finally to the key
    itself, so a gap in a catalogue shows up in the output instead of
    raising.
    """
    lang = (language or DEFAULT_LANGUAGE).lower()
    primary = _catalogue(lang)
    fallback = primary if lang == FALLBACK_LANGUAGE else _catalogue(FALLBACK_LANGUAGE)

    def t(key: str, **kwargs: Any) -> str:
        value = _lookup(primary, key)
        if value is None:
            value = _lookup(fallback, key)
        if value is None:
            return key

        text = value if isinstance(value, str) else str(value)
        if not kwargs:
            return text
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            # Placeholder mismatch: show the raw template.
            return text

    return t
