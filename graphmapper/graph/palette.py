"""
graphmapper/graph/palette.py

Per-builder type → color cache.

Each GraphBuilder owns its own ColorPalette, so independent builds never
share color assignments.  Lookup order for an unknown type id:

  1. A color already registered or cached for that id.
  2. The first well-known type keyword contained in the id
     (e.g. "db_table" → the "table" color).
  3. A pastel color derived deterministically from a hash of the id.
"""
from __future__ import annotations

import colorsys
import hashlib

import structlog

logger = structlog.get_logger(__name__)

# Colors that well-known types start out with.
_SEED_COLORS: dict[str, str] = {
    "schema":    "#4682B4",
    "table":     "#2ECC71",
    "column":    "#E74C3C",
    "view":      "#F39C12",
    "procedure": "#3498DB",
    "user":      "#9B59B6",
    "group":     "#ECF0F1",
}

# Keyword table consulted when an id merely contains a known type name.
_KEYWORD_COLORS: dict[str, str] = {
    "schema":      "#4682B4",
    "table":       "#2ECC71",
    "column":      "#E74C3C",
    "view":        "#F39C12",
    "procedure":   "#3498DB",
    "user":        "#9B59B6",
    "database":    "#16A085",
    "server":      "#2980B9",
    "application": "#8E44AD",
    "service":     "#F1C40F",
    "endpoint":    "#E67E22",
    "api":         "#D35400",
    "client":      "#27AE60",
}


def pastel_color(key: str) -> str:
    """Return a stable pastel hex color for *key*.

    Hue comes from the first bytes of the SHA-256 digest; saturation and
    lightness stay in the pastel band (70 % / 80 %).
    """
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    hue = int.from_bytes(digest[:2], "big") / 0xFFFF
    r, g, b = colorsys.hls_to_rgb(hue, 0.80, 0.70)
    return "#{:02X}{:02X}{:02X}".format(round(r * 255), round(g * 255), round(b * 255))


class ColorPalette:
    """Append-only ``type id → color`` cache."""

    def __init__(self, seed: dict[str, str] | None = None) -> None:
        self._colors: dict[str, str] = dict(_SEED_COLORS if seed is None else seed)

    def register(self, type_id: str, color: str | None) -> str:
        """Record the color a class definition asks for.

        A blank *color* falls back to :meth:`color_for`.
        """
        if not color:
            return self.color_for(type_id)
        self._colors[type_id] = color
        return color

    def color_for(self, type_id: str) -> str:
        cached = self._colors.get(type_id)
        if cached is not None:
            return cached

        lowered = type_id.lower()
        for keyword, color in _KEYWORD_COLORS.items():
            if keyword in lowered:
                self._colors[type_id] = color
                return color

        color = pastel_color(type_id)
        self._colors[type_id] = color
        logger.debug("palette_color_generated", type_id=type_id, color=color)
        return color

    def as_dict(self) -> dict[str, str]:
        return dict(self._colors)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._colors
