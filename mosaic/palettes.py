"""Color palettes. Pure data: each palette is an ordered tuple of "#rrggbb" colors."""

from __future__ import annotations

BLACK = "#000000"

PALETTES: dict[str, tuple[str, ...]] = {
    "ember": ("#ff7850", "#ff5064", "#b43c78", "#642864", "#ffd27f"),
    "ocean": ("#14508c", "#2878b4", "#50a0dc", "#8cc8f0", "#e8f4fa"),
    "forest": ("#145028", "#28783c", "#508c5a", "#78a064", "#d9c89e"),
    "dusk": ("#0a0a1e", "#1e143c", "#3c2864", "#64508c", "#e07a5f"),
    "orchid": ("#f0dcff", "#dcc8ff", "#c8b4f0", "#8e6fc1", "#3d2c5e"),
    "citrus": ("#f6d55c", "#ed553b", "#3caea3", "#20639b", "#173f5f"),
    "terracotta": ("#e07a5f", "#3d405b", "#81b29a", "#f2cc8f", "#f4f1de"),
    "bauhaus": ("#d62828", "#f77f00", "#fcbf49", "#eae2b7", "#003049"),
    "lagoon": ("#264653", "#2a9d8f", "#e9c46a", "#f4a261", "#e76f51"),
    "blossom": ("#ffcdb2", "#ffb4a2", "#e5989b", "#b5838d", "#6d6875"),
    "glacier": ("#caf0f8", "#90e0ef", "#00b4d8", "#0077b6", "#03045e"),
    "moss": ("#606c38", "#283618", "#fefae0", "#dda15e", "#bc6c25"),
}

ALL_PALETTES: tuple[tuple[str, ...], ...] = tuple(PALETTES.values())

# Every palette twice: as-is and with black mixed in as an extra pigment.
ALL_PALETTES_WITH_BLACK: tuple[tuple[str, ...], ...] = ALL_PALETTES + tuple(
    palette + (BLACK,) for palette in ALL_PALETTES
)


def get_palette(name: str) -> tuple[str, ...]:
    """Look up a palette by name; a "+black" suffix appends black."""
    base, _, suffix = name.partition("+")
    if base not in PALETTES or suffix not in ("", "black"):
        raise ValueError(f"Unknown palette: {name!r} (available: {', '.join(sorted(PALETTES))})")
    palette = PALETTES[base]
    return palette + (BLACK,) if suffix else palette
