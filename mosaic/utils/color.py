"""Color helpers — hex <-> RGB and pigment-style mixing on top of mixbox.

Mixbox blends in a Kubelka–Munk latent space, so blue + yellow gives green
instead of the gray a linear RGB lerp produces.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache

import mixbox

from mosaic.utils.math_helpers import clamp

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """"#rrggbb" → (r, g, b)."""
    m = _HEX_RE.match(color.strip())
    if not m:
        raise ValueError(f"Not a #rrggbb color: {color!r}")
    value = m.group(1)
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(rgb: Sequence[float]) -> str:
    r, g, b = (max(0, min(255, int(round(c)))) for c in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


@lru_cache(maxsize=65536)
def _latent(color: str) -> tuple[float, ...]:
    return tuple(mixbox.rgb_to_latent(hex_to_rgb(color)))


def mix(color_a: str, color_b: str, ratio: float) -> str:
    """Pigment mix of two colors; ratio 0 → color_a, 1 → color_b."""
    if color_a.lower() == color_b.lower():
        return color_a
    t = clamp(ratio)
    za = _latent(color_a)
    zb = _latent(color_b)
    z_mix = [(1.0 - t) * a + t * b for a, b in zip(za, zb)]
    return rgb_to_hex(mixbox.latent_to_rgb(z_mix))
