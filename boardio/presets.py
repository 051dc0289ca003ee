"""Preset terrain layouts for a 60" x 44" Strike Force table.

Pure data module with no engine logic. Each preset holds terrain areas
(rectangles positioned by their top-left corner, rotated about their
centre) and ruin walls, in the same schema ``Battlefield.from_dict`` reads.
Models are never part of a preset; callers add their own.
"""

from __future__ import annotations

from typing import Any

from rules.types import BATTLEFIELD_HEIGHT, BATTLEFIELD_WIDTH, Battlefield


def _t(tid: str, x: float, y: float, w: float, h: float, rot: float = 0.0):
    return {
        "id": tid,
        "x_inches": x,
        "y_inches": y,
        "width_inches": w,
        "height_inches": h,
        "rotation_deg": rot,
    }


def _w(wid: str, x: float, y: float, shape: str, rot: float = 0.0):
    return {
        "id": wid,
        "x_inches": x,
        "y_inches": y,
        "shape": shape,
        "rotation_deg": rot,
    }


# name -> {"terrains": [...], "walls": [...]}
LAYOUT_PRESETS: dict[str, dict[str, list[dict[str, Any]]]] = {
    "Layout 1": {
        "terrains": [
            _t("a", 28, 0, 4, 6),
            _t("b", 28, 38, 4, 6),
            _t("c", 6, 5, 6, 12),
            _t("d", 48, 27, 6, 12),
            _t("e", 16, 28, 6, 12),
            _t("f", 7, 19, 6, 12, 90),
            _t("g", 38, 4, 6, 12),
            _t("h", 47, 13, 6, 12, 90),
            _t("i", 32.74, 23.59, 5, 10, 135),
            _t("j", 35.06, 19.50, 4, 6, 45),
            _t("k", 22.07, 10.17, 5, 10, -45),
            _t("l", 20.72, 18.23, 4, 6, 45),
        ],
        "walls": [
            _w("wa", 38, 6, "C-4-8-4"),
            _w("wb", 18, 30, "C-4-8-4", 180),
            _w("wc", 13.33, 20.15, "L-4x8-mirror", -90),
            _w("wd", 49.67, 15.93, "L-4x8-mirror", 90),
            _w("we", 48.20, 30.88, "L-4x8"),
            _w("wf", 7.84, 5.01, "L-4x8", 180),
            _w("wg", 27.06, 11.52, "L-4x8-mirror", -45),
            _w("wh", 35.81, 24.24, "L-4x8-mirror", 135),
        ],
    },
    "Layout 2": {
        "terrains": [
            _t("a", 31, 7, 4, 6, -90),
            _t("b", 25, 30, 4, 6, 90),
            _t("c", 5, 4, 6, 12),
            _t("d", 49, 28, 6, 12),
            _t("e", 46, 4, 6, 12),
            _t("f", 16.46, 15.77, 6, 12, 132.1),
            _t("g", 53, 15, 4, 6, 90),
            _t("h", 8, 28, 6, 12),
            _t("i", 3, 23, 4, 6, 90),
            _t("j", 32.62, 32.55, 5, 10, -90),
            _t("k", 22.48, 0.51, 5, 10, -90),
            _t("l", 37.5, 16.2, 6, 12, 132.1),
        ],
        "walls": [
            _w("wa", 49, 32, "L-4x8"),
            _w("wb", 7, 4, "L-4x8", 180),
            _w("wc", 46, 8, "L-4x8"),
            _w("wd", 10, 28, "L-4x8", 180),
            _w("we", 35.07, 34.56, "L-5x6-mirror", -90),
            _w("wf", 29.09, 2.47, "L-5x6-mirror", 90),
            _w("wg", 17.86, 17.53, "C-4-8-4", 135),
            _w("wh", 37.24, 18.38, "C-4-8-4", -45),
        ],
    },
    "Layout 3": {
        "terrains": [
            _t("a", 11, 3, 4, 6, 90),
            _t("b", 45, 35, 4, 6, 90),
            _t("c", 25, 1, 6, 12, 90),
            _t("d", 29, 31, 6, 12, 90),
            _t("e", 7.74, 26.05, 6, 12, 125.31),
            _t("f", 46.34, 5.51, 6, 12, 121.72),
            _t("g", 5.14, 10.46, 6, 12, 41.51),
            _t("h", 48.67, 21.52, 6, 12, 41.51),
            _t("i", 19.59, 14.36, 5, 10, -38.13),
            _t("j", 20.69, 24.37, 4, 6, -39.33),
            _t("k", 35.34, 19.61, 5, 10, -38.13),
            _t("l", 35.31, 13.50, 4, 6, -39.33),
        ],
        "walls": [
            _w("aa", 30, 32, "C-4-8-4", 90),
            _w("ab", 26, 4, "C-4-8-4", -90),
            _w("ac", 8.19, 11.64, "L-4x8", 222.46),
            _w("ad", 47.79, 24.30, "L-4x8", 41.26),
            _w("ae", 38.64, 20.09, "L-5x6-mirror", 141.31),
            _w("af", 25.26, 17.90, "L-5x6-mirror", -37.61),
            _w("ag", 14.37, 28.38, "L-4x8-mirror", -54.26),
            _w("ah", 48.75, 7.30, "L-4x8-mirror", 122.02),
        ],
    },
    "Layout 4": {
        "terrains": [
            _t("a", 15, 1, 6, 12, 90),
            _t("b", 8, 10, 4, 6),
            _t("c", 4, 19, 4, 6),
            _t("d", 7.50, 27.68, 6, 12, -48.57),
            _t("e", 46.53, 4.24, 6, 12, -48.57),
            _t("f", 52, 19, 4, 6),
            _t("g", 48, 28, 4, 6),
            _t("h", 39, 31, 6, 12, 90),
            _t("i", 33.03, 2.97, 6, 12, -37.25),
            _t("j", 20.96, 28.96, 6, 12, -37.25),
            _t("k", 16.93, 16.51, 5, 10, -41.85),
            _t("l", 37.96, 17.43, 5, 10, -41.85),
        ],
        "walls": [
            _w("aa", 18, 4, "L-4x8", -90),
            _w("ab", 9.04, 29.01, "C-4-8-4", 131.97),
            _w("ac", 47, 7, "C-4-8-4", -48.54),
            _w("ad", 38, 32, "L-4x8", 90),
            _w("ae", 34.42, 7.12, "L-4x8", -37.53),
            _w("af", 21.57, 28.80, "L-4x8", 142.46),
            _w("ag", 15.70, 17.01, "L-5x6", 137.87),
            _w("ah", 39.17, 20.85, "L-5x6", -40.92),
        ],
    },
    "Layout 5": {
        "terrains": [
            _t("aa", 27, 1, 6, 12, 90),
            _t("ab", 36.53, 12.48, 5, 10, -90),
            _t("ac", 13, 3, 4, 6, 90),
            _t("ad", 43, 35, 4, 6, 90),
            _t("ae", 27, 31, 6, 12, 90),
            _t("af", 18.43, 21.49, 5, 10, -90),
            _t("ag", 1, 23, 4, 6, 90),
            _t("ah", 55, 15, 4, 6, 90),
            _t("ai", 7.83, 30.22, 6, 12, -60),
            _t("aj", 46.32, 1.58, 6, 12, -60),
            _t("ak", 8.74, 10.19, 6, 12, 65.22),
            _t("al", 45.22, 21.75, 6, 12, 65.22),
        ],
        "walls": [
            _w("a1", 28, 32, "C-4-8-4", 90),
            _w("a2", 28, 4, "C-4-8-4", -90),
            _w("a3", 11.88, 12.29, "L-4x8", -114.74),
            _w("a4", 43.97, 23.59, "L-4x8", 64.22),
            _w("a5", 24.91, 23.52, "L-5x6-mirror", -90.37),
            _w("a6", 39.00, 14.51, "L-5x6-mirror", 89.90),
            _w("a7", 7.58, 30.57, "L-4x8", 120.93),
            _w("a8", 48.51, 5.28, "L-4x8", -59.06),
        ],
    },
    "Layout 6": {
        "terrains": [
            _t("aa", 13, 1, 6, 12, 90),
            _t("ab", 6, 10, 4, 6),
            _t("ac", 25, 11, 4, 6, 90),
            _t("ad", 7.34, 27.57, 6, 12, -40.32),
            _t("ae", 46.69, 4.57, 6, 12, -41.90),
            _t("af", 31, 27, 4, 6, -90),
            _t("ag", 50, 28, 4, 6),
            _t("ah", 41, 31, 6, 12, 90),
            _t("ai", 34, 4, 6, 12),
            _t("aj", 20, 28, 6, 12),
            _t("ak", 15.70, 15.03, 5, 10, -41.85),
            _t("al", 39.43, 19.24, 5, 10, -39.95),
        ],
        "walls": [
            _w("a1", 16, 4, "L-4x8", -90),
            _w("a2", 9.04, 29.01, "C-4-8-4", 140.05),
            _w("a3", 47, 7.16, "C-4-8-4", -41.53),
            _w("a4", 40, 32, "L-4x8", 90),
            _w("a5", 34.15, 7.88, "L-4x8"),
            _w("a6", 22, 28, "L-4x8", 180),
            _w("a7", 14.47, 15.47, "L-5x6", 137.87),
            _w("a8", 40.53, 22.78, "L-5x6", -40.92),
        ],
    },
    # Ten walls. Stacked areas fuse: ab/ac, ad/ae, ah/ai and ak/al.
    "Layout 7": {
        "terrains": [
            _t("aa", 8, 8, 6, 12),
            _t("ab", 6, 28, 6, 12),
            _t("ac", 7, 39, 4, 6, 90),
            _t("ad", 18, 26, 5, 10),
            _t("ae", 19, 20, 4, 6),
            _t("af", 23, 3, 6, 12),
            _t("ag", 31, 29, 6, 12),
            _t("ah", 37, 18, 4, 6),
            _t("ai", 37, 8, 5, 10),
            _t("aj", 46, 24, 6, 12),
            _t("ak", 48, 4, 6, 12),
            _t("al", 49, -1, 4, 6, 90),
        ],
        "walls": [
            _w("a1", 9, 10, "L-5x6", 180),
            _w("a2", 11.44, 31.97, "L-4x8-mirror"),
            _w("a3", 19, 20, "L-4x6", 180),
            _w("a4", 22.53, 30.02, "L-5x6-mirror"),
            _w("a5", 25, 5, "C-4-8-4", 180),
            _w("a6", 31, 31, "C-4-8-4"),
            _w("a7", 37, 18, "L-4x6"),
            _w("a8", 41.51, 8.09, "L-5x6-mirror", 180),
            _w("a9", 46, 28, "L-5x6"),
            _w("a10", 51.51, 4.01, "L-4x8-mirror", 180),
        ],
    },
    # Two pairs of 4x6 areas butt together (aa/ab and ac/ad) and fuse into
    # single pieces of terrain.
    "Layout 8": {
        "terrains": [
            _t("aa", 23, 22, 4, 6),
            _t("ab", 23, 28, 4, 6),
            _t("ac", 33, 16, 4, 6),
            _t("ad", 33, 10, 4, 6),
            _t("ae", 41, 19, 6, 12),
            _t("af", 13, 13, 6, 12),
            _t("ag", 32, 32, 6, 12),
            _t("ah", 22, 0, 6, 12),
            _t("ai", 9.50, 27.68, 6, 12, -48.69),
            _t("aj", 44.51, 4.35, 6, 12, -48.69),
            _t("ak", 6.95, 4, 5, 10, 53.90),
            _t("al", 48, 30, 5, 10, 53.90),
        ],
        "walls": [
            _w("a1", 32, 34, "C-4-8-4"),
            _w("a2", 24, 2, "C-4-8-4", 180),
            _w("a3", 44.68, 19.06, "L-4x8-mirror", 180),
            _w("a4", 18.43, 16.91, "L-4x8-mirror"),
            _w("a5", 46.38, 33.13, "L-5x6", 52.87),
            _w("a6", 8.55, 4.89, "L-5x6", -127.66),
            _w("a7", 16.00, 30.28, "L-4x8-mirror", -48.62),
            _w("a8", 46.91, 5.85, "L-4x8-mirror", 132.19),
        ],
    },
}


def get_preset(name: str) -> Battlefield:
    """Build an empty-of-models battlefield from a named preset.

    Raises KeyError for an unknown name.
    """
    if name not in LAYOUT_PRESETS:
        raise KeyError(
            f"Unknown layout preset {name!r}; "
            f"available: {', '.join(LAYOUT_PRESETS)}"
        )
    preset = LAYOUT_PRESETS[name]
    return Battlefield.from_dict(
        {
            "width_inches": BATTLEFIELD_WIDTH,
            "height_inches": BATTLEFIELD_HEIGHT,
            "terrains": preset["terrains"],
            "walls": preset["walls"],
        }
    )
