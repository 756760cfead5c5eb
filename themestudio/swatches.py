"""Palette preview sheets for a color inventory."""

import os
from typing import List, Sequence

# Headless rendering; must be set before pygame initializes a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame as pg

from .color_codec import ColorValue, calculate_contrast_ratio, color_distance
from .models import Study
from .utils import get_logger

logger = get_logger("themestudio.swatches")

SWATCH = 28
PAD = 8
LABEL_W = 260
SHEET_BG = ColorValue(24, 24, 27)
TEXT_FG = ColorValue(228, 228, 231)
SIMILARITY_THRESHOLD = 40


def palette_warnings(study: Study) -> List[str]:
    """Pairs of enabled colors in one Study that are hard to tell apart."""
    warnings = []
    records = [c for c in study.colors if c.enabled]
    for i in range(len(records)):
        for j in range(i + 1, len(records)):
            a, b = records[i], records[j]
            if color_distance(a.value, b.value) < SIMILARITY_THRESHOLD:
                warnings.append(f"{study.display_name}: {a.label} vs {b.label} are nearly identical")
    return warnings


def _sheet_size(studies: Sequence[Study]):
    widest = max([len(s.colors) for s in studies] + [1])
    w = LABEL_W + widest * (SWATCH + PAD) + PAD
    h = PAD + max(1, len(studies)) * (SWATCH + PAD)
    return w, h


def render_swatch_sheet(studies: Sequence[Study], out_path: str) -> str:
    """Draw one row per Study with a swatch per color and save it as PNG."""
    pg.init()
    try:
        surface = pg.Surface(_sheet_size(studies), pg.SRCALPHA)
        surface.fill(tuple(SHEET_BG))
        font = pg.font.Font(None, 18)
        y = PAD
        for study in studies:
            label = font.render(study.display_name, True, tuple(TEXT_FG[:3]))
            surface.blit(label, (PAD, y + (SWATCH - label.get_height()) // 2))
            x = LABEL_W
            for record in study.colors:
                rect = pg.Rect(x, y, SWATCH, SWATCH)
                pg.draw.rect(surface, tuple(record.value), rect)
                # Outline dark swatches so they stay visible on the sheet
                if calculate_contrast_ratio(record.value, SHEET_BG) < 1.5:
                    pg.draw.rect(surface, tuple(TEXT_FG), rect, 1)
                if not record.enabled:
                    pg.draw.line(surface, tuple(TEXT_FG), rect.topleft, rect.bottomright, 2)
                x += SWATCH + PAD
            for warning in palette_warnings(study):
                logger.warning(warning)
            y += SWATCH + PAD
        os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
        pg.image.save(surface, out_path)
    finally:
        pg.quit()
    logger.info(f"Swatch sheet written to {out_path}")
    return out_path
