"""Glyph walking, text measurement and line wrapping.

Everything here works against a ``GlyphSource``: anything that can hand out
per-codepoint glyphs, font metrics and kerning for a raster height.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Protocol, Sequence, Tuple

Vector2 = Tuple[float, float]
Vector4 = Tuple[float, float, float, float]


@dataclass(frozen=True)
class FontMetrics:
    """Vertical metrics of a font at one raster height, in pixels."""

    latin_ascent: float = 0.0
    latin_descent: float = 0.0
    max_ascent: float = 0.0
    max_descent: float = 0.0
    line_spacing: float = 0.0
    new_line_offset: float = 0.0

    def scaled(self, scale: Sequence[float]) -> "FontMetrics":
        """Return the metrics multiplied by the vertical component of ``scale``."""
        sy = float(scale[1])
        return FontMetrics(
            latin_ascent=self.latin_ascent * sy,
            latin_descent=self.latin_descent * sy,
            max_ascent=self.max_ascent * sy,
            max_descent=self.max_descent * sy,
            line_spacing=self.line_spacing * sy,
            new_line_offset=self.new_line_offset * sy,
        )


@dataclass(frozen=True)
class Glyph:
    """Placement data for one codepoint; ``uv`` is (x1, y1, x2, y2) in the atlas."""

    codepoint: int
    xoffset: float = 0.0
    yoffset: float = 0.0
    advance: float = 0.0
    width: float = 0.0
    height: float = 0.0
    uv: Vector4 = (0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class TextMetrics:
    """Bounds of a piece of text.

    The functional box runs from the left of the first glyph to the right of
    the last, and from the bottom baseline to the top baseline plus the latin
    ascent. The visual box covers exactly the glyph bitmaps.
    """

    functional_pos_min: Vector2 = (0.0, 0.0)
    functional_pos_max: Vector2 = (0.0, 0.0)
    functional_size: Vector2 = (0.0, 0.0)
    visual_pos_min: Vector2 = (0.0, 0.0)
    visual_pos_max: Vector2 = (0.0, 0.0)
    visual_size: Vector2 = (0.0, 0.0)


class GlyphSource(Protocol):
    def metrics(self, raster_height: int) -> FontMetrics: ...

    def glyph(self, codepoint: int, raster_height: int) -> Glyph: ...

    def kerning(self, left: int, right: int, raster_height: int) -> float: ...


def walk_glyphs(
    source: GlyphSource,
    text: str,
    raster_height: int,
    scale: Sequence[float] = (1.0, 1.0),
    ignore_control_codes: bool = False,
) -> Iterator[Tuple[Glyph, float, float]]:
    """Yield ``(glyph, x, y)`` for each glyph of ``text`` laid out from the origin.

    A NUL character ends the text. Newlines move to the start of the next
    line below.
    """
    if not text:
        return
    sx, sy = float(scale[0]), float(scale[1])
    metrics = source.metrics(raster_height)

    x = 0.0
    y = 0.0
    last_c = 0
    for char in text:
        c = ord(char)
        if c == 0:
            break
        if c == 10:
            x = 0.0
            y -= metrics.new_line_offset * sy
            last_c = 0
        if c < 32 and ignore_control_codes:
            continue

        glyph = source.glyph(c, raster_height)
        yield glyph, x + glyph.xoffset * sx, y + glyph.yoffset * sy

        x += glyph.advance * sx
        if last_c != 0:
            x += source.kerning(last_c, c, raster_height) * sx
        last_c = c


def measure_text(
    source: GlyphSource,
    text: str,
    raster_height: int,
    scale: Sequence[float] = (1.0, 1.0),
) -> TextMetrics:
    """Measure the functional and visual bounds of ``text``; both include the origin."""
    sx, sy = float(scale[0]), float(scale[1])
    metrics = source.metrics(raster_height).scaled(scale)

    fmin_x = fmin_y = fmax_x = fmax_y = 0.0
    vmin_x = vmin_y = vmax_x = vmax_y = 0.0

    for glyph, glyph_x, glyph_y in walk_glyphs(source, text, raster_height, scale, True):
        left = glyph_x - glyph.xoffset * sx
        bottom = glyph_y - glyph.yoffset * sy
        right = left + (glyph.width + glyph.xoffset) * sx
        top = bottom + (metrics.latin_ascent + glyph.yoffset) * sy
        fmin_x = min(fmin_x, left)
        fmin_y = min(fmin_y, bottom)
        fmax_x = max(fmax_x, right)
        fmax_y = max(fmax_y, top)

        vmin_x = min(vmin_x, glyph_x)
        vmin_y = min(vmin_y, glyph_y)
        vmax_x = max(vmax_x, glyph_x + glyph.width * sx)
        vmax_y = max(vmax_y, glyph_y + glyph.height * sy)

    return TextMetrics(
        functional_pos_min=(fmin_x, fmin_y),
        functional_pos_max=(fmax_x, fmax_y),
        functional_size=(fmax_x - fmin_x, fmax_y - fmin_y),
        visual_pos_min=(vmin_x, vmin_y),
        visual_pos_max=(vmax_x, vmax_y),
        visual_size=(vmax_x - vmin_x, vmax_y - vmin_y),
    )


def split_text_to_lines_with_wrapping(
    text: str,
    width: float,
    source: GlyphSource,
    raster_height: int,
    scale: Sequence[float] = (1.0, 1.0),
    do_trim_lines: bool = True,
) -> List[str]:
    """Split ``text`` into lines no wider than ``width``.

    Lines break at newlines, and where a glyph would overflow, at the last
    space of the line or, failing that, before the overflowing glyph.
    """
    sx = float(scale[0])
    starts: List[int] = []
    counts: List[int] = []

    start_index = 0
    index = 0
    last_space_index = 0
    line_start_x = 0.0
    last_space_x = 0.0
    count = 0

    for glyph, x, _ in walk_glyphs(source, text, raster_height, scale, False):
        cp = glyph.codepoint
        is_newline = cp == 10
        if cp < 32 and not is_newline:
            index += 1
            count += 1
            continue

        glyph_right = x + glyph.width * sx
        if last_space_index == index:
            last_space_x = x

        if (cp != 32 and glyph_right - line_start_x > width) or is_newline:
            break_at_space = last_space_index > start_index and not is_newline
            break_index = last_space_index if break_at_space else index

            starts.append(start_index)
            counts.append(break_index - start_index)
            count = index - break_index

            if break_index == index and (is_newline or cp == 32):
                break_index += 1
            start_index = break_index
            line_start_x = last_space_x if break_at_space else x
        elif cp == 32:
            last_space_index = index + 1

        index += 1
        count += 1

    pieces = [text[start:start + n] for start, n in zip(starts, counts)]
    if count > 0:
        pieces.append(text[start_index:start_index + count])
    if do_trim_lines:
        pieces = [piece.strip() for piece in pieces]
    return pieces