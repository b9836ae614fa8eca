"""TrueType fonts rasterised into glyph atlases per raster height."""

from __future__ import annotations

import io
import math
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from ogbkit.text_layout import FontMetrics, Glyph

FONT_ATLAS_WIDTH = 2048
FONT_ATLAS_HEIGHT = 2048
MAX_FONT_HEIGHT = 512


@dataclass
class FontAtlas:
    """A single-channel image holding the glyphs of a run of codepoints."""

    image: Image.Image
    first_codepoint: int
    glyphs: List[Glyph]


def _is_control(codepoint: int) -> bool:
    return codepoint < 32 or 127 <= codepoint < 160


def _open_face(data: bytes, size: float) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(io.BytesIO(data), size, layout_engine=ImageFont.Layout.BASIC)


class FontVariation:
    """A font rasterised at one pixel height."""

    def __init__(self, font: "Font", height: int) -> None:
        if not 0 < height <= MAX_FONT_HEIGHT:
            raise ValueError(f"font height must be between 1 and {MAX_FONT_HEIGHT}, got {height}")
        self.font = font
        self.height = height
        self.codepoint_range_per_atlas = (FONT_ATLAS_WIDTH // height) * (FONT_ATLAS_HEIGHT // height)
        self.atlases: Dict[int, FontAtlas] = {}

        # Size the face so that ascent plus descent spans the pixel height.
        probe = _open_face(font.data, height)
        ascent, descent = probe.getmetrics()
        total = ascent + descent
        em_size = height * height / total if total > 0 else float(height)
        self.face = _open_face(font.data, em_size)

        ascent, descent = self.face.getmetrics()
        max_ascent = float(ascent)
        max_descent = -float(descent)
        line_spacing = 0.0

        latin_descent = 9999999.0
        for char in string.ascii_lowercase:
            latin_descent = min(latin_descent, -float(self._box(char)[3]))
        latin_ascent = 0.0
        for char in string.ascii_uppercase:
            latin_ascent = max(latin_ascent, float(abs(self._box(char)[1])))

        self.metrics = FontMetrics(
            latin_ascent=latin_ascent,
            latin_descent=latin_descent,
            max_ascent=max_ascent,
            max_descent=max_descent,
            line_spacing=line_spacing,
            new_line_offset=latin_ascent - latin_descent + line_spacing,
        )

    def _box(self, text: str) -> Tuple[int, int, int, int]:
        x0, y0, x1, y1 = self.face.getbbox(text, anchor="ls")
        return math.floor(x0), math.floor(y0), math.ceil(x1), math.ceil(y1)

    def _rasterize(self, codepoint: int) -> Tuple[Optional[Image.Image], int, int, int, int, float]:
        """Return the bitmap, its size, its offset from the pen and the advance."""
        # Control characters have no visible glyph and zero advance.
        if _is_control(codepoint):
            return None, 0, 0, 0, 0, 0.0
        try:
            char = chr(codepoint)
            x0, y0, x1, y1 = self._box(char)
            advance = float(self.face.getlength(char))
        except (ValueError, UnicodeError, OSError):
            return None, 0, 0, 0, 0, 0.0
        w = max(x1 - x0, 0)
        h = max(y1 - y0, 0)
        if w == 0 or h == 0:
            return None, w, h, x0, y0, advance
        bitmap = Image.new("L", (w, h), 0)
        ImageDraw.Draw(bitmap).text((-x0, -y0), char, font=self.face, fill=255, anchor="ls")
        return bitmap, w, h, x0, y0, advance

    def _build_atlas(self, first_codepoint: int) -> FontAtlas:
        image = Image.new("L", (FONT_ATLAS_WIDTH, FONT_ATLAS_HEIGHT), 0)
        glyphs: List[Glyph] = []
        cursor_x = 0
        cursor_y = 0
        for codepoint in range(first_codepoint, first_codepoint + self.codepoint_range_per_atlas):
            bitmap, w, h, x, y, advance = self._rasterize(codepoint)
            if cursor_x + w > FONT_ATLAS_WIDTH:
                cursor_x = 0
                cursor_y += self.height
            if bitmap is not None:
                # Rows are stored bottom-up.
                image.paste(bitmap.transpose(Image.Transpose.FLIP_TOP_BOTTOM), (cursor_x, cursor_y))
            yoffset = self.height - y - h - self.metrics.max_ascent + self.metrics.max_descent
            glyphs.append(
                Glyph(
                    codepoint=codepoint,
                    xoffset=float(x),
                    yoffset=float(yoffset),
                    advance=advance,
                    width=float(w),
                    height=float(h),
                    uv=(
                        cursor_x / FONT_ATLAS_WIDTH,
                        cursor_y / FONT_ATLAS_HEIGHT,
                        (cursor_x + w) / FONT_ATLAS_WIDTH,
                        (cursor_y + h) / FONT_ATLAS_HEIGHT,
                    ),
                )
            )
            cursor_x += w
        return FontAtlas(image=image, first_codepoint=first_codepoint, glyphs=glyphs)

    def atlas_for(self, codepoint: int) -> FontAtlas:
        """Return the atlas holding ``codepoint``, rasterising it on first use."""
        index = codepoint // self.codepoint_range_per_atlas
        atlas = self.atlases.get(index)
        if atlas is None:
            atlas = self._build_atlas(index * self.codepoint_range_per_atlas)
            self.atlases[index] = atlas
        return atlas


class Font:
    """A TrueType font that rasterises glyph atlases lazily."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        try:
            _open_face(self.data, 12)
        except (OSError, ValueError) as exc:
            raise ValueError("font data could not be parsed") from exc
        self._variations: Dict[int, FontVariation] = {}

    def variation(self, raster_height: int) -> FontVariation:
        variation = self._variations.get(raster_height)
        if variation is None:
            variation = FontVariation(self, raster_height)
            self._variations[raster_height] = variation
        return variation

    def render_atlas_if_not_yet_rendered(self, raster_height: int, codepoint: int) -> FontAtlas:
        return self.variation(raster_height).atlas_for(codepoint)

    def metrics(self, raster_height: int) -> FontMetrics:
        return self.variation(raster_height).metrics

    def glyph(self, codepoint: int, raster_height: int) -> Glyph:
        atlas = self.render_atlas_if_not_yet_rendered(raster_height, codepoint)
        return atlas.glyphs[codepoint - atlas.first_codepoint]

    def kerning(self, left: int, right: int, raster_height: int) -> float:
        """Kerning adjustment in pixels between two codepoints."""
        if _is_control(left) or _is_control(right):
            return 0.0
        face = self.variation(raster_height).face
        try:
            a, b = chr(left), chr(right)
            return float(face.getlength(a + b) - face.getlength(a) - face.getlength(b))
        except (ValueError, UnicodeError, OSError):
            return 0.0


def load_font_from_disk(path: Union[str, Path]) -> Font:
    """Read a font file; raises ``OSError`` if unreadable, ``ValueError`` if invalid."""
    return Font(Path(path).read_bytes())