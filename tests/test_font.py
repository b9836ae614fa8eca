import pytest
from PIL import ImageFont

from ogbkit.font import (
    FONT_ATLAS_HEIGHT,
    FONT_ATLAS_WIDTH,
    MAX_FONT_HEIGHT,
    Font,
    FontVariation,
    load_font_from_disk,
)
from ogbkit.text_layout import measure_text, split_text_to_lines_with_wrapping, walk_glyphs

HEIGHT = 64


@pytest.fixture(scope="module")
def font_bytes():
    return ImageFont.load_default(size=20).font_bytes


@pytest.fixture(scope="module")
def font(font_bytes):
    return Font(font_bytes)


def test_load_font_from_disk_reads_file(tmp_path, font_bytes):
    path = tmp_path / "face.ttf"
    path.write_bytes(font_bytes)
    loaded = load_font_from_disk(path)
    assert loaded.data == font_bytes


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_font_from_disk(tmp_path / "missing.ttf")


def test_invalid_font_data_raises():
    with pytest.raises(ValueError):
        Font(b"this is not a font")


@pytest.mark.parametrize("height", [0, MAX_FONT_HEIGHT + 1])
def test_invalid_height_raises(font, height):
    with pytest.raises(ValueError):
        font.render_atlas_if_not_yet_rendered(height, ord("A"))


def test_codepoint_range_per_atlas(font):
    assert font.variation(HEIGHT).codepoint_range_per_atlas == 1024


def test_atlas_is_cached_and_sized(font):
    first = font.render_atlas_if_not_yet_rendered(HEIGHT, ord("A"))
    second = font.variation(HEIGHT).atlas_for(ord("z"))
    assert first is second
    assert first.image.size == (FONT_ATLAS_WIDTH, FONT_ATLAS_HEIGHT)
    assert first.first_codepoint == 0
    assert len(first.glyphs) == font.variation(HEIGHT).codepoint_range_per_atlas


def test_glyph_matches_codepoint_and_uv(font):
    glyph = font.glyph(ord("A"), HEIGHT)
    assert glyph.codepoint == ord("A")
    assert glyph.width > 0 and glyph.height > 0
    x1, y1, x2, y2 = glyph.uv
    assert 0.0 <= x1 < x2 <= 1.0
    assert 0.0 <= y1 < y2 <= 1.0
    assert x2 - x1 == pytest.approx(glyph.width / FONT_ATLAS_WIDTH)
    assert y2 - y1 == pytest.approx(glyph.height / FONT_ATLAS_HEIGHT)


def test_glyph_bitmap_is_drawn_into_atlas(font):
    glyph = font.glyph(ord("A"), HEIGHT)
    atlas = font.render_atlas_if_not_yet_rendered(HEIGHT, ord("A"))
    box = (
        round(glyph.uv[0] * FONT_ATLAS_WIDTH),
        round(glyph.uv[1] * FONT_ATLAS_HEIGHT),
        round(glyph.uv[2] * FONT_ATLAS_WIDTH),
        round(glyph.uv[3] * FONT_ATLAS_HEIGHT),
    )
    assert atlas.image.crop(box).getextrema()[1] > 0


def test_control_glyph_is_empty(font):
    glyph = font.glyph(10, HEIGHT)
    assert (glyph.width, glyph.height, glyph.advance) == (0.0, 0.0, 0.0)


def test_glyph_in_higher_atlas(font):
    variation = FontVariation(font, 256)
    cp = variation.codepoint_range_per_atlas + ord("A") % variation.codepoint_range_per_atlas
    atlas = variation.atlas_for(cp)
    assert atlas.first_codepoint == variation.codepoint_range_per_atlas
    assert atlas.glyphs[cp - atlas.first_codepoint].codepoint == cp


def test_metrics_invariants(font):
    m = font.metrics(HEIGHT)
    assert m.latin_ascent > 0
    assert m.latin_descent <= 0
    assert m.max_ascent >= m.latin_ascent
    assert m.new_line_offset == pytest.approx(m.latin_ascent - m.latin_descent + m.line_spacing)
    assert font.metrics(HEIGHT).scaled((1, 2)).new_line_offset == pytest.approx(m.new_line_offset * 2)


def test_kerning_of_control_codes_is_zero(font):
    assert font.kerning(10, ord("A"), HEIGHT) == 0.0


def test_font_as_glyph_source_walks_text(font):
    placed = list(walk_glyphs(font, "Hi", HEIGHT, (1, 1), True))
    assert [g.codepoint for g, _, _ in placed] == [ord("H"), ord("i")]
    assert placed[1][1] > placed[0][1]


def test_font_measure_text(font):
    m = measure_text(font, "Hello", HEIGHT, (1, 1))
    assert m.functional_size[0] > 0
    assert m.functional_size[0] == pytest.approx(m.functional_pos_max[0] - m.functional_pos_min[0])
    longer = measure_text(font, "Hello Hello", HEIGHT, (1, 1))
    assert longer.functional_size[0] > m.functional_size[0]


def test_font_split_lines(font):
    text = "Hello there"
    assert split_text_to_lines_with_wrapping(text, 100000, font, HEIGHT, (1, 1), True) == [text]
    narrow = split_text_to_lines_with_wrapping(text, 1, font, HEIGHT, (1, 1), False)
    assert "".join(narrow) == text
    assert len(narrow) > 1