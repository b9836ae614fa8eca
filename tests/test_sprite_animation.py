import pytest

from ogbkit.sprite_animation import SpriteSheetAnimation


@pytest.fixture
def anim():
    return SpriteSheetAnimation(sheet_width=400, sheet_height=300)


def test_default_configuration_frame_count(anim):
    assert anim.number_of_frames == 15
    assert anim.duration == pytest.approx(anim.number_of_frames * anim.time_per_frame)


def test_first_and_last_frames(anim):
    assert anim.frame_index_at(0.0) == anim.start_index
    assert anim.frame_index_at(anim.duration - 1e-6) == anim.end_index


def test_advances_one_frame_per_frame_time(anim):
    assert anim.frame_index_at(anim.time_per_frame * 1.5) == anim.start_index + 1


def test_loops_over_duration(anim):
    for k in range(15):
        t = k * anim.time_per_frame + 0.01
        assert anim.frame_index_at(t) == anim.frame_index_at(t + anim.duration)


def test_indices_are_non_decreasing_within_one_loop(anim):
    steps = [anim.frame_index_at(i * anim.duration / 100) for i in range(100)]
    assert steps == sorted(steps)
    assert min(steps) == anim.start_index
    assert max(steps) == anim.end_index


def test_start_frame_position_counts_rows_from_top(anim):
    assert anim.frame_position_at(0.0) == (80, 200)


def test_uv_box_matches_frame_size(anim):
    for i in range(30):
        x1, y1, x2, y2 = anim.uv_at(i * anim.duration / 30)
        assert 0.0 <= x1 < x2 <= 1.0
        assert 0.0 <= y1 < y2 <= 1.0
        assert x2 - x1 == pytest.approx(anim.frame_width / anim.sheet_width)
        assert y2 - y1 == pytest.approx(anim.frame_height / anim.sheet_height)


def test_end_before_start_is_rejected():
    with pytest.raises(ValueError):
        SpriteSheetAnimation(400, 300, start_frame=(6, 2), end_frame=(2, 1))


def test_out_of_bounds_frames_are_rejected():
    with pytest.raises(ValueError):
        SpriteSheetAnimation(400, 300, start_frame=(0, 0), end_frame=(10, 2))
    with pytest.raises(ValueError):
        SpriteSheetAnimation(400, 300, start_frame=(0, 0), end_frame=(3, 6))


def test_negative_elapsed_is_rejected(anim):
    with pytest.raises(ValueError):
        anim.frame_index_at(-1.0)