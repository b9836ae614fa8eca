"""Frame selection for looping sprite sheet animations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SpriteSheetAnimation:
    """An animation over a run of frames in a grid-shaped sprite sheet.

    Frames are addressed by (column, row) with row 0 at the top of the sheet.
    The animation plays from ``start_frame`` to ``end_frame`` inclusive, in
    reading order, and loops. Positions and UVs are measured from the bottom
    left of the sheet.
    """

    sheet_width: int
    sheet_height: int
    columns: int = 10
    rows: int = 6
    start_frame: Tuple[int, int] = (2, 1)
    end_frame: Tuple[int, int] = (6, 2)
    playback_fps: float = 4.0

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise ValueError("the sheet needs at least one column and one row")
        if self.playback_fps <= 0:
            raise ValueError("playback_fps must be positive")
        if self.end_index <= self.start_index:
            raise ValueError("the last frame must come after the first frame")
        for name, (x, y) in (("start_frame", self.start_frame), ("end_frame", self.end_frame)):
            if not 0 <= x < self.columns:
                raise ValueError(f"{name} column is out of bounds")
            if not 0 <= y < self.rows:
                raise ValueError(f"{name} row is out of bounds")

    @property
    def frame_width(self) -> int:
        return self.sheet_width // self.columns

    @property
    def frame_height(self) -> int:
        return self.sheet_height // self.rows

    @property
    def start_index(self) -> int:
        return self.start_frame[1] * self.columns + self.start_frame[0]

    @property
    def end_index(self) -> int:
        return self.end_frame[1] * self.columns + self.end_frame[0]

    @property
    def number_of_frames(self) -> int:
        return abs(self.end_index - self.start_index) + 1

    @property
    def time_per_frame(self) -> float:
        return 1.0 / self.playback_fps

    @property
    def duration(self) -> float:
        return self.time_per_frame * self.number_of_frames

    def frame_index_at(self, elapsed: float) -> int:
        """Absolute index in the sheet of the frame shown ``elapsed`` seconds in."""
        if elapsed < 0:
            raise ValueError("elapsed time cannot be negative")
        progression = math.fmod(elapsed, self.duration) / self.duration
        current = min(int(self.number_of_frames * progression), self.number_of_frames - 1)
        return self.start_index + current

    def frame_position_at(self, elapsed: float) -> Tuple[int, int]:
        """Pixel position of the current frame's bottom-left corner in the sheet."""
        index = self.frame_index_at(elapsed)
        column = index % self.columns
        row_from_top = index // self.columns + 1
        return column * self.frame_width, (self.rows - row_from_top) * self.frame_height

    def uv_at(self, elapsed: float) -> Tuple[float, float, float, float]:
        """The (x1, y1, x2, y2) texture box of the current frame, each in [0, 1]."""
        x, y = self.frame_position_at(elapsed)
        return (
            x / self.sheet_width,
            y / self.sheet_height,
            (x + self.frame_width) / self.sheet_width,
            (y + self.frame_height) / self.sheet_height,
        )