"""Turn parsed G-code points into drawable line segments and track the bounds."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .arcs import generate_points_along_arc
from .geometry import Vec3, nan_max, nan_min
from .parser import GcodeParser
from .segments import LineSegment, PointSegment

_UNKNOWN_POINT = Vec3(math.nan, math.nan, math.nan)


class GcodeViewParse:
    """Builds line segments for display from a parser's point list.

    Attributes:

    * ``lines``: every line segment produced so far.
    * ``line_indexes``: for each parser line number, the indexes into
      ``lines`` of the segments it produced.
    * ``min_extremes`` and ``max_extremes``: bounding box of segment ends.
    * ``min_length``: length of the shortest non-zero straight move, or NaN.
    """

    #: Smallest arc piece length used when no arc precision is given.
    MIN_ARC_LENGTH = 0.1

    def __init__(self) -> None:
        self.lines: list[LineSegment] = []
        self.line_indexes: list[list[int]] = []
        self.min_extremes = _UNKNOWN_POINT
        self.max_extremes = _UNKNOWN_POINT
        self.min_length = math.nan

    def reset(self) -> None:
        """Forget all segments, indexes and bounds."""
        self.lines.clear()
        self.line_indexes.clear()
        self.min_extremes = _UNKNOWN_POINT
        self.max_extremes = _UNKNOWN_POINT
        self.min_length = math.nan

    def resolution(self) -> tuple[int, int]:
        """Grid size covering the XY bounds with cells of the shortest move length."""
        width = (self.max_extremes.x - self.min_extremes.x) / self.min_length + 1
        height = (self.max_extremes.y - self.min_extremes.y) / self.min_length + 1
        if not (math.isfinite(width) and math.isfinite(height)):
            raise ValueError("resolution is undefined without known bounds and move length")
        return int(width), int(height)

    def to_obj_redux(
        self, gcode: Iterable[str], arc_precision: float, arc_degree_mode: bool
    ) -> list[LineSegment]:
        """Parse the command lines with a fresh parser and build their segments."""
        parser = GcodeParser()
        for command in gcode:
            parser.add_command(command)
        return self.get_lines_from_parser(parser, arc_precision, arc_degree_mode)

    def get_lines_from_parser(
        self, parser: GcodeParser, arc_precision: float, arc_degree_mode: bool
    ) -> list[LineSegment]:
        """Append segments for every point of ``parser`` and return all segments.

        The parser's points are converted to millimetres in place; each
        segment remembers whether its command was given in metric units.
        """
        points = parser.points
        self._resize_indexes(len(points))

        line_index = 0
        start: Vec3 | None = None
        for segment in points:
            is_metric = segment.is_metric
            segment.convert_to_metric()
            end = segment.point

            if start is not None:
                if segment.is_arc:
                    arc_points = self._arc_points(
                        segment, start, end, arc_precision, arc_degree_mode
                    )
                    if arc_points:
                        start_point = start
                        for next_point in arc_points:
                            if next_point == start_point:
                                continue
                            self._add_line(
                                LineSegment.from_point_segment(
                                    start_point, next_point, line_index, segment, is_metric
                                ),
                                segment.line_number,
                            )
                            self._test_extremes(next_point)
                            start_point = next_point
                        line_index += 1
                else:
                    self._add_line(
                        LineSegment.from_point_segment(
                            start, end, line_index, segment, is_metric
                        ),
                        segment.line_number,
                    )
                    line_index += 1
                    self._test_extremes(end)
                    self._test_length(start, end)
            start = end

        return list(self.lines)

    def _resize_indexes(self, size: int) -> None:
        if len(self.line_indexes) > size:
            del self.line_indexes[size:]
        else:
            self.line_indexes.extend([] for _ in range(size - len(self.line_indexes)))

    def _arc_points(
        self,
        segment: PointSegment,
        start: Vec3,
        end: Vec3,
        arc_precision: float,
        arc_degree_mode: bool,
    ) -> list[Vec3]:
        try:
            return generate_points_along_arc(
                segment.plane,
                start,
                end,
                segment.center,
                segment.is_clockwise,
                segment.radius,
                self.MIN_ARC_LENGTH,
                arc_precision,
                arc_degree_mode,
            )
        except ValueError:
            return []

    def _add_line(self, line: LineSegment, line_number: int) -> None:
        self.lines.append(line)
        self.line_indexes[line_number].append(len(self.lines) - 1)

    def _test_extremes(self, point: Vec3) -> None:
        low, high = self.min_extremes, self.max_extremes
        self.min_extremes = Vec3(
            nan_min(low.x, point.x), nan_min(low.y, point.y), nan_min(low.z, point.z)
        )
        self.max_extremes = Vec3(
            nan_max(high.x, point.x), nan_max(high.y, point.y), nan_max(high.z, point.z)
        )

    def _test_length(self, start: Vec3, end: Vec3) -> None:
        length = (start - end).length()
        if math.isnan(length) or length == 0:
            return
        self.min_length = length if math.isnan(self.min_length) else min(self.min_length, length)