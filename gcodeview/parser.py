"""Stateful G-code parser turning command lines into tool path points."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from .arcs import (
    generate_g1_from_points,
    generate_points_along_arc,
    update_center_with_command,
    update_point_with_command,
)
from .codes import (
    GCode,
    override_speed,
    parse_arg,
    parse_coord,
    parse_gcode_enum,
    remove_all_whitespace,
    remove_comment,
    split_command,
    truncate_decimals,
)
from .geometry import Plane, Vec3, rotate_to_plane
from .segments import INCH_TO_MM, PointSegment

logger = logging.getLogger(__name__)

_UNKNOWN_POINT = Vec3(math.nan, math.nan, math.nan)

_MOTION_CODES = frozenset({GCode.G00, GCode.G01, GCode.G02, GCode.G03, GCode.G38_2})


class GcodeParser:
    """Follows machine state across commands and records every end point.

    The point list always starts with the "home" point, whose line number
    is -1. Settings are plain attributes:

    * ``speed_override``: percentage applied to F words when above zero.
    * ``truncate_decimal_length``: fraction digits kept when above zero.
    * ``remove_all_whitespace``: strip whitespace while preprocessing.
    * ``convert_arcs``: expand arcs into G1 lines while preprocessing.
    * ``small_arc_threshold`` and ``small_arc_segment_length``: arc expansion.
    * ``traverse_speed``: speed given to rapid moves.
    * ``fill_unknown_on_relative``: on G91 with an unknown position, set the
      unknown coordinates to zero instead of leaving them unknown.
    """

    def __init__(self) -> None:
        self.is_metric = True
        self.in_absolute_mode = True
        self.in_absolute_ijk_mode = False
        self.current_point = _UNKNOWN_POINT
        self.current_plane = Plane.XY
        self.last_gcode_command = GCode.UNKNOWN
        self._command_number = 0

        self.speed_override = -1.0
        self.truncate_decimal_length = 40
        self.remove_all_whitespace = True
        self.convert_arcs = False
        self.small_arc_threshold = 1.0
        self.small_arc_segment_length = 0.3
        self.traverse_speed = 300.0
        self.fill_unknown_on_relative = True

        self.last_speed = 0.0
        self.last_spindle_speed = 0.0

        self.points: list[PointSegment] = []
        self.reset()

    @property
    def command_number(self) -> int:
        """Number given to the most recent point."""
        return self._command_number - 1

    def reset(self, initial_point: Vec3 | None = None) -> None:
        """Drop all points and start again from ``initial_point`` (unknown by default)."""
        point = _UNKNOWN_POINT if initial_point is None else initial_point
        logger.debug("resetting parser at %s", point)
        self.points.clear()
        self.current_point = point
        self.current_plane = Plane.XY
        self.points.append(PointSegment(point=point, line_number=-1))

    def add_command(self, command: str | Iterable[str]) -> PointSegment | None:
        """Process a command line or its pre-split words.

        Returns the point the command moved to, or None if it did not move.
        """
        args = split_command(command) if isinstance(command, str) else list(command)
        if not args:
            return None
        return self._process_command(args)

    def expand_arc(self) -> list[PointSegment]:
        """Replace the last point, if it is an arc, by points along the arc.

        Returns the new points, or an empty list when nothing was expanded.
        """
        if len(self.points) < 2:
            return []
        start_segment = self.points[-2]
        last_segment = self.points[-1]

        if not last_segment.is_arc:
            return []

        expanded = generate_points_along_arc(
            start_segment.plane,
            start_segment.point,
            last_segment.point,
            last_segment.center,
            last_segment.is_clockwise,
            last_segment.radius,
            self.small_arc_threshold,
            self.small_arc_segment_length,
            False,
        )
        if not expanded:
            return []

        self.points.pop()
        self._command_number -= 1

        created: list[PointSegment] = []
        for point in expanded[1:]:
            segment = PointSegment(
                point=point,
                line_number=self._command_number,
                is_metric=last_segment.is_metric,
            )
            self._command_number += 1
            self.points.append(segment)
            created.append(segment)

        self.current_point = self.points[-1].point
        return created

    def preprocess_commands(self, commands: Iterable[str]) -> list[str]:
        """Preprocess every command and concatenate the resulting lines."""
        return [line for command in commands for line in self.preprocess_command(command)]

    def preprocess_command(self, command: str) -> list[str]:
        """Clean a command line according to the settings.

        Comments are kept on the line they came from; comment-only lines are
        passed through unchanged, empty lines give nothing.
        """
        result: list[str] = []

        new_command = remove_comment(command)
        raw_command = new_command
        has_comment = len(new_command) != len(command)

        if self.remove_all_whitespace:
            new_command = remove_all_whitespace(new_command)

        if new_command:
            if self.speed_override > 0:
                new_command = override_speed(new_command, self.speed_override)

            if self.truncate_decimal_length > 0:
                new_command = truncate_decimals(self.truncate_decimal_length, new_command)

            if self.convert_arcs:
                arc_lines = self.convert_arcs_to_lines(new_command)
                if arc_lines:
                    result.extend(arc_lines)
                else:
                    result.append(new_command)
            elif has_comment:
                result.append(command.replace(raw_command, new_command))
            else:
                result.append(new_command)
        elif has_comment:
            result.append(command)

        return result

    def convert_arcs_to_lines(self, command: str) -> list[str]:
        """Parse a command and, if it is an arc, return G1 lines tracing it."""
        start = self.current_point

        segment = self.add_command(command)
        if segment is None or not segment.is_arc:
            return []

        expanded = self.expand_arc()
        if not expanded:
            return []

        lines: list[str] = []
        for piece in expanded:
            end = piece.point
            lines.append(
                generate_g1_from_points(
                    start, end, self.in_absolute_mode, self.truncate_decimal_length
                )
            )
            start = end
        return lines

    def _process_command(self, args: list[str]) -> PointSegment | None:
        codes: list[GCode] = []
        for arg in args:
            code = parse_gcode_enum(arg)
            if code is not GCode.UNKNOWN:
                codes.append(code)
                continue
            speed = parse_arg(arg, "F")
            if speed is not None:
                self.last_speed = speed if self.is_metric else speed * INCH_TO_MM
                continue
            spindle_speed = parse_arg(arg, "S")
            if spindle_speed is not None:
                self.last_spindle_speed = spindle_speed
                continue
            dwell = parse_arg(arg, "P")
            if dwell is not None:
                self.points[-1].dwell = dwell

        if not codes and self.last_gcode_command is not GCode.UNKNOWN:
            codes.append(self.last_gcode_command)

        segment: PointSegment | None = None
        for code in codes:
            segment = self._handle_gcode(code, args)
        return segment

    def _next_segment(self, point: Vec3) -> PointSegment:
        segment = PointSegment(point=point, line_number=self._command_number)
        self._command_number += 1
        self.points.append(segment)
        return segment

    def _add_linear_point_segment(self, next_point: Vec3, fast_traverse: bool) -> PointSegment:
        segment = self._next_segment(next_point)
        current = self.current_point
        z_only = (
            current.x == next_point.x
            and current.y == next_point.y
            and current.z != next_point.z
        )
        segment.is_metric = self.is_metric
        segment.is_z_movement = z_only
        segment.is_fast_traverse = fast_traverse
        segment.is_absolute = self.in_absolute_mode
        segment.speed = self.traverse_speed if fast_traverse else self.last_speed
        segment.spindle_speed = self.last_spindle_speed

        self.current_point = next_point
        return segment

    def _add_arc_point_segment(
        self, next_point: Vec3, clockwise: bool, args: list[str]
    ) -> PointSegment:
        segment = self._next_segment(next_point)
        center = update_center_with_command(
            args, self.current_point, next_point, self.in_absolute_ijk_mode, clockwise
        )
        radius = parse_coord(args, "R")

        if math.isnan(radius):
            current = rotate_to_plane(self.current_point, self.current_plane)
            rotated_center = rotate_to_plane(center, self.current_plane)
            radius = math.hypot(current.x - rotated_center.x, current.y - rotated_center.y)

        segment.is_metric = self.is_metric
        segment.set_arc_center(center)
        segment.is_arc = True
        segment.radius = radius
        segment.is_clockwise = clockwise
        segment.is_absolute = self.in_absolute_mode
        segment.speed = self.last_speed
        segment.spindle_speed = self.last_spindle_speed
        segment.plane = self.current_plane

        self.current_point = next_point
        return segment

    def _switch_to_relative(self) -> None:
        self.in_absolute_mode = False
        current = self.current_point
        if not current.has_nan():
            return
        logger.warning("switching to relative mode without a known current position")
        if self.fill_unknown_on_relative:
            self.current_point = Vec3(
                *(0.0 if math.isnan(c) else c for c in current)
            )

    def _handle_gcode(self, code: GCode, args: list[str]) -> PointSegment | None:
        segment: PointSegment | None = None
        next_point = update_point_with_command(
            args, self.current_point, self.in_absolute_mode
        )

        if code is GCode.G00:
            segment = self._add_linear_point_segment(next_point, True)
        elif code in (GCode.G01, GCode.G38_2):
            segment = self._add_linear_point_segment(next_point, False)
        elif code is GCode.G02:
            segment = self._add_arc_point_segment(next_point, True, args)
        elif code is GCode.G03:
            segment = self._add_arc_point_segment(next_point, False, args)
        elif code is GCode.G17:
            self.current_plane = Plane.XY
        elif code is GCode.G18:
            self.current_plane = Plane.ZX
        elif code is GCode.G19:
            self.current_plane = Plane.YZ
        elif code is GCode.G20:
            self.is_metric = False
        elif code is GCode.G21:
            self.is_metric = True
        elif code is GCode.G90:
            self.in_absolute_mode = True
        elif code is GCode.G90_1:
            self.in_absolute_ijk_mode = True
        elif code is GCode.G91:
            self._switch_to_relative()
        elif code is GCode.G91_1:
            self.in_absolute_ijk_mode = False

        if code in _MOTION_CODES:
            self.last_gcode_command = code

        return segment