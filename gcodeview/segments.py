"""Parsed tool path points and the line segments drawn between them."""

from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import Plane, Vec3

INCH_TO_MM = 25.4


@dataclass
class ArcProperties:
    """Center and radius of an arc move."""

    center: Vec3
    radius: float


@dataclass
class PointSegment:
    """End point of one parsed motion command."""

    point: Vec3 = field(default_factory=Vec3)
    line_number: int = -1
    toolhead: int = 0
    speed: float = 0.0
    spindle_speed: float = 0.0
    dwell: float = 0.0
    plane: Plane = Plane.XY
    is_z_movement: bool = False
    is_arc: bool = False
    is_metric: bool = True
    is_fast_traverse: bool = False
    is_absolute: bool = True
    is_clockwise: bool = True
    arc: ArcProperties | None = None

    def _arc_properties(self) -> ArcProperties:
        if self.arc is None:
            raise ValueError("segment has no arc properties")
        return self.arc

    @property
    def center(self) -> Vec3:
        """Arc center; raises ValueError for a segment without arc data."""
        return self._arc_properties().center

    @property
    def radius(self) -> float:
        """Arc radius; raises ValueError for a segment without arc data."""
        return self._arc_properties().radius

    @radius.setter
    def radius(self, value: float) -> None:
        self._arc_properties().radius = value

    def set_arc_center(self, center: Vec3) -> None:
        """Set the arc center, turning the segment into a clockwise arc if needed."""
        if self.arc is None:
            self.arc = ArcProperties(center, 0.0)
            self.is_clockwise = True
            self.is_arc = True
        else:
            self.arc.center = center

    def convert_to_metric(self) -> None:
        """Scale inch coordinates to millimetres; no-op if already metric."""
        if self.is_metric:
            return
        self.is_metric = True
        self.point = self.point * INCH_TO_MM
        if self.is_arc and self.arc is not None:
            self.arc.center = self.arc.center * INCH_TO_MM
            self.arc.radius *= INCH_TO_MM

    def points(self) -> list[float]:
        """X and Y of the end point."""
        return [self.point.x, self.point.y]

    def center_points(self) -> list[float]:
        """Coordinates of the arc center, or an empty list."""
        if self.arc is None:
            return []
        return list(self.arc.center)

    def copy(self) -> PointSegment:
        """Copy the position, motion flags and arc geometry.

        Spindle speed and dwell are not carried over.
        """
        clone = PointSegment(
            point=self.point,
            line_number=self.line_number,
            toolhead=self.toolhead,
            speed=self.speed,
            is_metric=self.is_metric,
            is_z_movement=self.is_z_movement,
            is_fast_traverse=self.is_fast_traverse,
            is_absolute=self.is_absolute,
        )
        if self.is_arc:
            clone.set_arc_center(self.center)
            clone.radius = self.radius
            clone.is_clockwise = self.is_clockwise
            clone.plane = self.plane
        return clone


@dataclass
class LineSegment:
    """A straight piece of tool path ready for drawing."""

    start: Vec3 = field(default_factory=Vec3)
    end: Vec3 = field(default_factory=Vec3)
    line_number: int = -1
    toolhead: int = 0
    speed: float = 0.0
    spindle_speed: float = 0.0
    dwell: float = 0.0
    plane: Plane = Plane.XY
    is_z_movement: bool = False
    is_arc: bool = False
    is_metric: bool = True
    is_fast_traverse: bool = False
    is_absolute: bool = True
    is_clockwise: bool = False
    is_highlight: bool = False
    drawn: bool = False
    vertex_index: int = -1

    @classmethod
    def from_point_segment(
        cls,
        start: Vec3,
        end: Vec3,
        number: int,
        segment: PointSegment,
        is_metric: bool,
    ) -> LineSegment:
        """Build a line between two points, taking motion attributes from a point segment."""
        return cls(
            start=start,
            end=end,
            line_number=number,
            is_arc=segment.is_arc,
            is_clockwise=segment.is_clockwise if segment.is_arc else False,
            plane=segment.plane,
            is_fast_traverse=segment.is_fast_traverse,
            is_z_movement=segment.is_z_movement,
            is_metric=is_metric,
            is_absolute=segment.is_absolute,
            speed=segment.speed,
            spindle_speed=segment.spindle_speed,
            dwell=segment.dwell,
        )

    def point_array(self) -> list[Vec3]:
        """Start and end points."""
        return [self.start, self.end]

    def points(self) -> list[float]:
        """Start and end coordinates as six floats."""
        return [*self.start, *self.end]

    def contains(self, point: Vec3) -> bool:
        """True if the point lies on the segment, within a small tolerance."""
        line = self.end - self.start
        pt = point - self.start
        delta = (line - pt).length() - (line.length() - pt.length())
        return delta < 0.01

    def copy(self) -> LineSegment:
        """Copy geometry and display state.

        Spindle speed, dwell, direction and plane keep their defaults.
        """
        return LineSegment(
            start=self.start,
            end=self.end,
            line_number=self.line_number,
            toolhead=self.toolhead,
            speed=self.speed,
            is_z_movement=self.is_z_movement,
            is_arc=self.is_arc,
            is_metric=self.is_metric,
            is_fast_traverse=self.is_fast_traverse,
            is_absolute=self.is_absolute,
            is_highlight=self.is_highlight,
            drawn=self.drawn,
            vertex_index=self.vertex_index,
        )