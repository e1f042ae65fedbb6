"""Point, arc-center and arc-expansion geometry for G-code motion commands."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .codes import atof, split_command
from .geometry import Plane, Vec3, rotate_from_plane, rotate_to_plane

_TWO_PI = math.pi * 2


def _words(args: Iterable[str] | str) -> list[str]:
    if isinstance(args, str):
        return split_command(args)
    return list(args)


def update_point_with_command(
    args: Iterable[str] | str, initial: Vec3, absolute_mode: bool
) -> Vec3:
    """Apply the X, Y and Z words of a command to a point.

    ``args`` is either a list of words or a whole command line. In relative
    mode the values are offsets from ``initial``.
    """
    x, y, z = initial.x, initial.y, initial.z
    for word in _words(args):
        if not word:
            continue
        letter = word[0].upper()
        if letter not in "XYZ":
            continue
        value = atof(word[1:])
        if letter == "X":
            x = value if absolute_mode else initial.x + value
        elif letter == "Y":
            y = value if absolute_mode else initial.y + value
        else:
            z = value if absolute_mode else initial.z + value
    return Vec3(x, y, z)


def update_point_with_values(
    initial: Vec3, x: float, y: float, z: float, absolute_mode: bool
) -> Vec3:
    """Replace (absolute) or offset (relative) the coordinates that are not NaN."""
    values = (x, y, z)
    current = tuple(initial)
    result = []
    for old, new in zip(current, values):
        if math.isnan(new):
            result.append(old)
        elif absolute_mode:
            result.append(new)
        else:
            result.append(old + new)
    return Vec3(*result)


def _divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if math.isnan(a) or a == 0:
        return math.nan
    return math.copysign(math.inf, a)


def convert_r_to_center(
    start: Vec3, end: Vec3, radius: float, absolute_ijk: bool, clockwise: bool
) -> Vec3:
    """Center of an arc given by its radius; a negative radius picks the long arc.

    The result is NaN where no such arc exists.
    """
    x = end.x - start.x
    y = end.y - start.y

    h = 4 * radius * radius - x * x - y * y
    root = math.sqrt(h) if h >= 0 else math.nan
    h_x2_div_d = _divide(-root, math.hypot(x, y))

    if not clockwise:
        h_x2_div_d = -h_x2_div_d

    if radius < 0:
        h_x2_div_d = -h_x2_div_d

    offset_x = 0.5 * (x - (y * h_x2_div_d))
    offset_y = 0.5 * (y + (x * h_x2_div_d))

    if absolute_ijk:
        return Vec3(offset_x, offset_y, 0.0)
    return Vec3(start.x + offset_x, start.y + offset_y, 0.0)


def update_center_with_command(
    args: Iterable[str],
    initial: Vec3,
    next_point: Vec3,
    absolute_ijk_mode: bool,
    clockwise: bool,
) -> Vec3:
    """Arc center from the I, J, K words, or from R when none of them is given."""
    offsets = {"I": math.nan, "J": math.nan, "K": math.nan, "R": math.nan}
    for word in args:
        if word and word[0].upper() in offsets:
            offsets[word[0].upper()] = atof(word[1:])

    i, j, k, r = offsets["I"], offsets["J"], offsets["K"], offsets["R"]
    if math.isnan(i) and math.isnan(j) and math.isnan(k):
        return convert_r_to_center(initial, next_point, r, absolute_ijk_mode, clockwise)
    return update_point_with_values(initial, i, j, k, absolute_ijk_mode)


def generate_g1_from_points(
    start: Vec3, end: Vec3, absolute_mode: bool, precision: int
) -> str:
    """A G1 command moving from ``start`` to ``end``; NaN coordinates are left out."""
    parts = ["G1"]
    for letter, s, e in zip("XYZ", start, end):
        if math.isnan(e):
            continue
        value = e if absolute_mode else e - s
        parts.append(f"{letter}{value:.{precision}f}")
    return "".join(parts)


def get_angle(start: Vec3, end: Vec3) -> float:
    """Angle in radians, in [0, 2*pi), of the direction from start to end."""
    dx = end.x - start.x
    dy = end.y - start.y

    if dx != 0:
        if dx > 0 and dy >= 0:
            return math.atan(dy / dx)
        if dx < 0 and dy >= 0:
            return math.pi - abs(math.atan(dy / dx))
        if dx < 0 and dy < 0:
            return math.pi + abs(math.atan(dy / dx))
        if dx > 0 and dy < 0:
            return _TWO_PI - abs(math.atan(dy / dx))
        return 0.0

    if dy > 0:
        return math.pi / 2.0
    return math.pi * 3.0 / 2.0


def calculate_sweep(start_angle: float, end_angle: float, is_cw: bool) -> float:
    """Angle swept going from start to end angle in the given direction."""
    if start_angle == end_angle:
        return _TWO_PI

    if end_angle == 0:
        end_angle = _TWO_PI

    if not is_cw and end_angle < start_angle:
        return (_TWO_PI - start_angle) + end_angle
    if is_cw and end_angle > start_angle:
        return (_TWO_PI - end_angle) + start_angle
    return abs(end_angle - start_angle)


def generate_points_along_arc(
    plane: Plane,
    start: Vec3,
    end: Vec3,
    center: Vec3,
    clockwise: bool,
    radius: float,
    min_arc_length: float,
    arc_precision: float,
    arc_degree_mode: bool,
) -> list[Vec3]:
    """Points along an arc after the start point, ending at ``end``.

    In degree mode ``arc_precision`` is the angle step in degrees, otherwise
    the segment length. An empty list is returned for an unknown center.
    """
    start = rotate_to_plane(start, plane)
    end = rotate_to_plane(end, plane)
    center = rotate_to_plane(center, plane)

    if math.isnan(center.length()):
        return []

    if radius == 0:
        radius = math.sqrt((start.x - center.x) ** 2 + (end.y - center.y) ** 2)

    start_angle = get_angle(center, start)
    end_angle = get_angle(center, end)
    sweep = calculate_sweep(start_angle, end_angle, clockwise)
    arc_length = sweep * radius

    if arc_degree_mode and arc_precision > 0:
        num_points = int(max(1.0, sweep / (math.pi * arc_precision / 180)))
    else:
        if arc_precision <= 0 and min_arc_length > 0:
            arc_precision = min_arc_length
        if arc_precision <= 0:
            raise ValueError("arc precision must be positive")
        count = arc_length / arc_precision
        if not math.isfinite(count):
            raise ValueError("arc length is not finite")
        num_points = math.ceil(count)

    return generate_arc_points(
        plane, start, end, center, clockwise, radius, start_angle, sweep, num_points
    )


def generate_arc_points(
    plane: Plane,
    p1: Vec3,
    p2: Vec3,
    center: Vec3,
    is_cw: bool,
    radius: float,
    start_angle: float,
    sweep: float,
    num_points: int,
) -> list[Vec3]:
    """Split an arc, given in plane-rotated coordinates, into ``num_points`` steps.

    The returned points are rotated back out of the working plane.
    """
    if radius == 0:
        radius = math.sqrt((p1.x - center.x) ** 2 + (p1.y - center.y) ** 2)

    z = p1.z
    z_increment = (p2.z - p1.z) / num_points if num_points > 0 else 0.0
    segments: list[Vec3] = []
    for i in range(1, num_points):
        step = i * sweep / num_points
        angle = start_angle - step if is_cw else start_angle + step
        if angle >= _TWO_PI:
            angle -= _TWO_PI
        z += z_increment
        point = Vec3(
            math.cos(angle) * radius + center.x,
            math.sin(angle) * radius + center.y,
            z,
        )
        segments.append(rotate_from_plane(point, plane))

    segments.append(rotate_from_plane(p2, plane))
    return segments