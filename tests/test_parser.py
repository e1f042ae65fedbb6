import math

import pytest

from gcodeview.codes import GCode
from gcodeview.geometry import Plane, Vec3
from gcodeview.parser import GcodeParser


@pytest.fixture
def parser():
    return GcodeParser()


def _with_origin():
    p = GcodeParser()
    p.add_command("G0 X0 Y0 Z0")
    return p


def test_new_parser_has_home_point(parser):
    assert len(parser.points) == 1
    assert parser.points[0].line_number == -1
    assert parser.points[0].point.has_nan()
    assert parser.current_point.has_nan()


def test_reset_with_initial_point(parser):
    parser.add_command("G0 X1 Y1 Z1")
    parser.reset(Vec3(1, 2, 3))
    assert len(parser.points) == 1
    assert parser.points[0].point == Vec3(1, 2, 3)
    assert parser.current_point == Vec3(1, 2, 3)


def test_empty_command_returns_none(parser):
    assert parser.add_command("") is None
    assert parser.add_command([]) is None
    assert len(parser.points) == 1


def test_rapid_move(parser):
    ps = parser.add_command("G0 X10 Y20 Z5")
    assert ps.point == Vec3(10, 20, 5)
    assert ps.is_fast_traverse
    assert ps.speed == parser.traverse_speed == 300
    assert ps.line_number == 0
    assert parser.current_point == Vec3(10, 20, 5)
    assert parser.points[-1] is ps


def test_add_command_accepts_words(parser):
    ps = parser.add_command(["G1", "X4", "Y5", "Z6"])
    assert ps.point == Vec3(4, 5, 6)
    assert not ps.is_fast_traverse


def test_modal_motion_and_feed():
    p = _with_origin()
    first = p.add_command("G1 X1 F100")
    second = p.add_command("X2")
    assert first.speed == 100
    assert second is not None and second.point.x == 2
    assert not second.is_fast_traverse
    assert second.speed == 100
    assert p.last_gcode_command is GCode.G01


def test_non_motion_command_returns_none():
    p = _with_origin()
    assert p.add_command("G17") is None
    assert p.current_plane is Plane.XY


def test_inch_feed_converted():
    p = _with_origin()
    p.add_command("G20")
    ps = p.add_command("G1 X1 F10")
    assert ps.speed == pytest.approx(10 * 25.4)
    assert not ps.is_metric


def test_z_only_movement():
    p = _with_origin()
    z = p.add_command("G0 Z5")
    xy = p.add_command("G0 X1")
    assert z.is_z_movement
    assert not xy.is_z_movement


def test_relative_mode():
    p = GcodeParser()
    p.add_command("G90 G0 X1 Y1 Z1")
    ps = p.add_command("G91 G1 X2")
    assert ps.point == Vec3(3, 1, 1)
    assert not ps.is_absolute


def test_relative_mode_fills_unknown():
    p = GcodeParser()
    p.add_command("G91")
    assert p.current_point == Vec3(0, 0, 0)
    ps = p.add_command("G1 X5")
    assert ps.point == Vec3(5, 0, 0)


def test_relative_mode_keeps_unknown_when_disabled():
    p = GcodeParser()
    p.fill_unknown_on_relative = False
    p.add_command("G91")
    assert p.current_point.has_nan()


def test_arc_with_ijk():
    p = _with_origin()
    ps = p.add_command("G2 X10 Y0 I5 J0")
    assert ps.is_arc
    assert ps.is_clockwise
    assert ps.center == Vec3(5, 0, 0)
    assert ps.radius == pytest.approx(5)
    assert ps.plane is Plane.XY


def test_arc_with_radius_word():
    p = _with_origin()
    ps = p.add_command("G3 X10 Y0 R5")
    assert ps.radius == 5
    assert not ps.is_clockwise


def test_plane_selection_stored_on_arc():
    p = _with_origin()
    p.add_command("G18")
    ps = p.add_command("G2 X10 Z0 I5 K0")
    assert ps.plane is Plane.ZX


def test_command_number_counts_points():
    p = _with_origin()
    p.add_command("G1 X1")
    assert p.command_number == 1
    assert [s.line_number for s in p.points] == [-1, 0, 1]


def test_expand_arc_on_line_returns_empty():
    p = _with_origin()
    p.add_command("G1 X1")
    count = len(p.points)
    assert p.expand_arc() == []
    assert len(p.points) == count


def test_expand_arc_points_on_circle():
    p = _with_origin()
    p.add_command("G2 X10 Y0 I5 J0")
    expanded = p.expand_arc()
    assert len(expanded) > 1
    center = Vec3(5, 0, 0)
    for seg in expanded:
        assert (seg.point - center).length() == pytest.approx(5)
    assert expanded[-1].point == Vec3(10, 0, 0)
    assert p.points[-len(expanded):] == expanded
    assert p.current_point == expanded[-1].point
    numbers = [s.line_number for s in expanded]
    assert numbers == list(range(numbers[0], numbers[0] + len(numbers)))
    assert p.command_number == numbers[-1]


def test_preprocess_keeps_comment():
    p = GcodeParser()
    p.truncate_decimal_length = 4
    assert p.preprocess_command("G0 X1.5 ; comment") == ["G0X1.5000 ; comment"]


def test_preprocess_comment_only_and_empty():
    p = GcodeParser()
    assert p.preprocess_command("; hello") == ["; hello"]
    assert p.preprocess_command("") == []


def test_preprocess_speed_override():
    p = GcodeParser()
    p.speed_override = 50
    assert p.preprocess_command("G1 F200") == ["G1F100"]


def test_preprocess_keeps_whitespace_when_asked():
    p = GcodeParser()
    p.remove_all_whitespace = False
    p.truncate_decimal_length = 0
    assert p.preprocess_command("G1 X2") == ["G1 X2"]


def test_preprocess_commands_converts_arcs():
    p = GcodeParser()
    p.convert_arcs = True
    p.truncate_decimal_length = 3
    lines = p.preprocess_commands(["G0 X0 Y0 Z0", "G2 X10 Y0 I5 J0"])
    assert lines[0] == "G0X0Y0Z0"
    assert len(lines) > 2
    assert all(line.startswith("G1") for line in lines[1:])
    assert lines[-1] == "G1X10.000Y0.000Z0.000"


def test_convert_arcs_to_lines_ignores_lines():
    p = _with_origin()
    assert p.convert_arcs_to_lines("G1 X3") == []
    assert p.current_point == Vec3(3, 0, 0)


def test_convert_arcs_to_lines_relative_steps_sum_to_end():
    p = GcodeParser()
    p.truncate_decimal_length = 6
    p.add_command("G0 X0 Y0 Z0")
    p.add_command("G91")
    lines = p.convert_arcs_to_lines("G2 X10 Y0 I5 J0")
    assert lines
    total_x = 0.0
    for line in lines:
        x_part = line.split("X")[1].split("Y")[0]
        total_x += float(x_part)
    assert total_x == pytest.approx(10, abs=1e-4)
    assert not math.isnan(p.current_point.x)