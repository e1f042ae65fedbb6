import pytest

from gcodeview.geometry import Plane, Vec3
from gcodeview.segments import ArcProperties, LineSegment, PointSegment


def test_point_segment_defaults():
    ps = PointSegment(Vec3(1.0, 2.0, 3.0))
    assert ps.line_number == -1
    assert ps.is_arc is False
    assert ps.is_metric is True
    assert ps.is_absolute is True
    assert ps.plane is Plane.XY


def test_center_without_arc_raises():
    ps = PointSegment(Vec3())
    with pytest.raises(ValueError) as center_error:
        getattr(ps, "center")
    assert center_error.type is ValueError
    with pytest.raises(ValueError) as radius_error:
        setattr(ps, "radius", 1.0)
    assert radius_error.type is ValueError
    assert ps.is_arc is False
    assert ps.center_points() == []


def test_set_arc_center_makes_clockwise_arc():
    ps = PointSegment(Vec3(), is_clockwise=False)
    ps.set_arc_center(Vec3(1.0, 1.0, 0.0))
    assert ps.is_arc is True
    assert ps.is_clockwise is True
    assert ps.center == Vec3(1.0, 1.0, 0.0)
    assert ps.radius == 0.0


def test_set_arc_center_updates_existing_arc():
    ps = PointSegment(Vec3(), arc=ArcProperties(Vec3(1.0, 0.0, 0.0), 5.0), is_arc=True)
    ps.is_clockwise = False
    ps.set_arc_center(Vec3(2.0, 0.0, 0.0))
    assert ps.center == Vec3(2.0, 0.0, 0.0)
    assert ps.radius == 5.0
    assert ps.is_clockwise is False


def test_convert_to_metric_scales_point_and_arc():
    ps = PointSegment(Vec3(1.0, 2.0, 3.0), is_metric=False)
    ps.set_arc_center(Vec3(1.0, 0.0, 0.0))
    ps.radius = 1.0
    ps.convert_to_metric()
    assert ps.is_metric is True
    assert ps.point.x == pytest.approx(25.4)
    assert ps.point.y / ps.point.x == pytest.approx(2.0)
    assert ps.point.z / ps.point.x == pytest.approx(3.0)
    assert ps.center.x == pytest.approx(25.4)
    assert ps.radius == pytest.approx(25.4)


def test_convert_to_metric_is_idempotent():
    ps = PointSegment(Vec3(1.0, 1.0, 1.0), is_metric=False)
    ps.convert_to_metric()
    first = ps.point
    ps.convert_to_metric()
    assert ps.point == first


def test_metric_segment_is_not_scaled():
    ps = PointSegment(Vec3(1.0, 2.0, 3.0))
    ps.convert_to_metric()
    assert ps.point == Vec3(1.0, 2.0, 3.0)


def test_points_and_center_points():
    ps = PointSegment(Vec3(4.0, 5.0, 6.0))
    assert ps.points() == [4.0, 5.0]
    assert ps.center_points() == []
    ps.set_arc_center(Vec3(7.0, 8.0, 9.0))
    assert ps.center_points() == [7.0, 8.0, 9.0]


def test_point_segment_copy_skips_spindle_and_dwell():
    ps = PointSegment(Vec3(1.0, 2.0, 3.0), line_number=4, speed=100.0,
                      spindle_speed=1000.0, dwell=2.0, is_fast_traverse=True)
    clone = ps.copy()
    assert clone.point == ps.point
    assert clone.line_number == 4
    assert clone.speed == 100.0
    assert clone.is_fast_traverse is True
    assert clone.spindle_speed == 0.0
    assert clone.dwell == 0.0
    assert clone.is_arc is False


def test_point_segment_copy_keeps_arc_independent():
    ps = PointSegment(Vec3(1.0, 0.0, 0.0), plane=Plane.ZX)
    ps.set_arc_center(Vec3(0.0, 0.0, 0.0))
    ps.radius = 1.0
    ps.is_clockwise = False
    clone = ps.copy()
    assert clone.is_arc is True
    assert clone.radius == 1.0
    assert clone.is_clockwise is False
    assert clone.plane is Plane.ZX
    clone.radius = 9.0
    assert ps.radius == 1.0


def test_line_from_point_segment():
    ps = PointSegment(Vec3(1.0, 1.0, 0.0), speed=50.0, spindle_speed=300.0,
                      dwell=1.5, is_z_movement=True, is_absolute=False)
    line = LineSegment.from_point_segment(Vec3(), Vec3(1.0, 1.0, 0.0), 3, ps, False)
    assert line.line_number == 3
    assert line.is_metric is False
    assert line.is_z_movement is True
    assert line.is_absolute is False
    assert line.speed == 50.0
    assert line.spindle_speed == 300.0
    assert line.dwell == 1.5
    assert line.is_arc is False
    assert line.is_clockwise is False


def test_line_from_arc_keeps_direction():
    ps = PointSegment(Vec3(1.0, 0.0, 0.0))
    ps.set_arc_center(Vec3())
    line = LineSegment.from_point_segment(Vec3(), Vec3(1.0, 0.0, 0.0), 0, ps, True)
    assert line.is_arc is True
    assert line.is_clockwise is True


def test_line_points():
    line = LineSegment(Vec3(1.0, 2.0, 3.0), Vec3(4.0, 5.0, 6.0))
    assert line.point_array() == [Vec3(1.0, 2.0, 3.0), Vec3(4.0, 5.0, 6.0)]
    assert line.points() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_contains_point_on_segment():
    line = LineSegment(Vec3(0.0, 0.0, 0.0), Vec3(10.0, 0.0, 0.0))
    assert line.contains(Vec3(5.0, 0.0, 0.0)) is True
    assert line.contains(Vec3(0.0, 0.0, 0.0)) is True
    assert line.contains(Vec3(10.0, 0.0, 0.0)) is True


def test_contains_rejects_point_off_segment():
    line = LineSegment(Vec3(0.0, 0.0, 0.0), Vec3(10.0, 0.0, 0.0))
    assert line.contains(Vec3(5.0, 3.0, 0.0)) is False
    assert line.contains(Vec3(15.0, 0.0, 0.0)) is False


def test_line_copy_keeps_display_state_only():
    line = LineSegment(Vec3(), Vec3(1.0, 0.0, 0.0), line_number=7, speed=20.0,
                       spindle_speed=500.0, dwell=1.0, is_clockwise=True,
                       plane=Plane.YZ, is_highlight=True, drawn=True, vertex_index=12)
    clone = line.copy()
    assert clone.start == line.start and clone.end == line.end
    assert clone.line_number == 7
    assert clone.speed == 20.0
    assert clone.is_highlight is True
    assert clone.drawn is True
    assert clone.vertex_index == 12
    assert clone.spindle_speed == 0.0
    assert clone.dwell == 0.0
    assert clone.is_clockwise is False
    assert clone.plane is Plane.XY