# gcodeview

A library for reading CNC G-code and turning it into geometry that can be
drawn or inspected. It uses only the standard library.

## Modules

- `gcodeview.codes`: helpers for single G-code lines. `remove_comment`,
  `parse_comment`, `remove_all_whitespace`, `override_speed` (scale the F
  word by a percentage), `truncate_decimals`, `split_command` (split a line
  into words such as `G1` and `X10.5`), `parse_gcode_enum` and the `GCode`
  enum, `parse_gcodes` / `parse_mcodes`, `parse_coord`, `parse_arg` and
  `atof`.
- `gcodeview.arcs`: point and arc arithmetic. `update_point_with_command`,
  `update_point_with_values`, `convert_r_to_center`,
  `update_center_with_command`, `generate_g1_from_points`, `get_angle`,
  `calculate_sweep`, and `generate_points_along_arc` /
  `generate_arc_points`, which split an arc in the XY, ZX or YZ plane into
  points.
- `gcodeview.parser`: `GcodeParser` follows the machine state (units,
  absolute or relative mode, IJK mode, plane, feed, spindle speed) and
  records a `PointSegment` in `points` for every move. It can also
  preprocess programs (`preprocess_command`, `preprocess_commands`) and
  rewrite arcs as `G1` moves (`convert_arcs_to_lines`, `expand_arc`).
- `gcodeview.viewparse`: `GcodeViewParse` turns parsed points into
  `LineSegment` objects for display. It expands arcs, converts inch moves
  to millimetres, and keeps `min_extremes`, `max_extremes`, `min_length`
  and `line_indexes`; `resolution()` gives a grid size from them.
- `gcodeview.segments`: the `PointSegment`, `ArcProperties` and
  `LineSegment` data classes.
- `gcodeview.tables`: plain table models. `GCodeTableModel` holds
  `GCodeItem` rows (command, state as `ItemState`, response, line, args).
  `HeightMapTableModel` holds a grid of probed heights, with
  `user_input_listeners` called after user edits.
- `gcodeview.interpolation`: `cubic_interpolate`, `bicubic_interpolate` and
  `bicubic_interpolate_grid`, which interpolates a height grid spread over a
  `Rect`.
- `gcodeview.geometry`: `Vec3`, `Plane`, `nan_min`, `nan_max`,
  `rotate_to_plane` and `rotate_from_plane`.
- `gcodeview.profile`: `Profile`, a timer used as a context manager that
  logs elapsed milliseconds at debug level.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Example

```python
from gcodeview.parser import GcodeParser
from gcodeview.viewparse import GcodeViewParse

program = ["G0 X0 Y0 Z0", "G1 X0 Y10", "G1 X10 Y0", "G2 X20 Y0 R10"]

view = GcodeViewParse()
for line in view.to_obj_redux(program, 5.0, True):
    print(line.start, line.end, line.line_number, line.is_arc)
print(view.min_extremes, view.max_extremes)

parser = GcodeParser()
parser.convert_arcs = True
parser.truncate_decimal_length = 3
for command in parser.preprocess_commands(["G0 X0 Y0 Z0", "G2 X20 Y0 R10"]):
    print(command)
```

`GcodeParser` settings are plain attributes: `speed_override`,
`truncate_decimal_length`, `remove_all_whitespace`, `convert_arcs`,
`small_arc_threshold`, `small_arc_segment_length`, `traverse_speed` and
`fill_unknown_on_relative`.

The position starts unknown (all coordinates NaN). Give a position before
switching to relative mode (`G91`). If it is still unknown then, a warning
is logged and, while `fill_unknown_on_relative` is true (the default), the
unknown coordinates are set to zero.

## What it does not do

The package only parses and computes. It does not connect to or send
commands to a machine, has no graphical view or 3D rendering, and provides
no command-line program.