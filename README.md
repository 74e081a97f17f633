# tsoax

Building blocks for extracting and tracking curvilinear networks
(filaments, fibres, vessels) in 2D and 3D image sequences: a spatial
binning grid, a linear assignment solver, an image container with file
input and output, voxel interpolation, gradient computation and
resampling.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `tsoax.coordinate` — `Coordinate`, an immutable 3D vector with `+`, `-`,
  negation, `*` (dot product with another `Coordinate`, or scaling by a
  number), `/` by a number, and the methods `dot`, `cross`, `magnitude`
  and `unit` (the last raises `ZeroDivisionError` for the zero vector).
- `tsoax.grid` — `Grid`, a box split into equal bins, each holding
  `(snake index, vertex index)` tags. Bins are set with `set_num_bins` or
  `set_bin_size`; positions outside the box are clamped to the edge bins.
  It offers `put_in_grid`, `get_bin`, `neighboring_tags` (the 3x3x3 block,
  or only the shell at a given `level`), `tags_in_bins`,
  `shift_first_index`, `remove_element`, `clear`, and, after
  `construct_tag_list`, lower bounds on the distance between tags
  (`grid_level_dist_between_ids`, `min_dist_between_ids`,
  `min_dist_between_bins`). Axes can be made periodic with `set_periodic`.
- `tsoax.matrix` — `Matrix`, a resizable dense matrix indexed as
  `m[row, column]`, built with `Matrix(rows, columns, default)` or
  `Matrix.from_rows(...)`, with in-place `+=` (number or same-sized
  matrix), `-=`, `*=`, `/=` by a number, `resize`, `fill`, `copy`, `min`,
  `max` and a comma-separated text form.
- `tsoax.lapjv` — `lapjv(cost)` solves the square linear assignment
  problem by minimising total cost (Jonker–Volgenant) and returns
  `(row_to_column, column_to_row)`; `assignment_cost(cost, row_to_column)`
  sums the cost of an assignment.
- `tsoax.actor_color` — `ActorColor`, an enum of named RGB display colours
  (`WHITE`, `GRAY`, `RED`, `MAGENTA`, `YELLOW`, `GREEN`, `CYAN`, `BLUE`)
  with an `rgb()` method.
- `tsoax.image` — `ImageData`, a 1- to 3-D image indexed as
  `[x, y, z, component]` with spacing, `dimension()`, `dimensions()`,
  `extent()`, `scalar_range()` and `voxel()`; helper functions
  `image_intensity`, `image_gradient`, `minimum_intensity`,
  `maximum_intensity`, `image_center`, `image_diagonal`,
  `is_index_inside`, `is_point_inside`; MetaImage reading and writing
  (`read_meta_image`, `write_meta_image`, the latter writing a header and a
  separate `.raw` file) and TIFF/JPEG output (`write_tiff_image`,
  `write_jpeg_image`).
- `tsoax.interpolator` — `Interpolator`, trilinear interpolation of all
  components of an `ImageData` at a 2D or 3D point in physical units;
  `interpolate` returns `None` for points outside the image.
- `tsoax.gradient_calculator` — `GradientCalculator`, which takes the
  HSV value of a colour image (or the single channel), scales intensities
  (by one over the maximum when the scale is zero), optionally applies a
  Gaussian filter and computes central-difference gradients, one component
  per data axis.
- `tsoax.image_resampler` — `ImageResampler`, which resamples a stack
  whose z spacing is `ratio` times the x/y spacing to unit spacing with a
  cubic spline, and writes the result as TIFF.
- `tsoax.image_reader` — `ImageReader`, which reads TIFF, PNG, JPEG, BMP
  and MetaImage (`.mhd`, `.mha`) files: a single file, a single file
  holding several frames stacked along z (set `nslices_per_frame` first),
  or a directory of frames. Directory files are ordered by
  `sort_filenames`: names without a number first, then names whose number
  repeats an earlier one, then the rest by the last number in the name
  (`extract_index`).
- `tsoax.naming` — `construct_snake_filename`, `image_suffix` and
  `output_name_for_directory` for naming result files.

## Example

```python
from tsoax.coordinate import Coordinate
from tsoax.grid import Grid
from tsoax.lapjv import lapjv, assignment_cost

grid = Grid(Coordinate(10.0, 10.0, 10.0), False, False, False)
grid.set_bin_size(2.0)
grid.put_in_grid((0, 0), Coordinate(1.0, 1.0, 1.0))
grid.put_in_grid((1, 3), Coordinate(2.5, 1.0, 1.0))
print(grid.neighboring_tags(Coordinate(1.0, 1.0, 1.0), 1))

cost = [[4.0, 1.0, 3.0], [2.0, 0.0, 5.0], [3.0, 2.0, 2.0]]
rows, cols = lapjv(cost)
print(rows, assignment_cost(cost, rows))
```

## What this package does not do

The package holds the supporting pieces only. It does not itself
initialise or evolve active contours on an image, cut and regroup curves at
junctions, link curves across frames into tracks, or save curve results.
It has no command-line program for batch runs and no graphical viewer or
rendering; `ActorColor` only names colours.