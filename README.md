# hlabgfx

A small CPU graphics toolkit in two parts:

- **Image filters** (`hlabgfx.image`): load an image into floating-point RGBA
  pixels, apply a separable 5-tap box blur or Gaussian blur, or a bloom effect
  (pixels whose relative luminance is below a threshold are set to black, the
  rest is Gaussian-blurred a number of times, then the weighted original is
  added back and the result clamped to [0, 1]), and save the result as an
  8-bit PNG.
- **Ray tracer** (`hlabgfx.raytracer`): spheres, triangles and squares with
  Phong shading, hard shadows from a single point light, reflection,
  refraction (index of refraction 1.3) and bilinearly sampled, wrap-around
  textures, including a textured cube environment around the scene.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command line

### `hlabgfx-bloom`

```
hlabgfx-bloom [input] [output] [--threshold T] [--repeat N] [--weight W]
```

Reads `input` (default `image_1_360.jpg`), prints its width, height and
channel count, applies bloom with luminance threshold `--threshold`
(default 0.1), `--repeat` Gaussian blur passes (default 100) and weight
`--weight` (default 0.5), prints the time taken in seconds and writes
`output` (default `result.png`). It exits with status 1 and an error message
if the input cannot be read.

### `hlabgfx-render`

```
hlabgfx-render [--width W] [--height H] [--assets DIR] [--output FILE]
```

Builds the default scene, ray traces it at `--width` x `--height`
(default 1280 x 720), prints the time taken and writes the image to
`--output` (default `result.png`). Textures are looked up relative to
`--assets` (default the current directory): `shadertoy_abstract1.jpg` for the
ground, and `../SaintPetersBasilica/{posz,negz,posy,negy,posx,negx}_blurred.jpg`
for the six faces of the environment cube. If a texture cannot be loaded it
exits with status 1.

## Library use

```python
from hlabgfx.image import Image

image = Image()
image.read_from_file("photo.jpg")
image.bloom(0.1, 10, 0.5)
image.write_png("result.png")
```

`Image` also offers `box_blur5()`, `gaussian_blur5()` and `get_pixel(i, j)`,
which returns a writable view of a pixel with coordinates clamped to the
edges. Pixels are held in `image.pixels`, a `(height, width, 4)` float32
array; `write_png` writes the channel count the image was read with (3 or 4).

```python
from hlabgfx.image import Image
from hlabgfx.raytracer import Raytracer, build_default_scene

objects, light = build_default_scene("assets")
raytracer = Raytracer(320, 180, objects, light)
pixels = raytracer.render()          # (height, width, 4) float32 RGBA
Image(pixels, channels=3).write_png("scene.png")
```

`Raytracer` also accepts `eye_pos` (default `(0, 0, -1.5)`) and `max_depth`
(default 5), and exposes `find_closest_collision(ray)`,
`trace_ray(ray, recurse_level)` and `transform_screen_to_world(pos_screen)`.
Any list of scene objects may be passed in place of the default scene.

The building blocks live in:

- `hlabgfx.geometry`: `Vec2`, `Vec3` (with `dot`, `cross`, `length`,
  `normalized`), `Ray`, `Hit`, `Light`
- `hlabgfx.texture`: `Texture` (`get_wrapped`, `sample_point`,
  `sample_linear`), `load_texture`, `texture_from_pixels`,
  `interpolate_bilinear`
- `hlabgfx.shapes`: `SceneObject`, `Sphere`, `Triangle` (single-sided),
  `Square`, `intersect_ray_triangle`

## What it does not do

Nothing is shown on screen: there is no window or interactive viewer. Both
commands render on the CPU, single-threaded, and write their result to a PNG
file.