# ogbkit

Small building blocks for 2D games. None of them depend on a particular renderer.

- `ogbkit.particles`: particle emissions. Each particle is recomputed from its emission's
  seed and the time elapsed since the emission started, so no per-particle state is stored.
- `ogbkit.text_layout`: glyph walking, text measurement (functional and visual boxes) and
  word wrapping. It works with any object that implements the `GlyphSource` protocol.
- `ogbkit.font`: TrueType fonts rasterised with Pillow into single-channel glyph atlases,
  one variation per raster height. A `Font` is a `GlyphSource`.
- `ogbkit.logger`: an in-game logger. It writes to a stream, keeps a bounded history and
  lets you switch each log level on or off.
- `ogbkit.sprite_animation`: the frame index, the position in the sheet and the UV box for
  looping sprite sheet animations.
- `ogbkit.input_bindings`: maps actions to a fixed number of key-code slots.

## Installation

```
pip install ogbkit
```

To run the tests as well:

```
pip install "ogbkit[test]"
pytest
```

## Particles

```python
from ogbkit.particles import (
    EmissionConfig, EmissionProperty, InterpolationKind, ParticleKind, ParticleSystem,
)

system = ParticleSystem(clock)  # clock: a callable returning seconds; default time.perf_counter

poof = EmissionConfig(
    kind_pool=[ParticleKind.RECTANGLE],
    number_of_particles=10,
    emissions_per_second=100,
    persist=True,
    life_time=EmissionProperty.constant(1.6),
    velocity=EmissionProperty.randomized((-300, -300), (300, 300)),
    color=EmissionProperty.interpolated((1, 1, 1, 1), (0, 0, 0, 0)),
    size=EmissionProperty.interpolated((16, 16), (0, 0), InterpolationKind.SMOOTH),
)

handle = system.emit(poof, (0.0, 0.0))
for particle in system.compute_particles(clock()):
    matrix = particle.transform()  # 3x3 affine matrix as nested tuples
    ...
```

An `EmissionProperty` can be flat, random or interpolated. In flat mode its value is
`low`. In the other modes it runs from `low` to `high`, and interpolation can be linear,
smooth or a sine wave. Values are either scalars or tuples.

`emit` sets the particle count and the emissions per second to at least 1 each, and picks
a seed if the config has none. It returns an `EmissionHandle`, which works with `reset`,
`set_config`, `set_position`, `release` and `is_alive`. A handle that is out of range or
stale raises `InvalidHandleError`. `release` ignores stale handles. Once the last particle
of an emission has died, the emission is released, unless its config sets `loop` or
`persist`. This happens in both `update` and `compute_particles`.

`draw(renderer)` computes the live particles at the clock's current time. It passes each
one to `renderer.draw_rect`, `renderer.draw_circle` or `renderer.draw_image` together with
its transform, size and colour, and returns how many particles it drew.

## Text

```python
from ogbkit.font import load_font_from_disk
from ogbkit.text_layout import measure_text, split_text_to_lines_with_wrapping, walk_glyphs

font = load_font_from_disk("DejaVuSans.ttf")  # OSError if unreadable, ValueError if invalid
metrics = measure_text(font, "Hello,\nworld", 48, (1.0, 1.0))
print(metrics.functional_size, metrics.visual_size)

for glyph, x, y in walk_glyphs(font, "Hi", 48):
    ...

lines = split_text_to_lines_with_wrapping(long_text, 400.0, font, 48, (1.0, 1.0), True)
```

`Font.metrics(height)` returns a `FontMetrics`, which offers `scaled(scale)`.
`Font.glyph(codepoint, height)` returns a `Glyph` that carries its offsets, advance, size
and atlas UV box. `Font.render_atlas_if_not_yet_rendered(height, codepoint)` rasterises an
atlas ahead of time and returns it as a `FontAtlas`, with a Pillow image and its glyphs.
Raster heights must lie between 1 and 512.

## Logging

```python
from ogbkit.logger import GameLogger, LogLevel

log = GameLogger(max_messages=50)          # writes to sys.stdout unless given a stream
log.log(LogLevel.INFO, "Level loaded")     # writes "[Info] Level loaded\n"
log.toggle(LogLevel.VERBOSE)
for message in log.visible_messages():     # newest first, disabled levels hidden
    ...
```

`log` returns nothing when the message's level is switched off. Once the history is full,
the oldest message is dropped.

## Sprite animation and input

```python
from ogbkit.sprite_animation import SpriteSheetAnimation
from ogbkit.input_bindings import KeyBindings

anim = SpriteSheetAnimation(sheet_width=640, sheet_height=384, columns=10, rows=6,
                            start_frame=(2, 1), end_frame=(6, 2), playback_fps=4.0)
x1, y1, x2, y2 = anim.uv_at(elapsed_seconds)

SPACE = 32
bindings = KeyBindings(keys_per_binding=3)
bindings.bind("dash", 0, SPACE)
if bindings.is_action_just_pressed("dash", is_key_just_pressed):
    ...
```

## What this package does not do

The package does not open windows, handle input devices, play audio or draw on a GPU. The
particle system and the fonts give you geometry, colours and Pillow atlas images, and your
own renderer draws them. `KeyBindings` asks a callable that you supply which keys were
just pressed.