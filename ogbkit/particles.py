"""Time-driven particle emissions.

Particles are not simulated step by step. Each particle is computed from the
time that has passed since its emission started, and a per-emission seed
keeps the random properties stable from frame to frame.
"""

from __future__ import annotations

import dataclasses
import enum
import math
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple, Union

Vector = Tuple[float, ...]
Value = Union[float, Vector]
Matrix3 = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]


class ParticleKind(enum.IntEnum):
    RECTANGLE = 0
    CIRCLE = 1
    IMAGE = 2


class PropertyMode(enum.IntEnum):
    FLAT = 0
    RANDOM = 1
    INTERPOLATE = 2


class InterpolationKind(enum.IntEnum):
    LINEAR = 0
    SMOOTH = 1
    SINE_WAVE = 2


class InvalidHandleError(LookupError):
    """Raised when an emission handle does not refer to a live emission slot."""


def sample_interp_one(interp: InterpolationKind, min_value: float, max_value: float, t: float) -> float:
    """Interpolate one scalar from ``min_value`` to ``max_value`` at ``t``.

    The sine wave kind yields one normalised wave over ``t`` in [0, 1] and
    ignores the bounds.
    """
    if interp == InterpolationKind.LINEAR:
        return min_value + (max_value - min_value) * t
    if interp == InterpolationKind.SMOOTH:
        smooth = t * t * (3.0 - 2.0 * t)
        return min_value + (max_value - min_value) * smooth
    if interp == InterpolationKind.SINE_WAVE:
        return (math.sin(t * math.tau - math.pi / 2.0) + 1.0) / 2.0
    raise ValueError(f"unknown interpolation kind: {interp!r}")


def _is_vector(value: Any) -> bool:
    return isinstance(value, (tuple, list))


def _components(value: Value, count: int) -> Vector:
    if _is_vector(value):
        return tuple(float(v) for v in value)
    return (float(value),) * count


@dataclass(frozen=True)
class EmissionProperty:
    """A particle property: a flat value, a random range or an interpolation.

    ``low`` holds the flat value in flat mode and the start of the range
    otherwise; ``high`` holds the end of the range.
    """

    low: Value = 0.0
    high: Value = 0.0
    mode: PropertyMode = PropertyMode.FLAT
    interp_kind: InterpolationKind = InterpolationKind.LINEAR

    @classmethod
    def constant(cls, value: Value) -> "EmissionProperty":
        return cls(low=value, high=value, mode=PropertyMode.FLAT)

    @classmethod
    def randomized(cls, low: Value, high: Value) -> "EmissionProperty":
        return cls(low=low, high=high, mode=PropertyMode.RANDOM)

    @classmethod
    def interpolated(
        cls, low: Value, high: Value, kind: InterpolationKind = InterpolationKind.LINEAR
    ) -> "EmissionProperty":
        return cls(low=low, high=high, mode=PropertyMode.INTERPOLATE, interp_kind=kind)

    def sample(self, rng: random.Random, t: float) -> Value:
        """Return the property's value at normalised lifetime ``t``."""
        if self.mode == PropertyMode.FLAT:
            return tuple(self.low) if _is_vector(self.low) else float(self.low)

        if not _is_vector(self.low) and not _is_vector(self.high):
            if self.mode == PropertyMode.RANDOM:
                return rng.uniform(float(self.low), float(self.high))
            return sample_interp_one(self.interp_kind, float(self.low), float(self.high), t)

        count = len(self.low) if _is_vector(self.low) else len(self.high)
        lows = _components(self.low, count)
        highs = _components(self.high, count)
        if self.mode == PropertyMode.RANDOM:
            return tuple(rng.uniform(lo, hi) for lo, hi in zip(lows, highs))
        return tuple(sample_interp_one(self.interp_kind, lo, hi, t) for lo, hi in zip(lows, highs))


def _zero_v2() -> EmissionProperty:
    return EmissionProperty.constant((0.0, 0.0))


def _zero_v4() -> EmissionProperty:
    return EmissionProperty.constant((0.0, 0.0, 0.0, 0.0))


@dataclass
class EmissionConfig:
    """How an emission spawns particles and how their properties evolve."""

    number_of_particles: int = 0
    emissions_per_second: float = 0.0
    kind_pool: Sequence[ParticleKind] = (ParticleKind.RECTANGLE,)
    image_pool: Sequence[Any] = ()
    persist: bool = False
    loop: bool = False
    seed: int = 0
    start_position: EmissionProperty = field(default_factory=_zero_v2)
    pivot: EmissionProperty = field(default_factory=_zero_v2)
    life_time: EmissionProperty = field(default_factory=EmissionProperty)
    velocity: EmissionProperty = field(default_factory=_zero_v2)
    acceleration: EmissionProperty = field(default_factory=_zero_v2)
    rotation: EmissionProperty = field(default_factory=EmissionProperty)
    rotational_acceleration: EmissionProperty = field(default_factory=EmissionProperty)
    color: EmissionProperty = field(default_factory=_zero_v4)
    size: EmissionProperty = field(default_factory=_zero_v2)


@dataclass
class Particle:
    kind: ParticleKind = ParticleKind.RECTANGLE
    rotation: float = 0.0
    color: Vector = (0.0, 0.0, 0.0, 0.0)
    position: Vector = (0.0, 0.0)
    pivot: Vector = (0.0, 0.0)
    size: Vector = (0.0, 0.0)
    index: int = 0
    image: Any = None

    def transform(self) -> Matrix3:
        """Translate to the position, rotate, then offset by the negative pivot."""
        c = math.cos(self.rotation)
        s = math.sin(self.rotation)
        px, py = self.position[0], self.position[1]
        vx, vy = -self.pivot[0], -self.pivot[1]
        return (
            (c, -s, px + c * vx - s * vy),
            (s, c, py + s * vx + c * vy),
            (0.0, 0.0, 1.0),
        )


@dataclass(frozen=True)
class EmissionHandle:
    index: int
    generation: int


@dataclass
class _Emission:
    config: EmissionConfig
    pos: Vector
    start_time: float
    allocated: bool = True
    generation: int = 0


class Renderer(Protocol):
    def draw_rect(self, xform: Matrix3, size: Vector, color: Vector) -> Any: ...

    def draw_circle(self, xform: Matrix3, size: Vector, color: Vector) -> Any: ...

    def draw_image(self, image: Any, xform: Matrix3, size: Vector, color: Vector) -> Any: ...


def _add(a: Vector, b: Vector) -> Vector:
    return (a[0] + b[0], a[1] + b[1])


def _scale(a: Vector, f: float) -> Vector:
    return (a[0] * f, a[1] * f)


class ParticleSystem:
    """Owns emissions and computes their particles from elapsed time."""

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.perf_counter
        self._emissions: List[_Emission] = []
        self._rng = random.Random()

    def emit(self, config: EmissionConfig, pos: Sequence[float]) -> EmissionHandle:
        """Start a new emission at ``pos`` and return its handle."""
        config = dataclasses.replace(
            config,
            number_of_particles=max(int(config.number_of_particles), 1),
            emissions_per_second=max(float(config.emissions_per_second), 1.0),
            kind_pool=tuple(config.kind_pool),
            image_pool=tuple(config.image_pool),
        )
        if config.seed == 0:
            config.seed = self._rng.getrandbits(64) or 1
        position = (float(pos[0]), float(pos[1]))
        now = self._clock()

        for index, emission in enumerate(self._emissions):
            if not emission.allocated:
                emission.config = config
                emission.pos = position
                emission.start_time = now
                emission.allocated = True
                emission.generation += 1
                return EmissionHandle(index, emission.generation)

        self._emissions.append(_Emission(config=config, pos=position, start_time=now))
        return EmissionHandle(len(self._emissions) - 1, 0)

    def _lookup(self, handle: EmissionHandle, check_generation: bool = True) -> _Emission:
        if not 0 <= handle.index < len(self._emissions):
            raise InvalidHandleError("invalid emission handle")
        emission = self._emissions[handle.index]
        if check_generation and emission.generation != handle.generation:
            raise InvalidHandleError("invalid emission handle; emission has been released")
        return emission

    def reset(self, handle: EmissionHandle) -> None:
        """Restart the emission from its first particle."""
        self._lookup(handle).start_time = self._clock()

    def set_config(self, handle: EmissionHandle, config: EmissionConfig) -> None:
        self._lookup(handle).config = dataclasses.replace(
            config, kind_pool=tuple(config.kind_pool), image_pool=tuple(config.image_pool)
        )

    def set_position(self, handle: EmissionHandle, pos: Sequence[float]) -> None:
        self._lookup(handle).pos = (float(pos[0]), float(pos[1]))

    def release(self, handle: EmissionHandle) -> None:
        """Free the emission slot; stale handles are ignored."""
        emission = self._lookup(handle, check_generation=False)
        if emission.generation == handle.generation:
            emission.allocated = False

    def is_alive(self, handle: EmissionHandle) -> bool:
        if not 0 <= handle.index < len(self._emissions):
            return False
        emission = self._emissions[handle.index]
        return emission.allocated and emission.generation == handle.generation

    def _timing(self, emission: _Emission) -> Tuple[float, float, float]:
        config = emission.config
        sample_life_time = float(config.life_time.sample(self._rng, 0.0))
        last_emit_duration = config.number_of_particles / config.emissions_per_second
        last_death_duration = last_emit_duration + sample_life_time
        emission_interval = last_emit_duration / config.number_of_particles
        return last_emit_duration, last_death_duration, emission_interval

    @staticmethod
    def _finished(emission: _Emission, passed: float, last_death_duration: float) -> bool:
        config = emission.config
        return not config.persist and not config.loop and passed > last_death_duration

    def update(self, delta_time: float) -> None:
        """Release emissions whose last particle has died."""
        now = self._clock()
        for emission in self._emissions:
            if not emission.allocated:
                continue
            _, last_death_duration, _ = self._timing(emission)
            if self._finished(emission, now - emission.start_time, last_death_duration):
                emission.allocated = False

    def compute_particles(self, now: float) -> List[Particle]:
        """Return every living particle at time ``now``.

        Finished emissions that neither loop nor persist are released.
        """
        particles: List[Particle] = []
        for emission in self._emissions:
            if not emission.allocated:
                continue
            config = emission.config
            passed = now - emission.start_time
            last_emit_duration, last_death_duration, emission_interval = self._timing(emission)

            max_emitted = max(int(passed / emission_interval), 0)
            max_emitted = min(max_emitted, config.number_of_particles)

            if self._finished(emission, passed, last_death_duration):
                emission.allocated = False
                continue

            rng = random.Random(config.seed)
            kinds = tuple(config.kind_pool)
            images = tuple(config.image_pool)

            for j in range(max_emitted):
                emission_time = j * emission_interval
                if passed < emission_time:
                    continue

                if len(kinds) <= 1:
                    kind = ParticleKind(kinds[0]) if kinds else ParticleKind.RECTANGLE
                else:
                    kind = ParticleKind(kinds[rng.randint(0, len(kinds) - 1)])

                life_time = float(config.life_time.sample(rng, 0.0))
                age = passed - emission_time
                if config.loop:
                    age = math.fmod(age, last_emit_duration)
                t = age / life_time if life_time else 0.0

                origin = _add(emission.pos, config.start_position.sample(rng, t))
                pivot = config.pivot.sample(rng, t)
                velocity = config.velocity.sample(rng, t)
                acceleration = config.acceleration.sample(rng, t)
                velocity = _add(velocity, _scale(acceleration, age))
                position = _add(origin, _scale(velocity, age))

                rotation = float(config.rotation.sample(rng, t))
                rotation += float(config.rotational_acceleration.sample(rng, t)) * age
                color = config.color.sample(rng, t)
                size = config.size.sample(rng, t)

                # Every property is sampled before the death check so the
                # random sequence stays the same for later particles.
                if age > life_time:
                    continue

                image = None
                if kind == ParticleKind.IMAGE:
                    if not images:
                        raise ValueError("particle kind is IMAGE but the config has no images")
                    if len(images) == 1:
                        image = images[0]
                    else:
                        image = images[rng.randint(0, len(images) - 1)]

                particles.append(
                    Particle(
                        kind=kind,
                        rotation=rotation,
                        color=tuple(color),
                        position=position,
                        pivot=tuple(pivot),
                        size=tuple(size),
                        index=j,
                        image=image,
                    )
                )
        return particles

    def draw(self, renderer: Renderer) -> int:
        """Draw all living particles with ``renderer``; return how many were drawn."""
        particles = self.compute_particles(self._clock())
        for particle in particles:
            xform = particle.transform()
            if particle.kind == ParticleKind.RECTANGLE:
                renderer.draw_rect(xform, particle.size, particle.color)
            elif particle.kind == ParticleKind.CIRCLE:
                renderer.draw_circle(xform, particle.size, particle.color)
            else:
                renderer.draw_image(particle.image, xform, particle.size, particle.color)
        return len(particles)