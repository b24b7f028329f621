"""Particle effects: mine explosions, cell pops and victory confetti."""

from __future__ import annotations

import colorsys
import math
import random
from dataclasses import dataclass

Color = tuple[int, int, int, int]

RED: Color = (230, 41, 55, 255)
YELLOW: Color = (253, 249, 0, 255)

TOP_BAR_HEIGHT = 60.0

MINE_PARTICLE_COUNT = 24
NORMAL_PARTICLE_COUNT = 16
CONFETTI_PARTICLE_COUNT = 60

MINE_PARTICLE_SPEED_MIN = 180.0
MINE_PARTICLE_SPEED_RANGE = 80.0
NORMAL_PARTICLE_SPEED_MIN = 80.0
NORMAL_PARTICLE_SPEED_RANGE = 40.0

MINE_PARTICLE_LIFE_MIN = 0.8
MINE_PARTICLE_LIFE_RANGE = 0.4
NORMAL_PARTICLE_LIFE_MIN = 0.5
NORMAL_PARTICLE_LIFE_RANGE = 0.3

CONFETTI_SPEED_MIN = 120.0
CONFETTI_SPEED_MAX = 200.0
CONFETTI_LIFE_MIN = 2.5
CONFETTI_LIFE_RANGE = 1.5
CONFETTI_Y_MIN = -40.0
CONFETTI_Y_MAX = 0.0

PARTICLE_RADIUS = 4.0
CONFETTI_SATURATION = 0.7
CONFETTI_LIGHTNESS = 0.6


@dataclass
class Particle:
    """A moving, fading dot."""

    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: Color

    def step(self, dt: float) -> bool:
        """Advance by ``dt`` seconds; return whether the particle is still alive."""
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.life -= dt
        return self.life > 0.0


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> Color:
    """Convert HSL (all in 0..1) to an opaque RGBA colour with 0..255 channels."""
    r, g, b = colorsys.hls_to_rgb(hue, lightness, saturation)
    return (round(r * 255), round(g * 255), round(b * 255), 255)


def spawn_particles(
    particles: list[Particle],
    row: int,
    col: int,
    cell_size: float,
    is_mine: bool,
    color: Color | None = None,
    top_bar_height: float = TOP_BAR_HEIGHT,
    rng: random.Random | None = None,
) -> None:
    """Add a radial burst of particles centred on a cell."""
    rng = rng or random.Random()
    x = col * cell_size + cell_size / 2.0
    y = row * cell_size + top_bar_height + cell_size / 2.0
    if is_mine:
        count = MINE_PARTICLE_COUNT
        speed_min, speed_range = MINE_PARTICLE_SPEED_MIN, MINE_PARTICLE_SPEED_RANGE
        life_min, life_range = MINE_PARTICLE_LIFE_MIN, MINE_PARTICLE_LIFE_RANGE
        default_color = RED
    else:
        count = NORMAL_PARTICLE_COUNT
        speed_min, speed_range = NORMAL_PARTICLE_SPEED_MIN, NORMAL_PARTICLE_SPEED_RANGE
        life_min, life_range = NORMAL_PARTICLE_LIFE_MIN, NORMAL_PARTICLE_LIFE_RANGE
        default_color = YELLOW
    particle_color = color if color is not None else default_color
    for i in range(count):
        angle = i / count * math.tau
        speed = speed_min + rng.uniform(0.0, speed_range)
        particles.append(
            Particle(
                x,
                y,
                speed * math.cos(angle),
                speed * math.sin(angle),
                life_min + rng.uniform(0.0, life_range),
                particle_color,
            )
        )


def spawn_confetti(
    particles: list[Particle],
    width: int,
    cell_size: float,
    rng: random.Random | None = None,
) -> None:
    """Add confetti falling straight down from just above the board."""
    rng = rng or random.Random()
    width_px = width * cell_size
    for _ in range(CONFETTI_PARTICLE_COUNT):
        x = rng.uniform(0.0, width_px)
        y = rng.uniform(CONFETTI_Y_MIN, CONFETTI_Y_MAX)
        speed = rng.uniform(CONFETTI_SPEED_MIN, CONFETTI_SPEED_MAX)
        color = hsl_to_rgb(rng.uniform(0.0, 1.0), CONFETTI_SATURATION, CONFETTI_LIGHTNESS)
        particles.append(
            Particle(x, y, 0.0, speed, CONFETTI_LIFE_MIN + rng.uniform(0.0, CONFETTI_LIFE_RANGE), color)
        )


def update_particles(particles: list[Particle], dt: float) -> None:
    """Advance every particle in place and drop the ones that have died."""
    particles[:] = [p for p in particles if p.step(dt)]