import math
import random

import pytest

from minesweep.particle import (
    CONFETTI_LIFE_MIN,
    CONFETTI_LIFE_RANGE,
    CONFETTI_PARTICLE_COUNT,
    CONFETTI_SPEED_MAX,
    CONFETTI_SPEED_MIN,
    CONFETTI_Y_MAX,
    CONFETTI_Y_MIN,
    MINE_PARTICLE_COUNT,
    MINE_PARTICLE_LIFE_MIN,
    MINE_PARTICLE_LIFE_RANGE,
    MINE_PARTICLE_SPEED_MIN,
    MINE_PARTICLE_SPEED_RANGE,
    NORMAL_PARTICLE_COUNT,
    NORMAL_PARTICLE_LIFE_MIN,
    NORMAL_PARTICLE_LIFE_RANGE,
    NORMAL_PARTICLE_SPEED_MIN,
    NORMAL_PARTICLE_SPEED_RANGE,
    RED,
    YELLOW,
    Particle,
    hsl_to_rgb,
    spawn_confetti,
    spawn_particles,
    update_particles,
)


def _spawned(row, col, cell_size, is_mine, **kwargs):
    particles = []
    spawn_particles(particles, row, col, cell_size, is_mine, **kwargs)
    return particles


def _confetti(width, cell_size, rng):
    particles = []
    spawn_confetti(particles, width, cell_size, rng=rng)
    return particles


def test_mine_burst_count_color_and_ranges():
    particles = _spawned(2, 3, 30.0, True, rng=random.Random(1))
    assert len(particles) == MINE_PARTICLE_COUNT
    assert {p.color for p in particles} == {RED}
    speeds = [math.hypot(p.vx, p.vy) for p in particles]
    lives = [p.life for p in particles]
    assert min(speeds) >= MINE_PARTICLE_SPEED_MIN - 1e-6
    assert max(speeds) <= MINE_PARTICLE_SPEED_MIN + MINE_PARTICLE_SPEED_RANGE + 1e-6
    assert min(lives) >= MINE_PARTICLE_LIFE_MIN
    assert max(lives) <= MINE_PARTICLE_LIFE_MIN + MINE_PARTICLE_LIFE_RANGE


def test_normal_burst_count_color_and_ranges():
    particles = _spawned(0, 0, 30.0, False, rng=random.Random(2))
    assert len(particles) == NORMAL_PARTICLE_COUNT
    assert {p.color for p in particles} == {YELLOW}
    speeds = [math.hypot(p.vx, p.vy) for p in particles]
    lives = [p.life for p in particles]
    assert min(speeds) >= NORMAL_PARTICLE_SPEED_MIN - 1e-6
    assert max(speeds) <= NORMAL_PARTICLE_SPEED_MIN + NORMAL_PARTICLE_SPEED_RANGE + 1e-6
    assert min(lives) >= NORMAL_PARTICLE_LIFE_MIN
    assert max(lives) <= NORMAL_PARTICLE_LIFE_MIN + NORMAL_PARTICLE_LIFE_RANGE


def test_burst_shares_one_origin_and_moves_with_column():
    left = _spawned(1, 0, 25.0, False, top_bar_height=0.0, rng=random.Random(3))
    right = _spawned(1, 1, 25.0, False, top_bar_height=0.0, rng=random.Random(3))
    assert len({(p.x, p.y) for p in left}) == 1
    assert right[0].x - left[0].x == pytest.approx(25.0)
    assert right[0].y == left[0].y


def test_top_bar_height_shifts_origin_down():
    plain = _spawned(0, 0, 20.0, True, top_bar_height=0.0, rng=random.Random(4))
    shifted = _spawned(0, 0, 20.0, True, top_bar_height=60.0, rng=random.Random(4))
    assert shifted[0].y - plain[0].y == pytest.approx(60.0)


def test_explicit_color_overrides_default():
    blue = (0, 0, 255, 255)
    particles = _spawned(0, 0, 10.0, True, color=blue, rng=random.Random(5))
    assert {p.color for p in particles} == {blue}


def test_spawn_appends_to_existing_list():
    existing = Particle(0.0, 0.0, 0.0, 0.0, 1.0, RED)
    particles = [existing]
    spawn_particles(particles, 0, 0, 10.0, False, rng=random.Random(6))
    assert particles[0] is existing
    assert len(particles) == NORMAL_PARTICLE_COUNT + 1


def test_confetti_ranges():
    particles = _confetti(8, 48.0, random.Random(7))
    assert len(particles) == CONFETTI_PARTICLE_COUNT
    assert {p.vx for p in particles} == {0.0}
    vys = [p.vy for p in particles]
    ys = [p.y for p in particles]
    xs = [p.x for p in particles]
    lives = [p.life for p in particles]
    assert min(vys) >= CONFETTI_SPEED_MIN
    assert max(vys) <= CONFETTI_SPEED_MAX
    assert min(ys) >= CONFETTI_Y_MIN
    assert max(ys) <= CONFETTI_Y_MAX
    assert min(xs) >= 0.0
    assert max(xs) <= 8 * 48.0
    assert min(lives) >= CONFETTI_LIFE_MIN
    assert max(lives) <= CONFETTI_LIFE_MIN + CONFETTI_LIFE_RANGE
    assert {p.color[3] for p in particles} == {255}


def test_seeded_spawn_is_repeatable():
    first = _confetti(16, 36.0, random.Random(9))
    second = _confetti(16, 36.0, random.Random(9))
    assert first == second


def test_step_moves_by_velocity_times_dt():
    p = Particle(0.0, 0.0, 7.0, -3.0, 5.0, RED)
    assert p.step(1.0) is True
    assert p.x == pytest.approx(7.0)
    assert p.y == pytest.approx(-3.0)
    assert p.life < 5.0


def test_step_reports_death():
    p = Particle(0.0, 0.0, 0.0, 0.0, 0.25, RED)
    assert p.step(0.5) is False
    assert p.life <= 0.0


def test_update_particles_drops_dead_and_keeps_live():
    alive = Particle(0.0, 0.0, 4.0, 0.0, 10.0, RED)
    dying = Particle(0.0, 0.0, 0.0, 0.0, 0.25, YELLOW)
    particles = [dying, alive]
    update_particles(particles, 1.0)
    assert particles == [alive]
    assert alive.x == pytest.approx(4.0)


def test_update_particles_empty_list_stays_empty():
    particles = []
    update_particles(particles, 0.1)
    assert particles == []


def test_hsl_pure_red():
    assert hsl_to_rgb(0.0, 1.0, 0.5) == (255, 0, 0, 255)


@pytest.mark.parametrize("lightness", [0.0, 0.3, 0.6, 1.0])
def test_hsl_zero_saturation_is_gray(lightness):
    r, g, b, a = hsl_to_rgb(0.4, 0.0, lightness)
    assert r == g == b
    assert a == 255


def test_hsl_extremes_black_and_white():
    assert hsl_to_rgb(0.7, 0.5, 0.0)[:3] == (0, 0, 0)
    assert hsl_to_rgb(0.7, 0.5, 1.0)[:3] == (255, 255, 255)


def test_hsl_channels_within_byte_range():
    rng = random.Random(11)
    channels = [
        channel
        for _ in range(50)
        for channel in hsl_to_rgb(rng.random(), rng.random(), rng.random())
    ]
    assert len(channels) == 200
    assert min(channels) >= 0
    assert max(channels) <= 255