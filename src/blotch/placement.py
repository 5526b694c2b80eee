"""
Blotch growth placement engine.

Grows color blotches from a set of seed pixels. Every new pixel takes a
random color, finds the closest-colored pixel in recent history and walks
around that pixel's blotch center at constant distance until it reaches an
open cell. Walks that fail fall back to a random open cell.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional
import logging
import math
import random

from blotch.grid import (
    Color,
    Coordinate,
    GridState,
    Pixel,
    PlacementInvariantError,
    RecencyBuffer,
)
from blotch.open_set import RandomRemovalSet

logger = logging.getLogger(__name__)

# Moore neighborhood, in the order candidates are compared
NEIGHBOR_OFFSETS = (
    (1, 1),
    (0, 1),
    (-1, 1),
    (1, 0),
    (-1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)


@dataclass
class BlotchConfig:
    """Configuration for a single generated image."""

    size: int
    num_centers: int
    num_lookback: int
    start_spread: float
    cont_spread: float
    seed: int

    @classmethod
    def from_dict(cls, config: dict) -> "BlotchConfig":
        """Create config from dictionary (loaded from YAML)."""
        return cls(
            size=config["image"]["size"],
            num_centers=config["centers"].get("count", 20),
            num_lookback=config["growth"].get("lookback", 1000),
            start_spread=float(config["centers"].get("start_spread", 0.5)),
            cont_spread=float(config["growth"].get("cont_spread", 0.1)),
            seed=config.get("seed", 0),
        )


@dataclass
class PlacementStats:
    """Counters collected while generating an image."""

    seeded: int = 0
    grown: int = 0
    fallbacks: int = 0
    walk_steps: int = 0

    @property
    def placed(self) -> int:
        return self.seeded + self.grown + self.fallbacks


@dataclass
class WalkResult:
    """Outcome of a boundary walk."""

    target: Optional[Coordinate]  # None means fall back to random placement
    steps: int


# ============================================================================
# Search helpers
# ============================================================================

def color_distance_sq(a: Color, b: Color) -> int:
    """Sum of squared per-channel differences."""
    return sum((ca - cb) ** 2 for ca, cb in zip(a, b))


def find_nearest(candidates: Iterable[Pixel], color: Color) -> Optional[Pixel]:
    """
    Pixel whose color is closest to ``color``.

    Ties go to the earliest candidate, i.e. the most recent pixel when
    scanning a recency buffer front to back.
    """
    return min(candidates, key=lambda pixel: color_distance_sq(color, pixel.color), default=None)


def boundary_walk(
    nearest: Pixel,
    size: int,
    is_filled: Callable[[Coordinate], bool],
) -> WalkResult:
    """
    Walk around ``nearest.center`` at constant distance looking for an open cell.

    Starting at ``nearest.loc``, each step moves to the Moore neighbor (other
    than the previous cell) whose squared distance to the center is closest to
    the starting squared distance. The walk aborts when it returns to the
    start, leaves the grid, or takes more than ``8 * radius`` steps.

    Args:
        nearest: Reference pixel
        size: Grid side length
        is_filled: Occupancy test for in-bounds coordinates

    Returns:
        WalkResult with the open target cell, or ``target=None`` on abort
    """
    cx, cy = nearest.center

    def dist(x: int, y: int) -> float:
        return float((x - cx) ** 2 + (y - cy) ** 2)

    start = nearest.loc
    radius = dist(*start)
    last = cur = start
    steps = 0

    while True:
        steps += 1
        candidates = [(cur[0] + dx, cur[1] + dy) for dx, dy in NEIGHBOR_OFFSETS]
        nxt = min(
            (n for n in candidates if n != last),
            key=lambda n: abs(dist(*n) - radius),
        )

        if (
            nxt == start
            or not 0 <= nxt[0] < size
            or not 0 <= nxt[1] < size
            or steps > 8 * radius
        ):
            return WalkResult(target=None, steps=steps)

        if not is_filled(nxt):
            return WalkResult(target=nxt, steps=steps)

        last, cur = cur, nxt


def jitter_center(rng: random.Random, anchor: Coordinate, width: int, size: int) -> Coordinate:
    """Uniform integer per axis within ``width`` of ``anchor``, clamped to the grid."""
    return tuple(
        rng.randint(max(0, a - width), min(a + width, size - 1))
        for a in anchor
    )


# ============================================================================
# BlotchPlacer
# ============================================================================

class BlotchPlacer:
    """
    Generate a filled grid of blotch pixels.

    The generator is deterministic for a given config: all randomness comes
    from one ``random.Random`` seeded with ``config.seed`` and drawn in a
    fixed order.
    """

    def __init__(self, config: BlotchConfig):
        self.config = config
        self.rng = random.Random(config.seed)
        self.grid = GridState(config.size)
        self.open_locs = RandomRemovalSet(self.grid.all_coordinates())
        self.lookback = RecencyBuffer(config.num_lookback)
        self.stats = PlacementStats()
        self.iteration = 0

        logger.info(
            f"Initialized BlotchPlacer: size={config.size}, centers={config.num_centers}, "
            f"lookback={config.num_lookback}, seed={config.seed}"
        )

    @property
    def total(self) -> int:
        return self.config.size * self.config.size

    def is_done(self) -> bool:
        return self.iteration >= self.total

    def generate(self) -> GridState:
        """
        Run every remaining iteration.

        Returns:
            The completed grid
        """
        logger.info(f"Generating {self.total} pixels...")

        progress_every = max(1, self.total // 10)
        while not self.is_done():
            self.place_next()
            if self.iteration % progress_every == 0:
                logger.info(
                    f"Placed {self.iteration}/{self.total} pixels "
                    f"({100 * self.iteration // self.total}%)"
                )

        logger.info(
            f"Generation complete: seeded={self.stats.seeded}, grown={self.stats.grown}, "
            f"fallbacks={self.stats.fallbacks}, walk_steps={self.stats.walk_steps}"
        )
        return self.grid

    def place_next(self) -> Pixel:
        """
        Perform one placement iteration.

        Returns:
            The committed pixel
        """
        if self.is_done():
            raise PlacementInvariantError("All pixels have already been placed")

        i = self.iteration
        color = (self.rng.randint(0, 255), self.rng.randint(0, 255), self.rng.randint(0, 255))

        if i < self.config.num_centers:
            pixel = self._place_random(color)
            self.stats.seeded += 1
        else:
            pixel = self._grow(color)

        self.iteration += 1
        return pixel

    def _grow(self, color: Color) -> Pixel:
        nearest = find_nearest(self.lookback, color)
        if nearest is None:
            logger.debug(f"No history to grow from at iteration {self.iteration}")
            self.stats.fallbacks += 1
            return self._place_random(color)

        walk = boundary_walk(nearest, self.config.size, self.grid.is_filled)
        self.stats.walk_steps += walk.steps

        if walk.target is None:
            logger.debug(
                f"Walk from {nearest.loc} around {nearest.center} aborted after "
                f"{walk.steps} steps, placing randomly"
            )
            self.stats.fallbacks += 1
            return self._place_random(color)

        color_dist = math.sqrt(color_distance_sq(color, nearest.color))
        width = max(1, int(color_dist * self.config.cont_spread))
        center = jitter_center(self.rng, nearest.center, width, self.config.size)

        pixel = Pixel(color=color, loc=walk.target, center=center)
        self.grid.place(pixel)
        if not self.open_locs.remove(walk.target):
            raise PlacementInvariantError(f"Open cell {walk.target} missing from open set")
        self.lookback.push(pixel)

        self.stats.grown += 1
        return pixel

    def _place_random(self, color: Color) -> Pixel:
        loc = self.open_locs.remove_random(self.rng)
        if loc is None:
            raise PlacementInvariantError("No open cells left for random placement")

        width = int(self.config.size * self.config.start_spread)
        center = jitter_center(self.rng, loc, width, self.config.size)

        pixel = Pixel(color=color, loc=loc, center=center)
        self.grid.place(pixel)
        self.lookback.push(pixel)
        return pixel
