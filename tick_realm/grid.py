"""Grid - the realm's 2D array of ownable parcels."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Iterator

from tick_realm.biomes import BIOMES, CASTLE, EMPTY, get_biome, is_biome
from tick_realm.catalog import BUILDINGS, castle_upgrade_cost
from tick_realm.types import RESOURCE_KINDS, InvalidPersistedState, Rejection

_DIRS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class Parcel:
    x: int
    y: int
    owned: bool = False
    biome: str = EMPTY
    level: int | None = None
    upgrade_cost: dict[str, float] | None = None
    building: str | None = None


class Grid:
    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self._width = width
        self._height = height
        self._rows: list[list[Parcel]] = [
            [Parcel(x, y) for x in range(width)] for y in range(height)
        ]

    @classmethod
    def create(cls, width: int, height: int) -> Grid:
        """New grid with only the castle seed owned, at the centre."""
        grid = cls(width, height)
        seed = grid.at(width // 2, height // 2)
        seed.owned = True
        seed.biome = CASTLE
        seed.level = 1
        seed.upgrade_cost = castle_upgrade_cost(1)
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def center(self) -> tuple[int, int]:
        return self._width // 2, self._height // 2

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise ValueError(
                f"({x}, {y}) out of bounds for {self._width}x{self._height} grid"
            )

    def at(self, x: int, y: int) -> Parcel:
        self._check_bounds(x, y)
        return self._rows[y][x]

    def neighbors(self, x: int, y: int) -> list[tuple[int, int]]:
        result: list[tuple[int, int]] = []
        for dx, dy in _DIRS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append((nx, ny))
        return result

    def is_adjacent_to_owned(self, x: int, y: int) -> bool:
        return any(self._rows[ny][nx].owned for nx, ny in self.neighbors(x, y))

    def same_biome_neighbours(self, x: int, y: int) -> int:
        """Owned 4-neighbours sharing the parcel's biome."""
        biome = self.at(x, y).biome
        count = 0
        for nx, ny in self.neighbors(x, y):
            other = self._rows[ny][nx]
            if other.owned and other.biome == biome:
                count += 1
        return count

    def parcels(self) -> Iterator[Parcel]:
        for row in self._rows:
            yield from row

    def owned_parcels(self) -> Iterator[Parcel]:
        for parcel in self.parcels():
            if parcel.owned:
                yield parcel

    def owned_count(self) -> int:
        return sum(1 for _ in self.owned_parcels())

    def count_biome(self, biome: str) -> int:
        return sum(1 for p in self.owned_parcels() if p.biome == biome)

    def castle(self) -> Parcel | None:
        for parcel in self.owned_parcels():
            if parcel.biome == CASTLE:
                return parcel
        return None

    def castle_level(self) -> int:
        castle = self.castle()
        if castle is None or castle.level is None:
            return 1
        return castle.level

    def acquire(self, x: int, y: int, biome: str) -> Rejection | None:
        """Take ownership of (x, y) with *biome*. Returns None on success."""
        if not self.in_bounds(x, y):
            return Rejection.OUT_OF_BOUNDS
        if not is_biome(biome) or biome == EMPTY:
            return Rejection.INVALID_BIOME
        parcel = self._rows[y][x]
        if parcel.owned:
            return Rejection.ALREADY_OWNED
        if not self.is_adjacent_to_owned(x, y):
            return Rejection.NOT_ADJACENT
        defn = get_biome(biome)
        if defn.unique and self.count_biome(biome) > 0:
            return Rejection.UNIQUE_BIOME_TAKEN

        parcel.owned = True
        parcel.biome = biome
        if defn.upgradeable:
            parcel.level = 1
            parcel.upgrade_cost = castle_upgrade_cost(1) if biome == CASTLE else None
        return None

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        """Serialize owned parcels; unowned parcels are implicit."""
        parcels: list[dict[str, Any]] = []
        for p in self.owned_parcels():
            entry: dict[str, Any] = {"x": p.x, "y": p.y, "biome": p.biome}
            if p.level is not None:
                entry["level"] = p.level
            if p.upgrade_cost is not None:
                entry["upgrade_cost"] = dict(p.upgrade_cost)
            if p.building is not None:
                entry["building"] = p.building
            parcels.append(entry)
        return {"width": self._width, "height": self._height, "parcels": parcels}

    @classmethod
    def from_snapshot(cls, data: dict[str, Any], width: int, height: int) -> Grid:
        """Rebuild a grid, validating shape and invariants.

        Raises InvalidPersistedState on any mismatch.
        """
        try:
            if data["width"] != width or data["height"] != height:
                raise InvalidPersistedState(
                    f"grid is {data['width']}x{data['height']}, expected {width}x{height}"
                )
            grid = cls(width, height)
            for entry in data["parcels"]:
                x, y, biome = entry["x"], entry["y"], entry["biome"]
                if any(isinstance(v, bool) or not isinstance(v, int) for v in (x, y)):
                    raise InvalidPersistedState(
                        f"parcel coordinates ({x!r}, {y!r}) must be integers"
                    )
                if not grid.in_bounds(x, y):
                    raise InvalidPersistedState(f"parcel ({x}, {y}) out of bounds")
                if not is_biome(biome) or biome == EMPTY:
                    raise InvalidPersistedState(f"owned parcel ({x}, {y}) has biome {biome!r}")
                parcel = grid._rows[y][x]
                if parcel.owned:
                    raise InvalidPersistedState(f"duplicate parcel ({x}, {y})")
                parcel.owned = True
                parcel.biome = biome
                parcel.level = _parcel_level(entry.get("level"), biome, x, y)
                parcel.upgrade_cost = _upgrade_cost(entry.get("upgrade_cost"), x, y)
                parcel.building = _building(entry.get("building"), biome, x, y)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidPersistedState(f"malformed grid: {exc}") from exc
        grid.validate()
        return grid

    def validate(self) -> None:
        """Check grid invariants. Raises InvalidPersistedState."""
        cx, cy = self.center
        seed = self._rows[cy][cx]
        if not seed.owned or seed.biome != CASTLE:
            raise InvalidPersistedState("castle missing from grid centre")
        for name, defn in BIOMES.items():
            if defn.unique and self.count_biome(name) > 1:
                raise InvalidPersistedState(f"unique biome {name!r} placed more than once")
        castle_max = get_biome(CASTLE).max_level
        if seed.level is None or not 1 <= seed.level <= castle_max:
            raise InvalidPersistedState(f"castle level {seed.level!r} out of range")
        if seed.upgrade_cost != castle_upgrade_cost(seed.level):
            raise InvalidPersistedState(
                f"castle upgrade_cost does not match level {seed.level}"
            )
        for parcel in self.owned_parcels():
            if parcel is not seed and parcel.upgrade_cost is not None:
                raise InvalidPersistedState(
                    f"parcel ({parcel.x}, {parcel.y}) has an upgrade_cost"
                )
        # Every owned parcel must be connected to the castle through owned parcels.
        seen = {(cx, cy)}
        stack = [(cx, cy)]
        while stack:
            x, y = stack.pop()
            for nx, ny in self.neighbors(x, y):
                if (nx, ny) not in seen and self._rows[ny][nx].owned:
                    seen.add((nx, ny))
                    stack.append((nx, ny))
        if len(seen) != self.owned_count():
            raise InvalidPersistedState("owned parcels are not connected to the castle")


def _parcel_level(level: Any, biome: str, x: int, y: int) -> int | None:
    if level is None:
        return None
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidPersistedState(f"parcel ({x}, {y}) level must be an integer")
    if not get_biome(biome).upgradeable:
        raise InvalidPersistedState(f"parcel ({x}, {y}) of biome {biome!r} has a level")
    return level


def _upgrade_cost(cost: Any, x: int, y: int) -> dict[str, float] | None:
    if cost is None:
        return None
    if not isinstance(cost, dict):
        raise InvalidPersistedState(f"parcel ({x}, {y}) upgrade_cost must be a dict")
    for name, amount in cost.items():
        if name not in RESOURCE_KINDS:
            raise InvalidPersistedState(f"parcel ({x}, {y}) upgrade_cost names {name!r}")
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) or not amount >= 0:
            raise InvalidPersistedState(f"parcel ({x}, {y}) upgrade_cost.{name} is invalid")
    return dict(cost)


def _building(building: Any, biome: str, x: int, y: int) -> str | None:
    if building is None:
        return None
    if building not in BUILDINGS or not get_biome(biome).supports_buildings:
        raise InvalidPersistedState(f"parcel ({x}, {y}) cannot hold building {building!r}")
    return building


def create_initial_grid(width: int, height: int) -> Grid:
    return Grid.create(width, height)


def acquirable_biomes(grid: Grid) -> list[str]:
    """Biomes a new parcel may receive, in catalog order."""
    return [
        name
        for name, defn in BIOMES.items()
        if name != EMPTY and not (defn.unique and grid.count_biome(name) > 0)
    ]


def random_biome(grid: Grid, rng: random.Random) -> str:
    """Uniform pick over acquirable biomes."""
    choices = acquirable_biomes(grid)
    return choices[rng.randrange(len(choices))]
