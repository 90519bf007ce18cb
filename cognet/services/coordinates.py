"""Marker placement for chain words sharing a base coordinate."""

from typing import Optional


# Ring around the origin: E, W, N, S, NE, NW, SE, SW.
OFFSETS: tuple[tuple[float, float], ...] = (
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
    (0.5, 0.5),
    (-0.5, 0.5),
    (0.5, -0.5),
    (-0.5, -0.5),
)


class CoordinateDeduplicator:
    """Spreads repeated base coordinates around a fixed ring of offsets.

    One instance lives for exactly one chain build. The first claim on a
    coordinate gets it unchanged; every later claim gets the next offset
    in `OFFSETS`, wrapping every eight claims.
    """

    def __init__(self):
        self._usage: dict[tuple[float, float], int] = {}

    def adjust(self, coordinates: Optional[list[float]]) -> Optional[list[float]]:
        if not coordinates or len(coordinates) < 2:
            return coordinates

        lat, lng = coordinates[0], coordinates[1]
        key = (lat, lng)
        previous = self._usage.get(key, 0)
        self._usage[key] = previous + 1

        if previous == 0:
            return list(coordinates)

        d_lat, d_lng = OFFSETS[(previous - 1) % len(OFFSETS)]
        return [lat + d_lat, lng + d_lng, *coordinates[2:]]
