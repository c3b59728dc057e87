"""Pattern deduplication with horizontal/vertical mirror reuse."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .errors import PatternStoreOverflowError

TILE_SIZE = 8
PIXELS_PER_TILE = TILE_SIZE * TILE_SIZE

# Name table words reserve bits 0-10 for the pattern index.
PATTERN_INDEX_BITS = 11
MAX_PATTERNS = 1 << PATTERN_INDEX_BITS

Pattern = Tuple[int, ...]


def _orientation(h_flip: bool, v_flip: bool) -> Tuple[int, ...]:
    permutation = []
    for i in range(PIXELS_PER_TILE):
        x = i % TILE_SIZE
        y = i // TILE_SIZE
        if h_flip:
            x = TILE_SIZE - 1 - x
        if v_flip:
            y = TILE_SIZE - 1 - y
        permutation.append(y * TILE_SIZE + x)
    return tuple(permutation)


# Tried in this order, so symmetric tiles are stored without flip flags.
ORIENTATIONS: Tuple[Tuple[bool, bool, Tuple[int, ...]], ...] = tuple(
    (h_flip, v_flip, _orientation(h_flip, v_flip))
    for v_flip, h_flip in ((False, False), (False, True), (True, False), (True, True))
)


def flip_pattern(pattern: Sequence[int], h_flip: bool, v_flip: bool) -> Pattern:
    """Return ``pattern`` mirrored as the VDP would draw it with these flags."""

    permutation = _orientation(h_flip, v_flip)
    return tuple(pattern[permutation[i]] for i in range(PIXELS_PER_TILE))


def match_orientation(pattern: Sequence[int], stored: Sequence[int]) -> Tuple[bool, bool] | None:
    """Return the flip flags under which ``stored`` draws as ``pattern``."""

    for h_flip, v_flip, permutation in ORIENTATIONS:
        if all(pattern[i] == stored[permutation[i]] for i in range(PIXELS_PER_TILE)):
            return h_flip, v_flip
    return None


def resolve_pattern(
    pattern: Sequence[int],
    store: List[Pattern],
    tile: Tuple[int, int] = (0, 0),
) -> Tuple[int, bool, bool]:
    """Find ``pattern`` in ``store`` in any orientation, appending it if missing.

    Returns ``(pattern_id, h_flip, v_flip)``. Stored patterns are searched in
    creation order and the first match wins.
    """

    if len(pattern) != PIXELS_PER_TILE:
        raise ValueError(f"Pattern must have {PIXELS_PER_TILE} entries, got {len(pattern)}")

    for pattern_id, stored in enumerate(store):
        flags = match_orientation(pattern, stored)
        if flags is not None:
            return pattern_id, flags[0], flags[1]

    if len(store) >= MAX_PATTERNS:
        x, y = tile
        raise PatternStoreOverflowError(x, y, f"limit is {MAX_PATTERNS} patterns")
    store.append(tuple(pattern))
    return len(store) - 1, False, False
