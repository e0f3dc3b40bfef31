"""Greedy maximin point selection."""

from letterlight.domain import Point


def select_well_spaced(candidates: list[Point], min_spacing: float) -> list[int]:
    """Select candidates that keep at least `min_spacing` from each other.

    The first candidate is always kept. Each later candidate is kept only if
    it is at least `min_spacing` away from every candidate kept so far,
    which also catches collisions where an ordered walk loops back on itself
    (the bowl of an "O").

    Args:
        candidates: Candidate positions, typically ordered along a stroke
        min_spacing: Minimum allowed centre distance

    Returns:
        Indices of the kept candidates, in input order

    Examples:
        >>> select_well_spaced([Point(0, 0), Point(1, 0), Point(5, 0)], 2.0)
        [0, 2]
    """
    if not candidates:
        return []

    min_spacing_sq = min_spacing * min_spacing
    selected = [0]
    for i in range(1, len(candidates)):
        candidate = candidates[i]
        # Most recent picks are the likeliest neighbours
        for j in reversed(selected):
            existing = candidates[j]
            dx = candidate.x - existing.x
            dy = candidate.y - existing.y
            if dx * dx + dy * dy < min_spacing_sq:
                break
        else:
            selected.append(i)
    return selected
