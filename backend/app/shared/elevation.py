"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from typing import Optional, Sequence, Tuple


def calculate_elevation_changes(
    elevations: Sequence[Optional[float]]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    A step only counts when both of its ends have a known elevation.

    Args:
        elevations: Elevation values in meters, None where unknown

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0

    for i in range(1, len(elevations)):
        previous = elevations[i - 1]
        current = elevations[i]
        if previous is None or current is None:
            continue

        diff = current - previous
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)

    return gain, loss

