"""
Configuration for ABC classification.

Cumulative-share thresholds: an item is A while the running share of the
total weighted score (including the item itself) is at or below
THRESHOLD_A, B up to THRESHOLD_B, and C beyond.
"""

THRESHOLD_A = 0.60
THRESHOLD_B = 0.85


def validate_thresholds(threshold_a: float, threshold_b: float) -> None:
    """Raise ValueError unless 0 < threshold_a <= threshold_b <= 1."""
    if not (0 < threshold_a <= threshold_b <= 1):
        raise ValueError(
            f"Invalid ABC thresholds: A={threshold_a}, B={threshold_b} "
            f"(need 0 < A <= B <= 1)"
        )
