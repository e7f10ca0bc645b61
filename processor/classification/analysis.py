"""
Multi-criteria ABC analysis.

Normalize each criterion to [0, 1], combine the criteria with per-criterion
weights into one score per item, rank items by that score and split them
into A/B/C by cumulative share of the total. All functions here are pure:
inputs are never mutated and the same input always gives the same output.
"""
from typing import Iterable, Mapping, Optional, Sequence

from constants import InventoryClass, Trend
from .config import THRESHOLD_A, THRESHOLD_B, validate_thresholds
from .models import InventoryItem, NormalizedItem, ScoredItem, ClassificationOutcome


class InvalidCriteriaError(ValueError):
    """Raised when the criteria set or weights cannot be used for classification."""
    pass


def _check_criteria(criteria: Sequence[str]) -> list[str]:
    criteria = list(dict.fromkeys(criteria))
    if not criteria:
        raise InvalidCriteriaError("At least one criterion is required for classification")
    return criteria


def default_weights(criteria: Sequence[str]) -> dict[str, float]:
    """Equal weights, 1/|criteria| each."""
    criteria = _check_criteria(criteria)
    weight = 1 / len(criteria)
    return {c: weight for c in criteria}


def normalize_data(
    items: Sequence[InventoryItem],
    criteria: Sequence[str],
) -> list[NormalizedItem]:
    """
    Min-max normalize every criterion across all items.
    
    Missing values count as 0. A criterion where every item has the same
    value (including a single item) normalizes to 0 for all items.
    
    Returns:
        One NormalizedItem per input item, in input order
    """
    criteria = _check_criteria(criteria)
    
    min_max = {}
    for c in criteria:
        values = [item.criteria.get(c, 0.0) for item in items]
        min_max[c] = (min(values), max(values)) if values else (0.0, 0.0)
    
    normalized_items = []
    for item in items:
        normalized = {}
        for c in criteria:
            lo, hi = min_max[c]
            value = item.criteria.get(c, 0.0)
            normalized[c] = (value - lo) / (hi - lo) if hi != lo else 0.0
        normalized_items.append(NormalizedItem(product_id=item.product_id, normalized=normalized))
    
    return normalized_items


def calculate_weighted_scores(
    items: Sequence[InventoryItem],
    normalized_items: Sequence[NormalizedItem],
    weights: Mapping[str, float],
    criteria: Sequence[str],
) -> list[ScoredItem]:
    """
    Weighted sum of normalized criteria per item.
    
    A criterion without a weight contributes nothing. Weights are not
    rescaled to sum to 1, so scores are only comparable within one run.
    
    Raises:
        InvalidCriteriaError: Empty criteria or a negative weight
    """
    criteria = _check_criteria(criteria)
    negative = {c: w for c, w in weights.items() if w < 0}
    if negative:
        raise InvalidCriteriaError(f"Weights must be non-negative: {negative}")
    
    by_id = {n.product_id: n.normalized for n in normalized_items}
    
    scored = []
    for item in items:
        normalized = by_id.get(item.product_id, {})
        score = sum(normalized.get(c, 0.0) * weights.get(c, 0.0) for c in criteria)
        scored.append(ScoredItem(
            product_id=item.product_id,
            criteria=dict(item.criteria),
            weighted_score=score,
        ))
    
    return scored


def calculate_abc(
    scored_items: Iterable[ScoredItem],
    threshold_a: float = THRESHOLD_A,
    threshold_b: float = THRESHOLD_B,
) -> dict[str, str]:
    """
    Assign A/B/C by cumulative share of the total weighted score.
    
    Items are ranked by score, highest first; ties keep their input order.
    Each item's share is the running total up to and including it divided
    by the overall total: A up to threshold_a, B up to threshold_b, C
    beyond. When the total is not positive there is no meaningful share
    and every item is C.
    
    Returns:
        Mapping of product id -> class label
    """
    validate_thresholds(threshold_a, threshold_b)
    
    ranked = sorted(scored_items, key=lambda s: s.weighted_score, reverse=True)
    total_score = sum(s.weighted_score for s in ranked)
    
    if total_score <= 0:
        return {s.product_id: InventoryClass.C.value for s in ranked}
    
    classifications = {}
    cumulative = 0.0
    for s in ranked:
        cumulative += s.weighted_score
        percentage = cumulative / total_score
        if percentage <= threshold_a:
            label = InventoryClass.A
        elif percentage <= threshold_b:
            label = InventoryClass.B
        else:
            label = InventoryClass.C
        classifications[s.product_id] = label.value
    
    return classifications


def compare_results(
    previous: Mapping[str, str],
    current: Mapping[str, str],
) -> dict[str, str]:
    """
    Per-item movement between two classifications.
    
    `up` means the item moved toward A, `down` toward C. Items missing from
    either side get no entry.
    """
    comparison = {}
    for product_id, current_class in current.items():
        previous_class = previous.get(product_id)
        if not previous_class or not current_class:
            continue
        
        if previous_class == current_class:
            comparison[product_id] = Trend.SAME.value
        elif current_class < previous_class:
            comparison[product_id] = Trend.UP.value
        else:
            comparison[product_id] = Trend.DOWN.value
    
    return comparison


def classify(
    items: Sequence[InventoryItem],
    criteria: Sequence[str],
    weights: Optional[Mapping[str, float]] = None,
    previous: Optional[Mapping[str, str]] = None,
    threshold_a: float = THRESHOLD_A,
    threshold_b: float = THRESHOLD_B,
) -> ClassificationOutcome:
    """
    Run the full classification path: normalize, weight, classify, compare.
    
    Args:
        items: Items with raw criterion values
        criteria: Criteria to classify on (non-empty)
        weights: Per-criterion weights (default: equal weights)
        previous: Previous classification, for trends
        threshold_a: Cumulative share limit for class A
        threshold_b: Cumulative share limit for class B
    """
    criteria = _check_criteria(criteria)
    if weights is None:
        weights = default_weights(criteria)
    
    normalized = normalize_data(items, criteria)
    scored = calculate_weighted_scores(items, normalized, weights, criteria)
    classes = calculate_abc(scored, threshold_a=threshold_a, threshold_b=threshold_b)
    
    for s in scored:
        s.abc_class = classes.get(s.product_id)
    
    trends = compare_results(previous, classes) if previous else {}
    
    return ClassificationOutcome(items=scored, classes=classes, trends=trends)
