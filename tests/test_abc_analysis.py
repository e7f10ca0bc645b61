import pytest

from processor.classification import (
    InventoryItem,
    InvalidCriteriaError,
    ScoredItem,
    calculate_abc,
    calculate_weighted_scores,
    classify,
    compare_results,
    default_weights,
    normalize_data,
    validate_thresholds,
)


def _items():
    return [
        InventoryItem("P1", {"usage": 100.0, "leadTime": 2.0}),
        InventoryItem("P2", {"usage": 300.0, "leadTime": 8.0}),
        InventoryItem("P3", {"usage": 200.0, "leadTime": 5.0}),
    ]


def test_normalize_min_is_zero_and_max_is_one():
    normalized = {n.product_id: n.normalized for n in normalize_data(_items(), ["usage", "leadTime"])}

    assert normalized["P1"]["usage"] == 0.0
    assert normalized["P2"]["usage"] == 1.0
    assert normalized["P3"]["usage"] == pytest.approx(0.5)
    assert normalized["P1"]["leadTime"] == 0.0
    assert normalized["P2"]["leadTime"] == 1.0


def test_normalize_constant_criterion_is_zero_for_everyone():
    items = [InventoryItem("P1", {"usage": 7.0}), InventoryItem("P2", {"usage": 7.0})]

    normalized = normalize_data(items, ["usage"])

    assert [n.normalized["usage"] for n in normalized] == [0.0, 0.0]


def test_normalize_treats_missing_value_as_zero():
    items = [InventoryItem("P1", {"usage": 10.0}), InventoryItem("P2", {})]

    normalized = {n.product_id: n.normalized for n in normalize_data(items, ["usage"])}

    assert normalized["P2"]["usage"] == 0.0
    assert normalized["P1"]["usage"] == 1.0


def test_normalize_does_not_mutate_input():
    items = _items()
    before = [dict(i.criteria) for i in items]

    normalize_data(items, ["usage"])

    assert [i.criteria for i in items] == before


def test_scaling_weights_scales_scores_but_keeps_classes():
    items = _items()
    criteria = ["usage", "leadTime"]
    normalized = normalize_data(items, criteria)
    weights = {"usage": 0.7, "leadTime": 0.3}
    scaled = {c: w * 4 for c, w in weights.items()}

    base = calculate_weighted_scores(items, normalized, weights, criteria)
    bigger = calculate_weighted_scores(items, normalized, scaled, criteria)

    for b, s in zip(base, bigger):
        assert s.weighted_score == pytest.approx(b.weighted_score * 4)
    assert calculate_abc(base) == calculate_abc(bigger)


def test_negative_weight_is_rejected():
    items = _items()
    normalized = normalize_data(items, ["usage"])

    with pytest.raises(InvalidCriteriaError):
        calculate_weighted_scores(items, normalized, {"usage": -1.0}, ["usage"])


def test_empty_criteria_is_rejected():
    with pytest.raises(InvalidCriteriaError):
        normalize_data(_items(), [])
    with pytest.raises(InvalidCriteriaError):
        classify(_items(), [])


def test_default_weights_are_equal():
    assert default_weights(["a", "b", "a"]) == {"a": 0.5, "b": 0.5}


def test_abc_on_50_30_20():
    scored = [
        ScoredItem("P1", {}, 50.0),
        ScoredItem("P2", {}, 30.0),
        ScoredItem("P3", {}, 20.0),
    ]

    assert calculate_abc(scored) == {"P1": "A", "P2": "B", "P3": "C"}


def test_abc_boundary_share_is_inclusive():
    # Cumulative shares 0.60 and 0.85 land exactly on the thresholds
    scored = [
        ScoredItem("P1", {}, 60.0),
        ScoredItem("P2", {}, 25.0),
        ScoredItem("P3", {}, 15.0),
    ]

    assert calculate_abc(scored) == {"P1": "A", "P2": "B", "P3": "C"}


def test_abc_is_idempotent():
    scored = [ScoredItem(f"P{i}", {}, float(s)) for i, s in enumerate([5, 40, 12, 12, 31])]

    first = calculate_abc(scored)
    second = calculate_abc(scored)

    assert first == second


def test_abc_zero_total_puts_everything_in_c():
    scored = [ScoredItem("P1", {}, 0.0), ScoredItem("P2", {}, 0.0)]

    assert calculate_abc(scored) == {"P1": "C", "P2": "C"}


def test_abc_empty_input():
    assert calculate_abc([]) == {}


def test_invalid_thresholds():
    with pytest.raises(ValueError):
        validate_thresholds(0.9, 0.5)
    with pytest.raises(ValueError):
        calculate_abc([ScoredItem("P1", {}, 1.0)], threshold_a=0.0, threshold_b=0.5)


def test_compare_results_trend():
    trends = compare_results({"p1": "B"}, {"p1": "A", "p2": "C"})

    assert trends == {"p1": "up"}


def test_compare_results_down_and_same():
    trends = compare_results({"p1": "A", "p2": "B"}, {"p1": "C", "p2": "B"})

    assert trends == {"p1": "down", "p2": "same"}


def test_classify_end_to_end_with_previous():
    outcome = classify(
        _items(),
        ["usage"],
        previous={"P1": "A", "P2": "C"},
    )

    # Scores: P2=1.0, P3=0.5, P1=0.0; P2 alone is 2/3 of the total
    assert outcome.classes == {"P2": "B", "P3": "C", "P1": "C"}
    assert outcome.trends["P2"] == "up"
    assert outcome.trends["P1"] == "down"
    assert "P3" not in outcome.trends

    data = outcome.to_dict()
    assert {i["productId"] for i in data["items"]} == {"P1", "P2", "P3"}
    assert all(i["class"] in ("A", "B", "C") for i in data["items"])


def test_inventory_item_from_dict():
    nested = InventoryItem.from_dict({"productId": "P1", "criteria": {"usage": 3}})
    flat = InventoryItem.from_dict({"product_id": 7, "usage": 2, "active": True, "name": "x"})

    assert nested.criteria == {"usage": 3.0}
    assert flat.product_id == "7"
    assert flat.criteria == {"usage": 2.0}

    with pytest.raises(ValueError):
        InventoryItem.from_dict({"usage": 1})
