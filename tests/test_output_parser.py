import json

import pytest

from processor import extract_json


def test_plain_object():
    assert extract_json('{"score": 3}') == {"score": 3}


def test_fenced_json_with_prose():
    raw = 'Here you go:\n```json\n{"criteriaName": "Criticality", "dataSources": ["reviews",]}\n```\nThanks'

    assert extract_json(raw) == {"criteriaName": "Criticality", "dataSources": ["reviews"]}


def test_object_inside_prose_without_fence():
    assert extract_json('The answer is {"score": 4.5}.') == {"score": 4.5}


@pytest.mark.parametrize("raw", ["", "   ", "not json at all", "[1, 2, 3]"])
def test_unparseable_replies_raise(raw):
    with pytest.raises(json.JSONDecodeError):
        extract_json(raw)
