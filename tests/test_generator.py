import json

import pytest

from conftest import FakeLLMClient
from processor import CriterionGenerator, CriterionGenerationError, to_field_key


VALID_REPLY = json.dumps({
    "criteriaName": "Supply Risk",
    "criteriaDefinition": "Scale 1-5: 5 means the item is hard to source.",
    "dataSources": ["reviews", "reviews"],
})


def test_generate_valid_reply():
    client = FakeLLMClient(VALID_REPLY)
    generator = CriterionGenerator(client=client, retry_delay=0)

    result = generator.generate("How hard is it to restock each item?")

    assert result.criteria_name == "Supply Risk"
    assert result.field_key == "supplyRisk"
    assert result.data_sources == ["reviews"]
    assert "How hard is it to restock each item?" in client.prompts[0]
    assert result.to_dict() == {
        "criteriaName": "Supply Risk",
        "criteriaDefinition": "Scale 1-5: 5 means the item is hard to source.",
        "dataSources": ["reviews"],
    }

    definition = result.to_definition()
    assert definition.field_key == "supplyRisk"
    assert definition.name == "Supply Risk"


def test_invalid_reply_is_repaired_on_retry():
    client = FakeLLMClient(["Sure! Here is a criterion: Supply Risk", VALID_REPLY])
    generator = CriterionGenerator(client=client, max_retries=3, retry_delay=0)

    result = generator.generate("restock difficulty")

    assert result.field_key == "supplyRisk"
    assert len(client.prompts) == 2
    # Second attempt repairs the previous reply
    assert "Sure! Here is a criterion" in client.prompts[1]


@pytest.mark.parametrize("reply", [
    json.dumps({"criteriaName": "Risk", "dataSources": ["reviews"]}),
    json.dumps({"criteriaName": "Risk", "criteriaDefinition": "d", "dataSources": ["sales"]}),
    json.dumps({"criteriaName": "", "criteriaDefinition": "d", "dataSources": []}),
    "not json",
])
def test_incomplete_reply_fails_after_retries(reply):
    client = FakeLLMClient(reply)
    generator = CriterionGenerator(client=client, max_retries=2, retry_delay=0)

    with pytest.raises(CriterionGenerationError):
        generator.generate("restock difficulty")
    assert len(client.prompts) == 2


def test_llm_error_fails_after_retries():
    generator = CriterionGenerator(client=FakeLLMClient(error=RuntimeError("down")), max_retries=2, retry_delay=0)

    with pytest.raises(CriterionGenerationError, match="down"):
        generator.generate("restock difficulty")


def test_empty_prompt_is_rejected():
    client = FakeLLMClient(VALID_REPLY)

    with pytest.raises(ValueError):
        CriterionGenerator(client=client).generate("   ")
    assert client.prompts == []


@pytest.mark.parametrize("name, key", [
    ("Supply Risk", "supplyRisk"),
    ("Criticality", "criticality"),
    ("lead time (days)", "leadtimedays"),
    ("  ", ""),
])
def test_to_field_key(name, key):
    assert to_field_key(name) == key
