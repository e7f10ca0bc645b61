import pytest

from conftest import FakeLLMClient
from processor import ContextSnippet, CriterionScorer, ScoringError


SNIPPETS = [
    ContextSnippet(product_id="P1", title="Broke fast", message="Failed after a week", rating=1.0),
    ContextSnippet(product_id="P1", title="Hard to find", message="Out of stock everywhere", rating=2.0),
]


def test_score_from_json_reply():
    scorer = CriterionScorer(client=FakeLLMClient('{"score": 4}'))

    assert scorer.score("Criticality from 1 to 5", SNIPPETS) == 4.0


def test_score_from_fenced_reply_and_bare_number():
    assert CriterionScorer(client=FakeLLMClient('```json\n{"score": 2.5}\n```')).score("d", SNIPPETS) == 2.5
    assert CriterionScorer(client=FakeLLMClient("3")).score("d", SNIPPETS) == 3.0


def test_zero_is_a_real_score():
    assert CriterionScorer(client=FakeLLMClient('{"score": 0}')).score("d", SNIPPETS) == 0.0


@pytest.mark.parametrize("reply", ['{"rating": 4}', '{"score": null}', '{"score": "high"}', "no idea", '{"score": true}'])
def test_unusable_reply_raises_instead_of_zero(reply):
    scorer = CriterionScorer(client=FakeLLMClient(reply))

    with pytest.raises(ScoringError):
        scorer.score("d", SNIPPETS)


def test_llm_error_is_wrapped():
    scorer = CriterionScorer(client=FakeLLMClient(error=RuntimeError("rate limited")))

    with pytest.raises(ScoringError, match="rate limited"):
        scorer.score("d", SNIPPETS)


def test_prompt_contains_definition_and_reviews():
    client = FakeLLMClient('{"score": 1}')
    scorer = CriterionScorer(client=client)

    detailed = scorer.score_detailed("Supply risk from 1 to 5", SNIPPETS)

    assert detailed.raw_output == '{"score": 1}'
    prompt = client.prompts[0]
    assert "Supply risk from 1 to 5" in prompt
    assert "Out of stock everywhere" in prompt
    assert '"score": 2.0' in prompt
