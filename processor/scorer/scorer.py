"""
Criterion Scorer - Turn retrieved reviews into one numeric criterion value.

Asks the LLM to place an item on the scoring scale of a criterion
definition, using the item's most relevant reviews as evidence.
"""
import json
import math
from typing import Optional, Sequence

from loguru import logger

from config import settings
from llm import get_client, LLMClient
from prompts import PromptLoader
from ..models import ContextSnippet
from ..output_parser import extract_json
from .models import CriterionScore


class ScoringError(Exception):
    """Raised when the LLM call fails or its reply holds no usable score."""
    pass


class CriterionScorer:
    """
    Scores one item against a criterion definition.
    
    Calls are blocking; the scoring pipeline runs them in worker threads.
    A reply without a finite numeric score raises ScoringError instead of
    defaulting to 0, so "could not score" never looks like a real zero.
    """
    
    def __init__(
        self,
        client: Optional[LLMClient] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        """
        Initialize scorer.
        
        Args:
            client: LLM client instance (built from settings if not provided)
            temperature: Sampling temperature (default: settings.SCORER_TEMPERATURE)
            max_tokens: Reply token cap (default: settings.SCORER_MAX_TOKENS)
            prompt_loader: Prompt source (default: bundled prompts)
        """
        self.client = client or get_client()
        self.temperature = settings.SCORER_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or settings.SCORER_MAX_TOKENS
        self.prompt_loader = prompt_loader or PromptLoader()
    
    def build_prompt(self, criteria_definition: str, snippets: Sequence[ContextSnippet]) -> str:
        reviews = json.dumps(
            [s.to_prompt_dict() for s in snippets],
            ensure_ascii=False,
            indent=2,
        )
        return self.prompt_loader.format(
            "criterion_scoring",
            criteria_definition=criteria_definition,
            reviews=reviews,
        )
    
    def score(self, criteria_definition: str, snippets: Sequence[ContextSnippet]) -> float:
        """
        Score one item.
        
        Args:
            criteria_definition: Natural-language definition with its scoring scale
            snippets: Reviews of the item, most relevant first
            
        Returns:
            The score
            
        Raises:
            ScoringError: LLM failure or no parseable score in the reply
        """
        return self.score_detailed(criteria_definition, snippets).score
    
    def score_detailed(
        self,
        criteria_definition: str,
        snippets: Sequence[ContextSnippet],
    ) -> CriterionScore:
        """Like score(), but also returns the raw reply."""
        prompt = self.build_prompt(criteria_definition, snippets)
        
        try:
            response = self.client.generate(
                prompt=prompt,
                system=self.prompt_loader.get("criterion_scoring_system"),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            raise ScoringError(f"LLM error: {e}") from e
        
        raw_output = response.content
        return CriterionScore(score=self._parse_score(raw_output), raw_output=raw_output)
    
    def _parse_score(self, raw_output: str) -> float:
        """
        Read the score from a reply.
        
        Accepts {"score": <number>} (fenced or not) or a bare number.
        
        Raises:
            ScoringError: If no finite number can be read
        """
        text = (raw_output or "").strip()
        
        try:
            value = extract_json(text).get("score")
        except json.JSONDecodeError:
            # Some models answer with just the number
            value = text
        
        if value is None or isinstance(value, bool):
            logger.debug(f"Raw scorer output: {raw_output}")
            raise ScoringError(f"No score in reply: {text[:100]!r}")
        
        try:
            score = float(value)
        except (TypeError, ValueError):
            logger.debug(f"Raw scorer output: {raw_output}")
            raise ScoringError(f"Score is not a number: {str(value)[:100]!r}") from None
        
        if not math.isfinite(score):
            raise ScoringError(f"Score is not finite: {score}")
        
        return score
