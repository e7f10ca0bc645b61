"""
Criterion Generator - Draft a new criterion from a free-text request.

Turns a user's description of what matters ("how hard is this item to
replace?") into a named criterion with a numeric scoring scale and the data
sources it can be scored from.
"""
import json
import time
from typing import Optional

from loguru import logger

from config import settings
from constants import DataSource
from llm import get_client, LLMClient
from prompts import PromptLoader
from ..output_parser import extract_json
from .models import GeneratedCriterion


class CriterionGenerationError(Exception):
    """Raised when no complete criterion could be generated."""
    pass


class InvalidCriterionReply(ValueError):
    """A reply that parsed as JSON but is missing fields or uses unknown values."""
    pass


class CriterionGenerator:
    """
    Generates criterion definitions with the LLM.
    
    The result is all-or-nothing: either every field is present and valid,
    or CriterionGenerationError is raised. Invalid replies are retried with
    the fix_json prompt.
    """
    
    def __init__(
        self,
        client: Optional[LLMClient] = None,
        max_retries: Optional[int] = None,
        retry_delay: float = 2.0,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        """
        Initialize generator.
        
        Args:
            client: LLM client instance (built from settings if not provided)
            max_retries: Maximum number of attempts (default: settings.GENERATOR_MAX_RETRIES)
            retry_delay: Delay in seconds between attempts
            prompt_loader: Prompt source (default: bundled prompts)
        """
        self.client = client or get_client()
        self.max_retries = max_retries or settings.GENERATOR_MAX_RETRIES
        self.retry_delay = retry_delay
        self.prompt_loader = prompt_loader or PromptLoader()
    
    def generate(self, user_prompt: str) -> GeneratedCriterion:
        """
        Generate a criterion with retry mechanism.
        
        Args:
            user_prompt: Free-text description of the desired criterion
            
        Returns:
            GeneratedCriterion with name, definition and data sources
            
        Raises:
            ValueError: If user_prompt is empty
            CriterionGenerationError: If generation fails after all retries
        """
        if not user_prompt or not user_prompt.strip():
            raise ValueError("Prompt is required to generate a criterion")
        
        allowed_sources = ", ".join(f'"{s.value}"' for s in DataSource)
        prompt = self.prompt_loader.format(
            "criterion_generation",
            user_prompt=user_prompt.strip(),
            allowed_sources=allowed_sources,
        )
        system = self.prompt_loader.get("criterion_generation_system")
        
        task = f"Define an inventory criterion for: {user_prompt.strip()[:200]}"
        
        reply = None
        error = None
        for attempt in range(1, self.max_retries + 1):
            if reply is None:
                request = prompt
            else:
                # Ask the model to repair its last reply rather than start over
                request = self.prompt_loader.format(
                    "fix_json",
                    original_task=f"{task}\n\nRequired format:\n{prompt}",
                    invalid_response=reply,
                    error_message=str(error),
                )
            
            try:
                reply = self.client.generate(
                    prompt=request,
                    system=system,
                    max_tokens=settings.GENERATOR_MAX_TOKENS,
                    temperature=settings.GENERATOR_TEMPERATURE,
                ).content
                result = self._parse_response(reply)
            except (json.JSONDecodeError, InvalidCriterionReply) as e:
                error = e
                logger.warning(f"Unusable criterion reply ({attempt}/{self.max_retries}): {e}")
                logger.debug(f"Reply was: {reply[:200]}")
            except Exception as e:
                error = e
                logger.error(f"LLM call failed in criterion generator ({attempt}/{self.max_retries}): {e}")
            else:
                logger.info(f"Generated criterion '{result.criteria_name}' ({result.field_key})")
                return result
            
            if attempt < self.max_retries:
                time.sleep(self.retry_delay)
        
        message = f"No valid criterion after {self.max_retries} attempts: {error}"
        logger.error(message)
        raise CriterionGenerationError(message)
    
    def _parse_response(self, raw_output: str) -> GeneratedCriterion:
        """
        Parse and validate the LLM reply.
        
        Raises:
            json.JSONDecodeError: Reply is not JSON
            InvalidCriterionReply: A field is missing, empty or out of range
        """
        data = extract_json(raw_output)
        
        name = data.get("criteriaName")
        definition = data.get("criteriaDefinition")
        sources = data.get("dataSources")
        
        if not isinstance(name, str) or not name.strip():
            raise InvalidCriterionReply("criteriaName is missing or empty")
        if not isinstance(definition, str) or not definition.strip():
            raise InvalidCriterionReply("criteriaDefinition is missing or empty")
        if not isinstance(sources, list):
            raise InvalidCriterionReply("dataSources must be a list")
        
        allowed = {s.value for s in DataSource}
        unknown = [s for s in sources if s not in allowed]
        if unknown:
            raise InvalidCriterionReply(f"Unknown data sources {unknown}; allowed: {sorted(allowed)}")
        
        result = GeneratedCriterion(
            criteria_name=name.strip(),
            criteria_definition=definition.strip(),
            data_sources=list(dict.fromkeys(sources)),
            raw_output=raw_output,
        )
        if not result.field_key:
            raise InvalidCriterionReply(f"criteriaName {name!r} yields an empty field key")
        return result
