"""
Prompt templates for the LLM components.

- criterion_generation_system / criterion_generation: define a new criterion
- criterion_scoring_system / criterion_scoring: score one product against a criterion
- fix_json: ask the model to repair a reply that did not parse
"""

from ._loader import PromptLoader

__all__ = ["PromptLoader"]
