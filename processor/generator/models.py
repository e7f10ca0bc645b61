"""
Data models for the criterion Generator module.
"""
from dataclasses import dataclass, field

from ..models import CriterionDefinition, to_field_key


@dataclass
class GeneratedCriterion:
    """A criterion proposed by the LLM. Every field is always populated."""
    criteria_name: str
    criteria_definition: str
    data_sources: list[str] = field(default_factory=list)
    raw_output: str = ""
    
    @property
    def field_key(self) -> str:
        return to_field_key(self.criteria_name)
    
    def to_definition(self) -> CriterionDefinition:
        """The definition the scoring pipeline consumes."""
        return CriterionDefinition(
            field_key=self.field_key,
            definition=self.criteria_definition,
            name=self.criteria_name,
            data_sources=list(self.data_sources),
        )
    
    def to_dict(self) -> dict:
        return {
            "criteriaName": self.criteria_name,
            "criteriaDefinition": self.criteria_definition,
            "dataSources": self.data_sources,
        }
