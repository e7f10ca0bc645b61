"""
Data models for the Scorer module.
"""
from dataclasses import dataclass


@dataclass
class CriterionScore:
    """A parsed score together with the reply it came from."""
    score: float
    raw_output: str = ""
    
    def to_dict(self) -> dict:
        return {"score": self.score}
