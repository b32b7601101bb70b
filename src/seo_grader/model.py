from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Severity = Literal["critical", "high", "medium", "low"]
Category = Literal["meta", "content", "technical", "readability"]

SEVERITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}
CATEGORY_ORDER = ("meta", "content", "technical", "readability")


class CamelModel(BaseModel):
    """
    Base for every model that leaves the engine.

    Attributes are snake_case in Python; `model_dump(by_alias=True)` emits the
    camelCase names the persistence and UI collaborators expect (wordCount, ruleId, ...).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_record(self) -> dict:
        """JSON-safe camelCase dictionary."""
        return self.model_dump(mode="json", by_alias=True)

GRADE_BANDS = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))


def calculate_grade(percentage: float) -> str:
    """Letter grade with inclusive lower bounds: 90 A, 80 B, 70 C, 60 D, else F."""
    for floor, grade in GRADE_BANDS:
        if percentage >= floor:
            return grade
    return "F"
