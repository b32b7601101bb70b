from typing import Optional


class SEOGraderError(Exception):
    """Base exception for the grading engine."""


class ValidationError(SEOGraderError, ValueError):
    """
    Raised when analysis input is entirely absent.

    The caller has to supply at least one of html, title or description
    before retrying; this is the only error a host should surface as a hard failure.
    """

    def __init__(self, message: str, field_names: Optional[list] = None):
        super().__init__(message)
        self.field_names = field_names or []


class RuleEvaluationError(SEOGraderError):
    """
    A single rule's check raised. Wrapped and recorded by the analyzer,
    never propagated to the caller.
    """

    def __init__(self, rule_id: str, cause: BaseException):
        super().__init__(f"Rule '{rule_id}' failed: {cause}")
        self.rule_id = rule_id
        self.cause = cause
