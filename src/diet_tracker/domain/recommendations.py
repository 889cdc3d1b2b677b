"""Recommendation domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Recommendations:
    """Advice lines grouped by kind."""

    general: list[str] = field(default_factory=list)
    dietary: list[str] = field(default_factory=list)
    exercise: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ConditionLabel:
    """Display label for a health condition tag."""

    value: str
    label: str
