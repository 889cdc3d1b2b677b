"""Rule-based dietary recommendations."""

import json
from dataclasses import dataclass
from pathlib import Path

from diet_tracker.domain.recommendations import ConditionLabel, Recommendations

DEFAULT_RULES_PATH = (
    Path(__file__).resolve().parents[1] / "data" / "recommendations.json"
)

_KINDS = ("general", "dietary", "exercise", "warnings")


@dataclass(frozen=True)
class AdviceRules:
    """Advice text tables keyed by BMI category, goal and health condition."""

    bmi_categories: dict[str, dict[str, list[str]]]
    fitness_goals: dict[str, dict[str, list[str]]]
    health_conditions: dict[str, dict[str, list[str]]]
    condition_labels: list[ConditionLabel]

    @classmethod
    def load(cls, path: Path = DEFAULT_RULES_PATH) -> "AdviceRules":
        """Load the rule tables from a JSON asset."""
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            bmi_categories=raw.get("bmi_categories", {}),
            fitness_goals=raw.get("fitness_goals", {}),
            health_conditions=raw.get("health_condition_advice", {}),
            condition_labels=[
                ConditionLabel(value=entry["value"], label=entry["label"])
                for entry in raw.get("health_conditions", [])
            ],
        )


@dataclass
class RecommendationEngine:
    """Turns a BMI category, goal and conditions into advice lists."""

    rules: AdviceRules

    def recommend(
        self,
        bmi_category: str | None,
        fitness_goal: str | None,
        health_conditions: list[str] | tuple[str, ...],
    ) -> Recommendations:
        """Concatenate the advice for each input, conditions in stored order."""
        result = Recommendations()
        sources = [
            self.rules.bmi_categories.get(bmi_category or "", {}),
            self.rules.fitness_goals.get(fitness_goal or "", {}),
        ]
        sources.extend(
            self.rules.health_conditions.get(condition, {})
            for condition in health_conditions
        )
        for source in sources:
            for kind in _KINDS:
                getattr(result, kind).extend(source.get(kind, []))
        return result

    def condition_labels(self) -> list[ConditionLabel]:
        """Return the recognised health conditions with display labels."""
        return list(self.rules.condition_labels)
