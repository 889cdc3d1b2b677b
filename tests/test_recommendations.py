"""Tests for rule-based recommendations."""

import json
from pathlib import Path

from diet_tracker.services.recommendations import AdviceRules, RecommendationEngine


def test_advice_is_concatenated_in_input_order(recommender) -> None:
    result = recommender.recommend("Overweight", "weight_loss", ["diabetes"])

    assert result.general == ["Focus on creating a sustainable calorie deficit"]
    assert result.dietary[0] == "Emphasize whole foods, vegetables, and lean proteins"
    assert result.dietary[1] == "Maintain a moderate calorie deficit (500 cal/day)"
    assert result.dietary[-1] == "Avoid sugary drinks and processed foods"
    assert result.exercise == [
        "Combine cardio and strength training for best results",
        "Include both cardio and resistance training",
    ]
    assert result.warnings == [
        "Consult your doctor before making major dietary changes"
    ]


def test_unknown_inputs_yield_empty_advice(recommender) -> None:
    result = recommender.recommend(None, "maintenance", ["obesity", "unknown"])

    assert result.general == []
    assert result.dietary == []
    assert result.exercise == []
    assert result.warnings == []


def test_condition_labels_are_listed(recommender) -> None:
    labels = recommender.condition_labels()

    assert len(labels) == 13
    assert labels[0].value == "diabetes"
    assert labels[0].label == "Diabetes"


def test_rules_load_from_custom_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps(
            {
                "bmi_categories": {"Obese": {"general": ["Walk daily"]}},
                "health_conditions": [{"value": "vegan", "label": "Vegan"}],
            }
        ),
        encoding="utf-8",
    )

    engine = RecommendationEngine(AdviceRules.load(path))

    assert engine.recommend("Obese", None, []).general == ["Walk daily"]
    assert engine.condition_labels()[0].label == "Vegan"
