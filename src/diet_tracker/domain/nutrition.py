"""Nutrition domain models."""

from dataclasses import asdict, dataclass, field, fields, is_dataclass


@dataclass(frozen=True)
class CarbProfile:
    """Carbohydrate breakdown in grams."""

    total: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0


@dataclass(frozen=True)
class FatProfile:
    """Fat breakdown in grams."""

    total: float = 0.0
    saturated: float = 0.0
    trans: float = 0.0
    monounsaturated: float = 0.0
    polyunsaturated: float = 0.0


@dataclass(frozen=True)
class VitaminProfile:
    """Vitamin content (mg or mcg depending on the vitamin)."""

    a: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 0.0
    k: float = 0.0
    b1: float = 0.0
    b2: float = 0.0
    b3: float = 0.0
    b6: float = 0.0
    b12: float = 0.0
    folate: float = 0.0


@dataclass(frozen=True)
class MineralProfile:
    """Mineral content (mg or mcg depending on the mineral)."""

    calcium: float = 0.0
    iron: float = 0.0
    magnesium: float = 0.0
    phosphorus: float = 0.0
    zinc: float = 0.0
    copper: float = 0.0
    manganese: float = 0.0
    selenium: float = 0.0


@dataclass(frozen=True)
class NutritionProfile:
    """Full nutrition profile for a serving, meal item or meal."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: CarbProfile = field(default_factory=CarbProfile)
    fat: FatProfile = field(default_factory=FatProfile)
    cholesterol: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0
    vitamins: VitaminProfile = field(default_factory=VitaminProfile)
    minerals: MineralProfile = field(default_factory=MineralProfile)

    def to_dict(self) -> dict[str, object]:
        """Return the nested JSON shape of the profile."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "NutritionProfile":
        """Build a profile from a nested dict, reading missing leaves as zero."""
        return _from_dict(cls, data or {})

    def is_negative(self) -> bool:
        """Return True when any leaf value is below zero."""
        return any(value < 0 for value in _leaves(self))


def _from_dict(cls: type, data: dict[str, object]) -> object:
    values: dict[str, object] = {}
    for item in fields(cls):
        raw = data.get(item.name)
        if isinstance(item.default_factory, type) and is_dataclass(
            item.default_factory
        ):
            nested = raw if isinstance(raw, dict) else {}
            values[item.name] = _from_dict(item.default_factory, nested)
        else:
            values[item.name] = _to_float(raw)
    return cls(**values)


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _leaves(value: object) -> list[float]:
    if is_dataclass(value):
        collected: list[float] = []
        for item in fields(value):
            collected.extend(_leaves(getattr(value, item.name)))
        return collected
    return [float(value)]
