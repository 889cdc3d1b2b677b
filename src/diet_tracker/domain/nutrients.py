"""Reference tables for micronutrient analysis."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rda:
    """Recommended daily amount for a nutrient."""

    amount: float
    unit: str


VITAMIN_KEYS: tuple[str, ...] = (
    "a",
    "c",
    "d",
    "e",
    "k",
    "b1",
    "b2",
    "b3",
    "b6",
    "b12",
    "folate",
)

MINERAL_KEYS: tuple[str, ...] = (
    "calcium",
    "iron",
    "magnesium",
    "phosphorus",
    "zinc",
    "copper",
    "manganese",
    "selenium",
)

LIPID_KEYS: tuple[str, ...] = (
    "saturated",
    "trans",
    "monounsaturated",
    "polyunsaturated",
)

ELECTROLYTE_KEYS: tuple[str, ...] = ("sodium", "potassium")

MICRO_RDA: dict[str, dict[str, Rda]] = {
    "vitamins": {
        "a": Rda(900, "mcg"),
        "c": Rda(90, "mg"),
        "d": Rda(15, "mcg"),
        "e": Rda(15, "mg"),
        "k": Rda(120, "mcg"),
        "b1": Rda(1.2, "mg"),
        "b2": Rda(1.3, "mg"),
        "b3": Rda(16, "mg"),
        "b6": Rda(1.3, "mg"),
        "b12": Rda(2.4, "mcg"),
        "folate": Rda(400, "mcg"),
    },
    "minerals": {
        "calcium": Rda(1000, "mg"),
        "iron": Rda(18, "mg"),
        "magnesium": Rda(400, "mg"),
        "phosphorus": Rda(700, "mg"),
        "zinc": Rda(11, "mg"),
        "copper": Rda(0.9, "mg"),
        "manganese": Rda(2.3, "mg"),
        "selenium": Rda(55, "mcg"),
    },
    "electrolytes": {
        "sodium": Rda(1500, "mg"),
        "potassium": Rda(4700, "mg"),
    },
    "lipids": {
        "saturated": Rda(20, "g"),
        "trans": Rda(2, "g"),
        "monounsaturated": Rda(20, "g"),
        "polyunsaturated": Rda(20, "g"),
        "cholesterol": Rda(300, "mg"),
    },
}

DEFICIENCY_GROUPS: frozenset[str] = frozenset({"vitamins", "minerals"})
DEFICIENCY_KEYS: frozenset[str] = frozenset({"potassium"})
UPPER_LIMIT_KEYS: frozenset[str] = frozenset(
    {"sodium", "saturated", "trans", "cholesterol"}
)
DEFICIENCY_THRESHOLD = 80.0
UPPER_LIMIT_THRESHOLD = 100.0
EXCESS_THRESHOLD = 120.0


@dataclass(frozen=True)
class NutrientTables:
    """Keys, RDAs and classification rules used by the analyzer."""

    vitamin_keys: tuple[str, ...] = VITAMIN_KEYS
    mineral_keys: tuple[str, ...] = MINERAL_KEYS
    lipid_keys: tuple[str, ...] = LIPID_KEYS
    electrolyte_keys: tuple[str, ...] = ELECTROLYTE_KEYS
    rda: dict[str, dict[str, Rda]] = field(default_factory=lambda: MICRO_RDA)
    deficiency_groups: frozenset[str] = DEFICIENCY_GROUPS
    deficiency_keys: frozenset[str] = DEFICIENCY_KEYS
    upper_limit_keys: frozenset[str] = UPPER_LIMIT_KEYS
    deficiency_threshold: float = DEFICIENCY_THRESHOLD
    upper_limit_threshold: float = UPPER_LIMIT_THRESHOLD
    excess_threshold: float = EXCESS_THRESHOLD


DEFAULT_NUTRIENT_TABLES = NutrientTables()
