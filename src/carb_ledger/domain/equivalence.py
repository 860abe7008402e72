"""
Fat and protein carbohydrate-equivalence calculation.

Converts fat and protein grams into fat-protein units (100 kcal each), the
carbohydrate quantity they are counted as, and the absorption time bracket
those units fall into.
"""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict

CALORIES_PER_GRAM_FAT = 9.0
CALORIES_PER_GRAM_PROTEIN = 4.0
CALORIES_PER_FAT_PROTEIN_UNIT = 100.0
CARB_GRAMS_PER_FAT_PROTEIN_UNIT = 10.0

# (lower inclusive, upper exclusive, hours)
ABSORPTION_BRACKETS: tuple[tuple[float, float, float], ...] = (
    (0.0, 1.0, 2.0),
    (1.0, 2.0, 3.0),
    (2.0, 3.0, 4.0),
    (3.0, 4.0, 5.0),
)
DEFAULT_ABSORPTION_HOURS = 8.0


class NutrientEquivalence(BaseModel):
    """Breakdown of a fat/protein equivalence calculation."""

    calories_fat: float
    calories_protein: float
    fat_protein_units: float
    carb_equivalent_grams: float
    absorption_time: timedelta

    model_config = ConfigDict(frozen=True)


def absorption_hours_for_units(units: float) -> float:
    """
    Look up the absorption time bracket for a number of fat-protein units.

    A value on a bracket boundary belongs to the upper bracket. Anything outside
    the listed brackets, including negative units, gets the default duration.

    Args:
        units: Fat-protein units.

    Returns:
        Absorption time in hours.
    """
    for lower, upper, hours in ABSORPTION_BRACKETS:
        if lower <= units < upper:
            return hours
    return DEFAULT_ABSORPTION_HOURS


def calculate_equivalence(fat_grams: float, protein_grams: float) -> NutrientEquivalence:
    """
    Compute the carbohydrate equivalent and absorption time of fat and protein.

    Args:
        fat_grams: Fat quantity in grams.
        protein_grams: Protein quantity in grams.

    Returns:
        Equivalence breakdown.
    """
    calories_fat = fat_grams * CALORIES_PER_GRAM_FAT
    calories_protein = protein_grams * CALORIES_PER_GRAM_PROTEIN
    units = (calories_fat + calories_protein) / CALORIES_PER_FAT_PROTEIN_UNIT

    return NutrientEquivalence(
        calories_fat=calories_fat,
        calories_protein=calories_protein,
        fat_protein_units=units,
        carb_equivalent_grams=units * CARB_GRAMS_PER_FAT_PROTEIN_UNIT,
        absorption_time=timedelta(hours=absorption_hours_for_units(units)),
    )
