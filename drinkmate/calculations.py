"""BAC calculations using a single-dose Widmark rise per logged drink.

Model:
- Alcohol: grams = servings * volume_ml * abv * 0.789 (x2 for a double)
- Rise: BAC = [grams / (body_weight_g * r)] * 100
- r = 0.68 (male), 0.55 (female), 0.62 (other)
- Time until safe: (BAC - 0.05) / 0.015 hours once above the 0.05 threshold

Each drink's rise is fixed when it is logged. The session total is the plain
sum of those rises and is not decayed by elapsed time.
"""

from typing import Iterable, Tuple

# Ethanol density (g/mL) for volume x ABV -> grams.
ETHANOL_DENSITY = 0.789

# Distribution ratio (Widmark r) by profile sex index.
R_MALE = 0.68
R_FEMALE = 0.55
R_OTHER = 0.62

SEX_MALE = 0
SEX_FEMALE = 1
SEX_OTHER = 2

# Elimination rate (% BAC per hour)
ELIMINATION_PER_HOUR = 0.015

# BAC at or below which driving is considered safe by the app.
SAFE_THRESHOLD_BAC = 0.05

DOUBLE_MULTIPLIER = 2.0


def sex_factor(sex_index: int) -> float:
    """Widmark r for a sex index: 0 male, 1 female, anything else other."""
    if sex_index == SEX_MALE:
        return R_MALE
    if sex_index == SEX_FEMALE:
        return R_FEMALE
    return R_OTHER


def alcohol_grams(servings: float, volume_ml: float, abv: float, is_double: bool = False) -> float:
    multiplier = DOUBLE_MULTIPLIER if is_double else 1.0
    return servings * volume_ml * abv * ETHANOL_DENSITY * multiplier


def bac_rise_from_grams(grams_alcohol: float, weight_kg: float, r: float) -> float:
    """Immediate BAC rise (%) from a single dose of alcohol."""
    weight_g = weight_kg * 1000.0
    return (grams_alcohol / (weight_g * r)) * 100.0


def compute_contribution(
    servings: float,
    drink,
    is_double: bool,
    body_weight_kg: float,
    r: float,
) -> Tuple[float, float]:
    """Return (bac_rise_percent, total_alcohol_grams) for one logged drink.

    ``drink`` is any catalog entry with ``volume_ml`` and ``abv``.
    """
    grams = alcohol_grams(servings, drink.volume_ml, drink.abv, is_double)
    return bac_rise_from_grams(grams, body_weight_kg, r), grams


def total_bac(contributions: Iterable[float]) -> float:
    """Sum of per-drink rises, floored at zero."""
    return max(0.0, sum(contributions))


def time_until_safe(bac: float) -> float:
    """Hours until BAC falls to the safe-to-drive threshold."""
    if bac <= SAFE_THRESHOLD_BAC:
        return 0.0
    return (bac - SAFE_THRESHOLD_BAC) / ELIMINATION_PER_HOUR
