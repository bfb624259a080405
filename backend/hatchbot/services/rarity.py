"""Weight to rarity tier classification."""

from __future__ import annotations

from shared.models.hatch import RarityTier

# (lower inclusive, upper exclusive) bands; the top band is handled separately
_BANDS: tuple[tuple[float, float, RarityTier], ...] = (
    (4.0, 5.0, RarityTier.SEMI_HUGE),
    (5.0, 7.0, RarityTier.HUGE),
    (7.0, 8.0, RarityTier.SEMI_TITAN),
    (8.0, 9.0, RarityTier.TITAN),
)
GODLY_MIN_KG = 9.0
GODLY_MAX_KG = 15.0


def classify(weight_kg: float) -> RarityTier | None:
    """Return the tier for ``weight_kg``, or None outside every band."""
    for lower, upper, tier in _BANDS:
        if lower <= weight_kg < upper:
            return tier
    if GODLY_MIN_KG <= weight_kg <= GODLY_MAX_KG:
        return RarityTier.GODLY
    return None
