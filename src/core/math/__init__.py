"""
Core math modules

Детерминированные целочисленные примитивы surge pricing.
"""

# Surge Pricing
from src.core.math.surge_pricing import (
    MULTIPLIER_NO_SURGE,
    MULTIPLIER_SATURATED,
    MULTIPLIER_SCALE,
    SURGE_BUCKETS,
    UINT32_MAX,
    demand_ratio,
    format_multiplier,
    multiplier_to_factor,
    surge_multiplier,
    validate_uint32,
)

# Admissibility
from src.core.math.admissibility import (
    MULTIPLIER_MAX,
    MULTIPLIER_MIN,
    is_admissible,
    recompute_matches,
)

__all__ = [
    # Surge Pricing — Constants
    "MULTIPLIER_SCALE",
    "MULTIPLIER_NO_SURGE",
    "MULTIPLIER_SATURATED",
    "UINT32_MAX",
    "SURGE_BUCKETS",
    # Surge Pricing — Functions
    "validate_uint32",
    "demand_ratio",
    "surge_multiplier",
    "multiplier_to_factor",
    "format_multiplier",
    # Admissibility
    "MULTIPLIER_MIN",
    "MULTIPLIER_MAX",
    "is_admissible",
    "recompute_matches",
]
