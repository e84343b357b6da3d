"""
Growth-related Enumerations
============================

This module contains the enums related to crop development.
"""

from enum import Enum


class PhenologicalStage(str, Enum):
    """Developmental stages of a perennial fruiting crop, in GDD order"""

    DORMANT = "dormant"
    BUD_SWELL = "bud swell"
    BUD_BREAK = "bud break"
    LEAF_EMERGENCE = "leaf emergence"
    BLOOM = "bloom"
    BERRY_SET = "berry set"
    VERAISON = "veraison"
    FULL_MATURITY = "full maturity"

    def __str__(self):
        return self.value
