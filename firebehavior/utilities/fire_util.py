"""Constants and small helpers shared across the fire behavior models.

.. autoclass:: LifeCategory
    :members:

.. autoclass:: Situation
    :members:

.. autoclass:: FireType
    :members:

.. autoclass:: SpotLocation
    :members:

"""

# Values smaller than this are treated as zero by every guarded division
SMIDGEN = 1.0e-7

# Sentinel meaning "never" for critical rates that cannot be reached
INFINITY = 999999999999.0

MAX_PARTICLES = 20
MAX_SIZE_CLASSES = 6

# Size class boundaries (1/ft); a particle belongs to the first class whose
# boundary does not exceed its savr
SIZE_BOUNDARIES = (1200.0, 192.0, 96.0, 48.0, 16.0, 0.0)

FT_MIN_PER_MPH = 88.0


class LifeCategory:
    # Fuel life categories
    DEAD, LIVE = 0, 1
    NUM_CATEGORIES = 2


class Situation:
    # Wind/slope situations resolved by the surface spread model
    NONE = 0
    NO_SPREAD = 1
    NO_WIND_NO_SLOPE = 2
    WIND_NO_SLOPE = 3
    SLOPE_NO_WIND = 4
    WIND_UPSLOPE = 5
    CROSS_SLOPE = 6


class FireType:
    # Final crown fire classification
    SURFACE, PASSIVE, CONDITIONAL_ACTIVE, ACTIVE = 0, 1, 2, 3

    names = {
        0: "Surface",
        1: "Passive",
        2: "Conditional active",
        3: "Active",
    }


class SpotLocation:
    # Firebrand source location within ridge/valley terrain
    MIDSLOPE_WINDWARD, VALLEY_BOTTOM, MIDSLOPE_LEEWARD, RIDGE_TOP = 0, 1, 2, 3


def constrain_compass_degrees(degrees: float) -> float:
    """Wrap a compass bearing into [0, 360).

    Args:
        degrees (float): Bearing in degrees, any sign or magnitude.

    Returns:
        float: Equivalent bearing in [0, 360).
    """
    degrees = degrees % 360.0
    if degrees >= 360.0:
        degrees = 0.0
    return degrees


def fuel_life(life_code: int) -> int:
    """Map a fuel catalog life code to a life category.

    Catalog codes are 0 (dead), 1 (live herb), 2 (live wood) and
    3 (dead litter).

    Args:
        life_code (int): Catalog life code.

    Returns:
        int: ``LifeCategory.DEAD`` or ``LifeCategory.LIVE``.
    """
    if life_code in (1, 2):
        return LifeCategory.LIVE
    return LifeCategory.DEAD
