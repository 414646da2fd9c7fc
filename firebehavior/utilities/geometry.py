"""Fire ellipse geometry and flame/intensity relations.

Pure functions shared by the surface and crown fire models and available to
reporting code. All spread rates are in ft/min, lengths in ft, fireline
intensities in Btu/ft/s and reaction intensities in Btu/ft^2/min.

References:
    - Rothermel, R. C. (1991). Predicting behavior and size of crown fires in
      the Northern Rocky Mountains. USDA Forest Service Research Paper
      INT-438.
    - Byram, G. M. (1959). Combustion of forest fuels. In: Forest Fire:
      Control and Use.
    - Thomas, P. H. (1963). The size of flames from natural fires. 9th
      Symposium on Combustion.
    - Van Wagner, C. E. (1973). Height of crown scorch in forest fires.
      Canadian Journal of Forest Research 3: 373-378.
"""

import numpy as np

from firebehavior.utilities.fire_util import FT_MIN_PER_MPH, SMIDGEN


def ellipse_length_to_width(effective_wind_speed: float) -> float:
    """Surface fire length-to-width ratio from the effective wind speed.

    Args:
        effective_wind_speed (float): Effective mid-flame wind speed (ft/min).

    Returns:
        float: Length-to-width ratio, 1 + 0.25 * (wind in mi/h).
    """
    mph = effective_wind_speed / FT_MIN_PER_MPH
    return 1.0 + 0.25 * mph


def crown_length_to_width(wind_speed_at_20ft: float) -> float:
    """Crown fire length-to-width ratio (Rothermel 1991, eq. 10).

    Args:
        wind_speed_at_20ft (float): 20-ft wind speed (ft/min).

    Returns:
        float: Length-to-width ratio, 1 + 0.125 * (wind in mi/h).
    """
    mph = wind_speed_at_20ft / FT_MIN_PER_MPH
    return 1.0 + 0.125 * mph


def ellipse_eccentricity(lw_ratio: float) -> float:
    """Eccentricity of an ellipse with the given length-to-width ratio.

    Args:
        lw_ratio (float): Length-to-width ratio.

    Returns:
        float: Eccentricity in [0, 1); 0 when ``lw_ratio <= 1``.
    """
    x = lw_ratio * lw_ratio - 1.0
    if x <= 0.0:
        return 0.0
    return float(np.sqrt(x) / lw_ratio)


def spread_rate_at_back(ros_head: float, lw_ratio: float) -> float:
    e = ellipse_eccentricity(lw_ratio)
    return ros_head * (1.0 - e) / (1.0 + e)


def spread_rate_at_flank(ros_head: float, lw_ratio: float) -> float:
    """Spread rate normal to the major axis at the widest point.

    Double this value for the rate at which the ellipse width grows.
    """
    ros_back = spread_rate_at_back(ros_head, lw_ratio)
    return 0.5 * (ros_head + ros_back) / lw_ratio


def spread_rate_at_beta(ros_head: float, lw_ratio: float, beta: float) -> float:
    """Spread rate along a vector ``beta`` degrees from the heading direction.

    Vectors within a tenth of a degree of the head return the head rate.

    Args:
        ros_head (float): Head spread rate (ft/min).
        lw_ratio (float): Length-to-width ratio.
        beta (float): Degrees clockwise from the direction of maximum spread.

    Returns:
        float: Spread rate along the vector (ft/min).
    """
    if abs(beta) <= 0.1:
        return ros_head
    e = ellipse_eccentricity(lw_ratio)
    return float(ros_head * (1.0 - e) / (1.0 - e * np.cos(np.deg2rad(beta))))


def ellipse_area(length: float, lw_ratio: float) -> float:
    """Rothermel (1991) eq. 11 ellipse area; ignores backing distance."""
    if lw_ratio < SMIDGEN:
        return 0.0
    return float(np.pi * length * length / (4.0 * lw_ratio))


def ellipse_perimeter(length: float, width: float) -> float:
    """Ellipse perimeter from its length and width.

    Uses the series approximation pi (a + b) (1 + xm^2/4 + xm^4/64) with
    xm = (a - b) / (a + b), where a and b are the semi-axes.

    Args:
        length (float): Major axis length.
        width (float): Minor axis length.

    Returns:
        float: Perimeter in the same units as ``length``.
    """
    a = 0.5 * length
    b = 0.5 * width
    xm = 0.0 if (a + b) <= 0.0 else (a - b) / (a + b)
    xk = 1.0 + xm * xm / 4.0 + xm * xm * xm * xm / 64.0
    return float(np.pi * (a + b) * xk)


def ellipse_perimeter_rothermel(length: float, lw_ratio: float) -> float:
    """Rothermel (1991) eq. 13 perimeter estimate from forward spread distance."""
    if lw_ratio < SMIDGEN:
        return 0.0
    return float(0.5 * np.pi * length * (1.0 + 1.0 / lw_ratio))


def heat_per_unit_area(reaction_intensity: float, residence_time: float) -> float:
    return reaction_intensity * residence_time


def fireline_intensity(spread_rate: float, reaction_intensity: float, residence_time: float) -> float:
    """Byram's fireline intensity (Btu/ft/s) from spread rate and heat release."""
    return spread_rate * residence_time * reaction_intensity / 60.0


def flame_length_byram(fireline_intensity: float) -> float:
    """Byram (1959) flame length (ft) from fireline intensity (Btu/ft/s)."""
    if fireline_intensity <= 0.0:
        return 0.0
    return float(0.45 * np.power(fireline_intensity, 0.46))


def flame_length_thomas(fireline_intensity: float) -> float:
    """Thomas (1963) flame length (ft) from fireline intensity (Btu/ft/s)."""
    if fireline_intensity <= 0.0:
        return 0.0
    return float(0.2 * np.power(fireline_intensity, 2.0 / 3.0))


def fireline_intensity_from_flame_byram(flame_length: float) -> float:
    if flame_length <= 0.0:
        return 0.0
    return float(np.power(flame_length / 0.45, 1.0 / 0.46))


def fireline_intensity_from_flame_thomas(flame_length: float) -> float:
    if flame_length <= 0.0:
        return 0.0
    return float(np.power(5.0 * flame_length, 1.5))


def herbaceous_cured_fraction(moisture_content: float) -> float:
    """Fraction of live herbaceous fuel that is cured.

    Args:
        moisture_content (float): Live herbaceous moisture (fraction).

    Returns:
        float: Cured fraction clamped to [0, 1].
    """
    fraction = 1.333 - 1.11 * moisture_content
    return min(max(fraction, 0.0), 1.0)


def scorch_height(fireline_intensity: float, wind_speed: float, air_temperature: float) -> float:
    """Van Wagner (1973) crown scorch height.

    Args:
        fireline_intensity (float): Fireline intensity (Btu/ft/s).
        wind_speed (float): Mid-flame wind speed (mi/h).
        air_temperature (float): Air temperature (deg F).

    Returns:
        float: Scorch height (ft).
    """
    if fireline_intensity < SMIDGEN:
        return 0.0
    return float((63.0 / (140.0 - air_temperature))
                 * np.power(fireline_intensity, 1.166667)
                 / np.sqrt(fireline_intensity + wind_speed ** 3))


def fire_acres(area_ft2: float) -> float:
    return area_ft2 / (66.0 * 660.0)
