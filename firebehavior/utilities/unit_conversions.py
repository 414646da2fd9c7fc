"""This module contains functions for unit conversions"""

def F_to_C(f_f: float) -> float:
    """Converts from Fahrenheit to Celsius

    Args:
        f_f (float): Fahrenheit

    Returns:
        float: Celsius
    """
    g = 5 / 9
    h = 32
    c = g * (f_f - h)

    return c

def m_to_ft(f_m: float) -> float:
    """Converts from meters to feet

    Args:
        f_m (float): meters

    Returns:
        float: feet
    """
    g = 3.28084
    f = f_m * g

    return f

def ft_to_m(f_ft: float) -> float:
    """Converts from feet to meters

    Args:
        f_ft (float): feet

    Returns:
        float: meters
    """
    g = 0.3048
    f = f_ft * g

    return f

def ft_min_to_m_s(f_ft_min: float) -> float:
    """Converts from ft/min to m/s

    Args:
        f_ft_min (float): ft/min

    Returns:
        float: m/s
    """
    g = 0.00508
    f = f_ft_min * g

    return f

def m_s_to_ft_min(m_s: float) -> float:
    """Converts from m/s to ft/min

    Args:
        m_s (float): m/s

    Returns:
        float: ft/min
    """
    g = 1 / ft_min_to_m_s(1)
    f = m_s * g
    return f

def m_min_to_ft_min(m_min: float) -> float:
    """Converts from m/min to ft/min

    Args:
        m_min (float): m/min

    Returns:
        float: ft/min
    """
    return m_to_ft(m_min)

def mph_to_ft_min(f_mph: float) -> float:
    """Converts from mi/h to ft/min

    Args:
        f_mph (float): mi/h

    Returns:
        float: ft/min
    """
    g = 88
    f = f_mph * g
    return f

def ft_min_to_mph(f_ft_min: float) -> float:
    """Converts from ft/min to mi/h

    Args:
        f_ft_min (float): ft/min

    Returns:
        float: mi/h
    """
    g = 88
    f = f_ft_min / g
    return f

def Lbsft3_to_KgM3(f_lbsft3: float) -> float:
    """Converts a bulk density from lb/ft^3 to kg/m^3

    Args:
        f_lbsft3 (float): lb/ft^3

    Returns:
        float: kg/m^3
    """
    g = 16.0185
    f = f_lbsft3 * g
    return f

def KgM3_to_Lbsft3(f_kgm3: float) -> float:
    """Converts a bulk density from kg/m^3 to lb/ft^3

    Args:
        f_kgm3 (float): kg/m^3

    Returns:
        float: lb/ft^3
    """
    g = 1 / Lbsft3_to_KgM3(1)
    f = f_kgm3 * g
    return f

def TPA_to_Lbsft2(f_tpa: float) -> float:
    """Converts a fuel load from tons/acre to lb/ft^2

    Args:
        f_tpa (float): tons/acre

    Returns:
        float: lb/ft^2
    """
    f = f_tpa * 2000 / 43560
    return f

def Lbsft2_to_TPA(f_lbsft2: float) -> float:
    """Converts a fuel load from lb/ft^2 to tons/acre

    Args:
        f_lbsft2 (float): lb/ft^2

    Returns:
        float: tons/acre
    """
    f = f_lbsft2 * 43560 / 2000
    return f

def BTU_ft2_min_to_kW_m2(f_btu_ft2_min: float) -> float:
    """Converts a reaction intensity from Btu/ft^2/min to kW/m^2

    Args:
        f_btu_ft2_min (float): Btu/ft^2/min

    Returns:
        float: kW/m^2
    """
    g = 0.189422
    f = f_btu_ft2_min * g
    return f

def BTU_ft_s_to_kW_m(f_btu_ft_s: float) -> float:
    """Converts a fireline intensity from Btu/ft/s to kW/m

    Args:
        f_btu_ft_s (float): Btu/ft/s

    Returns:
        float: kW/m
    """
    g = 1 / kW_m_to_BTU_ft_s(1)
    f = f_btu_ft_s * g
    return f

def kW_m_to_BTU_ft_s(f_kw_m: float) -> float:
    """Converts a fireline intensity from kW/m to Btu/ft/s

    Args:
        f_kw_m (float): kW/m

    Returns:
        float: Btu/ft/s
    """
    g = 0.288672
    f = f_kw_m * g
    return f

def BTU_lb_to_kJ_kg(f_btu_lb: float) -> float:
    """Converts a heat content from Btu/lb to kJ/kg

    Args:
        f_btu_lb (float): Btu/lb

    Returns:
        float: kJ/kg
    """
    g = 2.32779
    f = f_btu_lb * g
    return f

def in_to_cm(f_in: float) -> float:
    """Converts from inches to centimeters

    Args:
        f_in (float): inches

    Returns:
        float: centimeters
    """
    return f_in * 2.54
