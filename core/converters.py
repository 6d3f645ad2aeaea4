from typing import Tuple, Optional

def current_from_power(power: float, voltage: float) -> float:
    return power / voltage

def power_from_current(current: float, voltage: float) -> float:
    return current * voltage

def convert_power_unit(val: float, unit: str, voltage: float) -> Tuple[float, Optional[float]]:
    """
    Converts input value to (Watts, Amps_Override) for a DC circuit.
    Returns (calculated_watts, override_amps)
    Raises ValueError for an unknown unit.
    """
    unit = unit.strip().upper()

    # 1. Power Units
    if unit == "W": return (val, None)
    if unit == "KW": return (val * 1000.0, None)

    # 2. Current Units
    if unit == "A":
        return (power_from_current(val, voltage), val)
    if unit == "MA":
        return (power_from_current(val / 1000.0, voltage), val / 1000.0)

    raise ValueError(f"Unknown power unit: {unit!r} (W, kW, A, mA)")

def convert_length_unit(val: float, unit: str) -> float:
    """Returns length in meters. Raises ValueError for an unknown unit."""
    unit = unit.strip().lower()
    if unit in ["m", "metre", "metres", "meter", "meters"]: return val
    if unit in ["cm"]: return val / 100.0
    if unit in ["ft", "feet", "foot"]: return val * 0.3048
    raise ValueError(f"Unknown length unit: {unit!r} (m, cm, ft)")
