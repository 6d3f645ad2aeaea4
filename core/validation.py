import math
from .models import Circuit, CalculationMode
from standards.dc_tables import STANDARD_SECTIONS, is_standard_section

class CircuitInputError(ValueError):
    pass

def _check_finite(name: str, value) -> None:
    if value is not None and not math.isfinite(value):
        raise CircuitInputError(f"{name} must be a finite number (got {value})")

def validate_circuit(circuit: Circuit, mode: CalculationMode) -> None:
    """Rejects inputs outside the calculator's domain. Raises CircuitInputError."""
    # NaN fails every comparison below, check it first
    _check_finite("Voltage", circuit.voltage)
    _check_finite("Current", circuit.current)
    _check_finite("Power", circuit.power)
    _check_finite("Length", circuit.length)
    _check_finite("Section", circuit.section)

    if circuit.voltage is None or circuit.voltage <= 0:
        raise CircuitInputError(f"Voltage must be > 0 (got {circuit.voltage})")
    if circuit.current is None or circuit.current < 0:
        raise CircuitInputError(f"Current must be >= 0 (got {circuit.current})")
    if circuit.power is not None and circuit.power < 0:
        raise CircuitInputError(f"Power must be >= 0 (got {circuit.power})")

    # Length is the unknown in length mode
    if mode != CalculationMode.SOLVE_FOR_LENGTH or circuit.length is not None:
        if circuit.length is None or circuit.length <= 0:
            raise CircuitInputError(f"Length must be > 0 (got {circuit.length})")

    if mode in (CalculationMode.SOLVE_FOR_CURRENT, CalculationMode.SOLVE_FOR_LENGTH):
        if circuit.section is None:
            raise CircuitInputError(f"A section is required in {mode.value} mode")
    if circuit.section is not None and not is_standard_section(circuit.section):
        allowed = ", ".join(f"{s:g}" for s in STANDARD_SECTIONS)
        raise CircuitInputError(f"Section {circuit.section} mm2 is not standard ({allowed})")
