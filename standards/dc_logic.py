import logging
import math
from typing import List, Optional
from core.models import Circuit, LengthMode, SectionCheck, SectionResult, CurrentResult, LengthResult, VoltageDropLevel
from standards.dc_tables import (
    RESISTIVITY_COPPER_20C, MAX_VOLTAGE_DROP_FRACTION, MAX_VOLTAGE_DROP_PERCENT,
    STANDARD_SECTIONS, LONG_RUN_METERS, LONG_RUN_MIN_SECTION, get_ampacity
)

logger = logging.getLogger(__name__)

class DCLogic:
    """Voltage drop physics for a two-conductor DC circuit in flexible copper.

    The three solve_* methods share the same math and differ only in the
    unknown: section, current or length.
    """

    @staticmethod
    def resistance(section: float, total_length: float) -> float:
        return RESISTIVITY_COPPER_20C * total_length / section

    @staticmethod
    def voltage_drop(current: float, section: float, total_length: float) -> float:
        return current * DCLogic.resistance(section, total_length)

    @staticmethod
    def voltage_drop_percent(voltage_drop: float, voltage: float) -> float:
        return voltage_drop / voltage * 100.0

    @staticmethod
    def drop_level(voltage_drop_percent: float) -> VoltageDropLevel:
        if voltage_drop_percent <= MAX_VOLTAGE_DROP_PERCENT * 0.5:
            return VoltageDropLevel.OK
        if voltage_drop_percent <= MAX_VOLTAGE_DROP_PERCENT:
            return VoltageDropLevel.WARNING
        return VoltageDropLevel.CRITICAL

    @staticmethod
    def minimum_section(current: float, voltage: float, total_length: float) -> float:
        # Continuous section giving exactly the max allowed drop
        return current * RESISTIVITY_COPPER_20C * total_length / (voltage * MAX_VOLTAGE_DROP_FRACTION)

    @staticmethod
    def max_current_by_drop(section: float, voltage: float, total_length: float) -> float:
        return (voltage * MAX_VOLTAGE_DROP_FRACTION) / DCLogic.resistance(section, total_length)

    @staticmethod
    def max_total_length_by_drop(section: float, voltage: float, current: float) -> float:
        if current == 0:
            return math.inf
        return (voltage * MAX_VOLTAGE_DROP_FRACTION / current) * section / RESISTIVITY_COPPER_20C

    @staticmethod
    def within_drop_limit(current: float, section: float, voltage: float, total_length: float) -> bool:
        # Inverse limits shared with solve_for_current and solve_for_length
        if total_length == 0:
            return True
        return (current <= DCLogic.max_current_by_drop(section, voltage, total_length)
                and total_length <= DCLogic.max_total_length_by_drop(section, voltage, current))

    @staticmethod
    def check_section(section: float, current: float, voltage: float, total_length: float) -> SectionCheck:
        ampacity = get_ampacity(section)
        vd = DCLogic.voltage_drop(current, section, total_length)
        vd_percent = DCLogic.voltage_drop_percent(vd, voltage)
        return SectionCheck(
            section=section,
            ampacity=ampacity,
            voltage_drop=vd,
            voltage_drop_percent=vd_percent,
            ampacity_ok=current <= ampacity,
            voltage_drop_ok=DCLogic.within_drop_limit(current, section, voltage, total_length),
        )

    @staticmethod
    def solve_for_section(circuit: Circuit) -> SectionResult:
        total = circuit.total_length
        candidates: List[SectionCheck] = [
            DCLogic.check_section(s, circuit.current, circuit.voltage, total) for s in STANDARD_SECTIONS
        ]
        min_section = DCLogic.minimum_section(circuit.current, circuit.voltage, total)

        # Smallest section meeting both constraints
        selected: Optional[SectionCheck] = None
        for check in candidates:
            if check.recommended:
                selected = check
                break

        if selected is None:
            logger.debug("No standard section for I=%sA, L=%sm, V=%sV", circuit.current, total, circuit.voltage)
            return SectionResult(
                section=None,
                minimum_section=min_section,
                candidates=candidates,
                warnings=["No standard section fits: raise the voltage or split the load"],
            )

        warnings = []
        if circuit.length is not None:
            one_way = total / 2
            if one_way > LONG_RUN_METERS and selected.section < LONG_RUN_MIN_SECTION:
                warnings.append(f"Long run ({one_way:g} m) on {selected.section:g} mm2, check the section")

        logger.debug("Selected %s mm2 (VD %.3f%%)", selected.section, selected.voltage_drop_percent)
        return SectionResult(
            section=selected.section,
            voltage_drop=selected.voltage_drop,
            voltage_drop_percent=selected.voltage_drop_percent,
            ampacity_ok=selected.ampacity_ok,
            voltage_drop_ok=selected.voltage_drop_ok,
            minimum_section=min_section,
            level=DCLogic.drop_level(selected.voltage_drop_percent),
            candidates=candidates,
            warnings=warnings,
        )

    @staticmethod
    def solve_for_current(circuit: Circuit) -> CurrentResult:
        section = circuit.section
        total = circuit.total_length
        if section is None or total is None or section <= 0 or total <= 0:
            return CurrentResult(max_current=None)

        by_ampacity = get_ampacity(section)
        by_drop = DCLogic.max_current_by_drop(section, circuit.voltage, total)

        if by_drop < by_ampacity:
            return CurrentResult(by_drop, by_ampacity, by_drop, limited_by="voltage_drop")
        return CurrentResult(by_ampacity, by_ampacity, by_drop, limited_by="ampacity")

    @staticmethod
    def solve_for_length(circuit: Circuit) -> LengthResult:
        section = circuit.section
        current = circuit.current

        # Section already overloaded, no length is safe
        if current > get_ampacity(section):
            return LengthResult(max_length=0.0, max_total_length=0.0, ampacity_ok=False)

        max_total = DCLogic.max_total_length_by_drop(section, circuit.voltage, current)
        max_length = max_total / 2 if circuit.length_mode == LengthMode.ONE_WAY else max_total
        return LengthResult(max_length=max_length, max_total_length=max_total)
