from core.calculator import CableSizingCalculator
from core.models import Circuit, SectionResult, CurrentResult, LengthResult, FuseResult
from standards.dc_logic import DCLogic
from standards.fuses import FuseSelector

class DCCopperCalculator(CableSizingCalculator):
    # Flexible copper cable, 20°C, max 3% voltage drop

    def solve_for_section(self, circuit: Circuit) -> SectionResult:
        return DCLogic.solve_for_section(circuit)

    def solve_for_current(self, circuit: Circuit) -> CurrentResult:
        return DCLogic.solve_for_current(circuit)

    def solve_for_length(self, circuit: Circuit) -> LengthResult:
        return DCLogic.solve_for_length(circuit)

    def select_fuse(self, current: float, section: float) -> FuseResult:
        return FuseSelector.select_fuse(current, section)
