from abc import ABC, abstractmethod
from typing import Optional, Sequence
from .models import (
    Circuit, CalculationMode, CalculationResult, CatalogEntry,
    SectionResult, CurrentResult, LengthResult, FuseResult, PriceResult
)
from .pricing import estimate_price

class CableSizingCalculator(ABC):

    @abstractmethod
    def solve_for_section(self, circuit: Circuit) -> SectionResult:
        """Smallest standard section carrying the circuit current within the voltage drop limit."""
        pass

    @abstractmethod
    def solve_for_current(self, circuit: Circuit) -> CurrentResult:
        """Max safe current for the circuit section and length."""
        pass

    @abstractmethod
    def solve_for_length(self, circuit: Circuit) -> LengthResult:
        """Max safe length for the circuit section and current."""
        pass

    @abstractmethod
    def select_fuse(self, current: float, section: float) -> FuseResult:
        """Selects a protective fuse for a resolved (current, section) pair."""
        pass

    def estimate_price(self, section: float, total_length: float, catalog: Optional[Sequence[CatalogEntry]] = None) -> PriceResult:
        return estimate_price(section, total_length, catalog)

    def calculate(
        self,
        circuit: Circuit,
        mode: CalculationMode,
        catalog: Optional[Sequence[CatalogEntry]] = None
    ) -> CalculationResult:
        """Runs one calculation mode, then fuse and price for the resolved (current, section) pair."""
        result = CalculationResult(mode=mode, circuit=circuit)
        price_length = circuit.total_length

        if mode == CalculationMode.SOLVE_FOR_SECTION:
            result.section_result = self.solve_for_section(circuit)
            result.section = result.section_result.section
            result.current = circuit.current
        elif mode == CalculationMode.SOLVE_FOR_CURRENT:
            result.current_result = self.solve_for_current(circuit)
            if result.current_result.max_current is not None:
                result.section = circuit.section
                result.current = result.current_result.max_current
        elif mode == CalculationMode.SOLVE_FOR_LENGTH:
            result.length_result = self.solve_for_length(circuit)
            result.section = circuit.section
            result.current = circuit.current
            if price_length is None:
                price_length = result.length_result.max_total_length
        else:
            raise ValueError(f"Unknown calculation mode: {mode}")

        if result.section is not None:
            result.fuse = self.select_fuse(result.current, result.section)
            result.price = self.estimate_price(result.section, price_length, catalog)

        return result
