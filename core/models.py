from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from .converters import current_from_power

class LengthMode(Enum):
    ONE_WAY = "one_way"        # Supplied length is doubled (conductor + return)
    ROUND_TRIP = "round_trip"  # Supplied length already is the total

class CalculationMode(Enum):
    SOLVE_FOR_SECTION = "section"
    SOLVE_FOR_CURRENT = "current"
    SOLVE_FOR_LENGTH = "length"

class VoltageDropLevel(Enum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"

@dataclass(frozen=True)
class Circuit:
    voltage: float
    current: float = 0.0
    length: Optional[float] = None  # meters, physical length as supplied
    length_mode: LengthMode = LengthMode.ONE_WAY
    section: Optional[float] = None  # mm2, for current/length modes
    power: Optional[float] = None    # Watts, informative only

    @classmethod
    def from_power(cls, power: float, voltage: float, **kwargs) -> "Circuit":
        return cls(voltage=voltage, current=current_from_power(power, voltage), power=power, **kwargs)

    @property
    def total_length(self) -> Optional[float]:
        if self.length is None:
            return None
        if self.length_mode == LengthMode.ONE_WAY:
            return self.length * 2
        return self.length

@dataclass
class SectionCheck:
    section: float
    ampacity: float
    voltage_drop: float
    voltage_drop_percent: float
    ampacity_ok: bool
    voltage_drop_ok: bool

    @property
    def recommended(self) -> bool:
        return self.ampacity_ok and self.voltage_drop_ok

@dataclass
class SectionResult:
    section: Optional[float]
    voltage_drop: Optional[float] = None
    voltage_drop_percent: Optional[float] = None
    ampacity_ok: bool = False
    voltage_drop_ok: bool = False
    minimum_section: float = 0.0  # Theoretical continuous section (mm2)
    level: Optional[VoltageDropLevel] = None
    candidates: List[SectionCheck] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def recommended(self) -> bool:
        return self.ampacity_ok and self.voltage_drop_ok

@dataclass
class CurrentResult:
    max_current: Optional[float]
    max_current_by_ampacity: Optional[float] = None
    max_current_by_voltage_drop: Optional[float] = None
    limited_by: str = ""

@dataclass
class LengthResult:
    max_length: float        # In the caller's length mode
    max_total_length: float  # Conductor + return
    ampacity_ok: bool = True

@dataclass
class FuseSuggestion:
    section: float
    fuse: float

@dataclass
class FuseResult:
    fuse: Optional[float]
    is_common: bool = False
    suggestion: Optional[FuseSuggestion] = None
    min_rating: float = 0.0

@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str
    section: float
    purchase_price: Optional[float] = None  # per meter
    sale_price: Optional[float] = None      # per meter

@dataclass
class PriceResult:
    found: bool
    entry: Optional[CatalogEntry] = None
    length: float = 0.0
    purchase_cost: Optional[float] = None
    sale_cost: Optional[float] = None

@dataclass
class CalculationResult:
    mode: CalculationMode
    circuit: Circuit
    section: Optional[float] = None  # Resolved pair
    current: Optional[float] = None
    section_result: Optional[SectionResult] = None
    current_result: Optional[CurrentResult] = None
    length_result: Optional[LengthResult] = None
    fuse: Optional[FuseResult] = None
    price: Optional[PriceResult] = None
