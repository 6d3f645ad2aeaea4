# Flexible copper cable, DC, conductor at 20°C

# Resistivity of copper at 20°C (Ohm.mm2/m)
RESISTIVITY_COPPER_20C = 0.023

# Max voltage drop, fraction of nominal voltage
MAX_VOLTAGE_DROP_FRACTION = 0.03
MAX_VOLTAGE_DROP_PERCENT = MAX_VOLTAGE_DROP_FRACTION * 100.0

# Fuse must be at least 110% of the load current
FUSE_MARGIN = 1.10

# Max continuous current for flexible copper cables
# Format: {Section_mm2: Amps}
SECTION_AMPACITY = {
    0.75: 6,
    1: 8,
    1.5: 10,
    2.5: 16,
    4: 21,
    6: 26,
    10: 36,
    16: 50,
    25: 68,
    35: 89,
    50: 110,
    70: 140,
    95: 175,
    120: 207,
}

STANDARD_SECTIONS = sorted(SECTION_AMPACITY.keys())

# Standard fuse ratings (Amps)
FUSE_RATINGS = [1, 2, 3, 5, 7.5, 10, 15, 20, 25, 30, 35, 40, 50, 60, 70, 80, 100, 125, 150, 175, 200]

# Ratings easily found in stock (subset of FUSE_RATINGS)
COMMON_FUSE_RATINGS = [5, 10, 15, 20, 25, 30, 40, 50, 60, 80, 100]

# Runs longer than this (one way) on thin cable get a warning
LONG_RUN_METERS = 20.0
LONG_RUN_MIN_SECTION = 2.5


def get_ampacity(section: float) -> float:
    return SECTION_AMPACITY[section]


def is_standard_section(section: float) -> bool:
    return section in SECTION_AMPACITY
