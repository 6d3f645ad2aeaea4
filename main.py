import sys
import argparse
import datetime
import logging
import math
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from core.models import Circuit, CalculationMode, CalculationResult, LengthMode
from core.converters import convert_power_unit, convert_length_unit, current_from_power
from core.catalog import CatalogError, load_catalog
from core.validation import CircuitInputError, validate_circuit
from standards.dc_copper import DCCopperCalculator
from standards.dc_tables import SECTION_AMPACITY, FUSE_RATINGS, COMMON_FUSE_RATINGS

logger = logging.getLogger(__name__)

MODES = {
    "section": CalculationMode.SOLVE_FOR_SECTION,
    "current": CalculationMode.SOLVE_FOR_CURRENT,
    "length": CalculationMode.SOLVE_FOR_LENGTH,
}

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Cable section calculator (DC, flexible copper 20°C)")
    ap.add_argument("--mode", choices=sorted(MODES), default="section")
    ap.add_argument("--voltage", type=float, default=12.0, help="Nominal voltage (V)")
    ap.add_argument("--current", type=float, help="Load current (A)")
    ap.add_argument("--power", help="Load power, ex: '120 W', '1.2 kW' or '10 A'")
    ap.add_argument("--length", help="Cable length, ex: '5', '5 m', '16 ft'")
    ap.add_argument("--round-trip", action="store_true", help="Length already includes the return conductor")
    ap.add_argument("--section", type=float, help="Section (mm2) for current/length modes")
    ap.add_argument("--catalog", help="Price catalog (.csv or .xlsx)")
    ap.add_argument("--excel", help="Write an Excel report to this file")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap

def _split_value(text: str, default_unit: str):
    parts = text.strip().split(None, 1)
    if len(parts) == 2:
        return float(parts[0]), parts[1]
    raw = parts[0]
    try:
        # bare number, "nan" and "inf" included
        return float(raw), default_unit
    except ValueError:
        pass
    # ex: "5m", "120W"
    idx = len(raw)
    while idx > 0 and not (raw[idx - 1].isdigit() or raw[idx - 1] == "."):
        idx -= 1
    return float(raw[:idx]), (raw[idx:] or default_unit)

def circuit_from_args(args) -> Circuit:
    try:
        current = args.current if args.current is not None else 0.0
        power = None
        if args.power:
            val, unit = _split_value(args.power, "W")
            power, amps_override = convert_power_unit(val, unit, args.voltage)
            current = amps_override if amps_override is not None else current_from_power(power, args.voltage)

        length = None
        if args.length:
            l_val, l_unit = _split_value(args.length, "m")
            length = convert_length_unit(l_val, l_unit)
    except (ValueError, ZeroDivisionError) as e:
        raise CircuitInputError(f"Invalid value: {e}") from e

    return Circuit(
        voltage=args.voltage,
        current=current,
        power=power,
        length=length,
        length_mode=LengthMode.ROUND_TRIP if args.round_trip else LengthMode.ONE_WAY,
        section=args.section,
    )

def _fmt(value, spec=".2f", unit=""):
    if value is None:
        return "-"
    if isinstance(value, float) and math.isinf(value):
        return "inf"
    return f"{value:{spec}}{unit}"

def print_result(result: CalculationResult) -> None:
    c = result.circuit
    print("=" * 72)
    print(f" Circuit: {c.voltage:g} V | {c.current:.2f} A | length {_fmt(c.length, 'g', ' m')} ({c.length_mode.value})")
    print("=" * 72)

    if result.section_result is not None:
        sr = result.section_result
        print(f"{'Section':<9} | {'Imax':<6} | {'VD (V)':<7} | {'% VD':<6} | {'I ok':<5} | {'VD ok':<5}")
        print("-" * 72)
        for row in sr.candidates:
            mark = " <" if row.section == sr.section else ""
            print(f"{row.section:<9g} | {row.ampacity:<6g} | {row.voltage_drop:<7.2f} | {row.voltage_drop_percent:<6.2f} | "
                  f"{'yes' if row.ampacity_ok else 'no':<5} | {'yes' if row.voltage_drop_ok else 'no':<5}{mark}")
        print("-" * 72)
        print(f"Minimum theoretical section: {sr.minimum_section:.2f} mm2")
        if sr.section is not None:
            print(f"Recommended section:         {sr.section:g} mm2 ({sr.voltage_drop_percent:.2f}% VD, {sr.level.value})")
        for w in sr.warnings:
            print(f"(!) {w}")

    if result.current_result is not None:
        cr = result.current_result
        print(f"Max current:  {_fmt(cr.max_current, '.2f', ' A')} (limited by {cr.limited_by or '-'})")
        print(f"  ampacity:     {_fmt(cr.max_current_by_ampacity, '.2f', ' A')}")
        print(f"  voltage drop: {_fmt(cr.max_current_by_voltage_drop, '.2f', ' A')}")

    if result.length_result is not None:
        lr = result.length_result
        if not lr.ampacity_ok:
            print(f"(!) {c.current:g} A exceeds the ampacity of {c.section:g} mm2")
        print(f"Max length:   {_fmt(lr.max_length, '.2f', ' m')} ({c.length_mode.value})")
        print(f"Max total:    {_fmt(lr.max_total_length, '.2f', ' m')}")

    if result.fuse is not None:
        f = result.fuse
        if f.fuse is None:
            print(f"Fuse:         none safe for {result.section:g} mm2 (min {f.min_rating:.2f} A)")
            if result.current_result is not None:
                # Fuse is sized from the max current, 10% above it overloads the cable
                print("  (fuse +10% over the max current exceeds the cable rating, size it from the actual load)")
        else:
            print(f"Fuse:         {f.fuse:g} A{'' if f.is_common else ' (hard to find)'}")
        if f.suggestion is not None:
            print(f"  suggestion: {f.suggestion.fuse:g} A on {f.suggestion.section:g} mm2")

    if result.price is not None:
        p = result.price
        if p.found:
            print(f"Cable:        {p.entry.name} x {p.length:.2f} m")
            print(f"  purchase:   {_fmt(p.purchase_cost)}")
            print(f"  sale:       {_fmt(p.sale_cost)}")
        else:
            print(f"Cable:        no catalog entry for {result.section:g} mm2")

def _cell(value):
    # Excel has no infinity, openpyxl would leave the cell empty
    if isinstance(value, float) and math.isinf(value):
        return "unbounded"
    return value

def export_to_excel(result: CalculationResult, filename: str) -> None:
    wb = Workbook()
    header_fill = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
    header_font = Font(bold=True)

    # --- Sheet 1: Result ---
    ws1 = wb.active
    ws1.title = "Result"
    ws1.append(["Parameter", "Value"])
    c = result.circuit
    rows = [
        ("Date", datetime.datetime.now().strftime("%Y-%m-%d %H:%M")),
        ("Mode", result.mode.value),
        ("Voltage (V)", c.voltage),
        ("Current (A)", c.current),
        ("Length (m)", c.length),
        ("Length mode", c.length_mode.value),
        ("Section (mm2)", result.section),
    ]
    if result.current_result is not None:
        rows.append(("Max current (A)", result.current_result.max_current))
    if result.length_result is not None:
        rows.append(("Max length (m)", _cell(result.length_result.max_length)))
    if result.fuse is not None:
        rows.append(("Fuse (A)", result.fuse.fuse))
        rows.append(("Common fuse", "yes" if result.fuse.is_common else "no"))
        if result.fuse.suggestion is not None:
            rows.append(("Suggested", f"{result.fuse.suggestion.fuse:g} A on {result.fuse.suggestion.section:g} mm2"))
    if result.price is not None and result.price.found:
        rows.append(("Catalog entry", result.price.entry.name))
        rows.append(("Purchase cost", _cell(result.price.purchase_cost)))
        rows.append(("Sale cost", _cell(result.price.sale_cost)))
    for row in rows:
        ws1.append(list(row))

    # --- Sheet 2: Sections ---
    if result.section_result is not None:
        ws2 = wb.create_sheet("Sections")
        ws2.append(["Section (mm2)", "Imax (A)", "VD (V)", "% VD", "Ampacity OK", "VD OK", "Recommended"])
        for row in result.section_result.candidates:
            ws2.append([
                row.section, row.ampacity, round(row.voltage_drop, 3), round(row.voltage_drop_percent, 2),
                row.ampacity_ok, row.voltage_drop_ok, row.section == result.section_result.section
            ])

    # --- Sheet 3: Reference ---
    ws3 = wb.create_sheet("Reference")
    ws3.append(["Section (mm2)", "Imax (A)"])
    for s, amps in SECTION_AMPACITY.items():
        ws3.append([s, amps])
    ws3.append([])
    ws3.append(["Fuse (A)", "Common"])
    for rating in FUSE_RATINGS:
        ws3.append([rating, "yes" if rating in COMMON_FUSE_RATINGS else "no"])

    for ws in wb.worksheets:
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
        for col in ws.columns:
            ws.column_dimensions[col[0].column_letter].width = 18

    wb.save(filename)
    logger.debug("Excel report written to %s", filename)

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    mode = MODES[args.mode]
    try:
        circuit = circuit_from_args(args)
        validate_circuit(circuit, mode)
        catalog = load_catalog(args.catalog) if args.catalog else None
    except (CircuitInputError, CatalogError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    result = DCCopperCalculator().calculate(circuit, mode, catalog)
    print_result(result)

    if args.excel:
        export_to_excel(result, args.excel)
        print(f"\n[INFO] Excel report: {args.excel}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
