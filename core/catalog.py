"""
Cable price catalog.

Catalog rows come from the accessory catalog export (CSV or Excel). Product
names are free text, so the cable section is extracted from the name with an
ordered list of strategies; the first one that matches wins. Rows with no
recognisable section are skipped, they cannot be used for pricing.
"""
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

import pandas as pd

from .models import CatalogEntry

logger = logging.getLogger(__name__)

class CatalogError(ValueError):
    pass

_NUMBER = r"(\d+(?:[.,]\d+)?)"

_MM2_SYMBOL = re.compile(_NUMBER + r"\s*mm\s*²", re.IGNORECASE)
_MM2_ASCII = re.compile(_NUMBER + r"\s*mm2\b", re.IGNORECASE)
_SECTION_WORD = re.compile(r"section\s*:?\s*" + _NUMBER, re.IGNORECASE)
_LEADING_DASH = re.compile(r"^\s*" + _NUMBER + r"\s*-")

# Accepted column names -> internal field
COLUMN_ALIASES = {
    "id": "id",
    "reference": "id",
    "name": "name",
    "nom": "name",
    "nom_accessoire": "name",
    "section": "section",
    "section_mm2": "section",
    "purchase_price": "purchase_price",
    "prix_reference": "purchase_price",
    "prix_achat": "purchase_price",
    "sale_price": "sale_price",
    "prix_vente_ttc": "sale_price",
    "prix_vente": "sale_price",
}


def _to_float(text: str) -> float:
    return float(text.replace(",", "."))


def _regex_strategy(pattern: "re.Pattern") -> Callable[[str], Optional[float]]:
    def extract(name: str) -> Optional[float]:
        match = pattern.search(name)
        return _to_float(match.group(1)) if match else None
    return extract


# Order matters
SECTION_STRATEGIES: List[Callable[[str], Optional[float]]] = [
    _regex_strategy(_MM2_SYMBOL),
    _regex_strategy(_MM2_ASCII),
    _regex_strategy(_SECTION_WORD),
    _regex_strategy(_LEADING_DASH),
]


def extract_section(name: str, strategies: Optional[Iterable[Callable[[str], Optional[float]]]] = None) -> Optional[float]:
    """Returns the cable section (mm2) found in a product name, or None."""
    if not name:
        return None
    for strategy in (strategies or SECTION_STRATEGIES):
        section = strategy(name)
        if section is not None:
            return section
    return None


def _optional_price(value: Any, ctx: str) -> Optional[float]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        value = value.replace(",", ".")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Price must be numeric in {ctx}. Value={value!r}") from e


def build_catalog(rows: Iterable[Dict[str, Any]]) -> List[CatalogEntry]:
    """Builds catalog entries from rows keyed by internal field names."""
    entries = []
    for idx, row in enumerate(rows):
        name = row.get("name")
        if name is None or (not isinstance(name, str) and pd.isna(name)):
            continue
        name = str(name)

        section = row.get("section")
        if section is None or (not isinstance(section, str) and pd.isna(section)):
            section = extract_section(name)
        elif isinstance(section, str):
            try:
                section = _to_float(section.strip())
            except ValueError:
                section = extract_section(section)
        else:
            section = float(section)

        if section is None:
            logger.debug("Skipping catalog row %s, no section in %r", idx, name)
            continue

        raw_id = row.get("id")
        entry_id = str(idx) if raw_id is None or (not isinstance(raw_id, str) and pd.isna(raw_id)) else str(raw_id)
        ctx = f"row {idx} ({name})"
        entries.append(CatalogEntry(
            id=entry_id,
            name=name,
            section=section,
            purchase_price=_optional_price(row.get("purchase_price"), ctx),
            sale_price=_optional_price(row.get("sale_price"), ctx),
        ))
    return entries


def load_catalog(path) -> List[CatalogEntry]:
    """Reads a CSV or Excel catalog file."""
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path)
    elif suffix in (".xlsx", ".xlsm"):
        df = pd.read_excel(path, engine="openpyxl")
    else:
        raise CatalogError(f"Unsupported catalog format: {path.suffix}")

    df = df.rename(columns=lambda c: COLUMN_ALIASES.get(str(c).strip().lower(), str(c).strip().lower()))
    # Keep the first column when two aliases map to the same field
    df = df.loc[:, ~df.columns.duplicated()]
    if "name" not in df.columns:
        raise CatalogError(f"Catalog {path.name} has no name column (expected one of: name, nom)")

    entries = build_catalog(df.to_dict("records"))
    logger.debug("Loaded %s catalog entries from %s (%s rows)", len(entries), path, len(df))
    return entries
