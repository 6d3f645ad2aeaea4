import logging
from typing import Iterable, Optional
from .models import CatalogEntry, PriceResult

logger = logging.getLogger(__name__)

def find_entry(section: float, catalog: Optional[Iterable[CatalogEntry]]) -> Optional[CatalogEntry]:
    """Returns the first catalog entry whose section equals `section` exactly."""
    if not catalog:
        return None
    for entry in catalog:
        if entry.section == section:
            return entry
    return None

def estimate_price(section: float, total_length: float, catalog: Optional[Iterable[CatalogEntry]] = None) -> PriceResult:
    entry = find_entry(section, catalog)
    if entry is None:
        logger.debug("No catalog entry for %s mm2", section)
        return PriceResult(found=False, length=total_length)

    purchase = entry.purchase_price * total_length if entry.purchase_price is not None else None
    sale = entry.sale_price * total_length if entry.sale_price is not None else None
    return PriceResult(found=True, entry=entry, length=total_length, purchase_cost=purchase, sale_cost=sale)
