import logging
from typing import Optional
from core.models import FuseResult, FuseSuggestion
from standards.dc_tables import FUSE_RATINGS, COMMON_FUSE_RATINGS, FUSE_MARGIN, STANDARD_SECTIONS, get_ampacity

logger = logging.getLogger(__name__)

class FuseSelector:
    @staticmethod
    def first_rating_at_least(amps: float, ratings) -> Optional[float]:
        for rating in ratings:
            if rating >= amps:
                return rating
        return None

    @staticmethod
    def first_section_for(amps: float, above: float) -> Optional[float]:
        # Strictly larger than the current section
        for section in STANDARD_SECTIONS:
            if section > above and get_ampacity(section) >= amps:
                return section
        return None

    @staticmethod
    def select_fuse(current: float, section: float) -> FuseResult:
        min_rating = current * FUSE_MARGIN

        fuse = FuseSelector.first_rating_at_least(min_rating, FUSE_RATINGS)
        if fuse is not None and fuse > get_ampacity(section):
            # Would not protect the cable
            fuse = None

        is_common = fuse is not None and fuse in COMMON_FUSE_RATINGS
        suggestion = None
        if not is_common:
            common = FuseSelector.first_rating_at_least(min_rating, COMMON_FUSE_RATINGS)
            if common is not None:
                bigger = FuseSelector.first_section_for(common, above=section)
                if bigger is not None:
                    suggestion = FuseSuggestion(section=bigger, fuse=common)

        logger.debug("Fuse for %sA on %s mm2: %s (common=%s, suggestion=%s)", current, section, fuse, is_common, suggestion)
        return FuseResult(fuse=fuse, is_common=is_common, suggestion=suggestion, min_rating=min_rating)
