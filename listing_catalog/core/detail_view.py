from typing import Dict, Optional
from listing_catalog.core.gallery import GalleryCarousel
from listing_catalog.data.base_source import Listing
import structlog

logger = structlog.get_logger()


class DetailView:
    def __init__(self, media_base: Optional[str] = None, viewport_width: float = 1.0):
        self.media_base = media_base
        self.viewport_width = viewport_width
        self.listing: Optional[Listing] = None
        self.carousel: Optional[GalleryCarousel] = None

    @property
    def is_open(self) -> bool:
        return self.listing is not None

    def open(self, listing: Listing) -> GalleryCarousel:
        # A fresh carousel per opening so the strip always starts at the first photo
        self.listing = listing
        self.carousel = GalleryCarousel(listing.photos, self.viewport_width, self.media_base)
        logger.debug("detail_view_opened", listing_id=listing.id, photos=len(listing.photos))
        return self.carousel

    def close(self):
        if self.listing is not None:
            logger.debug("detail_view_closed", listing_id=self.listing.id)
        self.listing = None
        self.carousel = None

    @property
    def has_photos(self) -> bool:
        return bool(self.listing and self.listing.photos)

    @property
    def company_name(self) -> str:
        return self.listing.company_name if self.listing else ""

    @property
    def type_label(self) -> str:
        return self.listing.type.label if self.listing else ""

    def attributes(self) -> Dict[str, object]:
        if not self.listing:
            return {}
        return {
            "bedrooms": self.listing.bedrooms or 0,
            "bathrooms": self.listing.bathrooms or 0,
            "built_area": self.listing.built_area or 0,
            "garage": self.listing.garage,
        }
