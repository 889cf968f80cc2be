from typing import List, Optional, Sequence
from listing_catalog.utils.media import resolve_photo_url


class GalleryCarousel:
    """
    Paging state for the photo strip of one open detail view.

    The strip is a single scroll offset over the photos in display order.
    ``next``/``previous`` move by one viewport width and stop at the ends;
    there is no wraparound. Whether the arrows are shown depends only on
    how many photos there are, never on the current offset.
    """

    def __init__(self, photos: Sequence[str], viewport_width: float = 1.0, media_base: Optional[str] = None):
        if viewport_width <= 0:
            raise ValueError("viewport_width must be positive")
        self.photos: List[str] = list(photos or [])
        self.viewport_width = float(viewport_width)
        self.media_base = media_base
        self.scroll_offset = 0.0

    @property
    def show_controls(self) -> bool:
        return len(self.photos) > 1

    @property
    def max_offset(self) -> float:
        return max(0, len(self.photos) - 1) * self.viewport_width

    @property
    def current_index(self) -> int:
        if not self.photos:
            return 0
        index = int(round(self.scroll_offset / self.viewport_width))
        return min(max(index, 0), len(self.photos) - 1)

    @property
    def photo_urls(self) -> List[str]:
        return [resolve_photo_url(p, self.media_base) for p in self.photos]

    def next(self) -> float:
        return self.scroll_to(self.scroll_offset + self.viewport_width)

    def previous(self) -> float:
        return self.scroll_to(self.scroll_offset - self.viewport_width)

    def scroll_to(self, offset: float) -> float:
        self.scroll_offset = min(max(float(offset), 0.0), self.max_offset)
        return self.scroll_offset

    def reset(self):
        self.scroll_offset = 0.0
