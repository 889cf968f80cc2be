from typing import Optional
from urllib.parse import urlparse
from listing_catalog.data.base_source import Listing

DEFAULT_PLACEHOLDER = "/images/placeholder.png"


def is_absolute_url(ref: str) -> bool:
    parsed = urlparse(ref)
    return bool(parsed.scheme) and (bool(parsed.netloc) or parsed.scheme in ("data", "blob"))


def resolve_photo_url(ref: str, media_base: Optional[str]) -> str:
    """Absolute URLs pass through untouched, bare filenames are joined to the media base."""
    if is_absolute_url(ref) or not media_base:
        return ref
    return f"{media_base.rstrip('/')}/{ref.lstrip('/')}"


def cover_photo_url(listing: Listing, media_base: Optional[str], placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    if not listing.photos:
        return placeholder
    return resolve_photo_url(listing.photos[0], media_base)
