import httpx
from typing import List, Optional
from pydantic import ValidationError
from listing_catalog.data.base_source import BaseListingSource, Listing
from listing_catalog.data.errors import AuthError, MalformedDataError, NetworkError, ServerError
import structlog

logger = structlog.get_logger()

PRIVATE_PATH = "/listings"
PUBLIC_PATH = "/listings/public"


class ListingApiSource(BaseListingSource):
    """
    Fetches the listing collection from the catalog service.

    Authenticated callers read the full collection; anonymous callers are
    always routed to the public subset, whatever they search for.
    """

    def __init__(self, base_url: str, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client

    def endpoint_for(self, credential: Optional[str]) -> str:
        path = PRIVATE_PATH if credential else PUBLIC_PATH
        return f"{self.base_url}{path}"

    async def fetch(self, term: str, credential: Optional[str] = None) -> List[Listing]:
        url = self.endpoint_for(credential)
        headers = {"Authorization": f"Bearer {credential}"} if credential else {}
        query_params = {"search": term or ""}

        logger.debug("fetching_listings", url=url, term=term, authenticated=bool(credential))

        try:
            if self.client is not None:
                response = await self.client.get(url, params=query_params, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=query_params, headers=headers)
        except httpx.TransportError as e:
            raise NetworkError(f"listing service unreachable: {e}") from e

        if response.status_code in (401, 403):
            raise AuthError(f"credential rejected with status {response.status_code}")
        if not response.is_success:
            raise ServerError(
                f"listing service answered {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedDataError("listing response is not valid JSON") from e
        if not isinstance(data, list):
            raise MalformedDataError(f"expected a JSON array of listings, got {type(data).__name__}")

        return parse_listings(data)


def parse_listings(items: list) -> List[Listing]:
    listings = []
    seen_ids = set()
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("listing_record_dropped", position=position, reason="not_an_object")
            continue
        try:
            listing = Listing.model_validate(item)
        except ValidationError as e:
            logger.warning("listing_record_dropped", position=position, reason=str(e.errors()[0]["msg"]))
            continue
        if listing.id in seen_ids:
            logger.warning("listing_record_dropped", position=position, reason="duplicate_id", listing_id=listing.id)
            continue
        seen_ids.add(listing.id)
        listings.append(listing)
    return listings
