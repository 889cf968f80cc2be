import asyncio
from typing import List, Optional
import pytest
import structlog
from listing_catalog.data.base_source import BaseListingSource, Listing


def make_listing(listing_id, title="Listing", available=True, **fields) -> Listing:
    return Listing(id=str(listing_id), title=title, available=available, **fields)


async def settle(rounds: int = 5):
    for _ in range(rounds):
        await asyncio.sleep(0)


class StaticSource(BaseListingSource):
    """Answers every fetch right away, optionally per term."""

    def __init__(self, listings=None, by_term=None, errors=None):
        self.listings = listings or []
        self.by_term = by_term or {}
        self.errors = list(errors or [])
        self.calls = []

    async def fetch(self, term: str, credential: Optional[str] = None) -> List[Listing]:
        self.calls.append((term, credential))
        if self.errors:
            error = self.errors.pop(0)
            if error is not None:
                raise error
        return list(self.by_term.get(term, self.listings))


class ScriptedSource(BaseListingSource):
    """Parks every fetch on a future the test resolves by hand."""

    def __init__(self):
        self.calls = []

    async def fetch(self, term: str, credential: Optional[str] = None) -> List[Listing]:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((term, credential, future))
        return await future

    def resolve(self, index: int, listings):
        self.calls[index][2].set_result(listings)

    def fail(self, index: int, error: Exception):
        self.calls[index][2].set_exception(error)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def listings():
    return [
        make_listing(1, "Casa em São Paulo", available=True, city="São Paulo"),
        make_listing(2, "Apartment downtown", available=False, city="Campinas"),
        make_listing(3, "Beach house", available=True, city="Santos"),
        make_listing(4, "Warehouse", available=False, city="São Paulo", type="COMMERCIAL"),
    ]
