import asyncio
from typing import List, Optional
import typer
from listing_catalog.core.detail_view import DetailView
from listing_catalog.core.filter_engine import AvailabilityFilter
from listing_catalog.core.highlight import render
from listing_catalog.core.search_coordinator import SearchCoordinator
from listing_catalog.data.base_source import Listing
from listing_catalog.data.sources.listing_api import ListingApiSource
from listing_catalog.utils.config import AppSettings
from listing_catalog.utils.log_setup import configure_logging
from listing_catalog.utils.media import cover_photo_url
import structlog

logger = structlog.get_logger()

app = typer.Typer(add_completion=False, help="Real-estate catalog browser")


def build_source(settings: AppSettings) -> ListingApiSource:
    return ListingApiSource(settings.API_BASE_URL, timeout=settings.HTTP_TIMEOUT)


async def run_search(settings: AppSettings, source, term: str, availability: AvailabilityFilter, token: Optional[str]) -> SearchCoordinator:
    coordinator = SearchCoordinator(
        source,
        credential=token,
        debounce_seconds=settings.debounce_seconds,
        availability=availability,
    )
    async with coordinator:
        if term:
            coordinator.set_search_term(term)
        await coordinator.wait_idle()
    return coordinator


def format_listing(listing: Listing, term: str, settings: AppSettings) -> List[str]:
    status = "available" if listing.available else "unavailable"
    lines = [
        f"{listing.id}  {render(listing.title, term) or '(untitled)'}  [{status}]",
        f"    {listing.type.label} | {render(listing.city, term)} | {render(listing.address, term)}",
        f"    value: {listing.value:,.2f}  rent: {listing.rent_value:,.2f}  company: {listing.company_name}",
        f"    cover: {cover_photo_url(listing, settings.MEDIA_BASE_URL, settings.PHOTO_PLACEHOLDER)}",
    ]
    if listing.description:
        lines.append(f"    {render(listing.description, term)}")
    return lines


@app.command()
def search(
    term: str = typer.Argument("", help="Search text sent to the listing service"),
    availability: AvailabilityFilter = typer.Option(AvailabilityFilter.ALL, case_sensitive=False),
    token: Optional[str] = typer.Option(None, help="Bearer token; defaults to API_TOKEN"),
) -> None:
    """Run one debounced search and print the highlighted results."""
    settings = AppSettings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    coordinator = asyncio.run(
        run_search(settings, build_source(settings), term, availability, token or settings.API_TOKEN)
    )

    counts = coordinator.counts
    typer.echo(
        f"all: {counts[AvailabilityFilter.ALL]}  "
        f"available: {counts[AvailabilityFilter.AVAILABLE]}  "
        f"unavailable: {counts[AvailabilityFilter.UNAVAILABLE]}"
    )
    records = coordinator.records
    if not records:
        typer.echo(f"No listings found for filter {availability.value.lower()}.")
        return
    for listing in records:
        for line in format_listing(listing, term, settings):
            typer.echo(line)


@app.command()
def show(
    listing_id: str = typer.Argument(..., help="Listing id to open"),
    token: Optional[str] = typer.Option(None, help="Bearer token; defaults to API_TOKEN"),
) -> None:
    """Open a listing's detail view and list its gallery photos."""
    settings = AppSettings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    coordinator = asyncio.run(
        run_search(settings, build_source(settings), "", AvailabilityFilter.ALL, token or settings.API_TOKEN)
    )

    listing = next((r for r in coordinator.all_records if r.id == listing_id), None)
    if listing is None:
        typer.echo(f"Listing {listing_id} not found.")
        raise typer.Exit(code=1)

    view = DetailView(media_base=settings.MEDIA_BASE_URL)
    carousel = view.open(listing)
    typer.echo(f"{listing.title} ({view.type_label}) - {view.company_name}")
    typer.echo(f"{listing.address}, {listing.city} - {listing.state}".strip(" ,-"))
    for name, value in view.attributes().items():
        typer.echo(f"  {name}: {value}")
    if not view.has_photos:
        typer.echo("No photos available.")
    else:
        typer.echo(f"Photos ({len(carousel.photos)}, navigation {'on' if carousel.show_controls else 'off'}):")
        for url in carousel.photo_urls:
            typer.echo(f"  {url}")
    view.close()


if __name__ == "__main__":
    app()
