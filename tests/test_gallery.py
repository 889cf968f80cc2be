import pytest
from conftest import make_listing
from listing_catalog.core.detail_view import DetailView
from listing_catalog.core.gallery import GalleryCarousel

MEDIA_BASE = "http://localhost:5000/uploads/imoveis"


def test_single_photo_hides_controls():
    assert GalleryCarousel(["front.jpg"]).show_controls is False
    assert GalleryCarousel([]).show_controls is False


def test_multiple_photos_show_controls_regardless_of_offset():
    carousel = GalleryCarousel(["a.jpg", "b.jpg", "c.jpg"])

    assert carousel.show_controls is True
    carousel.next()
    carousel.next()
    assert carousel.show_controls is True


def test_next_then_previous_returns_to_start():
    carousel = GalleryCarousel(["a.jpg", "b.jpg", "c.jpg"], viewport_width=640)

    assert carousel.next() == 640
    assert carousel.previous() == 0
    assert carousel.scroll_offset == 0


def test_navigation_stops_at_the_ends_without_wrapping():
    carousel = GalleryCarousel(["a.jpg", "b.jpg", "c.jpg"])

    carousel.previous()
    assert carousel.scroll_offset == 0
    assert carousel.current_index == 0

    for _ in range(5):
        carousel.next()
    assert carousel.scroll_offset == carousel.max_offset == 2.0
    assert carousel.current_index == 2


def test_scroll_to_is_clamped():
    carousel = GalleryCarousel(["a.jpg", "b.jpg"], viewport_width=100)

    assert carousel.scroll_to(-50) == 0
    assert carousel.scroll_to(1000) == 100
    assert carousel.scroll_to(60) == 60
    assert carousel.current_index == 1


def test_reset_returns_to_first_photo():
    carousel = GalleryCarousel(["a.jpg", "b.jpg"])
    carousel.next()

    carousel.reset()

    assert carousel.scroll_offset == 0


def test_photo_order_is_preserved_and_urls_resolved():
    carousel = GalleryCarousel(["b.jpg", "https://cdn.example.com/a.jpg"], media_base=MEDIA_BASE)

    assert carousel.photo_urls == [f"{MEDIA_BASE}/b.jpg", "https://cdn.example.com/a.jpg"]


def test_viewport_width_must_be_positive():
    with pytest.raises(ValueError):
        GalleryCarousel(["a.jpg"], viewport_width=0)


def test_detail_view_resets_carousel_on_every_open():
    listing = make_listing(1, photos=["a.jpg", "b.jpg", "c.jpg"])
    view = DetailView(media_base=MEDIA_BASE)

    first = view.open(listing)
    first.next()
    view.close()
    second = view.open(listing)

    assert second is not first
    assert second.scroll_offset == 0
    assert second.photos == ["a.jpg", "b.jpg", "c.jpg"]


def test_detail_view_close_discards_state():
    view = DetailView()
    view.open(make_listing(1, photos=["a.jpg"]))

    view.close()

    assert view.is_open is False
    assert view.carousel is None
    assert view.attributes() == {}


def test_detail_view_summary():
    listing = make_listing(
        1,
        type="APARTMENT",
        bedrooms=2,
        garage=True,
        company={"name": "Litoral Imóveis"},
    )
    view = DetailView()
    view.open(listing)

    assert view.has_photos is False
    assert view.type_label == "Apartment"
    assert view.company_name == "Litoral Imóveis"
    assert view.attributes() == {"bedrooms": 2, "bathrooms": 0, "built_area": 0, "garage": True}
