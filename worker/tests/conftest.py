import sys
from pathlib import Path

import pytest

# Ensure `listing_scraper` package is importable when running pytest from the worker directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from listing_scraper.core.config import Settings  # noqa: E402
from listing_scraper.scrape import fields  # noqa: E402
from listing_scraper.scrape.loader import FEED_SELECTOR  # noqa: E402
from listing_scraper.scrape.navigation import NavigationError  # noqa: E402


class DummyElement:
    def __init__(self, text="", attrs=None):
        self.text = text
        self.attrs = dict(attrs or {})


class DummyListing(DummyElement):
    def __init__(self, name, url, detail=None, open_fails=False):
        super().__init__(attrs={"aria-label": name, "href": url})
        self.url = url
        self.detail = detail or {}
        self.open_fails = open_fails


class DummyPage:
    """In-memory stand-in for the Playwright page adapter."""

    def __init__(self, listings=(), extents=(1000,), has_feed=True, extra_anchors=(), fail_navigation=False):
        self.listings = list(listings)
        self.extents = list(extents)
        self.has_feed = has_feed
        self.extra_anchors = list(extra_anchors)
        self.fail_navigation = fail_navigation
        self.feed = DummyElement()
        self.url = "about:blank"
        self.detail = {}
        self.pane_open = False
        self.navigations = []
        self.clicks = []
        self.scrolls = 0
        self.waits = []

    async def navigate(self, url, *, wait_until="networkidle", timeout_ms):
        self.navigations.append((url, wait_until, timeout_ms))
        if self.fail_navigation:
            raise NavigationError(f"{url} did not settle")
        self.url = url

    async def query_all(self, selector):
        return self.listings + self.extra_anchors

    async def query_one(self, selector, scope=None):
        if selector == FEED_SELECTOR:
            return self.feed if self.has_feed else None
        return self.detail.get(selector)

    async def read_text(self, element):
        return element.text

    async def read_attribute(self, element, name):
        return element.attrs.get(name)

    async def click(self, element, *, timeout_ms):
        self.clicks.append(element)
        if getattr(element, "open_fails", False):
            self.detail = {}
            self.pane_open = False
            return
        self.pane_open = True
        self.detail = element.detail
        self.url = element.url

    async def scroll_by(self, element, distance):
        self.scrolls += 1

    async def measure_extent(self, element):
        if len(self.extents) > 1:
            return self.extents.pop(0)
        return self.extents[0]

    def current_url(self):
        return self.url

    async def wait(self, duration_ms):
        self.waits.append(duration_ms)

    async def wait_for_selector(self, selector, *, timeout_ms):
        if not self.pane_open:
            raise NavigationError(f"{selector} not queryable within {timeout_ms} ms")


def build_detail(address="", website="", phone="", reviews="", rating=""):
    """Detail pane controls keyed by selector; empty values leave the control out."""
    detail = {}
    if address:
        detail[fields.ADDRESS_SELECTOR] = DummyElement(text=address)
    if website:
        detail[fields.WEBSITE_SELECTOR] = DummyElement(text=website)
    if phone:
        detail[fields.PHONE_SELECTOR] = DummyElement(text=phone)
    if reviews:
        detail[fields.REVIEWS_COUNT_SELECTOR] = DummyElement(text=reviews)
    if rating:
        detail[fields.REVIEWS_AVERAGE_SELECTOR] = DummyElement(attrs={"aria-label": rating})
    return detail


def place_url(slug, lat, lon):
    return f"https://www.google.com/maps/place/{slug}/data=!4m7!3m6!1s0x0:0x1!8m2!3d{lat}!4d{lon}!16s%2Fg%2F1"


@pytest.fixture
def settings():
    return Settings(navigation_timeout_ms=1000, detail_timeout_ms=500, field_timeout_ms=500)


@pytest.fixture
def dummy():
    """Factories for dummy page objects."""

    class Factory:
        Element = DummyElement
        Listing = DummyListing
        Page = DummyPage
        detail = staticmethod(build_detail)
        url = staticmethod(place_url)

    return Factory
