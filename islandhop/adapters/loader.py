"""One-shot catalog loading.

A session needs three catalogs before anything can be scheduled or priced:
locations, activities and ferries. They are fetched concurrently, each with its
own hard timeout, and any failure fails the whole load (no retry, no partial
catalog). The location -> activity mapping is optional and may fail quietly.
Hotels come from the packaged fixtures.
"""

import asyncio
import json
import time
from pathlib import Path
from typing import Any

import httpx

from islandhop.adapters.catalog import (
    normalize_activities,
    normalize_hotels,
    normalize_location_activities,
    normalize_locations,
    normalize_transit_legs,
)
from islandhop.adapters.provenance import provenance_for_fixture, provenance_for_http
from islandhop.config import Settings, get_settings
from islandhop.inference.moods import MoodInferrer
from islandhop.models.catalog import CatalogBundle, Hotel
from islandhop.models.common import Provenance

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

REQUIRED_RESOURCES = ("locations", "activities", "ferries")
MAPPING_RESOURCE = "location_adventures"


# Exception types
class CatalogLoadError(Exception):
    """A catalog could not be loaded."""

    def __init__(self, resource: str, message: str) -> None:
        super().__init__(f"{resource}: {message}")
        self.resource = resource


class CatalogTimeoutError(CatalogLoadError):
    """A catalog fetch exceeded its timeout."""

    pass


class CatalogFormatError(CatalogLoadError):
    """A catalog payload was not a JSON array of records."""

    pass


# Metrics interface (implemented by utils.metrics)
class CatalogMetrics:
    """Interface for catalog fetch metrics."""

    def record_latency(self, resource: str, outcome: str, latency_ms: float) -> None:
        """Record fetch latency."""
        pass

    def inc_error(self, resource: str, reason: str) -> None:
        """Increment error counter."""
        pass


# Logging interface (implemented by utils.logging)
class CatalogLogger:
    """Interface for structured fetch logging."""

    def log_fetch(
        self,
        resource: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log one fetch."""
        pass


def load_fixture_rows(resource: str) -> list[Any]:
    """Read a raw catalog array from the packaged fixtures."""
    fixtures_path = FIXTURES_DIR / f"{resource}.json"
    with open(fixtures_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise CatalogFormatError(resource, "fixture is not a JSON array")
    return data


def load_fixture_hotels() -> list[Hotel]:
    return normalize_hotels(load_fixture_rows("hotels"))


def load_fixture_bundle(
    *,
    inferrer: MoodInferrer | None = None,
    settings: Settings | None = None,
) -> CatalogBundle:
    """Build a complete catalog bundle from the packaged fixtures."""
    raw = {name: load_fixture_rows(name) for name in (*REQUIRED_RESOURCES, MAPPING_RESOURCE)}

    locations = normalize_locations(raw["locations"], inferrer=inferrer, settings=settings)
    activities = normalize_activities(raw["activities"])
    transit_legs = normalize_transit_legs(raw["ferries"])
    hotels = load_fixture_hotels()

    return CatalogBundle(
        locations=locations,
        activities=activities,
        transit_legs=transit_legs,
        hotels=hotels,
        location_activities=normalize_location_activities(raw[MAPPING_RESOURCE]),
        provenance={
            "locations": provenance_for_fixture("locations", len(locations)),
            "activities": provenance_for_fixture("activities", len(activities)),
            "ferries": provenance_for_fixture("ferries", len(transit_legs)),
            "hotels": provenance_for_fixture("hotels", len(hotels)),
        },
    )


class CatalogLoader:
    """Fetches the reference catalogs over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
        hotels: list[Hotel] | None = None,
        inferrer: MoodInferrer | None = None,
        metrics: CatalogMetrics | None = None,
        logger: CatalogLogger | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            base_url: Directory URL holding the catalog JSON files
            timeout_seconds: Hard timeout per resource (default: settings, 8s)
            client: Optional httpx client (for testing with mocks)
            hotels: Hotel catalog (default: packaged fixtures)
            inferrer: Mood strategy for rows without moods
            metrics: Metrics recorder (optional, defaults to no-op)
            logger: Structured logger (optional, defaults to no-op)
            settings: Override settings
        """
        self._settings = settings or get_settings()
        self.base_url = (base_url or self._settings.catalog_base_url).rstrip("/")
        self.timeout_seconds = timeout_seconds or self._settings.catalog_timeout_seconds
        self._client = client
        self._hotels = hotels
        self._inferrer = inferrer
        self._metrics = metrics or CatalogMetrics()
        self._logger = logger or CatalogLogger()

    def url_for(self, resource: str) -> str:
        return f"{self.base_url}/{resource}.json"

    def _fail(self, error: CatalogLoadError, reason: str, start: float) -> CatalogLoadError:
        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.record_latency(error.resource, reason, elapsed_ms)
        self._metrics.inc_error(error.resource, reason)
        self._logger.log_fetch(error.resource, reason, elapsed_ms, error_reason=str(error))
        return error

    async def fetch_rows(self, client: httpx.AsyncClient, resource: str) -> list[Any]:
        """Fetch one catalog as a list of raw rows.

        Raises:
            CatalogTimeoutError: The fetch exceeded ``timeout_seconds``
            CatalogFormatError: The body was not a JSON array
            CatalogLoadError: Network, HTTP status or any other client error
        """
        url = self.url_for(resource)
        start = time.monotonic()

        try:
            response = await asyncio.wait_for(client.get(url), timeout=self.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except (TimeoutError, httpx.TimeoutException) as e:
            error = CatalogTimeoutError(resource, f"timed out after {self.timeout_seconds}s")
            raise self._fail(error, "timeout", start) from e
        except httpx.HTTPStatusError as e:
            error = CatalogLoadError(resource, f"HTTP {e.response.status_code}")
            raise self._fail(error, "http_status", start) from e
        except httpx.HTTPError as e:
            error = CatalogLoadError(resource, type(e).__name__)
            raise self._fail(error, "network", start) from e
        except ValueError as e:
            error = CatalogFormatError(resource, "response is not valid JSON")
            raise self._fail(error, "format", start) from e
        except Exception as e:
            error = CatalogLoadError(resource, f"unexpected {type(e).__name__}")
            raise self._fail(error, "unexpected", start) from e

        if not isinstance(data, list):
            error = CatalogFormatError(
                resource, f"expected a JSON array, got {type(data).__name__}"
            )
            raise self._fail(error, "format", start)

        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.record_latency(resource, "success", elapsed_ms)
        self._logger.log_fetch(resource, "success", elapsed_ms)
        return data

    async def _fetch_mapping(self, client: httpx.AsyncClient) -> list[Any]:
        try:
            return await self.fetch_rows(client, MAPPING_RESOURCE)
        except CatalogLoadError:
            # Suggestions fall back to island matching without the mapping
            return []

    async def load(self) -> CatalogBundle:
        """Fetch and normalize every catalog.

        Returns:
            CatalogBundle with provenance per resource

        Raises:
            CatalogLoadError: A required catalog failed. When several fail, the
                error for the first in ``REQUIRED_RESOURCES`` order is raised.
        """
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self.timeout_seconds)
            close_client = True

        try:
            results = await asyncio.gather(
                *(self.fetch_rows(client, resource) for resource in REQUIRED_RESOURCES),
                self._fetch_mapping(client),
                return_exceptions=True,
            )
        finally:
            if close_client:
                await client.aclose()

        for result in results:
            if isinstance(result, BaseException):
                raise result

        locations_rows, activity_rows, ferry_rows, mapping_rows = results
        locations = normalize_locations(
            locations_rows, inferrer=self._inferrer, settings=self._settings
        )
        activities = normalize_activities(activity_rows)
        transit_legs = normalize_transit_legs(ferry_rows)
        hotels = self._hotels if self._hotels is not None else load_fixture_hotels()

        provenance: dict[str, Provenance] = {
            "locations": provenance_for_http(
                "locations", self.url_for("locations"), len(locations)
            ),
            "activities": provenance_for_http(
                "activities", self.url_for("activities"), len(activities)
            ),
            "ferries": provenance_for_http("ferries", self.url_for("ferries"), len(transit_legs)),
            "hotels": provenance_for_fixture("hotels", len(hotels)),
        }

        return CatalogBundle(
            locations=locations,
            activities=activities,
            transit_legs=transit_legs,
            hotels=hotels,
            location_activities=normalize_location_activities(mapping_rows),
            provenance=provenance,
        )
