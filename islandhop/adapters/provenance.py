"""Provenance helpers for catalog adapters."""

from datetime import UTC, datetime

from islandhop.models.common import Provenance


def provenance_for_fixture(resource: str, record_count: int | None = None) -> Provenance:
    """Create provenance for a catalog read from packaged fixtures.

    Args:
        resource: Catalog resource name (e.g. "locations")
        record_count: Number of normalized records

    Returns:
        Provenance with source="catalog.fixtures.<resource>", fetched_at=now(UTC)
    """
    return Provenance(
        source=f"catalog.fixtures.{resource}",
        ref_id=f"fixtures/{resource}.json",
        source_url=f"fixtures://{resource}.json",
        fetched_at=datetime.now(UTC),
        record_count=record_count,
    )


def provenance_for_http(resource: str, url: str, record_count: int | None = None) -> Provenance:
    """Create provenance for a catalog fetched over HTTP.

    Args:
        resource: Catalog resource name (e.g. "locations")
        url: Full URL of the HTTP request
        record_count: Number of normalized records

    Returns:
        Provenance with source="catalog.http.<resource>", fetched_at=now(UTC)
    """
    return Provenance(
        source=f"catalog.http.{resource}",
        ref_id=resource,
        source_url=url,
        fetched_at=datetime.now(UTC),
        record_count=record_count,
    )
