from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .discovery import ServiceMap, ServiceNotFound
from .parts import PartResult

logger = logging.getLogger(__name__)


def part_url(base_url: str, name: str) -> str:
    return f"{base_url.rstrip('/')}/images/{name}/{name}"


def fetch_part(
    locator: ServiceMap,
    name: str,
    *,
    timeout_s: float = 2.0,
    transport: httpx.BaseTransport | None = None,
) -> PartResult:
    """Ask the service for ``name`` which image it serves.

    Never raises: resolution, connection, read and decode failures all
    return ``PartResult.empty()`` after logging a warning.
    """
    try:
        base_url = locator.get_service_address(name)
    except ServiceNotFound as e:
        logger.warning("failed to discover address for service %s: %s", name, e)
        return PartResult.empty()

    url = part_url(base_url, name)
    try:
        with httpx.Client(timeout=timeout_s, transport=transport, follow_redirects=False) as client:
            with client.stream("GET", url) as resp:
                try:
                    body = resp.read()
                except httpx.HTTPError as e:
                    logger.warning("failed to read body of dependency service response from %s: %s", url, e)
                    return PartResult.empty()
                status = resp.status_code
    except httpx.HTTPError as e:
        logger.warning("failed to reach dependency service %s: %s: %s", url, type(e).__name__, e)
        return PartResult.empty()
    except Exception as e:
        logger.warning("unexpected error calling %s: %s: %s", url, type(e).__name__, e)
        return PartResult.empty()

    if status != 200:
        logger.warning("dependency service %s answered HTTP %s", url, status)
        return PartResult.empty()

    try:
        return PartResult.model_validate_json(body)
    except ValidationError as e:
        logger.warning("failed to decode body of dependency service response from %s: %s", url, e)
        return PartResult.empty()
