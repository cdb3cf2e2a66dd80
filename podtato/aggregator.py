from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

import httpx

from . import BODY_PARTS
from .discovery import (
    DiscoveryError,
    LocalServiceDiscoverer,
    ServiceMap,
    connectable_host,
    provide_service_discoverer,
)
from .fetch import fetch_part
from .parts import PartResult, own_hostname
from .settings import Settings

logger = logging.getLogger(__name__)


def daytime(hour: int) -> str:
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"


@dataclass
class AggregatedView:
    hostname: str
    version: str
    daytime: str
    secret_message: str
    parts: dict[str, PartResult] = field(default_factory=dict)

    def part(self, name: str) -> PartResult:
        return self.parts.get(name, PartResult.empty())


class Aggregator:
    """Builds the home page view from the five part services.

    The locator strategy is picked once here, from the role alone. Each
    aggregation pass builds a fresh locator and uses it for all five lookups.
    """

    def __init__(
        self,
        config: Settings,
        transport: httpx.BaseTransport | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.transport = transport
        self.clock = clock
        if config.component == "all":
            self._new_locator: Callable[[], ServiceMap] = lambda: LocalServiceDiscoverer(
                config.port, host=connectable_host(config.host)
            )
        else:
            self._new_locator = lambda: provide_service_discoverer(config)

    def fetch_parts(self) -> dict[str, PartResult]:
        try:
            locator = self._new_locator()
        except DiscoveryError as e:
            logger.warning("failed to get service discoverer: %s", e)
            return {name: PartResult.empty() for name in BODY_PARTS}

        # One attempt per part, in order.
        return {
            name: fetch_part(locator, name, timeout_s=self.config.peer_timeout_s, transport=self.transport)
            for name in BODY_PARTS
        }

    def aggregate(self) -> AggregatedView:
        hostname = own_hostname()
        parts = self.fetch_parts()
        return AggregatedView(
            hostname=hostname,
            version=self.config.version,
            daytime=daytime(self.clock().hour),
            secret_message=self.config.secret_message,
            parts=parts,
        )
