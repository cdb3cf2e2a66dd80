import sys

import httpx
import pytest

# Ensure project root is importable (so `import podtato` and `import cli` work without installing)
import os as _os
_project_root = _os.path.dirname(_os.path.dirname(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from podtato.settings import Settings  # noqa: E402


@pytest.fixture
def make_settings():
    """Settings independent of the PODTATO_* variables of the test environment."""

    def _make(**overrides) -> Settings:
        base = dict(
            component="all",
            host="0.0.0.0",
            port=9000,
            startup_delay="",
            secret_message="",
            version="v-test",
            part_number="01",
            peer_timeout_s=0.5,
            services_config_path=None,
            service_env_prefix="PODTATO_TEST",
            log_level="INFO",
        )
        base.update(overrides)
        return Settings(**base)

    return _make


@pytest.fixture
def refusing_transport():
    """Transport whose every request fails like a closed port."""
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport
