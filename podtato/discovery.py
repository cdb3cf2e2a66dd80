"""Resolve a body part name to the base URL of the service that serves it."""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol

import yaml

from . import BODY_PARTS
from .settings import Settings


class DiscoveryError(Exception):
    """A service discoverer could not be built."""


class ServiceNotFound(LookupError):
    pass


class UnknownService(ServiceNotFound):
    pass


class ResolutionFailed(ServiceNotFound):
    pass


def url_host(host: str) -> str:
    """Host part of a URL; IPv6 literals need brackets."""
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


WILDCARD_HOSTS = {"", "0.0.0.0", "::", "[::]"}


def connectable_host(bind_host: str) -> str:
    """Address to reach a listener bound to ``bind_host``."""
    if bind_host in WILDCARD_HOSTS:
        return "localhost"
    return bind_host


class ServiceMap(Protocol):
    def get_service_address(self, name: str) -> str: ...


class LocalServiceDiscoverer:
    """Monolith addressing: every part lives next to this process.

    The address is derived from our own port only. With the default offset of
    0 the monolith calls its own part routes.
    """

    def __init__(self, port: int, host: str = "localhost", offset: int = 0) -> None:
        self.port = int(port)
        self.host = host
        self.offset = int(offset)

    def get_service_address(self, name: str) -> str:
        if name not in BODY_PARTS:
            raise UnknownService(f"Unknown service '{name}'.")
        return f"http://{url_host(self.host)}:{self.port + self.offset}"


class EnvironmentServiceDiscoverer:
    """Read Kubernetes-style service variables.

    For prefix ``PODTATO_HEAD`` and service ``left-arm`` this looks at
    ``PODTATO_HEAD_LEFT_ARM_SERVICE_HOST`` and ``..._SERVICE_PORT``.
    """

    def __init__(self, prefix: str = "PODTATO_HEAD", environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix.rstrip("_")
        self.environ = os.environ if environ is None else environ

    def _var(self, name: str, suffix: str) -> str:
        key = name.upper().replace("-", "_")
        if self.prefix:
            return f"{self.prefix}_{key}_{suffix}"
        return f"{key}_{suffix}"

    def get_service_address(self, name: str) -> str:
        host_var = self._var(name, "SERVICE_HOST")
        port_var = self._var(name, "SERVICE_PORT")
        host = self.environ.get(host_var)
        port = self.environ.get(port_var)
        if not host or not port:
            raise ResolutionFailed(f"Service '{name}' is not configured ({host_var} / {port_var}).")
        return f"http://{url_host(host)}:{port}"


class FileServiceDiscoverer:
    """Static ``name: base-url`` mapping loaded from a YAML file."""

    def __init__(self, path: str) -> None:
        self.path = path
        try:
            with open(path, encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            raise DiscoveryError(f"Cannot load services config {path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DiscoveryError(f"Services config {path} must be a mapping of name to URL.")
        self.services: dict[str, str] = {str(k): str(v).rstrip("/") for k, v in data.items() if v}

    def get_service_address(self, name: str) -> str:
        try:
            return self.services[name]
        except KeyError:
            raise ResolutionFailed(f"Service '{name}' is not listed in {self.path}.") from None


def provide_service_discoverer(config: Settings) -> ServiceMap:
    """Generic strategy for roles that talk to remote peers."""
    if config.services_config_path:
        return FileServiceDiscoverer(config.services_config_path)
    return EnvironmentServiceDiscoverer(config.service_env_prefix)
