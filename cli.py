from __future__ import annotations

import argparse
import dataclasses
import json
import sys

import requests

from podtato.durations import InvalidDuration
from podtato.logs import configure_logging
from podtato.server import serve
from podtato.settings import settings


def _print(obj) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def _probe(url: str, timeout_s: float) -> dict:
    try:
        r = requests.get(url, timeout=timeout_s)
    except requests.exceptions.RequestException as e:
        return {"ok": False, "status_code": None, "detail": f"{type(e).__name__}: {e}"}
    try:
        body = r.json()
    except ValueError:
        body = r.text
    return {"ok": r.status_code == 200, "status_code": r.status_code, "detail": body}


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="podtato-head server")
    sub = p.add_subparsers(dest="cmd", required=True)

    s_serve = sub.add_parser("serve", help="Run the server")
    s_serve.add_argument(
        "--component",
        default=settings.component,
        help="Role: 'all' (monolith), 'frontend', or a body part name (left-arm, hat, ...)",
    )
    s_serve.add_argument("--host", default=settings.host)
    s_serve.add_argument("--port", type=int, default=settings.port)
    s_serve.add_argument("--startup-delay", default=settings.startup_delay, help="Delay before ready, e.g. 5s")
    s_serve.add_argument("--secret-message", default=settings.secret_message)
    s_serve.add_argument("--log-level", default=settings.log_level)

    s_status = sub.add_parser("status", help="Check liveness and readiness of a running server")
    s_status.add_argument("--url", default=f"http://localhost:{settings.port}", help="Server base URL")
    s_status.add_argument("--timeout", type=float, default=5.0)

    args = p.parse_args(argv)

    if args.cmd == "serve":
        configure_logging(args.log_level)
        config = dataclasses.replace(
            settings,
            component=args.component,
            host=args.host,
            port=args.port,
            startup_delay=args.startup_delay,
            secret_message=args.secret_message,
            log_level=args.log_level,
        )
        try:
            serve(config)
        except InvalidDuration as e:
            print(f"invalid --startup-delay: {e}", file=sys.stderr)
            return 1
        return 0

    if args.cmd == "status":
        base = args.url.rstrip("/")
        report = {
            "healthz": _probe(f"{base}/healthz", args.timeout),
            "readyz": _probe(f"{base}/readyz", args.timeout),
        }
        _print(report)
        return 0 if all(v["ok"] for v in report.values()) else 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
