#!/usr/bin/env python3
"""
Almanac backend health check helper.

- Probes /api/panchangam/health, then fetches and maps one day for a
  popular location to prove the response still decodes.
- Machine-friendly output with exit codes for CI/ops.

Usage examples:
  # Environment from PANCHANGAM_ENV (default: development)
  python tools/check_api_health.py

  # Custom base URL and city
  python tools/check_api_health.py --base https://staging.api.magizh.me --city Madurai

  # JSON output for scripts
  python tools/check_api_health.py --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import time

from dataclasses import replace
from datetime import date

from panchangam.core.config import APIConfig
from panchangam.models.location import DEFAULT_LOCATION, POPULAR_LOCATIONS
from panchangam.services.client import PanchangamAPIClient
from panchangam.services.errors import PanchangamAPIError


async def check_health(config: APIConfig, city: str) -> dict:
    location = next(
        (loc for loc in POPULAR_LOCATIONS if loc.name.lower() == city.lower()), DEFAULT_LOCATION
    )
    async with PanchangamAPIClient(config) as client:
        start = time.perf_counter()
        healthy = await client.check_health()
        result = {
            "ok": healthy,
            "base": config.base_url,
            "health": healthy,
            "location": location.name,
            "latency_sec": round(time.perf_counter() - start, 3),
            "detail": None,
        }
        if not healthy:
            return result
        try:
            day = await client.fetch_daily_model(date.today(), location)
        except PanchangamAPIError as e:
            result.update(ok=False, detail=f"{e.code}: {e}")
            return result
        result["detail"] = f"{day.tamil_date.formatted}, {day.yogam.name.display_name} Yogam"
        result["latency_sec"] = round(time.perf_counter() - start, 3)
    return result


def main() -> int:
    ap = argparse.ArgumentParser(description="Panchangam API health check")
    ap.add_argument("--base", default=None, help="Base URL (default: from PANCHANGAM_ENV)")
    ap.add_argument("--city", default=DEFAULT_LOCATION.name, help="Popular location to fetch")
    ap.add_argument("--timeout", type=float, default=None, help="Request timeout seconds")
    ap.add_argument("--json", action="store_true", help="Emit JSON output")
    args = ap.parse_args()

    config = APIConfig.from_env()
    if args.base:
        config = replace(config, base_url=args.base.rstrip("/"))
    if args.timeout:
        config = replace(config, timeout_seconds=args.timeout)

    result = asyncio.run(check_health(config, args.city))

    if args.json:
        print(json.dumps(result))
    else:
        status = "OK" if result["ok"] else "FAIL"
        print(
            f"[{status}] {result['base']} health={result['health']} "
            f"latency={result['latency_sec']}s detail={result.get('detail')}"
        )

    return 0 if result["ok"] else 1


if __name__ == "__main__":
    sys.exit(main())
