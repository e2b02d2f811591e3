#!/usr/bin/env python3
"""
ACRCloud connectivity check.

Sends a 1024-byte silent buffer through the recognition gateway and reports
what the vendor answered. A "no result" (1001) answer means the credentials
and network path work.

Usage:
  clipfinder-check
  clipfinder-check --host identify-eu-west-1.acrcloud.com --timeout-ms 5000
"""
import argparse
import asyncio
import dataclasses
import json
import sys
from typing import Callable, List, Optional

from .recognition import ProviderError, RecognitionGateway
from .settings import AcrCloudSettings, load_settings

ENV_TEMPLATE = (
    "ACR_ACCESS_KEY=your_access_key",
    "ACR_ACCESS_SECRET=your_access_secret",
    "ACR_HOST=identify-us-west-2.acrcloud.com",
)


def mask_key(access_key: str, visible: int = 8) -> str:
    return f"{access_key[:visible]}..."


def failure_hint(message: str) -> Optional[str]:
    lowered = message.lower()
    if "timeout" in lowered:
        return "This might be a network connectivity issue."
    if "unauthorized" in lowered or "403" in lowered:
        return "Please check your ACRCloud credentials."
    return None


async def run_check(
    cfg: AcrCloudSettings,
    *,
    gateway: Optional[RecognitionGateway] = None,
    out: Callable[[str], None] = print,
) -> int:
    out("Testing ACRCloud API connection...")

    if not cfg.has_credentials:
        out("Missing ACRCloud credentials!")
        out("Please create a .env file with:")
        for line in ENV_TEMPLATE[:2]:
            out(line)
        out("Get your credentials from: https://console.acrcloud.com/")
        return 2

    out("Credentials found")
    out(f"Host: {cfg.host}")
    out(f"Access Key: {mask_key(cfg.access_key or '')}")

    gw = gateway or RecognitionGateway.from_settings(cfg)
    if not gw.is_ready:
        out("ACRCloud client could not be initialized")
        return 1

    report = await gw.test_provider()
    if report.raw_response is None:
        message = report.outcome.message if isinstance(report.outcome, ProviderError) else "unknown failure"
        out("ACRCloud API test failed:")
        out(message)
        hint = failure_hint(message)
        if hint:
            out(hint)
        return 1

    out("API Response:")
    out(json.dumps(report.raw_response, indent=2, ensure_ascii=False))

    raw = report.raw_response
    status = raw.get("status") if isinstance(raw, dict) else None
    if not isinstance(status, dict):
        status = {}
    code = status.get("code")
    if code == 1001:
        out("ACRCloud API is working! (No music found in test buffer - this is expected)")
    elif code == 0:
        out("ACRCloud API is working and found music!")
    else:
        out(f"API returned status code: {code} - {status.get('msg')}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Check ACRCloud credentials and connectivity")
    parser.add_argument("--host", help="override ACR_HOST")
    parser.add_argument("--timeout-ms", type=int, help="override ACR_TIMEOUT_MS")
    args = parser.parse_args(argv)

    cfg = load_settings().acrcloud
    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.timeout_ms:
        overrides["timeout_ms"] = args.timeout_ms
    if overrides:
        cfg = dataclasses.replace(cfg, **overrides)

    return asyncio.run(run_check(cfg))


if __name__ == "__main__":
    sys.exit(main())
