#!/usr/bin/env python3
"""Dump all data the pyvoc library can fetch.

This script logs in, discovers vehicles, and calls every read-only
endpoint, printing both the parsed model fields **and** the raw API
JSON so you can spot fields that aren't parsed yet.

Usage
-----
Set environment variables and run::

    export VOC_USERNAME="you@example.com"
    export VOC_PASSWORD="your-password"
    python scripts/dump_all.py

Options::

    --vehicle ID        Only query this vehicle (default: all vehicles)
    --update            Send ``updatestatus`` and wait for it before reading
    --output FILE       Write output to FILE instead of stdout
    --verbose           Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyvoc import VocClient, VocConfig, VocError  # noqa: E402


def _dump_model(model: Any) -> dict[str, Any]:
    return {
        "parsed": model.model_dump(mode="json", exclude={"raw"}),
        "raw": getattr(model, "raw", None),
    }


async def run(args: argparse.Namespace) -> dict[str, Any]:
    config = VocConfig.from_env()
    output: dict[str, Any] = {"vehicles": {}}

    async with VocClient(config) as client:
        account = await client.login()
        output["account"] = _dump_model(account)

        for vehicle in await client.get_vehicles():
            if args.vehicle and vehicle.id != args.vehicle:
                continue
            entry: dict[str, Any] = {"relation": vehicle.model_dump(mode="json")}
            if args.update:
                try:
                    operation = await client.update_status(vehicle)
                    entry["update"] = _dump_model(operation)
                except VocError as exc:
                    entry["update"] = {"error": f"{type(exc).__name__}: {exc}"}
            info = await client.get_vehicle_info(vehicle)
            entry["attributes"] = _dump_model(info.attributes)
            entry["status"] = _dump_model(info.status)
            output["vehicles"][vehicle.id] = entry

    return output


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump all Volvo On Call data for the account.")
    parser.add_argument("--vehicle", help="Only query this vehicle id")
    parser.add_argument("--update", action="store_true", help="Request a status update first")
    parser.add_argument("--output", type=Path, help="Write output to FILE")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        result = asyncio.run(run(args))
    except VocError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    text = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
    else:
        print(text)


if __name__ == "__main__":
    main()
