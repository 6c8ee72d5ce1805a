#!/usr/bin/env python
"""Onboard providers, event metadata and registrations from a JSON file."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from aio_toolkit.config import Settings, get_settings
from aio_toolkit.io_events import IOEventsClient
from aio_toolkit.observability.logging import configure_logging, get_logger
from aio_toolkit.onboarding import OnboardEvents, OnboardEventsConfig, build_summary

logger = get_logger("onboard_events")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Onboard Adobe I/O Events entities")
    parser.add_argument("input", type=Path, help="JSON file with a top-level 'providers' list")
    parser.add_argument("--project-name", help="Overrides AIO_PROJECT_NAME")
    parser.add_argument("--log-level", help="Overrides AIO_LOG_LEVEL")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, settings: Settings) -> OnboardEventsConfig:
    """Merge command line overrides into settings and validate the result."""
    return OnboardEventsConfig.from_settings(settings, project_name=args.project_name)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    settings = get_settings()
    configure_logging(
        level=args.log_level or settings.log_level,
        json_format=settings.log_json,
    )

    config = build_config(args, settings)
    input_data = json.loads(args.input.read_text(encoding="utf-8"))

    client = IOEventsClient.from_settings(settings)
    onboard = OnboardEvents(
        config,
        provider_store=client.providers,
        event_metadata_store=client.event_metadata,
        registration_store=client.registrations,
    )
    try:
        response = await onboard.process(input_data)
    finally:
        await client.close()

    overall = build_summary(response).overall
    print(json.dumps(response.to_dict(), indent=2, default=str))
    logger.info(
        f"Processed {overall.total_processed}: {overall.total_created} created, "
        f"{overall.total_existing} existing, {overall.total_failed} failed"
    )
    return 1 if overall.total_failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
