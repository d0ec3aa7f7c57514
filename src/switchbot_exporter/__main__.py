"""Command line entry point: ``python -m switchbot_exporter``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from switchbot_exporter.config import ExporterConfig
from switchbot_exporter.exceptions import SwitchBotError
from switchbot_exporter.ingestion.advertisement import AdvertisementIngestor
from switchbot_exporter.metrics import build_registry
from switchbot_exporter.scanner import ScanScheduler
from switchbot_exporter.server import start_metrics_server
from switchbot_exporter.state.store import DeviceStateStore

_logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="switchbot-exporter",
        description="Export SwitchBot BLE advertisements as Prometheus metrics.",
    )
    parser.add_argument("--listen", help="Metrics listen address, [host]:port (default: :9012)")
    parser.add_argument("--stale-after", type=float, help="Seconds before a silent device is hidden (default: 60)")
    parser.add_argument("--scan-window", type=float, help="Seconds of active scanning per cycle (default: 11)")
    parser.add_argument("--scan-interval", type=float, help="Length of one scan cycle in seconds (default: 60)")
    parser.add_argument(
        "--passive",
        action="store_const",
        const=False,
        dest="active_scan",
        help="Use passive scanning",
    )
    parser.add_argument("--adapter", help="BLE adapter to use (e.g. hci0)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ExporterConfig:
    return ExporterConfig.from_env(
        listen=args.listen,
        stale_after=args.stale_after,
        scan_window=args.scan_window,
        scan_interval=args.scan_interval,
        active_scan=args.active_scan,
        adapter=args.adapter,
        log_level="DEBUG" if args.verbose else None,
    )


async def run(config: ExporterConfig) -> None:
    store = DeviceStateStore(stale_after=config.stale_after)
    ingestor = AdvertisementIngestor(store)
    host, port = config.listen_address

    runner = await start_metrics_server(build_registry(store), host, port)
    scheduler = ScanScheduler(
        ingestor,
        scan_window=config.scan_window,
        scan_interval=config.scan_interval,
        scanning_mode="active" if config.active_scan else "passive",
        adapter=config.adapter,
    )
    try:
        await scheduler.run()
    finally:
        await runner.cleanup()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        config = build_config(args)
    except SwitchBotError as exc:
        print(f"switchbot-exporter: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        _logger.info("Interrupted, shutting down")
    except (SwitchBotError, OSError) as exc:
        _logger.error("Fatal: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
