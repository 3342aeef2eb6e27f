#!/usr/bin/env python3
"""Live monitor for the TICS smoke sensor and proximity bracelet.

Connects to the broker, prints every status snapshot and logs alerts
until interrupted (or until ``--duration`` elapses).
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytics import AlertEvent, ProximityMode, StatusSnapshot, TicsConfig, TicsMonitor  # noqa: E402

_LOG = logging.getLogger("tics_monitor")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Monitor the TICS device topics and print status snapshots.",
    )
    parser.add_argument(
        "--broker",
        default=None,
        help="Broker URL (default: TICS_BROKER_URL or tcp://broker.hivemq.com:1883).",
    )
    parser.add_argument(
        "--duration",
        type=int,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument(
        "--proximity-mode",
        choices=[mode.value for mode in ProximityMode],
        default=None,
        help="Derive proximity from signal strength or read the braceletNear topic.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args()


def _print_snapshot(snapshot: StatusSnapshot) -> None:
    alarm = {1: "ALERT", 0: "OK"}.get(snapshot.alarm, "N/A")
    if not snapshot.distance_available:
        bracelet = "DISCONNECTED"
    elif snapshot.proximity == 1:
        bracelet = "CONNECTED"
    else:
        bracelet = "OUT OF SAFE ZONE"
    distance = f"{snapshot.distance_m:.2f} m" if snapshot.distance_available else "N/A"
    print(f"[monitor] smoke={alarm} bracelet={bracelet} rssi={snapshot.signal_strength} distance={distance}")


def _print_alert(alert: AlertEvent) -> None:
    print(f"[monitor] ALERT {alert.kind}: {alert.title} {alert.message}")


async def _run(config: TicsConfig, duration: int) -> int:
    async with TicsMonitor(config, on_alert=_print_alert) as monitor:
        monitor.subscribe(_print_snapshot)

        stop_requested = asyncio.Event()
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(signum, stop_requested.set)

        print(f"[monitor] Connecting to {config.broker_url}...")
        if not await monitor.start():
            print("[monitor] Connection failed; state stays unknown.", file=sys.stderr)

        runner = asyncio.ensure_future(monitor.run())
        stopper = asyncio.ensure_future(stop_requested.wait())
        done, _pending = await asyncio.wait(
            {runner, stopper},
            timeout=duration if duration > 0 else None,
            return_when=asyncio.FIRST_COMPLETED,
        )
        if not done:
            print(f"[monitor] Reached --duration={duration}s, stopping.")
        stopper.cancel()
        await monitor.stop()
        await runner
    return 0


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, str] = {}
    if args.broker:
        overrides["broker_url"] = args.broker
    if args.proximity_mode:
        overrides["proximity_mode"] = args.proximity_mode
    config = TicsConfig.from_env(**overrides)
    _LOG.debug("Starting monitor with %s", config)

    try:
        return asyncio.run(_run(config, args.duration))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(_main())
