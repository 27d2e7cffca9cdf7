"""Run the WebSocket subject server with its animation ticker."""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

from glow_label.animation import PeriodicTicker
from glow_label.config import GlowLabelConfig, load_config
from glow_label.control import LabelServer
from glow_label.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Entry point for glow-label-serve command."""
    parser = argparse.ArgumentParser(
        description="Serve animated gradient labels over WebSocket"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--host",
        help="Host to bind to (default: from config, localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: from config, 9877)",
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else GlowLabelConfig.with_defaults()
    except (OSError, ValueError) as e:
        print(f"[SERVER] Could not load config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level, config.logging.file)

    server = LabelServer(config, host=args.host, port=args.port)

    print("=" * 60)
    print("  glow-label server")
    print("=" * 60)
    print()
    print(f"  Connect to:  ws://{server.host}:{server.port}/ws")
    print(f"  Tick period: {config.animation.period * 1000:.0f}ms")
    print()
    print("=" * 60)

    try:
        server_thread = server.start_in_thread()
    except OSError as e:
        print(f"[SERVER] Server failed to start: {e}", file=sys.stderr)
        return 1

    stop_requested = threading.Event()

    def signal_handler(sig, frame):
        stop_requested.set()
        print("\n[SERVER] Shutting down...")

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    ticker = PeriodicTicker(server.scheduler.on_tick, config.animation.period, name="LabelTicker")
    ticker.start()

    try:
        while not stop_requested.wait(0.5):
            pass
    finally:
        # Ticker first, so no tick runs against a closing server
        ticker.stop()
        server.stop_thread()
        server_thread.join(timeout=2.0)
        server.scheduler.clear()
        logger.info("Stopped after %d ticks", ticker.tick_count)

    return 0


if __name__ == "__main__":
    sys.exit(main())
