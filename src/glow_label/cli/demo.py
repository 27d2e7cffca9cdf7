"""Terminal demo: animated gradient labels in a truecolor terminal.

Each --name becomes a local subject with its own animation state, redrawn
in place every tick.
"""

import argparse
import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path

from glow_label.animation import AnimationScheduler, PeriodicTicker
from glow_label.config import GlowLabelConfig, LabelConfig, load_config
from glow_label.gradient import parse_notation
from glow_label.logging_config import setup_logging
from glow_label.text import TextComponent, gradientize

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\x1b[2K"


@dataclass
class ConsoleSubject:
    """A named subject whose latest frame is kept for the next redraw."""
    key: str
    label_config: LabelConfig
    frame: TextComponent | None = None

    def label(self) -> str:
        return self.label_config.render(self.key)

    def deliver(self, component: TextComponent) -> None:
        self.frame = component


@dataclass
class ConsoleRegistry:
    """Fixed set of local subjects."""
    subjects: list[ConsoleSubject] = field(default_factory=list)

    def active_subjects(self) -> list[ConsoleSubject]:
        return list(self.subjects)


def draw(registry: ConsoleRegistry, first: bool) -> None:
    """Redraw one line per subject, moving the cursor back up after the first frame."""
    lines = []
    for subject in registry.subjects:
        text = subject.frame.to_ansi() if subject.frame else ""
        lines.append(CLEAR_LINE + text)
    if not first and lines:
        sys.stdout.write(f"\x1b[{len(lines)}F")
    sys.stdout.write("\n".join(lines) + "\n")
    sys.stdout.flush()


def preview(notation: str, names: list[str], config: GlowLabelConfig) -> int:
    """Render one static line per name with a parsed notation."""
    result = parse_notation(notation)
    if not result.ok:
        print(f"[DEMO] Invalid gradient notation: {result.error}", file=sys.stderr)
        return 2

    flags = config.label.formatting_flags()
    for name in names:
        component = gradientize(config.label.render(name), result.unwrap(), flags)
        print(component.to_ansi())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for glow-label-demo command."""
    parser = argparse.ArgumentParser(
        description="Animate gradient labels in the terminal"
    )
    parser.add_argument(
        "--name",
        action="append",
        dest="names",
        help="Subject name (repeatable, default: Steve)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Stop after this many ticks (default: run until Ctrl+C)",
    )
    parser.add_argument(
        "--preview",
        metavar="NOTATION",
        help='Render a static gradient once, e.g. "<#FF0000:0 #0000FF:1>"',
    )

    args = parser.parse_args(argv)
    names = args.names or ["Steve"]

    try:
        config = load_config(args.config) if args.config else GlowLabelConfig.with_defaults()
    except (OSError, ValueError) as e:
        print(f"[DEMO] Could not load config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level, config.logging.file)

    if args.preview is not None:
        return preview(args.preview, names, config)

    registry = ConsoleRegistry([ConsoleSubject(name, config.label) for name in names])
    scheduler = AnimationScheduler(
        registry,
        config.animation,
        formatting=config.label.formatting_flags(),
    )

    done = threading.Event()
    first_frame = [True]

    def tick() -> None:
        scheduler.on_tick()
        draw(registry, first_frame[0])
        first_frame[0] = False
        # tick_count doesn't include the tick in progress
        if args.ticks and ticker.tick_count + 1 >= args.ticks:
            ticker.stop()
            done.set()

    ticker = PeriodicTicker(tick, config.animation.period, name="DemoTicker")

    print(HIDE_CURSOR, end="", flush=True)
    try:
        ticker.start()
        while not done.wait(0.2):
            pass
    except KeyboardInterrupt:
        pass
    finally:
        ticker.stop()
        scheduler.clear()
        print(SHOW_CURSOR, end="", flush=True)
        print(f"[DEMO] Stopped after {ticker.tick_count} ticks")

    return 0


if __name__ == "__main__":
    sys.exit(main())
