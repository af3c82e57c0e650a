"""
Main entry point for the prize wheel.

    prizewheel simulate                 pygame window, SPACE spins
    prizewheel render --out wheel.png   headless frame (add --spin for a full spin)
    prizewheel draw-stats -n 100000     empirical vs configured odds
"""

import argparse
import asyncio
import logging
import random
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence

from prizewheel.config.settings import Settings, get_settings
from prizewheel.core.errors import WheelError
from prizewheel.core.events import Event, EventType
from prizewheel.wheel.defaults import default_prizes
from prizewheel.wheel.loader import load_prizes
from prizewheel.wheel.models import PrizeOption, total_weight, validate_options

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def resolve_prizes(settings: Settings, prizes_file: Optional[Path] = None) -> List[PrizeOption]:
    """Prizes from the given file, the configured file, or the built-in defaults.

    A prize file with no active prizes also falls back to the defaults.
    """
    path = prizes_file or settings.prizes_file
    if path is None:
        logger.info("No prize file configured, using default prizes")
        return default_prizes()

    prizes = load_prizes(path)
    if not prizes:
        logger.warning(f"No active prizes in {path}, using default prizes")
        return default_prizes()
    return prizes


def _seed(args: argparse.Namespace, settings: Settings) -> Optional[int]:
    return args.seed if args.seed is not None else settings.wheel.seed


async def run_simulator(settings: Settings, prizes: Sequence[PrizeOption], seed: Optional[int] = None) -> None:
    """Run the wheel in a desktop window until it is closed."""
    from prizewheel.simulator.window import make_window
    from prizewheel.wheel.engine import PrizeWheel

    size = settings.wheel.size
    window = make_window(
        size, size,
        title=settings.simulator_title,
        scale=settings.simulator_scale,
        fps=settings.wheel.fps,
    )
    wheel = PrizeWheel(
        surface=window.surface,
        settings=settings,
        random_source=random.Random(seed),
        event_bus=window.event_bus,
    )

    def on_button_press(event: Event) -> None:
        wheel.spin()

    window.event_bus.subscribe(EventType.BUTTON_PRESS, on_button_press)
    window.event_bus.subscribe(
        EventType.SPIN_COMPLETE,
        lambda e: logger.info(f"Winner: {e.data.get('prize')}"),
    )

    window.open()
    wheel.configure(prizes)
    try:
        await window.run()
    finally:
        wheel.dispose()


async def run_render(
    settings: Settings,
    prizes: Sequence[PrizeOption],
    out: Path,
    spin: bool = False,
    frames_dir: Optional[Path] = None,
    seed: Optional[int] = None,
) -> Optional[str]:
    """Render the wheel to a PNG without a display.

    With spin, a whole spin is replayed on a manual clock and the final
    resting frame is written. Returns the winning prize name, if any.
    """
    from prizewheel.animation.clock import ManualClock
    from prizewheel.animation.scheduler import ManualFrameScheduler
    from prizewheel.graphics.surface import ImageSurface
    from prizewheel.wheel.engine import PrizeWheel

    size = settings.wheel.size
    clock = ManualClock()
    scheduler = ManualFrameScheduler(clock, frame_ms=1000.0 / settings.wheel.fps)
    surface = ImageSurface(size, size, frame_dir=frames_dir)
    wheel = PrizeWheel(
        surface=surface,
        settings=settings,
        random_source=random.Random(seed),
        clock=clock,
        scheduler=scheduler,
    )

    winner = None
    try:
        wheel.configure(prizes)
        if spin:
            future = wheel.spin()
            frames = scheduler.run_until_idle()
            outcome = await future
            winner = outcome.prize_name
            logger.info(f"Rendered {frames} frames, winner {winner!r}")
        surface.save(out)
    finally:
        wheel.dispose()
    return winner


def draw_stats(prizes: Sequence[PrizeOption], draws: int, rng: random.Random) -> List[tuple]:
    """Run the selector draws times.

    Returns:
        Rows of (name, configured share, observed share), shares in [0, 1]
    """
    from prizewheel.wheel.selector import WeightedSelector

    if draws <= 0:
        raise ValueError("draws must be positive")

    options = validate_options(prizes)
    selector = WeightedSelector(rng)
    counts: Counter = Counter()
    for _ in range(draws):
        index, _option = selector.select(options)
        counts[index] += 1

    total = total_weight(options)
    return [
        (option.name, option.weight / total, counts[i] / draws)
        for i, option in enumerate(options)
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prizewheel", description="Weighted prize wheel")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--prizes", type=Path, help="JSON prize file (overrides PRIZEWHEEL_PRIZES_FILE)")
    parser.add_argument("--seed", type=int, help="Seed for prize selection")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("simulate", help="Open the pygame simulator window")

    render = sub.add_parser("render", help="Render the wheel to a PNG")
    render.add_argument("--out", type=Path, required=True, help="Output PNG path")
    render.add_argument("--spin", action="store_true", help="Spin first and render the resting frame")
    render.add_argument("--frames", type=Path, help="Directory to also write every spin frame to")

    stats = sub.add_parser("draw-stats", help="Compare observed and configured odds")
    stats.add_argument("-n", "--draws", type=int, default=100_000, help="Number of draws")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(args.debug or settings.debug)

    try:
        prizes = resolve_prizes(settings, args.prizes)
        seed = _seed(args, settings)

        if args.command == "simulate":
            asyncio.run(run_simulator(settings, prizes, seed=seed))

        elif args.command == "render":
            winner = asyncio.run(run_render(
                settings, prizes, args.out,
                spin=args.spin, frames_dir=args.frames, seed=seed,
            ))
            print(f"Wrote {args.out}" + (f" (winner: {winner})" if winner else ""))

        elif args.command == "draw-stats":
            rows = draw_stats(prizes, args.draws, random.Random(seed))
            width = max(len(name) for name, _, _ in rows)
            print(f"{'PRIZE':<{width}}  {'EXPECTED':>8}  {'OBSERVED':>8}")
            for name, expected, observed in rows:
                print(f"{name:<{width}}  {expected:>8.2%}  {observed:>8.2%}")

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except WheelError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
