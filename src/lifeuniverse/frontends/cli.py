"""Command-line driver that renders a universe as text and ticks it."""

import argparse
import sys
import time
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.universe import Universe, DEFAULT_WIDTH, DEFAULT_HEIGHT
from ..core.patterns import PatternLibrary


class CLIUniverse:
    """Console render loop: draw the current generation, then tick."""

    def __init__(self, pattern_library: Optional[PatternLibrary] = None) -> None:
        self.pattern_library = pattern_library or PatternLibrary()

    def build_universe(
        self,
        width: int,
        height: int,
        pattern: Optional[str] = None,
        row: int = 0,
        column: int = 0,
        toggles: Sequence[Tuple[int, int]] = (),
        empty: bool = False,
        verbose: bool = False,
    ) -> Universe:
        """Create the starting universe.

        Without a pattern the default seeded lattice is used unless ``empty``
        is set; with one, the pattern is placed on an empty universe at
        ``(row, column)``. Toggles are applied last.

        Raises:
            ValueError: If the dimensions are invalid
            IndexError: If a toggle lies outside the universe
        """
        if pattern:
            universe = Universe(width, height)
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern:
                if verbose:
                    print(f"Loading pattern '{pattern}' at ({row}, {column})")
                placed = loaded_pattern.apply_to_universe(universe, row, column)
                if placed < len(loaded_pattern.cells):
                    print(f"Warning: {len(loaded_pattern.cells) - placed} cells of '{pattern}' fell outside the grid")
            else:
                print(f"Warning: Pattern '{pattern}' not found, using default seed")
                universe = Universe.new(width, height)
        elif empty:
            universe = Universe(width, height)
        else:
            if verbose:
                print(f"Seeding default {width}x{height} universe")
            universe = Universe.new(width, height)

        for toggle_row, toggle_column in toggles:
            universe.toggle_cell(toggle_row, toggle_column)

        return universe

    def run(self, universe: Universe, generations: int, delay: float = 0.0, show: bool = True) -> Dict:
        """Render and tick the universe ``generations`` times.

        Args:
            universe: Universe to drive
            generations: Number of ticks to apply
            delay: Seconds to sleep between frames
            show: Print each generation before ticking it

        Returns:
            Dictionary of run statistics
        """
        initial_population = universe.population
        start_time = time.time()

        for _ in range(generations):
            if show:
                print(f"Generation {universe.generation} (population {universe.population}):")
                print(universe.render(), end="")
            universe.tick()
            if delay > 0:
                time.sleep(delay)

        duration = time.time() - start_time

        if show:
            print(f"Generation {universe.generation} (population {universe.population}):")
            print(universe.render(), end="")

        return {
            "generation": universe.generation,
            "population": universe.population,
            "initial_population": initial_population,
            "grid_size": (universe.width, universe.height),
            "duration_seconds": duration,
            "generations_per_second": generations / duration if duration > 0 else 0,
        }

    def list_patterns(self) -> None:
        """Print all available patterns by category."""
        print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                height, width = pattern.get_size()
                print(f"  {name} ({width}x{height}) - {pattern.description}")


def parse_toggle(value: str) -> Tuple[int, int]:
    """Parse a ``ROW,COLUMN`` pair for ``--toggle``."""
    try:
        row, column = (int(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected ROW,COLUMN, got '{value}'") from None
    return row, column


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="life-universe",
        description="Run Conway's Game of Life on a toroidal universe and print each generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                 # Default 64x64 seeded universe, 10 generations
  %(prog)s -W 6 -H 6 --empty --toggle 2,1 --toggle 2,2 --toggle 2,3 -g 2
  %(prog)s -p Glider --row 1 --column 1 -g 20 --delay 0.1
  %(prog)s --list-patterns                 # Show available patterns
        """,
    )

    parser.add_argument(
        "-W", "--width", type=int, default=DEFAULT_WIDTH, help=f"Grid width (default: {DEFAULT_WIDTH})"
    )
    parser.add_argument(
        "-H", "--height", type=int, default=DEFAULT_HEIGHT, help=f"Grid height (default: {DEFAULT_HEIGHT})"
    )
    parser.add_argument(
        "-g", "--generations", type=int, default=10, help="Number of generations to run (default: 10)"
    )
    parser.add_argument("-p", "--pattern", type=str, help="Start from a named pattern on an empty grid")
    parser.add_argument("--empty", action="store_true", help="Start with every cell dead instead of the default seed")
    parser.add_argument("--row", type=int, default=0, help="Row offset for the pattern (default: 0)")
    parser.add_argument("--column", type=int, default=0, help="Column offset for the pattern (default: 0)")
    parser.add_argument(
        "--toggle",
        type=parse_toggle,
        action="append",
        default=[],
        metavar="ROW,COLUMN",
        help="Flip a cell before running (repeatable)",
    )
    parser.add_argument("--delay", type=float, default=0.0, help="Seconds between generations (default: 0)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print the final summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print setup details")
    parser.add_argument("--list-patterns", action="store_true", help="List available patterns and exit")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors: List[str] = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if args.row < 0 or args.column < 0:
        errors.append("Pattern offsets must be non-negative")

    for row, column in args.toggle:
        if not (0 <= row < args.height and 0 <= column < args.width):
            errors.append(f"Toggle ({row}, {column}) is outside the {args.width}x{args.height} grid")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  {error}")
        return False

    return True


def print_results(stats: Dict) -> None:
    """Print a one-paragraph run summary."""
    width, height = stats["grid_size"]
    print(f"\nRan {stats['generation']} generations on a {width}x{height} universe")
    print(
        "Population: {} -> {}, "
        "Duration: {:.3f}s, "
        "Speed: {:.0f} gen/s".format(
            stats["initial_population"],
            stats["population"],
            stats["duration_seconds"],
            stats["generations_per_second"],
        )
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIUniverse()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(cli.pattern_library.list_patterns())}")
        return 1

    try:
        universe = cli.build_universe(
            args.width,
            args.height,
            pattern=args.pattern,
            row=args.row,
            column=args.column,
            toggles=args.toggle,
            empty=args.empty,
            verbose=args.verbose,
        )
        stats = cli.run(universe, args.generations, delay=args.delay, show=not args.quiet)
    except (ValueError, IndexError) as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 1

    print_results(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
