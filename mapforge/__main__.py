"""Command line entry point: generate a map and print it as text.

    python -m mapforge cellular --seed 42
    python -m mapforge all --width 80 --height 40 --output maps/all.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from . import config
from .environment import tile_types
from .environment.generators import (
    DEFAULT_GENERATE_PARAMS,
    GENERATOR_NAMES,
    BaseMapGenerator,
    GenerationError,
    GeneratorConfigError,
    generate_by_name,
)
from .types import RandomSeed

logger = logging.getLogger("mapforge")

# Command line option -> generate() keyword
_PARAM_OPTIONS: dict[str, str] = {
    "iterations": "iterations",
    "open_percent": "open_percent",
    "max_steps": "max_steps",
    "seed_size": "seed_size",
    "max_particles": "max_particles",
    "num_seeds": "num_seeds",
    "metric": "distance_metric",
    "octaves": "octaves",
    "frequency": "frequency",
    "gain": "gain",
    "lacunarity": "lacunarity",
}

EXIT_GENERATION_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _parse_seed(value: str) -> RandomSeed:
    """Integer seeds stay integers; anything else is used as a string seed."""
    try:
        return int(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mapforge",
        description="Generate a procedural map and print it as text",
    )
    parser.add_argument(
        "algorithm",
        choices=[*GENERATOR_NAMES, "all"],
        help="Generator to run, or 'all' to run every generator in turn",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=config.DEFAULT_MAP_WIDTH,
        help=f"Map width in tiles (default: {config.DEFAULT_MAP_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=config.DEFAULT_MAP_HEIGHT,
        help=f"Map height in tiles (default: {config.DEFAULT_MAP_HEIGHT})",
    )
    parser.add_argument(
        "--seed",
        type=_parse_seed,
        default=config.RANDOM_SEED,
        help="Random seed for reproducible maps (int or string)",
    )
    parser.add_argument("--output", type=Path, help="Write the map to this file")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    params = parser.add_argument_group("algorithm parameters")
    params.add_argument("--iterations", type=int, help="cellular: smoothing passes")
    params.add_argument(
        "--open-percent", type=float, help="drunkard: fraction of the map to open"
    )
    params.add_argument("--max-steps", type=int, help="drunkard: steps per walker")
    params.add_argument("--seed-size", type=int, help="dla: half-size of the seed")
    params.add_argument(
        "--max-particles", type=int, help="dla: number of particles released"
    )
    params.add_argument("--num-seeds", type=int, help="voronoi: number of regions")
    params.add_argument(
        "--metric",
        help="voronoi: distance metric (euclidean, manhattan, chebyshev)",
    )
    params.add_argument("--octaves", type=int, help="noise: number of layers")
    params.add_argument("--frequency", type=float, help="noise: base frequency")
    params.add_argument("--gain", type=float, help="noise: amplitude per octave")
    params.add_argument(
        "--lacunarity", type=float, help="noise: frequency multiplier per octave"
    )
    return parser


def _overrides_for(name: str, args: argparse.Namespace) -> dict[str, object]:
    """Collect the parameters given on the command line that ``name`` accepts."""
    accepted = DEFAULT_GENERATE_PARAMS[name]
    overrides = {}
    for option, keyword in _PARAM_OPTIONS.items():
        value = getattr(args, option)
        if value is None:
            continue
        if keyword in accepted:
            overrides[keyword] = value
        elif args.algorithm != "all":
            logger.warning("%s ignores --%s", name, option.replace("_", "-"))
    return overrides


def _log_tile_summary(name: str, generator: BaseMapGenerator) -> None:
    grid = generator.grid
    if grid is None or grid.dtype != np.uint8:
        return
    ids, counts = np.unique(grid, return_counts=True)
    summary = ", ".join(
        f"{tile_types.get_tile_type_name_by_id(int(tile_id))}: {int(count)}"
        for tile_id, count in zip(ids, counts, strict=True)
    )
    logger.info("%s tiles - %s", name, summary)


def run(args: argparse.Namespace) -> str:
    """Generate the requested map(s) and return the rendered text."""
    names = GENERATOR_NAMES if args.algorithm == "all" else (args.algorithm,)
    sections = []
    for name in names:
        generator = generate_by_name(
            name,
            args.width,
            args.height,
            seed=args.seed,
            **_overrides_for(name, args),
        )
        _log_tile_summary(name, generator)
        text = generator.render()
        if args.algorithm == "all":
            text = f"== {name} ==\n{text}"
        sections.append(text)
    return "\n".join(sections)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = run(args)
    except GeneratorConfigError as e:
        print(f"mapforge: invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except GenerationError as e:
        print(f"mapforge: generation failed: {e}", file=sys.stderr)
        return EXIT_GENERATION_FAILED

    if args.output is None:
        sys.stdout.write(text)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
        logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
