from __future__ import annotations

import argparse
from pathlib import Path

from .color import MAX_INTENSITY
from .errors import ImtoolError, InvalidArgument
from .pipeline import OPERATIONS, PipelineConfig, run_pipeline
from .storage import LAYOUTS

# Positional arguments each operation takes after its name
ARG_COUNTS = {
    "info": 0,
    "compress": 0,
    "decompress": 0,
    "maxlevel": 1,
    "cutfreq": 1,
    "resize": 2,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="imtool", description="Inspect, transform and compress binary PPM images")
    p.add_argument("input", type=Path, help="Path to the input image (P6, C6 or any Pillow format)")
    p.add_argument("output", type=Path, help="Path to the output file (ignored by info)")
    p.add_argument("operation", choices=OPERATIONS, help="Operation to run")
    p.add_argument("args", nargs="*", help="maxlevel N | resize W H | cutfreq K")
    p.add_argument("--layout", choices=LAYOUTS, default="aos", help="In-memory pixel layout")
    p.add_argument("--cutfreq", type=int, default=None, dest="precut",
                   help="Remove this many least frequent colors before compress")
    p.add_argument("--preview", type=Path, default=None, help="Also save an 8-bit preview (PNG, ...)")
    p.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return p


def _parse_int(name: str, text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise InvalidArgument(name, text, "not an integer") from None


def validate_args(args: argparse.Namespace) -> PipelineConfig:
    """Check per-operation argument counts and ranges; build the run config."""
    operation = args.operation
    extra = list(args.args)
    expected = ARG_COUNTS[operation]
    if len(extra) != expected:
        raise InvalidArgument(
            f"arguments for {operation}", " ".join(extra) or "<none>",
            f"expected {expected}, got {len(extra)}",
        )

    config = PipelineConfig(
        input=args.input,
        output=args.output,
        operation=operation,
        layout=args.layout,
        preview=args.preview,
        verbose=not args.quiet,
    )

    if operation == "maxlevel":
        config.max_level = _parse_int("maxlevel", extra[0])
        if not (1 <= config.max_level <= MAX_INTENSITY):
            raise InvalidArgument("maxlevel", config.max_level, f"must be in 1..{MAX_INTENSITY}")
    elif operation == "resize":
        config.width = _parse_int("resize width", extra[0])
        config.height = _parse_int("resize height", extra[1])
        if config.width < 1:
            raise InvalidArgument("resize width", config.width)
        if config.height < 1:
            raise InvalidArgument("resize height", config.height)
    elif operation == "cutfreq":
        config.cut_count = _parse_int("cutfreq", extra[0])
        if config.cut_count < 1:
            raise InvalidArgument("cutfreq", config.cut_count, "must be a positive integer")

    if args.precut is not None:
        if operation != "compress":
            raise InvalidArgument("--cutfreq", args.precut, "only valid with compress")
        if args.precut < 1:
            raise InvalidArgument("--cutfreq", args.precut, "must be a positive integer")
        config.cut_count = args.precut
    return config


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        run_pipeline(validate_args(args))
    except (ImtoolError, OSError) as exc:
        raise SystemExit(f"Error: {exc}") from exc


if __name__ == "__main__":
    main()
