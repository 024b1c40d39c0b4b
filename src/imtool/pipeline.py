"""Run one imtool operation from input file to output file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import time

from .codec import COMPRESSED_MAGIC, parse_header, read_compressed, write_compressed
from .color import channel_bytes
from .image import Image
from .io import load_image, save_preview, write_ppm
from .levels import maxlevel
from .palette import index_width
from .quantize import quantize
from .resize import resize

OPERATIONS = ("info", "maxlevel", "resize", "cutfreq", "compress", "decompress")


@dataclass
class PipelineConfig:
    """Configuration for a single imtool run."""
    input: Path
    output: Path
    operation: str
    max_level: int | None = None  # maxlevel target
    width: int | None = None  # resize target
    height: int | None = None
    cut_count: int | None = None  # cutfreq count, or colors to drop before compress
    layout: str = "aos"
    preview: Path | None = None
    verbose: bool = True


def image_is_compressed(path: Path) -> bool:
    with open(path, "rb") as fh:
        return fh.read(len(COMPRESSED_MAGIC)) == COMPRESSED_MAGIC.encode("ascii")


def open_image(path: Path, layout: str = "aos") -> Image:
    """Load a P6, C6 or Pillow-readable image."""
    if image_is_compressed(path):
        return read_compressed(path, layout)
    return load_image(path, layout)


def describe(path: Path, image: Image) -> list[str]:
    """Metadata lines printed by the info operation."""
    depth = image.bit_depth
    return [
        f"Metadata for image: {path}",
        "-" * 32,
        f"Width: {image.width} px",
        f"Height: {image.height} px",
        f"Max Color Value: {image.max_intensity}",
        f"Pixel Format: {3 * channel_bytes(image.max_intensity)} bytes per pixel ({depth}-bit color depth)",
    ]


def _describe_compressed(path: Path) -> list[str]:
    header, _ = parse_header(Path(path).read_bytes(), path)
    return [
        f"Palette Size: {header.palette_size} colors",
        f"Index Format: {index_width(header.palette_size)} bytes per pixel",
    ]


def run_pipeline(config: PipelineConfig) -> Image | None:
    """Read the input, apply the operation, write the output.

    Returns the image that was written (None for info).
    """
    def log(message: str) -> None:
        if config.verbose:
            print(message)

    image = open_image(config.input, config.layout)

    if config.operation == "info":
        lines = describe(config.input, image)
        if image_is_compressed(config.input):
            lines += _describe_compressed(config.input)
        print("\n".join(lines))
        return None

    log(f"📂 Loaded {config.input}: {image.width}x{image.height}, max {image.max_intensity} ({config.layout})")
    start_time = time.time()

    if config.operation == "maxlevel":
        log(f"🎚️  Rescaling intensity {image.max_intensity} → {config.max_level}")
        result = maxlevel(image, config.max_level)
    elif config.operation == "resize":
        log(f"📐 Resizing to {config.width}x{config.height}")
        result = resize(image, config.width, config.height)
    elif config.operation == "cutfreq":
        log(f"🎨 Removing {config.cut_count} least frequent colors")
        result = quantize(image, config.cut_count)
    elif config.operation == "compress":
        if config.cut_count:
            log(f"🎨 Removing {config.cut_count} least frequent colors")
            image = quantize(image, config.cut_count)
        result = image
    elif config.operation == "decompress":
        result = image
    else:
        raise ValueError(f"unknown operation {config.operation!r}")

    if config.operation == "compress":
        size = write_compressed(config.output, result)
        log(f"   ✓ Saved: {config.output} ({size} bytes)")
    else:
        write_ppm(config.output, result)
        log(f"   ✓ Saved: {config.output}")

    if config.preview is not None:
        save_preview(result, config.preview)
        log(f"   ✓ Preview: {config.preview}")

    elapsed = time.time() - start_time
    log(f"✅ {config.operation} done ({elapsed:.2f}s)")
    return result
