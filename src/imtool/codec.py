"""Palette-indexed "C6" image format.

Layout::

    b"C6 <width> <height> <max_intensity> <palette_size>\\n"
    palette_size * (r, g, b)    one channel = 1 byte, or 2 bytes if max_intensity > 255
    width * height * index      1, 2 or 4 bytes, the smallest that addresses the palette

Multi-byte values are little-endian.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

import numpy as onp

from .color import MAX_INTENSITY, NUM_CHANNELS, channel_dtype, wire_dtype
from .errors import CompressedFormatError
from .image import Image
from .palette import build_palette, index_dtype, index_width, palette_indices
from .storage import make_pixels

COMPRESSED_MAGIC = "C6"


class CompressedHeader(NamedTuple):
    width: int
    height: int
    max_intensity: int
    palette_size: int

    def to_bytes(self) -> bytes:
        return (
            f"{COMPRESSED_MAGIC} {self.width} {self.height} "
            f"{self.max_intensity} {self.palette_size}\n"
        ).encode("ascii")


def encode(image: Image) -> bytes:
    """Serialize `image` to C6 bytes.

    Raises PaletteTooLarge, before producing output, when the image has more
    colors than a 4-byte index can address.
    """
    palette = build_palette(image.pixels)
    width = index_width(len(palette))

    header = CompressedHeader(image.width, image.height, image.max_intensity, len(palette))
    table = onp.array(palette.colors, dtype=wire_dtype(image.max_intensity))
    indices = palette_indices(image.pixels, palette).astype(index_dtype(width))
    return header.to_bytes() + table.tobytes() + indices.tobytes()


def parse_header(data: bytes, source: object = "<bytes>") -> tuple[CompressedHeader, int]:
    """Parse the header line; returns it with the offset of the palette."""
    end = data.find(b"\n")
    if end < 0:
        raise CompressedFormatError(source, "missing header line")
    try:
        fields = data[:end].decode("ascii").split()
    except UnicodeDecodeError:
        raise CompressedFormatError(source, "header is not ASCII") from None

    tag = fields[0] if fields else ""
    if tag != COMPRESSED_MAGIC:
        raise CompressedFormatError(source, f"unsupported format tag {tag!r}")
    if len(fields) != 5:
        raise CompressedFormatError(source, f"expected 5 header fields, got {len(fields)}")
    try:
        width, height, max_intensity, palette_size = (int(f) for f in fields[1:])
    except ValueError:
        raise CompressedFormatError(source, f"malformed header {' '.join(fields)!r}") from None

    if width < 1 or height < 1:
        raise CompressedFormatError(source, f"invalid image size {width}x{height}")
    if not (1 <= max_intensity <= MAX_INTENSITY):
        raise CompressedFormatError(source, f"invalid max intensity {max_intensity}")
    if not (1 <= palette_size <= width * height):
        raise CompressedFormatError(source, f"invalid palette size {palette_size}")
    return CompressedHeader(width, height, max_intensity, palette_size), end + 1


def decode(data: bytes, layout: str = "aos", source: object = "<bytes>") -> Image:
    """Rebuild the image stored in C6 `data`."""
    header, offset = parse_header(data, source)
    channel = wire_dtype(header.max_intensity)
    width = index_width(header.palette_size)
    pixel_count = header.width * header.height

    table_size = header.palette_size * NUM_CHANNELS * channel.itemsize
    expected = offset + table_size + pixel_count * width
    if len(data) < expected:
        raise CompressedFormatError(source, f"truncated data: {len(data)} of {expected} bytes")
    if len(data) > expected:
        raise CompressedFormatError(source, f"{len(data) - expected} unexpected trailing bytes")

    table = onp.frombuffer(data, dtype=channel, count=header.palette_size * NUM_CHANNELS, offset=offset)
    table = table.reshape(header.palette_size, NUM_CHANNELS)
    if int(table.max()) > header.max_intensity:
        raise CompressedFormatError(source, f"palette value above max intensity {header.max_intensity}")

    indices = onp.frombuffer(data, dtype=index_dtype(width), count=pixel_count, offset=offset + table_size)
    if int(indices.max()) >= header.palette_size:
        raise CompressedFormatError(source, f"pixel index {int(indices.max())} outside palette")

    pixels = table.astype(channel_dtype(header.max_intensity))[indices.astype(onp.intp)]
    return Image(header.width, header.height, header.max_intensity, make_pixels(pixels, layout))


def write_compressed(path: Path, image: Image) -> int:
    """Write `image` to `path` as C6; returns the number of bytes written."""
    data = encode(image)
    Path(path).write_bytes(data)
    return len(data)


def read_compressed(path: Path, layout: str = "aos") -> Image:
    path = Path(path)
    return decode(path.read_bytes(), layout, source=path)
