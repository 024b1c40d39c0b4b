from __future__ import annotations

from pathlib import Path

import numpy as onp
from PIL import Image as PILImage

from .color import MAX_INTENSITY, MAX_INTENSITY_8BIT, NUM_CHANNELS, channel_dtype, wire_dtype
from .errors import ImageFormatError
from .image import Image
from .storage import make_pixels

PPM_MAGIC = b"P6"


def _next_token(data: bytes, pos: int, source: object) -> tuple[bytes, int]:
    # Skip whitespace and '#' comments, then read up to the next separator
    size = len(data)
    while pos < size:
        if data[pos:pos + 1] == b"#":
            newline = data.find(b"\n", pos)
            pos = size if newline < 0 else newline + 1
        elif data[pos:pos + 1].isspace():
            pos += 1
        else:
            break
    start = pos
    while pos < size and not data[pos:pos + 1].isspace() and data[pos:pos + 1] != b"#":
        pos += 1
    if start == pos:
        raise ImageFormatError(source, "truncated PPM header")
    return data[start:pos], pos


def parse_ppm(data: bytes, layout: str = "aos", source: object = "<bytes>") -> Image:
    """Decode a binary (P6) PPM held in memory."""
    magic, pos = _next_token(data, 0, source)
    if magic != PPM_MAGIC:
        raise ImageFormatError(source, f"unsupported PPM format {magic[:8]!r}")

    values = []
    for name in ("width", "height", "max color value"):
        token, pos = _next_token(data, pos, source)
        try:
            values.append(int(token))
        except ValueError:
            raise ImageFormatError(source, f"invalid {name} {token[:16]!r}") from None
    width, height, max_intensity = values
    if width < 1 or height < 1:
        raise ImageFormatError(source, f"invalid image size {width}x{height}")
    if not (1 <= max_intensity <= MAX_INTENSITY):
        raise ImageFormatError(source, f"invalid max color value {max_intensity}")
    if not data[pos:pos + 1].isspace():
        raise ImageFormatError(source, "missing separator before pixel data")
    pos += 1

    channel = wire_dtype(max_intensity)
    count = width * height * NUM_CHANNELS
    if len(data) - pos < count * channel.itemsize:
        raise ImageFormatError(source, f"truncated pixel data, expected {width}x{height} pixels")
    raw = onp.frombuffer(data, dtype=channel, count=count, offset=pos)
    if int(raw.max()) > max_intensity:
        raise ImageFormatError(source, f"channel value above max color value {max_intensity}")

    pixels = raw.astype(channel_dtype(max_intensity)).reshape(-1, NUM_CHANNELS)
    return Image(width, height, max_intensity, make_pixels(pixels, layout))


def read_ppm(path: Path, layout: str = "aos") -> Image:
    path = Path(path)
    return parse_ppm(path.read_bytes(), layout, source=path)


def format_ppm(image: Image) -> bytes:
    header = f"P6\n{image.width} {image.height} {image.max_intensity}\n".encode("ascii")
    body = image.pixels.as_array().astype(wire_dtype(image.max_intensity))
    return header + body.tobytes()


def write_ppm(path: Path, image: Image) -> None:
    data = format_ppm(image)
    Path(path).write_bytes(data)


def to_pil(image: Image) -> PILImage.Image:
    """8-bit RGB Pillow image; other intensity ranges are scaled to 0..255."""
    arr = image.to_array()
    if image.max_intensity != MAX_INTENSITY_8BIT:
        arr = arr.astype(onp.uint32) * MAX_INTENSITY_8BIT // image.max_intensity
    return PILImage.fromarray(arr.astype(onp.uint8))


def from_pil(pil: PILImage.Image, layout: str = "aos") -> Image:
    arr = onp.asarray(pil.convert("RGB"))
    return Image.from_array(arr, MAX_INTENSITY_8BIT, layout)


def load_image(path: Path, layout: str = "aos") -> Image:
    """Read a P6 file directly, anything else through Pillow."""
    path = Path(path)
    with open(path, "rb") as fh:
        head = fh.read(len(PPM_MAGIC))
    if head == PPM_MAGIC:
        return read_ppm(path, layout)
    with PILImage.open(path) as pil:
        return from_pil(pil, layout)


def save_preview(image: Image, path: Path) -> None:
    to_pil(image).save(path)
