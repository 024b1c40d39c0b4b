"""imtool: inspect, transform and compress binary PPM images.

The core is frequency-based color reduction (least frequent colors replaced
by their nearest survivor through a k-d tree) and the palette-indexed C6
format, whose index width depends on how many colors are left.
"""

__all__ = [
    "cli",
    "codec",
    "color",
    "errors",
    "image",
    "io",
    "kdtree",
    "levels",
    "palette",
    "pipeline",
    "quantize",
    "resize",
    "storage",
]

__version__ = "0.1.0"
