"""rotoscale: rotate-and-upscale for raw RGBA8888 textures.

This package hosts the pixel addressing helpers, the rotate-scale engine,
an order-preserving parallel map for batch rendering, and the thin
collaborators around them (drawing, canvas padding, PNG/GIF export, CLI).
"""

__all__ = [
    "cli",
    "config",
    "errors",
    "parallel",
    "spin",
]

__version__ = "0.1.0"
