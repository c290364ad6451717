"""Render a bounding-box test card through a full spin and write it as a GIF.

With ``ROTOSCALE_DEBUG_BOUNDS=1`` each row's scanned start and end columns
are painted purple and orange, which shows how tightly the per-row bounds
hug the rotated rectangle.
"""

import sys
from pathlib import Path

# Allow running this script directly without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rotoscale.io.export import save_gif  # noqa: E402
from rotoscale.raster.draw import draw_bounding_box  # noqa: E402
from rotoscale.spin import spin_frames  # noqa: E402


def run_example(width: int = 160, height: int = 319, frames: int = 64) -> Path:
    texture = draw_bounding_box(bytearray(width * height * 4), width)
    animation = spin_frames(texture, width, frames)
    print(f"source=({width}x{height}) frames={len(animation)} canvas=({animation.width}x{animation.height})")
    return save_gif(Path("examples/_tmp_rotated.gif"), animation.frames, animation.width, frame_delay=10)


if __name__ == "__main__":
    print("wrote:", run_example())
