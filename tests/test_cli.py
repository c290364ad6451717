import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from PIL import Image

from rotoscale import cli
from rotoscale.io.export import load_texture, save_png
from rotoscale.raster.draw import draw_bounding_box
from rotoscale.raster.rotate import rotated_size


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = Path(tempfile.mkdtemp())
        self.source = save_png(self.tmp / "box.png", draw_bounding_box(bytearray(6 * 4 * 4), 6), 6)

    def _run(self, *argv: str) -> tuple:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_parse_args_defaults(self) -> None:
        args = cli.parse_args(["spin", "in.png", "out.gif"])
        self.assertEqual(args.command, "spin")
        self.assertEqual(args.frames, 64)
        self.assertEqual(args.delay, 100)
        self.assertEqual((args.scale_x, args.scale_y), (1, 1))
        self.assertFalse(args.debug_bounds)

    def test_degrees_and_radians_are_exclusive(self) -> None:
        with self.assertRaises(SystemExit), redirect_stderr(io.StringIO()):
            cli.parse_args(["rotate", "a.png", "b.png", "--degrees", "10", "--radians", "1"])

    def test_rotate_writes_png_of_rotated_size(self) -> None:
        target = self.tmp / "out" / "rotated.png"
        code, out, _ = self._run("rotate", str(self.source), str(target), "--degrees", "90", "--scale-y", "2")
        self.assertEqual(code, 0)
        self.assertIn("Done. Wrote:", out)
        texture, width = load_texture(target)
        expected_width, expected_height = rotated_size(6, 4, cli.math.radians(90), 1, 2)
        self.assertEqual(width, expected_width)
        self.assertEqual(len(texture), expected_width * expected_height * 4)

    def test_spin_writes_animated_gif(self) -> None:
        target = self.tmp / "spin.gif"
        code, _, _ = self._run("spin", str(self.source), str(target), "--frames", "4", "--delay", "20", "--workers", "2")
        self.assertEqual(code, 0)
        with Image.open(target) as img:
            self.assertEqual(img.n_frames, 4)

    def test_errors_return_exit_code_two(self) -> None:
        code, _, err = self._run("rotate", str(self.source), str(self.tmp / "x.png"), "--scale-x", "0")
        self.assertEqual(code, 2)
        self.assertIn("scale_x", err)

        code, _, err = self._run("rotate", str(self.tmp / "missing.png"), str(self.tmp / "y.png"))
        self.assertEqual(code, 2)
        self.assertIn("Error:", err)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
