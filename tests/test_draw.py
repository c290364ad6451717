import unittest

from rotoscale.raster.draw import draw_bounding_box, draw_rectangle
from rotoscale.raster.pixels import BLUE, GREEN, RED, YELLOW, read_pixel


def lit_pixels(buf: bytearray, width: int) -> set:
    height = len(buf) // (width * 4)
    return {(x, y) for y in range(height) for x in range(width) if read_pixel(buf, x, y, width)}


class DrawRectangleTests(unittest.TestCase):
    def test_rectangle_is_clipped_at_right_and_bottom(self) -> None:
        buf = bytearray(4 * 4 * 4)
        draw_rectangle(buf, RED, 2, 2, 5, 5, 4)
        self.assertEqual(lit_pixels(buf, 4), {(2, 2), (3, 2), (2, 3), (3, 3)})
        self.assertEqual(read_pixel(buf, 3, 3, 4), RED)

    def test_negative_origin_shrinks_rectangle(self) -> None:
        buf = bytearray(4 * 4 * 4)
        draw_rectangle(buf, BLUE, -1, -1, 2, 2, 4)
        self.assertEqual(lit_pixels(buf, 4), {(0, 0)})

    def test_non_positive_height_draws_square(self) -> None:
        buf = bytearray(4 * 4 * 4)
        draw_rectangle(buf, GREEN, 0, 0, 3, 0, 4)
        self.assertEqual(lit_pixels(buf, 4), {(x, y) for x in range(3) for y in range(3)})

    def test_out_of_range_rectangle_is_ignored(self) -> None:
        buf = bytearray(4 * 4 * 4)
        self.assertIs(draw_rectangle(buf, RED, 10, 0), buf)
        draw_rectangle(buf, RED, 0, 4, 2, 2, 4)
        self.assertEqual(buf, bytearray(4 * 4 * 4))


class DrawBoundingBoxTests(unittest.TestCase):
    def test_each_side_has_its_own_color(self) -> None:
        width, height = 5, 4
        buf = draw_bounding_box(bytearray(width * height * 4), width)
        self.assertEqual(read_pixel(buf, 0, 0, width), YELLOW)
        self.assertEqual(read_pixel(buf, 4, 0, width), GREEN)
        self.assertEqual(read_pixel(buf, 4, 3, width), RED)
        self.assertEqual(read_pixel(buf, 0, 3, width), BLUE)
        self.assertEqual(read_pixel(buf, 2, 0, width), YELLOW)
        self.assertEqual(read_pixel(buf, 2, 3, width), RED)
        self.assertEqual(read_pixel(buf, 0, 2, width), BLUE)
        self.assertEqual(read_pixel(buf, 4, 2, width), GREEN)

    def test_interior_stays_transparent(self) -> None:
        width, height = 5, 4
        buf = draw_bounding_box(bytearray(width * height * 4), width)
        edge = {(x, y) for y in range(height) for x in range(width)
                if x in (0, width - 1) or y in (0, height - 1)}
        self.assertEqual(lit_pixels(buf, width), edge)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
