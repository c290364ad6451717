import json
import math
import unittest

from fastapi.testclient import TestClient

from api.app import create_app
from rotoscale.config import MAX_ALLOCATION_BYTES, MAX_DIMENSION
from rotoscale.raster.draw import draw_bounding_box
from rotoscale.raster.rotate import rotate


class RotateApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())
        self.texture = bytes(draw_bounding_box(bytearray(6 * 4 * 4), 6))

    def _post(self, metadata: str, texture: bytes):
        return self.client.post(
            "/rotate",
            data={"metadata": metadata},
            files={"texture": ("texture.rgba", texture, "application/octet-stream")},
        )

    def test_rotate_returns_raw_buffer_and_size_headers(self) -> None:
        response = self._post(json.dumps({"width": 6, "radians": 0.7, "scale_x": 2}), self.texture)
        self.assertEqual(response.status_code, 200)
        expected = rotate(self.texture, 6, 0.7, 2, 1, debug_bounds=False)
        self.assertEqual(response.headers["x-texture-width"], str(expected.width))
        self.assertEqual(response.headers["x-texture-height"], str(expected.height))
        self.assertEqual(response.content, bytes(expected.buffer))

    def test_zero_angle_echoes_texture(self) -> None:
        response = self._post(json.dumps({"width": 6}), self.texture)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, self.texture)

    def test_invalid_scale_is_unprocessable(self) -> None:
        response = self._post(json.dumps({"width": 6, "scale_y": 0}), self.texture)
        self.assertEqual(response.status_code, 422)
        self.assertIn("scale_y", response.json()["detail"])
        self.assertEqual(response.json()["parameter"], "scale_y")
        self.assertEqual(response.json()["value"], 0)

    def test_oversized_result_is_rejected(self) -> None:
        response = self._post(json.dumps({"width": 1, "scale_x": 65535, "scale_y": 65535}), b"\xff" * 4)
        self.assertEqual(response.status_code, 413)
        body = response.json()
        self.assertEqual(body["dimension"], "rotated area")
        self.assertEqual(body["limit"], MAX_ALLOCATION_BYTES)

    def test_malformed_metadata_is_bad_request(self) -> None:
        self.assertEqual(self._post("{not json", self.texture).status_code, 400)
        self.assertEqual(self._post(json.dumps({"radians": "spin"}), self.texture).status_code, 400)

    def test_size_endpoint_matches_engine(self) -> None:
        response = self.client.post("/rotate/size", json={"width": 30, "height": 20, "radians": math.pi / 2})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"width": 20, "height": 30})

    def test_size_overflow_is_rejected(self) -> None:
        response = self.client.post(
            "/rotate/size", json={"width": 65535, "height": 65535, "radians": math.pi / 4}
        )
        self.assertEqual(response.status_code, 413)

    def test_size_overflow_names_rotated_dimension(self) -> None:
        response = self.client.post(
            "/rotate/size", json={"width": 65535, "height": 65535, "radians": math.pi / 4}
        )
        self.assertEqual(response.json()["dimension"], "rotated width")
        self.assertEqual(response.json()["limit"], MAX_DIMENSION)

    def test_limits_report_engine_bounds(self) -> None:
        response = self.client.get("/limits")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"max_dimension": 65535, "max_result_bytes": 2**31 - 1, "bytes_per_pixel": 4},
        )

    def test_root_redirects_to_docs(self) -> None:
        response = self.client.get("/", follow_redirects=False)
        self.assertIn(response.status_code, (302, 307))
        self.assertEqual(response.headers["location"], "/docs")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
