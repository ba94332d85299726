"""
API tests for palettelab endpoints.

Tests the HTTP surface:
- health check
- /v1/palette with raw RGBA buffers
- error mapping for engine contract violations
- /v1/describe single color lookups
"""

import base64

import numpy as np

from palettelab.config import config


def encode_pixels(pixels: np.ndarray) -> str:
    """Base64 of a raw row-major pixel array"""
    return base64.b64encode(np.ascontiguousarray(pixels, dtype=np.uint8).tobytes()).decode("ascii")


def four_color_rgba():
    return np.array([
        [[255, 0, 0, 255], [0, 255, 0, 255]],
        [[0, 0, 255, 255], [255, 255, 255, 255]],
    ], dtype=np.uint8)


class TestHealth:
    """Test health endpoint"""

    def test_healthz(self, test_client):
        response = test_client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "palettelab"
        assert "version" in data


class TestPaletteEndpoint:
    """Test the /v1/palette endpoint"""

    def test_extract_palette(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(four_color_rgba()),
            "width": 2,
            "height": 2,
            "channels": 4,
            "k": 3,
            "seed": 0,
        })

        assert response.status_code == 200
        data = response.json()

        palette = data["palette"]
        assert len(palette) == 3
        assert abs(sum(color["frequency"] for color in palette) - 100.0) <= 0.5
        for color in palette:
            assert color["hex"].startswith("#") and len(color["hex"]) == 7
            assert color["text_color"] in ("#000000", "#FFFFFF")
            assert isinstance(color["description"], str)

        assert data["harmony"]["classification"] in (
            "Monochromatic/Analogous", "Analogous", "Complementary", "Triadic/Split-Complementary"
        )
        assert data["usage"]["primary"] == palette[0]["hex"]
        assert data["metadata"]["sample_count"] == 4
        assert data["metadata"]["k"] == 3

    def test_rgb_buffer(self, test_client):
        rgb = np.full((8, 8, 3), (31, 78, 121), dtype=np.uint8)
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(rgb),
            "width": 8,
            "height": 8,
            "channels": 3,
            "k": 3,
            "seed": 4,
        })

        assert response.status_code == 200
        palette = response.json()["palette"]
        assert all(color["hex"] == "#1F4E79" for color in palette)

    def test_k_below_minimum_rejected(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(four_color_rgba()),
            "width": 2, "height": 2, "channels": 4, "k": 2,
        })
        assert response.status_code == 422

    def test_invalid_base64(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": "not base64!!",
            "width": 2, "height": 2, "channels": 4, "k": 3,
        })
        assert response.status_code == 400

    def test_buffer_length_mismatch(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(four_color_rgba()),
            "width": 3, "height": 2, "channels": 4, "k": 3,
        })
        assert response.status_code == 400
        assert "mismatch" in response.json()["detail"]

    def test_transparent_image(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(np.zeros((2, 2, 4), dtype=np.uint8)),
            "width": 2, "height": 2, "channels": 4, "k": 3,
        })
        assert response.status_code == 422
        assert response.json()["error"] == "empty_image"

    def test_k_larger_than_samples(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(four_color_rgba()),
            "width": 2, "height": 2, "channels": 4, "k": 5,
        })
        assert response.status_code == 422
        assert response.json()["error"] == "invalid_k"

    def test_engine_error_body_shape(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(four_color_rgba()),
            "width": 2, "height": 2, "channels": 4, "k": 5,
        })
        body = response.json()
        assert set(body) == {"detail", "error"}
        assert body["error"] == "invalid_k"

    def test_iterations_above_maximum_rejected(self, test_client):
        response = test_client.post("/v1/palette", json={
            "pixels_b64": encode_pixels(four_color_rgba()),
            "width": 2, "height": 2, "channels": 4, "k": 3,
            "iterations": config.MAX_ITERATIONS + 1,
        })
        assert response.status_code == 422

    def test_error_responses_documented(self, test_client):
        responses = test_client.get("/openapi.json").json()["paths"]["/v1/palette"]["post"]["responses"]

        for status in ("400", "422", "504"):
            schema = responses[status]["content"]["application/json"]["schema"]
            assert schema["$ref"].endswith("/ErrorResponse")


class TestDescribeEndpoint:
    """Test the /v1/describe endpoint"""

    def test_describe_red(self, test_client):
        response = test_client.post("/v1/describe", json={"hex": "#ff0000"})

        assert response.status_code == 200
        data = response.json()
        assert data["hex"] == "#FF0000"
        assert data["rgb"] == [255, 0, 0]
        assert data["hsl"] == [0, 100, 50]
        assert data["description"] == "Medium Vibrant Red"
        assert data["text_color"] == "#FFFFFF"

    def test_describe_rejects_named_color(self, test_client):
        response = test_client.post("/v1/describe", json={"hex": "red"})
        assert response.status_code == 422
