import io
import logging

import numpy as np
import pytest

from lissajous.gif import EncodeError
from lissajous.params import RenderParams
from lissajous.render import lissajous, try_lissajous
from lissajous.server import serve

from .conftest import SEED
from .util import decode_gif


def test_small_request(client):
    resp = client.get("/?cycles=1&res=0.5&size=2&nframes=2&delay=1")
    assert resp.status_code == 200
    assert resp.mimetype == "image/gif"
    img, durations = decode_gif(resp.data)
    assert img.n_frames == 2
    assert img.size == (5, 5)
    assert img.info["loop"] == 2
    assert durations == [10, 10]


@pytest.mark.parametrize("nframes", [1, 3, 10])
def test_frame_count(client, nframes):
    resp = client.get(f"/?size=3&res=0.05&nframes={nframes}")
    img, durations = decode_gif(resp.data)
    assert img.n_frames == nframes
    assert len(durations) == nframes


@pytest.mark.parametrize("size", [0, 1, 12])
def test_frame_size(client, size):
    resp = client.get(f"/?size={size}&res=0.05&nframes=2")
    img, _ = decode_gif(resp.data)
    assert img.size == (2 * size + 1, 2 * size + 1)


def test_defaults(client):
    resp = client.get("/")
    img, durations = decode_gif(resp.data)
    assert img.n_frames == 64
    assert img.size == (201, 201)
    assert img.info["loop"] == 64
    assert durations == [80] * 64


def test_malformed_param_is_logged(client, caplog):
    with caplog.at_level(logging.WARNING):
        resp = client.get("/?size=big&nframes=2&res=0.1")
    assert resp.status_code == 200
    img, _ = decode_gif(resp.data)
    assert img.size == (201, 201)
    assert "Invalid value for size: big" in caplog.text


def test_zero_cycles_gives_blank_frames(client):
    resp = client.get("/?cycles=0&size=4&nframes=5")
    img, _ = decode_gif(resp.data)
    assert img.n_frames == 5
    for i in range(5):
        img.seek(i)
        assert img.convert("RGB").getextrema() == ((0, 0), (0, 0), (0, 0))


def test_same_seed_same_bytes(client):
    first = client.get("/?size=10&nframes=4&res=0.01").data
    second = client.get("/?size=10&nframes=4&res=0.01").data
    assert first == second


def test_any_method(client):
    for method in ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"):
        resp = client.open("/?size=2&nframes=1&res=0.5", method=method)
        assert resp.status_code == 200, method
        assert resp.data.startswith(b"GIF89a"), method


def test_head(client):
    resp = client.head("/?size=2&nframes=1&res=0.5")
    assert resp.status_code == 200
    assert resp.mimetype == "image/gif"


def test_oversized_size_falls_back_to_default(client, caplog):
    with caplog.at_level(logging.WARNING):
        resp = client.get("/?size=99999999999999999999&nframes=1&res=0.5")
    assert resp.status_code == 200
    img, _ = decode_gif(resp.data)
    assert img.size == (201, 201)
    assert "Invalid value for size: 99999999999999999999" in caplog.text


def test_overflowing_cycles_falls_back_to_default(client, caplog):
    with caplog.at_level(logging.WARNING):
        resp = client.get("/?cycles=1e400&size=4&nframes=1&res=0.5")
    assert resp.status_code == 200
    img, _ = decode_gif(resp.data)
    assert img.convert("RGB").getextrema() != ((0, 0), (0, 0), (0, 0))
    assert "Invalid value for cycles: 1e400" in caplog.text


def test_zero_frames_is_empty_response(client, caplog):
    with caplog.at_level(logging.ERROR):
        resp = client.get("/?nframes=0")
    assert resp.status_code == 200
    assert resp.data == b""
    assert "Encoding failed" in caplog.text


def test_try_lissajous_surfaces_errors():
    params = RenderParams(nframes=0)
    with pytest.raises(EncodeError):
        try_lissajous(io.BytesIO(), params, np.random.default_rng(SEED))


def test_lissajous_swallows_write_errors(caplog):
    class Broken:
        def write(self, data):
            raise OSError("connection reset")

    params = RenderParams(size=2, nframes=1, res=0.5)
    with caplog.at_level(logging.ERROR):
        lissajous(Broken(), params, np.random.default_rng(SEED))
    assert "connection reset" in caplog.text


def test_bind_failure_exits(app, monkeypatch, caplog):
    def fail(**kwargs):
        raise OSError("Address already in use")

    monkeypatch.setattr(app, "run", fail)
    with caplog.at_level(logging.CRITICAL):
        with pytest.raises(SystemExit) as exc:
            serve(app, "localhost", 8000)
    assert exc.value.code == 1
    assert "Cannot listen on localhost:8000" in caplog.text
