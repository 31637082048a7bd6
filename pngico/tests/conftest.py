import struct
import zlib

import numpy as np
import pytest
from PIL import Image

# tolerant-by-default tests shouldn't depend on the developer's shell
@pytest.fixture(autouse=True)
def _clear_strictness_envvar(monkeypatch):
    monkeypatch.delenv("PNGICO_STRICT", raising=False)

# returns an RGBA image filled with (seeded) noise, so that pixel
# comparisons can't pass by accident
def _noise_image(width, height, seed):
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return Image.fromarray(pixels)

def _png_chunk(chunk_type, payload):
    return struct.pack(">I", len(payload)) + chunk_type + payload + struct.pack(">I", zlib.crc32(chunk_type + payload))

@pytest.fixture
def make_image():
    def _make(width, height=None, seed=0):
        return _noise_image(width, height or width, seed)
    return _make

@pytest.fixture
def write_png(make_image):
    def _write(path, width, height=None, seed=0):
        img = make_image(width, height, seed)
        img.save(path, format="PNG")
        return img
    return _write

# a tiny PNG stream whose header claims 20000x20000 RGBA pixels, which is
# far beyond Pillow's decompression bomb limit
@pytest.fixture
def huge_png_bytes():
    ihdr = struct.pack(">IIBBBBB", 20000, 20000, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00" * 64))
        + _png_chunk(b"IEND", b"")
    )
