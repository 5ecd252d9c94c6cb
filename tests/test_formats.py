import io

import numpy as np
import pytest
from PIL import Image, features

from pixview.errors import DecodeError, UnsupportedFormat
from pixview.formats import (
    FormatEntry, FormatRegistry, ImageFormat, PNG_SIGNATURE,
    get_registry, is_gif, is_jpeg, is_png, is_webp, load_image,
)
from pixview.types import PixelBuffer

from conftest import encode, solid


@pytest.fixture
def registry():
    return FormatRegistry()


def decode(registry, data):
    return registry.decode(io.BytesIO(data))


def noise(width, height, mode="RGB"):
    rng = np.random.RandomState(7)
    bands = len(mode)
    arr = rng.randint(0, 256, size=(height, width, bands), dtype=np.uint8)
    return Image.fromarray(arr, mode)


# ═══════════════════════════════════════════════════════════════════════════
# Signatures
# ═══════════════════════════════════════════════════════════════════════════

def test_signature_matchers():
    assert is_png(PNG_SIGNATURE + b"\0" * 8)
    assert not is_png(b"\x89PNG")
    assert is_jpeg(b"\xff\xd8\xff\xe0")
    assert is_gif(b"GIF89a")
    assert is_webp(b"RIFF\0\0\0\0WEBPVP8 ")
    assert not is_webp(b"RIFF\0\0\0\0WAVE")


def test_unknown_header_is_unsupported(registry):
    with pytest.raises(UnsupportedFormat):
        decode(registry, b"hello, this is not an image at all")


def test_empty_source_is_unsupported(registry):
    with pytest.raises(UnsupportedFormat):
        decode(registry, b"")


def test_first_matching_entry_wins():
    calls = []

    def decoder(name):
        def run(source):
            calls.append(name)
            return solid(1, 1, 0)
        return run

    registry = FormatRegistry([
        FormatEntry(ImageFormat.BMP, "first", lambda h: h.startswith(b"X"), decoder("first")),
        FormatEntry(ImageFormat.GIF, "second", lambda h: True, decoder("second")),
    ])
    decode(registry, b"X123")
    decode(registry, b"Y123")
    assert calls == ["first", "second"]


def test_unavailable_entry_is_skipped():
    registry = FormatRegistry([
        FormatEntry(ImageFormat.PNG, "off", lambda h: True,
                    lambda s: solid(1, 1, 1), available=False),
    ])
    assert registry.formats() == [("off", False)]
    with pytest.raises(UnsupportedFormat):
        decode(registry, b"anything")


def test_register_appends():
    registry = FormatRegistry([])
    registry.register(FormatEntry(ImageFormat.BMP, "bmp", lambda h: True,
                                  lambda s: solid(2, 1, 5)))
    assert decode(registry, b"??") == solid(2, 1, 5)


def test_decoder_receives_rewound_source():
    seen = []

    def decoder(source):
        seen.append(source.read())
        return solid(1, 1, 0)

    registry = FormatRegistry([FormatEntry(ImageFormat.GIF, "gif", is_gif, decoder)])
    decode(registry, b"GIF89a-payload")
    assert seen == [b"GIF89a-payload"]


def test_default_formats_listed():
    names = [desc for desc, _ in get_registry().formats()]
    assert names[:3] == ["JPEG (libjpeg)", "PNG (zlib)", "GIF"]
    assert dict(get_registry().formats())["GIF"] is True


# ═══════════════════════════════════════════════════════════════════════════
# PNG
# ═══════════════════════════════════════════════════════════════════════════

def test_png_rgba(registry):
    img = Image.new("RGBA", (3, 2), (10, 20, 30, 40))
    img.putpixel((2, 1), (255, 0, 0, 255))
    buf = decode(registry, encode(img, "PNG"))
    assert buf.size == (3, 2)
    assert buf.has_alpha
    assert buf.pixel(0, 0) == 0x280A141E
    assert buf.pixel(2, 1) == 0xFFFF0000


def test_png_rgb_is_opaque(registry):
    img = Image.new("RGB", (2, 2), (1, 2, 3))
    buf = decode(registry, encode(img, "PNG"))
    assert not buf.has_alpha
    assert set(buf.pixels.tolist()) == {0xFF010203}


def test_png_gray(registry):
    img = Image.new("L", (2, 1), 0x7F)
    buf = decode(registry, encode(img, "PNG"))
    assert not buf.has_alpha
    assert buf.pixel(1, 0) == 0xFF7F7F7F


def test_png_palette_with_transparency(registry):
    img = Image.new("P", (2, 1), 0)
    img.putpalette([0, 0, 0, 200, 100, 50] + [0] * 762)
    img.putpixel((1, 0), 1)
    buf = decode(registry, encode(img, "PNG", transparency=0))
    assert buf.has_alpha
    assert buf.pixel(0, 0) >> 24 == 0
    assert buf.pixel(1, 0) == 0xFFC86432


def test_png_16bit_gray_keeps_high_byte(registry):
    img = Image.new("I;16", (1, 1))
    img.putpixel((0, 0), 0x1234)
    buf = decode(registry, encode(img, "PNG"))
    assert not buf.has_alpha
    assert buf.pixel(0, 0) == 0xFF121212


def test_truncated_png_is_decode_error(registry):
    data = encode(noise(32, 32), "PNG")
    with pytest.raises(DecodeError):
        decode(registry, data[:len(data) // 2])


def test_garbage_after_png_signature_is_decode_error(registry):
    with pytest.raises(DecodeError):
        decode(registry, PNG_SIGNATURE + b"garbage!" * 4)


# ═══════════════════════════════════════════════════════════════════════════
# Other formats
# ═══════════════════════════════════════════════════════════════════════════

def test_jpeg_matches_pillow(registry):
    data = encode(noise(16, 8), "JPEG")
    buf = decode(registry, data)
    expected = np.asarray(Image.open(io.BytesIO(data)).convert("RGBA"))
    assert not buf.has_alpha
    assert buf == PixelBuffer.from_rgba(expected, False)


def test_gif_always_has_alpha(registry):
    img = Image.new("P", (4, 4), 3)
    img.putpalette([v for i in range(256) for v in (i, i, i)])
    buf = decode(registry, encode(img, "GIF"))
    assert buf.has_alpha
    assert buf.size == (4, 4)
    assert buf.pixel(0, 0) == 0xFF030303


def test_bmp(registry):
    img = Image.new("RGB", (3, 3), (9, 8, 7))
    buf = decode(registry, encode(img, "BMP"))
    assert not buf.has_alpha
    assert buf.pixel(2, 2) == 0xFF090807


def test_webp_rgba_matches_pillow(registry):
    if not features.check_module("webp"):
        pytest.skip("Pillow built without WebP support")
    data = encode(noise(6, 5, "RGBA"), "WEBP", lossless=True)
    buf = decode(registry, data)
    expected = np.asarray(Image.open(io.BytesIO(data)).convert("RGBA"))
    assert buf.has_alpha
    assert buf == PixelBuffer.from_rgba(expected, True)


# ═══════════════════════════════════════════════════════════════════════════
# Sources
# ═══════════════════════════════════════════════════════════════════════════

class Stream(io.RawIOBase):
    """Readable but not seekable, like a pipe."""

    def __init__(self, data):
        self._inner = io.BytesIO(data)

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, b):
        chunk = self._inner.read(len(b))
        b[:len(chunk)] = chunk
        return len(chunk)


def test_non_seekable_source(registry):
    data = encode(Image.new("RGB", (2, 2), (5, 5, 5)), "PNG")
    buf = registry.decode(Stream(data))
    assert buf.pixel(1, 1) == 0xFF050505


def test_load_image_from_file(tmp_path):
    path = tmp_path / "pic.png"
    Image.new("RGBA", (5, 4), (1, 2, 3, 4)).save(path)
    buf = load_image(str(path))
    assert buf.size == (5, 4)
    assert buf.pixel(4, 3) == 0x04010203


def test_load_image_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_image(str(tmp_path / "missing.png"))
