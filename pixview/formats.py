"""Format registry - header sniffing and decoding into PixelBuffer.

Each supported format is one ``ImageFormat`` variant with a signature
matcher and a decoder. The registry reads a fixed-size header, picks the
first entry whose matcher accepts it and hands the whole source, rewound,
to that entry's decoder.

Codec work is done by Pillow. Its exceptions are translated here, at the
codec boundary, into ``DecodeError`` / ``AllocationFailure``.
"""

from __future__ import annotations
import io
import os
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable, List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, features

from .config import HEADER_SIZE
from .errors import AllocationFailure, DecodeError, UnsupportedFormat
from .logging import log
from .types import PixelBuffer

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
JPEG_SIGNATURE = b'\xff\xd8'
GIF_SIGNATURE = b'GIF'
BMP_SIGNATURE = b'BM'

# Pillow modes whose colour model carries an alpha channel
ALPHA_MODES = frozenset({"RGBA", "LA", "PA", "RGBa", "La"})
# Pillow modes holding 16/32 bit grayscale samples
WIDE_GRAY_MODES = frozenset({"I", "I;16", "I;16B", "I;16L", "I;16N"})


class ImageFormat(Enum):
    """Image formats known to the registry."""
    JPEG = "JPEG"
    PNG = "PNG"
    GIF = "GIF"
    BMP = "BMP"
    WEBP = "WEBP"


Matcher = Callable[[bytes], bool]
Decoder = Callable[[BinaryIO], PixelBuffer]


@dataclass(frozen=True)
class FormatEntry:
    """One registry entry: how to recognise and how to decode a format."""
    format: ImageFormat
    description: str
    matcher: Matcher
    decoder: Decoder
    available: bool = True


# ═══════════════════════════════════════════════════════════════════════════
# Signature matchers
# ═══════════════════════════════════════════════════════════════════════════

def is_png(header: bytes) -> bool:
    return header[:8] == PNG_SIGNATURE


def is_jpeg(header: bytes) -> bool:
    return header[:2] == JPEG_SIGNATURE


def is_gif(header: bytes) -> bool:
    return header[:3] == GIF_SIGNATURE


def is_bmp(header: bytes) -> bool:
    return header[:2] == BMP_SIGNATURE


def is_webp(header: bytes) -> bool:
    return header[:4] == b'RIFF' and header[8:12] == b'WEBP'


# ═══════════════════════════════════════════════════════════════════════════
# Decoders
# ═══════════════════════════════════════════════════════════════════════════

def _open(source: BinaryIO, fmt: ImageFormat) -> Image.Image:
    """Open and fully decode the first frame with the format's Pillow plugin."""
    try:
        img = Image.open(source, formats=[fmt.value])
        img.load()
    except (Image.DecompressionBombError, MemoryError) as e:
        raise AllocationFailure() from e
    except (OSError, SyntaxError, ValueError, EOFError) as e:
        raise DecodeError(str(e) or type(e).__name__) from e
    return img


def _to_rgba(img: Image.Image) -> np.ndarray:
    """Convert any Pillow mode to an ``(h, w, 4)`` uint8 RGBA array."""
    try:
        if img.mode in WIDE_GRAY_MODES:
            return _wide_gray_to_rgba(img)
        return np.asarray(img.convert("RGBA"), dtype=np.uint8)
    except MemoryError as e:
        raise AllocationFailure(img.width, img.height) from e
    except (OSError, ValueError) as e:
        raise DecodeError(str(e)) from e


def _wide_gray_to_rgba(img: Image.Image) -> np.ndarray:
    wide = np.asarray(img).astype(np.uint32)
    # keep the high byte of 16 bit samples
    gray = np.clip(wide >> 8, 0, 255).astype(np.uint8)
    rgba = np.empty(gray.shape + (4,), dtype=np.uint8)
    rgba[..., :3] = gray[..., None]
    key = img.info.get("transparency")
    if isinstance(key, int):
        rgba[..., 3] = np.where(wide == key, 0, 255)
    else:
        rgba[..., 3] = 255
    return rgba


def _has_transparency(img: Image.Image) -> bool:
    return img.mode in ALPHA_MODES or "transparency" in img.info


def decode_png(source: BinaryIO) -> PixelBuffer:
    img = _open(source, ImageFormat.PNG)
    has_alpha = _has_transparency(img)
    return PixelBuffer.from_rgba(_to_rgba(img), has_alpha)


def decode_jpeg(source: BinaryIO) -> PixelBuffer:
    img = _open(source, ImageFormat.JPEG)
    if img.mode not in ("L", "RGB"):
        # CMYK / YCCK: let Pillow map to RGB
        img = img.convert("RGB")
    return PixelBuffer.from_rgba(_to_rgba(img), False)


def decode_gif(source: BinaryIO) -> PixelBuffer:
    # First frame only; the format itself can always express transparency.
    img = _open(source, ImageFormat.GIF)
    return PixelBuffer.from_rgba(_to_rgba(img), True)


def decode_bmp(source: BinaryIO) -> PixelBuffer:
    img = _open(source, ImageFormat.BMP)
    return PixelBuffer.from_rgba(_to_rgba(img), _has_transparency(img))


def decode_webp(source: BinaryIO) -> PixelBuffer:
    img = _open(source, ImageFormat.WEBP)
    return PixelBuffer.from_rgba(_to_rgba(img), _has_transparency(img))


def default_entries() -> List[FormatEntry]:
    """Built-in formats, flagged with the codecs compiled into Pillow."""
    return [
        FormatEntry(ImageFormat.JPEG, "JPEG (libjpeg)", is_jpeg, decode_jpeg,
                    bool(features.check_codec("jpg"))),
        FormatEntry(ImageFormat.PNG, "PNG (zlib)", is_png, decode_png,
                    bool(features.check_codec("zlib"))),
        FormatEntry(ImageFormat.GIF, "GIF", is_gif, decode_gif),
        FormatEntry(ImageFormat.BMP, "BMP", is_bmp, decode_bmp),
        FormatEntry(ImageFormat.WEBP, "WebP (libwebp)", is_webp, decode_webp,
                    bool(features.check_module("webp"))),
    ]


# ═══════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════

class FormatRegistry:
    """Ordered list of format entries; the first matching entry wins."""

    def __init__(self, entries: Optional[Sequence[FormatEntry]] = None):
        self._entries: List[FormatEntry] = list(
            default_entries() if entries is None else entries)

    def register(self, entry: FormatEntry) -> None:
        """Append a format; earlier entries keep priority."""
        self._entries.append(entry)

    def formats(self) -> List[Tuple[str, bool]]:
        """Format descriptions paired with their availability."""
        return [(e.description, e.available) for e in self._entries]

    def match(self, header: bytes) -> Optional[FormatEntry]:
        """Return the first available entry accepting the header."""
        for entry in self._entries:
            if entry.available and entry.matcher(header):
                return entry
        return None

    def detect_and_decode(self, header: bytes, source: BinaryIO) -> PixelBuffer:
        """Decode ``source`` with the decoder whose signature matches ``header``.

        Args:
            header: Leading bytes of the source (at least the longest magic).
            source: Seekable binary stream; rewound before decoding.

        Returns:
            Decoded PixelBuffer.

        Raises:
            UnsupportedFormat: No entry accepts the header.
            DecodeError: The payload is malformed (raised by the decoder).
        """
        entry = self.match(header)
        if entry is None:
            raise UnsupportedFormat()
        source.seek(0)
        img = entry.decoder(source)
        log(f"[LOAD] {entry.format.value} {img.width}x{img.height} "
            f"alpha={img.has_alpha}")
        return img

    def decode(self, source: BinaryIO) -> PixelBuffer:
        """Sniff the header of ``source`` and decode it."""
        if not source.seekable():
            source = io.BytesIO(source.read())
        header = source.read(HEADER_SIZE)
        source.seek(0)
        return self.detect_and_decode(header, source)


# Default registry shared by load_image()
_registry: Optional[FormatRegistry] = None


def get_registry() -> FormatRegistry:
    """Get or create the default registry."""
    global _registry
    if _registry is None:
        _registry = FormatRegistry()
    return _registry


def load_image(path: str, registry: Optional[FormatRegistry] = None) -> PixelBuffer:
    """Load an image file.

    Raises:
        OSError: The file cannot be opened or read.
        UnsupportedFormat: Unknown file signature.
        DecodeError: Corrupt or truncated image data.
    """
    log(f"[LOAD] {os.path.basename(path)}")
    with open(path, 'rb') as f:
        return (registry or get_registry()).decode(f)
