"""
Emote canvas rendering.

Every published emote is placed on a fixed 160x160 canvas: a 128x128 content
area with a 16px opaque black border on each side. The source is cropped to a
square covering its longer side, centred on the shorter one, and sampled with
nearest-neighbour. Transparency is baked in by premultiplying against black
so Telegram's JPEG recompression never sees an alpha channel.

render_emote_canvas() is a pure function: identical input bytes always give
identical output bytes.
"""

import asyncio
import io
from enum import Enum

import numpy as np
from PIL import Image, UnidentifiedImageError

import config
from core.errors import UnsupportedMediaTypeError

CANVAS_SIZE = config.EMOTE_CANVAS_SIZE
CANVAS_BORDER = config.EMOTE_CANVAS_BORDER


class ImageFormat(Enum):
    PNG = 'image/png'
    GIF = 'image/gif'

    @property
    def media_type(self) -> str:
        return self.value

    @property
    def pillow_format(self) -> str:
        return self.name

    @property
    def is_animated(self) -> bool:
        return self is ImageFormat.GIF

    @classmethod
    def from_content_type(cls, content_type: str) -> 'ImageFormat':
        """Map a Content-Type header (parameters ignored) to a format."""
        media_type = (content_type or '').split(';', 1)[0].strip().lower()
        for fmt in cls:
            if fmt.media_type == media_type:
                return fmt
        raise UnsupportedMediaTypeError(content_type)


def premultiply_alpha(pixels: np.ndarray) -> np.ndarray:
    """
    Scale RGB by alpha (floor of c * a / 255) and make every pixel opaque.

    Args:
        pixels: uint8 array of shape (height, width, 4)

    Returns:
        New uint8 array of the same shape with alpha == 255 everywhere.
    """
    wide = pixels.astype(np.uint16)
    out = np.empty_like(pixels)
    out[..., :3] = (wide[..., :3] * wide[..., 3:4] // 255).astype(np.uint8)
    out[..., 3] = 255
    return out


def square_crop(width: int, height: int):
    """Return (side, offset_x, offset_y) of the centred square covering the image."""
    if width >= height:
        return width, 0, (width - height) // 2
    return height, (height - width) // 2, 0


def fit_to_canvas(pixels: np.ndarray, size: int = CANVAS_SIZE, border: int = CANVAS_BORDER) -> np.ndarray:
    """Nearest-neighbour map a premultiplied RGBA grid onto the bordered canvas."""
    height, width = pixels.shape[:2]
    side, offset_x, offset_y = square_crop(width, height)
    total = size + 2 * border

    # Integer floor division keeps negative (border) coordinates negative
    mapped = (np.arange(total, dtype=np.int64) - border) * side // size
    src_x = mapped - offset_x
    src_y = mapped - offset_y
    valid_x = (src_x >= 0) & (src_x < width)
    valid_y = (src_y >= 0) & (src_y < height)

    canvas = np.zeros((total, total, 4), dtype=np.uint8)
    canvas[..., 3] = 255

    sampled = pixels[np.clip(src_y, 0, height - 1)[:, None], np.clip(src_x, 0, width - 1)[None, :]]
    mask = valid_y[:, None] & valid_x[None, :]
    canvas[mask] = sampled[mask]
    return canvas


def render_emote_canvas(data: bytes, source_format: ImageFormat) -> bytes:
    """
    Decode `data`, place it on the emote canvas and re-encode it in the same format.

    Raises:
        UnsupportedMediaTypeError: for animated sources, or bytes that do not
            decode as `source_format`
    """
    if source_format.is_animated:
        # TODO: frame-by-frame GIF rendering; needs a decision on frame timing and disposal
        raise UnsupportedMediaTypeError(source_format.media_type, "animated transform not implemented")

    try:
        with Image.open(io.BytesIO(data), formats=[source_format.pillow_format]) as img:
            pixels = np.asarray(img.convert('RGBA'), dtype=np.uint8)
    except UnidentifiedImageError as e:
        raise UnsupportedMediaTypeError(source_format.media_type, "cannot decode image") from e

    canvas = fit_to_canvas(premultiply_alpha(pixels))

    output = io.BytesIO()
    Image.fromarray(canvas).save(output, source_format.pillow_format)
    return output.getvalue()


class PillowTransformer:
    """In-process backend; the pixel work runs in a worker thread."""

    name = 'pillow'

    async def transform(self, data: bytes, source_format: ImageFormat) -> bytes:
        return await asyncio.to_thread(render_emote_canvas, data, source_format)


def get_transformer(backend: str = None):
    """Return the transformer configured by IMAGE_TRANSFORM_BACKEND."""
    backend = (backend or config.IMAGE_TRANSFORM_BACKEND).lower()
    if backend == 'pillow':
        return PillowTransformer()
    if backend == 'magick':
        from .magick_transformer import MagickTransformer
        return MagickTransformer()
    raise ValueError(f"Unknown image transform backend: {backend}")
