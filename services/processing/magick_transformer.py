"""
ImageMagick backend for emote canvas rendering.

Produces the same geometry as render_emote_canvas(): a 128x128 aspect-fit
content area centred on black, transparency flattened onto black, and a 16px
black border. Resampling is done by ImageMagick, so pixel values can differ
from the in-process backend by rounding at the letterbox edges.
"""

import asyncio
import shutil
import subprocess

import config
from core.errors import UnsupportedMediaTypeError
from utils.logging_config import get_logger
from .image_transformer import CANVAS_BORDER, CANVAS_SIZE, ImageFormat

logger = get_logger('Magick')


def check_magick_available(binary: str = None) -> bool:
    """Check whether the ImageMagick CLI is on PATH."""
    return shutil.which(binary or config.MAGICK_BINARY) is not None


def build_magick_command(binary: str, source_format: ImageFormat):
    fmt = source_format.pillow_format
    geometry = f"{CANVAS_SIZE}x{CANVAS_SIZE}"
    return [
        binary, f"{fmt}:-",
        '-background', 'black', '-alpha', 'remove', '-alpha', 'off',
        '-filter', 'point', '-resize', geometry,
        '-gravity', 'center', '-extent', geometry,
        '-bordercolor', 'black', '-border', str(CANVAS_BORDER),
        '-strip', '-define', 'png:exclude-chunks=date,time',
        f"{fmt}32:-" if source_format is ImageFormat.PNG else f"{fmt}:-",
    ]


class MagickTransformer:
    name = 'magick'

    def __init__(self, binary: str = None):
        self.binary = binary or config.MAGICK_BINARY

    async def transform(self, data: bytes, source_format: ImageFormat) -> bytes:
        if source_format.is_animated:
            raise UnsupportedMediaTypeError(source_format.media_type, "animated transform not implemented")

        cmd = build_magick_command(self.binary, source_format)
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate(data)
        if process.returncode != 0:
            logger.error(f"ImageMagick failed ({process.returncode}): {stderr.decode(errors='replace').strip()}")
            raise subprocess.CalledProcessError(process.returncode, cmd, output=stdout, stderr=stderr)
        return stdout
