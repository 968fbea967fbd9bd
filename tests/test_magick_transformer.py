"""
Tests for the ImageMagick backend (services/processing/magick_transformer.py).

The rendering tests only run where the ImageMagick CLI is installed.
"""
import io
import subprocess

import numpy as np
import pytest
from PIL import Image

from core.errors import UnsupportedMediaTypeError
from services.processing.image_transformer import ImageFormat, get_transformer
from services.processing.magick_transformer import (
    MagickTransformer,
    build_magick_command,
    check_magick_available,
)
from tests.conftest import make_png

requires_magick = pytest.mark.skipif(not check_magick_available(), reason="ImageMagick not installed")

BLACK = (0, 0, 0, 255)


def test_command_reads_stdin_and_writes_stdout():
    cmd = build_magick_command('magick', ImageFormat.PNG)
    assert cmd[0] == 'magick'
    assert cmd[1] == 'PNG:-'
    assert cmd[-1] == 'PNG32:-'
    assert cmd[cmd.index('-border') + 1] == '16'
    assert cmd[cmd.index('-extent') + 1] == '128x128'


def test_factory():
    assert isinstance(get_transformer('magick'), MagickTransformer)


@pytest.mark.asyncio
async def test_animated_source_is_unsupported():
    with pytest.raises(UnsupportedMediaTypeError):
        await MagickTransformer().transform(b'GIF89a', ImageFormat.GIF)


@pytest.mark.asyncio
async def test_failure_raises_called_process_error():
    transformer = MagickTransformer(binary='false')
    with pytest.raises(subprocess.CalledProcessError):
        await transformer.transform(make_png(), ImageFormat.PNG)


@requires_magick
@pytest.mark.asyncio
async def test_same_geometry_as_pillow_backend():
    data = make_png((64, 32), (255, 0, 0, 255))
    output = await MagickTransformer().transform(data, ImageFormat.PNG)

    with Image.open(io.BytesIO(output)) as img:
        canvas = np.asarray(img.convert('RGBA'))

    assert canvas.shape == (160, 160, 4)
    for band in (canvas[:16, :], canvas[-16:, :], canvas[:, :16], canvas[:, -16:]):
        assert (band == BLACK).all()
    # Letterbox above and below, content in the middle
    assert (canvas[16:46, 16:144] == BLACK).all()
    assert (canvas[50:110, 16:144] == (255, 0, 0, 255)).all()
    assert (canvas[114:144, 16:144] == BLACK).all()


@requires_magick
@pytest.mark.asyncio
async def test_transparency_is_flattened_onto_black():
    output = await MagickTransformer().transform(make_png((8, 8), (255, 255, 255, 0)), ImageFormat.PNG)

    with Image.open(io.BytesIO(output)) as img:
        canvas = np.asarray(img.convert('RGBA'))

    assert (canvas == BLACK).all()
