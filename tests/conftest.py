"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import torch
import pytest
from PIL import Image

from seamcarve.decoder import DecodedImage
from seamcarve.errors import DecodeError
from seamcarve.image import PixelBuffer


def make_stripe_pixels():
    """3x3 image with columns black, white, black in every row."""
    pixels = torch.zeros(3, 3, 3, dtype=torch.uint8)
    pixels[:, 1, :] = 255
    return pixels


def make_random_pixels(H, W, seed=42):
    """Random RGB noise, reproducible."""
    g = torch.Generator().manual_seed(seed)
    return torch.randint(0, 256, (H, W, 3), generator=g, dtype=torch.uint8)


def make_buffer(pixels):
    """PixelBuffer holding the given pixels, with energy computed."""
    image = PixelBuffer()
    image.assign(pixels)
    image.update_energy()
    return image


def write_png(path, pixels, format=None):
    """Save an (H, W, 3) uint8 tensor or array; PNG unless the path says otherwise."""
    if isinstance(pixels, torch.Tensor):
        pixels = pixels.numpy()
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(path, format=format)
    return path


class FakeDecoder:
    """In-memory decoder keyed by path, for session tests."""

    def __init__(self, images=None):
        self.images = dict(images or {})
        self.decoded = []

    def probe(self, path):
        return str(path) in self.images

    def read_size(self, path):
        decoded = self._get(path)
        return decoded.width, decoded.height

    def decode(self, path):
        self.decoded.append(str(path))
        return self._get(path)

    def encode(self, path, pixels):
        self.images[str(path)] = DecodedImage(
            width=pixels.shape[1], height=pixels.shape[0], pixels=pixels)

    def _get(self, path):
        try:
            return self.images[str(path)]
        except KeyError:
            raise DecodeError(f"No such image: {path}")


@pytest.fixture
def stripe_image():
    return make_buffer(make_stripe_pixels())


@pytest.fixture
def random_png(tmp_path):
    """24x32 random PNG on disk, with its pixels."""
    pixels = make_random_pixels(24, 32)
    path = write_png(tmp_path / "noise.png", pixels)
    return path, pixels
