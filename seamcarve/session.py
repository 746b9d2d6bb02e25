"""
Carving session: the loaded image, its carved copy, and change signals.

The session keeps two buffers. `original` holds the image as loaded and is
only replaced by another load. `active` is an independent copy that carving
shrinks in place. Until the first carve the original stands in as the active
image.

Carving only removes seams, so a request to grow either dimension past the
active size restarts from a fresh copy of the original.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

import numpy as np
import torch

from .config import SessionConfig
from .decoder import PillowDecoder
from .errors import (DecodeError, InvalidCarveRequest, LoadError, SaveError,
                     TooLargeError, TooSmallError)
from .events import Signal
from .image import PixelBuffer
from .seam import carve_columns, carve_rows

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class CarveSession:
    """
    Owns the original and the carved image for one viewer.

    Args:
        decoder: Image reader/writer (defaults to PillowDecoder)
        config: Session settings (defaults to SessionConfig())

    Signals:
        image_changed: emitted after a successful load
        image_seamed: emitted after a carve changed the active image
    """

    def __init__(self, decoder=None, config: Optional[SessionConfig] = None):
        self.decoder = decoder if decoder is not None else PillowDecoder()
        self.config = config if config is not None else SessionConfig()
        self.original = PixelBuffer()
        self.active = PixelBuffer()
        self.is_seam_modified = False
        self.source_path: Optional[Path] = None

        self.image_changed = Signal('image_changed')
        self.image_seamed = Signal('image_seamed')

    # ─── Loading ───────────────────────────────────────────────────
    def accepts(self, path: PathLike) -> bool:
        """True if the decoder recognises the file. Does not decode it."""
        return self.decoder.probe(path)

    def load(self, path: PathLike):
        """
        Load an image as the new original.

        Raises:
            DecodeError: The file cannot be decoded
            TooSmallError: Width or height is 1 pixel or less
            TooLargeError: width * height exceeds config.max_pixels

        On failure the session is left exactly as it was. Decoders with a
        read_size method are size-checked from the header before decoding.
        """
        start = time.perf_counter()
        try:
            read_size = getattr(self.decoder, 'read_size', None)
            if read_size is not None:
                self._check_size(*read_size(path))
            decoded = self.decoder.decode(path)
            self._check_size(decoded.width, decoded.height)
            pixels = self._to_tensor(decoded)
        except LoadError as e:
            logger.warning("Failed to load %s: %s", path, e)
            raise

        self.original.assign(pixels)
        self.original.update_energy()
        self.is_seam_modified = False
        self.source_path = Path(path)

        logger.info("Loaded %s (%dx%d) in %.3fs", path, self.original.width,
                    self.original.height, time.perf_counter() - start)
        self.image_changed.emit()

    def _check_size(self, width: int, height: int):
        if width <= 1 or height <= 1:
            raise TooSmallError(
                f"Image is {width}x{height}, both sides must be at least 2")
        if width * height > self.config.max_pixels:
            raise TooLargeError(
                f"Image is {width}x{height}, more than "
                f"{self.config.max_pixels} pixels")

    @staticmethod
    def _to_tensor(decoded) -> torch.Tensor:
        pixels = np.array(decoded.pixels, dtype=np.uint8)
        if pixels.shape != (decoded.height, decoded.width, 3):
            raise DecodeError(
                f"Decoder returned pixels of shape {pixels.shape} for a "
                f"{decoded.width}x{decoded.height} RGB image")
        pixels = torch.from_numpy(pixels)
        if decoded.bottom_up:
            pixels = torch.flip(pixels, dims=[0])
        return pixels

    # ─── Access ────────────────────────────────────────────────────
    def get_active_image(self) -> PixelBuffer:
        """The carved image, or the original if nothing has been carved."""
        return self.active if self.is_seam_modified else self.original

    def get_original_image(self) -> PixelBuffer:
        return self.original

    # ─── Carving ───────────────────────────────────────────────────
    def carve_to(self, width: int, height: int) -> bool:
        """
        Carve the active image to the given size.

        Targets larger than the original are clamped to it, so asking for the
        original size (or more) restores the original.

        Args:
            width: Target width in pixels, > 0
            height: Target height in pixels, > 0

        Returns:
            True if the active image changed, False if it already had this size

        Raises:
            InvalidCarveRequest: No image is loaded, or a target is <= 0
        """
        if not self.original.is_valid():
            raise InvalidCarveRequest("No image loaded")
        if width <= 0 or height <= 0:
            raise InvalidCarveRequest(
                f"Target size must be positive, got {width}x{height}")

        width = min(width, self.original.width)
        height = min(height, self.original.height)
        current = self.get_active_image()
        if current.width == width and current.height == height:
            return False

        start = time.perf_counter()
        if (not self.is_seam_modified or width > self.active.width
                or height > self.active.height):
            self.active.copy_from(self.original)
            self.is_seam_modified = True

        # Columns before rows
        n_cols = carve_columns(self.active, self.active.width - width)
        n_rows = carve_rows(self.active, self.active.height - height)

        logger.info("Carved %d columns and %d rows to %dx%d in %.3fs",
                    n_cols, n_rows, width, height,
                    time.perf_counter() - start)
        self.image_seamed.emit()
        return True

    # ─── Saving ────────────────────────────────────────────────────
    def suggest_save_path(self) -> Optional[Path]:
        """Default save location: next to the loaded file, with a suffix."""
        if self.source_path is None:
            return None
        name = (f"{self.source_path.stem}{self.config.save_suffix}"
                f"{self.config.save_extension}")
        return self.source_path.with_name(name)

    def save(self, path: Optional[PathLike] = None) -> Path:
        """
        Write the active image.

        Args:
            path: Destination; defaults to suggest_save_path()

        Returns:
            The path written
        """
        if not self.original.is_valid():
            raise SaveError("No image loaded")
        if path is None:
            path = self.suggest_save_path()
        path = Path(path)
        self.decoder.encode(path, self.get_active_image().to_array())
        logger.info("Saved %s", path)
        return path
