"""
Image file decoding and encoding with Pillow.

CarveSession talks to its decoder through probe and decode, plus encode for
saving. read_size is optional and lets the session reject oversized files
before decoding them. PillowDecoder is the default; any object with the same
methods can be passed to a session instead.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, SaveError, TooLargeError

PathLike = Union[str, Path]


@dataclass
class DecodedImage:
    """Decoded RGB-24 pixels."""

    width: int
    height: int
    pixels: np.ndarray  # (H, W, 3) uint8
    bottom_up: bool = False  # True if pixels[0] is the bottom row


class PillowDecoder:
    """Reads and writes any format Pillow supports."""

    def probe(self, path: PathLike) -> bool:
        """
        Check whether a file looks like an image we can read.

        Only the header is read. If the file signature is not recognised,
        guess from the extension.
        """
        path = Path(path)
        if not path.is_file():
            return False
        try:
            with Image.open(path):
                return True
        except Image.DecompressionBombError:
            # Recognised format; load will report the size
            return True
        except UnidentifiedImageError:
            pass
        except OSError:
            return False

        fmt = Image.registered_extensions().get(path.suffix.lower())
        return fmt is not None and fmt in Image.OPEN

    def read_size(self, path: PathLike) -> Tuple[int, int]:
        """Return (width, height) from the file header."""
        try:
            with Image.open(path) as img:
                return img.size
        except Image.DecompressionBombError as e:
            raise TooLargeError(str(e)) from e
        except (OSError, ValueError, SyntaxError) as e:
            raise DecodeError(f"Failed to load image: {e}") from e

    def decode(self, path: PathLike) -> DecodedImage:
        """Decode a file to 8-bit RGB, dropping any alpha channel."""
        try:
            with Image.open(path) as img:
                rgb = img.convert('RGB')
        except Image.DecompressionBombError as e:
            raise TooLargeError(str(e)) from e
        except (OSError, ValueError, SyntaxError) as e:
            raise DecodeError(f"Failed to load image: {e}") from e

        pixels = np.asarray(rgb, dtype=np.uint8)
        return DecodedImage(width=rgb.width, height=rgb.height, pixels=pixels)

    def encode(self, path: PathLike, pixels: np.ndarray):
        """
        Write an (H, W, 3) uint8 array. The format follows the extension.
        """
        img = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
        try:
            img.save(path)
        except (OSError, ValueError, KeyError) as e:
            raise SaveError(f"Failed to save image to {path}: {e}") from e
