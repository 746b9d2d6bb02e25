"""
Content-aware image resizing by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .layout import Orientation, GridLayout
from .energy import (srgb_to_linear, linear_to_srgb, perceptual_luma,
                     gradient_energy, normalize_energy, compute_energy)
from .image import PixelBuffer
from .seam import SeamSolver, carve_columns, carve_rows
from .events import Signal
from .errors import (SeamCarveError, LoadError, DecodeError, TooSmallError,
                     TooLargeError, InvalidCarveRequest, SaveError)
from .config import SessionConfig, load_config, save_config
from .decoder import DecodedImage, PillowDecoder
from .session import CarveSession

__all__ = [
    'Orientation',
    'GridLayout',
    'srgb_to_linear',
    'linear_to_srgb',
    'perceptual_luma',
    'gradient_energy',
    'normalize_energy',
    'compute_energy',
    'PixelBuffer',
    'SeamSolver',
    'carve_columns',
    'carve_rows',
    'Signal',
    'SeamCarveError',
    'LoadError',
    'DecodeError',
    'TooSmallError',
    'TooLargeError',
    'InvalidCarveRequest',
    'SaveError',
    'SessionConfig',
    'load_config',
    'save_config',
    'DecodedImage',
    'PillowDecoder',
    'CarveSession',
]
