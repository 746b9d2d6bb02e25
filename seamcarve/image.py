"""
Pixel and energy storage for carving.

A PixelBuffer keeps pixels and energy in flat, row-major tensors with a fixed
row stride. Carving shrinks the logical width/height in place; the stride
stays at the width the buffer was filled with, and the columns beyond
`width` are scratch space. Capacity only ever grows, so a buffer can be
reused across loads and carves without reallocating.
"""

import numpy as np
import torch

from .energy import compute_energy
from .layout import GridLayout, Orientation, virtual_extent


class PixelBuffer:
    """
    An 8-bit RGB image with a parallel per-pixel energy map.

    Attributes:
        width, height: Current logical dimensions
        stride: Pixel slots per row in the backing buffers (>= width)
        capacity: Pixel slots allocated
        pixels: uint8 tensor (capacity, 3)
        energy: float32 tensor (capacity,), normalized to [0, 1]
    """

    def __init__(self):
        self.width = 0
        self.height = 0
        self.stride = 0
        self.capacity = 0
        self.pixels = None
        self.energy = None

    def __bool__(self):
        return self.is_valid()

    def __repr__(self):
        return (f"PixelBuffer(width={self.width}, height={self.height}, "
                f"stride={self.stride}, capacity={self.capacity})")

    def is_valid(self) -> bool:
        """True if the image has dimensions and allocated pixels."""
        return self.width > 0 and self.height > 0 and self.pixels is not None

    def reserve(self, n_pixels: int):
        """Make room for at least n_pixels slots. Never shrinks."""
        if n_pixels <= self.capacity:
            return
        self.pixels = torch.zeros((n_pixels, 3), dtype=torch.uint8)
        self.energy = torch.zeros(n_pixels, dtype=torch.float32)
        self.capacity = n_pixels

    def assign(self, pixels: torch.Tensor):
        """
        Replace the contents with an image.

        Args:
            pixels: uint8 tensor (H, W, 3), top row first
        """
        H, W, C = pixels.shape
        if C != 3:
            raise ValueError(f"Expected 3 channels, got {C}")
        self.reserve(H * W)
        self.width = W
        self.height = H
        self.stride = W
        self.pixel_view().copy_(pixels)
        self.energy[:H * W].zero_()

    def copy_from(self, other: 'PixelBuffer'):
        """Make this buffer an independent copy of another."""
        n = other.stride * other.height
        self.reserve(n)
        self.width = other.width
        self.height = other.height
        self.stride = other.stride
        self.pixels[:n].copy_(other.pixels[:n])
        self.energy[:n].copy_(other.energy[:n])

    def pixel_view(self) -> torch.Tensor:
        """Logical pixels as a strided (H, W, 3) view into the buffer."""
        rows = self.pixels[:self.height * self.stride].view(
            self.height, self.stride, 3)
        return rows[:, :self.width]

    def energy_view(self) -> torch.Tensor:
        """Logical energy as a strided (H, W) view into the buffer."""
        rows = self.energy[:self.height * self.stride].view(
            self.height, self.stride)
        return rows[:, :self.width]

    def update_energy(self):
        """Recompute energy from the current pixels."""
        self.energy_view().copy_(compute_energy(self.pixel_view()))

    def layout(self, orientation: Orientation) -> GridLayout:
        return GridLayout.for_image(self.width, self.height, self.stride,
                                    orientation)

    def extent(self, orientation: Orientation) -> int:
        """Length of the axis that carving in this orientation shortens."""
        return virtual_extent(self.width, self.height, orientation)[1]

    def set_extent(self, orientation: Orientation, n: int):
        if orientation is Orientation.COLUMNS:
            self.width = n
        else:
            self.height = n

    def to_array(self) -> np.ndarray:
        """Contiguous (H, W, 3) uint8 copy of the logical image."""
        return self.pixel_view().contiguous().numpy().copy()
