"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energy is the L1 gradient magnitude of perceptual luma: pixels are decoded
from sRGB to linear light, combined with Rec. 709 weights, and re-encoded to
sRGB so that equal energy differences look roughly equally strong.
"""

import torch


# Rec. 709 luma weights for linear RGB
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)


def srgb_to_linear(x: torch.Tensor) -> torch.Tensor:
    """Decode sRGB-encoded intensities in [0, 1] to linear light."""
    return torch.where(x <= 0.04045,
                       x / 12.92,
                       ((x + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(y: torch.Tensor) -> torch.Tensor:
    """Encode linear light in [0, 1] to sRGB. Inverse of srgb_to_linear."""
    y = y.clamp(min=0.0)
    return torch.where(y <= 0.0031308,
                       y * 12.92,
                       1.055 * y ** (1.0 / 2.4) - 0.055)


def perceptual_luma(pixels: torch.Tensor) -> torch.Tensor:
    """
    Compute sRGB-encoded luma for an 8-bit RGB image.

    Args:
        pixels: uint8 tensor (H, W, 3)

    Returns:
        Luma (H, W), float32 in [0, 1]
    """
    linear = srgb_to_linear(pixels.to(torch.float32) / 255.0)
    r, g, b = LUMA_WEIGHTS
    y = r * linear[..., 0] + g * linear[..., 1] + b * linear[..., 2]
    return linear_to_srgb(y)


def gradient_energy(luma: torch.Tensor) -> torch.Tensor:
    """
    L1 gradient magnitude of a single-channel image.

    E(i,j) = |Y(i,j+1) - Y(i,j-1)| + |Y(i+1,j) - Y(i-1,j)|

    Interior pixels use central differences. On a border the missing
    neighbour is replaced by the pixel itself and the one-sided difference
    is doubled, so border and interior energies share a scale. Corners apply
    the border rule on both axes. An axis of length 1 has no gradient.

    Args:
        luma: Luma map (H, W)

    Returns:
        Energy map (H, W), not normalized
    """
    H, W = luma.shape

    grad_x = torch.zeros_like(luma)
    if W > 1:
        grad_x[:, 1:-1] = (luma[:, 2:] - luma[:, :-2]).abs()
        grad_x[:, 0] = 2.0 * (luma[:, 1] - luma[:, 0]).abs()
        grad_x[:, -1] = 2.0 * (luma[:, -1] - luma[:, -2]).abs()

    grad_y = torch.zeros_like(luma)
    if H > 1:
        grad_y[1:-1, :] = (luma[2:, :] - luma[:-2, :]).abs()
        grad_y[0, :] = 2.0 * (luma[1, :] - luma[0, :]).abs()
        grad_y[-1, :] = 2.0 * (luma[-1, :] - luma[-2, :]).abs()

    return grad_x + grad_y


def normalize_energy(energy: torch.Tensor) -> torch.Tensor:
    """Divide energy by its maximum so it lies in [0, 1].

    The highest-contrast pixel maps to exactly 1.0. A perfectly flat image
    (maximum 0) maps to all zeros.

    Args:
        energy: Non-negative energy map (H, W)

    Returns:
        Normalized energy map (H, W)
    """
    e_max = energy.max()
    if e_max.item() <= 0.0:
        return torch.zeros_like(energy)
    return energy / e_max


def compute_energy(pixels: torch.Tensor) -> torch.Tensor:
    """
    Normalized gradient energy for an 8-bit RGB image.

    Args:
        pixels: uint8 tensor (H, W, 3)

    Returns:
        float32 energy map (H, W) in [0, 1]
    """
    return normalize_energy(gradient_energy(perceptual_luma(pixels)))
