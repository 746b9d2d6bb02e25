"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.energy import (srgb_to_linear, linear_to_srgb, perceptual_luma,
                              gradient_energy, normalize_energy, compute_energy)

from conftest import make_stripe_pixels, make_random_pixels


class TestTransferFunctions:
    def test_endpoints(self):
        x = torch.tensor([0.0, 1.0])
        assert torch.allclose(srgb_to_linear(x), x)
        assert torch.allclose(linear_to_srgb(x), x)

    def test_linear_segment(self):
        """Below the threshold the curve is a straight line."""
        assert srgb_to_linear(torch.tensor(0.04)).item() == pytest.approx(0.04 / 12.92)

    def test_roundtrip(self):
        x = torch.linspace(0, 1, 256)
        assert torch.allclose(linear_to_srgb(srgb_to_linear(x)), x, atol=1e-5)

    def test_mid_grey_is_darker_in_linear_light(self):
        assert srgb_to_linear(torch.tensor(0.5)).item() == pytest.approx(0.2140, abs=1e-3)


class TestPerceptualLuma:
    def test_black_and_white(self):
        pixels = make_stripe_pixels()
        luma = perceptual_luma(pixels)
        assert luma.shape == (3, 3)
        assert torch.allclose(luma[:, 0], torch.zeros(3))
        assert torch.allclose(luma[:, 1], torch.ones(3), atol=1e-6)

    def test_green_brighter_than_blue(self):
        pixels = torch.zeros(1, 2, 3, dtype=torch.uint8)
        pixels[0, 0, 1] = 255
        pixels[0, 1, 2] = 255
        luma = perceptual_luma(pixels)
        assert luma[0, 0] > luma[0, 1]


class TestGradientEnergy:
    def test_worked_example_raw(self):
        """Border columns get a doubled one-sided difference of 1."""
        luma = torch.tensor([[0.0, 1.0, 0.0]] * 3)
        energy = gradient_energy(luma)
        expected = torch.tensor([[2.0, 0.0, 2.0]] * 3)
        assert torch.equal(energy, expected)

    def test_interior_uses_central_difference(self):
        luma = torch.tensor([[0.0, 0.1, 0.3, 0.6, 1.0]])
        energy = gradient_energy(luma)
        assert energy[0, 2].item() == pytest.approx(0.5)

    def test_vertical_border_rows_are_doubled(self):
        luma = torch.tensor([[0.0], [0.25], [1.0]]).expand(3, 4).clone()
        energy = gradient_energy(luma)
        assert energy[0, 0].item() == pytest.approx(0.5)
        assert energy[1, 0].item() == pytest.approx(1.0)
        assert energy[2, 0].item() == pytest.approx(1.5)

    def test_corner_combines_both_axes(self):
        luma = torch.tensor([[0.0, 0.5], [0.25, 0.0]])
        energy = gradient_energy(luma)
        # |0.5 - 0| * 2 + |0.25 - 0| * 2
        assert energy[0, 0].item() == pytest.approx(1.5)

    def test_single_column_has_no_horizontal_gradient(self):
        luma = torch.tensor([[0.0], [1.0]])
        energy = gradient_energy(luma)
        assert torch.allclose(energy, torch.tensor([[2.0], [2.0]]))

    def test_uniform_is_zero(self):
        energy = gradient_energy(torch.full((6, 7), 0.3))
        assert torch.equal(energy, torch.zeros(6, 7))


class TestNormalizeEnergy:
    def test_max_is_exactly_one(self):
        energy = torch.tensor([[1.0, 5.0], [3.0, 10.0]])
        normed = normalize_energy(energy)
        assert normed.max().item() == 1.0
        assert normed[0, 0].item() == pytest.approx(0.1)

    def test_flat_energy_stays_zero(self):
        normed = normalize_energy(torch.zeros(4, 4))
        assert torch.equal(normed, torch.zeros(4, 4))
        assert torch.isfinite(normed).all()


class TestComputeEnergy:
    def test_worked_example_normalized(self):
        energy = compute_energy(make_stripe_pixels())
        expected = torch.tensor([[1.0, 0.0, 1.0]] * 3)
        assert torch.equal(energy, expected)

    def test_range_on_random_image(self):
        energy = compute_energy(make_random_pixels(20, 30))
        assert energy.dtype == torch.float32
        assert energy.shape == (20, 30)
        assert energy.min() >= 0.0
        assert energy.max().item() == 1.0

    def test_flat_image(self):
        pixels = torch.full((5, 5, 3), 128, dtype=torch.uint8)
        assert torch.equal(compute_energy(pixels), torch.zeros(5, 5))
