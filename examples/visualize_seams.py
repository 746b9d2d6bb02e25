"""
Draw the first seams that carving would remove.

Run:
    python examples/visualize_seams.py photo.jpg --seams 50
    python examples/visualize_seams.py photo.jpg --seams 30 --rows

Output goes to <name>_seams.png next to the input unless --output is given.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse

import numpy as np
import torch
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
from PIL import Image

from seamcarve import CarveSession, Orientation, PixelBuffer, SeamSolver


def seam_overlay(image: PixelBuffer, n_seams: int,
                 orientation: Orientation) -> np.ndarray:
    """Return the image with the first n_seams seams painted red."""
    work = PixelBuffer()
    work.copy_from(image)
    solver = SeamSolver(work, orientation)
    solver.carve(n_seams)

    vis = image.to_array()
    if not solver.removed_offsets:
        return vis
    offsets = torch.cat(solver.removed_offsets)
    rows = (offsets // image.stride).numpy()
    cols = (offsets % image.stride).numpy()
    vis[rows, cols] = (255, 0, 0)
    return vis


def main():
    parser = argparse.ArgumentParser(
        description="Paint the lowest-energy seams of an image in red")
    parser.add_argument('image', type=Path)
    parser.add_argument('--seams', type=int, default=20,
                        help='Number of seams to draw (default: 20)')
    parser.add_argument('--rows', action='store_true',
                        help='Draw horizontal seams instead of vertical ones')
    parser.add_argument('--output', type=Path)
    parser.add_argument('--plot', type=Path,
                        help='Also save an energy/seams figure to this file')
    args = parser.parse_args()

    session = CarveSession()
    session.load(args.image)
    original = session.get_original_image()

    orientation = Orientation.ROWS if args.rows else Orientation.COLUMNS
    n_seams = min(args.seams, original.extent(orientation) - 1)
    print(f"Image: {original.width} x {original.height}, "
          f"drawing {n_seams} {orientation.value}")

    vis = seam_overlay(original, n_seams, orientation)
    output = args.output or args.image.with_name(f"{args.image.stem}_seams.png")
    Image.fromarray(vis).save(output)
    print(f"Saved: {output}")

    if args.plot is not None:
        fig, axes = plt.subplots(1, 2, figsize=(12, 6))
        axes[0].imshow(original.energy_view().numpy(), cmap='gray')
        axes[0].set_title("Energy")
        axes[1].imshow(vis)
        axes[1].set_title(f"{n_seams} lowest-energy seams")
        for ax in axes:
            ax.axis('off')
        plt.tight_layout()
        plt.savefig(args.plot, dpi=150, bbox_inches='tight')
        plt.close()
        print(f"Saved: {args.plot}")


if __name__ == '__main__':
    main()
