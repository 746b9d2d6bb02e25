"""
Carve an image to a smaller size and save the result.

Run:
    python examples/carve_image.py photo.jpg --width 400 --height 300
    python examples/carve_image.py photo.jpg --scale 0.75 --show

Without --output the result is written next to the input as <name>_seam.png.
"""

import sys
import logging
import argparse
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import matplotlib
import matplotlib.pyplot as plt

from seamcarve import CarveSession, SeamCarveError, load_config

logger = logging.getLogger("carve_image")


def show_comparison(session: CarveSession, path: Path = None):
    """Original, its energy and the carved result side by side."""
    original = session.get_original_image()
    carved = session.get_active_image()

    fig, axes = plt.subplots(1, 3, figsize=(18, 6))
    panels = [
        (original.to_array(), None, f"Original {original.width}x{original.height}"),
        (original.energy_view().numpy(), 'gray', "Energy"),
        (carved.to_array(), None, f"Carved {carved.width}x{carved.height}"),
    ]
    for ax, (img, cmap, title) in zip(axes, panels):
        ax.imshow(img, cmap=cmap)
        ax.set_title(title, fontsize=11)
        ax.axis('off')
    plt.tight_layout()

    if path is not None:
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        logger.info("Saved comparison: %s", path)
    else:
        plt.show()


def main():
    parser = argparse.ArgumentParser(
        description="Shrink an image by removing low-energy seams")
    parser.add_argument('image', type=Path, help='Image to carve')
    parser.add_argument('--width', type=int, help='Target width in pixels')
    parser.add_argument('--height', type=int, help='Target height in pixels')
    parser.add_argument('--scale', type=float,
                        help='Scale both sides by this factor (0, 1]')
    parser.add_argument('--output', type=Path,
                        help='Output file (default: <name>_seam.png)')
    parser.add_argument('--config', type=Path,
                        help='JSON config file (default: ~/.seamcarve.json)')
    parser.add_argument('--show', action='store_true',
                        help='Show original, energy and result')
    parser.add_argument('--comparison', type=Path,
                        help='Save the side-by-side comparison to this file')
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)-18s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    session = CarveSession(config=config)
    if not session.accepts(args.image):
        parser.error(f"{args.image} is not a readable image")

    try:
        session.load(args.image)
    except SeamCarveError as e:
        logger.error("%s", e)
        return 1

    original = session.get_original_image()
    width, height = original.width, original.height
    if args.scale is not None:
        width = max(1, round(width * args.scale))
        height = max(1, round(height * args.scale))
    if args.width is not None:
        width = args.width
    if args.height is not None:
        height = args.height

    try:
        session.carve_to(width, height)
        saved = session.save(args.output)
    except SeamCarveError as e:
        logger.error("%s", e)
        return 1
    print(f"Saved: {saved}")

    if args.comparison is not None:
        matplotlib.use('Agg')
        show_comparison(session, args.comparison)
    elif args.show:
        show_comparison(session)
    return 0


if __name__ == '__main__':
    sys.exit(main())
