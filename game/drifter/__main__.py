"""
Play Stardust Drifter

    python -m game.drifter --width 1280 --height 720
"""

import argparse
import logging

from .window import run_game


def main():
    parser = argparse.ArgumentParser(description="Play Stardust Drifter")
    parser.add_argument("--width", type=int, default=1280, help="Window width (default: 1280)")
    parser.add_argument("--height", type=int, default=720, help="Window height (default: 720)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Log level changes and deaths")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    print(f"Starting Stardust Drifter ({args.width}x{args.height}). Press ESC to quit.")
    run_game(width=args.width, height=args.height, seed=args.seed)


if __name__ == "__main__":
    main()
