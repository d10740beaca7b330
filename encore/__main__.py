"""Entry point for Encore: python -m encore"""

import argparse
import logging
from pathlib import Path

from encore.app import EncoreApp


def main() -> None:
    parser = argparse.ArgumentParser(description="Encore — AI Music Empire")
    parser.add_argument("--save-dir", type=Path, default=None, help="Save directory (default: ~/.encore)")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs here (the TUI owns the terminal)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    if args.log_file is not None:
        logging.basicConfig(filename=args.log_file, level=args.log_level.upper())

    app = EncoreApp(save_dir=args.save_dir)
    app.run()


if __name__ == "__main__":
    main()
