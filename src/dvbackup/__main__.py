from __future__ import annotations

import logging
import sys

from .app import backup, inspect, restore
from .cli import build_parser
from .errors import VolumeBackupException


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.cmd == "backup":
            backup(
                args.volume_names,
                args.target,
                image=args.image,
                runtime=args.runtime,
            )
            return 0

        if args.cmd == "restore":
            restore(args.source, image=args.image, runtime=args.runtime)
            return 0

        if args.cmd == "inspect":
            inspect(args.source, csv=args.csv)
            return 0

        parser.error("Unhandled command")
        return 2

    except (VolumeBackupException, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
