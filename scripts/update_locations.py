from __future__ import annotations

import argparse

from rstable.cli import main as cli_main


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Fill missing Google Maps URLs and coordinates (OpenStreetMap Nominatim, 1 req/sec)."
    )
    p.add_argument("--data", type=str, default=None)
    args = p.parse_args(argv)

    forwarded = ["update-locations"]
    if args.data:
        forwarded += ["--data", args.data]
    return cli_main(forwarded)


if __name__ == "__main__":
    raise SystemExit(main())
