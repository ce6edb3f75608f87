from __future__ import annotations

import argparse

from rstable.cli import main as cli_main


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Regenerate data/restaurants.json from the Google Sheet.")
    p.add_argument("--csv", type=str, default=None, help="Local CSV export to read instead of downloading.")
    p.add_argument("--out", type=str, default=None)
    args = p.parse_args(argv)

    forwarded = ["sync-sheets"]
    if args.csv:
        forwarded += ["--csv", args.csv]
    if args.out:
        forwarded += ["--out", args.out]
    return cli_main(forwarded)


if __name__ == "__main__":
    raise SystemExit(main())
