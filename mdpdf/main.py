from __future__ import annotations
import sys
from mdpdf.app import run_app


def main() -> int:
    """Module entrypoint for `python -m mdpdf.main` or the `mdpdf-gui` script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
