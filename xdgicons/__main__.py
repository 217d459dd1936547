"""Entry point for `python -m xdgicons`."""

import sys


def main():
    from xdgicons.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
