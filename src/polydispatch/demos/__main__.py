"""Print the output of every pattern demonstration."""
from polydispatch.config import get_config
from polydispatch.demos import render_catalog
from polydispatch.infrastructure.logging import setup_logging


def main() -> int:
    setup_logging(get_config().logging)
    for line in render_catalog():
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
