"""Module entrypoint for ``python -m quickswitch``.

All argument parsing and runtime setup happen in ``quickswitch.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
