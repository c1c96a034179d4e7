"""quickswitch: pick a directory in the terminal and hand it back to the shell.

The ``qs`` shell wrapper runs the navigator with ``--output-file`` and ``cd``s
into whatever path the session confirms. ``main`` is the same entrypoint for
programmatic use.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the CLI; imported on first call so ``import quickswitch`` stays cheap."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
