"""Console-script entry point.

click is only installed with the ``cli`` extra, so the import is deferred
until the command actually runs.
"""

import sys

_MISSING_CLICK = (
    "diffcopy: the command-line tool needs click.\n"
    "Install the extra with:  pip install 'diffcopy[cli]'"
)


def main():
    try:
        from .cli import main as run
    except ImportError as exc:
        if exc.name != "click":
            raise
        sys.exit(_MISSING_CLICK)
    run()
