"""diffcopy CLI: copy files and trees only where content differs."""

from ._helpers import main  # noqa: F401 (entry point)

# Import command modules to register Click commands with the main group.
from . import _commands  # noqa: F401
