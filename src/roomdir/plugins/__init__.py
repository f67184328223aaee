"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``roomdir.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from roomdir.plugins.hookspecs import hookimpl
from roomdir.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
