"""Runtime package.

Keep this module dependency-light: settings and logging helpers must import
without touching the network clients.
"""

__all__: list[str] = []
