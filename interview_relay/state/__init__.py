from .runtime import RuntimeDeps
from .settings import AppSettings
from .lifecycle import LinkState, SessionState

__all__ = ["AppSettings", "LinkState", "RuntimeDeps", "SessionState"]
