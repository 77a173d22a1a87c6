"""Session management."""
from .session_factory import SessionFactory
from .session import Session, SessionState, Connected, Unconnected, UNCONNECTED

__all__ = [
    'SessionFactory',
    'Session',
    'SessionState',
    'Connected',
    'Unconnected',
    'UNCONNECTED',
]
