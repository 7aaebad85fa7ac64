"""Game layer — session state around the stateless rules engine.

Quick start::

    from chessrules.core import parse_square
    from chessrules.game import GameSession

    session = GameSession.new()
    session.submit(parse_square("e2"), parse_square("e4"))
"""

from chessrules.game.interfaces import GamePhase, SessionConfig
from chessrules.game.session import GameSession, MoveRecord, SessionEvents

__all__ = [
    "GamePhase",
    "GameSession",
    "MoveRecord",
    "SessionConfig",
    "SessionEvents",
]
