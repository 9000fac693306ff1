from dataclasses import dataclass

from chessmatch.components.board import Board


@dataclass(slots=True)
class BoardState:
    """The one authoritative board of a level session.

    Systems replace ``board`` with a new snapshot; nothing else keeps one.
    ``resolving`` is set while a player action is being resolved.
    """
    board: Board
    resolving: bool = False
