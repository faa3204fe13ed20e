"""
Checkmate Trees

A BoardValueTree holds a board and its BoardValue on each node and actions
on its edges. It is returned by the checkmate-tree functions in
tokyodoves.analysis and only keeps optimal lines:

- every child's value, seen from the parent (child.value.increment()),
  equals the value of the parent
- a node valued Win(1) is a leaf; the win is realized by the action that
  leads out of it, so no further play is recorded

Boards are stored packed (Board.to_u64) and unpacked on demand.
Trees are built by one search call and are read-only afterwards.
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Tuple

from .board import Action, Board, Color
from .values import BoardValue


class BoardValueTree:
    """A node of a checkmate tree together with the subtree below it."""

    __slots__ = ("_board_raw", "_board_cls", "_player", "_value", "_children")

    def __init__(
        self,
        board: Board,
        player: Color,
        value: Optional[BoardValue] = None,
        children: Optional[Dict[Action, BoardValueTree]] = None,
    ):
        self._board_raw: int = board.to_u64()
        self._board_cls = type(board)
        self._player = player
        self._value = value if value is not None else BoardValue.unknown()
        self._children: Dict[Action, BoardValueTree] = dict(children or {})
        if self._value == BoardValue.MAX and self._children:
            raise ValueError("a node valued Win(1) must be a leaf")

    def board(self) -> Board:
        """Unpack the board of this node."""
        return self._board_cls.from_u64(self._board_raw)

    @property
    def board_raw(self) -> int:
        return self._board_raw

    @property
    def player(self) -> Color:
        """The player to move on this node."""
        return self._player

    @property
    def value(self) -> BoardValue:
        return self._value

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def child(self, action: Action) -> Optional[BoardValueTree]:
        return self._children.get(action)

    def actions(self) -> List[Action]:
        return list(self._children)

    def children(self) -> Iterator[Tuple[Action, BoardValueTree]]:
        return iter(self._children.items())

    def __len__(self) -> int:
        return len(self._children)

    def iter_lines(self) -> Iterator[Tuple[Action, ...]]:
        """Yield every sequence of actions from this node to a leaf."""
        if self.is_leaf:
            yield ()
            return
        for action, child in self._children.items():
            for line in child.iter_lines():
                yield (action,) + line

    def is_good_for_puzzle(self, step: int) -> bool:
        """True if the next `step` plies are forced (exactly one child each)."""
        if step == 0:
            return True
        return len(self._children) == 1 and all(
            child.is_good_for_puzzle(step - 1) for child in self._children.values()
        )

    def format(self, indent: str = "    ") -> str:
        """Indented listing of the values in the tree."""
        lines: List[str] = []

        def walk(node: BoardValueTree, action: Optional[Action], depth: int):
            label = f"{action}: " if action is not None else ""
            lines.append(f"{indent * depth}{label}{node.value}")
            for child_action, child in node._children.items():
                walk(child, child_action, depth + 1)

        walk(self, None, 0)
        return "\n".join(lines)

    def __repr__(self) -> str:
        children_str = f", {len(self._children)} children" if self._children else ", leaf"
        return f"BoardValueTree({self._player}, {self._value}{children_str})"
