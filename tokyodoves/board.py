"""
Board Representation for Tokyo Doves

Tokyo Doves is played by two players (Red and Green) with six doves each.
There is no fixed board: the field "floats", and the only constraint is that
all doves on the field fit in a 4x4 box. A player loses when the four squares
right above, below, left and right of their boss are all doves or walls.

Rules implemented here:
1. Put:    a dove in hand goes onto an empty square next to one of your doves,
           but never right above, below, left or right of the opponent's boss
2. Move:   a dove on the field moves by its own pattern to an empty square
3. Remove: a dove other than the boss goes back to your hand
Moves and removes must never leave an isolated dove (one with no dove among
its eight neighbours), and the field must always fit in a 4x4 box.
A square is a wall when no 4x4 box contains both it and the current doves.

This module provides:
- Color, Dove: the players and their pieces
- Action, ActionKind: the three kinds of action
- Surrounded: which bosses are surrounded
- Board: an immutable position with move generation and a 64-bit packing
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple
import numpy as np

from .errors import IllegalActionError, InvalidBoardError


FIELD_SIZE = 4
NUM_DOVES = 6

# (row, col) - rows grow downwards, both can be negative before normalization
Coord = Tuple[int, int]


class Color(IntEnum):
    """Player colors."""
    RED = 0
    GREEN = 1

    def toggle(self) -> Color:
        """The other player."""
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.capitalize()


class Dove(IntEnum):
    """
    Six types of doves.

    B: Boss-hato, one step in eight directions; a surrounded boss loses
    A: Aniki-hato, one step in eight directions
    Y: Yaibato, one step forward, backward or sideways (+)
    M: Mamedeppo-bato, one step diagonally (x)
    T: Totsu-hato, any number of steps forward, backward or sideways
    H: Hajike-hato, jumps like the Knight in chess
    """
    B = 0
    A = 1
    Y = 2
    M = 3
    T = 4
    H = 5


class Surrounded(IntFlag):
    """Surrounded status of the two bosses."""
    NONE = 0
    RED = 1
    GREEN = 2
    BOTH = 3

    @classmethod
    def of(cls, color: Color) -> Surrounded:
        """Status where only the boss of `color` is surrounded."""
        return cls.RED if color == Color.RED else cls.GREEN


class ActionKind(Enum):
    PUT = "Put"
    MOVE = "Move"
    REMOVE = "Remove"


@dataclass(frozen=True)
class Action:
    """
    An action of one player.

    `target` is the destination square of PUT and MOVE, given in the
    coordinates of the board the action is performed on.
    It may lie outside the current bounding box (e.g. row -1).
    """
    kind: ActionKind
    color: Color
    dove: Dove
    target: Optional[Coord] = None

    @classmethod
    def put(cls, color: Color, dove: Dove, target: Coord) -> Action:
        return cls(ActionKind.PUT, color, dove, target)

    @classmethod
    def move(cls, color: Color, dove: Dove, target: Coord) -> Action:
        return cls(ActionKind.MOVE, color, dove, target)

    @classmethod
    def remove(cls, color: Color, dove: Dove) -> Action:
        return cls(ActionKind.REMOVE, color, dove)

    def __str__(self) -> str:
        symbol = dove_to_char(self.color, self.dove)
        if self.kind is ActionKind.REMOVE:
            return f"{self.kind.value}({symbol})"
        return f"{self.kind.value}({symbol}, {self.target})"


_DOVE_CHARS = "BAYMTH"

EIGHT_DIRECTIONS: Tuple[Coord, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)
ORTHOGONAL_DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))
DIAGONAL_DIRECTIONS: Tuple[Coord, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
KNIGHT_JUMPS: Tuple[Coord, ...] = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)

# Single-step move patterns; T slides and is handled separately
_STEP_PATTERNS: Dict[Dove, Tuple[Coord, ...]] = {
    Dove.B: EIGHT_DIRECTIONS,
    Dove.A: EIGHT_DIRECTIONS,
    Dove.Y: ORTHOGONAL_DIRECTIONS,
    Dove.M: DIAGONAL_DIRECTIONS,
    Dove.H: KNIGHT_JUMPS,
}


def dove_to_char(color: Color, dove: Dove) -> str:
    """Upper case for red, lower case for green."""
    char = _DOVE_CHARS[dove]
    return char if color == Color.RED else char.lower()


def char_to_dove(char: str) -> Optional[Tuple[Color, Dove]]:
    if len(char) != 1 or char.upper() not in _DOVE_CHARS:
        return None
    index = _DOVE_CHARS.index(char.upper())
    color = Color.RED if char.isupper() else Color.GREEN
    return color, Dove(index)


def _index(color: Color, dove: Dove) -> int:
    return color * NUM_DOVES + dove


def _shift(coord: Coord, delta: Coord, steps: int = 1) -> Coord:
    return coord[0] + delta[0] * steps, coord[1] + delta[1] * steps


def _fits(squares: Iterable[Coord]) -> bool:
    """True if all squares fit in one 4x4 box."""
    rows = [r for r, _ in squares]
    cols = [c for _, c in squares]
    return max(rows) - min(rows) < FIELD_SIZE and max(cols) - min(cols) < FIELD_SIZE


def _has_isolated(squares: FrozenSet[Coord]) -> bool:
    """True if some square has none of the others among its eight neighbours."""
    for square in squares:
        if not any(_shift(square, d) in squares for d in EIGHT_DIRECTIONS):
            return True
    return False


class Board:
    """
    Immutable Tokyo Doves position.

    Positions are stored per (color, dove) and normalized so that the
    top-left corner of the bounding box of the doves is (0, 0).
    Doves in hand have no position.
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: Optional[Dict[Tuple[Color, Dove], Coord]] = None):
        """
        Create a board from a mapping (color, dove) -> (row, col).

        Without arguments, the initial board is created:
        the green boss right above the red boss, everything else in hand.
        """
        if positions is None:
            positions = {(Color.GREEN, Dove.B): (0, 0), (Color.RED, Dove.B): (1, 0)}

        slots: List[Optional[Coord]] = [None] * (2 * NUM_DOVES)
        for (color, dove), coord in positions.items():
            slots[_index(color, dove)] = coord
        self._positions: Tuple[Optional[Coord], ...] = _normalize(slots)
        self._validate()

    @classmethod
    def _from_slots(cls, slots: List[Optional[Coord]]) -> Board:
        """Build without validation (used for results of legal actions)."""
        board = cls.__new__(cls)
        board._positions = _normalize(slots)
        return board

    def _validate(self) -> None:
        squares = [p for p in self._positions if p is not None]
        if len(set(squares)) != len(squares):
            raise InvalidBoardError("two doves share a square")
        for color in Color:
            if self.position_of(color, Dove.B) is None:
                raise InvalidBoardError(f"{color} boss is not on the field")
        if not _fits(squares):
            raise InvalidBoardError("doves do not fit in a 4x4 field")
        if _has_isolated(frozenset(squares)):
            raise InvalidBoardError("a dove is isolated")

    # ------------------------------------------------------------------
    #  Queries
    # ------------------------------------------------------------------
    def position_of(self, color: Color, dove: Dove) -> Optional[Coord]:
        """Square of the dove, or None if it is in hand."""
        return self._positions[_index(color, dove)]

    def doves_on_field(self, color: Color) -> List[Dove]:
        return [d for d in Dove if self.position_of(color, d) is not None]

    def doves_in_hand(self, color: Color) -> List[Dove]:
        return [d for d in Dove if self.position_of(color, d) is None]

    def occupied(self) -> Dict[Coord, Tuple[Color, Dove]]:
        """Mapping from occupied squares to their doves."""
        pieces = {}
        for color in Color:
            for dove in Dove:
                coord = self.position_of(color, dove)
                if coord is not None:
                    pieces[coord] = (color, dove)
        return pieces

    def surrounded_status(self) -> Surrounded:
        """
        Which bosses are surrounded.

        Only the four orthogonal neighbours of a boss count; each must hold
        a dove of either color or be a wall.
        """
        squares = frozenset(p for p in self._positions if p is not None)
        status = Surrounded.NONE
        for color in Color:
            boss = self.position_of(color, Dove.B)
            if all(
                neighbor in squares or not _fits(squares | {neighbor})
                for neighbor in (_shift(boss, d) for d in ORTHOGONAL_DIRECTIONS)
            ):
                status |= Surrounded.of(color)
        return status

    def is_finished(self) -> bool:
        return self.surrounded_status() != Surrounded.NONE

    # ------------------------------------------------------------------
    #  Actions
    # ------------------------------------------------------------------
    def legal_actions(
        self,
        player: Color,
        put: bool = True,
        move: bool = True,
        remove: bool = True,
    ) -> List[Action]:
        """
        Enumerate legal actions of `player`.

        The three flags select which kinds of action are generated.
        Actions are listed as puts, then moves, then removes.
        """
        squares = frozenset(p for p in self._positions if p is not None)
        actions: List[Action] = []
        if put:
            actions.extend(self._put_actions(player, squares))
        if move:
            actions.extend(self._move_actions(player, squares))
        if remove:
            actions.extend(self._remove_actions(player, squares))
        return actions

    def _put_actions(self, player: Color, squares: FrozenSet[Coord]) -> Iterator[Action]:
        in_hand = self.doves_in_hand(player)
        if not in_hand:
            return
        # A put may not close in on the opponent's boss
        boss = self.position_of(player.toggle(), Dove.B)
        blocked = {_shift(boss, d) for d in ORTHOGONAL_DIRECTIONS}
        targets = set()
        for dove in self.doves_on_field(player):
            for d in EIGHT_DIRECTIONS:
                target = _shift(self.position_of(player, dove), d)
                if target in squares or target in blocked:
                    continue
                if _fits(squares | {target}):
                    targets.add(target)
        for dove in in_hand:
            for target in sorted(targets):
                yield Action.put(player, dove, target)

    def _move_actions(self, player: Color, squares: FrozenSet[Coord]) -> Iterator[Action]:
        for dove in self.doves_on_field(player):
            source = self.position_of(player, dove)
            others = squares - {source}
            for target in self._move_targets(dove, source, others):
                after = others | {target}
                if _fits(after) and not _has_isolated(after):
                    yield Action.move(player, dove, target)

    @staticmethod
    def _move_targets(dove: Dove, source: Coord, others: FrozenSet[Coord]) -> Iterator[Coord]:
        if dove == Dove.T:
            for d in ORTHOGONAL_DIRECTIONS:
                steps = 1
                while True:
                    target = _shift(source, d, steps)
                    if target in others or not _fits(others | {target}):
                        break
                    yield target
                    steps += 1
            return
        for d in _STEP_PATTERNS[dove]:
            target = _shift(source, d)
            if target not in others:
                yield target

    def _remove_actions(self, player: Color, squares: FrozenSet[Coord]) -> Iterator[Action]:
        for dove in self.doves_on_field(player):
            if dove == Dove.B:
                continue
            if not _has_isolated(squares - {self.position_of(player, dove)}):
                yield Action.remove(player, dove)

    def perform(self, action: Action) -> Board:
        """Apply a legal action without checking it."""
        slots = list(self._positions)
        index = _index(action.color, action.dove)
        if action.kind is ActionKind.REMOVE:
            slots[index] = None
        else:
            slots[index] = action.target
        return Board._from_slots(slots)

    def check_action(self, action: Action) -> None:
        """Raise IllegalActionError unless `action` is legal on this board."""
        if self.is_finished():
            raise IllegalActionError(f"{action}: the game is already finished")
        if action not in self.legal_actions(action.color):
            raise IllegalActionError(f"{action} is not legal on this board")

    def perform_checked(self, action: Action) -> Board:
        self.check_action(action)
        return self.perform(action)

    # ------------------------------------------------------------------
    #  Conversions
    # ------------------------------------------------------------------
    def to_u64(self) -> int:
        """
        Pack the board into 60 bits.

        Each (color, dove) uses 5 bits: 1 bit for "on field"
        and 4 bits for row * 4 + col.
        """
        packed = 0
        for i, coord in enumerate(self._positions):
            if coord is not None:
                row, col = coord
                packed |= (0b10000 | (row * FIELD_SIZE + col)) << (5 * i)
        return packed

    @classmethod
    def from_u64(cls, packed: int) -> Board:
        """Inverse of to_u64."""
        if packed < 0 or packed >> (5 * 2 * NUM_DOVES):
            raise InvalidBoardError(f"not a packed board: {packed:#x}")
        positions = {}
        for color in Color:
            for dove in Dove:
                chunk = (packed >> (5 * _index(color, dove))) & 0b11111
                if chunk & 0b10000:
                    square = chunk & 0b1111
                    positions[(color, dove)] = divmod(square, FIELD_SIZE)
        return cls(positions)

    @classmethod
    def from_str(cls, text: str) -> Board:
        """
        Parse a board written row by row, rows separated by ';'.

        Red doves are upper case, green doves lower case,
        and ' ' or '-' is an empty square, e.g. "b;B" or " B; a;TH y".
        """
        positions = {}
        rows = text.split(";")
        if len(rows) > FIELD_SIZE:
            raise InvalidBoardError(f"too many rows: {text!r}")
        for row, line in enumerate(rows):
            if len(line) > FIELD_SIZE:
                raise InvalidBoardError(f"too many columns: {line!r}")
            for col, char in enumerate(line):
                if char in " -":
                    continue
                color_dove = char_to_dove(char)
                if color_dove is None:
                    raise InvalidBoardError(f"unknown dove {char!r}")
                if color_dove in positions:
                    raise InvalidBoardError(f"dove {char!r} appears twice")
                positions[color_dove] = (row, col)
        return cls(positions)

    def to_str(self) -> str:
        """Inverse of from_str, with trailing spaces stripped."""
        pieces = self.occupied()
        n_rows = max(r for r, _ in pieces) + 1
        lines = []
        for row in range(n_rows):
            line = "".join(
                dove_to_char(*pieces[(row, col)]) if (row, col) in pieces else " "
                for col in range(FIELD_SIZE)
            )
            lines.append(line.rstrip())
        return ";".join(lines)

    def to_matrix(self) -> np.ndarray:
        """
        4x4 token matrix of the field.

        0 is empty, 1-6 are red doves, 7-12 are green doves (B, A, Y, M, T, H).
        """
        matrix = np.zeros((FIELD_SIZE, FIELD_SIZE), dtype=np.int8)
        for (row, col), (color, dove) in self.occupied().items():
            matrix[row, col] = _index(color, dove) + 1
        return matrix

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._positions == other._positions

    def __hash__(self) -> int:
        return hash(self._positions)

    def __repr__(self) -> str:
        return f"Board.from_str({self.to_str()!r})"

    def __str__(self) -> str:
        """Framed display of the 4x4 field."""
        frame = "+---+---+---+---+"
        lines = []
        for row in self.to_matrix():
            lines.append(frame)
            cells = []
            for token in row:
                if token == 0:
                    cells.append("|   ")
                else:
                    color, dove = divmod(int(token) - 1, NUM_DOVES)
                    cells.append(f"| {dove_to_char(Color(color), Dove(dove))} ")
            lines.append("".join(cells) + "|")
        lines.append(frame)
        return "\n".join(lines)


def _normalize(slots: List[Optional[Coord]]) -> Tuple[Optional[Coord], ...]:
    """Translate so that the bounding box starts at (0, 0)."""
    squares = [p for p in slots if p is not None]
    if not squares:
        return tuple(slots)
    top = min(r for r, _ in squares)
    left = min(c for _, c in squares)
    return tuple(None if p is None else (p[0] - top, p[1] - left) for p in slots)


if __name__ == "__main__":
    print("=== Tokyo Doves: Board Representation ===\n")

    board = Board()
    print("Initial board:")
    print(board)
    print(f"Legal actions of Red: {len(board.legal_actions(Color.RED))}")
    print(f"Packed: {board.to_u64():#x}\n")

    board = Board.from_str(" B; a;TH y;b mM")
    print(f"Board {board.to_str()!r}:")
    print(board)
    print(f"Surrounded: {board.surrounded_status()!r}")
