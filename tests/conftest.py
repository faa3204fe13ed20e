"""
Shared fixtures.

GraphBoard is a stand-in for Board whose positions are the nodes of a small
hand-written game graph, so that values several turns deep can be checked
against graphs whose values are known by construction.
"""

from typing import Dict, List, Tuple

import pytest

from tokyodoves import Board, GameRule, Judge, Surrounded


class GraphBoard:
    """
    A position in an explicit game graph.

    EDGES maps a node to its (action, next node) pairs in move order and
    SURROUNDED gives the status of terminal nodes; the player to move is
    not part of the node, it alternates like in a real game.
    """
    EDGES: Dict[str, List[Tuple[str, str]]] = {}
    SURROUNDED: Dict[str, Surrounded] = {}
    NODES: List[str] = []

    def __init__(self, node: str):
        self.node = node

    def legal_actions(self, player, put=True, move=True, remove=True):
        return [action for action, _ in self.EDGES.get(self.node, [])]

    def perform(self, action):
        return type(self)(dict(self.EDGES[self.node])[action])

    def surrounded_status(self):
        return self.SURROUNDED.get(self.node, Surrounded.NONE)

    def to_u64(self):
        return self.NODES.index(self.node)

    @classmethod
    def from_u64(cls, raw):
        return cls(cls.NODES[raw])

    def __eq__(self, other):
        return type(self) is type(other) and self.node == other.node

    def __hash__(self):
        return hash(self.node)

    def __repr__(self):
        return f"GraphBoard({self.node!r})"


def make_graph_board(edges, surrounded):
    """Create a GraphBoard class for one game graph."""
    nodes = set(edges) | set(surrounded)
    for pairs in edges.values():
        nodes.update(node for _, node in pairs)
    attrs = {"EDGES": edges, "SURROUNDED": surrounded, "NODES": sorted(nodes)}
    return type("GraphBoard", (GraphBoard,), attrs)


# Both players can shuffle forever between these two nodes
QUIET_LOOP = {
    "quiet_a": [("wait", "quiet_b")],
    "quiet_b": [("wait", "quiet_a")],
}

TERMINALS = {
    "red_out": Surrounded.RED,
    "green_out": Surrounded.GREEN,
    "both_out": Surrounded.BOTH,
}

# Red to move at "root" wins in exactly 3 turns by "mate" or "mate_b".
#   slow:    leads nowhere (Unknown)
#   loser:   Red surrounds their own boss
#   five:    forced win, but in 5 turns
#   blunder: Green wins right away
MATE_IN_3 = {
    "root": [
        ("slow", "slow1"),
        ("mate", "m"),
        ("mate_b", "mb"),
        ("loser", "red_out"),
        ("five", "f"),
        ("blunder", "bl"),
    ],
    "slow1": [("g", "slow2")],
    "slow2": [("quiet", "quiet_a")],
    "m": [("g1", "m1"), ("g2", "m2"), ("suicide", "green_out")],
    "m1": [("kill", "green_out"), ("quiet", "quiet_a")],
    "m2": [("kill", "green_out")],
    "mb": [("g", "mb1")],
    "mb1": [("kill", "green_out")],
    "f": [("g", "f1")],
    "f1": [("step", "f2")],
    "f2": [("g", "f3")],
    "f3": [("kill", "green_out")],
    "bl": [("kill", "red_out")],
    **QUIET_LOOP,
}

# Red to move at "root" loses within 2 turns whatever they do
FORCED_LOSS = {
    "root": [("a", "ga"), ("b", "gb"), ("suicide", "red_out")],
    "ga": [("kill", "red_out"), ("other", "quiet_a")],
    "gb": [("kill", "red_out")],
    **QUIET_LOOP,
}

# Mate in 3 with a single forced line
PUZZLE = {
    "root": [("mate", "m"), ("slow", "s")],
    "m": [("g", "m1")],
    "m1": [("kill", "green_out")],
    "s": [("wait", "quiet_a")],
    **QUIET_LOOP,
}

# Red's only non-losing action surrounds both bosses at once
BOTH_SURROUNDED = {
    "root": [("both", "both_out"), ("quiet", "quiet_a")],
    **QUIET_LOOP,
}


@pytest.fixture
def rule():
    return GameRule()


@pytest.fixture
def last_wins_rule():
    return GameRule().with_suicide_atk_judge(Judge.LAST_WINS)


@pytest.fixture
def mate_in_3():
    return make_graph_board(MATE_IN_3, TERMINALS)("root")


@pytest.fixture
def forced_loss():
    return make_graph_board(FORCED_LOSS, TERMINALS)("root")


@pytest.fixture
def puzzle():
    return make_graph_board(PUZZLE, TERMINALS)("root")


@pytest.fixture
def both_surrounded():
    return make_graph_board(BOTH_SURROUNDED, TERMINALS)("root")


@pytest.fixture
def quiet():
    return make_graph_board(QUIET_LOOP, TERMINALS)("quiet_a")


@pytest.fixture
def mate_in_1_board():
    """
    Red mates in one by sliding T from (1, 3) to (1, 0).

        +---+---+---+---+
        | b | A | Y |   |
        +---+---+---+---+
        |   |   |   | T |
        +---+---+---+---+
        |   |   |   | B |
        +---+---+---+---+
        |   |   |   | H |
        +---+---+---+---+
    """
    return Board.from_str("bAY;   T;   B;   H")


@pytest.fixture
def finished_board():
    """Red boss in the corner, walled in above and to the left."""
    return Board.from_str("Ba;mb;  T;   H")
