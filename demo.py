#!/usr/bin/env python3
"""
Tokyo Doves Analysis Demo

Walks through the package:
1. Board values and their order
2. The board, its rules and its packing
3. Evaluation and best actions
4. Checkmate trees
5. The analyst
"""

import logging

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

print("""
==============================================================================
   TOKYO DOVES: exact board values by bounded search
==============================================================================
""")

# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 1: BOARD VALUES
# ═══════════════════════════════════════════════════════════════════════════════

print("\n" + "═" * 80)
print("  SECTION 1: BOARD VALUES")
print("═" * 80)

from tokyodoves import BoardValue, Interval

print("""
A board value counts the turns until the game is decided, seen from the
player to move. Faster wins are better and slower losses are better:
  Lose(2) < Lose(4) < ... < Unknown < ... < Win(3) < Win(1)
""")

values = [BoardValue.lose(2), BoardValue.lose(4), BoardValue.unknown(), BoardValue.win(5), BoardValue.win(1)]
print("  " + " < ".join(str(v) for v in values))

print("\n  Increment (the same position seen by the previous player):")
v = BoardValue.finished()
for _ in range(4):
    nxt = v.increment()
    print(f"    {str(v):10} -> {nxt}")
    v = nxt

interval = Interval(BoardValue.lose(4), BoardValue.win(3))
print(f"\n  Interval {interval} contains Unknown: {BoardValue.unknown() in interval}")


# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 2: THE BOARD
# ═══════════════════════════════════════════════════════════════════════════════

print("\n" + "═" * 80)
print("  SECTION 2: THE BOARD")
print("═" * 80)

from tokyodoves import Action, Board, Color, Dove

board = Board()
print("\n  Initial board:")
print(board)
print(f"  Legal actions of Red: {len(board.legal_actions(Color.RED))}")

board = board.perform_checked(Action.put(Color.RED, Dove.A, (2, 0)))
print(f"\n  After Put(A, (2, 0)): {board.to_str()!r}, packed {board.to_u64():#x}")
print(f"  Token matrix:\n{board.to_matrix()}")


# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 3: EVALUATION
# ═══════════════════════════════════════════════════════════════════════════════

print("\n" + "═" * 80)
print("  SECTION 3: EVALUATION AND BEST ACTIONS")
print("═" * 80)

from tokyodoves import GameRule, evaluate_board, find_best_actions

rule = GameRule()
mate_in_1 = Board.from_str("bAY;   T;   B;   H")
print("\n  Red to move:")
print(mate_in_1)

for depth in range(3):
    print(f"  depth {depth}: {evaluate_board(mate_in_1, Color.RED, depth, rule)}")

best = find_best_actions(mate_in_1, Color.RED, 1, rule)
print(f"  Best actions: {', '.join(str(a) for a in best)}")

print("\n  Initial board, undecided within the horizon:")
for depth in range(1, 3):
    print(f"  depth {depth}: {evaluate_board(Board(), Color.RED, depth, rule)}")


# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 4: CHECKMATE TREES
# ═══════════════════════════════════════════════════════════════════════════════

print("\n" + "═" * 80)
print("  SECTION 4: CHECKMATE TREES")
print("═" * 80)

from tokyodoves import ValueMismatchError, create_checkmate_tree_with_value

tree = create_checkmate_tree_with_value(mate_in_1, BoardValue.MAX, Color.RED, rule)
print(f"\n  {tree!r}")

try:
    create_checkmate_tree_with_value(Board(), BoardValue.win(3), Color.RED, rule)
except ValueMismatchError as e:
    print(f"  Claiming Win(3) for the initial board: {e}")


# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 5: THE ANALYST
# ═══════════════════════════════════════════════════════════════════════════════

print("\n" + "═" * 80)
print("  SECTION 5: DOVE ANALYST")
print("═" * 80 + "\n")

from tokyodoves import AnalysisConfig, DoveAnalyst

analyst = DoveAnalyst(AnalysisConfig(depth=2, rule=rule.with_initial_board(mate_in_1)))
report = analyst.analyze()
print(f"  {report.summary()}")

print("\n" + "═" * 80)
print("  DEMO COMPLETE")
print("═" * 80 + "\n")
