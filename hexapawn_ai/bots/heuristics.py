"""
Static evaluations for hexapawn.

Every heuristic returns a value for the player to move in the given
position. The bitboard helpers use pawn fills
(https://www.chessprogramming.org/Pawn_Fills) computed with Kogge-Stone
style parallel prefix shifts.
"""
from hexapawn_ai.core.board import Board
from hexapawn_ai.core.constants import BOARD_MASKS, SOLVER_WIN_VALUE, UNIVERSAL
from hexapawn_ai.core.outcome import OutcomeWDL, Player


def north_fill(bb: int) -> int:
    """Fill every square above each set square."""
    bb |= bb << 8
    bb |= bb << 16
    bb |= bb << 32
    return bb & UNIVERSAL


def south_fill(bb: int) -> int:
    """Fill every square below each set square."""
    bb |= bb >> 8
    bb |= bb >> 16
    bb |= bb >> 32
    return bb


def popcount(bb: int) -> int:
    return bin(bb).count("1")


def advancement_eval(bb: int, player: Player, board_mask: int = UNIVERSAL) -> int:
    """
    Measure how far a side's pawns have advanced.

    Counts the rear fill of the pawns: the squares behind every pawn on
    its file, back to the side's own edge of the board.

    Args:
        bb: The side's pawns
        player: The side, A moving up and B moving down
        board_mask: Playing area to restrict the fill to

    Returns:
        Number of filled squares
    """
    if player is Player.A:
        return popcount(south_fill(bb) & board_mask)
    return popcount(north_fill(bb) & board_mask)


def material_eval(bb: int) -> int:
    """Count the pawns on a bitboard."""
    return popcount(bb)


class ZeroHeuristic:
    """Evaluates every position as 0, turning heuristic MCTS into plain MCTS."""

    def value(self, board: Board, depth: int = 0) -> float:
        return 0

    def __repr__(self) -> str:
        return "ZeroHeuristic"


class SolverHeuristic:
    """
    Scores only finished positions.

    A win is worth SOLVER_WIN_VALUE minus the depth it was found at, so
    quicker wins and slower losses are preferred; everything else is 0.
    """

    def value(self, board: Board, depth: int = 0) -> int:
        outcome = board.outcome()
        if outcome is None:
            return 0

        result = outcome.pov(board.next_player())
        if result is OutcomeWDL.WIN:
            return SOLVER_WIN_VALUE - depth
        if result is OutcomeWDL.LOSS:
            return -(SOLVER_WIN_VALUE - depth)
        return 0

    def __repr__(self) -> str:
        return "SolverHeuristic"


class MaterialHeuristic:
    """Number of own pawns minus number of opposing pawns."""

    def value(self, board: Board, depth: int = 0) -> int:
        # Finished boards are worth a proven win or loss
        if board.is_done():
            return SolverHeuristic().value(board, depth)

        return material_eval(board.pieces_to_move()) - material_eval(board.pieces_not_to_move())

    def __repr__(self) -> str:
        return "MaterialHeuristic"


class AdvancementHeuristic:
    """How far the pawns of the side to move have advanced."""

    def value(self, board: Board, depth: int = 0) -> int:
        # Finished boards are worth a proven win or loss
        if board.is_done():
            return SolverHeuristic().value(board, depth)

        return advancement_eval(board.pieces_to_move(), board.side_to_move, BOARD_MASKS[board.size])

    def __repr__(self) -> str:
        return "AdvancementHeuristic"


HEURISTICS = {
    "zero": ZeroHeuristic,
    "solver": SolverHeuristic,
    "material": MaterialHeuristic,
    "advancement": AdvancementHeuristic,
}


def create_heuristic(name: str):
    """
    Create a heuristic by name.

    Args:
        name: One of 'zero', 'solver', 'material', 'advancement'

    Returns:
        Heuristic instance
    """
    try:
        return HEURISTICS[name]()
    except KeyError:
        raise ValueError(f"Unknown heuristic: {name!r}") from None
