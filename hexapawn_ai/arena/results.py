"""
Reading and writing of experiment result logs.

A results log holds one section per board size, each opened by a
"size: N" header, followed by one line per pairing:

    L: RandomBot (t: 0.0000) | W:12,D:3,L:5 | R: AlwaysPushBot (t: 0.0000)

The counts are from the point of view of the left bot; the times are mean
seconds per move.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, TextIO, Tuple
import re

from hexapawn_ai.arena.config import BotType
from hexapawn_ai.arena.match import BotGameResult
from hexapawn_ai.core.outcome import WDL

_SIZE_RE = re.compile(r"^size:\s*(?P<size>\d+)$")
_LINE_RE = re.compile(
    r"^L: (?P<l>.+?) \(t: (?P<tl>[^)]*)\) \| (?P<wdl>.+?) \| R: (?P<r>.+?) \(t: (?P<tr>[^)]*)\)$"
)
_WDL_RE = re.compile(r"^W:(\d+),D:(\d+),L:(\d+)$")

_HEURISTIC_SUFFIX = {
    "SolverHeuristic": "solver",
    "MaterialHeuristic": "material",
    "AdvancementHeuristic": "advancement",
}
_MINIMAX_TYPES = {
    "solver": BotType.MINIMAX,
    "material": BotType.MINIMAX_MATERIAL,
    "advancement": BotType.MINIMAX_ADVANCE,
}
_MCTS_TYPES = {
    "solver": BotType.MCTS_SOLVER,
    "material": BotType.MCTS_MATERIAL,
    "advancement": BotType.MCTS_ADVANCE,
}
_HEURISTIC_RE = re.compile(r"heuristic=(?P<h>\w+)")


class ResultsParseError(ValueError):
    """Raised when a results log is malformed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def format_result(result: BotGameResult) -> str:
    """
    Format a match result as a single log line.

    Args:
        result: Match result

    Returns:
        Log line without a trailing newline
    """
    return (f"L: {result.debug_l} (t: {result.time_l:.4f}) | {result.wdl_l} | "
            f"R: {result.debug_r} (t: {result.time_r:.4f})")


def write_size_header(out: TextIO, size: int) -> None:
    out.write(f"size: {size}\n")
    out.flush()


def write_results(out: TextIO, result: BotGameResult) -> None:
    """Append a match result to an open results log."""
    out.write(format_result(result) + "\n")
    out.flush()


def parse_wdl(text: str) -> WDL:
    """
    Parse a "W:x,D:y,L:z" triple.

    Raises:
        ResultsParseError: If the text is not a valid triple
    """
    match = _WDL_RE.match(text.strip())
    if match is None:
        raise ResultsParseError(f"invalid WDL {text!r}")
    win, draw, loss = (int(g) for g in match.groups())
    return WDL(win, draw, loss)


def classify(name: str) -> BotType:
    """
    Get the bot type of a bot's debug name.

    Args:
        name: repr of a bot as written to the results log

    Returns:
        BotType

    Raises:
        ResultsParseError: If the name belongs to no known bot
    """
    if name == "RandomBot":
        return BotType.RANDOM
    if name == "AlwaysPushBot":
        return BotType.ALWAYS_PUSH
    if name == "AlwaysCaptureBot":
        return BotType.ALWAYS_CAPTURE
    if name.startswith("MCTSBot("):
        return BotType.MCTS

    heuristic = _HEURISTIC_RE.search(name)
    suffix = _HEURISTIC_SUFFIX.get(heuristic.group("h")) if heuristic else None
    if suffix is not None:
        if name.startswith("MiniMaxBot("):
            return _MINIMAX_TYPES[suffix]
        if name.startswith("MCTSHeuristicBot("):
            return _MCTS_TYPES[suffix]

    raise ResultsParseError(f"unknown bot {name!r}")


@dataclass(frozen=True)
class ResultKey:
    """Ordered pair of bot names, left first."""
    left: str
    right: str


@dataclass
class ResultEntry:
    wdl: WDL
    time_l: float
    time_r: float


@dataclass
class Results:
    """Parsed results log, grouped by board size."""
    sections: Dict[int, Dict[ResultKey, ResultEntry]] = field(default_factory=dict)

    def add(self, size: int, key: ResultKey, entry: ResultEntry) -> None:
        """Record a pairing; a repeated pairing accumulates its counts."""
        section = self.sections.setdefault(size, {})
        existing = section.get(key)
        if existing is not None:
            entry = ResultEntry(existing.wdl + entry.wdl, entry.time_l, entry.time_r)
        section[key] = entry

    def sizes(self) -> List[int]:
        return sorted(self.sections)

    def get(self, size: int, left: str, right: str) -> Optional[WDL]:
        """
        Get the result of one pairing.

        Args:
            size: Board size
            left: Name of the left bot
            right: Name of the right bot

        Returns:
            WDL from the left bot's view, or None if the pairing is absent
        """
        entry = self.sections.get(size, {}).get(ResultKey(left, right))
        return entry.wdl if entry is not None else None

    def get_cumulative(self, size: int, bot_type: BotType) -> WDL:
        """
        Sum a bot type's results over every pairing it took part in.

        Pairings where the bot played on the right are negated so the sum
        is always from the bot's own view.

        Args:
            size: Board size
            bot_type: Kind of bot

        Returns:
            Cumulative WDL
        """
        total = WDL()
        for key, entry in self.sections.get(size, {}).items():
            if classify(key.left) is bot_type:
                total = total + entry.wdl
            if classify(key.right) is bot_type:
                total = total + (-entry.wdl)
        return total

    def bot_types(self) -> List[BotType]:
        """Bot types present anywhere in the log, in roster order."""
        seen = set()
        for section in self.sections.values():
            for key in section:
                seen.add(classify(key.left))
                seen.add(classify(key.right))
        return [t for t in BotType if t in seen]


def parse_line(line: str, line_number: Optional[int] = None) -> Tuple[ResultKey, ResultEntry]:
    """
    Parse a single pairing line.

    Args:
        line: Log line, with or without the trailing newline
        line_number: Position in the file, used in error messages

    Returns:
        Tuple of (key, entry)

    Raises:
        ResultsParseError: If the line is malformed
    """
    match = _LINE_RE.match(line.strip())
    if match is None:
        raise ResultsParseError(f"malformed result line {line.strip()!r}", line_number)

    try:
        time_l = float(match.group("tl"))
        time_r = float(match.group("tr"))
    except ValueError:
        raise ResultsParseError(f"invalid time in {line.strip()!r}", line_number) from None

    try:
        wdl = parse_wdl(match.group("wdl"))
    except ResultsParseError as e:
        raise ResultsParseError(str(e), line_number) from None

    return ResultKey(match.group("l"), match.group("r")), ResultEntry(wdl, time_l, time_r)


def parse_results(lines: Iterable[str]) -> Results:
    """
    Parse a whole results log.

    Blank lines are ignored.

    Args:
        lines: Lines of the log

    Returns:
        Results

    Raises:
        ResultsParseError: On a malformed line or a result before any size header
    """
    results = Results()
    size: Optional[int] = None

    for line_number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped:
            continue

        header = _SIZE_RE.match(stripped)
        if header is not None:
            size = int(header.group("size"))
            continue

        if size is None:
            raise ResultsParseError("result line before any size header", line_number)

        key, entry = parse_line(stripped, line_number)
        results.add(size, key, entry)

    return results


def load_results(path: str) -> Results:
    """Parse the results log at a path."""
    with open(path, 'r') as f:
        return parse_results(f)
