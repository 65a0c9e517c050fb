# strength/scoring.py
"""
Minimum-guesses decomposition of a password.

Takes a list of possibly overlapping candidate matches and returns the
non-overlapping sequence, padded with bruteforce runs, that covers the whole
password for the fewest total guesses. O(n^2 + m) for a length-n password
with m candidates.

The table keeps two states per prefix length k:

* pattern[k]: best cover of password[:k] whose last piece is a candidate
  match (pattern[0] is the empty prefix, costing one guess);
* bruteforce[k]: best cover whose last piece is a bruteforce run.

A bruteforce run may only follow the pattern state, so uncovered characters
always merge into a single run priced as cardinality ** run_length.
"""
import string
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from .crack_time import CrackTime, estimate_crack_times, guesses_log10, guesses_to_score
from .guesses import clamp, estimate_guesses, saturating_pow, submatch_floor
from .matches import KIND_PRIORITY, InvalidMatch, Match, MatchKind, ScoredMatch
from .reference import DEFAULT_REFERENCE, ReferenceData

CLASS_CARDINALITY = {
    "lower": 26,
    "upper": 26,
    "digit": 10,
    "symbol": 33,
    "unicode": 100,
}


def char_class(ch: str) -> str:
    if ch in string.ascii_lowercase:
        return "lower"
    if ch in string.ascii_uppercase:
        return "upper"
    if ch in string.digits:
        return "digit"
    if ord(ch) < 128:
        return "symbol"
    return "unicode"


@dataclass(frozen=True)
class _Step:
    total: float
    scored: Optional[ScoredMatch]
    prev: Optional["_Step"]
    order: int
    count: int = 0

    @property
    def key(self):
        if self.scored is None:
            return (self.total, self.count, 0, -1, -1)
        # cheaper, then fewer pieces, then longer last piece, then kind priority, then first registered
        return (self.total, self.count, -len(self.scored.token), KIND_PRIORITY[self.scored.kind], self.order)


class ParseState:
    """Best covers of every prefix; local to one scoring call."""

    def __init__(self, n: int):
        self.n = n
        self.pattern = [None] * (n + 1)
        self.bruteforce = [None] * (n + 1)
        self.pattern[0] = _Step(total=1.0, scored=None, prev=None, order=-1)

    @staticmethod
    def _offer(table, k, step):
        current = table[k]
        if current is None or step.key < current.key:
            table[k] = step

    def offer_pattern(self, k: int, step: _Step):
        self._offer(self.pattern, k, step)

    def offer_bruteforce(self, k: int, step: _Step):
        self._offer(self.bruteforce, k, step)

    def best(self, k: int) -> _Step:
        steps = [s for s in (self.pattern[k], self.bruteforce[k]) if s is not None]
        return min(steps, key=lambda s: s.key)

    def best_guesses(self, k: int) -> float:
        return self.best(k).total

    def unwind(self) -> Tuple[ScoredMatch, ...]:
        sequence = []
        step = self.best(self.n)
        while step is not None and step.scored is not None:
            sequence.append(step.scored)
            step = step.prev
        sequence.reverse()
        return tuple(sequence)


@dataclass(frozen=True)
class MatchSequence:
    password: str
    guesses: float
    sequence: Tuple[ScoredMatch, ...]


def most_guessable_sequence(password: str, candidates: Iterable[Match] = (),
                            reference: ReferenceData = DEFAULT_REFERENCE) -> MatchSequence:
    candidates = list(candidates)
    n = len(password)
    if n == 0:
        if candidates:
            raise InvalidMatch("an empty password cannot have matches")
        return MatchSequence(password=password, guesses=1.0, sequence=())

    by_end = [[] for _ in range(n)]
    for order, match in enumerate(candidates):
        if not isinstance(match, Match):
            raise InvalidMatch(f"expected a Match, got {type(match).__name__}")
        match.validate(password)
        scored = ScoredMatch(match, estimate_guesses(match, password, reference))
        by_end[match.end].append((order, scored))

    state = ParseState(n)
    brute_order = len(candidates)

    for k in range(1, n + 1):
        for order, scored in by_end[k - 1]:
            prev = state.best(scored.start)
            state.offer_pattern(k, _Step(clamp(prev.total * scored.guesses), scored, prev, order, prev.count + 1))

        # runs are priced inline; only the winning run for this k becomes a Match
        classes = set()
        best_run = None
        for i in range(k - 1, -1, -1):
            classes.add(char_class(password[i]))
            prev = state.pattern[i]
            if prev is None:
                continue
            cardinality = sum(CLASS_CARDINALITY[c] for c in classes)
            guesses = max(saturating_pow(cardinality, k - i), submatch_floor(k - i, n))
            total = clamp(prev.total * guesses)
            # same kind and order for every run, so (total, count, -length) decides
            key = (total, prev.count + 1, i - k)
            if best_run is None or key < best_run[0]:
                best_run = (key, i, cardinality, guesses, prev)

        if best_run is not None:
            (total, count, _), i, cardinality, guesses, prev = best_run
            run = Match(start=i, end=k - 1, token=password[i:k], kind=MatchKind.BRUTEFORCE,
                        cardinality=cardinality)
            state.offer_bruteforce(k, _Step(total, ScoredMatch(run, guesses), prev, brute_order, count))

    return MatchSequence(password=password, guesses=clamp(state.best_guesses(n)), sequence=state.unwind())


@dataclass(frozen=True)
class ScoreResult:
    password: str
    score: int
    guesses: float
    guesses_log10: float
    sequence: Tuple[ScoredMatch, ...]
    crack_times: Mapping[str, CrackTime]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "guesses": self.guesses,
            "guesses_log10": self.guesses_log10,
            "sequence": [m.to_dict() for m in self.sequence],
            "crack_times_seconds": {k: v.seconds for k, v in self.crack_times.items()},
            "crack_times_display": {k: v.display for k, v in self.crack_times.items()},
        }


def score_password(password: str, candidates: Sequence[Match] = (),
                   reference: ReferenceData = DEFAULT_REFERENCE) -> ScoreResult:
    best = most_guessable_sequence(password, candidates, reference)
    return ScoreResult(
        password=password,
        score=guesses_to_score(best.guesses),
        guesses=best.guesses,
        guesses_log10=guesses_log10(best.guesses),
        sequence=best.sequence,
        crack_times=MappingProxyType(estimate_crack_times(best.guesses)),
    )
