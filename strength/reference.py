# strength/reference.py
"""
Read-only reference data the estimators consult: keyboard adjacency graphs,
the l33t substitution table and ranked frequency dictionaries.

Everything here is built once at import and shared by every scoring call.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

QWERTY = r'''
`~ 1! 2@ 3# 4$ 5% 6^ 7& 8* 9( 0) -_ =+
    qQ wW eE rR tT yY uU iI oO pP [{ ]} \|
     aA sS dD fF gG hH jJ kK lL ;: '"
      zZ xX cC vV bB nN mM ,< .> /?
'''

DVORAK = r'''
`~ 1! 2@ 3# 4$ 5% 6^ 7& 8* 9( 0) [{ ]}
    '" ,< .> pP yY fF gG cC rR lL /? =+ \|
     aA oO eE uU iI dD hH tT nN sS -_
      ;: qQ jJ kK xX bB mM wW vV zZ
'''

KEYPAD = r'''
  / * -
7 8 9 +
4 5 6
1 2 3
  0 .
'''

MAC_KEYPAD = r'''
  = / *
7 8 9 -
4 5 6 +
1 2 3
  0 .
'''

# keypads: 15 starting keys, 68 adjacent pairs in total
KEYPAD_STARTING_POSITIONS = 15
KEYPAD_AVERAGE_DEGREE = 68 / 15

L33T_TABLE = {
    "a": ["4", "@"],
    "b": ["8"],
    "c": ["(", "{", "[", "<"],
    "e": ["3"],
    "g": ["6", "9"],
    "i": ["1", "!", "|"],
    "l": ["1", "|", "7"],
    "o": ["0"],
    "s": ["$", "5"],
    "t": ["+", "7"],
    "x": ["%"],
    "z": ["2"],
}

# small built-in lists, most common first; deployments inject their own
PASSWORDS = [
    "123456", "password", "12345678", "qwerty", "123456789", "12345", "1234", "111111",
    "1234567", "dragon", "123123", "baseball", "abc123", "football", "monkey", "letmein",
    "696969", "shadow", "master", "666666", "qwertyuiop", "123321", "mustang", "1234567890",
    "michael", "654321", "superman", "1qaz2wsx", "7777777", "121212", "000000", "qazwsx",
    "123qwe", "killer", "trustno1", "jordan", "jennifer", "zxcvbnm", "asdfgh", "hunter",
    "buster", "soccer", "harley", "batman", "andrew", "tigger", "sunshine", "iloveyou",
    "2000", "charlie", "robert", "thomas", "hockey", "ranger", "daniel", "starwars",
    "klaster", "112233", "george", "computer", "michelle", "jessica", "pepper", "1111",
    "zxcvbn", "555555", "11111111", "131313", "freedom", "777777", "pass", "maggie",
    "159753", "aaaaaa", "ginger", "princess", "joshua", "cheese", "amanda", "summer",
    "love", "ashley", "nicole", "chelsea", "biteme", "matthew", "access", "yankees",
    "987654321", "dallas", "austin", "thunder", "taylor", "matrix", "admin", "welcome",
    "login", "passw0rd", "changeme", "hacker",
]

ENGLISH = [
    "you", "i", "to", "the", "a", "and", "that", "it", "of", "me", "what", "is", "in",
    "this", "know", "i'm", "for", "no", "have", "my", "don't", "just", "not", "do", "be",
    "on", "your", "was", "we", "it's", "with", "so", "but", "all", "well", "are", "he",
    "oh", "about", "right", "you're", "get", "here", "out", "going", "like", "yeah", "if",
    "her", "she", "can", "up", "want", "think", "that's", "now", "go", "him", "at", "how",
    "got", "there", "one", "did", "why", "see", "come", "good", "they", "really", "as",
    "would", "look", "when", "time", "will", "okay", "back", "can't", "mean", "tell",
    "i'll", "from", "hey", "were", "he's", "could", "didn't", "yes", "his", "been", "or",
    "something", "who", "because", "some", "had", "then", "say", "let's", "take", "an",
    "way", "us", "little", "make", "need", "gonna", "never", "we're", "too", "love",
    "she's", "i've", "sure", "them", "more", "over", "our", "sorry", "where", "what's",
    "let", "thing", "am", "maybe", "down", "man", "has", "uh", "very", "by", "there's",
    "should", "anything", "said", "much", "any", "life", "even", "off", "please", "doing",
    "thank", "give", "only", "thought", "help", "two", "talk", "people", "god", "still",
    "wait", "into", "find", "nothing", "again", "things", "let", "other", "stop", "work",
    "house", "world", "summer", "winter", "spring", "autumn", "dragon", "monkey", "shadow",
    "master", "welcome", "correct", "horse", "battery", "staple",
]


def _slanted_adjacent_coords(x, y):
    # left, two above, right, two below: near-diagonal neighbours only
    return [(x - 1, y), (x, y - 1), (x + 1, y - 1), (x + 1, y), (x, y + 1), (x - 1, y + 1)]


def _aligned_adjacent_coords(x, y):
    return [(x - 1, y), (x - 1, y - 1), (x, y - 1), (x + 1, y - 1),
            (x + 1, y), (x + 1, y + 1), (x, y + 1), (x - 1, y + 1)]


def build_graph(layout: str, slanted: bool) -> Dict[str, list]:
    """
    Map every character of a layout to its clockwise neighbour tokens.
    Missing neighbours are kept as None so every entry has the same length.
    """
    positions = {}
    tokens = layout.split()
    token_size = len(tokens[0])
    x_unit = token_size + 1
    adjacent = _slanted_adjacent_coords if slanted else _aligned_adjacent_coords
    if any(len(t) != token_size for t in tokens):
        raise ValueError("token length mismatch in keyboard layout")
    for y, line in enumerate(layout.split("\n")):
        slant = y - 1 if slanted else 0
        for token in line.split():
            x, remainder = divmod(line.index(token) - slant, x_unit)
            if remainder:
                raise ValueError(f"unexpected x offset for {token!r}")
            positions[(x, y)] = token

    graph = {}
    for (x, y), chars in positions.items():
        for ch in chars:
            graph[ch] = [positions.get(coord) for coord in adjacent(x, y)]
    return graph


def average_degree(graph: Mapping[str, list]) -> float:
    # on qwerty, 'g' has degree 6 ('ftyhbv'), '\' has degree 1
    total = sum(len([n for n in neighbours if n is not None]) for neighbours in graph.values())
    return total / len(graph)


@dataclass(frozen=True)
class KeyboardGeometry:
    starting_positions: int
    average_degree: float


class KeyboardGraphs:
    """graph name -> adjacency, plus the geometry the spatial estimator needs."""

    KEYBOARD_NAMES = ("qwerty", "dvorak")

    def __init__(self, graphs: Mapping[str, Mapping[str, list]]):
        self._graphs = MappingProxyType(dict(graphs))
        qwerty = self._graphs["qwerty"]
        self._keyboard = KeyboardGeometry(len(qwerty), average_degree(qwerty))
        self._keypad = KeyboardGeometry(KEYPAD_STARTING_POSITIONS, KEYPAD_AVERAGE_DEGREE)

    def __contains__(self, name) -> bool:
        return name in self._graphs

    def adjacency(self, name: str) -> Mapping[str, list]:
        return self._graphs[name]

    def geometry(self, name: str) -> KeyboardGeometry:
        # keypads and unknown layouts share the keypad calibration
        if name in self.KEYBOARD_NAMES:
            return self._keyboard
        return self._keypad


class L33tTable:
    """substituted character -> set of plausible original letters."""

    def __init__(self, table: Mapping[str, Iterable[str]]):
        inverted: Dict[str, set] = {}
        for letter, subs in table.items():
            for s in subs:
                inverted.setdefault(s, set()).add(letter)
        self._originals = MappingProxyType({k: frozenset(v) for k, v in inverted.items()})

    def originals(self, ch: str) -> frozenset:
        return self._originals.get(ch, frozenset())

    def derive_sub(self, token: str, word: str) -> Dict[str, str]:
        """Recover {substituted: original} by aligning a l33t token with its dictionary word."""
        sub = {}
        if len(token) != len(word):
            return sub
        for got, want in zip(token.lower(), word.lower()):
            if got != want and want in self.originals(got):
                sub[got] = want
        return sub


class RankedDictionaries:
    """(word, dictionary name) -> frequency rank, 1 being the most common."""

    def __init__(self, frequency_lists: Mapping[str, Iterable[str]]):
        ranked = {}
        for name, words in frequency_lists.items():
            table = {}
            for i, word in enumerate(words, 1):
                table.setdefault(word.lower(), i)
            ranked[name] = MappingProxyType(table)
        self._ranked = MappingProxyType(ranked)

    @property
    def names(self):
        return tuple(self._ranked)

    def rank(self, word: str, dictionary_name: str) -> Optional[int]:
        table = self._ranked.get(dictionary_name)
        if table is None:
            return None
        return table.get(word.lower())


@dataclass(frozen=True)
class ReferenceData:
    keyboards: KeyboardGraphs
    l33t: L33tTable
    dictionaries: RankedDictionaries = field(default_factory=lambda: RankedDictionaries({}))


def build_default_reference() -> ReferenceData:
    graphs = {
        "qwerty": build_graph(QWERTY, True),
        "dvorak": build_graph(DVORAK, True),
        "keypad": build_graph(KEYPAD, False),
        "mac_keypad": build_graph(MAC_KEYPAD, False),
    }
    return ReferenceData(
        keyboards=KeyboardGraphs(graphs),
        l33t=L33tTable(L33T_TABLE),
        dictionaries=RankedDictionaries({"passwords": PASSWORDS, "english": ENGLISH}),
    )


DEFAULT_REFERENCE = build_default_reference()
