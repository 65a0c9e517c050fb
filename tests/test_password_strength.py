"""
Tests for strength/password_strength.py
"""
import pytest

from strength.feedback import DEFAULT_SUGGESTIONS, EXTRA_SUGGESTION
from strength.matches import InvalidMatch
from strength.password_strength import analyze_password, parse_matches
from strength.reference import L33T_TABLE, KeyboardGraphs, L33tTable, RankedDictionaries, ReferenceData, \
    build_graph, QWERTY

WORD = {"kind": "dictionary", "start": 3, "end": 10, "token": "password", "rank": 2, "dictionary_name": "passwords"}


def test_analysis_shape():
    out = analyze_password("xyzpassword", [WORD])
    assert out["score"] == 1
    assert out["guesses"] == 878800
    assert out["guesses_human"] == "878,800"
    assert [m["kind"] for m in out["sequence"]] == ["bruteforce", "dictionary"]
    assert out["feedback"]["suggestions"][0] == EXTRA_SUGGESTION
    assert "time_to_crack" not in out


def test_custom_attacker():
    out = analyze_password("xyzpassword", [WORD], hash_algo="bcrypt", hardware="cpu")
    assert out["time_to_crack_seconds"] == pytest.approx(878800 / 300)
    assert out["time_to_crack"] == "49 minutes"


def test_empty_password():
    out = analyze_password("")
    assert out["score"] == 0
    assert out["guesses"] == 1
    assert out["feedback"] == {"warning": "", "suggestions": DEFAULT_SUGGESTIONS}


def test_invalid_match_propagates():
    bad = dict(WORD, rank=0)
    with pytest.raises(InvalidMatch):
        analyze_password("xyzpassword", [bad])


def test_parse_matches_rejects_garbage():
    with pytest.raises(InvalidMatch):
        parse_matches(["password"])


def test_injected_reference():
    reference = ReferenceData(
        keyboards=KeyboardGraphs({"qwerty": build_graph(QWERTY, True)}),
        l33t=L33tTable(L33T_TABLE),
        dictionaries=RankedDictionaries({"pets": ["rex", "fido"]}),
    )
    match = {"kind": "dictionary", "start": 0, "end": 3, "token": "fido", "dictionary_name": "pets"}
    out = analyze_password("fido", [match], reference=reference)
    assert out["guesses"] == 2
    assert out["sequence"][0]["dictionary_name"] == "pets"
