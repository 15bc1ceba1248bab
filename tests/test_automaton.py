import logging
import os
import sys
import threading

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from coinlex.automaton import Automaton, Hit, fold
from coinlex.errors import CompilationError


def test_fold_is_ascii_only():
    assert fold("BiTcOiN") == "bitcoin"
    # One character per UTF-8 byte, non-ASCII bytes untouched
    assert len(fold("É")) == 2
    assert fold("É") != fold("é")


@pytest.mark.parametrize("patterns", [[], ["btc", ""], ["btc", None]])
def test_build_rejects_degenerate_patterns(patterns):
    with pytest.raises(CompilationError):
        Automaton(patterns)


def test_scan_reports_overlaps_in_start_order():
    automaton = Automaton(["he", "she", "hers"])
    hits = list(automaton.scan("ushers"))
    assert hits == [
        Hit(pattern_index=1, start=1, end=4),
        Hit(pattern_index=0, start=2, end=4),
        Hit(pattern_index=2, start=2, end=6),
    ]


def test_scan_start_order_with_long_and_short_patterns():
    automaton = Automaton(["abcdef", "cd", "e"])
    starts = [hit.start for hit in automaton.scan("xxabcdefxxcdxe")]
    assert starts == sorted(starts)
    assert len(starts) == 5


def test_scan_is_case_insensitive():
    automaton = Automaton([" BTC "])
    assert [h.pattern_index for h in automaton.scan("buy btc now")] == [0]
    assert [h.pattern_index for h in automaton.scan("BUY BTC NOW")] == [0]


def test_scan_offsets_are_utf8_byte_offsets():
    text = "Ünïcode btc"
    automaton = Automaton(["btc"])
    (hit,) = list(automaton.scan(text))
    assert text.encode("utf-8")[hit.start : hit.end] == b"btc"
    assert hit.length == 3


def test_scan_empty_text():
    automaton = Automaton(["btc"])
    assert list(automaton.scan("")) == []
    assert automaton.is_match("") is False


def test_scan_is_single_use_generator():
    automaton = Automaton(["a"])
    hits = automaton.scan("aaa")
    assert len(list(hits)) == 3
    assert list(hits) == []


def test_duplicate_patterns_keep_first_index(caplog):
    with caplog.at_level(logging.WARNING, logger="coinlex.automaton"):
        automaton = Automaton(["eth", "ETH"])
    assert "Pattern 1 ('ETH') is shadowed by identical pattern 0" in caplog.text
    assert automaton.pattern_count == 2
    assert [h.pattern_index for h in automaton.scan("eth")] == [0]


def test_is_match():
    automaton = Automaton(["english", "eng"])
    assert automaton.is_match("written in ENGLISH")
    assert not automaton.is_match("written in french")


def test_concurrent_scans_share_automaton():
    automaton = Automaton([" btc ", " eth "])
    text = " btc eth " * 200
    results = []

    def worker():
        results.append(len(list(automaton.scan(text))))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == [results[0]] * 8
    assert results[0] > 0


def test_lone_surrogates_count_as_three_bytes():
    text = "\udc80 btc \ud83d"
    automaton = Automaton([" btc "])
    (hit,) = list(automaton.scan(text))
    assert (hit.start, hit.end) == (3, 8)
    assert text.encode("utf-8", "surrogatepass")[hit.start : hit.end] == b" btc "
    assert automaton.is_match("\ud800 BTC ")
    assert fold("\ud800A") == "\xed\xa0\x80a"
