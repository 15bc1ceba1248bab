import os
import random
import string
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from coinlex.errors import ConfigurationError, InternalInvariantViolation
from coinlex.variants import (
    DEFAULT_DELIMITERS,
    DelimiterPair,
    generate_variants,
    normalize_delimiters,
    normalize_vocabulary,
)


def random_vocabulary(rng, size):
    words = set()
    while len(words) < size:
        length = rng.randint(2, 9)
        words.add("".join(rng.choice(string.ascii_lowercase) for _ in range(length)))
    return sorted(words)


def test_default_delimiters_are_the_ten_pairs():
    assert len(DEFAULT_DELIMITERS) == 10
    assert DEFAULT_DELIMITERS[0] == DelimiterPair(" ", " ")
    assert DEFAULT_DELIMITERS[1] == DelimiterPair(" ", ".")
    assert DEFAULT_DELIMITERS[-1] == DelimiterPair("[", "]")


def test_wrap():
    assert DelimiterPair("(", ")").wrap("btc") == "(btc)"
    assert DelimiterPair(" ", ".").wrap("eth") == " eth."


def test_generate_variants_layout():
    table = generate_variants(["btc", "eth"])
    assert table.entities == ("btc", "eth")
    assert len(table) == 20
    # Delimiter loop outermost, entity loop innermost
    assert table.patterns[:4] == (" btc ", " eth ", " btc.", " eth.")
    assert table.patterns[-2:] == ("[btc]", "[eth]")


@pytest.mark.parametrize("seed", range(12))
def test_modular_mapping_integrity(seed):
    rng = random.Random(seed)
    vocabulary = random_vocabulary(rng, rng.randint(1, 40))
    table = generate_variants(vocabulary)
    n = len(vocabulary)
    k = len(DEFAULT_DELIMITERS)

    assert len(table) == n * k
    for i, pattern in enumerate(table.patterns):
        assert table.entity_index(i) == i % n
        assert 0 <= table.entity_index(i) < n
        assert table.entity_for(i) == vocabulary[i % n]
        assert pattern == DEFAULT_DELIMITERS[i // n].wrap(vocabulary[i % n])


def test_index_outside_table_is_an_invariant_violation():
    table = generate_variants(["btc", "eth"])
    with pytest.raises(InternalInvariantViolation):
        table.entity_index(len(table))
    with pytest.raises(InternalInvariantViolation):
        table.entity_index(-1)


def test_custom_delimiters():
    table = generate_variants(["btc"], [("$", " "), ("#", "")])
    assert table.delimiters == (DelimiterPair("$", " "), DelimiterPair("#", ""))
    assert table.patterns == ("$btc ", "#btc")


@pytest.mark.parametrize(
    "vocabulary",
    [[], None, "btc", ["btc", ""], ["btc", "   "], ["btc", 42]],
)
def test_invalid_vocabulary(vocabulary):
    with pytest.raises(ConfigurationError):
        generate_variants(vocabulary)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_vocabulary([])


def test_duplicates_collapse_to_first_spelling(caplog):
    with caplog.at_level("WARNING"):
        entities = normalize_vocabulary(["sol", "btc", "SOL", "sol"])
    assert entities == ("sol", "btc")
    assert "duplicate" in caplog.text


@pytest.mark.parametrize(
    "delimiters",
    [[], [("", "")], [(" ", " "), (" ", " ")]],
)
def test_invalid_delimiters(delimiters):
    with pytest.raises(ConfigurationError):
        normalize_delimiters(delimiters)


def test_entity_with_delimiter_characters_is_kept(caplog):
    with caplog.at_level("WARNING"):
        table = generate_variants(["usd coin", "btc"])
    assert table.entities == ("usd coin", "btc")
    assert "usd coin" in caplog.text
