"""Tests for forbidden word list parsing."""

from __future__ import annotations

import pytest

from wordscan.word_set import WordSet, load_words_file, parse_words


# ── parse_words ────────────────────────────────────────────────────────────


@pytest.mark.parametrize("raw", ["", None, "   ", "\r\n,;", " , ; \n "])
def test_parse_empty_input_yields_empty_set(raw):
    words = parse_words(raw)
    assert len(words) == 0
    assert not words


def test_parse_all_delimiters():
    words = parse_words("alpha\nbeta\r\ngamma,delta;epsilon")
    assert words.words == ("alpha", "beta", "gamma", "delta", "epsilon")


def test_parse_trims_whitespace():
    assert parse_words("  foo  ,\tbar\t").words == ("foo", "bar")


def test_parse_keeps_inner_spaces():
    assert parse_words("bad word; other").words == ("bad word", "other")


def test_parse_keeps_duplicates_in_order():
    assert parse_words("x,y,x").words == ("x", "y", "x")


def test_parse_preserves_case():
    assert parse_words("Secret,secret").words == ("Secret", "secret")


# ── WordSet ────────────────────────────────────────────────────────────────


def test_wordset_rejects_blank_entries():
    with pytest.raises(ValueError):
        WordSet(("ok", "  "))


def test_from_iterable_drops_blank_entries():
    assert WordSet.from_iterable(["a", "", "  ", " b "]).words == ("a", "b")


def test_wordset_is_iterable():
    assert list(parse_words("a;b")) == ["a", "b"]


def test_load_words_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("один\nдва;three\n", encoding="utf-8")
    assert load_words_file(path).words == ("один", "два", "three")
