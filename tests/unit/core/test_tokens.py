# tests/unit/core/test_tokens.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from layerable.core.errors import TransitionError
from layerable.core.tokens import Token, TokenKind, parse_token


@pytest.mark.parametrize(
    "raw,kind,name",
    [
        ("@start", TokenKind.START, "@start"),
        ("@end", TokenKind.END, "@end"),
        ("@finalize", TokenKind.FINALIZE, "@finalize"),
        ("@current", TokenKind.CURRENT, "@current"),
        ("#sub", TokenKind.CHILD, "sub"),
        ("#@current", TokenKind.CHILD, "@current"),
        ("idle", TokenKind.STATE, "idle"),
    ],
)
def test_parse_token(raw, kind, name):
    token = parse_token(raw)
    assert token.kind is kind
    assert token.name == name
    assert str(token) == raw


def test_self_entry_only_for_hash_current():
    assert parse_token("#@current").is_self_entry
    assert not parse_token("#sub").is_self_entry
    assert not parse_token("@current").is_self_entry


def test_parse_token_passes_tokens_through():
    token = Token(TokenKind.STATE, "idle")
    assert parse_token(token) is token


@pytest.mark.parametrize("raw", ["", "#", 42])
def test_parse_token_rejects_malformed(raw):
    with pytest.raises(TransitionError):
        parse_token(raw)
