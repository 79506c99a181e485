"""Unit tests for token hash and action key value objects."""

import hashlib

import pytest

from actiongate.domain.value_objects import ActionKey, TokenHash, action_key_problem


class TestTokenHash:
    def test_of_is_sha256_hex(self) -> None:
        assert TokenHash.of("secret").value == hashlib.sha256(b"secret").hexdigest()

    def test_rejects_non_hex(self) -> None:
        with pytest.raises(ValueError):
            TokenHash("not-a-hash")

    def test_matches(self) -> None:
        digest = TokenHash.of("abc")
        assert digest.matches(hashlib.sha256(b"abc").hexdigest())
        assert not digest.matches(TokenHash.of("abd").value)


class TestActionKey:
    @pytest.mark.parametrize("value", ["system.ping", "user-info", "a_b.c-d.1"])
    def test_valid_keys(self, value: str) -> None:
        assert action_key_problem(value) is None
        assert str(ActionKey(value)) == value

    @pytest.mark.parametrize("value", ["", "has space", "semi;colon", "slash/x", "trailing\n", None, 42])
    def test_invalid_keys(self, value) -> None:
        assert action_key_problem(value) is not None

    def test_too_long(self) -> None:
        assert action_key_problem("a" * 101) is not None
        assert action_key_problem("a" * 100) is None

    def test_action_key_raises_on_invalid(self) -> None:
        with pytest.raises(ValueError):
            ActionKey("bad key")
