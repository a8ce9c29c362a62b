"""Tests for PasswordHasher."""

import pytest

from nftclub_common.services.password_hasher import PasswordHasher

pytestmark = pytest.mark.unit


def test_hash_verifies(hasher: PasswordHasher) -> None:
    encoded = hasher.hash("correct horse")

    assert encoded.startswith("scrypt$16$8$1$")
    assert hasher.verify("correct horse", encoded)
    assert not hasher.verify("wrong horse", encoded)


def test_salts_differ(hasher: PasswordHasher) -> None:
    assert hasher.hash("same") != hasher.hash("same")


def test_hash_from_other_parameters_still_verifies(hasher: PasswordHasher) -> None:
    encoded = PasswordHasher(n=2**5, r=4).hash("pw")

    assert hasher.verify("pw", encoded)


@pytest.mark.parametrize(
    "encoded",
    ["", "plaintext", "bcrypt$16$8$1$c2FsdA==$aGFzaA==", "scrypt$16$8$1$!!!$???", "scrypt$x$8$1$c2FsdA==$aGFzaA=="],
)
def test_malformed_hash_does_not_verify(hasher: PasswordHasher, encoded: str) -> None:
    assert not hasher.verify("pw", encoded)


@pytest.mark.parametrize("n", [0, 1, 3, 1000])
def test_rejects_invalid_cost(n: int) -> None:
    with pytest.raises(ValueError):
        PasswordHasher(n=n)
