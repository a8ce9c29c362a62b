"""Tests for StaticResponseProvider."""

import json
from pathlib import Path

import pytest

from nftclub_common.services.static_response import DEFAULT_STATIC_RESPONSES, StaticResponseProvider

pytestmark = pytest.mark.unit


def test_default_user_descriptor() -> None:
    provider = StaticResponseProvider()

    assert provider.get("user") == DEFAULT_STATIC_RESPONSES["user"]


def test_unknown_resource_falls_back_to_name() -> None:
    assert StaticResponseProvider().get("wallet") == {"resource": "wallet"}


def test_empty_descriptor_falls_back_to_name() -> None:
    assert StaticResponseProvider({"user": {}}).get("user") == {"resource": "user"}


def test_returns_independent_copies() -> None:
    provider = StaticResponseProvider()
    first = provider.get("user")
    first["operations"].append("DELETE /api/user/{id}")

    assert provider.get("user") == DEFAULT_STATIC_RESPONSES["user"]


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "static.json"
    path.write_text(json.dumps({"user": {"resource": "user", "club": "nft"}}), encoding="utf-8")

    provider = StaticResponseProvider.from_file(path)

    assert provider.get("user") == {"resource": "user", "club": "nft"}


@pytest.mark.parametrize("content", ["[]", '{"user": "not an object"}'])
def test_from_file_rejects_wrong_shape(tmp_path: Path, content: str) -> None:
    path = tmp_path / "static.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        StaticResponseProvider.from_file(path)
