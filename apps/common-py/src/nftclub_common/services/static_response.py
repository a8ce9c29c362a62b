"""Static descriptor payloads served for API resources."""

import copy
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_STATIC_RESPONSES: dict[str, dict[str, Any]] = {
    "user": {
        "resource": "user",
        "description": "NFT Club user accounts",
        "operations": ["GET /api/user/{id}", "POST /api/user"],
    },
}


class StaticResponseProvider:
    """Serve fixed, configuration-defined descriptors per resource name."""

    def __init__(self, responses: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        source = DEFAULT_STATIC_RESPONSES if responses is None else responses
        self._responses = {name: copy.deepcopy(dict(payload)) for name, payload in source.items()}

    @classmethod
    def from_file(cls, path: str | Path) -> "StaticResponseProvider":
        """Load descriptors from a JSON file mapping resource name to object.

        Args:
            path: Path to the JSON file

        Returns:
            StaticResponseProvider with the file's descriptors

        Raises:
            ValueError: If the file is not a JSON object of objects
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise ValueError(f"{path} must contain a JSON object of objects keyed by resource name")

        logger.info("Loaded static responses for %s from %s", sorted(data), path)
        return cls(data)

    def get(self, resource: str) -> dict[str, Any]:
        """Return the descriptor for a resource.

        Unknown or empty descriptors fall back to ``{"resource": <name>}`` so
        the result is never empty. Each call returns a fresh copy.
        """
        payload = self._responses.get(resource)
        if not payload:
            return {"resource": resource}
        return copy.deepcopy(payload)
