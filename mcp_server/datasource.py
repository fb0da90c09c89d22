"""
Snapshot sources for the MCP server.

Provides a uniform interface for loading a dictionary snapshot from either
the local filesystem or a GitHub repository.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from ui_metadata.dictionary import InMemoryDictionary, load_snapshot
from ui_metadata.dictionary.loader import build_dictionary


class SnapshotSource(ABC):
    """Abstract interface for loading a dictionary snapshot."""

    @abstractmethod
    def load(self) -> InMemoryDictionary:
        """Read the snapshot. Raises FileNotFoundError if missing."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable location of the snapshot."""


class LocalSnapshotSource(SnapshotSource):
    """Reads the snapshot from a local JSON file."""

    def __init__(self, path: str):
        self._path = Path(path)

    def load(self) -> InMemoryDictionary:
        return load_snapshot(self._path)

    def describe(self) -> str:
        return str(self._path)


class GitHubSnapshotSource(SnapshotSource):
    """Reads the snapshot from a GitHub repository via its raw content URL."""

    def __init__(self, owner: str, repo: str, path: str, branch: str = "main",
                 token: str | None = None):
        self._owner = owner
        self._repo = repo
        self._path = path
        self._branch = branch
        self._token = token or os.environ.get("GITHUB_TOKEN", "")

    def _raw_url(self) -> str:
        return f"https://raw.githubusercontent.com/{self._owner}/{self._repo}/{self._branch}/{self._path}"

    def _headers(self) -> dict[str, str]:
        h: dict[str, str] = {"Accept": "application/vnd.github.v3.raw"}
        if self._token:
            h["Authorization"] = f"token {self._token}"
        return h

    def _fetch_raw(self) -> bytes:
        req = Request(self._raw_url(), headers=self._headers())
        try:
            with urlopen(req, timeout=30) as resp:
                return resp.read()
        except HTTPError as e:
            if e.code == 404:
                raise FileNotFoundError(f"Not found on GitHub: {self.describe()}") from e
            raise

    def load(self) -> InMemoryDictionary:
        return build_dictionary(json.loads(self._fetch_raw()))

    def describe(self) -> str:
        return f"{self._owner}/{self._repo}@{self._branch}:{self._path}"
