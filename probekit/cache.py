"""A directory of cached experiments, looked up by name and version."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from probekit.experiment import Experiment

CACHE_EXT = ".experiment-cache"


@dataclass(frozen=True)
class CachedExperimentHeader:
    """The name and version under which an experiment was cached."""

    name: str
    version: int

    def _to_json(self) -> dict[str, Any]:
        return {"Name": self.name, "Version": self.version}

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> CachedExperimentHeader:
        return cls(name=str(data.get("Name") or ""), version=int(data.get("Version") or 0))


def _json_documents(text: str) -> Iterator[Any]:
    for line in text.splitlines():
        if line.strip():
            yield json.loads(line)


@dataclass
class ExperimentCache:
    """A directory holding one file per cached experiment.

    Each file is named after a hash of the experiment name and holds two JSON
    documents, one per line: the header, then the experiment.  The directory
    is created if it does not exist.
    """

    path: Path

    def __post_init__(self) -> None:
        given = self.path
        self.path = Path(given)
        if not self.path.exists():
            self.path.mkdir(parents=True, exist_ok=True)
        elif not self.path.is_dir():
            raise NotADirectoryError(f"{given} is not a directory")

    def _file_for(self, name: str) -> Path:
        digest = hashlib.md5(name.encode("utf-8")).hexdigest()
        return self.path / (digest + CACHE_EXT)

    def _cache_files(self) -> list[Path]:
        return sorted(p for p in self.path.iterdir() if p.suffix == CACHE_EXT)

    def list(self) -> list[CachedExperimentHeader]:
        """Return the headers of every cached experiment."""
        headers = []
        for file in self._cache_files():
            first = next(_json_documents(file.read_text(encoding="utf-8")))
            headers.append(CachedExperimentHeader._from_json(first))
        return headers

    def clear(self) -> None:
        """Delete every cache file in the directory."""
        for file in self._cache_files():
            file.unlink()

    def load(self, name: str, version: int) -> Experiment | None:
        """Return the cached experiment if its version is at least version, else None."""
        try:
            text = self._file_for(name).read_text(encoding="utf-8")
        except OSError:
            return None
        try:
            documents = _json_documents(text)
            header = CachedExperimentHeader._from_json(next(documents))
            if header.version < version:
                return None
            return Experiment.from_json(next(documents))
        except (ValueError, TypeError, AttributeError, StopIteration):
            return None

    def save(self, name: str, version: int, experiment: Experiment) -> None:
        """Store experiment under name and version, replacing any earlier entry."""
        header = CachedExperimentHeader(name=name, version=version)
        text = json.dumps(header._to_json()) + "\n" + json.dumps(experiment.to_json()) + "\n"
        self._file_for(name).write_text(text, encoding="utf-8")

    def delete(self, name: str) -> None:
        """Remove the experiment cached under name; raises FileNotFoundError if absent."""
        self._file_for(name).unlink()