"""Common typed models for call patterns, occurrences and discovered variables."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional


class CallPattern(str, Enum):
    STD_VAR = "std::env::var"
    STD_VAR_OS = "std::env::var_os"
    ENV_VAR = "env::var"
    ENV_VAR_OS = "env::var_os"
    DOTENV_VAR = "dotenv::var"
    DOTENV_VAR_OS = "dotenv::var_os"
    VAR = "var"
    VAR_OS = "var_os"


@dataclass(frozen=True, slots=True)
class Occurrence:
    name: str
    path: Path
    line: int  # 1-based

    def location(self) -> str:
        return f"{self.path}:{self.line}"


@dataclass
class VariableSet:
    """Discovered variable names, each with the first occurrence seen.

    Iteration is always in ascending lexicographic order of names.
    """

    occurrences: dict[str, Occurrence] = field(default_factory=dict)

    def add(self, occ: Occurrence) -> bool:
        if occ.name in self.occurrences:
            return False
        self.occurrences[occ.name] = occ
        return True

    def update(self, occs: Iterable[Occurrence]) -> None:
        for occ in occs:
            self.add(occ)

    def first(self, name: str) -> Optional[Occurrence]:
        return self.occurrences.get(name)

    def names(self) -> list[str]:
        return sorted(self.occurrences)

    def __contains__(self, name: object) -> bool:
        return name in self.occurrences

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self.occurrences)
