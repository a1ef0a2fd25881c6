"""
Query Engine Port — What semverlint needs from the graph query engine.

The engine matches a lint's query against a baseline and a current API
snapshot and yields unordered output mappings. One engine instance is bound
to one snapshot pair; semverlint never looks at the snapshots itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class OutputInfo:
    """Shape of one declared query output."""

    name: str
    is_list: bool = False
    # Fold ids from the query root down to the component holding this output.
    # () for outputs of the root component.
    fold_path: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParsedQuery:
    """A query the engine has accepted, with its output declarations."""

    text: str
    outputs: dict[str, OutputInfo] = field(default_factory=dict)


class QueryEngine(Protocol):
    def parse(self, query: str) -> ParsedQuery:
        """Parse query text. Raises if the text is not a valid query."""
        ...

    def run(
        self, parsed: ParsedQuery, arguments: Mapping[str, Any]
    ) -> Iterable[Mapping[str, Any]]:
        """Run a parsed query. Result order is not guaranteed."""
        ...
