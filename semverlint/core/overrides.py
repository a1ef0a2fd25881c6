"""
Override Resolver — Layered lint-level and required-update overrides.

Each configuration source (a config file, a request body, ...) contributes
one OverrideMap. Layers pushed later win. The two overridable fields resolve
independently: a layer that only sets `lint-level` does not hide a
`required-update` set by a layer below it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import TypeAdapter

from semverlint.models.lint_models import (
    LintLevel,
    OverrideMap,
    QueryOverride,
    RequiredSemverUpdate,
    SemverQuery,
)

if TYPE_CHECKING:
    from semverlint.core.catalog import LintCatalog

logger = logging.getLogger("semverlint.overrides")

_OVERRIDE_MAP_ADAPTER = TypeAdapter(dict[str, QueryOverride])


class OverrideStack:
    """
    A precedence stack of OverrideMaps.

    Items toward the top of the stack (later in the backing list) have higher
    precedence. Built fresh for every check run and never shrinks.
    """

    def __init__(self) -> None:
        self._layers: list[OverrideMap] = []

    @classmethod
    def from_layers(cls, layers: Iterable[OverrideMap]) -> OverrideStack:
        stack = cls()
        for layer in layers:
            stack.push(layer)
        return stack

    def push(self, overrides: Mapping[str, QueryOverride]) -> None:
        """Insert a copy of the given map at the top of the stack."""
        self._layers.append(dict(overrides))

    def __len__(self) -> int:
        return len(self._layers)

    def effective_lint_level(self, query: SemverQuery) -> LintLevel:
        """Topmost non-None lint level for this lint, else its default."""
        for layer in reversed(self._layers):
            entry = layer.get(query.id)
            if entry is not None and entry.lint_level is not None:
                return entry.lint_level
        return query.lint_level

    def effective_required_update(self, query: SemverQuery) -> RequiredSemverUpdate:
        """Topmost non-None required update for this lint, else its default."""
        for layer in reversed(self._layers):
            entry = layer.get(query.id)
            if entry is not None and entry.required_update is not None:
                return entry.required_update
        return query.required_update

    def is_overridden(self, query: SemverQuery) -> bool:
        return (
            self.effective_lint_level(query) != query.lint_level
            or self.effective_required_update(query) != query.required_update
        )


def parse_override_layer(
    raw: Mapping[str, Any],
    catalog: LintCatalog | None = None,
    source: str = "<overrides>",
) -> OverrideMap:
    """
    Validate one raw override layer.

    Raises pydantic.ValidationError for malformed entries. Ids missing from
    the catalog are kept but logged, since a newer config may name lints this
    catalog does not have yet.
    """
    overrides = _OVERRIDE_MAP_ADAPTER.validate_python(dict(raw))

    if catalog is not None:
        unknown = sorted(lint_id for lint_id in overrides if lint_id not in catalog)
        if unknown:
            logger.warning(f"{source}: overrides reference unknown lints: {unknown}")

    return overrides


def load_override_file(path: str | Path, catalog: LintCatalog | None = None) -> OverrideMap:
    """Read one YAML override layer. An empty file is an empty layer."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(
            f"{path}: override layer must be a mapping of lint id to override, "
            f"got {type(raw).__name__}"
        )

    overrides = parse_override_layer(raw, catalog=catalog, source=str(path))
    logger.debug(f"Loaded {len(overrides)} overrides from {path}")
    return overrides


def load_override_stack(
    paths: Iterable[str | Path], catalog: LintCatalog | None = None
) -> OverrideStack:
    """Build a stack from YAML files, lowest precedence first."""
    return OverrideStack.from_layers(load_override_file(p, catalog) for p in paths)
