"""
Lint Catalog — The validated, read-only set of bundled lints.

Lint definitions live in `semverlint/lints/<id>.yaml`, one per file, and are
registered by id in LINT_REGISTRY. Loading fails hard on any inconsistency:
a broken catalog is a bug in semverlint, never a user error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from semverlint.config import settings
from semverlint.core.errors import CatalogError
from semverlint.core.query_engine import QueryEngine
from semverlint.models.lint_models import SemverQuery

logger = logging.getLogger("semverlint.catalog")

BUNDLED_LINTS_DIR = Path(__file__).resolve().parent.parent / "lints"

LINT_FILE_SUFFIX = ".yaml"

# Registry of all bundled lints. Every id has a definition file and every
# definition file has an id here; load_catalog() checks both directions.
LINT_REGISTRY: tuple[str, ...] = (
    "enum_repr_int_added",
    "enum_variant_missing",
    "feature_missing",
    "function_missing",
    "function_parameter_count_changed",
    "partial_ord_struct_fields_reordered",
    "pub_static_added",
    "repr_c_removed",
    "struct_missing",
    "struct_pub_field_missing",
)


class LintCatalog:
    """Immutable mapping of lint id to SemverQuery, iterated in id order."""

    def __init__(self, queries: Iterable[SemverQuery]) -> None:
        lints: dict[str, SemverQuery] = {}
        for query in queries:
            if query.id in lints:
                raise CatalogError(f"duplicate lint id '{query.id}'")
            lints[query.id] = query
        self._lints = dict(sorted(lints.items()))

    def lookup(self, lint_id: str) -> SemverQuery | None:
        return self._lints.get(lint_id)

    def ids(self) -> list[str]:
        return list(self._lints)

    def __iter__(self) -> Iterator[SemverQuery]:
        return iter(self._lints.values())

    def __len__(self) -> int:
        return len(self._lints)

    def __contains__(self, lint_id: object) -> bool:
        return lint_id in self._lints

    def validate_queries(self, engine: QueryEngine) -> None:
        """Parse every lint and witness query with `engine`. Raises CatalogError on the first failure."""
        for lint in self:
            texts = [("query", lint.query)]
            if lint.witness is not None and lint.witness.witness_query is not None:
                texts.append(("witness query", lint.witness.witness_query.query))

            for kind, text in texts:
                try:
                    engine.parse(text)
                except Exception as e:
                    raise CatalogError(
                        f"lint '{lint.id}': {kind} failed to parse: {e}\n{text}"
                    ) from e


def parse_lint(text: str, source: str = "<string>") -> SemverQuery:
    """Deserialize one YAML lint definition. Raises CatalogError if invalid."""
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CatalogError(f"failed to parse lint definition {source}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(
            f"lint definition {source} must be a mapping, got {type(raw).__name__}"
        )

    try:
        return SemverQuery.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"invalid lint definition {source}:\n{e}") from e


def load_catalog(
    lints_dir: str | Path | None = None,
    registry: Iterable[str] = LINT_REGISTRY,
) -> LintCatalog:
    """
    Load and validate every registered lint.

    Raises CatalogError if a definition fails to parse, its id differs from
    its file name, an id is registered twice, a registered id has no file, or
    a definition file is not registered.
    """
    lints_dir = Path(lints_dir) if lints_dir is not None else BUNDLED_LINTS_DIR
    registry = tuple(registry)

    if not lints_dir.is_dir():
        raise CatalogError(f"lint directory not found: {lints_dir}")

    on_disk = {p.stem for p in lints_dir.glob(f"*{LINT_FILE_SUFFIX}")}
    unregistered = sorted(on_disk - set(registry))
    if unregistered:
        raise CatalogError(
            f"lint definitions in {lints_dir} are not registered in LINT_REGISTRY "
            f"and would never run: {unregistered}"
        )

    queries: list[SemverQuery] = []
    for lint_id in registry:
        path = lints_dir / f"{lint_id}{LINT_FILE_SUFFIX}"
        if not path.is_file():
            raise CatalogError(f"registered lint '{lint_id}' has no definition at {path}")

        query = parse_lint(path.read_text(encoding="utf-8"), source=str(path))
        if query.id != lint_id:
            raise CatalogError(
                f"lint id must match file name: {path} declares id '{query.id}'"
            )
        queries.append(query)

    catalog = LintCatalog(queries)
    logger.info(f"Loaded {len(catalog)} lints from {lints_dir}")
    return catalog


@lru_cache
def get_catalog() -> LintCatalog:
    """Shared catalog singleton, loaded once per process."""
    return load_catalog(settings.lints_dir)
