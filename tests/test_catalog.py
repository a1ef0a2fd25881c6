"""
Tests for the Lint Catalog — bundled lints and load-time validation.
"""

import pytest
import yaml

from semverlint.core.catalog import (
    LINT_REGISTRY,
    LintCatalog,
    get_catalog,
    load_catalog,
    parse_lint,
)
from semverlint.core.errors import CatalogError
from semverlint.models.lint_models import LintLevel, RequiredSemverUpdate


def _write_lint(directory, lint_id, **fields):
    definition = {
        "id": lint_id,
        "human_readable_name": lint_id.replace("_", " "),
        "description": "A test lint.",
        "required_update": "major",
        "lint_level": "deny",
        "query": f"query {lint_id}",
        "error_message": "Something was removed.",
    }
    definition.update(fields)
    path = directory / f"{lint_id}.yaml"
    path.write_text(yaml.safe_dump(definition))
    return path


def test_bundled_catalog_loads():
    catalog = load_catalog()
    assert len(catalog) == len(LINT_REGISTRY)
    assert catalog.ids() == sorted(LINT_REGISTRY)


def test_bundled_lint_fields():
    catalog = load_catalog()

    function_missing = catalog.lookup("function_missing")
    assert function_missing.required_update == RequiredSemverUpdate.MAJOR
    assert function_missing.lint_level == LintLevel.DENY
    assert function_missing.witness is not None

    pub_static_added = catalog.lookup("pub_static_added")
    assert pub_static_added.lint_level == LintLevel.ALLOW


def test_lookup_unknown_lint():
    assert load_catalog().lookup("no_such_lint") is None
    assert "no_such_lint" not in load_catalog()


def test_duplicate_ids_rejected(make_query):
    with pytest.raises(CatalogError, match="duplicate lint id 'dup'"):
        LintCatalog([make_query("dup"), make_query("dup")])


def test_catalog_iterates_in_id_order(make_query):
    catalog = LintCatalog([make_query("b"), make_query("c"), make_query("a")])
    assert [lint.id for lint in catalog] == ["a", "b", "c"]


def test_load_catalog_custom_registry(tmp_path):
    _write_lint(tmp_path, "first_lint")
    _write_lint(tmp_path, "second_lint", lint_level="warn")

    catalog = load_catalog(tmp_path, registry=["second_lint", "first_lint"])
    assert catalog.ids() == ["first_lint", "second_lint"]
    assert catalog.lookup("second_lint").lint_level == LintLevel.WARN


def test_duplicate_registry_entry_rejected(tmp_path):
    _write_lint(tmp_path, "first_lint")
    with pytest.raises(CatalogError, match="duplicate"):
        load_catalog(tmp_path, registry=["first_lint", "first_lint"])


def test_id_must_match_file_name(tmp_path):
    path = _write_lint(tmp_path, "first_lint", id="other_name")
    with pytest.raises(CatalogError, match="must match file name") as exc_info:
        load_catalog(tmp_path, registry=["first_lint"])
    assert str(path) in str(exc_info.value)


def test_unregistered_definition_rejected(tmp_path):
    _write_lint(tmp_path, "first_lint")
    _write_lint(tmp_path, "stray_lint")
    with pytest.raises(CatalogError, match="stray_lint"):
        load_catalog(tmp_path, registry=["first_lint"])


def test_registered_lint_without_definition(tmp_path):
    _write_lint(tmp_path, "first_lint")
    with pytest.raises(CatalogError, match="'missing_lint' has no definition"):
        load_catalog(tmp_path, registry=["first_lint", "missing_lint"])


def test_missing_lint_directory(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        load_catalog(tmp_path / "nope", registry=[])


def test_invalid_yaml(tmp_path):
    (tmp_path / "broken.yaml").write_text("id: broken\nquery: [unterminated\n")
    with pytest.raises(CatalogError, match="failed to parse"):
        load_catalog(tmp_path, registry=["broken"])


def test_invalid_definition_fields(tmp_path):
    _write_lint(tmp_path, "first_lint", lint_level="loud")
    with pytest.raises(CatalogError, match="invalid lint definition"):
        load_catalog(tmp_path, registry=["first_lint"])


def test_nested_inherit_rejected_at_load(tmp_path):
    _write_lint(
        tmp_path,
        "first_lint",
        witness={
            "hint_template": "{{ name }}",
            "witness_template": "{{ name }}",
            "witness_query": {
                "query": "witness",
                "arguments": {"paths": [{"inherit": "path"}]},
            },
        },
    )
    with pytest.raises(CatalogError, match="only top-level"):
        load_catalog(tmp_path, registry=["first_lint"])


def test_parse_lint_requires_mapping():
    with pytest.raises(CatalogError, match="must be a mapping"):
        parse_lint("- just\n- a list\n")


def test_validate_queries(make_query, fake_engine):
    catalog = LintCatalog(
        [
            make_query("good"),
            make_query(
                "bad_witness",
                witness={
                    "hint_template": "{{ name }}",
                    "witness_template": "{{ name }}",
                    "witness_query": {"query": "broken witness", "arguments": {}},
                },
            ),
        ]
    )

    catalog.validate_queries(fake_engine())

    with pytest.raises(CatalogError, match="'bad_witness': witness query failed to parse"):
        catalog.validate_queries(fake_engine(broken=["broken witness"]))


def test_get_catalog_is_cached():
    assert get_catalog() is get_catalog()
