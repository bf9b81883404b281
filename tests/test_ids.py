"""Identifier format: {prefix}_{12 base62 chars}, prefix per entity type."""
import re

import pytest

from catalog_admin.utils.ids import PREFIXES, generate_id

ID_RE = re.compile(r"^[a-z]{2}_[A-Za-z0-9]{12}$")


@pytest.mark.parametrize("entity", sorted(PREFIXES))
def test_generated_id_has_entity_prefix(entity: str) -> None:
    value = generate_id(entity)
    assert ID_RE.match(value), value
    assert value.startswith(PREFIXES[entity] + "_")


def test_ids_do_not_repeat() -> None:
    values = {generate_id("company") for _ in range(500)}
    assert len(values) == 500


def test_prefixes_are_distinct() -> None:
    assert len(set(PREFIXES.values())) == len(PREFIXES)


def test_unknown_entity_raises() -> None:
    with pytest.raises(KeyError):
        generate_id("invoice")
