"""Models are flat tables: reads join explicitly, so no mapper carries relationships."""
import pytest
from sqlalchemy import inspect

from catalog_admin import models


@pytest.mark.parametrize("name", models.__all__)
def test_no_orm_relationships(name) -> None:
    assert list(inspect(getattr(models, name)).relationships) == []
