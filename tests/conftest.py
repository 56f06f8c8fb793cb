from collections.abc import Iterator

import pytest

import spliterators as sp


@pytest.fixture(autouse=True)
def _restore_config() -> Iterator[None]:
    saved = sp.get_config()
    yield
    sp.set_config(
        batch_unit=saved.batch_unit,
        max_batch=saved.max_batch,
        check_contracts=saved.check_contracts,
    )
