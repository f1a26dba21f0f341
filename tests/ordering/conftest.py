import pytest
from ordering.catalog import reset_catalog
from protean import current_domain


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        # Clear the in-memory cart store between tests
        for _, provider in current_domain.providers.items():
            provider._data_reset()
    reset_catalog()
