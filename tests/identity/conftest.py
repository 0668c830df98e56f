import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def identity_bed():
    from identity.domain import identity

    bed = DomainFixture(identity)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(identity_bed):
    """Run each test inside the identity domain, with empty stores afterwards."""
    with identity_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
