import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    """Push domain context before each test, wipe stored data after."""
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def shipping_info():
    return {
        "phone_number": "0912345678",
        "address": "12 Main St, Springfield",
        "payment_method": "credit-card",
    }
