import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def announcements_bed():
    from announcements.domain import announcements

    bed = DomainFixture(announcements)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(announcements_bed):
    with announcements_bed.domain_context():
        yield
