import os

import pytest


@pytest.fixture(scope="session")
def _members_domain(request):
    """Initialize the members domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from members.domain import members

    members.init()
    return members


@pytest.fixture(scope="session", autouse=True)
def setup_db(_members_domain):
    from members.domain import members
    from members.utils.db import drop_db, setup_db

    setup_db(members)

    yield

    drop_db(members)


@pytest.fixture(autouse=True)
def run_around_tests(_members_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _members_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
