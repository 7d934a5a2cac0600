import os

import pytest


@pytest.fixture(scope="session")
def _cookbook_domain(request):
    """Initialize the cookbook domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from cookbook.domain import cookbook

    cookbook.init()
    return cookbook


@pytest.fixture(scope="session", autouse=True)
def setup_db(_cookbook_domain):
    from cookbook.domain import cookbook
    from cookbook.utils.db import drop_db, setup_db

    setup_db(cookbook)

    yield

    drop_db(cookbook)


@pytest.fixture(autouse=True)
def run_around_tests(_cookbook_domain):
    """Push domain context before each test, cleanup after."""
    from cookbook.rating import reset_rating_store

    ctx = _cookbook_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_rating_store()
    ctx.pop()


class _UnreachableRepository:
    """Repository stand-in whose reads fail as if the database went away."""

    def __init__(self, repository):
        self._repository = repository

    def get(self, identifier):
        raise ConnectionError("db down")

    def __getattr__(self, name):
        return getattr(self._repository, name)


@pytest.fixture()
def fail_reads(_cookbook_domain, monkeypatch):
    """Make ``get`` on the given aggregate's repository raise ConnectionError."""
    real_repository_for = _cookbook_domain.repository_for
    failing = set()

    def repository_for(aggregate_cls):
        repository = real_repository_for(aggregate_cls)
        return _UnreachableRepository(repository) if aggregate_cls in failing else repository

    monkeypatch.setattr(_cookbook_domain, "repository_for", repository_for)
    return failing.add
