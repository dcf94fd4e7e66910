import os
from pathlib import Path
from uuid import uuid4

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay and initializes the storefront domain once.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Push the domain context before each test and clear all data after it."""
    from storefront.domain import storefront

    ctx = storefront.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared actors and catalogue
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_user():
    """Factory: register a user through the RegisterUser command and return its id."""
    from protean import current_domain
    from storefront.identity.registration import RegisterUser

    def _register(name="Test User", email=None, role="User", password="correct-horse-battery"):
        return current_domain.process(
            RegisterUser(
                name=name,
                email=email or f"user-{uuid4().hex[:10]}@example.com",
                password=password,
                role=role,
            ),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def admin_id(register_user):
    return register_user(name="Store Admin", role="Admin")


@pytest.fixture()
def customer_id(register_user):
    return register_user(name="Ada Customer")


@pytest.fixture()
def other_customer_id(register_user):
    return register_user(name="Bob Customer")


@pytest.fixture()
def add_product(admin_id):
    """Factory: add a product to the catalogue as admin and return its id."""
    from protean import current_domain
    from storefront.catalogue.management import AddProduct

    def _add(name="Widget", price=10.0, **kwargs):
        return current_domain.process(
            AddProduct(actor_id=admin_id, name=name, price=price, **kwargs),
            asynchronous=False,
        )

    return _add
