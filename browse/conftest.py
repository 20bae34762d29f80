"""Shared test fixtures"""

import os
import random

import pytest
from faker import Faker

from storage.factories import ALL_FACTORIES
from storage.manager import StorageManager


@pytest.fixture(scope="session", autouse=True)
def setup_factory_seed():
    """Configure factory_boy/Faker to use a deterministic seed for reproducibility.

    The seed can be set via FACTORY_SEED environment variable, or will be
    randomly generated. The seed is printed to stdout for reproducibility.
    """
    seed = os.environ.get("FACTORY_SEED")
    if seed:
        seed = int(seed)
    else:
        seed = random.randint(0, 2**32 - 1)

    print(f"\n{'=' * 70}")
    print(f"Factory seed: {seed}")
    print(f"To reproduce this test run, set: FACTORY_SEED={seed}")
    print(f"{'=' * 70}\n")

    Faker.seed(seed)
    random.seed(seed)

    return seed


@pytest.fixture
def storage_manager(tmp_path):
    """Create a StorageManager with a temporary content.db."""
    manager = StorageManager(database_path=tmp_path)
    yield manager
    manager.dispose()


@pytest.fixture
def content_session(storage_manager):
    """Writable session with every factory bound to it."""
    with storage_manager.get_session() as session:
        for factory_class in ALL_FACTORIES:
            factory_class._meta.sqlalchemy_session = session  # type: ignore[misc]
        yield session
