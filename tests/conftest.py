import os

# Keep the test run off the on-disk database
os.environ.setdefault("DB_URL", "sqlite://")

import pytest  # noqa: E402

from tests.factories import make_assessment, make_row  # noqa: E402


@pytest.fixture
def row():
    return make_row()


@pytest.fixture
def assessment():
    return make_assessment()
