"""
Pytest configuration and shared fixtures.
"""

import os
from uuid import uuid4

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("SENTRY_DSN", "")

from clinic_scheduler.config.settings import reset_settings  # noqa: E402
from clinic_scheduler.core.container import reset_container  # noqa: E402
from tests.utils.builders import make_doctor, make_patient  # noqa: E402
from tests.utils.fakes import FakeScheduling  # noqa: E402


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "use_case: Use case tests")
    config.addinivalue_line("markers", "repository: Repository tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: API tests")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings and container between tests."""
    reset_settings()
    reset_container()
    yield
    reset_settings()
    reset_container()


@pytest.fixture
def tenant_id():
    return uuid4()


@pytest.fixture
def other_tenant_id():
    return uuid4()


@pytest.fixture
def scheduling(tenant_id):
    """In-memory scheduling with the tenant registered."""
    harness = FakeScheduling()
    harness.store.tenants.add(tenant_id)
    return harness


@pytest.fixture
def doctor(scheduling, tenant_id):
    doctor = make_doctor(tenant_id)
    scheduling.store.seed(doctor)
    return doctor


@pytest.fixture
def patient(scheduling, tenant_id):
    patient = make_patient(tenant_id)
    scheduling.store.seed(patient)
    return patient
