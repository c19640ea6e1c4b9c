"""Shared pytest configuration."""

from __future__ import annotations

import pytest

from tests.pdf_fixtures import PDFTestFixtures, get_fixtures


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "smoke: fast checks on in-memory geometry")
    config.addinivalue_line(
        "markers", "integration: end-to-end runs over generated PDF documents"
    )


@pytest.fixture
def pdf_fixtures() -> PDFTestFixtures:
    """PDF builder shared by the integration tests."""
    return get_fixtures()
