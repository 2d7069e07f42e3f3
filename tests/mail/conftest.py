"""Shared test fixtures for SendGridMailer tests."""
import pytest
import respx


BASE_URL = "https://api.sendgrid.com"


@pytest.fixture
def mock_sendgrid():
    """respx mock transport at transport level for SendGridMailer."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        yield mock
