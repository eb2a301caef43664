from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def mock_provider():
    provider = AsyncMock()
    provider.request = AsyncMock(return_value=None)
    return provider
