import pytest

from occlusion import OcclusionCalculator

from helpers import FakeProvider


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def calculator(provider):
    return OcclusionCalculator(provider)
