import os

import hypothesis
import pytest

hypothesis.settings.register_profile("ci", deadline=None)
hypothesis.settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture
def auth_token():
    return "some-token"


@pytest.fixture
def username():
    return "jsmith"
