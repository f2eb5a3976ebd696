import numpy as np
import pytest

from lissajous.server import create_app

SEED = 1234


@pytest.fixture
def app():
    app = create_app(rng_factory=lambda: np.random.default_rng(SEED))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
