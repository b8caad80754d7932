import pytest

from pinspace.tests.util import create_test_app


@pytest.fixture()
def app(tmp_path):
    return create_test_app(str(tmp_path / 'uploads'))


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def request_context(app):
    yield app.test_request_context()
