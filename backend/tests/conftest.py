import pytest
from fastapi.testclient import TestClient

from notes_api.config import Settings
from notes_api.main import create_app


@pytest.fixture()
def settings(tmp_path):
    # isolate data dir per test; bcrypt minimum cost keeps the suite fast
    return Settings(data_dir=tmp_path, jwt_key="dev-secret-for-tests", bcrypt_rounds=4)


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def signup(client):
    def _signup(username, password="pass"):
        r = client.post("/signup", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return r.json()["token"]

    return _signup
