import pytest

from notes_api import messages


def test_index_says_hello(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "hello world"


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_signup_returns_token_for_new_user(client):
    r = client.post("/signup", json={"username": "alice", "password": "pass"})
    assert r.status_code == 200
    body = r.json()
    assert body["error"] is None

    user = client.app.state.stores.users.find_by_username("alice")
    assert user is not None
    assert user.hashed_password != "pass"
    assert client.app.state.token_signer.verify(body["token"]) == user.id


def test_signup_twice_with_same_username(client):
    client.post("/signup", json={"username": "alice", "password": "pass"})
    r = client.post("/signup", json={"username": "alice", "password": "other"})
    assert r.status_code == 400
    assert r.json() == {"error": "Cet identifiant est déjà associé à un compte"}

    users_dir = client.app.state.settings.data_dir / "users"
    assert len(list(users_dir.glob("*.json"))) == 1


@pytest.mark.parametrize("path", ["/signup", "/signin"])
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"username": "alice"}, messages.PASSWORD_TOO_SHORT),
        ({"username": "alice", "password": "abc"}, messages.PASSWORD_TOO_SHORT),
        ({"username": "alice", "password": 12345}, messages.PASSWORD_TOO_SHORT),
        ({"password": "pass"}, messages.USERNAME_LENGTH),
        ({"username": "a", "password": "pass"}, messages.USERNAME_LENGTH),
        ({"username": "a" * 21, "password": "pass"}, messages.USERNAME_LENGTH),
        ({"username": "Alice", "password": "pass"}, messages.USERNAME_CHARSET),
        ({"username": "élodie", "password": "pass"}, messages.USERNAME_CHARSET),
        ({"username": "bob42", "password": "pass"}, messages.USERNAME_CHARSET),
        ({"username": "bob\n", "password": "pass"}, messages.USERNAME_CHARSET),
    ],
)
def test_credentials_validation(client, path, payload, message):
    r = client.post(path, json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": message}


def test_password_is_checked_before_username(client):
    r = client.post("/signup", json={"username": "X", "password": "ab"})
    assert r.status_code == 400
    assert r.json()["error"] == messages.PASSWORD_TOO_SHORT


def test_signup_without_body(client):
    r = client.post("/signup")
    assert r.status_code == 400
    assert r.json()["error"] == messages.PASSWORD_TOO_SHORT


def test_username_length_bounds_are_inclusive(client):
    assert client.post("/signup", json={"username": "ab", "password": "pass"}).status_code == 200
    assert client.post("/signup", json={"username": "a" * 20, "password": "pass"}).status_code == 200


def test_signup_hash_failure_is_500(client, monkeypatch):
    def boom(plain):
        raise RuntimeError("hash backend down")

    monkeypatch.setattr(client.app.state.password_hasher, "hash", boom)
    r = client.post("/signup", json={"username": "alice", "password": "pass"})
    assert r.status_code == 500
    assert r.json() == {"error": "hash backend down"}
    assert client.app.state.stores.users.find_by_username("alice") is None


def test_signin_returns_token_for_same_user(client, signup):
    signup_token = signup("alice")
    r = client.post("/signin", json={"username": "alice", "password": "pass"})
    assert r.status_code == 200
    assert r.json()["error"] is None

    signer = client.app.state.token_signer
    assert signer.verify(r.json()["token"]) == signer.verify(signup_token)


def test_signin_failures_share_one_message(client, signup):
    signup("alice")
    wrong_password = client.post("/signin", json={"username": "alice", "password": "nope"})
    unknown_user = client.post("/signin", json={"username": "bob", "password": "pass"})

    assert wrong_password.status_code == 403
    assert unknown_user.status_code == 403
    assert wrong_password.json() == unknown_user.json() == {"error": "Cet identifiant est inconnu"}


def test_signup_losing_a_race_is_a_duplicate(client, signup, monkeypatch):
    signup("alice")
    users = client.app.state.stores.users
    # the lookup misses, as when the other signup lands between lookup and insert
    monkeypatch.setattr(users, "find_by_username", lambda username: None)

    r = client.post("/signup", json={"username": "alice", "password": "other"})
    assert r.status_code == 400
    assert r.json() == {"error": messages.USERNAME_TAKEN}

    users_dir = client.app.state.settings.data_dir / "users"
    assert len(list(users_dir.glob("*.json"))) == 1


def test_signup_over_unreadable_reservation_is_a_duplicate(client, settings):
    names_dir = settings.data_dir / "usernames"
    names_dir.mkdir(parents=True, exist_ok=True)
    (names_dir / "alice.json").write_text("", encoding="utf-8")

    r = client.post("/signup", json={"username": "alice", "password": "pass"})
    assert r.status_code == 400
    assert r.json() == {"error": messages.USERNAME_TAKEN}


@pytest.mark.parametrize("path", ["/signup", "/signin"])
@pytest.mark.parametrize("payload", [[], "alice", 42, None])
def test_non_object_body_reads_as_empty_credentials(client, path, payload):
    r = client.post(path, json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": messages.PASSWORD_TOO_SHORT}
