from passlib.hash import bcrypt

from app.services import users as user_service
from conftest import basic_auth, load_user, register, update_user


def test_register_defaults(client):
    r = register(client)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["status"] is True
    assert body["message"] == "User registered successfully"
    user = body["data"]["user"]
    assert "password" not in user
    assert "password_hash" not in user
    assert user["email"] == "a@b.com"
    assert user["subscription"] == "Basic"
    assert user["plan"] == 0
    assert user["company_id"] is None
    assert user["lang"] == "en"
    assert user["avatar"] == ""
    assert user["messenger_color"] == "#2180f3"
    assert user["is_active"] is True
    assert user["is_login_enable"] is True
    assert user["is_disable"] is True
    assert user["dark_mode"] is False
    assert user["created_by"] == 0
    assert user["last_login"] is None


def test_register_stores_hash_not_plaintext(client, registered):
    stored = load_user("a@b.com")
    assert stored.password_hash != "secret1"
    assert stored.password_hash.startswith("$argon2")


def test_register_ignores_subscription_and_keeps_optional_fields(client):
    r = register(client, subscription="Enterprise", plan=3, lang="id", avatar="a.png")
    assert r.status_code == 201, r.text
    user = r.json()["data"]["user"]
    assert user["subscription"] == "Basic"
    assert user["plan"] == 0
    assert user["lang"] == "id"
    assert user["avatar"] == "a.png"


def test_register_duplicate_email(client, registered):
    r = register(client, first_name="Other", last_name="Person", password="another1", type="admin")
    assert r.status_code == 400
    assert r.json() == {"status": False, "message": "Email already registered"}


def test_register_duplicate_email_is_case_insensitive(client, registered):
    r = register(client, email="A@B.com")
    assert r.status_code == 400
    assert r.json()["message"] == "Email already registered"


def test_register_company_gets_distinct_company_ids(client):
    r1 = register(client, email="c1@acme.io", type="company")
    r2 = register(client, email="c2@acme.io", type="company")
    assert r1.status_code == 201 and r2.status_code == 201
    id1 = r1.json()["data"]["user"]["company_id"]
    id2 = r2.json()["data"]["user"]["company_id"]
    assert id1.startswith("CMP-") and id2.startswith("CMP-")
    assert id1 != id2


def test_register_validation_errors(client):
    r = client.post("/api/register", json={"email": "nope", "password": "123", "type": "boss"})
    assert r.status_code == 400
    body = r.json()
    assert body["status"] is False
    assert body["message"] == "Validation errors"
    by_field = {e["field"]: e["message"] for e in body["errors"]}
    assert by_field == {
        "first_name": "First name is required",
        "last_name": "Last name is required",
        "email": "Valid email is required",
        "password": "Password must be at least 6 characters",
        "type": "Type must be company, employee, or admin",
    }
    assert "data" not in body


def test_register_without_body(client):
    r = client.post("/api/register")
    assert r.status_code == 400
    assert r.json()["status"] is False


def test_register_then_login(client, registered):
    r = client.post("/api/login", json={"email": "a@b.com", "password": "secret1"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Login successful"
    user = body["data"]["user"]
    assert "password" not in user
    assert user["id"] == registered["id"]
    assert user["last_login"] is not None


def test_login_email_case_insensitive(client, registered):
    r = client.post("/api/login", json={"email": "A@B.COM", "password": "secret1"})
    assert r.status_code == 200


def test_login_wrong_password_and_unknown_email_look_the_same(client, registered):
    wrong = client.post("/api/login", json={"email": "a@b.com", "password": "nope123"})
    unknown = client.post("/api/login", json={"email": "ghost@b.com", "password": "secret1"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"status": False, "message": "Invalid email or password"}


def test_login_inactive_account(client, registered):
    update_user("a@b.com", is_active=False)
    r = client.post("/api/login", json={"email": "a@b.com", "password": "secret1"})
    assert r.status_code == 403
    assert r.json()["message"] == "Account is not active"


def test_login_disabled_account(client, registered):
    update_user("a@b.com", is_login_enable=False)
    r = client.post("/api/login", json={"email": "a@b.com", "password": "secret1"})
    assert r.status_code == 403
    assert r.json()["message"] == "Login is disabled for this account"


def test_login_validation(client):
    r = client.post("/api/login", json={"email": "not-an-email", "password": ""})
    assert r.status_code == 400
    by_field = {e["field"]: e["message"] for e in r.json()["errors"]}
    assert by_field == {"email": "Valid email is required", "password": "Password is required"}


def test_logout(client, registered):
    r = client.post("/api/logout", headers=basic_auth("a@b.com", "secret1"))
    assert r.status_code == 200
    assert r.json() == {"status": True, "message": "Logged out successfully"}


def test_logout_requires_auth(client, registered):
    r = client.post("/api/logout")
    assert r.status_code == 401
    assert r.json()["status"] is False


def test_register_rejects_values_longer_than_columns(client):
    r = register(client, lang="x" * 40, avatar="y" * 600)
    assert r.status_code == 400
    assert {e["field"] for e in r.json()["errors"]} == {"lang", "avatar"}
    r = register(client, first_name="F" * 256)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "first_name"


def test_register_race_on_email_returns_400(client, registered, monkeypatch):
    # The pre-check misses the existing row, so the unique constraint has to catch it
    monkeypatch.setattr(user_service, "get_user_by_email", lambda db, email: None)
    r = register(client, first_name="Late")
    assert r.status_code == 400
    assert r.json() == {"status": False, "message": "Email already registered"}


def test_register_retries_company_id_collision(client, monkeypatch):
    ids = iter(["CMP-1", "CMP-1", "CMP-2"])
    monkeypatch.setattr(user_service, "generate_company_id", lambda: next(ids))
    r1 = register(client, email="c1@acme.io", type="company")
    r2 = register(client, email="c2@acme.io", type="company")
    assert r1.status_code == 201, r1.text
    assert r2.status_code == 201, r2.text
    assert r1.json()["data"]["user"]["company_id"] == "CMP-1"
    assert r2.json()["data"]["user"]["company_id"] == "CMP-2"


def test_register_gives_up_after_repeated_company_id_collisions(client, monkeypatch):
    monkeypatch.setattr(user_service, "generate_company_id", lambda: "CMP-1")
    assert register(client, email="c1@acme.io", type="company").status_code == 201
    r = register(client, email="c2@acme.io", type="company")
    assert r.status_code == 500
    assert r.json()["message"] == "Internal server error"


def test_login_upgrades_legacy_bcrypt_hash(client, registered):
    legacy = bcrypt.using(rounds=10, ident="2a").hash("secret1")
    assert legacy.startswith("$2a$10$")
    update_user("a@b.com", password_hash=legacy)

    r = client.post("/api/login", json={"email": "a@b.com", "password": "secret1"})
    assert r.status_code == 200, r.text
    assert load_user("a@b.com").password_hash.startswith("$argon2")
    assert client.get("/api/profile", headers=basic_auth("a@b.com", "secret1")).status_code == 200


def test_login_with_wrong_password_keeps_legacy_hash(client, registered):
    legacy = bcrypt.using(rounds=10, ident="2a").hash("secret1")
    update_user("a@b.com", password_hash=legacy)
    r = client.post("/api/login", json={"email": "a@b.com", "password": "wrong99"})
    assert r.status_code == 401
    assert load_user("a@b.com").password_hash == legacy
