import httpx
import pytest

from digihomes.core import brevo, db
from digihomes.newsletter import repository


class FakeSubscribers:
    """In-memory stand-in for the newsletter_subscribers table."""

    def __init__(self):
        self.rows = {}
        self.next_id = 1

    async def get_by_email(self, email):
        for row in self.rows.values():
            if row["email"] == email:
                return dict(row)
        return None

    async def delete_subscriber(self, subscriber_id):
        row = self.rows.pop(subscriber_id, None)
        return None if row is None else {"id": subscriber_id}

    async def insert_subscriber(self, *, email, name, verification_token):
        row = {
            "id": self.next_id,
            "email": email,
            "name": name,
            "verified": False,
            "verification_token": verification_token,
        }
        self.rows[self.next_id] = row
        self.next_id += 1
        return dict(row)

    async def mark_verified(self, subscriber_id):
        self.rows[subscriber_id]["verified"] = True

    async def verify_token(self, token):
        for row in self.rows.values():
            if row["verification_token"] == token:
                row.update(verified=True, verification_token=None)
                return dict(row)
        return None

    async def list_verified(self, subscriber_ids=None):
        rows = [r for r in self.rows.values() if r["verified"]]
        if subscriber_ids:
            rows = [r for r in rows if r["id"] in subscriber_ids]
        return [dict(r) for r in rows]


@pytest.fixture
def store(monkeypatch):
    fake = FakeSubscribers()
    for name in (
        "get_by_email",
        "delete_subscriber",
        "insert_subscriber",
        "mark_verified",
        "verify_token",
        "list_verified",
    ):
        monkeypatch.setattr(repository, name, getattr(fake, name))
    return fake


@pytest.fixture
def sent(monkeypatch):
    """Record outbound emails; addresses listed in `failing` raise."""
    outbox = {"messages": [], "failing": set()}

    async def fake_send(*, to_email, to_name, subject, html_content, timeout_s=15.0):
        if to_email in outbox["failing"]:
            raise brevo.BrevoError("rejected")
        outbox["messages"].append({"to": to_email, "name": to_name, "subject": subject, "html": html_content})

    monkeypatch.setattr(brevo, "send_email", fake_send)
    return outbox


def test_check_email_unknown_address(client, store):
    resp = client.get("/api/newsletter/check-email", params={"email": "nobody@example.com"})

    assert resp.status_code == 200
    assert resp.json() == {"exists": False}


def test_check_email_post_reports_verification(client, store):
    store.rows[1] = {"id": 1, "email": "a@b.co", "name": "A", "verified": True, "verification_token": None}

    resp = client.post("/api/newsletter/check-email", json={"email": "A@B.co"})

    assert resp.json() == {"exists": True, "verified": True}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"name": "Jane"}, "Email is required"),
        ({"email": "jane@example.com"}, "Name is required"),
        ({"email": "not-an-email", "name": "Jane"}, "Invalid email format"),
    ],
)
def test_subscribe_validation(client, store, payload, message):
    resp = client.post("/api/newsletter/subscribe", json=payload)

    assert resp.status_code == 400
    assert resp.json()["detail"] == message


def test_subscribe_auto_verifies_without_email_provider(client, store, sent, monkeypatch):
    monkeypatch.delenv("BREVO_API_KEY", raising=False)

    resp = client.post("/api/newsletter/subscribe", json={"email": "Jane@Example.com", "name": "Jane"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Successfully subscribed to newsletter"
    assert body["subscriber"]["verified"] is True
    assert body["subscriber"]["email"] == "jane@example.com"
    assert "verification_token" not in body["subscriber"]
    assert sent["messages"] == []
    assert store.rows[1]["verified"] is True


def test_subscribe_sends_verification_link(client, store, sent, monkeypatch):
    monkeypatch.setenv("BREVO_API_KEY", "key")
    monkeypatch.setenv("FRONTEND_URL", "https://digihomes.example/")

    resp = client.post("/api/newsletter/subscribe", json={"email": "jane@example.com", "name": "Jane"})

    assert resp.status_code == 201
    assert resp.json()["message"] == "Please check your email to verify your subscription"
    token = store.rows[1]["verification_token"]
    assert store.rows[1]["verified"] is False
    (message,) = sent["messages"]
    assert message["to"] == "jane@example.com"
    assert f"https://digihomes.example/verify-email?token={token}" in message["html"]


def test_failed_send_with_provider_configured_stays_unverified(client, store, sent, monkeypatch):
    monkeypatch.setenv("BREVO_API_KEY", "key")
    sent["failing"].add("jane@example.com")

    resp = client.post("/api/newsletter/subscribe", json={"email": "jane@example.com", "name": "Jane"})

    assert resp.status_code == 201
    assert store.rows[1]["verified"] is False


def test_resubscribing_unverified_address_replaces_row_and_token(client, store, sent, monkeypatch):
    monkeypatch.setenv("BREVO_API_KEY", "key")

    client.post("/api/newsletter/subscribe", json={"email": "jane@example.com", "name": "Jane"})
    old_token = store.rows[1]["verification_token"]
    client.post("/api/newsletter/subscribe", json={"email": "jane@example.com", "name": "Jane D"})

    rows = [r for r in store.rows.values() if r["email"] == "jane@example.com"]
    assert len(rows) == 1
    assert rows[0]["verification_token"] != old_token
    assert rows[0]["name"] == "Jane D"


def test_subscribing_verified_address_is_rejected(client, store, sent):
    store.rows[1] = {"id": 1, "email": "jane@example.com", "name": "Jane", "verified": True, "verification_token": None}

    resp = client.post("/api/newsletter/subscribe", json={"email": "jane@example.com", "name": "Jane"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already subscribed"


def test_verify_token(client, store):
    store.rows[1] = {"id": 1, "email": "a@b.co", "name": "A", "verified": False, "verification_token": "abc"}

    assert client.get("/api/newsletter/verify").status_code == 400
    assert client.get("/api/newsletter/verify", params={"token": "nope"}).status_code == 400

    resp = client.get("/api/newsletter/verify", params={"token": "abc"})
    assert resp.status_code == 200
    assert store.rows[1]["verified"] is True
    assert store.rows[1]["verification_token"] is None


def test_broadcast_requires_email_provider(admin_client, store, monkeypatch):
    monkeypatch.delenv("BREVO_API_KEY", raising=False)

    resp = admin_client.post("/api/newsletter/broadcast", json={"subject": "Hi", "htmlContent": "<p>x</p>"})

    assert resp.status_code == 400
    assert "BREVO_API_KEY" in resp.json()["detail"]


def test_broadcast_counts_successes_and_failures(admin_client, store, sent, monkeypatch):
    monkeypatch.setenv("BREVO_API_KEY", "key")
    for i, email in enumerate(["a@x.co", "b@x.co", "c@x.co"], start=1):
        store.rows[i] = {"id": i, "email": email, "name": None, "verified": True, "verification_token": None}
    store.rows[4] = {"id": 4, "email": "d@x.co", "name": "D", "verified": False, "verification_token": "t"}
    sent["failing"].add("b@x.co")

    resp = admin_client.post(
        "/api/newsletter/broadcast",
        json={"subject": "News", "htmlContent": "<p>New listings</p>"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["successCount"] == 2
    assert body["failCount"] == 1
    assert body["total"] == 3
    assert [m["to"] for m in sent["messages"]] == ["a@x.co", "c@x.co"]
    assert sent["messages"][0]["name"] == "Subscriber"
    assert "<p>New listings</p>" in sent["messages"][0]["html"]


def test_broadcast_to_selected_ids_without_verified_recipients(admin_client, store, sent, monkeypatch):
    monkeypatch.setenv("BREVO_API_KEY", "key")
    store.rows[1] = {"id": 1, "email": "a@x.co", "name": "A", "verified": False, "verification_token": "t"}

    resp = admin_client.post(
        "/api/newsletter/broadcast",
        json={"subject": "News", "htmlContent": "<p>x</p>", "subscriberIds": [1]},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "No verified subscribers to send to"


def test_subscriber_admin_routes_require_admin(client):
    assert client.get("/api/newsletter/subscribers").status_code == 401
    assert client.delete("/api/newsletter/subscribers/1").status_code == 401


async def test_brevo_client_posts_message(monkeypatch):
    monkeypatch.setenv("BREVO_API_KEY", "secret-key")
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["api_key"] = request.headers["api-key"]
        seen["body"] = request.read()
        return httpx.Response(201, json={"messageId": "m1"})

    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        brevo.httpx,
        "AsyncClient",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )

    await brevo.send_email(to_email="a@x.co", to_name="A", subject="S", html_content="<p>h</p>")

    assert seen["url"] == "https://api.brevo.com/v3/smtp/email"
    assert seen["api_key"] == "secret-key"
    assert b'"subject":"S"' in seen["body"].replace(b" ", b"")


async def test_brevo_client_raises_on_error_status(monkeypatch):
    monkeypatch.setenv("BREVO_API_KEY", "secret-key")
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        brevo.httpx,
        "AsyncClient",
        lambda **kwargs: real_client(
            transport=httpx.MockTransport(lambda request: httpx.Response(401, text="unauthorized")),
            **kwargs,
        ),
    )

    with pytest.raises(brevo.BrevoError, match="401"):
        await brevo.send_email(to_email="a@x.co", to_name="A", subject="S", html_content="x")


async def test_brevo_client_requires_api_key(monkeypatch):
    monkeypatch.delenv("BREVO_API_KEY", raising=False)

    with pytest.raises(brevo.BrevoError):
        await brevo.send_email(to_email="a@x.co", to_name="A", subject="S", html_content="x")


async def test_subscriber_queries_never_select_verification_token(monkeypatch):
    seen = []

    async def fetch(sql, *args):
        seen.append(sql)
        return None

    async def fetch_all(sql, *args):
        seen.append(sql)
        return []

    monkeypatch.setattr(db, "fetch_one", fetch)
    monkeypatch.setattr(db, "fetch_all", fetch_all)

    await repository.list_subscribers()
    await repository.verify_token("abc")

    list_sql, verify_sql = seen
    assert "verification_token" not in list_sql
    assert "*" not in list_sql
    assert "verification_token" not in verify_sql.split("RETURNING", 1)[1]
