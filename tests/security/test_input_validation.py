"""
Security tests for input validation.

Tests protection against:
- SQL injection
- XSS payloads stored as data
- Oversized or hostile values
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models import Recipe, Tag, User
from tests.factories import create_recipe, create_user, soup_payload

SQL_INJECTION_PAYLOADS = [
    "' OR '1'='1",
    "'; DROP TABLE users; --",
    "admin'--",
    "1' OR '1'='1' --",
    "' UNION SELECT * FROM users --",
]


@pytest.mark.security
class TestSQLInjection:
    """Tests for SQL injection prevention."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_login_sql_injection_email(self, client: TestClient, db: Session, payload):
        create_user(db, email="test@example.com", password="password123")

        response = client.post(
            "/auth/login", json={"email": payload, "password": "password123"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_login_sql_injection_password(self, client: TestClient, db: Session, payload):
        create_user(db, email="test@example.com", password="password123")

        response = client.post(
            "/auth/login", json={"email": "test@example.com", "password": payload}
        )

        assert response.status_code == 401

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_tag_filter_sql_injection(
        self, auth_client: TestClient, test_user: User, db: Session, payload
    ):
        create_recipe(db, test_user, tags=["soup"])

        response = auth_client.get("/recipes", params={"tag": payload})

        assert response.status_code == 200
        assert response.json() == []
        assert db.query(User).count() == 1

    def test_tag_name_stored_literally(self, auth_client: TestClient, db: Session):
        payload = "'; DROP TABLE tags; --"

        response = auth_client.post("/recipes", json=soup_payload(tags=[payload]))

        assert response.status_code == 201
        assert response.json()["tags"] == [payload.lower()]
        assert db.query(Tag).filter(Tag.name == payload.lower()).count() == 1

    def test_register_sql_injection(self, client: TestClient, db: Session):
        response = client.post(
            "/auth/register",
            json={"email": "x'); DELETE FROM users; --", "password": "pw123"},
        )

        assert response.status_code == 201
        assert db.query(User).count() == 1


@pytest.mark.security
class TestStoredContent:
    """Hostile strings are stored and returned as plain data."""

    def test_xss_in_title_returned_verbatim(self, auth_client: TestClient):
        title = "<script>alert('xss')</script>"

        response = auth_client.post("/recipes", json=soup_payload(title=title))

        assert response.status_code == 201
        assert response.json()["title"] == title
        assert response.headers["content-type"].startswith("application/json")

    def test_unicode_round_trip(self, auth_client: TestClient):
        created = auth_client.post(
            "/recipes",
            json=soup_payload(
                title="Crème brûlée 🍮",
                ingredients=[{"name": "Sucre", "amount": 50, "unit": "g", "notes": "très fin"}],
                tags=["Français"],
            ),
        ).json()

        fetched = auth_client.get(f"/recipes/{created['id']}").json()

        assert fetched["title"] == "Crème brûlée 🍮"
        assert fetched["ingredients"][0]["notes"] == "très fin"
        assert fetched["tags"] == ["français"]

    def test_non_numeric_amount_rejected(self, auth_client: TestClient, db: Session):
        response = auth_client.post(
            "/recipes",
            json=soup_payload(ingredients=[{"name": "Salt", "amount": "a pinch", "unit": "g"}]),
        )

        assert response.status_code == 400
        assert db.query(Recipe).count() == 0
