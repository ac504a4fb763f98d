"""End-to-end API tests: cookie authentication, error bodies and car workflows."""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.config import settings
from app.core.middleware import JWTAuthenticationMiddleware, is_public_path
from app.core.security import create_access_token
from app.db.session import get_db
from app.main import app as fastapi_app
from app.models import Car, InsurancePolicy
from app.repositories import cars as car_repository
from app.repositories import owners as owner_repository
from app.repositories import users as user_repository
from app.services import car_service
from tests.conftest import TEST_EMAIL, TEST_PASSWORD, TEST_USERNAME

ERROR_KEYS = {"status", "error", "message", "timestamp"}


def create_owner(client, email="ana.pop@example.com"):
    response = client.post("/api/owners/", json={"name": "Ana Pop", "email": email})
    assert response.status_code == 201, response.text
    return response.json()


def create_car(client, owner_id, vin="VIN123456789"):
    response = client.post("/api/cars/", json={
        "vin": vin,
        "make": "Dacia",
        "model": "Logan",
        "year_of_manufacture": 2018,
        "owner_id": owner_id,
    })
    assert response.status_code == 201, response.text
    return response.json()


def create_policy(client, car_id, start="2024-01-01", end="2024-12-31", provider="GEICO"):
    response = client.post("/api/policies/", json={
        "car_id": car_id,
        "provider": provider,
        "start_date": start,
        "end_date": end,
    })
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthentication:
    def test_protected_route_without_cookie(self, client) -> None:
        response = client.get("/api/cars/")

        assert response.status_code == 401
        body = response.json()
        assert set(body) == ERROR_KEYS
        assert body["status"] == 401
        assert body["error"] == "Authentication Error"

    def test_register_then_duplicate(self, client) -> None:
        payload = {"username": "bob", "password": "bob-password", "email": "bob@example.com"}

        created = client.post("/api/auth/register", json=payload)
        duplicate = client.post("/api/auth/register", json=payload)

        assert created.status_code == 201
        assert created.json()["username"] == "bob"
        assert duplicate.status_code == 409
        assert duplicate.json()["error"] == "User Already Exists"

    def test_register_validates_input(self, client) -> None:
        response = client.post("/api/auth/register", json={
            "username": "ab", "password": "123", "email": "not-an-email",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"

    def test_login_sets_http_only_cookie(self, client, user) -> None:
        response = client.post("/api/auth/login", json={"username": TEST_USERNAME, "password": TEST_PASSWORD})

        assert response.status_code == 200
        assert response.json()["role"] == "USER"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{settings.JWT_COOKIE_NAME}=")
        assert "HttpOnly" in cookie
        assert "Path=/" in cookie
        assert "Max-Age=86400" in cookie

    def test_bad_credentials_are_indistinguishable(self, client, user) -> None:
        wrong_password = client.post("/api/auth/login", json={"username": TEST_USERNAME, "password": "nope-nope"})
        unknown_user = client.post("/api/auth/login", json={"username": "ghost", "password": TEST_PASSWORD})

        assert wrong_password.status_code == unknown_user.status_code == 401
        first, second = wrong_password.json(), unknown_user.json()
        assert (first["error"], first["message"]) == (second["error"], second["message"])
        assert first["message"] == "Invalid username or password"
        assert "set-cookie" not in wrong_password.headers

    def test_verify_and_logout(self, auth_client) -> None:
        verified = auth_client.get("/api/auth/verify").json()
        assert verified["authenticated"] is True
        assert verified["username"] == TEST_USERNAME

        logout = auth_client.post("/api/auth/logout")
        assert logout.status_code == 200
        assert "Max-Age=0" in logout.headers["set-cookie"]

        assert auth_client.get("/api/auth/verify").json() == {
            "authenticated": False, "user_id": None, "username": None, "role": None,
        }
        assert auth_client.get("/api/cars/").status_code == 401

    def test_garbage_cookie_is_anonymous(self, client) -> None:
        client.cookies.set(settings.JWT_COOKIE_NAME, "definitely.not.ajwt")

        assert client.get("/api/auth/verify").json()["authenticated"] is False
        assert client.get("/api/cars/").status_code == 401

    def test_expired_cookie_is_anonymous(self, client, user) -> None:
        token = create_access_token(user, expires_delta=timedelta(seconds=-5))
        client.cookies.set(settings.JWT_COOKIE_NAME, token)

        assert client.get("/api/cars/").status_code == 401

    def test_token_for_unknown_account_is_anonymous(self, client, user) -> None:
        token = create_access_token(SimpleNamespace(username="ghost", role="USER"))
        client.cookies.set(settings.JWT_COOKIE_NAME, token)

        assert client.get("/api/auth/verify").json()["authenticated"] is False

    def test_lookup_failure_degrades_to_anonymous(self, auth_client, monkeypatch) -> None:
        def broken_lookup(self, username):
            raise RuntimeError("identity store unavailable")

        monkeypatch.setattr(JWTAuthenticationMiddleware, "_load_user", broken_lookup)

        response = auth_client.get("/api/auth/verify")
        assert response.status_code == 200
        assert response.json()["authenticated"] is False

    @pytest.mark.parametrize("path,public", [
        ("/api/auth/login", True),
        ("/api/auth/register", True),
        ("/api/openapi.json", True),
        ("/docs", True),
        ("/docs/oauth2-redirect", True),
        ("/api/auth/verify", False),
        ("/api/cars/", False),
        ("/api/auth/login/extra", False),
    ])
    def test_bypass_allow_list(self, path, public) -> None:
        assert is_public_path(path) is public

    def test_public_endpoints_need_no_cookie(self, client) -> None:
        assert client.get("/api/health/").json()["status"] == "healthy"
        assert client.get("/api/openapi.json").status_code == 200


class TestCars:
    def test_insurance_validity_scenario(self, auth_client) -> None:
        owner = create_owner(auth_client)
        car = create_car(auth_client, owner["id"])
        create_policy(auth_client, car["id"])

        inside = auth_client.get(f"/api/cars/{car['id']}/insurance-valid", params={"date": "2024-06-01"})
        outside = auth_client.get(f"/api/cars/{car['id']}/insurance-valid", params={"date": "2025-06-01"})

        assert inside.json() == {"car_id": car["id"], "date": "2024-06-01", "valid": True}
        assert outside.json()["valid"] is False

    def test_insurance_validity_errors(self, auth_client) -> None:
        owner = create_owner(auth_client)
        car = create_car(auth_client, owner["id"])

        bad_format = auth_client.get(f"/api/cars/{car['id']}/insurance-valid", params={"date": "06/01/2024"})
        out_of_range = auth_client.get(f"/api/cars/{car['id']}/insurance-valid", params={"date": "1850-01-01"})
        missing_car = auth_client.get("/api/cars/9999/insurance-valid", params={"date": "2024-06-01"})

        assert bad_format.status_code == 400
        assert bad_format.json()["error"] == "Validation Error"
        assert out_of_range.status_code == 400
        assert "between 1900-01-01 and 2100-12-31" in out_of_range.json()["message"]
        assert missing_car.status_code == 404
        assert missing_car.json()["error"] == "Resource Not Found"

    def test_duplicate_vin_conflicts(self, auth_client) -> None:
        owner = create_owner(auth_client)
        create_car(auth_client, owner["id"])

        response = auth_client.post("/api/cars/", json={
            "vin": "VIN123456789", "make": "VW", "model": "Golf",
            "year_of_manufacture": 2020, "owner_id": owner["id"],
        })

        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"

    def test_vin_length_is_validated(self, auth_client) -> None:
        owner = create_owner(auth_client)

        response = auth_client.post("/api/cars/", json={
            "vin": "V1", "make": "VW", "model": "Golf",
            "year_of_manufacture": 2020, "owner_id": owner["id"],
        })

        assert response.status_code == 400
        assert "vin" in response.json()["message"]

    def test_history_endpoint(self, auth_client) -> None:
        owner = create_owner(auth_client)
        car = create_car(auth_client, owner["id"])
        create_policy(auth_client, car["id"])
        claim = auth_client.post(f"/api/cars/{car['id']}/claims", json={
            "claim_date": "2024-03-15", "description": "Rear bumper damage", "amount": 1500,
        })
        assert claim.status_code == 201
        assert claim.headers["location"] == f"/api/cars/{car['id']}/claims/{claim.json()['id']}"

        history = auth_client.get(f"/api/cars/{car['id']}/history").json()

        assert history["vin"] == "VIN123456789"
        assert [event["type"] for event in history["events"]] == ["INSURANCE_POLICY", "CLAIM", "INSURANCE_POLICY"]
        assert history["events"][1]["description"] == "Claim filed: Rear bumper damage (Amount: $1500.00)"

    def test_claims_require_positive_amount(self, auth_client) -> None:
        owner = create_owner(auth_client)
        car = create_car(auth_client, owner["id"])

        response = auth_client.post(f"/api/cars/{car['id']}/claims", json={
            "claim_date": "2024-03-15", "description": "Scratch", "amount": 0,
        })

        assert response.status_code == 400

    def test_update_car_drops_policies(self, auth_client) -> None:
        owner = create_owner(auth_client)
        car = create_car(auth_client, owner["id"])
        create_policy(auth_client, car["id"])

        response = auth_client.put(f"/api/cars/{car['id']}", json={"make": "Renault"})

        assert response.status_code == 200
        assert response.json()["make"] == "Renault"
        assert response.json()["model"] == "Logan"
        assert auth_client.get(f"/api/policies/car/{car['id']}").json() == []

    def test_delete_car_and_owner_rules(self, auth_client, db) -> None:
        owner = create_owner(auth_client)
        car = create_car(auth_client, owner["id"])
        create_policy(auth_client, car["id"])
        auth_client.post(f"/api/cars/{car['id']}/claims", json={
            "claim_date": "2024-03-15", "description": "Scratch", "amount": "80.25",
        })

        blocked = auth_client.delete(f"/api/owners/{owner['id']}")
        assert blocked.status_code == 400
        assert "1 car(s)" in blocked.json()["message"]
        assert auth_client.get(f"/api/owners/{owner['id']}/cars").json()[0]["id"] == car["id"]

        assert auth_client.delete(f"/api/cars/{car['id']}").status_code == 204
        assert auth_client.get(f"/api/cars/{car['id']}").status_code == 404

        db.expire_all()
        assert db.query(InsurancePolicy).filter(InsurancePolicy.car_id == car["id"]).count() == 0
        assert db.query(Car).count() == 0

        assert auth_client.delete(f"/api/owners/{owner['id']}").status_code == 204


class TestOwnersAndPolicies:
    def test_owner_email_conflict_on_update(self, auth_client) -> None:
        create_owner(auth_client, email="first@example.com")
        second = create_owner(auth_client, email="second@example.com")

        response = auth_client.put(f"/api/owners/{second['id']}", json={"email": "first@example.com"})

        assert response.status_code == 409

    def test_policy_requires_end_date(self, auth_client) -> None:
        owner = create_owner(auth_client)
        car = create_car(auth_client, owner["id"])

        response = auth_client.post("/api/policies/", json={
            "car_id": car["id"], "provider": "GEICO", "start_date": "2024-01-01",
        })

        assert response.status_code == 400
        assert "end_date" in response.json()["message"]

    def test_fix_open_ended_endpoint(self, auth_client, db, car) -> None:
        db.add(InsurancePolicy(car_id=car.id, provider="Legacy", start_date=date(2024, 1, 1), end_date=None))
        db.commit()

        response = auth_client.post("/api/policies/fix-open-ended")

        assert response.status_code == 200
        policies = auth_client.get(f"/api/policies/car/{car.id}").json()
        assert policies[0]["end_date"] is not None


class TestConcurrentUniqueWrites:
    """A row stored between the uniqueness lookup and the insert still maps to 409."""

    def test_car_vin_taken_after_lookup(self, auth_client, monkeypatch) -> None:
        owner = create_owner(auth_client)
        create_car(auth_client, owner["id"])
        monkeypatch.setattr(car_repository, "get_by_vin", lambda db, vin: None)

        response = auth_client.post("/api/cars/", json={
            "vin": "VIN123456789", "make": "VW", "model": "Golf",
            "year_of_manufacture": 2020, "owner_id": owner["id"],
        })

        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"
        assert response.json()["message"] == "Car with VIN VIN123456789 already exists"

    def test_car_update_rolls_back_on_vin_collision(self, auth_client, monkeypatch) -> None:
        owner = create_owner(auth_client)
        create_car(auth_client, owner["id"])
        second = create_car(auth_client, owner["id"], vin="VIN987654321")
        create_policy(auth_client, second["id"])
        monkeypatch.setattr(car_repository, "get_by_vin", lambda db, vin: None)

        response = auth_client.put(f"/api/cars/{second['id']}", json={"vin": "VIN123456789"})

        assert response.status_code == 409
        assert auth_client.get(f"/api/cars/{second['id']}").json()["vin"] == "VIN987654321"
        assert len(auth_client.get(f"/api/policies/car/{second['id']}").json()) == 1

    def test_owner_email_taken_after_lookup(self, auth_client, monkeypatch) -> None:
        create_owner(auth_client, email="first@example.com")
        monkeypatch.setattr(owner_repository, "exists_by_email", lambda db, email: False)

        response = auth_client.post("/api/owners/", json={"name": "Ion Pop", "email": "first@example.com"})

        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"

    def test_owner_update_email_taken_after_lookup(self, auth_client, monkeypatch) -> None:
        create_owner(auth_client, email="first@example.com")
        second = create_owner(auth_client, email="second@example.com")
        monkeypatch.setattr(owner_repository, "get_by_email", lambda db, email: None)

        response = auth_client.put(f"/api/owners/{second['id']}", json={"email": "first@example.com"})

        assert response.status_code == 409
        assert auth_client.get(f"/api/owners/{second['id']}").json()["email"] == "second@example.com"

    def test_username_taken_after_lookup(self, client, user, monkeypatch) -> None:
        monkeypatch.setattr(user_repository, "exists_by_username", lambda db, username: False)

        response = client.post("/api/auth/register", json={
            "username": TEST_USERNAME, "password": "another-pass", "email": "other@example.com",
        })

        assert response.status_code == 409
        assert response.json()["error"] == "User Already Exists"
        assert response.json()["message"] == f"Username already exists: {TEST_USERNAME}"

    def test_user_email_taken_after_lookup(self, client, user, monkeypatch) -> None:
        monkeypatch.setattr(user_repository, "exists_by_email", lambda db, email: False)

        response = client.post("/api/auth/register", json={
            "username": "bob", "password": "bob-password", "email": TEST_EMAIL,
        })

        assert response.status_code == 409
        assert response.json()["message"] == f"Email already exists: {TEST_EMAIL}"


class TestUnexpectedErrors:
    def test_internal_error_text_is_not_returned(self, auth_client, monkeypatch) -> None:
        def failing_list_cars(db):
            raise RuntimeError("connection to db-internal:5432 refused for user carins")

        monkeypatch.setattr(car_service, "list_cars", failing_list_cars)
        client = TestClient(fastapi_app, raise_server_exceptions=False, cookies=auth_client.cookies)

        response = client.get("/api/cars/")

        assert response.status_code == 500
        body = response.json()
        assert set(body) == ERROR_KEYS
        assert body["error"] == "Internal Server Error"
        assert body["message"] == "An unexpected error occurred"
        assert "db-internal" not in response.text

    def test_health_reports_unreachable_database(self, client) -> None:
        class UnreachableSession:
            def execute(self, statement):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        fastapi_app.dependency_overrides[get_db] = UnreachableSession
        try:
            response = client.get("/api/health/")
        finally:
            fastapi_app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json() == {"status": "unhealthy", "api": "online", "database": "offline"}
        assert "connection refused" not in response.text
