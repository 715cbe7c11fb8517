"""
Reports API, error envelope and setup CLI commands.
"""
import pytest
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError

from api import create_app
from api.errors import classify_integrity_error
from models import storage
from models.country import Country
from models.roles import ADMIN, STAFF, READONLY


@pytest.fixture
def app(db):
    app = create_app("testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ids(bookstore):
    """Plain ids; the request teardown detaches ORM objects."""
    return {
        "publisher": bookstore["publisher"].publisher_id,
        "author": bookstore["author"].author_id,
        "jane": bookstore["jane"].customer_id,
        "order": bookstore["order"].order_id,
    }


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.get_json()["database"] == "ok"

    def test_root(self, client):
        assert client.get("/").status_code == 200


class TestReports:
    """GET /api/v1/reports/..."""

    def test_books_by_publisher(self, client, ids):
        resp = client.get(f"/api/v1/reports/publishers/{ids['publisher']}/books")
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data == [
            {
                "book_id": data[0]["book_id"],
                "title": "Book X",
                "isbn13": "9780451524935",
                "price": "9.99",
                "publisher_name": "Penguin Random House",
            }
        ]

    def test_books_by_author(self, client, ids):
        data = client.get(f"/api/v1/reports/authors/{ids['author']}/books").get_json()["data"]
        assert [d["author_name"] for d in data] == ["George Orwell"]

    def test_current_addresses(self, client, ids):
        resp = client.get("/api/v1/reports/customers/addresses")
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["meta"]["status"] == "Current"
        assert [(d["email"], d["city"]) for d in body["data"]] == [("jane@x.com", "Springfield")]

    def test_addresses_by_status_and_customer(self, client, ids):
        resp = client.get(f"/api/v1/reports/customers/addresses?status=Billing&customer_id={ids['jane']}")
        assert resp.status_code == 200
        assert resp.get_json()["data"] == []

    def test_unknown_address_status(self, client, ids):
        resp = client.get("/api/v1/reports/customers/addresses?status=Holiday")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "BAD_REQUEST"

    def test_bad_customer_id(self, client, ids):
        resp = client.get("/api/v1/reports/customers/addresses?customer_id=jane")
        assert resp.status_code == 400

    def test_customer_orders(self, client, ids):
        data = client.get(f"/api/v1/reports/customers/{ids['jane']}/orders").get_json()["data"]
        assert [(d["order_id"], d["shipping_method"]) for d in data] == [(ids["order"], "Standard")]

    def test_order_lines(self, client, ids):
        data = client.get(f"/api/v1/reports/orders/{ids['order']}/lines").get_json()["data"]
        assert [(d["title"], d["quantity"], d["price_at_order_time"]) for d in data] == [("Book X", 2, "9.99")]

    def test_order_status(self, client, ids):
        data = client.get(f"/api/v1/reports/orders/{ids['order']}/status").get_json()["data"]
        assert data["status_value"] == "Pending"

    def test_language_counts(self, client, ids):
        data = client.get("/api/v1/reports/languages/book-counts").get_json()["data"]
        assert data == [{"language_name": "English", "number_of_books": 2}]

    @pytest.mark.parametrize("path", [
        "/api/v1/reports/publishers/999/books",
        "/api/v1/reports/authors/999/books",
        "/api/v1/reports/customers/999/orders",
        "/api/v1/reports/orders/999/lines",
        "/api/v1/reports/orders/999/status",
    ])
    def test_not_found(self, client, ids, path):
        resp = client.get(path)
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "NOT_FOUND", "message": "Resource not found", "status": 404}


class TestErrorEnvelope:
    """Constraint violations and failures map to the error envelope"""

    def _error(self, message):
        return IntegrityError("INSERT ...", {}, Exception(message))

    def test_unique(self):
        assert classify_integrity_error(self._error("UNIQUE constraint failed: book.isbn13"))[2] == 409
        assert classify_integrity_error(self._error("Duplicate entry 'x' for key 'uq_customer_email'"))[2] == 409

    def test_foreign_key(self):
        code, message, status = classify_integrity_error(self._error("FOREIGN KEY constraint failed"))
        assert (code, status) == ("BAD_REQUEST", 400)
        assert "Foreign key" in message

    def test_not_null(self):
        _, message, status = classify_integrity_error(self._error("NOT NULL constraint failed: book.title"))
        assert (message, status) == ("Required column missing.", 400)

    def test_handler_returns_envelope(self, app, client, db, seeded):
        @app.get("/boom")
        def boom():
            storage.new(Country(country_name="Kenya"))
            storage.save()

        resp = client.get("/boom")
        assert resp.status_code == 409
        body = resp.get_json()
        assert body["error"] == "CONFLICT"
        assert "db_error" in body["details"]

    def test_database_down_is_503(self, app, client):
        @app.get("/down")
        def down():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        resp = client.get("/down")
        assert resp.status_code == 503
        assert resp.get_json()["error"] == "SERVICE_UNAVAILABLE"

    def test_validation_error_is_422(self, app, client):
        @app.get("/invalid")
        def invalid():
            raise ValidationError({"cost": ["Must be non-negative."]})

        resp = client.get("/invalid")
        assert resp.status_code == 422
        assert resp.get_json()["details"] == {"cost": ["Must be non-negative."]}

    def test_method_not_allowed(self, client):
        resp = client.post("/api/v1/health")
        assert resp.status_code == 405
        assert resp.get_json()["error"] == "METHOD_NOT_ALLOWED"


class TestCli:
    """flask init-db / seed-db / grant-roles / setup-db"""

    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=["init-db"])
        assert result.exit_code == 0
        assert "Schema ready (15 tables)." in result.output

    def test_seed_db_twice(self, app):
        runner = app.test_cli_runner()
        runner.invoke(args=["seed-db"])
        result = runner.invoke(args=["seed-db"])
        assert result.exit_code == 0
        assert "order_status: 6 rows" in result.output
        assert storage.count(Country) == 4

    def test_grant_roles_skipped_on_sqlite(self, app):
        app.config["ROLE_PASSWORDS"] = {ADMIN: "a", STAFF: "s", READONLY: "r"}
        result = app.test_cli_runner().invoke(args=["grant-roles"])
        assert result.exit_code == 0
        assert "roles skipped" in result.output

    def test_setup_db(self, app):
        result = app.test_cli_runner().invoke(args=["setup-db", "--skip-roles"])
        assert result.exit_code == 0
        assert "Seeded 20 lookup rows across 5 tables." in result.output
