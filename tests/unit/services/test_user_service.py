"""Tests for the user service routes."""


class TestHealth:
    def test_root_returns_ok(self, user_client):
        response = user_client.get("/")

        assert response.status_code == 200
        assert response.text == "OK"

    def test_health(self, user_client):
        assert user_client.get("/health").json() == {"status": "healthy"}

    def test_correlation_id_is_echoed(self, user_client):
        response = user_client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


class TestAddBonusClaim:
    def test_claim_then_read_back(self, user_client):
        """A claimed bonus is readable with CLAIMED status and a timestamp."""
        response = user_client.post("/add-bonus-claim", json={"userId": "7", "bonusId": "X"})

        assert response.status_code == 201
        assert response.json()["PK"] == "USER#7"

        response = user_client.get("/get-bonus-claim", params={"userId": "7", "bonusId": "X"})

        assert response.status_code == 200
        body = response.json()
        assert body["PK"] == "USER#7"
        assert body["SK"] == "BONUS#X"
        assert body["status"] == "CLAIMED"
        assert body["timestamp"]

    def test_missing_fields_are_rejected(self, user_client, table):
        response = user_client.post("/add-bonus-claim", json={"userId": "7"})

        assert response.status_code == 422
        assert table.rows == {}

    def test_store_failure_returns_500(self, user_client, table):
        table.fail_with = "ResourceNotFoundException"

        response = user_client.post("/add-bonus-claim", json={"userId": "7", "bonusId": "X"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to insert claim"
        assert "correlation_id" in response.json()


class TestGetBonusClaim:
    def test_unknown_claim_returns_404(self, user_client):
        response = user_client.get("/get-bonus-claim", params={"userId": "1", "bonusId": "nope"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Bonus claim not found"

    def test_query_parameters_are_required(self, user_client):
        assert user_client.get("/get-bonus-claim", params={"userId": "1"}).status_code == 422

    def test_user_service_has_no_listing(self, user_client):
        assert user_client.get("/list-bonus-claims").status_code == 404
