"""Tests for the admin service routes."""


class TestListBonusClaims:
    def test_lists_claims_made_through_user_service(self, user_client, admin_client):
        for user, bonus in (("7", "X"), ("7", "Y"), ("8", "X")):
            user_client.post("/add-bonus-claim", json={"userId": user, "bonusId": bonus})

        response = admin_client.get("/list-bonus-claims")

        assert response.status_code == 200
        assert {(c["PK"], c["SK"]) for c in response.json()} == {
            ("USER#7", "BONUS#X"),
            ("USER#7", "BONUS#Y"),
            ("USER#8", "BONUS#X"),
        }

    def test_filter_by_user(self, repository, admin_client):
        repository.add("7", "X")
        repository.add("8", "X")

        response = admin_client.get("/list-bonus-claims", params={"userId": "8"})

        assert [c["PK"] for c in response.json()] == ["USER#8"]

    def test_empty_table(self, admin_client):
        response = admin_client.get("/list-bonus-claims")

        assert response.status_code == 200
        assert response.json() == []

    def test_store_failure_returns_500(self, admin_client, table):
        table.fail_with = "AccessDeniedException"

        response = admin_client.get("/list-bonus-claims")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to list bonus claims"


class TestAdminReads:
    def test_get_bonus_claim(self, repository, admin_client):
        repository.add("7", "X")

        response = admin_client.get("/get-bonus-claim", params={"userId": "7", "bonusId": "X"})

        assert response.status_code == 200
        assert response.json()["status"] == "CLAIMED"

    def test_admin_service_cannot_add_claims(self, admin_client):
        response = admin_client.post("/add-bonus-claim", json={"userId": "7", "bonusId": "X"})

        assert response.status_code in (404, 405)

    def test_health(self, admin_client):
        assert admin_client.get("/").text == "OK"
