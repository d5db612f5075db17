"""Tests for the /AstronautDuty endpoints plus /Rank, /Log, /health and API key auth."""
from datetime import date, timedelta

from acts.config import settings
from acts.models.log_entry import LogEntry


def _assign(client, name, rank, title, start):
    return client.post("/AstronautDuty", json={
        "name": name, "rank": rank, "dutyTitle": title, "dutyStartDate": start,
    })


class TestCreateAstronautDuty:

    def test_career_progression_over_http(self, api_client, add_person):
        add_person("John Doe")
        assert _assign(api_client, "John Doe", "1LT", "PILOT", "2020-01-01").status_code == 200
        resp = _assign(api_client, "John Doe", "CPT", "COMMANDER", "2021-01-01")
        assert resp.status_code == 200
        assert resp.json()["success"] is True

        data = api_client.get("/AstronautDuty/John Doe").json()["data"]
        assert data["person"]["currentRank"] == "CPT"
        assert data["person"]["currentDutyTitle"] == "COMMANDER"
        assert data["person"]["careerStartDate"] == "2020-01-01"
        newest, oldest = data["astronautDuties"]
        assert newest["dutyTitle"] == "COMMANDER"
        assert newest["dutyEndDate"] is None
        assert oldest["dutyEndDate"] == "2020-12-31"

    def test_retirement_over_http(self, api_client, add_person):
        add_person("Jane Doe")
        _assign(api_client, "Jane Doe", "MAJ", "PILOT", "2015-01-10")
        _assign(api_client, "Jane Doe", "LTC", "RETIRED", "2023-09-01T00:00:00.000Z")

        person = api_client.get("/Person/Jane Doe").json()["data"]
        assert person["currentDutyTitle"] == "RETIRED"
        assert person["careerEndDate"] == "2023-09-01"

        resp = _assign(api_client, "Jane Doe", "LTC", "CONSULTANT", "2024-01-01")
        assert resp.status_code == 400
        assert resp.json()["message"] == "Person is retired"

    def test_unknown_person_is_404(self, api_client):
        resp = _assign(api_client, "Nobody", "CPT", "PILOT", "2020-01-01")
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["responseCode"] == 404

    def test_duplicate_title_and_start_is_400(self, api_client, add_person):
        add_person("Jane Doe", duties=[("MAJ", "PILOT", date(2020, 1, 1), None)])
        add_person("John Doe")
        resp = _assign(api_client, "John Doe", "CPT", "PILOT", "2020-01-01")
        assert resp.status_code == 400
        assert "already exists" in resp.json()["message"]

    def test_future_start_is_400(self, api_client, add_person):
        add_person("John Doe")
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        resp = _assign(api_client, "John Doe", "CPT", "PILOT", tomorrow)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Duty Start Date cannot be in the future"

    def test_missing_field_is_validation_error(self, api_client):
        resp = api_client.post("/AstronautDuty", json={"name": "John Doe", "rank": "CPT"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert "dutyTitle" in body["message"] or "duty_title" in body["message"]

    def test_overlong_rank_is_validation_error(self, api_client, add_person):
        add_person("John Doe")
        resp = _assign(api_client, "John Doe", "X" * 51, "PILOT", "2020-01-01")
        assert resp.status_code == 400

    def test_outcome_written_to_log(self, api_client, add_person, db):
        add_person("John Doe")
        _assign(api_client, "John Doe", "CPT", "PILOT", "2020-01-01")
        _assign(api_client, "Nobody", "CPT", "PILOT", "2020-01-01")

        levels = [e.level for e in db.query(LogEntry).order_by(LogEntry.id).all()]
        assert levels == ["SUCCESS", "ERROR"]


class TestGetAstronautDutiesByName:

    def test_unknown_person_is_404(self, api_client):
        resp = api_client.get("/AstronautDuty/Nobody")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Person not found"

    def test_person_without_duties(self, api_client, add_person):
        add_person("Sam Rivera")
        data = api_client.get("/AstronautDuty/Sam Rivera").json()["data"]
        assert data["person"]["name"] == "Sam Rivera"
        assert data["astronautDuties"] == []


class TestReferenceAndAdmin:

    def test_ranks(self, api_client):
        body = api_client.get("/Rank").json()
        assert body["success"] is True
        options = {o["value"]: o["label"] for o in body["data"]}
        assert options["CPT"] == "CPT - Captain"

    def test_log_listing_filters_by_level(self, api_client, add_person):
        add_person("John Doe")
        api_client.get("/Person")
        api_client.post("/Person", json="John Doe")

        body = api_client.get("/Log", params={"level": "error"}).json()
        assert body["data"]["total"] == 1
        entry = body["data"]["logs"][0]
        assert entry["level"] == "ERROR"
        assert entry["source"] == "PersonController.CreatePerson"

    def test_log_listing_paginates(self, api_client):
        for _ in range(3):
            api_client.get("/Person")
        body = api_client.get("/Log", params={"limit": 2}).json()
        assert body["data"]["total"] == 3
        assert len(body["data"]["logs"]) == 2

    def test_reference_and_admin_reads_are_not_logged(self, api_client, db):
        api_client.get("/Rank")
        api_client.get("/Log")
        api_client.get("/health")
        assert db.query(LogEntry).count() == 0

    def test_health(self, api_client):
        resp = api_client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["database"]["status"] == "ok"


class TestApiKey:

    def test_missing_key_rejected(self, api_client, monkeypatch):
        monkeypatch.setattr(settings, "ACTS_API_KEY", "secret")
        resp = api_client.get("/Person")
        assert resp.status_code == 401
        body = resp.json()
        assert body["success"] is False
        assert body["responseCode"] == 401

    def test_valid_key_accepted(self, api_client, monkeypatch):
        monkeypatch.setattr(settings, "ACTS_API_KEY", "secret")
        resp = api_client.get("/Person", headers={"X-API-Key": "secret"})
        assert resp.status_code == 200

    def test_health_is_exempt(self, api_client, monkeypatch):
        monkeypatch.setattr(settings, "ACTS_API_KEY", "secret")
        assert api_client.get("/health").status_code == 200
