"""Gateway HTTP tests (FastAPI TestClient, in-memory catalog)"""

import pytest
from fastapi.testclient import TestClient

from gateway import main
from shared.catalog import JsonCatalogReader
from shared.storage import InMemoryResultSink

from conftest import build_catalog


SCENARIO_A = {
    "painLevel": 4,
    "painLocation": "Lower Back",
    "painDuration": "1-4 weeks",
    "painType": "Dull/Aching",
    "additionalSymptoms": ["Stiffness in the morning"],
    "redFlags": [],
}


@pytest.fixture
def client():
    main.init_services(catalog=build_catalog(), sink=InMemoryResultSink())
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture
def broken_client(tmp_path):
    main.init_services(catalog=JsonCatalogReader(tmp_path), sink=InMemoryResultSink())
    with TestClient(main.app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestAssessments:
    def test_lower_back_routine(self, client):
        response = client.post("/api/v1/assessments", json=SCENARIO_A)

        assert response.status_code == 200
        body = response.json()
        assert body["riskLevel"] == "low"
        assert body["source"] == "routine"
        assert body["routineName"] == "Lower Back Pain Relief Routine"
        assert body["recommendations"][0]["exerciseId"] == "lb_prone_extension"
        assert body["recommendations"][0]["safetyNotes"]

    def test_pain_level_out_of_range(self, client):
        response = client.post("/api/v1/assessments", json={**SCENARIO_A, "painLevel": 11})
        assert response.status_code == 422

    def test_red_flag_is_critical(self, client):
        response = client.post(
            "/api/v1/assessments",
            json={**SCENARIO_A, "redFlags": ["Loss of bladder control"]},
        )

        body = response.json()
        assert body["riskLevel"] == "critical"
        assert body["recommendations"] == []
        assert body["nextSteps"]

    def test_pain_type_list_accepted(self, client):
        response = client.post(
            "/api/v1/assessments",
            json={**SCENARIO_A, "painType": ["Dull/Aching", "Stiff"]},
        )
        assert response.status_code == 200

    def test_post_op_protocol(self, client):
        response = client.post(
            "/api/v1/assessments",
            json={
                "painLevel": 3,
                "painLocation": "Knee",
                "postOp": {
                    "surgeryStatus": "post_op",
                    "postOpRegion": "Knee",
                    "surgeryType": "total_knee_arthroplasty",
                    "weeksSinceSurgery": "0-2 weeks",
                },
            },
        )

        body = response.json()
        assert body["source"] == "protocol"
        assert body["protocolKey"] == "knee_total_knee_arthroplasty"
        assert body["phaseNumber"] == 1
        assert body["phaseName"] == "Pain Control and Early Mobility"
        assert body["recommendations"][0]["exerciseId"] == "tka_phase_1"

    def test_latest(self, client):
        assert client.get("/api/v1/assessments/latest").status_code == 404

        created = client.post("/api/v1/assessments", json=SCENARIO_A).json()
        latest = client.get("/api/v1/assessments/latest")

        assert latest.status_code == 200
        assert latest.json()["id"] == created["id"]


class TestQuestionnaires:
    def test_items_in_display_order(self, client):
        body = client.get("/api/v1/questionnaires/odi").json()

        assert body["scoringType"] == "odi"
        assert [item["displayOrder"] for item in body["items"]] == list(range(1, 11))
        assert body["items"][0]["itemKey"] == "ODI_Q1"

    def test_unknown(self, client):
        response = client.get("/api/v1/questionnaires/sf36")
        assert response.status_code == 404
        assert response.json()["detail"]["type"] == "QuestionnaireNotFoundError"


class TestOutcomes:
    def test_submit_with_condition_tag(self, client):
        response = client.post(
            "/api/v1/outcomes/odi",
            json={
                "contextType": "baseline",
                "conditionTag": "back",
                "responses": {f"ODI_Q{n}": 2 for n in range(1, 11)},
            },
        )

        body = response.json()
        assert response.status_code == 200
        assert body["normalizedScore"] == 40
        assert body["interpretation"] == "Moderate disability"

    def test_condition_from_pain_location(self, client):
        response = client.post(
            "/api/v1/outcomes/koos",
            json={"contextType": "baseline", "painLocation": "Right Knee", "responses": {"KOOS_Q1": 0}},
        )
        assert response.json()["conditionTag"] == "knee"

    def test_condition_required(self, client):
        response = client.post(
            "/api/v1/outcomes/odi",
            json={"contextType": "baseline", "responses": {"ODI_Q1": 1}},
        )
        assert response.status_code == 400

    def test_unknown_questionnaire(self, client):
        response = client.post(
            "/api/v1/outcomes/sf36",
            json={"contextType": "baseline", "conditionTag": "back", "responses": {}},
        )
        assert response.status_code == 404

    def test_summary(self, client):
        for context, value in (("baseline", 4), ("followup", 1)):
            client.post(
                "/api/v1/outcomes/odi",
                json={
                    "contextType": context,
                    "conditionTag": "back",
                    "responses": {"ODI_Q1": value, "ODI_Q2": value},
                },
            )

        body = client.get("/api/v1/outcomes/back/summary").json()

        assert body["functionQuestionnaireKey"] == "odi"
        assert body["baselineFunctionScore"] == 80
        assert body["latestFunctionScore"] == 20
        assert body["functionChange"] == -60
        assert body["isMeaningful"] is True
        assert body["needsFollowUp"] is False

    def test_empty_summary_needs_follow_up(self, client):
        body = client.get("/api/v1/outcomes/shoulder/summary").json()

        assert body["functionQuestionnaireKey"] == "quickdash"
        assert body["functionChange"] is None
        assert body["needsFollowUp"] is True


class TestCatalogUnavailable:
    def test_assessment_returns_503(self, broken_client):
        response = broken_client.post("/api/v1/assessments", json=SCENARIO_A)

        assert response.status_code == 503
        assert response.json()["detail"]["type"] == "CatalogUnavailableError"

    def test_questionnaire_returns_503(self, broken_client):
        assert broken_client.get("/api/v1/questionnaires/odi").status_code == 503

    def test_critical_triage_needs_no_catalog(self, broken_client):
        response = broken_client.post(
            "/api/v1/assessments",
            json={**SCENARIO_A, "redFlags": ["Saddle numbness"]},
        )
        assert response.status_code == 200
        assert response.json()["riskLevel"] == "critical"
