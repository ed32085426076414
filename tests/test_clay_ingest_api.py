import json

from sqlalchemy import select

from app.core.config import settings
from app.models.clay_enrichment_logs import ClayEnrichmentLog
from app.models.clay_people import ClayPerson


def _rows(engine, model):
    with engine.connect() as conn:
        return [dict(row._mapping) for row in conn.execute(select(model.__table__)).fetchall()]


PERSON = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "full_name": "Ada Lovelace",
    "company_name": "Analytical Engines",
    "job_title": "CTO",
    "person_linkedin_url": "https://linkedin.com/in/ada",
    "notes": "",
}


def test_ingest_single_record(client, engine):
    response = client.post("/api/clay-webhook", json=PERSON)

    assert response.status_code == 200
    assert response.json() == {"success": True, "inserted": 1}
    people = _rows(engine, ClayPerson)
    assert len(people) == 1
    assert people[0]["full_name"] == "Ada Lovelace"
    assert people[0]["notes"] is None
    assert people[0]["company_domain"] is None


def test_ingest_array_drops_unknown_fields(client, engine):
    records = [
        {**PERSON, "_batch_metadata": {"batch_id": "batch-42", "source": "hq-data-warehouse"}, "score": 99},
        {"first_name": "Grace", "last_experience_start_date": "1943-01-01"},
    ]

    response = client.post(
        "/api/clay-webhook",
        json=records,
        headers={"X-Forwarded-For": "203.0.113.7"},
    )

    assert response.status_code == 200
    assert response.json()["inserted"] == 2
    people = _rows(engine, ClayPerson)
    assert {person["first_name"] for person in people} == {"Ada", "Grace"}
    assert "score" not in people[0]
    assert "_batch_metadata" not in people[0]

    logs = _rows(engine, ClayEnrichmentLog)
    assert len(logs) == 1
    assert logs[0]["batch_id"] == "batch-42"
    assert logs[0]["records_received"] == 2
    assert logs[0]["records_inserted"] == 2
    assert logs[0]["status"] == "success"
    assert logs[0]["source_ip"] == "203.0.113.7"


def test_ingest_uses_cloudflare_ip_header(client, engine):
    client.post("/api/clay-webhook", json=PERSON, headers={"CF-Connecting-IP": "198.51.100.1"})

    assert _rows(engine, ClayEnrichmentLog)[0]["source_ip"] == "198.51.100.1"


def test_ingest_empty_array_is_rejected_and_logged(client, engine):
    response = client.post("/api/clay-webhook", json=[])

    assert response.status_code == 400
    assert response.json()["detail"] == "No data provided"
    assert _rows(engine, ClayPerson) == []
    logs = _rows(engine, ClayEnrichmentLog)
    assert [(log["status"], log["error_message"], log["records_received"]) for log in logs] == [
        ("error", "No data provided", 0)
    ]


def test_ingest_rejects_non_object_records(client, engine):
    response = client.post("/api/clay-webhook", json=[PERSON, "not a person"])

    assert response.status_code == 400
    assert _rows(engine, ClayPerson) == []


def test_ingest_rejects_invalid_json(client):
    response = client.post("/api/clay-webhook", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_ingest_insert_failure_is_logged(client, engine):
    ClayPerson.__table__.drop(engine)

    response = client.post("/api/clay-webhook", json=[PERSON])

    assert response.status_code == 500
    assert response.json()["detail"].startswith("Failed to insert: ")
    logs = _rows(engine, ClayEnrichmentLog)
    assert logs[0]["status"] == "error"
    assert logs[0]["records_received"] == 1
    assert logs[0]["records_inserted"] == 0


def test_ingest_without_audit_log(client, engine, monkeypatch):
    monkeypatch.setattr(settings, "ENRICHMENT_AUDIT_LOG", False)

    response = client.post("/api/clay-webhook", json=PERSON)

    assert response.status_code == 200
    assert _rows(engine, ClayEnrichmentLog) == []


def test_ingest_stores_structured_values_as_json(client, engine):
    record = {**PERSON, "notes": {"source": "clay", "tags": ["cto", "founder"]}, "location": ["Berlin", "DE"]}

    response = client.post("/api/clay-webhook", json=record)

    assert response.status_code == 200
    person = _rows(engine, ClayPerson)[0]
    assert json.loads(person["notes"]) == {"source": "clay", "tags": ["cto", "founder"]}
    assert json.loads(person["location"]) == ["Berlin", "DE"]
