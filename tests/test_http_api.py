from __future__ import annotations

from datetime import datetime

import pytest

from src.whatsapp_attendance.whatsapp_attendance.container import assemble
from src.whatsapp_attendance.whatsapp_attendance.employees.model import Employee
from src.whatsapp_attendance.whatsapp_attendance.main import create_app
from tests.fakes import (
    BrokenAttendance,
    FixedClock,
    InMemoryAttendance,
    InMemoryEmployees,
    InMemoryMessages,
    InMemorySettings,
    RecordingSender,
)

ANA = Employee(employee_id=1, name="Ana", phone="+5511999999999", department="Atendimento")


@pytest.fixture
def make_client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    def _make(attendance=None):
        sender = RecordingSender()
        container = assemble(
            employees_repo=InMemoryEmployees(ANA),
            attendance_repo=attendance or InMemoryAttendance(),
            messages_repo=InMemoryMessages(),
            settings_repo=InMemorySettings(),
            reply_sender=sender,
            clock=FixedClock(datetime(2026, 3, 2, 8, 30)),
        )
        return create_app(container=container).test_client(), sender

    return _make


def _callback(text="entrada", message_id="3EB0A1"):
    return {
        "phone": "5511999999999",
        "fromMe": False,
        "isGroup": False,
        "messageId": message_id,
        "text": {"message": text},
    }


def test_webhook_records_clock_in_and_replies(make_client):
    client, sender = make_client()

    resp = client.post("/api/whatsapp/webhook", json=_callback())

    assert resp.status_code == 200
    assert resp.get_json()["processed"] is True
    assert len(sender.sent) == 1

    status = client.get("/api/attendance/status/1").get_json()
    assert status["status"] == "working"
    assert status["clock_in_time"] == "08:30"


def test_webhook_redelivery_does_not_duplicate(make_client):
    client, sender = make_client()

    first = client.post("/api/whatsapp/webhook", json=_callback()).get_json()
    second = client.post("/api/whatsapp/webhook", json=_callback()).get_json()

    assert first["message_id"] == second["message_id"]
    assert len(client.get("/api/attendance/records").get_json()) == 1
    assert len(sender.sent) == 1


def test_webhook_ignores_own_messages(make_client):
    client, sender = make_client()

    resp = client.post("/api/whatsapp/webhook", json={**_callback(), "fromMe": True})

    assert resp.get_json() == {"success": True, "ignored": True}
    assert sender.sent == []


def test_webhook_without_phone_is_bad_request(make_client):
    client, _ = make_client()

    resp = client.post("/api/whatsapp/webhook", json={"text": {"message": "entrada"}})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_webhook_storage_failure_returns_503_and_keeps_message_pending(make_client):
    client, sender = make_client(attendance=BrokenAttendance())

    resp = client.post("/api/whatsapp/webhook", json=_callback())

    assert resp.status_code == 503
    assert sender.sent == []
    messages = client.get("/api/whatsapp/messages").get_json()
    assert [m["processed"] for m in messages] == [False]


def test_simulate_returns_reply(make_client):
    client, sender = make_client()

    resp = client.post("/api/whatsapp/simulate", json={"phone": "+5511999999999", "message": "volta"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["processed"] is True
    assert "ausente" in body["response"]
    assert sender.sent == []


def test_simulate_requires_message(make_client):
    client, _ = make_client()

    resp = client.post("/api/whatsapp/simulate", json={"phone": "+5511999999999"})

    assert resp.status_code == 400


def test_process_pending_with_empty_queue(make_client):
    client, _ = make_client()

    resp = client.post("/api/whatsapp/process-pending")

    assert resp.get_json() == {"success": True, "processed": []}


def test_status_of_unknown_employee_is_404(make_client):
    client, _ = make_client()

    assert client.get("/api/attendance/status/99").status_code == 404


def test_records_reject_bad_date(make_client):
    client, _ = make_client()

    assert client.get("/api/attendance/records?date=02/03/2026").status_code == 400
    assert client.get("/api/attendance/records?employee_id=abc").status_code == 400


def test_stats_after_one_clock_in(make_client):
    client, _ = make_client()
    client.post("/api/whatsapp/simulate", json={"phone": "+5511999999999", "message": "entrada"})

    stats = client.get("/api/stats").get_json()

    assert stats == {"active_employees": 1, "present_today": 1, "on_break": 0, "messages_processed": 1}


def test_employee_create_and_list(make_client):
    client, _ = make_client()

    created = client.post(
        "/api/employees",
        json={"name": "Bruno", "phone": "+55 11 98888-7777", "department": "Logística"},
    )

    assert created.status_code == 201
    assert created.get_json()["phone"] == "+5511988887777"
    names = [e["name"] for e in client.get("/api/employees").get_json()]
    assert names == ["Ana", "Bruno"]


def test_deactivated_employee_becomes_unknown_sender(make_client):
    client, _ = make_client()

    client.patch("/api/employees/1", json={"is_active": False})
    body = client.post("/api/whatsapp/simulate", json={"phone": ANA.phone, "message": "entrada"}).get_json()

    assert "não cadastrado" in body["response"]


def test_settings_toggle_transition_enforcement(make_client):
    client, _ = make_client()

    put = client.put("/api/settings/attendance.enforce_transitions", json={"value": False, "type": "boolean"})
    body = client.post("/api/whatsapp/simulate", json={"phone": ANA.phone, "message": "volta"}).get_json()

    assert put.status_code == 200
    assert put.get_json()["value"] == "false"
    assert "Volta da pausa registrada" in body["response"]
    assert [s["key"] for s in client.get("/api/settings").get_json()] == ["attendance.enforce_transitions"]


def test_settings_put_requires_value(make_client):
    client, _ = make_client()

    assert client.put("/api/settings/x", json={"type": "string"}).status_code == 400


def test_webhook_stores_provider_moment_as_received_at(make_client):
    client, _ = make_client()

    client.post("/api/whatsapp/webhook", json={**_callback(), "momment": 1772440181000})

    [message] = client.get("/api/whatsapp/messages").get_json()
    assert message["received_at"] == datetime.fromtimestamp(1772440181).isoformat()


def test_settings_rejects_string_value_for_enforcement_switch(make_client):
    client, _ = make_client()

    resp = client.put("/api/settings/attendance.enforce_transitions", json={"value": "maybe"})

    assert resp.status_code == 400
    assert client.get("/api/settings").get_json() == []
