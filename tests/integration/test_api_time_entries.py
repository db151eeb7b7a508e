"""
HTTP tests for time entry logging, review and export.
"""

from datetime import timedelta

import pytest

from timebill.infrastructure.export import ExcelExporter
from tests.helpers import TODAY, add_client, add_rate, add_service, make_entry


@pytest.fixture
def acme(repositories):
    return add_client(repositories)


@pytest.fixture
def consulting(repositories):
    service = add_service(repositories)
    add_rate(repositories, service.id, 150.0)
    return service


@pytest.fixture
def entry_body(acme, consulting):
    return {
        "client_id": acme.id,
        "service_id": consulting.id,
        "activity_date": TODAY.isoformat(),
        "duration": 2.0,
        "memo": "Kickoff workshop",
    }


def log_entry(client, headers, body, **overrides):
    response = client.post("/api/v1/time-entries", headers=headers, json={**body, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateTimeEntry:

    def test_rate_comes_from_service_default(self, client, employee, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        assert entry["employee_id"] == employee.id
        assert entry["rate"] == 150.0
        assert entry["amount"] == 300.0
        assert entry["status"] == "pending"

    def test_non_billable_entry_has_no_amount(self, client, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body, billable=False)

        assert entry["amount"] == 0.0

    def test_invalid_duration_reports_the_field(self, client, employee_headers, entry_body):
        response = client.post("/api/v1/time-entries", headers=employee_headers, json={
            **entry_body, "duration": 0,
        })

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "duration" in error["details"]

    def test_control_characters_in_memo_are_rejected(self, client, employee_headers, entry_body):
        response = client.post("/api/v1/time-entries", headers=employee_headers, json={
            **entry_body, "memo": "bell\x07char",
        })

        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"memo": ["Memo contains control characters"]}

    def test_future_activity_date_is_rejected(self, client, employee_headers, entry_body):
        response = client.post("/api/v1/time-entries", headers=employee_headers, json={
            **entry_body, "activity_date": (TODAY + timedelta(days=1)).isoformat(),
        })

        assert response.status_code == 400
        assert "activity_date" in response.json()["error"]["details"]

    def test_malformed_body_is_a_bad_request(self, client, employee_headers, entry_body):
        response = client.post("/api/v1/time-entries", headers=employee_headers, json={
            **entry_body, "duration": "two hours",
        })

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_unknown_field_is_a_bad_request(self, client, employee_headers, entry_body):
        response = client.post("/api/v1/time-entries", headers=employee_headers, json={
            **entry_body, "amount": 9999,
        })

        assert response.status_code == 400

    def test_creation_is_audited(self, client, repositories, employee, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        [audit] = repositories.audit_logs.list_all()
        assert audit.action == "create"
        assert audit.entity_id == entry["id"]
        assert audit.user_id == employee.id


class TestListTimeEntries:

    def test_employee_sees_only_own_entries(
        self, client, employee_headers, other_employee_headers, entry_body
    ):
        log_entry(client, employee_headers, entry_body)
        log_entry(client, other_employee_headers, entry_body)

        response = client.get("/api/v1/time-entries", headers=employee_headers)

        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_employee_cannot_widen_to_someone_else(
        self, client, employee_headers, other_employee, other_employee_headers, entry_body
    ):
        log_entry(client, other_employee_headers, entry_body)

        response = client.get(
            "/api/v1/time-entries",
            headers=employee_headers,
            params={"employee_id": other_employee.id},
        )

        assert response.json()["total"] == 0

    def test_admin_sees_everything_and_filters(
        self, client, admin_headers, employee, employee_headers, other_employee_headers, entry_body
    ):
        log_entry(client, employee_headers, entry_body)
        log_entry(client, employee_headers, entry_body, billable=False)
        log_entry(client, other_employee_headers, entry_body)

        everything = client.get("/api/v1/time-entries", headers=admin_headers).json()
        billable_for_eve = client.get("/api/v1/time-entries", headers=admin_headers, params={
            "employee_id": employee.id, "billable": "true",
        }).json()

        assert everything["total"] == 3
        assert billable_for_eve["total"] == 1

    def test_reversed_date_range(self, client, admin_headers):
        response = client.get("/api/v1/time-entries", headers=admin_headers, params={
            "start_date": "2024-03-10", "end_date": "2024-03-01",
        })

        assert response.status_code == 400


class TestReadTimeEntry:

    def test_owner_reads_entry(self, client, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.get(f"/api/v1/time-entries/{entry['id']}", headers=employee_headers)

        assert response.status_code == 200
        assert response.json()["memo"] == "Kickoff workshop"

    def test_other_employee_is_forbidden(self, client, employee_headers, other_employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.get(f"/api/v1/time-entries/{entry['id']}", headers=other_employee_headers)

        assert response.status_code == 403

    def test_admin_reads_any_entry(self, client, admin_headers, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.get(f"/api/v1/time-entries/{entry['id']}", headers=admin_headers)

        assert response.status_code == 200

    def test_missing_entry(self, client, employee_headers):
        response = client.get("/api/v1/time-entries/missing", headers=employee_headers)

        assert response.status_code == 404


class TestModifyTimeEntry:

    def test_update_recalculates_amount(self, client, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.put(
            f"/api/v1/time-entries/{entry['id']}",
            headers=employee_headers,
            json={"duration": 3.0},
        )

        assert response.status_code == 200
        assert response.json()["amount"] == 450.0
        assert response.json()["memo"] == "Kickoff workshop"

    def test_explicit_null_clears_memo(self, client, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.put(
            f"/api/v1/time-entries/{entry['id']}",
            headers=employee_headers,
            json={"memo": None},
        )

        assert response.json()["memo"] is None

    def test_edit_after_window(self, client, clock, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)
        clock.advance(hours=25)

        response = client.put(
            f"/api/v1/time-entries/{entry['id']}",
            headers=employee_headers,
            json={"duration": 1.0},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MODIFICATION_WINDOW_EXPIRED"

    def test_someone_elses_entry(self, client, employee_headers, other_employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.put(
            f"/api/v1/time-entries/{entry['id']}",
            headers=other_employee_headers,
            json={"duration": 1.0},
        )

        assert response.status_code == 403

    def test_delete_within_window(self, client, repositories, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.delete(f"/api/v1/time-entries/{entry['id']}", headers=employee_headers)

        assert response.status_code == 204
        assert repositories.time_entries.get_by_id(entry["id"]) is None

    def test_delete_after_window(self, client, clock, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)
        clock.advance(hours=25)

        response = client.delete(f"/api/v1/time-entries/{entry['id']}", headers=employee_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MODIFICATION_WINDOW_EXPIRED"


class TestReviewTimeEntry:

    def test_admin_approves_and_employee_is_notified(
        self, client, transport, admin_headers, employee_headers, entry_body
    ):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.put(
            f"/api/v1/time-entries/{entry['id']}/status",
            headers=admin_headers,
            json={"status": "approved"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        submitted, reviewed = transport.sent
        assert submitted[0].email == "admin@example.com"
        assert reviewed[0].email == "eve@example.com"

    def test_unknown_status_is_a_bad_request(self, client, admin_headers, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.put(
            f"/api/v1/time-entries/{entry['id']}/status",
            headers=admin_headers,
            json={"status": "archived"},
        )

        assert response.status_code == 400

    def test_employees_cannot_review(self, client, employee_headers, entry_body):
        entry = log_entry(client, employee_headers, entry_body)

        response = client.put(
            f"/api/v1/time-entries/{entry['id']}/status",
            headers=employee_headers,
            json={"status": "approved"},
        )

        assert response.status_code == 403


class TestExportTimeEntries:

    def test_admin_downloads_workbook(self, client, repositories, admin_headers, employee, acme, consulting):
        repositories.time_entries.save(make_entry(
            employee_id=employee.id, client_id=acme.id, service_id=consulting.id,
        ))

        response = client.get("/api/v1/time-entries/export", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert response.content[:2] == b"PK"

    def test_employees_cannot_export(self, client, employee_headers):
        response = client.get("/api/v1/time-entries/export", headers=employee_headers)

        assert response.status_code == 403

    def test_logged_memos_export_cleanly(self, client, admin_headers, employee_headers, entry_body):
        created = client.post("/api/v1/time-entries", headers=employee_headers, json={
            **entry_body, "memo": "Call notes\r\nfollow up",
        })
        assert created.json()["memo"] == "Call notes\nfollow up"

        response = client.get("/api/v1/time-entries/export", headers=admin_headers)

        assert response.status_code == 200
        [row] = ExcelExporter().read(response.content)
        assert row.memo == "Call notes\nfollow up"
