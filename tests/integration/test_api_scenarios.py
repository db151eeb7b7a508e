"""
Whole-flow tests driven only through the HTTP API.
"""

from tests.helpers import add_client, add_service


class TestTimesheetToPayroll:
    """An employee logs time, the office bills it and pays commission on it."""

    def setup_method(self):
        self.march = {"start_date": "2024-03-01", "end_date": "2024-03-31"}

    def log(self, client, headers, body):
        response = client.post("/api/v1/time-entries", headers=headers, json=body)
        assert response.status_code == 201, response.text
        return response.json()

    def test_logged_time_is_priced_and_pending(self, client, repositories, employee_headers):
        acme = add_client(repositories)
        service = add_service(repositories)

        entry = self.log(client, employee_headers, {
            "client_id": acme.id,
            "service_id": service.id,
            "activity_date": "2024-03-19",
            "duration": 3.5,
            "rate": 150,
            "billable": True,
        })

        assert entry["amount"] == 525.0
        assert entry["status"] == "pending"

    def test_entry_is_frozen_a_day_later(self, client, clock, repositories, employee_headers):
        acme = add_client(repositories)
        service = add_service(repositories)
        entry = self.log(client, employee_headers, {
            "client_id": acme.id,
            "service_id": service.id,
            "activity_date": "2024-03-19",
            "duration": 3.5,
            "rate": 150,
        })

        clock.advance(hours=25)
        response = client.put(
            f"/api/v1/time-entries/{entry['id']}",
            headers=employee_headers,
            json={"memo": "late correction"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MODIFICATION_WINDOW_EXPIRED"

    def test_employee_override_rate(
        self, client, repositories, admin_headers, employee, other_employee, employee_headers
    ):
        acme = add_client(repositories)
        service = add_service(repositories)
        client.post("/api/v1/rates", headers=admin_headers, json={
            "service_id": service.id, "hourly_rate": 150,
        })
        client.post("/api/v1/rates", headers=admin_headers, json={
            "service_id": service.id, "employee_id": employee.id, "hourly_rate": 200,
        })

        def effective(employee_id):
            return client.get("/api/v1/rates/effective", headers=admin_headers, params={
                "service_id": service.id, "employee_id": employee_id,
            }).json()["hourly_rate"]

        assert effective(employee.id) == 200
        assert effective(other_employee.id) == 150

        entry = self.log(client, employee_headers, {
            "client_id": acme.id,
            "service_id": service.id,
            "activity_date": "2024-03-19",
            "duration": 1,
        })
        assert entry["rate"] == 200

    def test_month_of_work_becomes_an_invoice(self, client, repositories, admin_headers, employee_headers):
        acme = add_client(repositories)
        service = add_service(repositories)
        for day, duration in (("2024-03-05", 4), ("2024-03-12", 6)):
            self.log(client, employee_headers, {
                "client_id": acme.id,
                "service_id": service.id,
                "activity_date": day,
                "duration": duration,
                "rate": 100,
            })

        response = client.post("/api/v1/invoices", headers=admin_headers, json={
            "client_id": acme.id, **self.march,
        })

        invoice = response.json()
        assert response.status_code == 201
        assert invoice["subtotal"] == invoice["total"] == 1000.0
        assert sorted(item["amount"] for item in invoice["line_items"]) == [400.0, 600.0]

    def test_commission_on_billed_work(self, client, repositories, admin_headers, employee, employee_headers):
        acme = add_client(repositories)
        service = add_service(repositories)
        self.log(client, employee_headers, {
            "client_id": acme.id,
            "service_id": service.id,
            "activity_date": "2024-03-12",
            "duration": 10,
            "rate": 100,
        })
        client.post(
            f"/api/v1/payroll/allocations/{employee.id}",
            headers=admin_headers,
            json={"percentage": 20},
        )

        report = client.get("/api/v1/payroll/commissions", headers=admin_headers, params=self.march).json()

        [row] = [row for row in report["rows"] if row["employee_id"] == employee.id]
        assert row["billable_amount"] == 1000.0
        assert row["commission"] == 200.0
        assert report["total_commission"] == 200.0
