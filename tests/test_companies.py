"""
Test suite for the /companies endpoints.
"""

import pytest


class TestCompanyCreation:
    """Tests for POST /companies"""

    payload = {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 10,
        "logoUrl": "http://new.img",
    }

    def test_create_company(self, client, db_session, admin_headers):
        response = client.post("/companies", json=self.payload, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"company": self.payload}

    def test_create_company_minimal(self, client, db_session, admin_headers):
        response = client.post("/companies", json={"handle": "min", "name": "Min"}, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["company"] == {
            "handle": "min",
            "name": "Min",
            "description": "",
            "numEmployees": None,
            "logoUrl": None,
        }

    def test_create_duplicate_company(self, client, sample_companies, admin_headers):
        response = client.post(
            "/companies",
            json={**self.payload, "handle": "c1"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate company: c1"

    def test_create_company_with_duplicate_name(self, client, sample_companies, admin_headers):
        response = client.post(
            "/companies",
            json={"handle": "dup", "name": "C1"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate company: dup"
        assert client.get("/companies/dup").status_code == 404

    def test_create_company_requires_admin(self, client, db_session, user_headers):
        response = client.post("/companies", json=self.payload, headers=user_headers)

        assert response.status_code == 403

    def test_create_company_invalid(self, client, db_session, admin_headers):
        response = client.post(
            "/companies",
            json={"handle": "x", "numEmployees": -5},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert len(response.json()["error"]["message"]) == 2


class TestCompanyRetrieval:
    """Tests for GET /companies and GET /companies/{handle}"""

    def test_list_companies(self, client, sample_companies):
        response = client.get("/companies")

        assert response.status_code == 200
        companies = response.json()["companies"]
        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]
        assert companies[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    @pytest.mark.parametrize("query, handles", [
        ("nameLike=c", ["c1", "c2", "c3"]),
        ("nameLike=2", ["c2"]),
        ("minEmployees=2", ["c2", "c3"]),
        ("maxEmployees=2", ["c1", "c2"]),
        ("minEmployees=2&maxEmployees=2", ["c2"]),
        ("nameLike=nope", []),
    ])
    def test_list_companies_filtered(self, client, sample_companies, query, handles):
        response = client.get(f"/companies?{query}")

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()["companies"]] == handles

    def test_min_greater_than_max(self, client, sample_companies):
        response = client.get("/companies?minEmployees=3&maxEmployees=1")

        assert response.status_code == 400

    def test_get_company_with_jobs(self, client, sample_jobs):
        response = client.get("/companies/c1")

        assert response.status_code == 200
        company = response.json()["company"]
        assert company["handle"] == "c1"
        assert company["jobs"] == [
            {"id": sample_jobs["Engineer"], "title": "Engineer", "salary": 90000, "equity": "0.01"},
            {"id": sample_jobs["Analyst"], "title": "Analyst", "salary": 50000, "equity": "0"},
        ]

    def test_get_company_without_jobs(self, client, sample_jobs):
        response = client.get("/companies/c3")

        assert response.json()["company"]["jobs"] == []

    def test_get_nonexistent_company(self, client, db_session):
        response = client.get("/companies/nope")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No company: nope"


class TestCompanyUpdate:
    """Tests for PATCH /companies/{handle}"""

    def test_update_company(self, client, sample_companies, admin_headers):
        response = client.patch(
            "/companies/c1",
            json={"name": "C1-new", "numEmployees": 50, "logoUrl": None},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["company"] == {
            "handle": "c1",
            "name": "C1-new",
            "description": "Desc1",
            "numEmployees": 50,
            "logoUrl": None,
        }

    def test_rename_to_existing_name(self, client, sample_companies, admin_headers):
        response = client.patch("/companies/c1", json={"name": "C2"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate company name: C2"
        assert client.get("/companies/c1").json()["company"]["name"] == "C1"

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_update_required_field_to_null(self, client, sample_companies, admin_headers, field):
        response = client.patch("/companies/c1", json={field: None}, headers=admin_headers)

        assert response.status_code == 400
        assert f"{field} cannot be null" in response.json()["error"]["message"][0]

    def test_update_handle_rejected(self, client, sample_companies, admin_headers):
        response = client.patch("/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)

        assert response.status_code == 400

    def test_update_nonexistent_company(self, client, db_session, admin_headers):
        response = client.patch("/companies/nope", json={"name": "Nope"}, headers=admin_headers)

        assert response.status_code == 404

    def test_update_empty_body(self, client, sample_companies, admin_headers):
        response = client.patch("/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400

    def test_update_requires_admin(self, client, sample_companies, user_headers):
        response = client.patch("/companies/c1", json={"name": "Nope"}, headers=user_headers)

        assert response.status_code == 403


class TestCompanyDeletion:
    """Tests for DELETE /companies/{handle}"""

    def test_delete_company(self, client, sample_companies, admin_headers):
        response = client.delete("/companies/c1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "c1"}
        assert client.get("/companies/c1").status_code == 404

    def test_delete_nonexistent_company(self, client, db_session, admin_headers):
        response = client.delete("/companies/nope", headers=admin_headers)

        assert response.status_code == 404

    def test_delete_requires_admin(self, client, sample_companies):
        response = client.delete("/companies/c1")

        assert response.status_code == 401

    def test_malformed_json_from_non_admin_is_forbidden(self, client, sample_companies, user_headers):
        response = client.patch(
            "/companies/c1",
            content=b"{not json",
            headers={**user_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 403
