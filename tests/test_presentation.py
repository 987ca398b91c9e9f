"""
Test Presentation Layer

Tests for the JSON/CSV serializers and the FastAPI endpoints.
"""

import json

import pytest
from fastapi.testclient import TestClient

from release_stats import __version__
from release_stats.aggregation import OrgSummary
from release_stats.ingestion import FileReleaseSource, ReleaseSource
from release_stats.presentation import csv_header, csv_value, to_csv, to_json
from release_stats.presentation.server import create_app

HEADER = "organization,release_count,total_labor_hours,all_in_production,licenses,most_active_months"

ANL = "Argonne National Laboratory (ANL)"
LLNL = "Lawrence Livermore National Laboratory (LLNL)"
NREL = "National Renewable Energy Laboratory (NREL)"


@pytest.fixture
def org_a():
    return OrgSummary(
        organization="A",
        release_count=2,
        total_labor_hours=15.0,
        all_in_production=False,
        licenses=["Apache-2.0", "MIT"],
        most_active_months=[1, 2]
    )


class TestJsonSerializer:
    """Test the JSON document rendering."""

    def test_envelope_and_fields(self, org_a):
        document = json.loads(to_json([org_a]))

        assert document == {
            "organizations": [{
                "organization": "A",
                "release_count": 2,
                "total_labor_hours": 15,
                "all_in_production": False,
                "licenses": ["Apache-2.0", "MIT"],
                "most_active_months": [1, 2],
            }]
        }

    def test_two_space_indent(self, org_a):
        text = to_json([org_a])

        assert text.startswith('{\n  "organizations": [\n    {\n      "organization": "A",')

    def test_whole_hours_render_as_integer(self, org_a):
        assert '"total_labor_hours": 15,' in to_json([org_a])

    def test_fractional_hours(self):
        org = OrgSummary(organization="A", total_labor_hours=12.5)
        assert '"total_labor_hours": 12.5,' in to_json([org])

    def test_empty(self):
        assert to_json([]) == '{\n  "organizations": []\n}'


class TestCsvSerializer:
    """Test the CSV rendering rules."""

    def test_header_follows_model_fields(self):
        assert ",".join(csv_header()) == HEADER

    def test_row_encoding(self, org_a):
        assert to_csv([org_a]) == HEADER + "\r\n" + '"A",2,15,false,"Apache-2.0|MIT","1|2"\r\n'

    def test_empty_lists(self):
        org = OrgSummary(organization="B", all_in_production=True)

        row = to_csv([org]).split("\r\n")[1]

        assert row == '"B",1,0,true,"",""'

    def test_header_only_when_empty(self):
        assert to_csv([]) == HEADER + "\r\n"

    @pytest.mark.parametrize("value,expected", [
        (None, '""'),
        (["MIT"], '"MIT"'),
        ([3, 5], '"3|5"'),
        ('Dept "X", Office', '"Dept \\"X\\", Office"'),
        (True, "true"),
        (7, "7"),
        (2.5, "2.5"),
        ("Énergie", '"Énergie"'),
    ])
    def test_csv_value(self, value, expected):
        assert csv_value(value) == expected


class NoneSource(ReleaseSource):
    """Source that breaks the aggregator contract."""

    name = "none"

    def load_releases(self):
        return None


@pytest.fixture
def client(sample_file):
    return TestClient(create_app(source=FileReleaseSource(str(sample_file))))


class TestOrganizationsEndpoint:
    """Test GET /organizations."""

    def test_default_order(self, client):
        response = client.get("/organizations")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")

        organizations = response.json()["organizations"]
        assert [org["organization"] for org in organizations] == [ANL, LLNL, NREL]

    def test_aggregated_values(self, client):
        organizations = {
            org["organization"]: org
            for org in client.get("/organizations").json()["organizations"]
        }

        assert organizations[LLNL] == {
            "organization": LLNL,
            "release_count": 3,
            "total_labor_hours": 8000,
            "all_in_production": False,
            "licenses": ["Apache-2.0", "LGPL-2.1", "MIT"],
            "most_active_months": [12],
        }
        assert organizations[ANL]["total_labor_hours"] == 1540.5
        assert organizations[ANL]["all_in_production"] is True
        assert organizations[NREL]["licenses"] == []

    def test_sort_release_count_desc(self, client):
        response = client.get("/organizations", params={"sort": "release_count", "order": "desc"})

        organizations = response.json()["organizations"]
        assert [org["organization"] for org in organizations] == [LLNL, ANL, NREL]

    def test_sort_total_labor_hours(self, client):
        response = client.get("/organizations", params={"sort": "total_labor_hours"})

        organizations = response.json()["organizations"]
        assert [org["organization"] for org in organizations] == [NREL, ANL, LLNL]

    def test_unknown_sort_falls_back(self, client):
        response = client.get("/organizations", params={"sort": "name", "order": "up"})

        organizations = response.json()["organizations"]
        assert [org["organization"] for org in organizations] == [ANL, LLNL, NREL]

    def test_pretty_printed(self, client):
        assert client.get("/organizations").text.startswith('{\n  "organizations": [')


class TestOrganizationsCsvEndpoint:
    """Test GET /organizations.csv."""

    def test_csv_body(self, client):
        response = client.get("/organizations.csv", params={"sort": "release_count"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")

        lines = response.text.split("\r\n")
        assert lines[0] == HEADER
        assert lines[1] == f'"{NREL}",1,0,false,"","7"'
        assert lines[2] == f'"{ANL}",2,1540.5,true,"BSD-3-Clause|MIT","3"'
        assert lines[3] == f'"{LLNL}",3,8000,false,"Apache-2.0|LGPL-2.1|MIT","12"'
        assert lines[4] == ""


class TestErrorMapping:
    """Test that pipeline failures map to HTTP status codes."""

    def test_source_unavailable(self, tmp_path):
        client = TestClient(create_app(source=FileReleaseSource(str(tmp_path / "missing.json"))))

        response = client.get("/organizations")

        assert response.status_code == 503
        assert response.json()["error"] == "source_unavailable"
        assert "missing.json" in response.json()["detail"]

    def test_source_format(self, tmp_path):
        path = tmp_path / "code.json"
        path.write_text(json.dumps({"agency": "DOE"}))
        client = TestClient(create_app(source=FileReleaseSource(str(path))))

        response = client.get("/organizations.csv")

        assert response.status_code == 502
        assert response.json()["error"] == "source_format"

    def test_invalid_input(self):
        client = TestClient(create_app(source=NoneSource()))

        response = client.get("/organizations")

        assert response.status_code == 500
        assert response.json()["error"] == "invalid_input"


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "source": "file", "version": __version__}

    def test_root(self, client):
        body = client.get("/").json()

        assert body["service"] == "Release Stats Service"
        assert "/health" in body["endpoints"].values()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
