"""
Status lifecycle tests: the four-value enumeration and the transition table,
including the table as applied by the maintenance record UPDATE.

Run: pytest gridops/test_lifecycle.py -v
"""

import pytest

from gridops import lifecycle
from gridops.errors import IllegalStatusTransition, ValidationFailure
from gridops.lifecycle import MaintenanceStatus, allowed_predecessors, parse_status, transition_error


ALL_STATUSES = [s.value for s in MaintenanceStatus]


class TestParseStatus:
    @pytest.mark.parametrize("value", ALL_STATUSES)
    def test_known_values(self, value):
        assert parse_status(value).value == value

    @pytest.mark.parametrize("value", ["scheduled", "DONE", "", "IN PROGRESS", 1, None, ["SCHEDULED"]])
    def test_unknown_values(self, value):
        with pytest.raises(ValidationFailure):
            parse_status(value)

    def test_member_passes_through(self):
        assert parse_status(MaintenanceStatus.COMPLETED) is MaintenanceStatus.COMPLETED


class TestTransitionTable:
    @pytest.mark.parametrize("current", ALL_STATUSES)
    @pytest.mark.parametrize("new", ALL_STATUSES)
    def test_every_transition_allowed(self, current, new):
        assert MaintenanceStatus(current) in allowed_predecessors(MaintenanceStatus(new))

    def test_transition_error_names_both_statuses(self):
        error = transition_error("COMPLETED", MaintenanceStatus.SCHEDULED)
        assert isinstance(error, IllegalStatusTransition)
        assert error.message == "status cannot move from COMPLETED to SCHEDULED"


@pytest.fixture
def completed_only(monkeypatch):
    """COMPLETED may only stay COMPLETED; every other move is unchanged."""
    restricted = dict(lifecycle.ALLOWED_TRANSITIONS)
    restricted[MaintenanceStatus.COMPLETED] = frozenset({MaintenanceStatus.COMPLETED})
    monkeypatch.setattr(lifecycle, "ALLOWED_TRANSITIONS", restricted)


class TestRestrictedTable:
    def test_predecessors_follow_table(self, completed_only):
        assert MaintenanceStatus.COMPLETED not in allowed_predecessors(MaintenanceStatus.SCHEDULED)
        assert MaintenanceStatus.COMPLETED in allowed_predecessors(MaintenanceStatus.COMPLETED)

    def test_update_enforces_table(self, client, signup, completed_only):
        headers = signup("alice")
        asset = client.post("/api/asset", json={"name": "Gen-1"}, headers=headers).json()["data"]
        record = client.post(
            "/api/maintenance",
            json={"title": "Inspect", "body": "n/a", "assetId": asset["id"], "status": "COMPLETED"},
            headers=headers,
        ).json()["data"]

        refused = client.put(f"/api/maintenance/{record['id']}", json={"status": "SCHEDULED"}, headers=headers)
        assert refused.status_code == 400
        assert refused.json() == {"message": "status cannot move from COMPLETED to SCHEDULED"}

        fetched = client.get(f"/api/maintenance/{record['id']}", headers=headers).json()["data"]
        assert fetched["status"] == "COMPLETED", "Refused transition must not change the row"

        allowed = client.put(f"/api/maintenance/{record['id']}", json={"status": "COMPLETED"}, headers=headers)
        assert allowed.status_code == 200

    def test_refused_transition_on_foreign_record_is_not_found(self, client, signup, completed_only):
        alice = signup("alice")
        asset = client.post("/api/asset", json={"name": "Gen-1"}, headers=alice).json()["data"]
        record = client.post(
            "/api/maintenance",
            json={"title": "Inspect", "body": "n/a", "assetId": asset["id"], "status": "COMPLETED"},
            headers=alice,
        ).json()["data"]

        response = client.put(f"/api/maintenance/{record['id']}", json={"status": "SCHEDULED"}, headers=signup("bob"))
        assert response.status_code == 404
