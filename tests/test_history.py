from datetime import date, datetime

import pytest

from medstock.exceptions import SnapshotValidationError
from medstock.schemas.history import HistoryEntryRecord
from medstock.utils.filters import filter_history, group_history_by_date, history_action_style
from tests.conftest import make_history

@pytest.fixture
def entries():
    return [
        make_history("Aspirin", "sold", "Sold 3 units to Ali", datetime(2025, 6, 15, 18, 0)),
        make_history("Aspirin", "updated", "Price changed 10 -> 12", datetime(2025, 6, 15, 9, 0)),
        make_history("Ibuprofen", "created", "Added 40 units", datetime(2025, 6, 14, 17, 0)),
        make_history("Zinc", "deleted", "Removed from catalogue", datetime(2025, 6, 12, 8, 0)),
    ]

def test_all_action_and_empty_search_keep_everything(entries):
    assert filter_history(entries, action="all", search="") == entries

def test_action_filter(entries):
    assert [e.medicine_name for e in filter_history(entries, action="created")] == ["Ibuprofen"]

def test_search_matches_name_or_details(entries):
    assert [e.action for e in filter_history(entries, search="aspirin")] == ["sold", "updated"]
    assert [e.medicine_name for e in filter_history(entries, search="ALI")] == ["Aspirin"]
    assert [e.medicine_name for e in filter_history(entries, search="catalogue")] == ["Zinc"]

def test_action_and_search_are_anded(entries):
    assert filter_history(entries, action="deleted", search="aspirin") == []

def test_unknown_action_is_rejected(entries):
    with pytest.raises(SnapshotValidationError):
        filter_history(entries, action="archived")

def test_group_by_calendar_day_in_first_seen_order(entries):
    groups = group_history_by_date(entries)
    
    assert [g.day for g in groups] == [date(2025, 6, 15), date(2025, 6, 14), date(2025, 6, 12)]
    assert [e.action for e in groups[0].entries] == ["sold", "updated"]
    assert all(isinstance(e, HistoryEntryRecord) for g in groups for e in g.entries)

def test_group_serialises_day_as_date(entries):
    payload = group_history_by_date(entries)[0].model_dump(by_alias=True, mode="json")
    assert payload["date"] == "2025-06-15"
    assert payload["entries"][0]["medicineName"] == "Aspirin"

def test_action_styles():
    assert history_action_style("created").label == "Medicine Added"
    assert history_action_style("sold").color == "#007BFF"
    assert history_action_style("deleted").color == "#dc3545"
    
    legacy = history_action_style("sale")
    assert legacy.label == "sale"
    assert legacy.color == "#6c757d"

def test_record_accepts_backend_json():
    record = HistoryEntryRecord.model_validate({
        "_id": "65f0c0ffee",
        "medicineId": "m1",
        "medicineName": "Aspirin",
        "action": "created",
        "details": "Added",
        "timestamp": "2025-06-15T10:00:00.000Z",
    })
    assert record.id == "65f0c0ffee"
    assert record.timestamp.tzinfo is not None
