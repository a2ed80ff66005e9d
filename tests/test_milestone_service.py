import logging

from recordbricks.core.contracts import RecordResponse
from recordbricks.services.milestone_service import MilestoneService


def reply(**payload) -> RecordResponse:
    return RecordResponse.from_dict(payload)


def test_get_by_project_id_filters_and_orders_by_due_date(api):
    api.fetch_records.return_value = reply(success=True, data=[{"Id": 1, "title_c": "Kickoff"}])

    milestones = MilestoneService(api).get_by_project_id("7")

    assert milestones == [{"Id": 1, "title_c": "Kickoff"}]
    table, params = api.fetch_records.call_args.args
    assert table == "milestone_c"
    assert params["where"] == [{"FieldName": "projectId_c", "Operator": "EqualTo", "Values": [7]}]
    assert params["orderBy"] == [{"fieldName": "dueDate_c", "sorttype": "ASC"}]
    assert [f["field"]["Name"] for f in params["fields"]] == [
        "Name",
        "title_c",
        "description_c",
        "dueDate_c",
        "isCompleted_c",
        "completedDate_c",
        "createdAt_c",
        "projectId_c",
    ]


def test_get_by_project_id_returns_empty_on_unsuccessful_reply(api, caplog):
    api.fetch_records.return_value = reply(success=False, message="Table missing")

    with caplog.at_level(logging.ERROR, logger="recordbricks"):
        assert MilestoneService(api).get_by_project_id(7) == []

    assert "Table missing" in caplog.text


def test_get_by_project_id_with_invalid_project_id(api, caplog):
    with caplog.at_level(logging.ERROR, logger="recordbricks"):
        assert MilestoneService(api).get_by_project_id("x") == []

    api.fetch_records.assert_not_called()
    assert "Error fetching milestones: Valid project ID is required" in caplog.text


def test_create_for_project_builds_full_record(api, fixed_now):
    api.create_record.return_value = reply(success=True, results=[{"success": True, "data": {"Id": 30}}])

    created = MilestoneService(api).create_for_project("7", {"title": "Kickoff", "dueDate": "2024-02-01"})

    assert created == {"Id": 30}
    table, params = api.create_record.call_args.args
    assert table == "milestone_c"
    assert params == {
        "records": [
            {
                "Name": "Kickoff",
                "title_c": "Kickoff",
                "description_c": "",
                "dueDate_c": "2024-02-01",
                "isCompleted_c": False,
                "completedDate_c": None,
                "createdAt_c": fixed_now,
                "projectId_c": 7,
            }
        ]
    }


def test_create_for_project_name_falls_back_to_name_key(api, fixed_now):
    api.create_record.return_value = reply(success=True, results=[{"success": True, "data": {"Id": 31}}])

    MilestoneService(api).create_for_project(7, {"name": "Launch", "isCompleted_c": True})

    record = api.create_record.call_args.args[1]["records"][0]
    assert record["Name"] == "Launch"
    assert record["isCompleted_c"] is True
    assert "title_c" not in record


def test_create_for_project_logs_failures(api, caplog, fixed_now):
    api.create_record.return_value = reply(success=True, results=[{"success": False, "message": "Due date required"}])

    with caplog.at_level(logging.ERROR, logger="recordbricks"):
        assert MilestoneService(api).create_for_project(7, {"title": "Kickoff"}) is None

    assert "Failed to create milestone 1 records:" in caplog.text


def test_create_for_project_uses_given_project_over_data(api, fixed_now):
    api.create_record.return_value = reply(success=True, results=[{"success": True, "data": {"Id": 32}}])

    MilestoneService(api).create_for_project(7, {"title": "Kickoff", "projectId": "n/a"})

    record = api.create_record.call_args.args[1]["records"][0]
    assert record["projectId_c"] == 7


def test_create_rejects_unreadable_project_reference(api, caplog, fixed_now):
    with caplog.at_level(logging.ERROR, logger="recordbricks"):
        assert MilestoneService(api).create({"title": "Kickoff", "projectId_c": {"Name": "Relaunch"}}) is None

    api.create_record.assert_not_called()
    assert "Valid project ID is required" in caplog.text


def test_update_marks_completion_date_when_completed(api, fixed_now):
    api.update_record.return_value = reply(success=True, results=[{"success": True, "data": {"Id": 30}}])

    MilestoneService(api).update(30, {"isCompleted": True})

    record = api.update_record.call_args.args[1]["records"][0]
    assert record == {"Id": 30, "isCompleted_c": True, "completedDate_c": fixed_now}


def test_update_clears_completion_date_when_reopened(api, fixed_now):
    api.update_record.return_value = reply(success=True, results=[{"success": True, "data": {"Id": 30}}])

    MilestoneService(api).update(30, {"isCompleted_c": False, "title": "Kickoff v2"})

    record = api.update_record.call_args.args[1]["records"][0]
    assert record == {
        "Id": 30,
        "Name": "Kickoff v2",
        "title_c": "Kickoff v2",
        "isCompleted_c": False,
        "completedDate_c": None,
    }


def test_delete_milestone(api):
    api.delete_record.return_value = reply(success=True, results=[{"success": True}])

    assert MilestoneService(api).delete("30") is True
    api.delete_record.assert_called_once_with("milestone_c", {"RecordIds": [30]})
