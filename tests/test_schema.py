"""Tests for raw request validation."""

from __future__ import annotations

import copy

import pytest

from conftest import load_request_data


@pytest.fixture
def request_data() -> dict:
    return copy.deepcopy(load_request_data("athlete_week"))


class TestValidateRequest:

    def test_valid_document(self, request_data):
        from study_planner.schema import validate_request

        assert validate_request(request_data) == []

    def test_missing_range(self, request_data):
        from study_planner.schema import validate_request

        del request_data["rangeEnd"]
        errors = validate_request(request_data)
        assert errors == ["request: missing 'rangeEnd'"]

    def test_reversed_range(self, request_data):
        from study_planner.schema import validate_request

        request_data["rangeStart"], request_data["rangeEnd"] = (
            request_data["rangeEnd"], request_data["rangeStart"],
        )
        errors = validate_request(request_data)
        assert len(errors) == 1
        assert "is not before" in errors[0]

    def test_not_an_object(self):
        from study_planner.schema import validate_request

        assert validate_request([]) == ["request: expected object, got list"]

    def test_collects_every_problem(self, request_data):
        from study_planner.schema import validate_request

        request_data["fixedEvents"][0]["end"] = "yesterday"
        request_data["assignments"][1]["priority"] = "URGENT"
        request_data["constraints"]["minBufferMinutes"] = -1
        errors = validate_request(request_data)
        assert len(errors) == 3


class TestValidateFixedEvents:

    def test_missing_keys(self):
        from study_planner.schema import validate_fixed_events

        errors = validate_fixed_events([{"id": "E1", "title": "x"}])
        assert errors == ["fixedEvents[0]: missing 'start', 'end'"]

    def test_start_not_before_end(self):
        from study_planner.schema import validate_fixed_events

        errors = validate_fixed_events([{
            "id": "E1", "title": "x", "type": "CLASS",
            "start": "2025-01-06T10:00:00Z", "end": "2025-01-06T09:00:00Z",
        }])
        assert len(errors) == 1
        assert "is not before end" in errors[0]

    def test_unknown_type(self):
        from study_planner.schema import validate_fixed_events

        errors = validate_fixed_events([{
            "id": "E1", "title": "x", "type": "NAP",
            "start": "2025-01-06T09:00:00Z", "end": "2025-01-06T10:00:00Z",
        }])
        assert errors == ["fixedEvents[0]: unknown type 'NAP'"]

    def test_mixed_awareness(self):
        from study_planner.schema import validate_fixed_events

        errors = validate_fixed_events([{
            "id": "E1", "title": "x",
            "start": "2025-01-06T09:00:00Z", "end": "2025-01-06T10:00:00",
        }])
        assert len(errors) == 1
        assert "aware and naive" in errors[0]

    def test_not_a_list(self):
        from study_planner.schema import validate_fixed_events

        assert validate_fixed_events({}) == ["fixedEvents: expected list, got dict"]

    @pytest.mark.parametrize(
        "meta, message",
        [
            ("MATH-152", "fixedEvents[0].meta: expected object, got str"),
            ([{"courseId": "MATH-152"}], "fixedEvents[0].meta: expected object, got list"),
            ({"courseId": 152}, "fixedEvents[0].meta.courseId: expected string, got 152"),
        ],
        ids=["string", "list", "non-string-id"],
    )
    def test_bad_meta(self, meta, message):
        from study_planner.schema import validate_fixed_events

        errors = validate_fixed_events([{
            "id": "E1", "title": "x", "meta": meta,
            "start": "2025-01-06T09:00:00Z", "end": "2025-01-06T10:00:00Z",
        }])
        assert errors == [message]

    def test_null_meta_allowed(self):
        from study_planner.schema import validate_fixed_events

        assert validate_fixed_events([{
            "id": "E1", "title": "x", "meta": None,
            "start": "2025-01-06T09:00:00Z", "end": "2025-01-06T10:00:00Z",
        }]) == []


class TestValidateWorkItems:

    @pytest.mark.parametrize("estimate", [0, -10, 1.5, "60", True])
    def test_bad_estimate(self, request_data, estimate):
        from study_planner.schema import validate_work_items

        items = request_data["assignments"]
        items[0]["estimatedDurationMinutes"] = estimate
        errors = validate_work_items(items)
        assert len(errors) == 1
        assert "estimatedDurationMinutes" in errors[0]

    def test_bad_min_block(self, request_data):
        from study_planner.schema import validate_work_items

        items = request_data["assignments"]
        items[0]["minBlockDuration"] = 0
        assert len(validate_work_items(items)) == 1

    def test_bad_due_date(self, request_data):
        from study_planner.schema import validate_work_items

        items = request_data["assignments"]
        items[2]["dueDate"] = "soon"
        errors = validate_work_items(items)
        assert errors[0].startswith("assignments[2].dueDate:")

    def test_missing_priority(self, request_data):
        from study_planner.schema import validate_work_items

        items = request_data["assignments"]
        del items[0]["priority"]
        assert validate_work_items(items) == ["assignments[0]: missing 'priority'"]

    @pytest.mark.parametrize(
        "priority", ["URGENT", "high", ["HIGH"], {"level": "HIGH"}, None, 3],
        ids=["unknown", "lowercase", "list", "object", "null", "number"],
    )
    def test_bad_priority(self, request_data, priority):
        from study_planner.schema import validate_work_items

        items = request_data["assignments"]
        items[0]["priority"] = priority
        assert validate_work_items(items) == [f"assignments[0]: unknown priority {priority!r}"]

    def test_null_min_block_allowed(self, request_data):
        from study_planner.schema import validate_work_items

        items = request_data["assignments"]
        items[0]["minBlockDuration"] = None
        assert validate_work_items(items) == []


class TestValidateConstraints:

    def test_empty_is_valid(self):
        from study_planner.schema import validate_constraints

        assert validate_constraints({}) == []

    @pytest.mark.parametrize(
        "constraints",
        [
            {"workDayStart": "6"},
            {"workDayEnd": "24:30"},
            {"minBufferMinutes": "15"},
            {"maxDailyStudyMinutes": -60},
            {"preferredStudyTimes": [{"start": "19:00"}]},
            {"preferredStudyTimes": ["19:00-21:00"]},
            {"preferredStudyTimes": 5},
            {"preferredStudyTimes": "19:00-21:00"},
            {"preferredStudyTimes": {"start": "19:00", "end": "21:00"}},
        ],
        ids=[
            "start", "end", "buffer", "cap", "window-missing-end", "window-not-object",
            "windows-number", "windows-string", "windows-object",
        ],
    )
    def test_invalid(self, constraints):
        from study_planner.schema import validate_constraints

        assert len(validate_constraints(constraints)) == 1

    def test_windows_not_a_list_message(self):
        from study_planner.schema import validate_constraints

        assert validate_constraints({"preferredStudyTimes": 5}) == [
            "constraints.preferredStudyTimes: expected list, got int"
        ]

    def test_null_optionals_allowed(self):
        """null stands for "use the default" on every optional field."""
        from study_planner.schema import validate_constraints

        assert validate_constraints({
            "minBufferMinutes": None,
            "maxDailyStudyMinutes": None,
            "preferredStudyTimes": None,
        }) == []


class TestParseClockTime:

    def test_valid(self):
        from datetime import time

        from study_planner.schema import parse_clock_time

        assert parse_clock_time("06:30") == time(6, 30)

    @pytest.mark.parametrize("text", ["6am", "06:30:00", "xx:yy", "", None])
    def test_invalid(self, text):
        from study_planner.schema import parse_clock_time

        with pytest.raises(ValueError):
            parse_clock_time(text)
