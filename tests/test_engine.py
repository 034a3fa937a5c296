"""Tests for status derivation, labour aggregation and request actions."""

from itertools import permutations

import pytest

from techdash_mcp import (
    InvalidArgumentError,
    RequestModel,
    RequestStatus,
    TaskModel,
    TaskStatus,
    approve_all,
    approve_request,
    approved_hours,
    change_task_status,
    decline_all,
    decline_request,
    derive_status,
    edit_task,
    requested_hours,
    set_request_status,
    set_task_status,
    submit_request,
    summarize_labour,
    total_hours,
    with_tasks,
)

P = TaskStatus.PENDING
A = TaskStatus.AUTHORISED
D = TaskStatus.DECLINED
W = TaskStatus.AWAITING_CUSTOMER_RESPONSE


def _tasks(*statuses, hours=1.0):
    return [TaskModel(description=f"Task {i}", estimated_hours=hours, status=s) for i, s in enumerate(statuses)]


def _itemised(*tasks, request_id=1):
    return RequestModel(
        id=request_id,
        vehicle_job_id="4471",
        registration="AB12CDE",
        work_description="Brakes",
        tasks=list(tasks),
    )


def _flat(hours, status=RequestStatus.PENDING, request_id=2):
    return RequestModel(
        id=request_id,
        vehicle_job_id="4472",
        registration="XY34ZZZ",
        work_description="Annual service",
        overall_labour_hours=hours,
        status=status,
    )


# ============================================================================
# Status Derivation
# ============================================================================


class TestDeriveStatus:
    """Tests for derive_status."""

    @pytest.mark.parametrize(
        "statuses, expected",
        [
            ((A,), RequestStatus.AUTHORISED),
            ((A, P), RequestStatus.PARTIALLY_AUTHORISED),
            ((D, D), RequestStatus.DECLINED),
            ((D, P), RequestStatus.PENDING),
            ((W, A), RequestStatus.AWAITING_CUSTOMER_RESPONSE),
            ((P,), RequestStatus.PENDING),
            ((D,), RequestStatus.DECLINED),
            ((W,), RequestStatus.AWAITING_CUSTOMER_RESPONSE),
            ((A, A, A), RequestStatus.AUTHORISED),
            ((A, D), RequestStatus.PARTIALLY_AUTHORISED),
            ((W, D), RequestStatus.AWAITING_CUSTOMER_RESPONSE),
            ((P, P, P), RequestStatus.PENDING),
        ],
    )
    def test_rules(self, statuses, expected):
        assert derive_status(_tasks(*statuses)) == expected

    def test_all_declined_wins_over_everything(self):
        """Rule 1 is checked before the awaiting rule."""
        assert derive_status(_tasks(D, D, D)) == RequestStatus.DECLINED

    def test_awaiting_beats_all_authorised_rules(self):
        assert derive_status(_tasks(A, A, W)) == RequestStatus.AWAITING_CUSTOMER_RESPONSE

    @pytest.mark.parametrize(
        "statuses",
        [(A, P, D), (W, A, P), (D, D, P), (A, A, D, W), (P, P, A)],
    )
    def test_order_independent(self, statuses):
        results = {derive_status(_tasks(*perm)) for perm in permutations(statuses)}
        assert len(results) == 1

    def test_empty_raises(self):
        with pytest.raises(InvalidArgumentError):
            derive_status([])

    def test_empty_is_value_error(self):
        with pytest.raises(ValueError):
            derive_status([])

    def test_unknown_status_counts_as_neither(self):
        tasks = [TaskModel(description="a", status="on hold"), TaskModel(description="b", status=A)]
        assert tasks[0].status == "on hold"
        assert derive_status(tasks) == RequestStatus.PARTIALLY_AUTHORISED


class TestBulkStatus:
    """Tests for approve_all / decline_all / set_task_status."""

    @pytest.mark.parametrize("statuses", [(P,), (D, D), (A, P, W), (W, W, D)])
    def test_approve_all_yields_authorised(self, statuses):
        assert derive_status(approve_all(_tasks(*statuses))) == RequestStatus.AUTHORISED

    @pytest.mark.parametrize("statuses", [(P,), (A, A), (A, P, W), (W,)])
    def test_decline_all_yields_declined(self, statuses):
        assert derive_status(decline_all(_tasks(*statuses))) == RequestStatus.DECLINED

    def test_bulk_does_not_mutate_input(self):
        tasks = _tasks(P, P)
        approve_all(tasks)
        assert [t.status for t in tasks] == [P, P]

    def test_set_task_status(self):
        tasks = _tasks(P, P)
        updated = set_task_status(tasks, 1, A)
        assert [t.status for t in updated] == [P, A]
        assert [t.status for t in tasks] == [P, P]

    def test_set_task_status_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            set_task_status(_tasks(P), 3, A)


# ============================================================================
# Labour Aggregation
# ============================================================================


class TestTotalHours:
    """Tests for total_hours."""

    def test_partially_authorised_scenario(self):
        request = _itemised(
            TaskModel(description="Pads", estimated_hours=0.5, status=A),
            TaskModel(description="Discs", estimated_hours=0.3, status=P),
        )
        assert request.status == RequestStatus.PARTIALLY_AUTHORISED
        assert total_hours(request, TaskStatus.AUTHORISED) == pytest.approx(0.5)
        assert total_hours(request) == pytest.approx(0.8)

    def test_flat_rate_without_filter(self):
        assert total_hours(_flat(2.0)) == 2.0

    def test_flat_rate_filter_gated_by_request_status(self):
        pending = _flat(2.0)
        assert total_hours(pending, TaskStatus.AUTHORISED) == 0.0
        assert total_hours(pending, TaskStatus.PENDING) == 2.0
        authorised = _flat(2.0, RequestStatus.AUTHORISED)
        assert total_hours(authorised, TaskStatus.AUTHORISED) == 2.0

    def test_flat_rate_without_hours_is_zero(self):
        assert total_hours(_flat(None)) == 0.0

    def test_tasks_win_over_overall_figure(self):
        request = RequestModel(
            vehicle_job_id="1",
            registration="AB12CDE",
            work_description="Clutch",
            overall_labour_hours=9.0,
            tasks=[TaskModel(description="Clutch", estimated_hours=3.0)],
        )
        assert request.overall_labour_hours is None
        assert total_hours(request) == 3.0

    def test_additive_over_task_statuses(self):
        request = _itemised(
            TaskModel(description="a", estimated_hours=0.5, status=A),
            TaskModel(description="b", estimated_hours=1.25, status=D),
            TaskModel(description="c", estimated_hours=0.3, status=P),
            TaskModel(description="d", estimated_hours=2.0, status=W),
            TaskModel(description="e", estimated_hours=0.7, status=A),
        )
        by_status = sum(total_hours(request, s) for s in TaskStatus)
        assert total_hours(request) == pytest.approx(by_status)

    def test_negative_hours_clamped_at_summation(self):
        tasks = [
            TaskModel.model_construct(description="bad", estimated_hours=-4.0, parts_required=False, status=A),
            TaskModel(description="good", estimated_hours=1.5, status=A),
        ]
        request = _itemised(*tasks)
        assert total_hours(request) == 1.5
        assert total_hours(request, TaskStatus.AUTHORISED) == 1.5

    def test_non_numeric_hours_never_negative(self):
        tasks = [
            TaskModel(description="a", estimated_hours="abc"),
            TaskModel(description="b", estimated_hours=-2),
            TaskModel(description="c", estimated_hours=None),
            TaskModel.model_construct(description="d", estimated_hours="nope", parts_required=False, status=P),
        ]
        assert total_hours(_itemised(*tasks)) == 0.0

    def test_negative_flat_rate_is_zero(self):
        assert total_hours(_flat(-3.0)) == 0.0

    def test_order_independent(self):
        tasks = [TaskModel(description=str(h), estimated_hours=h) for h in (0.1, 0.2, 0.3, 0.7)]
        totals = {total_hours(_itemised(*perm)) for perm in permutations(tasks)}
        assert len(totals) == 1

    def test_unknown_status_excluded_from_filtered_sums(self):
        request = _itemised(
            TaskModel(description="odd", estimated_hours=1.0, status="on hold"),
            TaskModel(description="ok", estimated_hours=2.0, status=A),
        )
        assert total_hours(request) == 3.0
        assert sum(total_hours(request, s) for s in TaskStatus) == 2.0


class TestReportTotals:
    """Tests for approved_hours / requested_hours / summarize_labour."""

    def test_flat_rate_pending_counts_as_requested_only(self):
        requests = [_flat(2.0)]
        assert requested_hours(requests) == 2.0
        assert approved_hours(requests) == 0.0

    def test_authorised_excluded_from_requested(self):
        requests = [_itemised(*_tasks(A, A, hours=1.0))]
        assert approved_hours(requests) == 2.0
        assert requested_hours(requests) == 0.0

    def test_partially_authorised_counts_in_both(self):
        request = _itemised(
            TaskModel(description="Pads", estimated_hours=0.5, status=A),
            TaskModel(description="Discs", estimated_hours=0.3, status=P),
        )
        assert approved_hours([request]) == pytest.approx(0.5)
        assert requested_hours([request]) == pytest.approx(0.8)

    def test_mixed_collection(self):
        requests = [
            _itemised(*_tasks(A, P, hours=1.0), request_id=1),
            _flat(2.0, request_id=2),
            _flat(4.0, RequestStatus.AUTHORISED, request_id=3),
            _itemised(*_tasks(D, D, hours=0.5), request_id=4),
        ]
        assert approved_hours(requests) == pytest.approx(5.0)
        # 2.0 (itemised partial) + 2.0 (flat pending) + 1.0 (declined)
        assert requested_hours(requests) == pytest.approx(5.0)

    def test_empty_collection(self):
        assert approved_hours([]) == 0.0
        assert requested_hours([]) == 0.0

    def test_summarize_labour(self):
        requests = [_itemised(*_tasks(A, P), request_id=1), _flat(2.0, request_id=2)]
        summary = summarize_labour(requests)
        assert summary.request_count == 2
        assert summary.approved_hours == pytest.approx(1.0)
        assert summary.requested_hours == pytest.approx(4.0)
        assert summary.status_counts == {"partially_authorised": 1, "pending": 1}
        assert [r.request_id for r in summary.requests] == [1, 2]
        assert summary.requests[1].approved_hours == 0.0
        assert summary.requests[1].requested_hours == 2.0

    def test_summary_rows_add_up_to_totals(self):
        requests = [
            _itemised(*_tasks(A, P, hours=1.0), request_id=1),
            _flat(2.0, request_id=2),
            _flat(4.0, RequestStatus.AUTHORISED, request_id=3),
            _itemised(*_tasks(A, A, hours=0.5), request_id=4),
        ]
        summary = summarize_labour(requests)
        assert summary.requests[2].requested_hours == 0.0
        assert summary.requests[3].requested_hours == 0.0
        assert summary.requests[3].approved_hours == pytest.approx(1.0)
        assert sum(r.requested_hours for r in summary.requests) == pytest.approx(summary.requested_hours)
        assert sum(r.approved_hours for r in summary.requests) == pytest.approx(summary.approved_hours)


# ============================================================================
# Request Actions
# ============================================================================


class TestRequestActions:
    """Tests for request-level actions."""

    def test_declined_then_approve_all(self):
        request = _itemised(*_tasks(D, D))
        assert request.status == RequestStatus.DECLINED
        approved = approve_request(request)
        assert approved.status == RequestStatus.AUTHORISED
        assert all(t.status == A for t in approved.tasks)
        assert request.status == RequestStatus.DECLINED

    def test_decline_request(self):
        declined = decline_request(_itemised(*_tasks(A, P)))
        assert declined.status == RequestStatus.DECLINED

    def test_flat_rate_approve_and_decline_set_status(self):
        assert approve_request(_flat(2.0)).status == RequestStatus.AUTHORISED
        assert decline_request(_flat(2.0)).status == RequestStatus.DECLINED

    def test_submit_forces_pending(self):
        request = _itemised(*_tasks(A, D))
        submitted = submit_request(request)
        assert submitted.id is None
        assert submitted.status == RequestStatus.PENDING
        assert all(t.status == P for t in submitted.tasks)

    def test_submit_flat_rate_forces_pending(self):
        submitted = submit_request(_flat(1.5, RequestStatus.AUTHORISED))
        assert submitted.status == RequestStatus.PENDING
        assert submitted.overall_labour_hours == 1.5

    def test_change_task_status_rederives(self):
        request = change_task_status(_itemised(*_tasks(P, P)), 0, A)
        assert request.status == RequestStatus.PARTIALLY_AUTHORISED
        request = change_task_status(request, 1, W)
        assert request.status == RequestStatus.AWAITING_CUSTOMER_RESPONSE

    def test_task_actions_rejected_on_flat_rate(self):
        with pytest.raises(InvalidArgumentError):
            change_task_status(_flat(2.0), 0, A)
        with pytest.raises(InvalidArgumentError):
            edit_task(_flat(2.0), 0, description="x")

    def test_edit_task_coerces_hours(self):
        request = edit_task(_itemised(*_tasks(P, P)), 1, estimated_hours=-5, parts_required=True)
        assert request.tasks[1].estimated_hours == 0.0
        assert request.tasks[1].parts_required is True
        assert request.tasks[0].estimated_hours == 1.0

    def test_edit_task_keeps_status(self):
        request = edit_task(_itemised(*_tasks(A, P)), 0, description="Replace pads")
        assert request.tasks[0].description == "Replace pads"
        assert request.status == RequestStatus.PARTIALLY_AUTHORISED

    def test_edit_task_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            edit_task(_itemised(*_tasks(P)), 5, description="x")

    def test_set_request_status_rejected_on_itemised(self):
        with pytest.raises(InvalidArgumentError):
            set_request_status(_itemised(*_tasks(P)), RequestStatus.AUTHORISED)

    def test_set_request_status_on_flat_rate(self):
        updated = set_request_status(_flat(2.0), RequestStatus.AWAITING_CUSTOMER_RESPONSE)
        assert updated.status == RequestStatus.AWAITING_CUSTOMER_RESPONSE

    def test_with_empty_tasks_switches_to_flat_rate(self):
        request = with_tasks(_itemised(*_tasks(A)), [])
        assert not request.is_itemised
        assert request.overall_labour_hours is None
        assert total_hours(request) == 0.0
