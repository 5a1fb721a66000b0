"""Confirmation state: selection invariants, edits with re-validation, confirm dispatch."""

import threading

import pytest

from ai_mode.confirmation import (
    CANCELLED,
    CONFIRMED,
    DISPATCHING,
    NOTHING_SELECTED,
    OPEN,
    ConfirmationController,
    build_notifications,
)
from ai_mode.errors import UserInputError
from ai_mode.schema import Action, ExecutionReport, ExecutionResult, ExecutionSummary
from ai_mode.validator import validate_actions


def make(kind, **payload):
    return Action(type=kind, data=payload)


@pytest.fixture
def controller(catalog):
    validated = validate_actions(
        [
            make("create", title="Dune Part 3", status="Planned"),   # valid
            make("update", title="Inception", status="Finished"),    # invalid: no match
            make("delete", title="The Room"),                        # valid
            make("create", title="Oppenheimer", my_rating=15),      # invalid: rating
        ],
        catalog,
    )
    return ConfirmationController(validated, catalog)


def succeed_all(actions):
    return ExecutionReport.from_results(
        [ExecutionResult(action=a, success=True, entry_id=f"id-{i}") for i, a in enumerate(actions)]
    )


def assert_selection_valid(ctrl):
    assert all(ctrl.is_valid(i) for i in ctrl.selected)


class TestSelection:

    def test_initial_selection_is_valid_indices(self, controller):
        assert controller.selected == [0, 2]
        assert controller.state == OPEN

    def test_toggle_valid_index(self, controller):
        assert controller.toggle(0) is False
        assert controller.selected == [2]
        assert controller.toggle(0) is True
        assert controller.selected == [0, 2]

    def test_toggle_invalid_index_is_noop(self, controller):
        assert controller.toggle(1) is False
        assert controller.toggle(3) is False
        assert controller.selected == [0, 2]

    def test_toggle_out_of_range(self, controller):
        with pytest.raises(IndexError):
            controller.toggle(10)

    def test_select_all_only_valid(self, controller):
        controller.deselect_all()
        assert controller.selected == []
        controller.select_all()
        assert controller.selected == [0, 2]

    def test_invariant_holds_through_any_sequence(self, controller):
        ops = [
            lambda c: c.toggle(1),
            lambda c: c.select_all(),
            lambda c: c.toggle(3),
            lambda c: c.deselect_all(),
            lambda c: c.toggle(2),
            lambda c: c.edit(0, {"my_rating": 99}),
            lambda c: c.select_all(),
            lambda c: c.toggle(0),
        ]
        for op in ops:
            op(controller)
            assert_selection_valid(controller)


class TestEdit:

    def test_edit_merges_payload(self, controller):
        result = controller.edit(0, {"platform": "Cinema"})
        assert result.action.payload == {"title": "Dune Part 3", "status": "Planned", "platform": "Cinema"}
        assert controller.items[0].action.payload["platform"] == "Cinema"
        assert controller.is_selected(0)

    def test_edit_that_invalidates_deselects(self, controller):
        result = controller.edit(0, {"my_rating": 11})
        assert result.verdict.is_valid is False
        assert not controller.is_selected(0)
        assert controller.toggle(0) is False

    def test_edit_that_fixes_does_not_autoselect(self, controller):
        result = controller.edit(3, {"my_rating": 9})
        assert result.verdict.is_valid is True
        assert not controller.is_selected(3)
        assert controller.toggle(3) is True

    def test_edit_non_create_rejected(self, controller):
        with pytest.raises(UserInputError):
            controller.edit(2, {"status": "Dropped"})

    def test_edit_warns_on_existing_title(self, controller):
        result = controller.edit(0, {"title": "the room"})
        assert result.verdict.warnings == ["Similar title already exists: The Room"]


class TestConfirm:

    def test_confirm_dispatches_selected_in_order(self, controller):
        dispatched = []

        def execute(actions):
            dispatched.extend(actions)
            return succeed_all(actions)

        outcome = controller.confirm(execute)
        assert [a.title for a in dispatched] == ["Dune Part 3", "The Room"]
        assert dispatched[1].target_id == "m1"
        assert outcome.ok is True
        assert outcome.message == "Executed 2/2 actions"
        assert outcome.notifications == ["Successfully executed 2 actions"]
        assert controller.state == CONFIRMED

    def test_confirm_with_nothing_selected(self, controller):
        controller.deselect_all()
        called = []
        outcome = controller.confirm(lambda actions: called.append(actions))
        assert called == []
        assert outcome.ok is False
        assert outcome.error == "UserInputError"
        assert outcome.message == NOTHING_SELECTED
        assert controller.state == OPEN

    def test_dispatch_failure_keeps_controller_open(self, controller, error_log_dir):
        def boom(actions):
            raise ConnectionError("store unreachable")

        outcome = controller.confirm(boom)
        assert outcome.ok is False
        assert outcome.error == "ConnectionError"
        assert controller.state == OPEN
        assert (error_log_dir / "errors.jsonl").exists()

    def test_no_transitions_after_confirm(self, controller):
        controller.confirm(succeed_all)
        with pytest.raises(RuntimeError):
            controller.toggle(0)

    def test_cancel(self, controller):
        controller.cancel()
        assert controller.state == CANCELLED
        with pytest.raises(RuntimeError):
            controller.confirm(succeed_all)

    def test_second_confirm_while_dispatching_is_rejected(self, controller):
        entered = threading.Event()
        release = threading.Event()
        calls = []

        def slow_execute(actions):
            calls.append(actions)
            entered.set()
            release.wait(timeout=5)
            return succeed_all(actions)

        outcomes = []
        first = threading.Thread(target=lambda: outcomes.append(controller.confirm(slow_execute)))
        first.start()
        assert entered.wait(timeout=5)
        assert controller.state == DISPATCHING

        with pytest.raises(RuntimeError):
            controller.confirm(slow_execute)
        with pytest.raises(RuntimeError):
            controller.cancel()

        release.set()
        first.join(timeout=5)
        assert len(calls) == 1
        assert outcomes[0].ok is True
        assert controller.state == CONFIRMED

    def test_retry_after_dispatch_failure(self, controller):
        def boom(actions):
            raise ConnectionError("store unreachable")

        controller.confirm(boom)
        outcome = controller.confirm(succeed_all)
        assert outcome.ok is True
        assert controller.state == CONFIRMED


def test_notifications_split_partial_success():
    assert build_notifications(ExecutionSummary(total=5, succeeded=4, failed=1)) == [
        "Successfully executed 4 actions",
        "1 action failed",
    ]
    assert build_notifications(ExecutionSummary(total=1, succeeded=1, failed=0)) == [
        "Successfully executed 1 action",
    ]
