"""Tests for the step executor and its report."""

from __future__ import annotations

from manuscript.config import Step
from manuscript.connectors.sim import SimConnector
from manuscript.interaction.resolver import Strategy
from manuscript.runner import Action, ExecutionReport, StepExecutor, StepOutcome

from .trees import group, static_text, text_field, window

TRANSFER_STEPS = [
    Step(target="transfer_recipient", value="Alice"),
    Step(target="Beneficiary IBAN", value="DE89370400440532013000"),
    Step(target="0.00", value="42.50"),
    Step(target="Invoice Payment", value="Invoice Payment"),
]


def _demo_root(conn: SimConnector):
    return conn.windows()[0]


# ---------------------------------------------------------------------------
# End-to-end transfer scenario
# ---------------------------------------------------------------------------


class TestTransferScenario:
    def test_three_entered_one_skipped(self, demo):
        report = StepExecutor(demo).execute(_demo_root(demo), TRANSFER_STEPS)
        assert [o.action for o in report.outcomes] == [
            Action.ENTERED, Action.ENTERED, Action.ENTERED, Action.SKIPPED,
        ]
        assert [o.strategy for o in report.outcomes] == [
            Strategy.ID, Strategy.LABEL_ANCHOR, Strategy.PLACEHOLDER, Strategy.VALUE_MATCH,
        ]
        assert report.fail_count == 0
        assert report.success_count == 4
        assert report.exit_code == 0

    def test_values_are_written_to_the_tree(self, demo):
        StepExecutor(demo).execute(_demo_root(demo), TRANSFER_STEPS)
        written = [text for _, text in demo.writes]
        assert written == ["Alice", "DE89370400440532013000", "42.50"]

    def test_report_order_follows_steps(self, demo):
        report = StepExecutor(demo).execute(_demo_root(demo), TRANSFER_STEPS)
        assert [o.target for o in report.outcomes] == [s.target for s in TRANSFER_STEPS]


# ---------------------------------------------------------------------------
# Idempotence
# ---------------------------------------------------------------------------


class TestIdempotence:
    def test_second_run_does_not_rewrite_filled_fields(self, demo):
        root = _demo_root(demo)
        StepExecutor(demo).execute(root, TRANSFER_STEPS)
        writes_after_first = len(demo.writes)

        again = [
            Step(target="Alice", value="Alice"),
            Step(target="42.50", value="42.50"),
            Step(target="Invoice Payment", value="Invoice Payment"),
        ]
        report = StepExecutor(demo).execute(root, again)
        assert len(demo.writes) == writes_after_first
        assert report.count(Action.SKIPPED) == 3
        assert report.fail_count == 0
        assert all(o.strategy is Strategy.VALUE_MATCH for o in report.outcomes)

    def test_value_match_step_is_stable_across_runs(self, demo):
        root = _demo_root(demo)
        step = [Step(target="Invoice Payment", value="Invoice Payment")]
        first = StepExecutor(demo).execute(root, step)
        second = StepExecutor(demo).execute(root, step)
        assert first.outcomes == second.outcomes
        assert demo.writes == []


# ---------------------------------------------------------------------------
# Failures and read mode
# ---------------------------------------------------------------------------


class TestOutcomes:
    def test_not_found_counts_as_failure(self, demo):
        report = StepExecutor(demo).execute(_demo_root(demo), [Step(target="nope", value="x")])
        assert report.outcomes == (StepOutcome("nope", Action.NOT_FOUND),)
        assert report.fail_count == 1
        assert report.exit_code == 1

    def test_read_mode_reports_value_or_description(self, demo):
        report = StepExecutor(demo).execute(_demo_root(demo), [Step(target="transfer_recipient")])
        outcome = report.outcomes[0]
        assert outcome.action is Action.READ
        assert outcome.value == "Recipient Name"
        assert report.fail_count == 0
        assert demo.writes == []

    def test_read_of_empty_field(self, conn):
        root = window(text_field(identifier="blank"))
        outcome = StepExecutor(conn).execute(root, [Step(target="blank")]).outcomes[0]
        assert outcome.action is Action.READ
        assert outcome.value == ""

    def test_write_failure_continues_run(self, conn):
        locked = text_field(identifier="locked", writable=False)
        open_field = text_field(identifier="open")
        root = window(locked, open_field)
        report = StepExecutor(conn).execute(root, [
            Step(target="locked", value="a"),
            Step(target="open", value="b"),
        ])
        assert [o.action for o in report.outcomes] == [Action.FAILED_TO_ENTER, Action.ENTERED]
        assert report.fail_count == 1
        assert report.success_count == 1
        assert open_field.value == "b"
        assert locked.value is None

    def test_partial_failure_totals(self, demo):
        steps = TRANSFER_STEPS + [Step(target="missing one"), Step(target="missing two", value="x")]
        report = StepExecutor(demo).execute(_demo_root(demo), steps)
        assert report.total == 6
        assert report.fail_count == 2
        assert report.success_count + report.fail_count == report.total
        assert report.summary() == "Total Steps: 6 | Success: 4 | Failed: 2"

    def test_tree_changes_between_steps_are_seen(self, conn):
        field = text_field(description="Code")
        root = window(group(static_text("OTP"), field))
        report = StepExecutor(conn).execute(root, [
            Step(target="Code", value="1234"),
            Step(target="1234", value="1234"),
        ])
        assert [o.action for o in report.outcomes] == [Action.ENTERED, Action.SKIPPED]


# ---------------------------------------------------------------------------
# Callback and report
# ---------------------------------------------------------------------------


class TestReport:
    def test_callback_sees_outcomes_in_order(self, demo):
        seen = []
        StepExecutor(demo, on_outcome=seen.append).execute(_demo_root(demo), TRANSFER_STEPS)
        assert [o.target for o in seen] == [s.target for s in TRANSFER_STEPS]

    def test_empty_step_list(self, demo):
        report = StepExecutor(demo).execute(_demo_root(demo), [])
        assert report == ExecutionReport(())
        assert report.ok
        assert report.summary() == "Total Steps: 0 | Success: 0 | Failed: 0"
