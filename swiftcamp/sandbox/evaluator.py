"""
CodeEvaluator - Screen and score learner submissions.

A submission goes through two phases:
1. Synchronous pre-checks (empty source, forbidden operations,
   heuristic syntax). Failures are returned immediately.
2. A simulated run, scheduled on a worker thread, that lists declared
   variables and scores the challenge's test cases. Each accepted
   submission owns its own Future, so overlapping submissions never
   overwrite each other's report.
"""

import logging
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from swiftcamp.schemas import Challenge, TestCase

from .scoring import SubstringScorer, TestCaseScorer
from .syntax import extract_variable_names, find_forbidden_operations, invalid_lines


logger = logging.getLogger(__name__)

FORBIDDEN_ERROR = "forbidden operations present"
SYNTAX_ERROR = "invalid syntax"

RUN_BANNER = "🚀 Running your code..."
SUCCESS_LINE = "✅ Code executed successfully!"
ALL_PASSED_LINE = "✅ All tests passed! Great job! 🎉"
SOME_FAILED_LINE = "❌ Some tests failed. Check your code and try again."
PERFECT_MATCH_LINES = (
    "✅ Perfect! Your solution matches exactly!",
    "",
    "🎉 Great job! You've completed this challenge.",
)
NOT_EXACT_LINES = (
    "⚠️ Your solution doesn't match exactly, but let's test it...",
    "",
)


@dataclass(frozen=True)
class TestResult:
    __test__ = False  # not a pytest test class

    description: str
    passed: bool
    expected: str


@dataclass
class RunReport:
    """Narrative and verdict for one simulated run."""
    lines: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    results: list[TestResult] = field(default_factory=list)
    error: Optional[str] = None
    solution_matched: bool = False

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success(self) -> bool:
        return self.error is None and self.passed == self.total

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@dataclass
class Submission:
    """
    Handle for one submit/check call.

    Every submission except an empty one carries a Future resolving to
    its RunReport. Rejected submissions also carry `error` and
    `details`, and their report is already resolved with `error` set.
    """
    source: str
    accepted: bool
    error: Optional[str] = None
    details: list[str] = field(default_factory=list)
    report: Optional[Future] = None
    sequence: int = 0

    def result(self, timeout: Optional[float] = None) -> Optional[RunReport]:
        """Wait for the report (None for empty submissions)."""
        if self.report is None:
            return None
        return self.report.result(timeout=timeout)


def simulate_run(
    source: str,
    challenge: Optional[Challenge] = None,
    scorer: Optional[TestCaseScorer] = None,
    preamble: tuple[str, ...] = (),
) -> RunReport:
    """Build the report for a submission that passed pre-checks."""
    scorer = scorer or SubstringScorer()
    report = RunReport(lines=list(preamble))
    report.lines += [RUN_BANNER, ""]

    report.variables = extract_variable_names(source)
    if report.variables:
        report.lines.append("📦 Variables created:")
        report.lines += [f"   - {name}" for name in report.variables]
        report.lines.append("")

    if challenge is None:
        report.lines.append(SUCCESS_LINE)
        return report

    for test_case in challenge.test_cases:
        report.results.append(_run_test_case(source, test_case, scorer, report.lines))

    report.lines.append(f"🧪 Test Results: {report.passed}/{report.total} passed")
    report.lines.append("")
    report.lines.append(ALL_PASSED_LINE if report.passed == report.total else SOME_FAILED_LINE)
    return report


def _run_test_case(
    source: str, test_case: TestCase, scorer: TestCaseScorer, lines: list[str]
) -> TestResult:
    lines.append(f"🔍 Testing: {test_case.description}")
    passed = scorer.score(source, test_case)
    if passed:
        lines.append("   ✅ Passed")
    else:
        lines.append(f"   ❌ Failed - Expected: {test_case.expected_output}")
    return TestResult(
        description=test_case.description,
        passed=passed,
        expected=test_case.expected_output,
    )


class CodeEvaluator:
    """
    Validate submissions and simulate their execution.

    `last_error` holds the most recent rejection reason and
    `latest_report` the report of the newest submission that has
    finished (rejections included); reports from older submissions
    never replace it.
    """

    def __init__(
        self,
        scorer: Optional[TestCaseScorer] = None,
        executor: Optional[Executor] = None,
        delay: float = 0.0,
    ):
        """
        Initialize evaluator.

        Args:
            scorer: Test case scorer (default: SubstringScorer)
            executor: Runs simulated executions (default: own thread pool)
            delay: Seconds the simulated run pauses before reporting
        """
        self.scorer = scorer or SubstringScorer()
        self.delay = delay
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="swiftcamp-run"
        )
        self._lock = threading.Lock()
        self._sequence = 0
        self._published_sequence = 0
        self.last_error: Optional[str] = None
        self.latest_report: Optional[RunReport] = None

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def submit(self, source: str, challenge: Optional[Challenge] = None) -> Submission:
        """
        Screen source and schedule its simulated run.

        Returns a rejected Submission when the source uses forbidden
        operations or fails the syntax screen; its report is resolved
        immediately with `error` set. Source that is empty or only
        whitespace is not runnable and gets no report at all.
        """
        return self._submit(source, challenge)

    def check_solution(self, source: str, challenge: Challenge) -> Submission:
        """
        Compare against the reference solution before testing.

        An exact match (ignoring surrounding whitespace) reports success
        immediately without scoring test cases; anything else is
        submitted normally.
        """
        if source.strip() != challenge.solution.strip():
            return self._submit(source, challenge, preamble=NOT_EXACT_LINES)

        report = RunReport(lines=list(PERFECT_MATCH_LINES), solution_matched=True)
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
            self.last_error = None
        self._publish(sequence, report)

        future: Future = Future()
        future.set_result(report)
        return Submission(source=source, accepted=True, report=future, sequence=sequence)

    def _submit(
        self,
        source: str,
        challenge: Optional[Challenge],
        preamble: tuple[str, ...] = (),
    ) -> Submission:
        if not source.strip():
            logger.debug("Empty submission ignored")
            return Submission(source=source, accepted=False)

        forbidden = find_forbidden_operations(source)
        if forbidden:
            details = [f"Forbidden: {snippet}" for snippet in forbidden]
            return self._reject(source, FORBIDDEN_ERROR, details)

        failures = invalid_lines(source)
        if failures:
            details = [f"Line {number}: {text}" for number, text in failures]
            return self._reject(source, SYNTAX_ERROR, details)

        with self._lock:
            self._sequence += 1
            sequence = self._sequence
            self.last_error = None

        future = self._executor.submit(self._run, source, challenge, preamble, sequence)
        logger.debug(f"Submission {sequence} scheduled")
        return Submission(source=source, accepted=True, report=future, sequence=sequence)

    def _reject(self, source: str, error: str, details: list[str]) -> Submission:
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
            self.last_error = error
        logger.info(f"Submission {sequence} rejected: {error}")

        report = RunReport(lines=[f"❌ Error: {error}", *details], error=error)
        self._publish(sequence, report)

        future: Future = Future()
        future.set_result(report)
        return Submission(
            source=source,
            accepted=False,
            error=error,
            details=details,
            report=future,
            sequence=sequence,
        )

    def _run(
        self,
        source: str,
        challenge: Optional[Challenge],
        preamble: tuple[str, ...],
        sequence: int,
    ) -> RunReport:
        if self.delay > 0:
            time.sleep(self.delay)
        report = simulate_run(source, challenge, self.scorer, preamble)
        self._publish(sequence, report)
        logger.debug(f"Submission {sequence} finished: {report.passed}/{report.total} passed")
        return report

    def _publish(self, sequence: int, report: RunReport):
        with self._lock:
            if sequence < self._sequence or sequence <= self._published_sequence:
                logger.debug(f"Discarding stale report for submission {sequence}")
                return
            self._published_sequence = sequence
            self.latest_report = report

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def hints(self, challenge: Challenge, revealed: int) -> list[str]:
        """The first `revealed` hints of a challenge."""
        return list(challenge.hints[:max(0, revealed)])

    def reset(self):
        """Clear the latest report and error. Runs still in flight won't publish."""
        with self._lock:
            self.last_error = None
            self.latest_report = None
            self._published_sequence = self._sequence

    def shutdown(self, wait: bool = True):
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "CodeEvaluator":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
