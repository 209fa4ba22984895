"""
Test case scorers.

A scorer decides whether a submission satisfies one TestCase. The
evaluator only talks to the TestCaseScorer interface, so a real
sandboxed interpreter can replace the substring heuristic later.
"""

from swiftcamp.schemas import TestCase


class TestCaseScorer:
    """Decides pass/fail for a single test case."""

    __test__ = False  # not a pytest test class

    def score(self, source: str, test_case: TestCase) -> bool:
        raise NotImplementedError


class SubstringScorer(TestCaseScorer):
    """
    Pass if the source contains the expected output OR the input literal.

    This stands in for real execution and is intentionally loose.
    Empty literals never match.
    """

    def score(self, source: str, test_case: TestCase) -> bool:
        return _contains(source, test_case.expected_output) or _contains(source, test_case.input)


def _contains(source: str, literal: str) -> bool:
    return bool(literal) and literal in source
