"""
SwiftCamp Sandbox - Simulated execution of learner submissions.

This module provides:
- Syntax helpers: forbidden operations, heuristic syntax, variable names
- Scorers: pluggable pass/fail decision per test case
- CodeEvaluator: pre-checks plus asynchronous simulated runs
"""

from .syntax import (
    FORBIDDEN_PATTERNS,
    contains_forbidden_operations,
    find_forbidden_operations,
    is_valid_line,
    invalid_lines,
    validate_syntax,
    extract_variable_names,
)

from .scoring import (
    TestCaseScorer,
    SubstringScorer,
)

from .evaluator import (
    CodeEvaluator,
    RunReport,
    Submission,
    TestResult,
    simulate_run,
    FORBIDDEN_ERROR,
    SYNTAX_ERROR,
)

__all__ = [
    # Syntax
    "FORBIDDEN_PATTERNS",
    "contains_forbidden_operations",
    "find_forbidden_operations",
    "is_valid_line",
    "invalid_lines",
    "validate_syntax",
    "extract_variable_names",
    # Scoring
    "TestCaseScorer",
    "SubstringScorer",
    # Evaluator
    "CodeEvaluator",
    "RunReport",
    "Submission",
    "TestResult",
    "simulate_run",
    "FORBIDDEN_ERROR",
    "SYNTAX_ERROR",
]
