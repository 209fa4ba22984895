"""
Swift source screening helpers.

Lightweight, regex-based checks used before a submission is run:
- Forbidden operation screening (imports, reflection, raw memory)
- Heuristic line-by-line syntax screening
- Declared variable extraction

None of this parses Swift; it only catches gross malformation.
"""

import re


FORBIDDEN_PATTERNS: tuple[str, ...] = (
    r"import\s+",
    r"NSClassFromString",
    r"performSelector",
    r"unsafeBitCast",
    r"Unmanaged\.",
    r"malloc\(",
    r"free\(",
)

_FORBIDDEN_RES = [re.compile(pattern) for pattern in FORBIDDEN_PATTERNS]
_CONTROL_FLOW_RE = re.compile(r"\b(?:if|for|while)\b")
_VARIABLE_RE = re.compile(r"\b(?:var|let)\s+([a-zA-Z_][a-zA-Z0-9_]*)")

BLOCK_DELIMITERS = ("{", "}")
LINE_COMMENT = "//"


def find_forbidden_operations(source: str) -> list[str]:
    """Return the forbidden snippets found in source, in pattern order."""
    found = []
    for regex in _FORBIDDEN_RES:
        match = regex.search(source)
        if match:
            found.append(match.group(0).strip())
    return found


def contains_forbidden_operations(source: str) -> bool:
    return any(regex.search(source) for regex in _FORBIDDEN_RES)


def _has_valid_assignment(line: str) -> bool:
    parts = line.split("=")
    return len(parts) == 2 and bool(parts[0].strip())


def _has_valid_control_flow(line: str) -> bool:
    return ("(" in line and ")" in line) or "{" in line


def is_valid_line(line: str) -> bool:
    """
    Check one trimmed, non-blank source line.

    The first rule that applies decides:
    1. ends with a block delimiter -> valid
    2. has "=" but no "==" -> exactly one "=" with a non-empty left side
    3. has a control-flow keyword -> needs a parenthesized condition or "{"
    4. otherwise -> valid
    """
    if line.endswith(BLOCK_DELIMITERS):
        return True
    if "=" in line and "==" not in line:
        return _has_valid_assignment(line)
    if _CONTROL_FLOW_RE.search(line):
        return _has_valid_control_flow(line)
    return True


def invalid_lines(source: str) -> list[tuple[int, str]]:
    """Return (1-based line number, trimmed text) for each failing line."""
    failures = []
    for number, raw in enumerate(source.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(LINE_COMMENT):
            continue
        if not is_valid_line(line):
            failures.append((number, line))
    return failures


def validate_syntax(source: str) -> bool:
    return not invalid_lines(source)


def extract_variable_names(source: str) -> list[str]:
    """Names following `var`/`let`, in source order."""
    return _VARIABLE_RE.findall(source)
