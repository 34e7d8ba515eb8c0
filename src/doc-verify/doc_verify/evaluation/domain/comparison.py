"""Comparison of captured output against a sample's documented expectation."""

import difflib
import re

from doc_verify.evaluation.domain.errors import EvaluationThrewError, OutputMismatchError
from doc_verify.extraction.domain.sample import Expectation
from doc_verify.runtime.domain.output import EvaluationOutput

# "Error: boom", "TypeError: x is not a function", "json.decoder.JSONDecodeError: ...".
_ERROR_LINE = re.compile(
    r"^(?:[A-Za-z_][\w]*\.)*"
    r"(?P<name>(?:[A-Z]\w*)?(?:Error|Exception)|[A-Z]\w*(?:Exit|Interrupt|Iteration))"
    r"(?::\s?(?P<message>.*))?$"
)

_THROWS_PREFIX = "throws: "


def normalize(text: str) -> str:
    """Drop trailing whitespace on every line, trailing blank lines, and CR before LF."""
    lines = [line.rstrip() for line in text.replace("\r\n", "\n").split("\n")]
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def error_line(stderr: str) -> str | None:
    """Return the last ``Name: message`` line of a runtime's stderr, module prefix removed."""
    found: str | None = None
    for raw in stderr.splitlines():
        match = _ERROR_LINE.match(raw.strip())
        if match is None:
            continue
        message = match.group("message")
        name = match.group("name")
        found = name if message is None else f"{name}: {message.rstrip()}"
    return found


def render_expected(expectation: Expectation) -> str:
    """The expectation as one text block; a documented error becomes a ``throws:`` line."""
    lines = list(expectation.lines)
    if expectation.error is not None:
        lines.append(f"{_THROWS_PREFIX}{expectation.error}")
    return normalize("\n".join(lines))


def render_actual(output: EvaluationOutput) -> str:
    """Captured stdout, plus a ``throws:`` line when the evaluation ended in an error."""
    text = normalize(output.stdout)
    if not output.threw:
        return text
    thrown = error_line(output.stderr) or f"exit code {output.exit_code}"
    lines = [text] if text else []
    lines.append(f"{_THROWS_PREFIX}{thrown}")
    return "\n".join(lines)


def unified_diff(expected: str, actual: str) -> str:
    return "\n".join(
        difflib.unified_diff(
            expected.splitlines(),
            actual.splitlines(),
            fromfile="expected",
            tofile="actual",
            lineterm="",
        )
    )


def error_matches(documented: str, thrown: str | None) -> bool:
    """A bare error name matches any error of that name; otherwise the line must be equal."""
    if thrown is None:
        return False
    documented = documented.strip()
    if ":" not in documented:
        return thrown.split(":", 1)[0] == documented
    return thrown == normalize(documented)


def compare(sample_id: str, expectation: Expectation, output: EvaluationOutput) -> None:
    """Check output against expectation.

    Raises:
        EvaluationThrewError: if the sample threw and no error was documented.
        OutputMismatchError: if stdout differs, a documented error did not
            happen, or a different error was thrown.
    """
    stdout = normalize(output.stdout)
    expected_stdout = normalize(expectation.text)
    thrown = error_line(output.stderr) if output.threw else None

    if expectation.error is None:
        if output.threw:
            raise EvaluationThrewError(
                sample_id=sample_id,
                error=thrown or f"error (exit code {output.exit_code})",
            )
    elif not output.threw:
        raise OutputMismatchError(
            sample_id=sample_id,
            detail=f"expected it to throw {expectation.error} but it completed",
        )
    elif not error_matches(documented=expectation.error, thrown=thrown):
        raise OutputMismatchError(
            sample_id=sample_id,
            detail=f"expected {expectation.error} but it threw {thrown or 'an unrecognised error'}",
        )

    if stdout != expected_stdout:
        raise OutputMismatchError(sample_id=sample_id, detail="output differs")
