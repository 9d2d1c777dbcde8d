"""Tests for report rendering."""

from pathlib import Path

from isc.sync import CopyOutcome, CopyTask, Report, render


def task(name: str) -> CopyTask:
    return CopyTask(source=Path("./src") / name, destination=Path("./dst") / name)


def test_render_empty():
    assert render([]) == "0 files copied successfully; 0 files failed to copy\n"


def test_render_successes():
    outcomes = [CopyOutcome.success(task("a"), 0), CopyOutcome.success(task("b"), 12)]

    expected = (
        "2 files copied successfully; 0 files failed to copy\n"
        "Copied 0 bytes from src/a to dst/a\n"
        "Copied 12 bytes from src/b to dst/b\n"
    )
    assert render(outcomes) == expected


def test_render_mixed_keeps_order():
    outcomes = [
        CopyOutcome.failure(task("a"), PermissionError("Permission denied")),
        CopyOutcome.success(task("b"), 3),
        CopyOutcome.failure(task("c"), OSError("No space left on device")),
    ]

    lines = render(outcomes).splitlines()

    assert lines == [
        "1 files copied successfully; 2 files failed to copy",
        "Failed to copy from src/a to dst/a: Permission denied",
        "Copied 3 bytes from src/b to dst/b",
        "Failed to copy from src/c to dst/c: No space left on device",
    ]


def test_report_counts_add_up():
    outcomes = [
        CopyOutcome.success(task(str(i)), i) if i % 3 else CopyOutcome.failure(task(str(i)), OSError("x"))
        for i in range(10)
    ]

    report = Report.from_outcomes(outcomes)

    assert report.success_count + report.failure_count == report.total == 10
    assert report.failure_count == 4
    assert str(report).splitlines()[0] == (
        f"{report.success_count} files copied successfully; "
        f"{report.failure_count} files failed to copy"
    )


def test_report_is_immutable_snapshot():
    outcomes = [CopyOutcome.success(task("a"), 1)]
    report = Report.from_outcomes(outcomes)

    outcomes.append(CopyOutcome.success(task("b"), 1))

    assert report.total == 1
