"""Text report for a finished run."""

from dataclasses import dataclass
from typing import Iterable, Tuple

from isc.sync.copy_executor import CopyOutcome


@dataclass(frozen=True)
class Report:
    """Outcomes of a run in submission order.

    Attributes:
        outcomes: One outcome per executed copy task
    """

    outcomes: Tuple[CopyOutcome, ...] = ()

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[CopyOutcome]) -> "Report":
        return cls(outcomes=tuple(outcomes))

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_ok)

    @property
    def failure_count(self) -> int:
        return self.total - self.success_count

    @property
    def summary(self) -> str:
        return (
            f"{self.success_count} files copied successfully; "
            f"{self.failure_count} files failed to copy"
        )

    def __str__(self) -> str:
        lines = [self.summary, *(str(outcome) for outcome in self.outcomes)]
        return "".join(f"{line}\n" for line in lines)


def render(outcomes: Iterable[CopyOutcome]) -> str:
    """Render the summary line followed by one line per outcome."""
    return str(Report.from_outcomes(outcomes))
