from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

EXAM_TYPES: tuple[str, ...] = ("opener", "midterm", "endterm")

# Position shown for a record with no usable mean.
UNRANKED = "-"


@dataclass(frozen=True)
class StudentRecord:
    """One student's marks for one class and exam sitting.

    ``mean`` and ``rubric`` are derived from ``scores`` by
    ``records.apply_score_edit``; ``position`` is set transiently by
    ``ranking.rank`` and is never persisted.
    """

    class_name: str
    exam_type: str
    name: str = ""
    scores: Mapping[str, float | None] = field(default_factory=dict)
    mean: float | None = None
    rubric: str | None = None
    position: int | str = UNRANKED
    id: int | None = None


@dataclass(frozen=True)
class SubjectLine:
    subject: str
    label: str
    score: float | None
    rubric: str | None
    remark: str


@dataclass(frozen=True)
class ReportCard:
    """Everything an individual report shows; nothing here is computed by the view."""

    record: StudentRecord
    class_size: int
    subjects: tuple[SubjectLine, ...]
    class_average: float
    remark: str
    overall: float | None = None
