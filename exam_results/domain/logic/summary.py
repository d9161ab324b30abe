from __future__ import annotations

from typing import Iterable

from exam_results.domain.logic.ranking import has_valid_mean
from exam_results.domain.logic.scoring import classify_rubric, rubric_code
from exam_results.domain.logic.subjects import DEFAULT_REGISTRY, SubjectRegistry
from exam_results.domain.models.entities import ReportCard, StudentRecord, SubjectLine

SUBJECT_REMARKS: dict[str, str] = {
    "E.E": "Excellent",
    "M.E": "Outstanding",
    "A.E": "You can do better",
    "B.E": "Needs improved study habits",
}

OVERALL_REMARKS: dict[str, str] = {
    "E.E": "An exemplary learner; continues to set the bar for others.",
    "M.E": "Has a good grasp of concepts and shows steady improvement.",
    "A.E": "Beginning to understand core ideas; would benefit from targeted support.",
    "B.E": "Can do better with increased effort and a structured learning plan.",
}


def class_average(records: Iterable[StudentRecord]) -> float:
    means = [r.mean for r in records if has_valid_mean(r)]
    if not means:
        return 0.0
    return sum(means) / len(means)


def _code_or_default(rubric: str | None) -> str:
    if not rubric:
        return "B.E"
    try:
        return rubric_code(rubric)
    except ValueError:
        return "B.E"


def subject_remark(rubric: str | None) -> str:
    return SUBJECT_REMARKS[_code_or_default(rubric)]


def overall_remark(rubric: str | None) -> str:
    return OVERALL_REMARKS[_code_or_default(rubric)]


def build_report_card(
    record: StudentRecord,
    group: list[StudentRecord],
    overall: float | None = None,
    *,
    registry: SubjectRegistry = DEFAULT_REGISTRY,
) -> ReportCard:
    """Report card for ``record`` against its ranked class group.

    ``group`` is the output of ``rank`` for the record's class and sitting;
    the record's position is taken from there.
    """
    ranked = next((r for r in group if r.id is not None and r.id == record.id), record)
    lines = []
    for subject in registry.subjects_for_class(record.class_name):
        score = record.scores.get(subject)
        rubric = classify_rubric(score) if score is not None else None
        lines.append(
            SubjectLine(
                subject=subject,
                label=registry.display_name(subject),
                score=score,
                rubric=rubric,
                remark=subject_remark(rubric),
            )
        )
    return ReportCard(
        record=ranked,
        class_size=len(group),
        subjects=tuple(lines),
        class_average=class_average(group),
        remark=overall_remark(record.rubric),
        overall=overall,
    )
