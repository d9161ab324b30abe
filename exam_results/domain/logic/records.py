from __future__ import annotations

from dataclasses import replace

from exam_results.domain.logic.scoring import classify_rubric, compute_mean, is_number
from exam_results.domain.logic.subjects import DEFAULT_REGISTRY, SubjectRegistry
from exam_results.domain.models.entities import EXAM_TYPES, UNRANKED, StudentRecord

MIN_SCORE = 0.0
MAX_SCORE = 100.0


class ScoreEditError(ValueError):
    pass


def check_exam_type(exam_type: str) -> str:
    if exam_type not in EXAM_TYPES:
        raise ValueError(f"Unsupported exam type: {exam_type!r}. Use one of {', '.join(EXAM_TYPES)}.")
    return exam_type


def new_record(
    class_name: str,
    exam_type: str,
    name: str = "",
    *,
    registry: SubjectRegistry = DEFAULT_REGISTRY,
) -> StudentRecord:
    """Blank entry row: every subject of the class unset, nothing derived yet."""
    subjects = registry.subjects_for_class(class_name)
    return StudentRecord(
        class_name=class_name,
        exam_type=check_exam_type(exam_type),
        name=name,
        scores={subject: None for subject in subjects},
    )


def rename_record(record: StudentRecord, name: str) -> StudentRecord:
    return replace(record, name=name)


def apply_score_edit(
    record: StudentRecord,
    subject: str,
    value: float | None,
    *,
    registry: SubjectRegistry = DEFAULT_REGISTRY,
) -> StudentRecord:
    """Set one subject score and recompute the derived fields.

    This is the only writer of ``mean`` and ``rubric``. They are filled only
    once every subject of the class has a score and are cleared again as
    soon as any score is unset.
    """
    subjects = registry.subjects_for_class(record.class_name)
    if subject not in subjects:
        raise ScoreEditError(f"{subject!r} is not a subject for class {record.class_name!r}")
    if value is not None:
        if not is_number(value):
            raise TypeError(f"Score must be a number or None, got {value!r}")
        if not MIN_SCORE <= value <= MAX_SCORE:
            raise ScoreEditError(f"Score for {subject!r} must be between 0 and 100, got {value}")
        value = float(value)

    scores = {s: record.scores.get(s) for s in subjects}
    scores[subject] = value

    ordered = [scores[s] for s in subjects]
    if all(score is not None for score in ordered):
        mean = compute_mean(ordered)
        rubric = classify_rubric(mean)
    else:
        mean = None
        rubric = None

    return replace(record, scores=scores, mean=mean, rubric=rubric, position=UNRANKED)
