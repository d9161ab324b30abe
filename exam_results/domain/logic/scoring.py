from __future__ import annotations

from typing import Iterable

RUBRIC_BANDS: list[tuple[float, str, str]] = [
    (80, "E.E", "Exceeds Expectations (E.E)"),
    (65, "M.E", "Meets Expectations (M.E)"),
    (50, "A.E", "Approaching Expectations (A.E)"),
    (0, "B.E", "Below Expectations (B.E)"),
]

EXAM_WEIGHTS: dict[str, float] = {
    "opener": 0.3,
    "midterm": 0.3,
    "endterm": 0.4,
}


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def compute_mean(scores: Iterable[float]) -> float:
    """Arithmetic mean of ``scores``; an empty input gives 0.

    No rounding is applied, callers format for display.
    """
    total = 0.0
    count = 0
    for score in scores:
        if not is_number(score):
            raise TypeError(f"All scores must be numbers, got {score!r}")
        total += score
        count += 1
    if count == 0:
        return 0
    return total / count


def classify_rubric(mean: float) -> str:
    if not is_number(mean):
        raise TypeError(f"Mean must be a number, got {mean!r}")
    for threshold, _, label in RUBRIC_BANDS:
        if mean >= threshold:
            return label
    return RUBRIC_BANDS[-1][2]


def rubric_code(label: str) -> str:
    """Short code (e.g. ``"M.E"``) for a rubric label; codes pass through."""
    for _, code, full in RUBRIC_BANDS:
        if label in (full, code):
            return code
    raise ValueError(f"Unknown rubric: {label!r}")


def compute_weighted_overall(opener: float, midterm: float, endterm: float) -> float:
    if not (is_number(opener) and is_number(midterm) and is_number(endterm)):
        raise TypeError("All sitting means must be numbers")
    return (
        EXAM_WEIGHTS["opener"] * opener
        + EXAM_WEIGHTS["midterm"] * midterm
        + EXAM_WEIGHTS["endterm"] * endterm
    )
