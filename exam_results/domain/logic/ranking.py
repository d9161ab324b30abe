from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable

from exam_results.domain.logic.scoring import is_number
from exam_results.domain.models.entities import UNRANKED, StudentRecord


def has_valid_mean(record: StudentRecord) -> bool:
    return is_number(record.mean) and not math.isnan(record.mean)


def rank(records: Iterable[StudentRecord]) -> list[StudentRecord]:
    """Return copies of ``records`` carrying their class position.

    Records with a usable mean are ordered highest first and numbered 1..N;
    equal means keep their input order. The rest follow, in input order,
    marked ``UNRANKED``. The input records are left untouched.
    """
    ranked: list[StudentRecord] = []
    unranked: list[StudentRecord] = []
    for record in records:
        if has_valid_mean(record):
            ranked.append(record)
        else:
            unranked.append(record)

    # list.sort is stable, so ties stay in input order.
    ranked.sort(key=lambda r: r.mean, reverse=True)

    out = [replace(r, position=idx) for idx, r in enumerate(ranked, start=1)]
    out.extend(replace(r, position=UNRANKED) for r in unranked)
    return out
