from __future__ import annotations

import logging

from exam_results.domain.logic.ranking import has_valid_mean, rank
from exam_results.domain.logic.records import apply_score_edit, check_exam_type, new_record, rename_record
from exam_results.domain.logic.scoring import compute_weighted_overall
from exam_results.domain.logic.summary import build_report_card
from exam_results.domain.models.entities import EXAM_TYPES, ReportCard, StudentRecord
from exam_results.services.storage import ResultStore, StoreError

logger = logging.getLogger(__name__)


class ResultsService:
    def __init__(self, store: ResultStore) -> None:
        self.store = store

    def start_entry(self, class_name: str, exam_type: str, name: str = "") -> StudentRecord:
        return new_record(class_name, exam_type, name)

    def edit_score(self, record: StudentRecord, subject: str, value: float | None) -> StudentRecord:
        return apply_score_edit(record, subject, value)

    def rename(self, record: StudentRecord, name: str) -> StudentRecord:
        return rename_record(record, name)

    def save(self, record: StudentRecord) -> StudentRecord:
        if record.id is None:
            saved = self.store.create(record)
            logger.info("Saved new %s result for %r in %s", record.exam_type, record.name, record.class_name)
        else:
            saved = self.store.update(record.id, record)
            logger.info("Updated result %s for %r", record.id, record.name)
        return saved

    def delete(self, result_id: int) -> None:
        self.store.delete(result_id)
        logger.info("Deleted result %s", result_id)

    def entries(self, class_name: str, exam_type: str) -> list[StudentRecord]:
        """Stored rows for one class and sitting, in the order they were entered."""
        check_exam_type(exam_type)
        return self.store.list_by(exam_type=exam_type, class_name=class_name)

    def marklist(self, exam_type: str | None = None, class_name: str | None = None) -> list[StudentRecord]:
        """Stored results for the filter, ranked within each class and sitting.

        Without both filters the listing spans several groups; each group is
        ranked on its own and groups appear in the order first stored.
        """
        if exam_type:
            check_exam_type(exam_type)
        groups: dict[tuple[str, str], list[StudentRecord]] = {}
        for record in self.store.list_by(exam_type=exam_type, class_name=class_name):
            groups.setdefault((record.class_name, record.exam_type), []).append(record)
        out: list[StudentRecord] = []
        for group in groups.values():
            out.extend(rank(group))
        return out

    def report_card(self, result_id: int) -> ReportCard:
        record = self.store.get(result_id)
        if record is None:
            raise StoreError(f"Result {result_id} not found")
        group = self.marklist(exam_type=record.exam_type, class_name=record.class_name)
        overall = self.overall_performance(record.name, record.class_name)
        return build_report_card(record, group, overall)

    def overall_performance(self, name: str, class_name: str) -> float | None:
        """Weighted overall across the three sittings, or None if any is missing."""
        means: dict[str, float] = {}
        for record in self.store.list_by(class_name=class_name):
            if record.name == name and has_valid_mean(record):
                means[record.exam_type] = record.mean
        if any(exam_type not in means for exam_type in EXAM_TYPES):
            return None
        return compute_weighted_overall(means["opener"], means["midterm"], means["endterm"])
