from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from exam_results.domain.models.entities import StudentRecord

logger = logging.getLogger(__name__)


class StoreError(Exception):
    pass


class ResultStore:
    """SQLite persistence for student records.

    The store keeps whatever mean and rubric it is handed; it never derives
    them. Positions are not stored.
    """

    def __init__(self, db_path: str = "exam_results.db") -> None:
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS results (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              name TEXT NOT NULL DEFAULT '',
              class_name TEXT NOT NULL,
              exam_type TEXT NOT NULL,
              scores TEXT NOT NULL,
              mean REAL,
              rubric TEXT,
              created_at TEXT NOT NULL,
              updated_at TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_results_class_exam
              ON results(class_name, exam_type);
            """
        )
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @contextmanager
    def _transaction(self, failure: str) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back and raise ``StoreError`` on any sqlite failure."""
        try:
            with self.conn:
                yield self.conn
        except sqlite3.Error as exc:
            raise StoreError(failure) from exc

    def _fetch(self, query: str, params, failure: str) -> list[sqlite3.Row]:
        try:
            return list(self.conn.execute(query, params).fetchall())
        except sqlite3.Error as exc:
            raise StoreError(failure) from exc

    @staticmethod
    def _from_row(row: sqlite3.Row) -> StudentRecord:
        return StudentRecord(
            id=int(row["id"]),
            name=row["name"],
            class_name=row["class_name"],
            exam_type=row["exam_type"],
            scores=json.loads(row["scores"]),
            mean=row["mean"],
            rubric=row["rubric"],
        )

    def create(self, record: StudentRecord) -> StudentRecord:
        now = self._now()
        with self._transaction(f"Could not save result for {record.name!r}") as conn:
            cur = conn.execute(
                """INSERT INTO results(name, class_name, exam_type, scores, mean, rubric, created_at, updated_at)
                   VALUES(?,?,?,?,?,?,?,?)""",
                (
                    record.name,
                    record.class_name,
                    record.exam_type,
                    json.dumps(dict(record.scores)),
                    record.mean,
                    record.rubric,
                    now,
                    now,
                ),
            )
        result_id = int(cur.lastrowid)
        logger.debug("Created result %s (%s, %s)", result_id, record.class_name, record.exam_type)
        return self.get(result_id)

    def get(self, result_id: int) -> StudentRecord | None:
        rows = self._fetch("SELECT * FROM results WHERE id=?", (result_id,), f"Could not load result {result_id}")
        if not rows:
            return None
        return self._from_row(rows[0])

    def update(self, result_id: int, record: StudentRecord) -> StudentRecord:
        with self._transaction(f"Could not update result {result_id}") as conn:
            cur = conn.execute(
                """UPDATE results
                   SET name=?, class_name=?, exam_type=?, scores=?, mean=?, rubric=?, updated_at=?
                   WHERE id=?""",
                (
                    record.name,
                    record.class_name,
                    record.exam_type,
                    json.dumps(dict(record.scores)),
                    record.mean,
                    record.rubric,
                    self._now(),
                    result_id,
                ),
            )
        if cur.rowcount == 0:
            raise StoreError(f"Result {result_id} not found")
        logger.debug("Updated result %s", result_id)
        return self.get(result_id)

    def delete(self, result_id: int) -> None:
        with self._transaction(f"Could not delete result {result_id}") as conn:
            conn.execute("DELETE FROM results WHERE id=?", (result_id,))
        logger.debug("Deleted result %s", result_id)

    def list_by(self, exam_type: str | None = None, class_name: str | None = None) -> list[StudentRecord]:
        clauses = []
        params: list[str] = []
        if exam_type:
            clauses.append("exam_type=?")
            params.append(exam_type)
        if class_name:
            clauses.append("class_name=?")
            params.append(class_name)
        query = "SELECT * FROM results"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY id"
        rows = self._fetch(query, params, "Could not list results")
        return [self._from_row(row) for row in rows]
