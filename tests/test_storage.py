import unittest

from exam_results.domain.logic.records import apply_score_edit, new_record
from exam_results.domain.models.entities import UNRANKED
from exam_results.services.storage import ResultStore, StoreError


class ResultStoreTests(unittest.TestCase):
    def setUp(self):
        self.store = ResultStore(":memory:")

    def tearDown(self):
        self.store.close()

    def _complete(self, class_name, exam_type, name, score):
        record = new_record(class_name, exam_type, name)
        for subject in record.scores:
            record = apply_score_edit(record, subject, score)
        return record

    def test_create_and_get(self):
        saved = self.store.create(self._complete("Grade 2", "opener", "Akinyi", 70))
        self.assertIsNotNone(saved.id)
        loaded = self.store.get(saved.id)
        self.assertEqual(loaded.name, "Akinyi")
        self.assertEqual(loaded.class_name, "Grade 2")
        self.assertEqual(loaded.scores["maths"], 70.0)
        self.assertAlmostEqual(loaded.mean, 70.0)
        self.assertEqual(loaded.rubric, "Meets Expectations (M.E)")
        self.assertEqual(loaded.position, UNRANKED)

    def test_incomplete_record_round_trips_unset(self):
        record = apply_score_edit(new_record("Grade 1", "midterm", "Kip"), "maths", 30)
        loaded = self.store.create(record)
        self.assertIsNone(loaded.mean)
        self.assertIsNone(loaded.rubric)
        self.assertIsNone(loaded.scores["english"])

    def test_update(self):
        saved = self.store.create(new_record("Grade 1", "opener", "Njeri"))
        edited = self._complete("Grade 1", "opener", "Njeri", 50)
        updated = self.store.update(saved.id, edited)
        self.assertEqual(updated.id, saved.id)
        self.assertAlmostEqual(updated.mean, 50.0)

    def test_update_missing_raises(self):
        with self.assertRaises(StoreError):
            self.store.update(999, new_record("Grade 1", "opener"))

    def test_delete(self):
        saved = self.store.create(new_record("Grade 1", "opener", "Mwangi"))
        self.store.delete(saved.id)
        self.assertIsNone(self.store.get(saved.id))

    def test_closed_store_raises_store_error(self):
        saved = self.store.create(new_record("Grade 1", "opener", "Achieng"))
        self.store.close()
        with self.assertRaises(StoreError):
            self.store.delete(saved.id)
        with self.assertRaises(StoreError):
            self.store.list_by()
        with self.assertRaises(StoreError):
            self.store.get(saved.id)
        with self.assertRaises(StoreError):
            self.store.create(new_record("Grade 1", "opener", "Juma"))

    def test_list_by_filters(self):
        self.store.create(new_record("Grade 1", "opener", "a"))
        self.store.create(new_record("Grade 1", "endterm", "b"))
        self.store.create(new_record("Grade 5", "opener", "c"))
        self.assertEqual([r.name for r in self.store.list_by()], ["a", "b", "c"])
        self.assertEqual([r.name for r in self.store.list_by(exam_type="opener")], ["a", "c"])
        self.assertEqual([r.name for r in self.store.list_by(class_name="Grade 1")], ["a", "b"])
        self.assertEqual([r.name for r in self.store.list_by(exam_type="opener", class_name="Grade 5")], ["c"])


if __name__ == "__main__":
    unittest.main()
