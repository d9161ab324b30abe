import unittest

from exam_results.domain.logic.ranking import rank
from exam_results.domain.models.entities import UNRANKED, StudentRecord


def make(name, mean):
    return StudentRecord(class_name="Grade 1", exam_type="opener", name=name, mean=mean)


class RankingTests(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(rank([]), [])

    def test_distinct_means(self):
        ranked = rank([make("a", 55.0), make("b", 91.5), make("c", 70.25)])
        self.assertEqual([r.name for r in ranked], ["b", "c", "a"])
        self.assertEqual([r.position for r in ranked], [1, 2, 3])

    def test_ties_keep_input_order(self):
        ranked = rank([make("first", 60.0), make("top", 88.0), make("second", 60.0), make("third", 60.0)])
        self.assertEqual([r.name for r in ranked], ["top", "first", "second", "third"])
        self.assertEqual([r.position for r in ranked], [1, 2, 3, 4])

    def test_missing_means_are_unranked_and_last(self):
        ranked = rank([make("x", None), make("a", 40.0), make("y", float("nan")), make("b", 80.0)])
        self.assertEqual([r.name for r in ranked], ["b", "a", "x", "y"])
        self.assertEqual([r.position for r in ranked], [1, 2, UNRANKED, UNRANKED])

    def test_all_unranked(self):
        ranked = rank([make("x", None), make("y", None)])
        self.assertEqual([r.position for r in ranked], [UNRANKED, UNRANKED])

    def test_does_not_touch_input(self):
        records = [make("a", 50.0), make("b", 70.0)]
        rank(records)
        self.assertEqual([r.position for r in records], [UNRANKED, UNRANKED])

    def test_class_scenario(self):
        records = [make("Amina", 75.0), make("Baraka", None), make("Chebet", 90.0), make("Daudi", 75.0)]
        ranked = rank(records)
        self.assertEqual(
            [(r.name, r.position) for r in ranked],
            [("Chebet", 1), ("Amina", 2), ("Daudi", 3), ("Baraka", UNRANKED)],
        )


if __name__ == "__main__":
    unittest.main()
