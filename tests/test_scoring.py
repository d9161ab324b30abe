import unittest

from exam_results.domain.logic.scoring import (
    classify_rubric,
    compute_mean,
    compute_weighted_overall,
    rubric_code,
)


class MeanTests(unittest.TestCase):
    def test_empty_is_zero(self):
        self.assertEqual(compute_mean([]), 0)

    def test_arithmetic_mean(self):
        self.assertAlmostEqual(compute_mean([90, 80, 70, 60]), 75.0)
        self.assertAlmostEqual(compute_mean([50.5, 49.5]), 50.0)

    def test_not_rounded(self):
        self.assertAlmostEqual(compute_mean([1, 2, 2]), 5 / 3)

    def test_order_does_not_matter(self):
        scores = [73, 41.5, 88, 12, 99]
        self.assertAlmostEqual(compute_mean(scores), compute_mean(list(reversed(scores))))
        self.assertAlmostEqual(compute_mean(scores), compute_mean(sorted(scores)))

    def test_rejects_non_numbers(self):
        with self.assertRaises(TypeError):
            compute_mean([80, "90"])
        with self.assertRaises(TypeError):
            compute_mean([80, None])
        with self.assertRaises(TypeError):
            compute_mean([True, 80])


class RubricTests(unittest.TestCase):
    def test_band_boundaries(self):
        self.assertEqual(classify_rubric(80), "Exceeds Expectations (E.E)")
        self.assertEqual(classify_rubric(100), "Exceeds Expectations (E.E)")
        self.assertEqual(classify_rubric(79.9), "Meets Expectations (M.E)")
        self.assertEqual(classify_rubric(79.999), "Meets Expectations (M.E)")
        self.assertEqual(classify_rubric(65), "Meets Expectations (M.E)")
        self.assertEqual(classify_rubric(64.9), "Approaching Expectations (A.E)")
        self.assertEqual(classify_rubric(50), "Approaching Expectations (A.E)")
        self.assertEqual(classify_rubric(49.9), "Below Expectations (B.E)")
        self.assertEqual(classify_rubric(0), "Below Expectations (B.E)")
        self.assertEqual(classify_rubric(-5), "Below Expectations (B.E)")

    def test_rejects_non_numbers(self):
        with self.assertRaises(TypeError):
            classify_rubric("80")
        with self.assertRaises(TypeError):
            classify_rubric(None)

    def test_rubric_code(self):
        self.assertEqual(rubric_code("Meets Expectations (M.E)"), "M.E")
        self.assertEqual(rubric_code("B.E"), "B.E")
        with self.assertRaises(ValueError):
            rubric_code("Excellent")


class WeightedOverallTests(unittest.TestCase):
    def test_weights(self):
        self.assertEqual(compute_weighted_overall(100, 100, 100), 100.0)
        self.assertEqual(compute_weighted_overall(0, 0, 100), 40.0)
        self.assertAlmostEqual(compute_weighted_overall(100, 0, 0), 30.0)
        self.assertAlmostEqual(compute_weighted_overall(60, 70, 80), 71.0)

    def test_rejects_non_numbers(self):
        with self.assertRaises(TypeError):
            compute_weighted_overall(50, "60", 70)
        with self.assertRaises(TypeError):
            compute_weighted_overall(50, 60, None)
        with self.assertRaises(TypeError):
            compute_weighted_overall(True, 0, 0)


if __name__ == "__main__":
    unittest.main()
