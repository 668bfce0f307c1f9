import unittest

from PySrtLab.Helpers.TestCases import LoggedTestCase
from PySrtLab.Helpers.Tests import log_input_expected_error
from PySrtLab.LinearTransform import (
    FromOnePair,
    FromTwoPairs,
    LeastSquares,
    LinearTransform,
    ParseScale,
    ParseTimePairs,
)
from PySrtLab.SettingsType import SettingsError
from PySrtLab.SrtLabResult import SrtLabResult
from PySrtLab.SubtitleError import DegenerateInputError, InsufficientDataError

class TestTwoPointFit(LoggedTestCase):
    def test_FromTwoPairs(self):
        transform = FromTwoPairs(0, 0, 10, 20)
        self.assertLoggedEqual("scale", 2.0, transform.scale)
        self.assertLoggedEqual("offset", 0.0, transform.offset)
        self.assertLoggedEqual("5 maps to", 10.0, transform.Apply(5))

    def test_FromTwoPairs_maps_both_references(self):
        transform = FromTwoPairs(100.0, 102.5, 3600.0, 3746.7)
        self.assertLoggedAlmostEqual("first reference", 102.5, transform.Apply(100.0))
        self.assertLoggedAlmostEqual("second reference", 3746.7, transform.Apply(3600.0))

    def test_FromTwoPairs_degenerate(self):
        with self.assertRaises(DegenerateInputError) as context:
            FromTwoPairs(5, 1, 5, 2)
        log_input_expected_error((5, 1, 5, 2), DegenerateInputError, context.exception)

    def test_FromOnePair(self):
        transform = FromOnePair(10.0, 12.5)
        self.assertLoggedEqual("scale", 1.0, transform.scale)
        self.assertLoggedEqual("offset", 2.5, transform.offset)
        self.assertLoggedEqual("10 maps to", 12.5, transform.Apply(10.0))

    def test_transform_must_be_finite(self):
        with self.assertRaises(DegenerateInputError):
            LinearTransform(float('inf'), 0.0)

    def test_identity(self):
        self.assertLoggedTrue("default is identity", LinearTransform().is_identity)
        self.assertLoggedFalse("offset is not identity", LinearTransform(1.0, 0.5).is_identity)

class TestLeastSquares(LoggedTestCase):
    def test_exact_linear_data(self):
        pairs = [ (x, 2 * x + 3) for x in [0.0, 1.0, 2.5, 10.0, 42.0] ]
        fit = LeastSquares(pairs)

        self.assertLoggedAlmostEqual("scale", 2.0, fit.scale)
        self.assertLoggedAlmostEqual("offset", 3.0, fit.offset)

        expected_average = sum(y - x for x, y in pairs) / len(pairs)
        self.assertLoggedAlmostEqual("average offset", expected_average, fit.average_offset)

    def test_shifted_data(self):
        fit = LeastSquares([(10.0, 11.0), (20.0, 21.2), (30.0, 30.8)])
        self.assertLoggedAlmostEqual("average offset", 1.0, fit.average_offset)

        transform = fit.AsTransform(average=True)
        self.assertLoggedEqual("average transform scale", 1.0, transform.scale)
        self.assertLoggedAlmostEqual("average transform offset", 1.0, transform.offset)

        transform = fit.AsTransform()
        self.assertLoggedAlmostEqual("fitted scale", fit.scale, transform.scale)

    def test_insufficient_data(self):
        for pairs in [[], [(1.0, 2.0)]]:
            with self.subTest(pairs=pairs):
                with self.assertRaises(InsufficientDataError) as context:
                    LeastSquares(pairs)
                log_input_expected_error(pairs, InsufficientDataError, context.exception)

    def test_zero_variance(self):
        with self.assertRaises(DegenerateInputError):
            LeastSquares([(5.0, 1.0), (5.0, 2.0), (5.0, 3.0)])

class TestParseTimePairs(LoggedTestCase):
    def test_skips_malformed_lines(self):
        result = SrtLabResult()
        lines = [
            "00:00:10,000 00:00:11,000",
            "",
            "# comment",
            "20.0\t21.5",
            "not a pair",
            "00:00:30,000",
            "00:00:40,000 00:00:41,000 extra",
            "1:00 2:00",
        ]
        pairs = ParseTimePairs(lines, result)

        self.assertLoggedSequenceEqual("pairs", [(10.0, 11.0), (20.0, 21.5)], pairs)
        self.assertLoggedEqual("warnings", 4, len(result.pair_warnings))

    def test_too_few_valid_pairs(self):
        pairs = ParseTimePairs(["garbage", "00:00:01,000 00:00:02,000"])
        with self.assertRaises(InsufficientDataError):
            LeastSquares(pairs)

class TestParseScale(LoggedTestCase):
    cases = [
        ("1.5", 1.5),
        (2, 2.0),
        ("0", 0.0),
        ("NTSCPAL", 23.976 / 25),
        ("palntsc", 25 / 23.976),
        ("FILMPAL", 24 / 25),
        ("PALFILM", 25 / 24),
    ]

    def test_ParseScale(self):
        for value, expected in self.cases:
            with self.subTest(value=value):
                self.assertLoggedAlmostEqual(f"scale for {value}", expected, ParseScale(value))

    def test_ParseScale_rejects_invalid(self):
        for value in ["-1", "PALPAL", "fast", ""]:
            with self.subTest(value=value):
                with self.assertRaises(SettingsError):
                    ParseScale(value)

if __name__ == '__main__':
    unittest.main()
