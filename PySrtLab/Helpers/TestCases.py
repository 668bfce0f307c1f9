import unittest
from typing import Any

from PySrtLab.CueStore import CueStore
from PySrtLab.Helpers.Tests import log_input_expected_result, log_test_name
from PySrtLab.Options import Options
from PySrtLab.SubtitleCue import SubtitleCue

class LoggedTestCase(unittest.TestCase):
    """
    Test case that logs the name of each test and the expected and actual value of each check
    """
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, description : str, expected : Any, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertEqual(expected, actual, description)

    def assertLoggedAlmostEqual(self, description : str, expected : float, actual : float, places : int = 6) -> None:
        log_input_expected_result(description, expected, actual)
        self.assertAlmostEqual(expected, actual, places=places, msg=description)

    def assertLoggedSequenceEqual(self, description : str, expected : Any, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertSequenceEqual(expected, actual, description)

    def assertLoggedTrue(self, description : str, actual : Any) -> None:
        log_input_expected_result(description, True, actual)
        self.assertTrue(actual, description)

    def assertLoggedFalse(self, description : str, actual : Any) -> None:
        log_input_expected_result(description, False, actual)
        self.assertFalse(actual, description)

    def assertLoggedIsNone(self, description : str, actual : Any) -> None:
        log_input_expected_result(description, None, actual)
        self.assertIsNone(actual, description)

    def assertLoggedIsNotNone(self, description : str, actual : Any) -> None:
        log_input_expected_result(description, "not None", actual)
        self.assertIsNotNone(actual, description)

    def assertLoggedIsInstance(self, description : str, actual : Any, expected_type : type) -> None:
        log_input_expected_result(description, expected_type.__name__, type(actual).__name__)
        self.assertIsInstance(actual, expected_type, description)

    def assertLoggedIn(self, description : str, member : Any, container : Any) -> None:
        log_input_expected_result(description, f"contains {member!r}", container)
        self.assertIn(member, container, description)

class SubtitleTestCase(LoggedTestCase):
    """
    Test case with default options that individual tests can override
    """
    def __init__(self, methodName : str = "runTest", custom_options : dict|None = None) -> None:
        super().__init__(methodName)
        self.options = Options(custom_options)

def BuildCueStore(cues : list[tuple[float, float, str]]) -> CueStore:
    """
    Build a store from (start, end, text) tuples. Text lines are given without line terminators.
    """
    store = CueStore()
    for start, end, text in cues:
        cue = SubtitleCue(start, end)
        for line in text.split('\n') if text else []:
            cue.AddLine(line)
        store.Append(cue)
    return store

def BuildSrt(cues : list[tuple[str, str, str]], first_index : int = 1) -> str:
    """
    Build SRT content from (start, end, text) tuples of timestamps and text
    """
    blocks = [ f"{index}\n{start} --> {end}\n{text}\n" for index, (start, end, text) in enumerate(cues, start=first_index) ]
    return "\n".join(blocks)
