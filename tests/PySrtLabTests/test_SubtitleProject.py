import os
import tempfile
import unittest

from PySrtLab import init_options, init_transform, process_string, process_subtitles
from PySrtLab.Helpers.TestCases import BuildSrt, LoggedTestCase
from PySrtLab.InsertionQueue import PLACEHOLDER_TEXT
from PySrtLab.SettingsType import SettingsError
from PySrtLab.SubtitleError import DegenerateInputError, SubtitleError
from PySrtLab.SubtitleProject import SubtitleProject
from PySrtLab.SubtitleValidator import TooFastIssue

first_part = BuildSrt([
    ("00:00:01,000", "00:00:03,000", "l'm the first part."),
    ("00:00:04,000", "00:00:06,000", "(DOOR SLAMS)"),
    ("00:00:10,000", "00:00:12,000", "Still the first part."),
])

second_part = BuildSrt([
    ("00:00:20,000", "00:00:22,000", "Now the second part."),
    ("00:00:23,000", "00:00:23,100", "Quick"),
])

class TestSubtitleProject(LoggedTestCase):
    def setUp(self):
        super().setUp()
        self.tempdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tempdir.cleanup()
        super().tearDown()

    def _write(self, name : str, content : str, encoding : str = 'utf-8') -> str:
        path = os.path.join(self.tempdir.name, name)
        with open(path, 'w', encoding=encoding, newline='') as f:
            f.write(content)
        return path

    def _read_bytes(self, path : str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def test_join_files(self):
        first = self._write("part1.srt", first_part)
        second = self._write("part2.srt", second_part)

        output, result = process_subtitles([first, second])

        self.assertLoggedIn("first part", "1\n00:00:01,000 --> 00:00:03,000\nl'm the first part.\n", output)
        self.assertLoggedIn("second part renumbered", "4\n00:00:20,000 --> 00:00:22,000\nNow the second part.\n", output)
        self.assertLoggedEqual("sources", 2, len(result.encodings))

    def test_full_clean_up(self):
        first = self._write("part1.srt", first_part)
        second = self._write("part2.srt", second_part)
        options = init_options(
            fix_ocr=True,
            hearing_impaired_level=1,
            remove_empty=True,
            fix_length=True,
        )

        output, result = process_subtitles([first, second], options=options)

        self.assertLoggedIn("ocr fixed", "I'm the first part.", output)
        self.assertLoggedFalse("annotation removed", "DOOR SLAMS" in output)
        self.assertLoggedIn("numbering closes the gap", "2\n00:00:10,000 --> 00:00:12,000\nStill the first part.\n", output)
        self.assertLoggedIn("last cue extended", "4\n00:00:23,000 --> 00:00:23,840\nQuick\n", output)
        self.assertLoggedEqual("ocr fixes", 1, result.ocr_fixes)
        self.assertLoggedEqual("cleaned", 1, result.cleaned)
        self.assertLoggedEqual("too fast issues", 1, len(result.IssuesOfType(TooFastIssue)))
        self.assertLoggedEqual("issue index is the output index", 4, result.timing_issues[0].index)

    def test_retime(self):
        path = self._write("part1.srt", first_part)
        output, _ = process_subtitles([path], options=init_options(scale=2.0, offset="00:00:01,500"))
        self.assertLoggedIn("retimed", "00:00:03,500 --> 00:00:07,500", output)

    def test_inplace(self):
        path = self._write("part1.srt", first_part)
        project = SubtitleProject(init_options(inplace=True, remove_empty=True, hearing_impaired_level=1))
        project.LoadSubtitles([path])
        project.ProcessSubtitles()
        project.SaveOutput()

        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        self.assertLoggedFalse("annotation removed from file", "DOOR SLAMS" in content)
        self.assertLoggedTrue("still srt", content.startswith("1\n00:00:01,000 --> 00:00:03,000\n"))

    def test_save_to_path_with_crlf(self):
        path = self._write("part1.srt", first_part)
        outpath = os.path.join(self.tempdir.name, "out.srt")
        project = SubtitleProject(init_options(crlf=True))
        project.LoadSubtitles([path])
        project.SaveOutput(outpath)

        self.assertLoggedTrue("crlf output", self._read_bytes(outpath).startswith(b"1\r\n00:00:01,000 --> 00:00:03,000\r\n"))

    def test_bom_follows_input(self):
        path = self._write("bom.srt", "\ufeff" + first_part)

        project = SubtitleProject()
        project.LoadSubtitles([path])
        self.assertLoggedTrue("input bom", project.result.input_has_bom)
        self.assertLoggedTrue("bom kept", project.EncodeOutput().startswith(b'\xef\xbb\xbf1\n'))

        project = SubtitleProject(init_options(write_bom=False))
        project.LoadSubtitles([path])
        self.assertLoggedTrue("bom dropped", project.EncodeOutput().startswith(b'1\n'))

    def test_bom_requested(self):
        path = self._write("plain.srt", first_part)
        project = SubtitleProject(init_options(write_bom=True, output_encoding='UTF-8'))
        project.LoadSubtitles([path])
        self.assertLoggedTrue("bom added", project.EncodeOutput().startswith(b'\xef\xbb\xbf'))

    def test_output_encoding(self):
        content = BuildSrt([("00:00:01,000", "00:00:02,000", "Café")])
        path = self._write("cafe.srt", "\ufeff" + content)
        project = SubtitleProject(init_options(output_encoding='cp1252', write_bom=True))
        project.LoadSubtitles([path])

        data = project.EncodeOutput()
        self.assertLoggedEqual("output charset", 'cp1252', project.output_charset)
        self.assertLoggedTrue("no bom for 8-bit output", data.startswith(b'1\n'))
        self.assertLoggedIn("encoded", b'Caf\xe9', data)

    def test_insert_file(self):
        path = self._write("part1.srt", first_part)
        aux = self._write("signs.srt", BuildSrt([("00:00:07,000", "00:00:08,000", "SIGN: Exit")]))

        output, _ = process_subtitles([path], options=init_options(insert_file=aux, offset=1.0))

        self.assertLoggedIn("sign inserted and retimed", "3\n00:00:08,000 --> 00:00:09,000\nSIGN: Exit\n", output)
        self.assertLoggedIn("following cue renumbered", "4\n00:00:11,000 --> 00:00:13,000\n", output)

    def test_ascii_input_written_as_utf8(self):
        path = self._write("plain.srt", first_part)
        aux = self._write("signs.srt", BuildSrt([("00:00:07,000", "00:00:08,000", "Café crème")]), encoding='utf-8-sig')
        project = SubtitleProject(init_options(insert_file=aux))
        project.LoadSubtitles([path])

        data = project.EncodeOutput()
        self.assertLoggedEqual("input charset", 'ascii', project.result.input_charset.lower())
        self.assertLoggedEqual("output charset", 'UTF-8', project.output_charset)
        self.assertLoggedIn("accents kept", "Café crème".encode('utf-8'), data)
        self.assertLoggedTrue("no bom added", data.startswith(b'1\n'))

    def test_unknown_output_encoding(self):
        path = self._write("plain.srt", first_part)
        project = SubtitleProject(init_options(output_encoding='nosuchcharset'))
        project.LoadSubtitles([path])

        with self.assertRaises(SettingsError):
            project.EncodeOutput()

    def test_utf16_insert_file(self):
        path = self._write("part1.srt", first_part)
        aux = self._write("signs.srt", BuildSrt([("00:00:07,000", "00:00:08,000", "SIGN: Café")]), encoding='utf-16')

        output, _ = process_subtitles([path], options=init_options(insert_file=aux))

        self.assertLoggedIn("sign decoded and inserted", "3\n00:00:07,000 --> 00:00:08,000\nSIGN: Café\n", output)

    def test_insert_index_and_time(self):
        output, _ = process_string(first_part, options=init_options(insert_indexes=[2], insert_times=["00:00:08,000"]))

        self.assertLoggedIn("index placeholder", f"2\n00:00:03,000 --> 00:00:03,000\n{PLACEHOLDER_TEXT}", output)
        self.assertLoggedIn("time placeholder", f"4\n00:00:08,000 --> 00:00:10,000\n{PLACEHOLDER_TEXT}", output)

    def test_invalid_insert_index(self):
        with self.assertRaises(SettingsError):
            process_string(first_part, options=init_options(insert_indexes=[0]))

    def test_fit_file(self):
        fitfile = self._write("pairs.txt", "# original target\n00:00:01,000 00:00:11,000\n\nnot a pair\n00:00:10,000 00:00:20,000\n")
        path = self._write("part1.srt", first_part)

        output, result = process_subtitles([path], options=init_options(fit_file=fitfile))

        self.assertLoggedIn("shifted by fit", "1\n00:00:11,000 --> 00:00:13,000\n", output)
        self.assertLoggedEqual("pair warnings", 1, len(result.pair_warnings))

    def test_process_string(self):
        output, result = process_string(first_part, options=init_options(text_only=True))

        self.assertLoggedEqual("text only", "l'm the first part.\n\n(DOOR SLAMS)\n\nStill the first part.\n\n", output)
        self.assertLoggedFalse("no bom", result.input_has_bom)

    def test_no_files(self):
        with self.assertRaises(SubtitleError):
            SubtitleProject().LoadSubtitles([])

    def test_missing_file(self):
        with self.assertRaises(OSError):
            process_subtitles([os.path.join(self.tempdir.name, "missing.srt")])

class TestInitTransform(LoggedTestCase):
    def test_scale_and_offset(self):
        transform = init_transform(init_options(scale="PALNTSC", offset=-2))
        self.assertLoggedAlmostEqual("scale", 25.0 / 23.976, transform.scale)
        self.assertLoggedEqual("offset", -2.0, transform.offset)

    def test_autofit_precedes_scale(self):
        transform = init_transform(init_options(scale=3.0, autofit=["00:00:00,000", "00:00:00,000", "00:00:10,000", "00:00:20,000"]))
        self.assertLoggedEqual("scale from fit", 2.0, transform.scale)
        self.assertLoggedEqual("offset from fit", 0.0, transform.offset)

    def test_autooffset(self):
        transform = init_transform(init_options(autooffset="00:01:00,000 00:01:02,500"))
        self.assertLoggedEqual("scale", 1.0, transform.scale)
        self.assertLoggedEqual("offset", 2.5, transform.offset)

    def test_autofit_wrong_count(self):
        with self.assertRaises(SettingsError):
            init_transform(init_options(autofit=[1.0, 2.0, 3.0]))

    def test_autofit_degenerate(self):
        with self.assertRaises(DegenerateInputError):
            init_transform(init_options(autofit=[5.0, 1.0, 5.0, 2.0]))

    def test_invalid_offset(self):
        with self.assertRaises(SettingsError):
            init_transform(init_options(offset="soon"))

if __name__ == '__main__':
    unittest.main()
