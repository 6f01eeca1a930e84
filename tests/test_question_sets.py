from pathlib import Path
import tempfile
import unittest

from qperformance.core.errors import UnreadableDocumentError
from qperformance.loaders.rtf_loader import merge_round_maps, parse_question_types, read_question_set


def _rtf(*rounds):
    """Set-maker style text: one '<n> <type>}' cell and one question cell per question."""
    parts = []
    for round_id, types in rounds:
        for k, qtype in enumerate(types):
            head = f"{{\\b SET #{round_id}}} " if k == 0 else ""
            parts.append(f"{head}{k + 1} {qtype}}}")
            parts.append(f" question text {k + 1}\\par ")
    return "{\\rtf1\\ansi " + "\\tab".join(parts)


class ParseQuestionTypesTests(unittest.TestCase):
    def test_single_round(self):
        text = _rtf(("1", "AGQ"))
        self.assertEqual({"'1'": ["A", "G", "Q"]}, parse_question_types(text))

    def test_multiple_rounds_in_one_document(self):
        text = _rtf(("1", "AGQ"), ("2B", "SX"))
        self.assertEqual({"'1'": ["A", "G", "Q"], "'2B'": ["S", "X"]}, parse_question_types(text))

    def test_no_marker_goes_to_empty_identifier(self):
        text = "1 A}\\tab text\\tab 2 R}"
        self.assertEqual({"": ["A", "R"]}, parse_question_types(text))

    def test_empty_document(self):
        self.assertEqual({"": []}, parse_question_types(""))

    def test_odd_and_one_character_fragments_are_ignored(self):
        # fragments: "SET #7 A}" (even), "Q}" (odd), "}" (even, too short), "x V}" (odd)
        text = "SET #7 A}\\tabQ}\\tab}\\tabx V}"
        self.assertEqual({"'7'": ["A"]}, parse_question_types(text))

    def test_marker_without_preceding_types_does_not_commit(self):
        # the first fragment is a bare brace; nothing accumulated before SET #3
        text = "{\\tab SET #3\\tab 1 I}\\tab q\\tab 2 X}"
        self.assertEqual({"'3'": ["I", "X"]}, parse_question_types(text))

    def test_repeated_round_in_one_document_keeps_the_later_block(self):
        text = _rtf(("4", "AA"), ("4", "GG"))
        self.assertEqual({"'4'": ["G", "G"]}, parse_question_types(text))


class MergeRoundMapsTests(unittest.TestCase):
    def test_first_definition_wins_and_is_warned(self):
        merged, warns = merge_round_maps([
            {"'1'": ["A"], "'2'": ["G"]},
            {"'2'": ["X"], "'3'": ["Q"]},
        ])
        self.assertEqual({"'1'": ["A"], "'2'": ["G"], "'3'": ["Q"]}, merged)
        self.assertEqual(1, len(warns))
        self.assertIn("'2'", warns[0])

    def test_no_collision_no_warning(self):
        merged, warns = merge_round_maps([{"'1'": ["A"]}, {"'2'": ["G"]}])
        self.assertEqual(2, len(merged))
        self.assertEqual([], warns)


class ReadQuestionSetTests(unittest.TestCase):
    def test_reads_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "set1.rtf"
            path.write_text(_rtf(("1", "RSV")), encoding="utf-8")
            self.assertEqual({"'1'": ["R", "S", "V"]}, read_question_set(path))

    def test_undecodable_file_is_fatal(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.rtf"
            path.write_bytes(b"\xff\xfe\x00SET #1")
            with self.assertRaises(UnreadableDocumentError):
                read_question_set(path)

    def test_missing_file_is_fatal(self):
        with self.assertRaises(UnreadableDocumentError):
            read_question_set(Path("/nonexistent/qperformance/set.rtf"))

    def test_crlf_line_endings_are_kept(self):
        # the "\r\n" fragment contributes "\r", keeping question 3 at position 3
        raw = "SET #1 A}\\tabq1\\tab\r\n\\tabq2\\tab2 Q}\\tabq3"
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "windows.rtf"
            path.write_bytes(raw.encode("utf-8"))
            by_round = read_question_set(path)
        self.assertEqual(parse_question_types(raw), by_round)
        self.assertEqual(["A", "\r", "Q"], by_round["'1'"])
