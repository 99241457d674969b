"""Tests for model reply parsing."""
import unittest

from finscan.llm.response_parser import parse_array, parse_object, strip_fence
from finscan.utils.exceptions import MalformedResponse


class TestStripFence(unittest.TestCase):
    """Test markdown fence removal."""

    def test_json_fence(self):
        self.assertEqual(strip_fence('```json\n[{"amount":5}]\n```'), '[{"amount":5}]')

    def test_plain_fence(self):
        self.assertEqual(strip_fence('```\n{"a": 1}\n```'), '{"a": 1}')

    def test_surrounding_whitespace(self):
        self.assertEqual(strip_fence('  \n```json\n[]\n```  \n'), "[]")

    def test_unfenced_text_untouched(self):
        self.assertEqual(strip_fence('  [1, 2]  '), "[1, 2]")


class TestParseArray(unittest.TestCase):
    """Test bulk-statement reply parsing."""

    def test_fenced_equals_unfenced(self):
        fenced = '```json\n[{"amount":5,"description":"x"}]\n```'
        plain = '[{"amount":5,"description":"x"}]'

        self.assertEqual(parse_array(fenced), parse_array(plain))
        self.assertEqual(parse_array(plain), [{"amount": 5, "description": "x"}])

    def test_empty_array(self):
        self.assertEqual(parse_array("[]"), [])

    def test_object_is_not_coerced(self):
        with self.assertRaises(MalformedResponse):
            parse_array('{"transactions": [{"amount": 5}]}')

    def test_non_object_entries(self):
        with self.assertRaises(MalformedResponse):
            parse_array('[{"amount": 5}, 7]')

    def test_invalid_json(self):
        with self.assertRaises(MalformedResponse):
            parse_array("Here are your transactions: [")

    def test_prose_wrapper_rejected(self):
        with self.assertRaises(MalformedResponse):
            parse_array('Sure! [{"amount": 5}]')

    def test_oversized_integer_rejected(self):
        with self.assertRaises(MalformedResponse):
            parse_array('[{"amount": ' + "9" * 5000 + ', "description": "x"}]')


class TestParseObject(unittest.TestCase):
    """Test single-receipt reply parsing."""

    def test_object(self):
        data = parse_object('```json\n{"amount": "12.50", "merchant": "CAFE", "items": []}\n```')

        self.assertEqual(data["amount"], "12.50")
        self.assertEqual(data["merchant"], "CAFE")

    def test_array_rejected(self):
        with self.assertRaises(MalformedResponse):
            parse_object('[{"amount": 5}]')

    def test_garbage_rejected(self):
        with self.assertRaises(MalformedResponse):
            parse_object("I could not read this receipt.")

    def test_oversized_integer_rejected(self):
        with self.assertRaises(MalformedResponse):
            parse_object('{"amount": ' + "9" * 5000 + "}")


if __name__ == "__main__":
    unittest.main()
