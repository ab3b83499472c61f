from __future__ import annotations

import unittest

from completion.response import MessageFieldResult
from completion.response import NestedChoiceResult
from completion.response import StringResult
from completion.response import Unrecognized
from completion.response import classify_completion_payload
from completion.response import normalize_completion_payload
from completion.response import truncate_for_discord

FALLBACK = "Sorry, I received an unexpected response format."


class ClassifyCompletionPayloadTests(unittest.TestCase):
    def test_known_shapes(self):
        self.assertEqual(classify_completion_payload("hello"), StringResult("hello"))
        self.assertEqual(
            classify_completion_payload({"choices": [{"message": {"content": "hi"}}]}),
            NestedChoiceResult("hi"),
        )
        self.assertEqual(classify_completion_payload({"message": "hey"}), MessageFieldResult("hey"))

    def test_nested_choice_wins_over_message_field(self):
        payload = {"choices": [{"message": {"content": "nested"}}], "message": "top"}
        self.assertEqual(classify_completion_payload(payload), NestedChoiceResult("nested"))

    def test_unrecognized_shapes(self):
        for payload in ({}, [], None, 42, {"choices": []}, {"choices": [{}]}, {"message": ""}, {"message": {"x": 1}}):
            result = classify_completion_payload(payload)
            self.assertIsInstance(result, Unrecognized, f"payload={payload!r}")
            self.assertEqual(result.text, FALLBACK)

    def test_broken_choice_falls_through_to_message_field(self):
        payload = {"choices": [{"message": {"content": None}}], "message": "hey"}
        self.assertEqual(classify_completion_payload(payload), MessageFieldResult("hey"))


class NormalizeCompletionPayloadTests(unittest.TestCase):
    def test_normalization_table(self):
        self.assertEqual(normalize_completion_payload("hello"), "hello")
        self.assertEqual(normalize_completion_payload({"choices": [{"message": {"content": "hi"}}]}), "hi")
        self.assertEqual(normalize_completion_payload({"message": "hey"}), "hey")
        self.assertEqual(normalize_completion_payload({}), FALLBACK)

    def test_long_reply_truncated_to_discord_limit(self):
        text = normalize_completion_payload("a" * 2500)
        self.assertEqual(len(text), 2000)
        self.assertEqual(text[-3:], "...")
        self.assertEqual(text[:1997], "a" * 1997)

    def test_empty_string_is_kept(self):
        self.assertEqual(normalize_completion_payload(""), "")


class TruncateForDiscordTests(unittest.TestCase):
    def test_exact_limit_untouched(self):
        text = "b" * 2000
        self.assertEqual(truncate_for_discord(text), text)

    def test_one_over_limit(self):
        text = truncate_for_discord("c" * 2001)
        self.assertEqual(len(text), 2000)
        self.assertTrue(text.endswith("c..."))

    def test_custom_limit(self):
        self.assertEqual(truncate_for_discord("abcdefgh", limit=6), "abc...")


if __name__ == "__main__":
    unittest.main()
