from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from controller.chat_persona import ChatPersona
from controller.chat_persona import load_chat_persona


class ChatPersonaLoaderTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "chat_persona.yml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_clean_load(self):
        path = self._write("version: v2\nsystem_prompt: You are terse.\nmodel: mistral\n")
        persona, warning = load_chat_persona(path)
        self.assertIsNone(warning)
        self.assertEqual(persona, ChatPersona(version="v2", system_prompt="You are terse.", model="mistral"))

    def test_blank_fields_fall_back_to_defaults(self):
        path = self._write("version: v3\nsystem_prompt: '  '\n")
        persona, warning = load_chat_persona(path)
        self.assertIsNone(warning)
        self.assertEqual(persona.version, "v3")
        self.assertEqual(persona.system_prompt, "You are a friendly chatbot.")
        self.assertEqual(persona.model, "openai")

    def test_missing_path(self):
        persona, warning = load_chat_persona(None)
        self.assertEqual(persona, ChatPersona())
        self.assertIn("path missing", warning)

    def test_missing_file(self):
        persona, warning = load_chat_persona("/nonexistent/chat_persona.yml")
        self.assertEqual(persona, ChatPersona())
        self.assertIn("not found", warning)

    def test_non_mapping_payload(self):
        persona, warning = load_chat_persona(self._write("- just\n- a list\n"))
        self.assertEqual(persona, ChatPersona())
        self.assertIn("Invalid chat persona format", warning)

    def test_broken_yaml(self):
        persona, warning = load_chat_persona(self._write("system_prompt: [unclosed\n"))
        self.assertEqual(persona, ChatPersona())
        self.assertIn("Failed to read chat persona", warning)

    def test_bundled_persona_matches_defaults(self):
        bundled = Path(__file__).resolve().parent.parent / "config" / "chat_persona.yml"
        persona, warning = load_chat_persona(bundled)
        self.assertIsNone(warning)
        self.assertEqual(persona.system_prompt, "You are a friendly chatbot.")
        self.assertEqual(persona.model, "openai")


if __name__ == "__main__":
    unittest.main()
