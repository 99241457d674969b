"""Tests for the Gemini gateway."""
import unittest
from unittest.mock import MagicMock, patch

from finscan.llm.gateway import GeminiGateway, is_usable_api_key
from finscan.utils.exceptions import ModelUnavailable


class TestGeminiGateway(unittest.TestCase):
    """Test GeminiGateway failure handling."""

    def test_key_checks(self):
        self.assertFalse(is_usable_api_key(None))
        self.assertFalse(is_usable_api_key(""))
        self.assertFalse(is_usable_api_key("short"))
        self.assertFalse(is_usable_api_key("your-gemini-api-key-here"))
        self.assertTrue(is_usable_api_key("AIzaSyExampleKey123"))

    def test_unconfigured(self):
        gateway = GeminiGateway(api_key=None)

        self.assertFalse(gateway.available)
        with self.assertRaises(ModelUnavailable):
            gateway.generate("hello")

    @patch("finscan.llm.gateway.genai.Client")
    def test_generate_returns_text(self, mock_client_cls):
        client = mock_client_cls.return_value
        client.models.generate_content.return_value = MagicMock(text='[{"amount": 5}]')

        gateway = GeminiGateway(api_key="AIzaSyExampleKey123", model_name="gemini-test")
        reply = gateway.generate("prompt")

        self.assertEqual(reply, '[{"amount": 5}]')
        client.models.generate_content.assert_called_once_with(model="gemini-test", contents="prompt")

    @patch("finscan.llm.gateway.genai.Client")
    def test_call_failure(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.side_effect = ConnectionError("quota")

        gateway = GeminiGateway(api_key="AIzaSyExampleKey123")
        with self.assertRaises(ModelUnavailable):
            gateway.generate("prompt")

    @patch("finscan.llm.gateway.genai.Client")
    def test_empty_reply(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.return_value = MagicMock(text=None)

        gateway = GeminiGateway(api_key="AIzaSyExampleKey123")
        with self.assertRaises(ModelUnavailable):
            gateway.generate("prompt")


if __name__ == "__main__":
    unittest.main()
