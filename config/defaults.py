from __future__ import annotations

# Discord
DISCORD_MAX_MESSAGE_LEN = 2000
RESERVED_COMMAND_PREFIX = "!"

# Conversation window
DEFAULT_HISTORY_LIMIT = 15
DEFAULT_SYSTEM_PROMPT = "You are a friendly chatbot."

# Completion service
DEFAULT_COMPLETION_URL = "https://text.pollinations.ai/"
DEFAULT_COMPLETION_MODEL = "openai"
UNEXPECTED_RESPONSE_REPLY = "Sorry, I received an unexpected response format."
RELAY_ERROR_REPLY = "Sorry, I encountered an error while processing your message."

# Status server
DEFAULT_STATUS_HOST = "0.0.0.0"
DEFAULT_STATUS_PORT = 5000
