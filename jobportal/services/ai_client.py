"""
LLM Chat Client

Optional backend for the career chat assistant. Any OpenAI-compatible
endpoint works (DeepSeek by default), so we use the openai library.

The assistant only calls out when AI_MODE=llm and an API key is set;
otherwise (or on any API failure) the deterministic mock answers are used.
"""
from openai import OpenAI
from loguru import logger

from jobportal.core.config import get_settings
from jobportal.services.ai_mock_service import generate_chat_response

settings = get_settings()

CAREER_ASSISTANT_PROMPT = """You are a career assistant inside a campus job portal.
Answer questions about job trends, tech stacks, salaries and interview preparation.
Keep answers under 80 words and practical."""


class CareerChatClient:
    """
    Wrapper for the chat completion API with a short, cheap call shape.
    """

    def __init__(self, client: OpenAI = None):
        self.client = client or OpenAI(
            api_key=settings.ai_api_key,
            base_url=settings.ai_base_url
        )
        self.model = settings.ai_model

    def _call_api(self, system_prompt: str, user_content: str, max_tokens: int = 300) -> str:
        """Call the chat completion endpoint and return the raw text."""
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ],
            max_tokens=max_tokens,
            temperature=0.3
        )
        return response.choices[0].message.content

    def reply(self, user_text: str) -> str:
        return self._call_api(CAREER_ASSISTANT_PROMPT, user_text).strip()

    def test_connection(self) -> bool:
        """Test if the LLM endpoint is reachable"""
        try:
            response = self._call_api(
                "You are a test assistant.",
                "Reply with exactly: OK",
                max_tokens=10
            )
            return "OK" in response.upper()
        except Exception as e:
            logger.error(f"LLM connection failed: {e}")
            return False


# Singleton instance
_chat_client: CareerChatClient = None


def get_chat_client() -> CareerChatClient:
    """Get or create the chat client (singleton pattern)"""
    global _chat_client
    if _chat_client is None:
        _chat_client = CareerChatClient()
    return _chat_client


def llm_enabled() -> bool:
    return settings.ai_mode.lower() == "llm" and bool(settings.ai_api_key)


def answer_chat(user_text: str) -> tuple:
    """
    Answer a chat message.

    Returns:
        (reply, source) where source is "llm" or "mock"
    """
    if llm_enabled():
        try:
            reply = get_chat_client().reply(user_text)
            if reply:
                return reply, "llm"
        except Exception as e:
            logger.warning(f"LLM chat failed, using mock answer: {e}")
    return generate_chat_response(user_text), "mock"
