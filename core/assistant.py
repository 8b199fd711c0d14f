import google.generativeai as genai
import os
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from core.models import ChatMessage

logger = logging.getLogger(__name__)

CONTEXT_WINDOW = 10

GREETING = (
    "Hello! I'm your AI investment assistant. I can help you understand stocks, "
    "explain financial concepts, and provide educational insights about investing. "
    "What would you like to know?"
)

NOT_CONFIGURED_REPLY = (
    "I'm sorry, but the AI service is not configured properly. "
    "Please make sure the Gemini API key is set up correctly."
)
CONNECTION_REPLY = "I'm sorry, I'm having trouble connecting right now. Please try again in a moment."

PREDEFINED_QUESTIONS = [
    "What is a stock?",
    "How do I start investing?",
    "What's the difference between stocks and bonds?",
    "What is diversification?",
    "How do I read financial statements?",
    "What are ETFs?",
]

SYSTEM_PROMPT = """You are TechInvestor AI, a helpful financial education assistant for beginner investors. Your role is to:

1. Provide clear, educational explanations about investing, stocks, and financial concepts
2. Use simple language suitable for beginners
3. Always emphasize that you're providing educational information, not financial advice
4. Encourage users to do their own research and consult financial professionals
5. Focus on long-term, responsible investing principles
6. Avoid giving specific stock recommendations or predictions
7. Be encouraging and supportive to help users build confidence in learning about investing

Keep responses concise but informative (2-4 paragraphs max). Always end with a disclaimer that this is educational content, not financial advice.
"""


class InvestmentAssistant:
    """
    Chat assistant backed by a single Gemini model.
    History is append-only; each request carries the last CONTEXT_WINDOW messages.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key if api_key is not None else os.getenv("GEMINI_API_KEY")
        self.model_name = model_name or os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite")
        self._messages: List[ChatMessage] = [ChatMessage(id="1", content=GREETING, role="assistant")]
        self._next_id = 2

        if not self.api_key:
            logger.warning("No GEMINI_API_KEY found. Assistant replies will be disabled.")
            self.model = None
        else:
            genai.configure(api_key=self.api_key)
            self.model = genai.GenerativeModel(
                self.model_name,
                system_instruction=SYSTEM_PROMPT,
                generation_config={"max_output_tokens": 400, "temperature": 0.7},
            )
            logger.info(f"Assistant using model: {self.model_name}")

    @property
    def history(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def _append(self, content: str, role: str) -> ChatMessage:
        message = ChatMessage(id=str(self._next_id), content=content, role=role, timestamp=datetime.now(timezone.utc))
        self._next_id += 1
        self._messages.append(message)
        return message

    def _build_contents(self, context: List[ChatMessage], question: str) -> List[dict]:
        contents = [
            {"role": "model" if msg.role == "assistant" else "user", "parts": [msg.content]}
            for msg in context
        ]
        # Gemini wants the conversation to open with a user turn
        while contents and contents[0]["role"] == "model":
            contents.pop(0)
        contents.append({"role": "user", "parts": [question]})
        return contents

    async def send_message(self, text: str) -> Optional[ChatMessage]:
        """
        Append the user's message, ask the model and append its reply.
        Returns the appended reply, or None for blank input.
        """
        if not text or not text.strip():
            return None

        context = self._messages[-CONTEXT_WINDOW:]
        self._append(text, "user")

        if not self.model:
            return self._append(NOT_CONFIGURED_REPLY, "assistant")

        try:
            response = await self.model.generate_content_async(self._build_contents(context, text))
            reply = response.text
        except Exception as e:
            logger.warning(f"Assistant request failed: {str(e)[:100]}")
            return self._append(CONNECTION_REPLY, "assistant")

        return self._append(reply, "assistant")
