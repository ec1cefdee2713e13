from openai import AsyncOpenAI

from common.config import config
from common.logging import get_logger
from common.openai_errors import handle_openai_errors
from services.openai_service import OpenAIService

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a Star Wars expert. Create a summary of the Andor episode based on the provided plot points. "
    "Separate the summary into paragraphs with each paragraph with a title being a section from the scraped website. "
    "Include key plot points, character development, and important events. Keep it engaging and informative. "
    "Format the summary with clear sections and bullet points where appropriate."
)

EMPTY_SUMMARY_MESSAGE = "Unable to generate episode summary."


class EpisodeSummarizer:
    """Turns scraped plot summary text into a prose summary with a chat-completions model."""

    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None, temperature: float | None = None):
        self._client = client
        self.model = model or config.openai_model
        self.temperature = config.temperature if temperature is None else temperature

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = OpenAIService.get_async_client(model=self.model)
        return self._client

    @staticmethod
    def build_messages(episode: str, plot_summary: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"Episode: {episode}\nPlot Summary:\n{plot_summary}"},
        ]

    async def summarize(self, episode: str, plot_summary: str) -> str:
        messages = self.build_messages(episode, plot_summary)
        logger.info(f"[Summarize] Requesting summary for episode {episode} ({len(plot_summary)} chars)")

        with handle_openai_errors("Summarize"):
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.warning("[Summarize] Model returned an empty response")
            return EMPTY_SUMMARY_MESSAGE

        logger.info(f"[Summarize] Completed ({len(content)} chars)")
        return content
