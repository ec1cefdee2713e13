from enum import Enum

from pydantic import BaseModel, Field, model_validator


class NotFoundReason(str, Enum):
    EPISODE_NOT_FOUND = "episode_not_found"
    PLOT_SUMMARY_NOT_FOUND = "plot_summary_not_found"


class ExtractedSection(BaseModel):
    title: str
    content: str

    def to_text(self) -> str:
        return f"{self.title}\n{self.content}"


class ExtractionResult(BaseModel):
    """Outcome of scraping one episode: plot summary text, or a "not found" reason, never both."""

    episode: str = Field(description="Episode query as given by the caller")
    text: str | None = Field(None, description="Plot summary text, sections separated by blank lines")
    sections: list[ExtractedSection] = Field(default_factory=list)
    episode_url: str | None = Field(None, description="Absolute URL of the episode page")
    not_found: NotFoundReason | None = None

    @model_validator(mode="after")
    def _found_or_not_found(self) -> "ExtractionResult":
        if self.not_found is None and not self.text:
            raise ValueError("A found result needs non-empty text")
        if self.not_found is not None and (self.text or self.sections):
            raise ValueError("A not-found result cannot carry text")
        return self

    @property
    def found(self) -> bool:
        return self.not_found is None

    @classmethod
    def from_sections(cls, episode: str, sections: list[ExtractedSection], episode_url: str) -> "ExtractionResult":
        if not sections:
            return cls.missing(episode, NotFoundReason.PLOT_SUMMARY_NOT_FOUND)
        return cls(
            episode=episode,
            text=format_sections(sections),
            sections=sections,
            episode_url=episode_url,
        )

    @classmethod
    def missing(cls, episode: str, reason: NotFoundReason) -> "ExtractionResult":
        return cls(episode=episode, not_found=reason)

    def not_found_message(self) -> str:
        if self.not_found is NotFoundReason.PLOT_SUMMARY_NOT_FOUND:
            return f"Could not extract plot summary for episode: {self.episode}"
        return f"Could not find episode: {self.episode}"


def format_sections(sections: list[ExtractedSection]) -> str:
    return "\n\n".join(section.to_text() for section in sections)
