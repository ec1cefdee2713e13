from pydantic import BaseModel, Field


class EpisodeSummaryRequest(BaseModel):
    """Query for an episode summary."""

    episode: str = Field(description="The episode number or title to get a summary for")


class EpisodeSummaryResponse(BaseModel):
    """Summary text, or the explanation of why none could be produced."""

    episode: str = Field(description="Episode query as received")
    text: str = Field(description="Summary or plain-text explanation")
