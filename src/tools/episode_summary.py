from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from common.config import config
from pipelines.episode_summary import summarize_episode

mcp = FastMCP(
    "Andor Search",
    host=config.mcp_host,
    sse_path="/sse",
    message_path="/sse/message/",
    streamable_http_path="/mcp",
)


@mcp.tool()
async def get_andor_episode_summary(
    episode: Annotated[str, Field(description="The episode number or title to get a summary for")],
) -> str:
    """
    Get a summary of an episode of Andor season 2.

    Looks the episode up in the episode table of the Star Wars wiki, scrapes
    the plot summary from the episode page and has an LLM write a sectioned
    summary of it.

    Args:
        episode: Episode number as shown in the wiki's episode table (e.g. "1").

    Returns:
        str: The summary, or a plain-text explanation when the episode could not
            be found or the lookup failed.
    """
    return await summarize_episode(episode)


def main():
    """Serve the tool over stdio for local MCP clients."""
    mcp.run()


if __name__ == "__main__":
    main()
