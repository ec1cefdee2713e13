"""DOM extraction for the episode index and episode pages.

Everything here is a pure function over a parsed document so it can be
exercised against HTML fixtures without a browser.
"""

from bs4 import BeautifulSoup, Tag

from common.logging import get_logger
from services.episode_scraper.schemas import ExtractedSection

logger = get_logger(__name__)

EPISODES_TABLE_SELECTOR = "table.wikitable"
PLOT_SUMMARY_MARKER = "plot summary"
CREDITS_MARKER = "credits"


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _text(element: Tag) -> str:
    return element.get_text()


def _is_heading_wrapper(element: Tag) -> bool:
    # Newer MediaWiki skins render <div class="mw-heading mw-heading2"><h2>...</h2></div>
    return element.name == "div" and "mw-heading" in (element.get("class") or [])


def _heading_level(element: Tag) -> int | None:
    """Return 2 or 3 for section/subsection headings (bare or wrapped), else None."""
    if element.name in ("h2", "h3"):
        return int(element.name[1])
    if _is_heading_wrapper(element):
        heading = element.find(["h2", "h3"], recursive=False)
        if heading is not None:
            return int(heading.name[1])
    return None


def _is_credits(element: Tag) -> bool:
    return CREDITS_MARKER in _text(element).lower()


def find_episode_href(document: BeautifulSoup | Tag, episode: str) -> str | None:
    """Find the link target of the episode whose number cell equals `episode` exactly.

    The first cell of each row holds the episode number; the third holds the
    title with a link to the episode page. Returns None on any structural miss.
    """
    table = document.select_one(EPISODES_TABLE_SELECTOR)
    if table is None:
        logger.warning("[Scraper] Could not find episodes table")
        return None

    rows = table.select("tr")
    logger.debug(f"[Scraper] Found {len(rows)} rows")

    target_row = None
    for row in rows:
        first_cell = row.select_one("td:first-child")
        if first_cell is None:
            continue
        if _text(first_cell).strip() == episode:
            target_row = row
            break

    if target_row is None:
        logger.info(f"[Scraper] Could not find row for episode: {episode}")
        return None

    title_cell = target_row.select_one("td:nth-child(3)")
    if title_cell is None:
        logger.info("[Scraper] Could not find title cell")
        return None

    link = title_cell.select_one("a")
    if link is None:
        logger.info("[Scraper] Could not find episode link")
        return None

    href = link.get("href")
    return str(href) if href else None


def find_plot_summary_heading(document: BeautifulSoup | Tag) -> Tag | None:
    """Return the element the section walk starts from: the plot summary h2, or its heading wrapper."""
    for heading in document.find_all("h2"):
        if PLOT_SUMMARY_MARKER in _text(heading).lower():
            parent = heading.parent
            if isinstance(parent, Tag) and _is_heading_wrapper(parent):
                return parent
            return heading
    return None


def _collect_paragraphs(subsection_heading: Tag) -> str:
    paragraphs = []
    element = subsection_heading.find_next_sibling()
    while element is not None and _heading_level(element) is None and not _is_credits(element):
        if element.name == "p":
            text = _text(element).strip()
            if text:
                paragraphs.append(text)
        element = element.find_next_sibling()
    return "\n".join(paragraphs).strip()


def extract_sections(plot_summary_heading: Tag) -> list[ExtractedSection]:
    """Collect the subsections that follow the plot summary heading, up to the credits marker.

    Sections keep document order; repeated titles are kept as separate entries.
    """
    sections: list[ExtractedSection] = []

    element = plot_summary_heading.find_next_sibling()
    while element is not None and not _is_credits(element):
        if _heading_level(element) == 3:
            title = _text(element).strip()
            content = _collect_paragraphs(element)
            if content:
                sections.append(ExtractedSection(title=title, content=content))
                logger.debug(f"[Scraper] Added section '{title}' ({len(content)} chars)")
        element = element.find_next_sibling()

    logger.debug(f"[Scraper] Found {len(sections)} sections")
    return sections


def extract_plot_summary(document: BeautifulSoup | Tag) -> list[ExtractedSection]:
    """Sections of the plot summary; empty when the heading or its content is missing."""
    heading = find_plot_summary_heading(document)
    if heading is None:
        logger.info("[Scraper] Could not find plot summary section")
        return []
    return extract_sections(heading)
