from enum import Enum

from pydantic import BaseModel, Field

DESKTOP_CHROME_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)


class SessionState(str, Enum):
    EMPTY = "empty"
    INITIALIZING = "initializing"
    READY = "ready"


class Viewport(BaseModel):
    width: int = 1280
    height: int = 800
    device_scale_factor: float = 1


class PageProfile(BaseModel):
    """How a page presents itself to the target site.

    The wiki serves blocked or stripped-down pages to clients that do not
    look like a desktop browser, so every page opened for scraping uses this.
    """

    user_agent: str = DESKTOP_CHROME_USER_AGENT
    extra_http_headers: dict[str, str] = Field(
        default_factory=lambda: {
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate, br",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "none",
            "Sec-Fetch-User": "?1",
            "Cache-Control": "max-age=0",
        }
    )
    viewport: Viewport = Field(default_factory=Viewport)
    java_script_enabled: bool = True
    bypass_csp: bool = True
