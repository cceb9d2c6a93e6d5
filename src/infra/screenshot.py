"""Website screenshots with a headless Chromium driven by Playwright."""

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlparse

from loguru import logger
from playwright.sync_api import Browser
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright
from pydantic import Field, ValidationError

from src.cli.shared.console import CLIConsole, console
from src.infra.config.models import CamelModel
from src.infra.errors import ToolchainError

URL_SEPARATORS = re.compile(r"[,\s]+")


class ScreenshotCookie(CamelModel):
    name: str
    value: str
    domain: str
    path: str | None = None
    secure: bool | None = None
    http_only: bool | None = None
    same_site: Literal["Strict", "Lax", "None"] | None = None

    def to_playwright(self) -> dict[str, Any]:
        """Cookie in the shape BrowserContext.add_cookies expects."""
        cookie: dict[str, Any] = {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path or "/",
        }
        if self.secure is not None:
            cookie["secure"] = self.secure
        if self.http_only is not None:
            cookie["httpOnly"] = self.http_only
        if self.same_site is not None:
            cookie["sameSite"] = self.same_site
        return cookie


class Viewport(CamelModel):
    width: int = 1280
    height: int = 800


class ScreenshotConfig(CamelModel):
    """Capture options read from screenshot.config.conf (JSON).

    ``quality`` only applies when ``image_type`` is jpeg.
    """

    cookies: list[ScreenshotCookie] = Field(default_factory=list)
    viewport: Viewport = Field(default_factory=Viewport)
    user_agent: str | None = None
    timeout: int = 30000
    wait_for_selector: str | None = None
    quality: int = Field(default=80, ge=0, le=100)
    full_page: bool = True
    image_type: Literal["png", "jpeg"] = "png"


def load_screenshot_config(path: Path, output: CLIConsole = console) -> ScreenshotConfig:
    """Load the config file over the defaults.

    Fields present in the file override the defaults; a missing or invalid
    file leaves the defaults in place.
    """
    if not path.exists():
        output.info(f"No config file found at {path}")
        output.info("Using default configuration")
        return ScreenshotConfig()

    try:
        config = ScreenshotConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, ValidationError) as e:
        logger.debug(f"Invalid screenshot config {path}: {e}")
        output.error(f"Error loading config file: {e}")
        output.warn("Using default configuration")
        return ScreenshotConfig()

    output.ok(f"Loaded configuration from {path}")
    return config


def collect_urls(urls: list[str] | None, file: Path | None) -> list[str]:
    """URLs from ``--urls`` (space or comma separated), else from ``file``.

    Blank entries are dropped. A missing file yields no URLs.
    """
    if urls:
        return [part for value in urls for part in URL_SEPARATORS.split(value) if part]
    if file is not None and file.exists():
        return [line.strip() for line in file.read_text(encoding="utf-8").splitlines() if line.strip()]
    return []


def screenshot_filename(url: str, now: datetime | None = None, extension: str = "png") -> str:
    """``<hostname with dots replaced by _>_<epoch ms>.<extension>``.

    Raises:
        ValueError: If ``url`` has no hostname
    """
    hostname = urlparse(url).hostname
    if not hostname:
        raise ValueError(f"Invalid URL: {url}")
    timestamp = int((now or datetime.now()).timestamp() * 1000)
    return f"{hostname.replace('.', '_')}_{timestamp}.{extension}"


def take_screenshots(
    urls: list[str],
    out_dir: Path,
    config: ScreenshotConfig,
    output: CLIConsole = console,
) -> list[Path]:
    """Capture each URL in turn.

    A failure on one URL is reported and the next URL is attempted.

    Returns:
        Paths of the screenshots that were written

    Raises:
        ToolchainError: If the browser cannot be started
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    saved: list[Path] = []
    output.info(f"Starting screenshot capture for {len(urls)} URLs")

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                for index, url in enumerate(urls, 1):
                    output.info(f"[{index}/{len(urls)}] Navigating to: {url}")
                    target = _capture(browser, url, out_dir, config, output)
                    if target is not None:
                        saved.append(target)
            finally:
                browser.close()
    except PlaywrightError as e:
        raise ToolchainError(
            "Failed to start the headless browser",
            details=f"{e}\nInstall it with 'playwright install chromium'.",
        ) from e

    output.ok(f"Captured {len(saved)} of {len(urls)} screenshots")
    return saved


def _capture(
    browser: Browser,
    url: str,
    out_dir: Path,
    config: ScreenshotConfig,
    output: CLIConsole,
) -> Path | None:
    """Screenshot one URL in its own browser context; None when it failed."""
    context = None
    try:
        context = browser.new_context(
            viewport={"width": config.viewport.width, "height": config.viewport.height},
            user_agent=config.user_agent,
        )
        if config.cookies:
            context.add_cookies([c.to_playwright() for c in config.cookies])
        page = context.new_page()

        page.goto(url, wait_until="networkidle", timeout=config.timeout)
        if config.wait_for_selector:
            page.wait_for_selector(config.wait_for_selector, timeout=config.timeout)

        target = out_dir / screenshot_filename(url, extension=config.image_type)
        options: dict[str, Any] = {
            "path": str(target),
            "full_page": config.full_page,
            "type": config.image_type,
        }
        if config.image_type == "jpeg":
            options["quality"] = config.quality
        page.screenshot(**options)
    except (PlaywrightError, OSError, ValueError) as e:
        logger.debug(f"Screenshot of {url} failed: {e!r}")
        output.error(f"Failed to capture screenshot for {url}: {e}")
        return None
    finally:
        if context is not None:
            context.close()

    output.ok(f"Screenshot saved to: {target}")
    return target
