"""Tests for screenshot configuration, URL handling and capture flow."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError

from src.infra.errors import ToolchainError
from src.infra.screenshot import (
    ScreenshotConfig,
    ScreenshotCookie,
    collect_urls,
    load_screenshot_config,
    screenshot_filename,
    take_screenshots,
)


class TestCollectUrls:
    def test_comma_and_space_separated(self):
        urls = collect_urls(["https://a.com, https://b.com", "https://c.com https://d.com"], None)

        assert urls == ["https://a.com", "https://b.com", "https://c.com", "https://d.com"]

    def test_urls_option_takes_precedence_over_file(self, tmp_path):
        url_file = tmp_path / "urls.txt"
        url_file.write_text("https://from-file.com\n")

        assert collect_urls(["https://cli.com"], url_file) == ["https://cli.com"]

    def test_file_skips_blank_lines(self, tmp_path):
        url_file = tmp_path / "urls.txt"
        url_file.write_text("https://a.com\n\n  https://b.com  \n\n")

        assert collect_urls(None, url_file) == ["https://a.com", "https://b.com"]

    def test_missing_file(self, tmp_path):
        assert collect_urls(None, tmp_path / "missing.txt") == []


class TestScreenshotFilename:
    def test_hostname_and_epoch_millis(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        name = screenshot_filename("https://www.example.com/pricing?x=1", now)

        assert name == "www_example_com_1704067200000.png"

    def test_extension(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert screenshot_filename("http://localhost:3000", now, "jpeg").endswith(".jpeg")

    def test_url_without_hostname(self):
        with pytest.raises(ValueError, match="Invalid URL"):
            screenshot_filename("not a url")


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path, output):
        config = load_screenshot_config(tmp_path / "screenshot.config.conf", output)

        assert config == ScreenshotConfig()
        assert config.viewport.width == 1280
        assert config.viewport.height == 800
        assert config.timeout == 30000
        assert config.full_page is True

    def test_file_values_override_defaults(self, tmp_path, output):
        path = tmp_path / "screenshot.config.conf"
        path.write_text(
            json.dumps(
                {
                    "viewport": {"width": 390, "height": 844},
                    "userAgent": "Mobile Safari",
                    "waitForSelector": "#app",
                    "cookies": [
                        {"name": "session", "value": "abc", "domain": ".example.com", "httpOnly": True}
                    ],
                }
            )
        )

        config = load_screenshot_config(path, output)

        assert config.viewport.width == 390
        assert config.user_agent == "Mobile Safari"
        assert config.wait_for_selector == "#app"
        assert config.timeout == 30000
        assert config.cookies[0].http_only is True
        output.ok.assert_called_once()

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, output):
        path = tmp_path / "screenshot.config.conf"
        path.write_text('{"quality": 500}')

        config = load_screenshot_config(path, output)

        assert config == ScreenshotConfig()
        output.warn.assert_called_once_with("Using default configuration")


def test_cookie_for_playwright():
    cookie = ScreenshotCookie(name="a", value="1", domain="example.com", http_only=True)

    assert cookie.to_playwright() == {
        "name": "a",
        "value": "1",
        "domain": "example.com",
        "path": "/",
        "httpOnly": True,
    }


class TestTakeScreenshots:
    @pytest.fixture
    def browser(self):
        with patch("src.infra.screenshot.sync_playwright") as sync_playwright:
            playwright = sync_playwright.return_value.__enter__.return_value
            yield playwright.chromium.launch.return_value

    def test_captures_each_url(self, browser, tmp_path, output):
        page = browser.new_context.return_value.new_page.return_value
        config = ScreenshotConfig(
            cookies=[ScreenshotCookie(name="a", value="1", domain="a.com")],
            wait_for_selector="main",
        )

        saved = take_screenshots(["https://a.com", "https://b.com"], tmp_path / "shots", config, output)

        assert [p.name.split("_")[0] for p in saved] == ["a", "b"]
        assert browser.new_context.call_count == 2
        browser.new_context.return_value.add_cookies.assert_called_with(
            [{"name": "a", "value": "1", "domain": "a.com", "path": "/"}]
        )
        page.goto.assert_called_with("https://b.com", wait_until="networkidle", timeout=30000)
        page.wait_for_selector.assert_called_with("main", timeout=30000)
        options = page.screenshot.call_args.kwargs
        assert options["full_page"] is True
        assert options["type"] == "png"
        assert "quality" not in options
        browser.close.assert_called_once()

    def test_jpeg_passes_quality(self, browser, tmp_path, output):
        page = browser.new_context.return_value.new_page.return_value
        config = ScreenshotConfig(image_type="jpeg", quality=60)

        take_screenshots(["https://a.com"], tmp_path, config, output)

        assert page.screenshot.call_args.kwargs["quality"] == 60

    def test_failed_url_does_not_stop_the_run(self, browser, tmp_path, output):
        page = browser.new_context.return_value.new_page.return_value
        page.goto.side_effect = [PlaywrightError("Timeout 30000ms exceeded"), None]

        saved = take_screenshots(["https://a.com", "https://b.com"], tmp_path, ScreenshotConfig(), output)

        assert len(saved) == 1
        assert saved[0].name.startswith("b_com_")
        assert browser.new_context.return_value.close.call_count == 2
        output.error.assert_called_once()

    def test_context_failure_does_not_stop_the_run(self, browser, tmp_path, output):
        context = MagicMock()
        browser.new_context.side_effect = [PlaywrightError("Browser has been closed"), context]

        saved = take_screenshots(["https://a.com", "https://b.com"], tmp_path, ScreenshotConfig(), output)

        assert len(saved) == 1
        assert saved[0].name.startswith("b_com_")
        context.close.assert_called_once()
        output.error.assert_called_once()
        browser.close.assert_called_once()

    def test_browser_launch_failure_is_a_toolchain_error(self, tmp_path, output):
        with patch("src.infra.screenshot.sync_playwright") as sync_playwright:
            playwright = sync_playwright.return_value.__enter__.return_value
            playwright.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

            with pytest.raises(ToolchainError, match="Failed to start the headless browser") as exc_info:
                take_screenshots(["https://a.com"], tmp_path, ScreenshotConfig(), output)

        assert "playwright install chromium" in exc_info.value.details
