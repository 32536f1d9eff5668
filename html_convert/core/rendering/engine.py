"""
Render Engine
=============

Capability interface for headless rendering plus the Playwright implementation.
Each ``launch()`` owns a fresh browser for the duration of one conversion and
tears it down on exit, whether or not the conversion failed.
"""

from typing import Optional, Any, AsyncContextManager, AsyncIterator
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
import io

from playwright.async_api import async_playwright, Page
from PIL import Image  # type: ignore

from html_convert.config.logging import get_logger
from html_convert.config.settings import Settings, get_settings
from html_convert.exceptions import RenderError
from html_convert.models.schemas import ScreenshotOptions, PDFOptions

logger = get_logger(__name__)


class RenderSession(ABC):
    """A live page that HTML can be loaded into and captured from."""

    @abstractmethod
    async def load(self, html: str) -> None:
        """Load HTML text into the page."""
        pass

    @abstractmethod
    async def screenshot(self, options: ScreenshotOptions) -> bytes:
        """Capture the loaded page as image bytes."""
        pass

    @abstractmethod
    async def pdf(self, options: PDFOptions) -> bytes:
        """Export the loaded page as PDF bytes."""
        pass


class RenderEngine(ABC):
    """Launches render sessions."""

    @abstractmethod
    def launch(self) -> AsyncContextManager[RenderSession]:
        """Return an async context manager yielding a RenderSession."""
        pass


class PlaywrightRenderSession(RenderSession):
    """Render session backed by a single Playwright page."""

    def __init__(self, page: Page, settings: Settings):
        self.page = page
        self.settings = settings
        self.logger: Any = logger.bind(component="playwright_session")  # structlog.BoundLoggerBase

    async def load(self, html: str) -> None:
        try:
            await self.page.set_content(html, wait_until=self.settings.wait_until)
        except Exception as e:
            raise RenderError(f"Failed to load HTML content: {e}") from e

        self.logger.debug("HTML content loaded", html_length=len(html))

    async def screenshot(self, options: ScreenshotOptions) -> bytes:
        screenshot_kwargs: dict[str, Any] = {
            "type": options.image_type,
            "full_page": options.full_page,
            "omit_background": options.omit_background,
        }
        if options.quality is not None:
            screenshot_kwargs["quality"] = options.quality

        try:
            screenshot_bytes = await self.page.screenshot(**screenshot_kwargs)
        except Exception as e:
            raise RenderError(f"Screenshot capture failed: {e}") from e

        if self.settings.optimize_images and options.image_type == "png":
            screenshot_bytes = self._optimize_png(screenshot_bytes)

        return screenshot_bytes

    async def pdf(self, options: PDFOptions) -> bytes:
        try:
            return await self.page.pdf(
                format=options.format, print_background=options.print_background
            )
        except Exception as e:
            raise RenderError(f"PDF generation failed: {e}") from e

    def _optimize_png(self, png_bytes: bytes) -> bytes:
        """
        Re-encode a PNG screenshot with Pillow's optimizer.

        Args:
            png_bytes: Original PNG bytes

        Returns:
            Optimized PNG bytes, or the original bytes if Pillow cannot process them
        """
        try:
            image = Image.open(io.BytesIO(png_bytes))  # type: ignore[attr-defined]
            output = io.BytesIO()
            image.save(output, format="PNG", optimize=True, compress_level=9)  # type: ignore[attr-defined]
            optimized_bytes = output.getvalue()
        except Exception as e:
            self.logger.warning("PNG optimization failed, using original", error=str(e))
            return png_bytes

        reduction = (
            (1 - len(optimized_bytes) / len(png_bytes)) * 100 if len(png_bytes) > 0 else 0
        )
        self.logger.debug(
            "PNG optimization completed",
            original_size=len(png_bytes),
            optimized_size=len(optimized_bytes),
            reduction_percent=round(reduction, 2),
        )

        return optimized_bytes


class PlaywrightRenderEngine(RenderEngine):
    """Headless Chromium render engine. Launches one browser per session."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="playwright_engine")  # structlog.BoundLoggerBase

    @asynccontextmanager
    async def launch(self) -> AsyncIterator[PlaywrightRenderSession]:
        """Launch a browser and yield a session on a fresh page."""
        try:
            playwright = await async_playwright().start()
        except Exception as e:
            self.logger.error("Failed to start Playwright", error=str(e))
            raise RenderError(f"Playwright start failed: {e}") from e

        try:
            try:
                browser = await playwright.chromium.launch(
                    headless=self.settings.playwright_headless,
                    args=self.settings.browser_args,
                )
            except Exception as e:
                self.logger.error("Failed to launch browser", error=str(e))
                raise RenderError(f"Browser launch failed: {e}") from e

            try:
                try:
                    page = await browser.new_page()
                except Exception as e:
                    raise RenderError(f"Failed to open page: {e}") from e
                page.set_default_timeout(self.settings.render_timeout_ms)

                self.logger.debug("Render session started")
                yield PlaywrightRenderSession(page, self.settings)
            finally:
                await browser.close()
        finally:
            await playwright.stop()
            self.logger.debug("Render session closed")
