"""
HTML Converter
==============

Orchestrates one conversion: read the HTML source, substitute placeholders,
render it with a RenderEngine and return the artifact base64-encoded.
"""

from typing import Optional, Dict, Any, Union
from pathlib import Path
import base64
import os
import uuid

import aiofiles
import aiofiles.os

from html_convert.config.logging import get_logger
from html_convert.config.settings import Settings, get_settings
from html_convert.core.rendering.engine import RenderEngine, RenderSession, PlaywrightRenderEngine
from html_convert.core.templating.loader import load_template
from html_convert.models.schemas import (
    ArtifactKind,
    ConversionRequest,
    PDFOptions,
    RenderedArtifact,
    ScreenshotOptions,
)

logger = get_logger(__name__)

OutputPath = Optional[Union[str, os.PathLike]]


async def _capture(
    session: RenderSession, kind: ArtifactKind, options: Optional[ScreenshotOptions]
) -> bytes:
    if kind == ArtifactKind.PDF:
        return await session.pdf(PDFOptions())
    return await session.screenshot(options or ScreenshotOptions())


async def _write_artifact(data: bytes, output_path: Union[str, os.PathLike]) -> Path:
    path = Path(output_path).expanduser().resolve()
    # A failed write leaves output_path untouched
    temp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.part")
    try:
        async with aiofiles.open(temp_path, mode="wb") as output:
            await output.write(data)
        await aiofiles.os.replace(temp_path, path)
    except BaseException:
        if temp_path.exists():
            await aiofiles.os.remove(temp_path)
        raise
    return path


async def render_html(
    html_content: str,
    kind: ArtifactKind,
    engine: RenderEngine,
    output_path: OutputPath = None,
    options: Optional[ScreenshotOptions] = None,
) -> RenderedArtifact:
    """
    Render HTML text into an artifact using a fresh engine session.

    Args:
        html_content: HTML text to render
        kind: Whether to capture an image or export a PDF
        engine: Render engine to launch the session on
        output_path: Optional path the artifact bytes are also written to
        options: Screenshot options, ignored for PDF output

    Returns:
        RenderedArtifact with the raw bytes and their base64 encoding
    """
    async with engine.launch() as session:
        await session.load(html_content)
        data = await _capture(session, kind, options)

        written_to = None
        if output_path is not None:
            written_to = await _write_artifact(data, output_path)
            logger.info("Artifact saved", kind=kind.value, output_path=str(written_to))

        return RenderedArtifact(
            kind=kind,
            data=data,
            base64_data=base64.b64encode(data).decode("ascii"),
            file_size=len(data),
            output_path=written_to,
            metadata={
                "engine": type(engine).__name__,
                "html_length": len(html_content),
            },
        )


class HTMLConverter:
    """Converts an HTML file with ``{{key}}`` placeholders to an image or PDF."""

    def __init__(
        self,
        source_location: Union[str, os.PathLike],
        encoding: Optional[str] = None,
        substitutions: Optional[Dict[str, Any]] = None,
        engine: Optional[RenderEngine] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.request = ConversionRequest(
            source_location=os.fspath(source_location),
            encoding=encoding or self.settings.default_encoding,
            substitutions=substitutions or {},
        )
        self.engine = engine or PlaywrightRenderEngine(self.settings)
        self.logger: Any = logger.bind(source=self.request.source_location)  # structlog.BoundLoggerBase

    @classmethod
    def from_request(
        cls,
        request: ConversionRequest,
        engine: Optional[RenderEngine] = None,
        settings: Optional[Settings] = None,
    ) -> "HTMLConverter":
        """Build a converter from an existing ConversionRequest."""
        return cls(
            request.source_location,
            encoding=request.encoding,
            substitutions=dict(request.substitutions),
            engine=engine,
            settings=settings,
        )

    async def resolve_text(self) -> str:
        """
        Read the source file and apply placeholder substitutions.

        Returns:
            HTML text with the first occurrence of each ``{{key}}`` replaced

        Raises:
            ReadError: If the source file cannot be opened or decoded
        """
        try:
            return await load_template(
                self.request.source_location,
                self.request.encoding,
                self.request.substitutions,
            )
        except Exception as e:
            self.logger.error("Error reading HTML file", error=str(e))
            raise

    async def render(
        self,
        kind: ArtifactKind,
        output_path: OutputPath = None,
        options: Optional[ScreenshotOptions] = None,
    ) -> RenderedArtifact:
        """Resolve the source text and render it into an artifact."""
        html_content = await self.resolve_text()
        artifact = await render_html(html_content, kind, self.engine, output_path, options)

        self.logger.info(
            "Conversion completed", kind=kind.value, file_size=artifact.file_size
        )
        return artifact

    async def to_image(
        self, output_path: OutputPath = None, options: Optional[ScreenshotOptions] = None
    ) -> str:
        """
        Convert the HTML source to an image.

        Args:
            output_path: Optional path the image is also saved to
            options: Screenshot options, defaults to a full-page PNG

        Returns:
            Base64-encoded image content
        """
        try:
            artifact = await self.render(ArtifactKind.IMAGE, output_path, options)
        except Exception as e:
            self.logger.error("Error converting HTML to image", error=str(e))
            raise
        return artifact.base64_data

    async def to_pdf(self, output_path: OutputPath = None) -> str:
        """
        Convert the HTML source to an A4 PDF document.

        Args:
            output_path: Optional path the PDF is also saved to

        Returns:
            Base64-encoded PDF content
        """
        try:
            artifact = await self.render(ArtifactKind.PDF, output_path)
        except Exception as e:
            self.logger.error("Error converting HTML to PDF", error=str(e))
            raise
        return artifact.base64_data


async def convert_html_to_image(
    html_content: str,
    engine: Optional[RenderEngine] = None,
    options: Optional[ScreenshotOptions] = None,
) -> str:
    """Render an HTML string to a base64-encoded image."""
    try:
        artifact = await render_html(
            html_content, ArtifactKind.IMAGE, engine or PlaywrightRenderEngine(), options=options
        )
    except Exception as e:
        logger.error("Error converting HTML to image", error=str(e))
        raise
    logger.info("Image captured and converted to base64", file_size=artifact.file_size)
    return artifact.base64_data


async def convert_html_to_pdf(html_content: str, engine: Optional[RenderEngine] = None) -> str:
    """Render an HTML string to a base64-encoded A4 PDF."""
    try:
        artifact = await render_html(
            html_content, ArtifactKind.PDF, engine or PlaywrightRenderEngine()
        )
    except Exception as e:
        logger.error("Error converting HTML to PDF", error=str(e))
        raise
    logger.info("PDF generated and converted to base64", file_size=artifact.file_size)
    return artifact.base64_data
