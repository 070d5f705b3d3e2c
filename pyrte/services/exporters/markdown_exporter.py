from __future__ import annotations

from pyrte.domain.interfaces import IExporter
from pyrte.domain.models import ExportArtifact, ExportSource
from pyrte.services.markdown_transcoder import html_to_markdown


class MarkdownExporter(IExporter):
    """Lossy Markdown rendition of the document HTML."""

    name = "md"
    label = "Export as Markdown"
    file_ext = "md"
    media_type = "text/markdown"

    def export(self, source: ExportSource, basename: str) -> ExportArtifact:
        return self.artifact(html_to_markdown(source.html).encode("utf-8"), basename)
