from __future__ import annotations

from PyQt6.QtCore import QBuffer, QIODevice, QMarginsF, QPointF
from PyQt6.QtGui import QFont, QFontMetricsF, QPageLayout, QPageSize, QPainter, QPdfWriter

from pyrte.domain.errors import ExportFailedError
from pyrte.domain.interfaces import IExporter
from pyrte.domain.models import ExportArtifact, ExportSource
from pyrte.services.text_layout import PageGeometry, PlacedLine, paginate, wrap_lines
from pyrte.utils.constants import MIME_PDF, PDF_FONT_FAMILY, PDF_FONT_SIZE

# One device unit per point
_PDF_DPI = 72


class PdfExporter(IExporter):
    """
    Text-only PDF: the visible text of the document wrapped to the printable
    width of an A4 page and paginated at a fixed line height.
    """

    name = "pdf"
    label = "Export as PDF"
    file_ext = "pdf"
    media_type = MIME_PDF

    def __init__(
        self,
        geometry: PageGeometry | None = None,
        font_family: str = PDF_FONT_FAMILY,
        font_size: float = PDF_FONT_SIZE,
    ) -> None:
        self.geometry = geometry or PageGeometry()
        self.font_family = font_family
        self.font_size = font_size

    def layout(self, text: str, writer: QPdfWriter | None = None) -> list[PlacedLine]:
        metrics = QFontMetricsF(self._font(), writer) if writer else QFontMetricsF(self._font())
        lines = wrap_lines(text, self.geometry.max_width, metrics.horizontalAdvance)
        return paginate(lines, self.geometry, ascent=metrics.ascent())

    def export(self, source: ExportSource, basename: str) -> ExportArtifact:
        buf = QBuffer()
        if not buf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise ExportFailedError("Cannot open PDF buffer")

        writer = QPdfWriter(buf)
        writer.setResolution(_PDF_DPI)
        writer.setTitle(basename)
        writer.setPageLayout(
            QPageLayout(
                QPageSize(QPageSize.PageSizeId.A4),
                QPageLayout.Orientation.Portrait,
                QMarginsF(0, 0, 0, 0),
                QPageLayout.Unit.Point,
            )
        )

        placed = self.layout(source.text, writer)

        painter = QPainter()
        if not painter.begin(writer):
            raise ExportFailedError("Cannot start PDF painter")
        try:
            painter.setFont(self._font())
            page = 0
            for line in placed:
                if line.page != page:
                    writer.newPage()
                    page = line.page
                painter.drawText(QPointF(line.x, line.y), line.text)
        finally:
            painter.end()
        buf.close()
        return self.artifact(bytes(buf.data()), basename)

    def _font(self) -> QFont:
        font = QFont(self.font_family)
        font.setPointSizeF(self.font_size)
        return font
