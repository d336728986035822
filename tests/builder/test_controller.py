"""
Integration tests for generate_document().

Covers the full plan → decode → compose → assemble pipeline, the
abort-on-decode-failure policy, cancellation, and sequential processing.
"""

import threading
from pathlib import Path

import fitz  # PyMuPDF
import pytest
from PIL import Image

from pics2pdf.builder.config import DocumentConfig
from pics2pdf.builder.controller import generate_document
from pics2pdf.builder.images import ImageDecoder, PillowDecoder
from pics2pdf.builder.output import DocumentContainer
from pics2pdf.core.errors import DecodeError, EmptyInput, GenerationCancelled, InvalidArgument
from pics2pdf.core.models import CellRect, ImageEntry, PageGeometry

LOW_DPI = DocumentConfig(dpi=36)


class EventLog:
    """Shared record of decode / place calls, in call order."""

    def __init__(self):
        self.events = []


class LoggingDecoder(ImageDecoder):
    """Decoder that records calls and returns a blank image."""

    def __init__(self, log: EventLog, size=(40, 30)):
        self.log = log
        self.size = size

    def decode(self, blob: bytes) -> Image.Image:
        self.log.events.append(("decode", blob))
        return Image.new("RGB", self.size)


class LoggingDocument(DocumentContainer):
    """Container that records calls instead of drawing."""

    def __init__(self, log: EventLog):
        self.log = log
        self.pages = 1
        self.placements = []
        self.saved_to = None

    @property
    def page_count(self) -> int:
        return self.pages

    def add_page(self) -> None:
        self.pages += 1
        self.log.events.append(("add_page",))

    def place_image(self, image, x, y, width, height) -> None:
        self.placements.append((image.size, CellRect(x, y, width, height)))
        self.log.events.append(("place",))

    def save(self, path: Path) -> Path:
        self.saved_to = path
        self.log.events.append(("save",))
        return path


class TestGenerateDocument:
    """End-to-end generation to a real PDF."""

    def test_generate_when_five_entries_2x2_then_two_pages(self, entry_factory, tmp_path):
        # Arrange
        entries = entry_factory(5)
        output = tmp_path / "grid.pdf"

        # Act
        result = generate_document(entries, PageGeometry.a4(columns=2, rows=2), LOW_DPI, output_path=output)

        # Assert
        assert result.output_path == output
        assert result.page_count == 2
        assert result.image_count == 5
        with fitz.open(output) as pdf:
            assert pdf.page_count == 2
            assert len(pdf[1].get_image_info()) == 1
            assert len(pdf[0].get_image_info()) == 4

    def test_generate_when_one_per_page_then_page_per_entry(self, entry_factory, tmp_path):
        output = tmp_path / "single.pdf"

        result = generate_document(entry_factory(3), PageGeometry.a4(), LOW_DPI, output_path=output)

        assert result.page_count == 3
        with fitz.open(output) as pdf:
            assert pdf.page_count == 3

    def test_generate_when_no_output_path_then_uses_config_filename(self, entry_factory, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = generate_document(entry_factory(1), PageGeometry.a4(), LOW_DPI)

        assert result.output_path == Path("my-photos.pdf")
        assert (tmp_path / "my-photos.pdf").exists()

    def test_generate_when_rotated_entry_then_bitmap_sized_for_cell(self, tmp_path):
        """A landscape photo rotated 90° fills a portrait A4 page's width."""
        # Arrange
        log = EventLog()
        doc = LoggingDocument(log)
        entry = ImageEntry(image_ref=b"landscape", rotation_degrees=90)
        config = DocumentConfig(dpi=150)

        # Act
        generate_document(
            [entry],
            PageGeometry.a4(),
            config,
            output_path=tmp_path / "x.pdf",
            decoder=LoggingDecoder(log, size=(4000, 3000)),
            document_factory=lambda geometry, cfg: doc,
        )

        # Assert
        ((size, rect),) = doc.placements
        assert size == (1240, 1653)  # 210 mm at 150 DPI = 1240 px wide
        fitted_height = 210 * 1653 / 1240
        assert rect.width == pytest.approx(210)
        assert rect.height == pytest.approx(fitted_height)
        assert rect.y == pytest.approx((297 - fitted_height) / 2)

    def test_generate_when_padding_then_placement_inset(self, tmp_path):
        log = EventLog()
        doc = LoggingDocument(log)
        config = DocumentConfig(dpi=72, cell_padding_mm=10)

        generate_document(
            [ImageEntry(image_ref=b"x")],
            PageGeometry(width=100, height=100),
            config,
            output_path=tmp_path / "x.pdf",
            decoder=LoggingDecoder(log, size=(50, 50)),
            document_factory=lambda geometry, cfg: doc,
        )

        ((_, rect),) = doc.placements
        assert rect == CellRect(10, 10, 80, 80)

    def test_generate_when_padding_fills_cell_then_raises(self, entry_factory, tmp_path):
        config = DocumentConfig(cell_padding_mm=60)

        with pytest.raises(InvalidArgument, match="cell_padding_mm"):
            generate_document(entry_factory(1), PageGeometry.a4(columns=2, rows=2), config,
                              output_path=tmp_path / "x.pdf")


class TestSequentialProcessing:
    """Entry i is placed before entry i+1 is decoded."""

    def test_generate_when_many_entries_then_decode_and_place_interleave(self, tmp_path):
        # Arrange
        log = EventLog()
        doc = LoggingDocument(log)
        entries = [ImageEntry(image_ref=bytes([i]), order=i) for i in range(5)]

        # Act
        generate_document(
            entries,
            PageGeometry.a4(columns=2, rows=1),
            LOW_DPI,
            output_path=tmp_path / "x.pdf",
            decoder=LoggingDecoder(log),
            document_factory=lambda geometry, cfg: doc,
        )

        # Assert
        assert log.events == [
            ("decode", b"\x00"), ("place",),
            ("decode", b"\x01"), ("place",),
            ("add_page",),
            ("decode", b"\x02"), ("place",),
            ("decode", b"\x03"), ("place",),
            ("add_page",),
            ("decode", b"\x04"), ("place",),
            ("save",),
        ]


class TestGenerateErrors:
    """Error policy: nothing is persisted on failure."""

    def test_generate_when_empty_then_empty_input_and_no_file(self, tmp_path):
        output = tmp_path / "empty.pdf"

        with pytest.raises(EmptyInput, match="No images selected"):
            generate_document([], PageGeometry.a4(), output_path=output)

        assert not output.exists()
        assert list(tmp_path.iterdir()) == []

    def test_generate_when_empty_and_padding_too_large_then_empty_input(self, tmp_path):
        """An empty selection is reported before any option checks."""
        config = DocumentConfig(cell_padding_mm=200)

        with pytest.raises(EmptyInput, match="No images selected"):
            generate_document([], PageGeometry.a4(), config, output_path=tmp_path / "x.pdf")

        assert list(tmp_path.iterdir()) == []

    def test_generate_when_entry_unreadable_then_aborts_naming_entry(self, entry_factory, tmp_path):
        # Arrange
        entries = entry_factory(3)
        entries[1] = ImageEntry(image_ref=b"garbage", order=1, name="broken.jpg")
        output = tmp_path / "out.pdf"

        # Act
        with pytest.raises(DecodeError) as excinfo:
            generate_document(entries, PageGeometry.a4(), LOW_DPI, output_path=output)

        # Assert
        assert excinfo.value.index == 1
        assert excinfo.value.name == "broken.jpg"
        assert "broken.jpg" in str(excinfo.value)
        assert list(tmp_path.iterdir()) == []

    def test_generate_when_cancelled_then_raises_and_no_file(self, entry_factory, tmp_path):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(GenerationCancelled):
            generate_document(entry_factory(2), PageGeometry.a4(), LOW_DPI,
                              output_path=tmp_path / "x.pdf", cancel_event=cancel)

        assert list(tmp_path.iterdir()) == []

    def test_generate_when_cancelled_midway_then_stops_before_next_entry(self, tmp_path):
        """Setting the event during a decode stops the run before the next one."""
        log = EventLog()
        cancel = threading.Event()

        class CancellingDecoder(LoggingDecoder):
            def decode(self, blob):
                cancel.set()
                return super().decode(blob)

        doc = LoggingDocument(log)
        with pytest.raises(GenerationCancelled):
            generate_document(
                [ImageEntry(image_ref=b"a"), ImageEntry(image_ref=b"b")],
                PageGeometry.a4(),
                LOW_DPI,
                output_path=tmp_path / "x.pdf",
                decoder=CancellingDecoder(log),
                document_factory=lambda geometry, cfg: doc,
                cancel_event=cancel,
            )

        assert [e for e in log.events if e[0] == "decode"] == [("decode", b"a")]
        assert doc.saved_to is None

    def test_generate_when_default_decoder_then_pillow(self, entry_factory, tmp_path):
        """Real data through the default decoder produces a readable PDF."""
        output = tmp_path / "real.pdf"

        generate_document(entry_factory(1, 64, 48), PageGeometry.a4(), LOW_DPI, output_path=output,
                          decoder=PillowDecoder())

        with fitz.open(output) as pdf:
            assert pdf.page_count == 1
