"""
Module: builder.session

Purpose:
    The surface a UI talks to: collection edits plus a single-flight
    generate() entry point.

Key Classes:
    - PhotoSession: Collection operations + guarded generation

Concurrency:
    A UI typically runs generate() on a worker thread. Only one run may
    be active at a time; an overlapping call raises GenerationInProgress
    instead of interleaving. Each run works on a snapshot, so edits made
    while it runs only affect the next run.

Used By:
    - cli: Command line front end
    - GUI integrations
"""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from pathlib import Path
from queue import Queue
from typing import Iterable, List, Optional, Sequence

from pics2pdf.core.errors import GenerationInProgress
from pics2pdf.core.models import ImageEntry, PageGeometry
from pics2pdf.utils.logging_utils import progress_to_queue

from .collection import PhotoCollection
from .config import DocumentConfig
from .controller import DocumentFactory, GenerateResult, generate_document
from .images import ImageDecoder

logger = logging.getLogger(__name__)


class PhotoSession:
    """
    One editing session: an ordered photo collection and its generator.

    Example:
        >>> session = PhotoSession()
        >>> session.append_files([Path("a.jpg"), Path("b.jpg")])
        >>> session.rotate(0)
        >>> result = session.generate(PageGeometry.a4(columns=2, rows=2))

    With a progress queue (read on the UI thread):
        >>> session.generate(PageGeometry.a4(), progress_queue=ui_queue)
    """

    def __init__(
        self,
        config: Optional[DocumentConfig] = None,
        *,
        decoder: Optional[ImageDecoder] = None,
        document_factory: Optional[DocumentFactory] = None,
    ) -> None:
        self.config = config or DocumentConfig()
        self.collection = PhotoCollection()
        self._decoder = decoder
        self._document_factory = document_factory
        self._generate_lock = threading.Lock()

    # ─────────────────────────────────────────────────────────────────────────
    # Collection operations
    # ─────────────────────────────────────────────────────────────────────────

    def append(self, blobs: Sequence[bytes], *, names: Optional[Sequence[str]] = None) -> List[ImageEntry]:
        return self.collection.append(blobs, names=names)

    def append_files(self, paths: Iterable[Path]) -> List[ImageEntry]:
        return self.collection.append_files(paths)

    def rotate(self, index: int) -> ImageEntry:
        return self.collection.rotate(index)

    def move_up(self, index: int) -> None:
        self.collection.move_up(index)

    def move_down(self, index: int) -> None:
        self.collection.move_down(index)

    def remove(self, index: int) -> ImageEntry:
        return self.collection.remove(index)

    def clear(self) -> None:
        self.collection.clear()

    def snapshot(self) -> tuple[ImageEntry, ...]:
        return self.collection.snapshot()

    # ─────────────────────────────────────────────────────────────────────────
    # Generation
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_generating(self) -> bool:
        return self._generate_lock.locked()

    def generate(
        self,
        geometry: PageGeometry,
        output_path: Optional[Path] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
        progress_queue: Optional[Queue] = None,
    ) -> GenerateResult:
        """
        Generate a PDF from the current collection.

        progress_queue receives a ProgressMessage for each pipeline log
        record of this run (page plan, warnings, the final summary).

        Raises:
            GenerationInProgress: If another run is active
            EmptyInput: If the collection is empty
            DecodeError: If a photo is unreadable
            GenerationCancelled: If cancel_event is set during the run
        """
        if not self._generate_lock.acquire(blocking=False):
            raise GenerationInProgress("A document is already being generated")
        progress = progress_to_queue(progress_queue) if progress_queue is not None else nullcontext()
        try:
            with progress:
                entries = self.collection.snapshot()
                logger.info(f"Generating document from {len(entries)} images")
                return generate_document(
                    entries,
                    geometry,
                    self.config,
                    output_path=output_path,
                    decoder=self._decoder,
                    document_factory=self._document_factory,
                    cancel_event=cancel_event,
                )
        finally:
            self._generate_lock.release()
