"""Watch event source reading concatenated JSON documents."""

import json
import logging
from collections.abc import Iterator
from typing import TextIO

from pydantic import ValidationError

from kubeblinkt.exceptions import EventSourceError
from kubeblinkt.models import WatchEvent

logger = logging.getLogger(__name__)


class JsonStreamSource:
    """
    Iterates watch events from a text stream.

    The stream holds JSON objects back to back, optionally separated by
    whitespace, as printed by
    ``kubectl get pods --watch --output-watch-events -o json``. Objects
    without a ``type`` key are read as ADDED events for the whole object.

    A document that is not a valid event (e.g. a BOOKMARK) is logged and
    skipped. A syntax error on a complete line is logged and reading resumes
    at the next line starting with "{". An incomplete last line is buffered
    until more input arrives, up to max_buffer_size characters.

    Raises:
        EventSourceError: If the underlying stream cannot be read
    """

    def __init__(
        self,
        stream: TextIO,
        source_name: str = "<stream>",
        chunk_size: int = 4096,
        max_buffer_size: int = 4 * 1024 * 1024,
    ):
        """
        Initialize the source.

        Args:
            stream: Text stream to read from
            source_name: Description used in log and error messages
            chunk_size: Number of characters read per call (reads may block)
            max_buffer_size: Largest document kept while waiting for its end (characters)
        """
        self.stream = stream
        self.source_name = source_name
        self.chunk_size = chunk_size
        self.max_buffer_size = max_buffer_size
        self._decoder = json.JSONDecoder()

    def __iter__(self) -> Iterator[WatchEvent]:
        for document in self._documents():
            event = self._to_event(document)
            if event is not None:
                yield event

    def _read(self) -> str:
        try:
            # readline() returns as soon as a line is available, so events
            # piped from a live watch are handled without waiting for a full chunk
            return self.stream.readline(self.chunk_size)
        except (OSError, UnicodeDecodeError) as e:
            raise EventSourceError(self.source_name, str(e)) from e

    def _documents(self) -> Iterator[object]:
        buffer = ""
        eof = False
        # Dropping lines until one opens a new top-level document
        skipping = False
        while True:
            buffer = buffer.lstrip()
            if buffer:
                try:
                    document, end = self._decoder.raw_decode(buffer)
                except json.JSONDecodeError as e:
                    if "\n" in buffer[e.pos:]:
                        # The error is on a complete line, so more input cannot fix it
                        logger.warning(f"Skipping undecodable text from {self.source_name}: {e}")
                        buffer, skipping = self._skip_to_document(buffer, e.pos)
                        continue
                    if eof:
                        logger.warning(
                            f"Discarding undecodable trailing data from {self.source_name}: {e}"
                        )
                        return
                    # Last line is incomplete, read more
                else:
                    buffer = buffer[end:]
                    yield document
                    continue
            elif eof:
                return

            if len(buffer) > self.max_buffer_size:
                logger.warning(
                    f"Dropping {len(buffer)} undecoded characters from {self.source_name}: "
                    f"document larger than {self.max_buffer_size}"
                )
                buffer, skipping = "", True

            chunk = self._read()
            if not chunk:
                eof = True
            elif skipping:
                if not chunk.startswith("{"):
                    continue
                skipping = False
            buffer += chunk

    @staticmethod
    def _skip_to_document(buffer: str, position: int) -> tuple[str, bool]:
        """Cut the buffer at the next line starting with '{' after position."""
        start = buffer.find("\n{", position)
        if start == -1:
            return "", True
        return buffer[start + 1:], False

    def _to_event(self, document: object) -> WatchEvent | None:
        if not isinstance(document, dict):
            logger.warning(f"Skipping non-object document from {self.source_name}: {document!r}")
            return None

        if "type" not in document:
            document = {"type": "ADDED", "object": document}

        try:
            return WatchEvent.model_validate(document)
        except ValidationError as e:
            logger.warning(f"Skipping malformed watch event from {self.source_name}: {e}")
            return None
