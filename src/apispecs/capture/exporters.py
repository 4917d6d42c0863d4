"""
Export functionality for captured traces.

Writes a trace as a HAR 1.2 JSON file and reads HAR files back.
"""

import logging

from ..common import dump_json, read_json_document, write_text_document
from .trace import TraceRecorder

logger = logging.getLogger("apispecs.capture")


class HarExporter:
    """
    Exports a trace to HAR 1.2 format.
    """

    @staticmethod
    def export(trace: TraceRecorder, output_path: str) -> None:
        """
        Export trace entries as a HAR document.

        The document is fully encoded before anything touches the disk, so an
        encoding failure leaves no partial file behind.

        Args:
            trace: Recorded trace
            output_path: Where to save the HAR file

        Raises:
            SerializationError: If the trace can't be encoded
            IoError: If the file can't be written
        """
        text = dump_json(trace.to_har())
        write_text_document(text, output_path)
        logger.info("Exported %d entries → %s", len(trace), output_path)

    @staticmethod
    def load(file_path: str) -> TraceRecorder:
        """
        Load a HAR file into a trace.

        Raises:
            IoError: If the file doesn't exist or can't be read
            ParseError: If the file isn't a HAR document
        """
        data = read_json_document(file_path, kind="HAR")
        return TraceRecorder.from_har(data)
