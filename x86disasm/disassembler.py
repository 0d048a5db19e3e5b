"""Streaming disassembly listings."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, List, Optional, Union

from .constants import DEFAULT_CHUNK_SIZE
from .decoder import InstructionDecoder
from .errors import DecodeError
from .instruction import Instruction
from .labels import LabelTable
from .printer import InstructionTextRenderer
from .stream import ByteCursor

logger = logging.getLogger(__name__)

Source = Union[bytes, bytearray, BinaryIO]


@dataclass
class DisassemblyListing:
    """Result of a complete run collected in memory."""

    lines: List[str] = field(default_factory=list)
    labels: Dict[int, str] = field(default_factory=dict)
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        return "\n".join(self.lines) + "\n" if self.lines else ""


class Disassembler:
    """Drive the decoder over a byte source until end-of-stream or failure.

    Every run gets its own cursor and :class:`LabelTable`; nothing is shared
    between runs.  Decoding errors are terminal: the listing stops at the
    instruction that failed.
    """

    def __init__(
        self,
        renderer: Optional[InstructionTextRenderer] = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.renderer = renderer or InstructionTextRenderer()
        self.chunk_size = chunk_size

    def _open(self, source: Source) -> ByteCursor:
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        return ByteCursor(source, chunk_size=self.chunk_size)

    def iter_instructions(
        self,
        source: Source,
        *,
        labels: Optional[LabelTable] = None,
        max_instructions: Optional[int] = None,
    ) -> Iterator[Instruction]:
        """Yield instructions as they are decoded.

        Nothing past ``max_instructions`` is read or decoded.
        :class:`~x86disasm.errors.DecodeError` propagates after every
        instruction preceding the failure has been yielded.
        """

        cursor = self._open(source)
        return self._decode(cursor, InstructionDecoder(cursor, labels), max_instructions)

    def iter_listing(
        self,
        source: Source,
        *,
        max_instructions: Optional[int] = None,
        show_labels: bool = False,
        labels: Optional[LabelTable] = None,
    ) -> Iterator[str]:
        table = labels if labels is not None else LabelTable()
        cursor = self._open(source)
        decoder = InstructionDecoder(cursor, table)
        yield from self.renderer.render_all(self._decode(cursor, decoder, max_instructions))
        if max_instructions is not None and not cursor.at_end():
            yield "; ... truncated ..."
        if show_labels:
            yield from self._render_labels(table)

    def generate_listing(
        self,
        source: Source,
        *,
        max_instructions: Optional[int] = None,
        show_labels: bool = False,
    ) -> DisassemblyListing:
        table = LabelTable()
        listing = DisassemblyListing()
        try:
            for line in self.iter_listing(
                source,
                max_instructions=max_instructions,
                show_labels=show_labels,
                labels=table,
            ):
                listing.lines.append(line)
        except DecodeError as exc:
            listing.error = exc
        listing.labels = dict(table.items())
        return listing

    def write_listing(
        self,
        source: Source,
        output_path: Path,
        *,
        max_instructions: Optional[int] = None,
        show_labels: bool = False,
    ) -> DisassemblyListing:
        listing = self.generate_listing(
            source,
            max_instructions=max_instructions,
            show_labels=show_labels,
        )
        output_path.write_text(listing.render(), "utf-8")
        return listing

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _decode(
        cursor: ByteCursor,
        decoder: InstructionDecoder,
        max_instructions: Optional[int],
    ) -> Iterator[Instruction]:
        count = 0
        try:
            # cap before at_end() so nothing past the last instruction is decoded
            while max_instructions is None or count < max_instructions:
                if cursor.at_end():
                    break
                yield decoder.decode()
                count += 1
        except DecodeError as exc:
            logger.warning("decoding halted after %d instruction(s): %s", count, exc)
            raise
        logger.info("decoded %d instruction(s) from %d byte(s)", count, cursor.position)

    @staticmethod
    def _render_labels(table: LabelTable) -> Iterator[str]:
        yield "; labels"
        if not len(table):
            yield ";   (none)"
            return
        for position, name in table.items():
            yield f";   {name} = {position}"
