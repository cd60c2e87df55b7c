"""Line-splitting transform for process output.

Converts a flow of raw byte chunks into discrete text lines. Lines end at
``\\n``; a ``\\r`` right before it is removed as well. Empty lines are kept.
A last fragment that never sees a terminator is dropped when the stream
ends: writing ``"abc"`` without a newline produces no line at all.
"""

from __future__ import annotations

import codecs
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import asyncio
    from collections.abc import AsyncIterable, AsyncIterator

DEFAULT_CHUNK_SIZE = 64 * 1024


async def iter_chunks(
    reader: asyncio.StreamReader, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> AsyncIterator[bytes]:
    """Yield chunks from a stream reader until EOF.

    Args
    ----
        reader: The stream to drain, typically a subprocess pipe.
        chunk_size: Upper bound for a single read.
    """
    while chunk := await reader.read(chunk_size):
        yield chunk


async def split_lines(
    chunks: AsyncIterable[bytes], encoding: str = "utf-8"
) -> AsyncIterator[str]:
    """Yield one text line per terminator found in ``chunks``.

    Decoding is incremental, so a multi-byte character split across two
    chunks still decodes correctly. Undecodable bytes become U+FFFD.

    Args
    ----
        chunks: Raw byte chunks in stream order.
        encoding: Codec used to decode the bytes.

    Yields
    ------
        Lines without their ``\\n`` / ``\\r\\n`` terminator.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    # Text of the line in progress, kept as pieces so a long line is joined once
    partial: list[str] = []
    async for chunk in chunks:
        *lines, rest = decoder.decode(chunk).split("\n")
        if lines:
            lines[0] = "".join(partial) + lines[0]
            partial.clear()
            for line in lines:
                yield line.removesuffix("\r")
        if rest:
            partial.append(rest)
    # Whatever is left in ``partial`` (and in the decoder) had no terminator.


__all__ = ["DEFAULT_CHUNK_SIZE", "iter_chunks", "split_lines"]
