from collections.abc import Mapping, Sequence

from billparse.processor.exceptions import MalformedPayload


def assemble_chunks(
    chunks: Mapping[int, Sequence[int] | bytes] | Sequence[Sequence[int] | bytes],
    total_chunks: int,
    file_size: int | None = None,
) -> bytes:
    """Concatenate transport chunks in index order 0..total_chunks-1.

    *chunks* is either a mapping of chunk index to data (chunks may have
    arrived out of order) or an already ordered sequence.

    Raises:
        MalformedPayload: if a chunk is missing or the size does not match.
    """
    if total_chunks <= 0:
        raise MalformedPayload(f"Invalid chunk count: {total_chunks}")

    indexed = chunks if isinstance(chunks, Mapping) else dict(enumerate(chunks))
    missing = [i for i in range(total_chunks) if i not in indexed]
    if missing:
        raise MalformedPayload(f"Missing chunks {missing} of {total_chunks}")

    buffer = bytearray()
    for index in range(total_chunks):
        try:
            buffer.extend(bytes(indexed[index]))
        except (TypeError, ValueError) as exc:
            raise MalformedPayload(f"Chunk {index} is not a byte array: {exc}") from exc

    if file_size is not None and len(buffer) != file_size:
        raise MalformedPayload(
            f"Reassembled size {len(buffer)} does not match declared size {file_size}"
        )
    return bytes(buffer)
