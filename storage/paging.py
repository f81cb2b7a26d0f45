from __future__ import annotations

from typing import Any, Iterator


def stream_pages(query: Any, page_size: int) -> Iterator[Any]:
    """
    Yield every snapshot matched by `query`, fetching `page_size` documents per call.

    Offsets are applied over the store's implicit document-id order, so pages are
    stable as long as nothing is inserted mid-scan.
    """
    size = max(1, int(page_size))
    offset = 0
    while True:
        snaps = list(query.offset(offset).limit(size).stream())
        yield from snaps
        if len(snaps) < size:
            return
        offset += size
