import datetime
import threading
from typing import Generic, TypeVar

import msgspec

from .entry import Entry


T = TypeVar('T', bound=Entry)


class Log(msgspec.Struct, Generic[T], kw_only=True):
    """A logged entry plus the stream and call site that wrote it."""

    entry: T
    logger: str
    filename: str
    function_name: str
    line_number: int
    thread_id: int = msgspec.field(
        default_factory=threading.get_native_id,
    )
    timestamp: str = msgspec.field(
        default_factory=lambda: datetime.datetime.now(datetime.UTC).isoformat()
    )
