from typing import BinaryIO, Optional

EOD = None  #: End-of-data sentinel returned by ``next_byte``


class StreamSource:
    """Byte source reading one byte at a time from a binary stream.

    :ivar stream: Readable binary file object (``read(1)``).
    :type stream: BinaryIO
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def next_byte(self) -> Optional[int]:
        """Read the next byte from the stream.

        :returns: Byte value ``0..255`` or :data:`EOD` at end of data.
        :rtype: Optional[int]
        """
        data = self.stream.read(1)
        if not data:
            return EOD
        return data[0]


class StreamSink:
    """Byte sink writing single bytes to a binary stream.

    :ivar stream: Writable binary file object (``write``/``flush``).
    :type stream: BinaryIO
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def put_byte(self, value: int) -> None:
        """Write one byte to the stream.

        :param value: Byte value ``0..255``.
        :type value: int
        :returns: None
        :rtype: None
        """
        self.stream.write(bytes((value,)))

    def flush_sink(self) -> None:
        """Flush the stream's own buffering."""
        self.stream.flush()


def as_source(channel):
    """Return a byte source for ``channel``.

    Objects already exposing ``next_byte`` are returned as-is, binary
    file objects are wrapped in :class:`StreamSource`.

    :param channel: Byte source or readable binary file object.
    :returns: Object implementing ``next_byte()``.
    :raises TypeError: If ``channel`` can not be read from.
    """
    if hasattr(channel, "next_byte"):
        return channel
    if hasattr(channel, "read"):
        return StreamSource(channel)
    raise TypeError(
        f"Unsupported input channel: {type(channel).__name__}"
    )


def as_sink(channel):
    """Return a byte sink for ``channel``.

    :param channel: Byte sink or writable binary file object.
    :returns: Object implementing ``put_byte()`` and ``flush_sink()``.
    :raises TypeError: If ``channel`` can not be written to.
    """
    if hasattr(channel, "put_byte") and hasattr(channel, "flush_sink"):
        return channel
    if hasattr(channel, "write") and hasattr(channel, "flush"):
        return StreamSink(channel)
    raise TypeError(
        f"Unsupported output channel: {type(channel).__name__}"
    )
