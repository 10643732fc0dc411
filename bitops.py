from typing import Optional

from channels import EOD, as_sink, as_source

ZERO = "0"  #: The only bitstring symbol written as a 0 bit


class EndOfStream(EOFError):
    """Raised when a bit is requested but the channel has no more bytes.

    :ivar partial: Bits (``'0'``/``'1'``) consumed by the failed
        :meth:`BitReader.read_bits` call before the channel ran dry.
    :type partial: str
    """

    def __init__(self, message: str, partial: str = ""):
        super().__init__(message)
        self.partial = partial


class BitReader:
    """Bit reader over a byte source.

    Delivers bits MSB-first, fetching a new byte from the channel only when
    all 8 bits of the previous one have been consumed.

    :ivar channel: Byte source (``next_byte()``).
    :ivar current_byte: Most recently fetched byte, ``None`` before the
        first fetch.
    :type current_byte: Optional[int]
    :ivar bits_consumed: Bits already taken from ``current_byte`` (0-8);
        8 means a new byte is fetched on the next bit read.
    :type bits_consumed: int
    """

    def __init__(self, channel):
        """Wrap ``channel`` for bit-level reading.

        :param channel: Byte source or readable binary file object.
        :returns: None
        :rtype: None
        """
        self.channel = as_source(channel)
        self.current_byte: Optional[int] = None
        self.bits_consumed = 8

    def read_bit(self) -> bool:
        """Read a single bit.

        :returns: ``True`` for a 1 bit, ``False`` for a 0 bit.
        :rtype: bool
        :raises EndOfStream: If a new byte is needed and the channel is
            exhausted. The reader stays at a byte boundary.
        """
        if self.bits_consumed == 8:
            value = self.channel.next_byte()
            if value is EOD:
                raise EndOfStream(
                    "End of data reached while trying to read next bit"
                )
            self.current_byte = value
            self.bits_consumed = 0

        self.bits_consumed += 1
        return (self.current_byte >> (8 - self.bits_consumed)) & 1 == 1

    def read_bits(self, amount: int) -> str:
        """Read ``amount`` bits into a bitstring, MSB-first.

        Bits consumed before an :class:`EndOfStream` are not given back to
        the reader; they are attached to the exception as ``partial``.

        :param amount: Number of bits to read.
        :type amount: int
        :returns: String of ``'0'`` and ``'1'`` characters.
        :rtype: str
        :raises ValueError: If ``amount`` is negative.
        :raises EndOfStream: If the channel runs dry partway.
        """
        if amount < 0:
            raise ValueError(f"Cannot read a negative amount of bits: {amount}")
        bits = []
        for _ in range(amount):
            try:
                bits.append("1" if self.read_bit() else "0")
            except EndOfStream as e:
                raise EndOfStream(str(e), "".join(bits)) from None
        return "".join(bits)

    def read_byte(self) -> Optional[int]:
        """Read a whole byte straight from the channel.

        The bit accumulator is bypassed and left untouched: the result is
        the next byte of the channel, never the rest of the byte currently
        being read bit by bit, and a later :meth:`read_bit` still finishes
        that byte first. Call :meth:`align_to_byte` beforehand to drop it.

        :returns: Byte value or ``None`` at end of data.
        :rtype: Optional[int]
        """
        return self.channel.next_byte()

    def read_bytes(self, count: int) -> bytes:
        """Read up to ``count`` whole bytes via :meth:`read_byte`.

        :param count: Maximum number of bytes to read.
        :type count: int
        :returns: The bytes read, shorter than ``count`` at end of data.
        :rtype: bytes
        """
        out = bytearray()
        while len(out) < count:
            value = self.read_byte()
            if value is EOD:
                break
            out.append(value)
        return bytes(out)

    def align_to_byte(self) -> int:
        """Discard the rest of the current byte.

        :returns: Amount of bits discarded (0-7).
        :rtype: int
        """
        discarded = 8 - self.bits_consumed
        self.bits_consumed = 8
        return discarded


class BitWriter:
    """Bit writer over a byte sink.

    Accumulates bits MSB-first and puts every byte on the channel as soon
    as it is complete. At most one byte is ever held back.

    :ivar channel: Byte sink (``put_byte()``, ``flush_sink()``).
    :ivar pending_byte: Byte under construction, unset bits are zero.
    :type pending_byte: int
    :ivar bits_pending: Bits set into ``pending_byte`` (0-8); 8 means the
        byte was emitted and is reset on the next bit write.
    :type bits_pending: int
    """

    def __init__(self, channel):
        """Wrap ``channel`` for bit-level writing.

        :param channel: Byte sink or writable binary file object.
        :returns: None
        :rtype: None
        """
        self.channel = as_sink(channel)
        self.pending_byte = 0
        self.bits_pending = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.flush()

    def write_bit(self, value) -> None:
        """Write a single bit.

        :param value: Bit value, any truthy value writes a 1.
        :returns: None
        :rtype: None
        """
        if self.bits_pending == 8:
            self.bits_pending = 0
            self.pending_byte = 0

        if value:
            self.pending_byte |= 0x80 >> self.bits_pending

        self.bits_pending += 1
        if self.bits_pending == 8:
            self.channel.put_byte(self.pending_byte)

    def write_bits(self, bitstring: str) -> None:
        """Write the bits of a bitstring in order.

        Only ``'0'`` writes a 0 bit. Any other symbol is a 1, even
        ``'\\0'`` or whitespace.

        :param bitstring: Sequence of bit symbols.
        :type bitstring: str
        :returns: None
        :rtype: None
        """
        for symbol in bitstring:
            self.write_bit(symbol != ZERO)

    def write_byte(self, value: int) -> None:
        """Write a whole byte, finishing any partial byte first.

        :param value: Byte to write, only the low 8 bits are used.
        :type value: int
        :returns: None
        :rtype: None
        """
        self.align_to_byte()
        self.channel.put_byte(value & 0xFF)

    def write_bytes(self, data: bytes) -> None:
        """Write each byte of ``data`` via :meth:`write_byte`.

        :param data: Bytes to write.
        :type data: bytes
        :returns: None
        :rtype: None
        """
        for value in data:
            self.write_byte(value)

    def align_to_byte(self) -> int:
        """Pad the byte under construction with zeroes and emit it.

        :returns: Amount of padding bits added (0 if already aligned).
        :rtype: int
        """
        if not 0 < self.bits_pending < 8:
            return 0
        padding = 8 - self.bits_pending
        self.bits_pending = 8
        self.channel.put_byte(self.pending_byte)
        return padding

    def flush(self) -> None:
        """Align to a byte boundary and flush the channel."""
        self.align_to_byte()
        self.channel.flush_sink()
