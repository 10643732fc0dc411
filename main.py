import argparse
import sys

from typing import List
from bitops import BitReader, BitWriter, EndOfStream

DEFAULT_GROUP = 8  #: Bits per line printed by ``dump``


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Inspect and build files bit by bit (MSB-first)"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    dump = subparsers.add_parser(
        "dump", aliases=["d"], help="Print the bits of a binary file"
    )
    dump.add_argument("file", help="Binary file to read")
    dump.add_argument(
        "-g",
        "--group",
        type=int,
        default=DEFAULT_GROUP,
        help=f"Bits per output line (default: {DEFAULT_GROUP})",
    )

    pack = subparsers.add_parser(
        "pack", aliases=["p"], help="Pack a text file of bits into bytes"
    )
    pack.add_argument("input", help="Text file of '0'/'1' symbols")
    pack.add_argument(
        "-o", "--output", required=True, help="Output binary file path"
    )

    return parser


def _strip_whitespace(text: str) -> str:
    """Remove every whitespace character from a bitstring.

    :param text: Raw text read from the input file.
    :type text: str
    :returns: Bit symbols only.
    :rtype: str
    """
    return "".join(text.split())


def dump_bits(path: str, group: int = DEFAULT_GROUP) -> List[str]:
    """Read a binary file as groups of bits.

    :param path: Binary file to read.
    :type path: str
    :param group: Bits per group, the last group may be shorter.
    :type group: int
    :returns: Bitstrings of ``group`` bits each.
    :rtype: List[str]
    :raises ValueError: If ``group`` is not positive.
    """
    if group <= 0:
        raise ValueError(f"Group size must be positive: {group}")
    groups: List[str] = []
    with open(path, "rb") as f:
        reader = BitReader(f)
        while True:
            try:
                groups.append(reader.read_bits(group))
            except EndOfStream as e:
                if e.partial:
                    groups.append(e.partial)
                break
    return groups


def pack_bits(input_path: str, output_path: str) -> tuple:
    """Pack the bit symbols of a text file into a binary file.

    Whitespace is ignored, ``'0'`` is a 0 bit and any other symbol a 1 bit.
    The last byte is padded with zero bits.

    :param input_path: Text file of bit symbols.
    :type input_path: str
    :param output_path: Destination binary file.
    :type output_path: str
    :returns: ``(bytes_written, padding_bits)``.
    :rtype: tuple
    """
    with open(input_path, "r", encoding="utf-8") as f:
        bits = _strip_whitespace(f.read())
    with open(output_path, "wb") as out:
        writer = BitWriter(out)
        writer.write_bits(bits)
        padding = writer.align_to_byte()
        writer.flush()
    return (len(bits) + padding) // 8, padding


def main():
    """Entry point for the CLI tool.

    :returns: None
    :rtype: None
    """
    parser = get_parser()
    args = parser.parse_args()

    if args.cmd in ["dump", "d"]:
        try:
            groups = dump_bits(args.file, args.group)
        except FileNotFoundError as e:
            print(f"[!] File not found: {e.filename}")
            return
        except ValueError as e:
            print(f"[!] {e}")
            return
        sys.stdout.write("".join(g + "\n" for g in groups))
        sys.stdout.flush()
    elif args.cmd in ["pack", "p"]:
        try:
            written, padding = pack_bits(args.input, args.output)
        except FileNotFoundError as e:
            print(f"[!] File not found: {e.filename}")
            return
        print(f"Bytes written: {written}")
        print(f"Padding bits: {padding}")


if __name__ == "__main__":
    main()
