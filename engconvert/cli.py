"""Command-line front end for converting language files between ENG and XML."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from .fileconverter import convert_eng_to_xml, convert_xml_to_eng
from .logger import ConversionError, Logger

APP_NAME = "ENG Converter"

ENCODINGS: dict[str, str] = {
    "Windows-1252": "Windows-1252 - Default",
    "Windows-1250": "Windows-1250 - Eastern European",
    "Windows-1251": "Windows-1251 - Cyrillic",
    "Windows-1253": "Windows-1253 - Greek",
    "CP949": "Windows-949 - Korean",
    "Shift_JIS": "Windows-932 - Japanese",
    "c3-tc": "Traditional Chinese (C3)",
    "c3-sc": "Simplified Chinese (C3)",
}
"""Encodings offered for ENG files, mapped to their descriptions."""

DEFAULT_ENCODING = "Windows-1252"


class FileKind(Enum):
    """The two file formats a conversion goes between."""

    ENG = ".eng"
    XML = ".xml"

    @property
    def extension(self) -> str:
        return self.value


@dataclass(frozen=True)
class _Direction:
    source: FileKind
    target: FileKind
    convert: Callable[[str, str, str, Logger], None]
    title: str


_DIRECTIONS: dict[str, _Direction] = {
    "eng-to-xml": _Direction(FileKind.ENG, FileKind.XML, convert_eng_to_xml, "ENG to XML"),
    "xml-to-eng": _Direction(FileKind.XML, FileKind.ENG, convert_xml_to_eng, "XML to ENG"),
}

_OK_LINE = "Conversion OK"
_FAILED_LINE = "*** Conversion FAILED ***"


def help_text() -> str:
    """Explanation of what the program does and how to use it."""
    return (
        "This program can convert language files for the Impressions Games "
        "citybuilding games to and from XML format so they can be edited easily.\n\n"
        "Choose the direction, either 'eng-to-xml' (ENG to XML) or 'xml-to-eng' "
        "(XML to ENG), give the location of the input file and, optionally, the "
        "location where the output file should be written, select the encoding "
        "used for your file with --encoding, and the file is converted."
    )


def suggest_output_name(input_path: str, extension: str) -> str:
    """Suggest an output file name: the input name with its last four characters
    replaced by ``extension``. An empty input gives an empty suggestion."""
    if not input_path:
        return ""
    return input_path[: max(0, len(input_path) - 4)] + extension


def conversion_report(success: bool, logger: Logger) -> str:
    """Summary line followed by a blank line and all logged messages."""
    first_line = _OK_LINE if success else _FAILED_LINE
    return first_line + "\n\n" + "\n".join(logger.messages())


def _encoding_epilog() -> str:
    lines = ["encodings:"]
    lines.extend(f"  {value:<14} {label}" for value, label in ENCODINGS.items())
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the command."""
    parser = argparse.ArgumentParser(
        prog="engconvert",
        description=help_text(),
        epilog=_encoding_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "direction",
        choices=list(_DIRECTIONS),
        help="conversion to perform",
    )
    parser.add_argument("input", help="input file")
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="output file (default: input name with the target extension)",
    )
    parser.add_argument(
        "-e",
        "--encoding",
        choices=list(ENCODINGS),
        default=DEFAULT_ENCODING,
        help=f"encoding of the ENG file (default: {DEFAULT_ENCODING})",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a conversion and print its report; returns 0 on success, 1 on failure."""
    args = build_parser().parse_args(argv)
    direction = _DIRECTIONS[args.direction]
    output = args.output or suggest_output_name(args.input, direction.target.extension)

    logger = Logger()
    logger.info(f"Using encoding: {args.encoding}")
    if not output:
        logger.error("No output file given")
        success = False
    else:
        try:
            direction.convert(args.input, output, args.encoding, logger)
            success = True
        except ConversionError:
            success = False

    print(conversion_report(success, logger), file=sys.stdout)
    return 0 if success else 1