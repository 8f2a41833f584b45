import logging
import re
from typing import Dict, List, Optional, Tuple

from jgdshift.services.errors import ParseParError
from jgdshift.services.formats import Columns, Format
from jgdshift.services.point import Parameter

logger = logging.getLogger(__name__)

# Line terminators recognised in par files: LF, CR and CRLF only.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(content: str) -> List[str]:
    lines = _LINE_BREAK.split(content)
    if lines[-1] == "":
        lines.pop()
    return lines


class ParParser:
    """Parse the fixed-column par files distributed by GSI into parameter rows."""

    def __init__(self, format: Format):
        self.format = format
        self.layout = format.layout()

    @staticmethod
    def _slice(line: str, columns: Tuple[int, int], name: str, line_no: int) -> str:
        start, stop = columns
        if len(line) < stop:
            raise ParseParError(f"{name} not found", line_no)
        return line[start:stop].strip()

    def _parse_meshcode(self, line: str, line_no: int) -> int:
        text = self._slice(line, self.layout.meshcode, "meshcode", line_no)
        if not (text.isascii() and text.isdigit()):
            raise ParseParError("invalid meshcode", line_no)
        return int(text)

    def _parse_value(self, line: str, columns: Columns, name: str, line_no: int) -> float:
        if columns is None:
            return 0.0
        text = self._slice(line, columns, name, line_no)
        try:
            return float(text)
        except ValueError as exc:
            raise ParseParError(f"invalid {name}", line_no) from exc

    def header(self, lines: List[str]) -> str:
        if len(lines) < self.layout.header:
            raise ParseParError("header")
        return "\n".join(lines[: self.layout.header]) + "\n"

    def parameter(self, lines: List[str]) -> Dict[int, Parameter]:
        parameter: Dict[int, Parameter] = {}
        for line_no, line in enumerate(lines[self.layout.header:], start=self.layout.header + 1):
            meshcode = self._parse_meshcode(line, line_no)
            parameter[meshcode] = Parameter(
                latitude=self._parse_value(line, self.layout.latitude, "latitude", line_no),
                longitude=self._parse_value(line, self.layout.longitude, "longitude", line_no),
                altitude=self._parse_value(line, self.layout.altitude, "altitude", line_no),
            )
        return parameter

    def parse(self, content: str) -> Tuple[str, Dict[int, Parameter]]:
        lines = split_lines(content)
        header = self.header(lines)
        parameter = self.parameter(lines)
        logger.debug("Parsed %d %s parameter rows", len(parameter), self.format.value)
        return header, parameter


def parse_par(
    content: str, format: Format, description: Optional[str] = None
) -> Tuple[str, Dict[int, Parameter]]:
    """Return ``(description, parameter)``; the header text is the default description."""
    header, parameter = ParParser(format).parse(content)
    return (header if description is None else description), parameter
