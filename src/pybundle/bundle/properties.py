# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""The legacy key/value text format: parsing and byte-order-mark detection.

The grammar is that of classic ``.properties`` files:

* ``#`` or ``!`` at the start of a line introduces a comment;
* a key ends at the first unescaped ``=``, ``:`` or whitespace;
* a line ending in an odd number of backslashes continues on the next line,
  whose leading whitespace is dropped;
* ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes are decoded, any
  other escaped character stands for itself.
"""

from __future__ import annotations

import codecs
import re

# UTF-32LE's mark begins with UTF-16LE's, so the 4-byte marks go first
_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
)

DEFAULT_ENCODING = "utf-8"

LEGACY_ENCODING = "iso-8859-1"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

_WHITESPACE = " \t\f"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def detect_encoding(data: bytes, default: str = DEFAULT_ENCODING) -> tuple[str, int]:
    """Return ``(encoding, bom_length)`` for *data*, sniffing a leading BOM."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return encoding, len(bom)
    return default, 0


def decode_text(data: bytes, default: str = DEFAULT_ENCODING) -> str:
    """Decode *data* using its byte-order mark, or strictly as *default*.

    Raises:
        UnicodeDecodeError: the bytes are invalid for the detected encoding.
    """
    encoding, offset = detect_encoding(data, default)
    return data[offset:].decode(encoding, errors="strict")


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties *text* into an ordered ``dict``; later keys win.

    Raises:
        ValueError: a malformed ``\\uXXXX`` escape.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def _logical_lines(text: str):
    pending: list[str] = []
    continuing = False
    for natural in _LINE_BREAK_RE.split(text):
        line = natural.lstrip(_WHITESPACE)
        if not continuing and (not line or line[0] in "#!"):
            continue
        if _continues(line):
            pending.append(line[:-1])
            continuing = True
            continue
        pending.append(line)
        yield "".join(pending)
        pending = []
        continuing = False
    if continuing:
        yield "".join(pending)


def _continues(line: str) -> bool:
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    length = len(line)
    i = 0
    while i < length:
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in "=:" or char in _WHITESPACE:
            break
        i += 1
    key_end = min(i, length)

    while i < length and line[i] in _WHITESPACE:
        i += 1
    if i < length and line[i] in "=:":
        i += 1
    while i < length and line[i] in _WHITESPACE:
        i += 1
    return line[:key_end], line[i:]


def _unescape(raw: str) -> str:
    if "\\" not in raw:
        return raw
    out: list[str] = []
    i = 0
    length = len(raw)
    while i < length:
        char = raw[i]
        i += 1
        if char != "\\":
            out.append(char)
            continue
        if i >= length:
            break
        char = raw[i]
        i += 1
        if char == "u":
            digits = raw[i : i + 4]
            if len(digits) < 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise ValueError(f"Malformed \\uxxxx encoding: '\\u{digits}'")
            out.append(chr(int(digits, 16)))
            i += 4
        else:
            out.append(_ESCAPES.get(char, char))
    result = "".join(out)
    if any("\ud800" <= c <= "\udfff" for c in result):
        # escaped surrogate pairs spell a single astral character
        result = result.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return result
