"""Plain-text extraction from PDF documents, page by page."""

from __future__ import annotations

import re
import zlib
from dataclasses import dataclass
from typing import Any, NamedTuple


class PdfError(Exception):
    """The data is not a PDF that can be read."""


class Name(str):
    """A PDF name object."""


class Keyword(str):
    """A bare keyword or content-stream operator."""


class Ref(NamedTuple):
    num: int
    gen: int


@dataclass
class Stream:
    info: dict
    raw: bytes

    def decode(self) -> bytes:
        filters = self.info.get("Filter")
        if filters is None:
            return self.raw
        if not isinstance(filters, list):
            filters = [filters]
        data = self.raw
        for name in filters:
            if name == "FlateDecode":
                try:
                    data = zlib.decompressobj().decompress(data)
                except zlib.error as exc:
                    raise PdfError(f"corrupt compressed stream: {exc}") from exc
            else:
                raise PdfError(f"unsupported stream filter: {name}")
        return data


_WS = frozenset(b" \t\r\n\f\x00")
_DELIM = frozenset(b"()<>[]{}/%")
_NAME_ESCAPE = re.compile(rb"#([0-9A-Fa-f]{2})")
_OBJ_RE = re.compile(rb"(\d+)\s+(\d+)\s+obj\b")
_STRING_ESCAPES = {
    ord("n"): b"\n", ord("r"): b"\r", ord("t"): b"\t", ord("b"): b"\b",
    ord("f"): b"\f", ord("("): b"(", ord(")"): b")", ord("\\"): b"\\",
}


class _Lexer:
    def __init__(self, data: bytes, pos: int = 0) -> None:
        self.data = data
        self.pos = pos

    def at_end(self) -> bool:
        self.skip_ws()
        return self.pos >= len(self.data)

    def skip_ws(self) -> None:
        data, n = self.data, len(self.data)
        while self.pos < n:
            c = data[self.pos]
            if c in _WS:
                self.pos += 1
            elif c == ord("%"):
                while self.pos < n and data[self.pos] not in (10, 13):
                    self.pos += 1
            else:
                break

    def _word(self) -> bytes:
        start = self.pos
        data, n = self.data, len(self.data)
        while self.pos < n and data[self.pos] not in _WS and data[self.pos] not in _DELIM:
            self.pos += 1
        return data[start:self.pos]

    def parse(self) -> Any:
        self.skip_ws()
        data = self.data
        if self.pos >= len(data):
            raise PdfError("unexpected end of data")
        c = data[self.pos]
        if c == ord("/"):
            self.pos += 1
            raw = _NAME_ESCAPE.sub(lambda m: bytes.fromhex(m.group(1).decode()), self._word())
            return Name(raw.decode("latin-1"))
        if c == ord("("):
            return self._literal()
        if c == ord("<"):
            if data.startswith(b"<<", self.pos):
                return self._dict()
            end = data.find(b">", self.pos)
            if end < 0:
                raise PdfError("unterminated hex string")
            digits = bytes(ch for ch in data[self.pos + 1:end] if chr(ch) in "0123456789abcdefABCDEF")
            self.pos = end + 1
            if len(digits) % 2:
                digits += b"0"
            return bytes.fromhex(digits.decode())
        if c == ord("["):
            self.pos += 1
            items = []
            while True:
                self.skip_ws()
                if self.pos >= len(data):
                    raise PdfError("unterminated array")
                if data[self.pos] == ord("]"):
                    self.pos += 1
                    return items
                items.append(self.parse())
        word = self._word()
        if not word:
            self.pos += 1
            return Keyword(chr(c))
        return self._atom(word)

    def _atom(self, word: bytes) -> Any:
        try:
            number = int(word)
        except ValueError:
            pass
        else:
            return self._maybe_ref(number)
        try:
            return float(word)
        except ValueError:
            pass
        text = word.decode("latin-1")
        return {"true": True, "false": False, "null": None}.get(text, Keyword(text)) \
            if text in ("true", "false", "null") else Keyword(text)

    def _maybe_ref(self, number: int) -> Any:
        saved = self.pos
        self.skip_ws()
        gen = self._word()
        if gen.isdigit():
            self.skip_ws()
            if self._word() == b"R":
                return Ref(number, int(gen))
        self.pos = saved
        return number

    def _dict(self) -> dict:
        self.pos += 2
        result: dict = {}
        while True:
            self.skip_ws()
            if self.pos >= len(self.data):
                raise PdfError("unterminated dictionary")
            if self.data.startswith(b">>", self.pos):
                self.pos += 2
                return result
            key = self.parse()
            result[key] = self.parse()

    def _literal(self) -> bytes:
        data, n = self.data, len(self.data)
        self.pos += 1
        depth = 1
        out = bytearray()
        while self.pos < n:
            c = data[self.pos]
            self.pos += 1
            if c == ord("\\"):
                if self.pos >= n:
                    break
                e = data[self.pos]
                self.pos += 1
                if e in _STRING_ESCAPES:
                    out += _STRING_ESCAPES[e]
                elif ord("0") <= e <= ord("7"):
                    digits = bytes([e])
                    while len(digits) < 3 and self.pos < n and ord("0") <= data[self.pos] <= ord("7"):
                        digits += data[self.pos:self.pos + 1]
                        self.pos += 1
                    out.append(int(digits, 8) & 0xFF)
                elif e == 13:
                    if self.pos < n and data[self.pos] == 10:
                        self.pos += 1
                elif e != 10:
                    out.append(e)
            elif c == ord("("):
                depth += 1
                out.append(c)
            elif c == ord(")"):
                depth -= 1
                if depth == 0:
                    return bytes(out)
                out.append(c)
            else:
                out.append(c)
        raise PdfError("unterminated string")


def _load_objects(data: bytes) -> dict[int, Any]:
    objects: dict[int, Any] = {}
    pos = 0
    while (match := _OBJ_RE.search(data, pos)) is not None:
        pos = match.end()
        lexer = _Lexer(data, pos)
        try:
            value = lexer.parse()
        except PdfError:
            continue
        pos = lexer.pos
        if isinstance(value, dict):
            lexer.skip_ws()
            if data.startswith(b"stream", lexer.pos):
                start = lexer.pos + 6
                if data.startswith(b"\r\n", start):
                    start += 2
                elif data.startswith(b"\n", start):
                    start += 1
                length = value.get("Length")
                end = start + length if isinstance(length, int) else -1
                if end < 0 or data.find(b"endstream", end, end + 20) < 0:
                    end = data.find(b"endstream", start)
                    if end < 0:
                        continue
                    while end > start and data[end - 1] in (10, 13):
                        end -= 1
                value = Stream(value, data[start:end])
                pos = end
        objects[int(match.group(1))] = value
    for stream in [v for v in objects.values() if isinstance(v, Stream)]:
        if stream.info.get("Type") == "ObjStm":
            _unpack_object_stream(stream, objects)
    return objects


def _unpack_object_stream(stream: Stream, objects: dict[int, Any]) -> None:
    content = stream.decode()
    count, first = stream.info.get("N", 0), stream.info.get("First", 0)
    header = _Lexer(content)
    pairs = [(header.parse(), header.parse()) for _ in range(count)]
    for num, offset in pairs:
        try:
            objects.setdefault(num, _Lexer(content, first + offset).parse())
        except PdfError:
            continue


def _page_order(objects: dict[int, Any]) -> list[dict]:
    def resolve(value: Any) -> Any:
        seen = set()
        while isinstance(value, Ref) and value.num not in seen:
            seen.add(value.num)
            value = objects.get(value.num)
        return value

    catalogs = [v for _, v in sorted(objects.items())
                if isinstance(v, dict) and v.get("Type") == "Catalog"]
    if not catalogs:
        return [v for _, v in sorted(objects.items())
                if isinstance(v, dict) and v.get("Type") == "Page"]
    pages: list[dict] = []
    visited: set[int] = set()

    def walk(node: Any) -> None:
        node = resolve(node)
        if not isinstance(node, dict) or id(node) in visited:
            return
        visited.add(id(node))
        if node.get("Type") == "Pages" or "Kids" in node:
            for kid in resolve(node.get("Kids")) or []:
                walk(kid)
        else:
            pages.append(node)

    walk(catalogs[-1].get("Pages"))
    return [{**page, "_resolve": resolve} for page in pages]


def _decode_text(raw: bytes) -> str:
    if raw.startswith(b"\xfe\xff"):
        return raw[2:].decode("utf-16-be", errors="replace")
    return raw.decode("latin-1")


def _content_text(content: bytes) -> str:
    lexer = _Lexer(content)
    operands: list[Any] = []
    parts: list[str] = []
    while not lexer.at_end():
        token = lexer.parse()
        if not isinstance(token, Keyword):
            operands.append(token)
            continue
        if token in ("Tj", "'", '"') and operands and isinstance(operands[-1], bytes):
            parts.append(_decode_text(operands[-1]))
        elif token == "TJ" and operands and isinstance(operands[-1], list):
            parts.extend(_decode_text(item) for item in operands[-1] if isinstance(item, bytes))
        elif token == "ET":
            parts.append("\n")
        elif token == "ID":
            end = content.find(b"EI", lexer.pos)
            lexer.pos = len(content) if end < 0 else end + 2
        operands.clear()
    return "".join(parts)


def extract_pages(data: bytes) -> list[str]:
    """Return the plain text of every page, in document order."""
    if b"%PDF-" not in data[:1024]:
        raise PdfError("not a PDF file")
    objects = _load_objects(data)
    if not objects:
        raise PdfError("no objects found")
    texts = []
    for page in _page_order(objects):
        resolve = page.get("_resolve", lambda v: objects.get(v.num) if isinstance(v, Ref) else v)
        contents = resolve(page.get("Contents"))
        if isinstance(contents, list):
            streams = [resolve(item) for item in contents]
        else:
            streams = [contents]
        raw = b"\n".join(s.decode() for s in streams if isinstance(s, Stream))
        texts.append(_content_text(raw))
    return texts