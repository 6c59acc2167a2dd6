"""
syzlang.parser - Line-oriented parser for description text.

Every top-level statement sits on one line except struct and union
bodies, which run from ``name {`` / ``name [`` to the matching
``}`` / ``]`` line.  Blank lines become ``NewLine`` nodes so the
formatter can reproduce the original spacing.

A ``#`` outside a string or character literal starts a comment.  Whole
comment lines are kept as ``Comment`` nodes; trailing comments after a
statement or field are dropped.  Character literals such as ``'a'`` are
kept as written in ``Type.number``.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ..core.errors import DescriptionParseError
from .ast import (
    Call,
    Comment,
    Description,
    Field,
    Include,
    IntFlags,
    NewLine,
    Node,
    Resource,
    Struct,
    Type,
    TypeDef,
)

_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<string>"[^"]*")
      | (?P<number>-?(?:0[xX][0-9a-fA-F]+|\d+)|'[^'\\]')
      | (?P<ident>[A-Za-z_][A-Za-z0-9_$]*)
      | (?P<punct>[\[\](){},:=])
    )""",
    re.VERBOSE,
)
_INCLUDE_RE = re.compile(r'^include\s+(?:<([^>]+)>|"([^"]+)")\s*(?:#.*)?$')


class _Tokens:
    """Token cursor over a single line."""

    def __init__(self, tokens: List[Tuple[str, str]], filename: str, line: int, text: str) -> None:
        self._tokens = tokens
        self._pos = 0
        self.filename = filename
        self.line = line
        self.text = text

    def error(self, msg: str) -> DescriptionParseError:
        return DescriptionParseError(msg, filename=self.filename, line=self.line, text=self.text)

    def peek(self) -> Optional[Tuple[str, str]]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def peek_value(self, offset: int = 0) -> str:
        idx = self._pos + offset
        return self._tokens[idx][1] if idx < len(self._tokens) else ""

    def next(self) -> Tuple[str, str]:
        tok = self.peek()
        if tok is None:
            raise self.error("unexpected end of line")
        self._pos += 1
        return tok

    def accept(self, punct: str) -> bool:
        tok = self.peek()
        if tok is not None and tok[0] == "punct" and tok[1] == punct:
            self._pos += 1
            return True
        return False

    def expect(self, punct: str) -> None:
        if not self.accept(punct):
            got = self.peek()
            raise self.error(f"expected '{punct}', got {got[1]!r}" if got else f"expected '{punct}'")

    def expect_ident(self) -> str:
        kind, value = self.next()
        if kind != "ident":
            raise self.error(f"expected identifier, got {value!r}")
        return value

    def __len__(self) -> int:
        return len(self._tokens)

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def expect_end(self) -> None:
        if not self.at_end():
            raise self.error(f"unexpected {self.peek_value()!r}")


class _Parser:
    def __init__(self, text: str, filename: str) -> None:
        self._lines = text.splitlines()
        self._filename = filename

    def parse(self) -> Description:
        nodes: List[Node] = []
        i = 0
        while i < len(self._lines):
            lineno = i + 1
            s = self._lines[i].strip()
            i += 1
            if not s:
                nodes.append(NewLine())
                continue
            if s.startswith("#"):
                nodes.append(Comment(s[1:]))
                continue
            if s.startswith("include ") or s.startswith("include\t") or s.startswith("include<"):
                m = _INCLUDE_RE.match(s)
                if m is None:
                    raise DescriptionParseError(
                        "malformed include", filename=self._filename, line=lineno, text=s
                    )
                nodes.append(Include(m.group(1) or m.group(2)))
                continue

            toks = self._tokenize(s, lineno)
            head = toks.peek_value()
            if head == "resource" and toks.peek_value(1) != "(":
                nodes.append(self._resource(toks))
            elif head == "type" and toks.peek_value(1) not in ("(", "="):
                nodes.append(self._typedef(toks))
            elif toks.peek_value(1) == "=":
                nodes.append(self._flags(toks))
            elif toks.peek_value(1) == "(":
                nodes.append(self._call(toks))
            elif toks.peek_value(1) in ("{", "[") and len(toks) == 2:
                name = toks.expect_ident()
                is_union = toks.accept("[")
                if not is_union:
                    toks.expect("{")
                toks.expect_end()
                node, i = self._body(name, is_union, i, lineno)
                nodes.append(node)
            else:
                raise toks.error("unknown declaration")
        return Description(nodes)

    # ── Statements ────────────────────────────────────────────────────

    def _resource(self, toks: _Tokens) -> Resource:
        toks.next()
        name = toks.expect_ident()
        toks.expect("[")
        base = self._type(toks)
        toks.expect("]")
        values: Tuple[Type, ...] = ()
        if toks.accept(":"):
            values = self._comma_list(toks)
        toks.expect_end()
        return Resource(name=name, base=base, values=values)

    def _typedef(self, toks: _Tokens) -> TypeDef:
        toks.next()
        name = toks.expect_ident()
        params: List[str] = []
        if toks.accept("["):
            while True:
                params.append(toks.expect_ident())
                if toks.accept("]"):
                    break
                toks.expect(",")
        if toks.peek_value() == "{":
            raise toks.error("type templates with bodies are not supported")
        typ = self._type(toks)
        toks.expect_end()
        return TypeDef(name=name, type=typ, params=tuple(params))

    def _flags(self, toks: _Tokens) -> IntFlags:
        name = toks.expect_ident()
        toks.expect("=")
        values = self._comma_list(toks)
        toks.expect_end()
        return IntFlags(name=name, values=values)

    def _call(self, toks: _Tokens) -> Call:
        name = toks.expect_ident()
        toks.expect("(")
        args: List[Field] = []
        if not toks.accept(")"):
            while True:
                args.append(self._field(toks))
                if toks.accept(")"):
                    break
                toks.expect(",")
        ret: Optional[Type] = None
        if not toks.at_end() and toks.peek_value() != "(":
            ret = self._type(toks)
        attrs: Tuple[Type, ...] = ()
        if toks.accept("("):
            attrs = self._type_list(toks, ")")
        toks.expect_end()
        return Call(
            name=name,
            call_name=name.split("$", 1)[0],
            args=tuple(args),
            ret=ret,
            attrs=attrs,
        )

    def _body(self, name: str, is_union: bool, start: int, header_line: int) -> Tuple[Struct, int]:
        close = "]" if is_union else "}"
        fields: List = []
        i = start
        while i < len(self._lines):
            lineno = i + 1
            s = self._lines[i].strip()
            i += 1
            if not s:
                continue
            if s.startswith("#"):
                fields.append(Comment(s[1:]))
                continue
            toks = self._tokenize(s, lineno)
            if toks.accept(close):
                attrs: Tuple[Type, ...] = ()
                if toks.accept("["):
                    attrs = self._type_list(toks, "]")
                toks.expect_end()
                return Struct(name=name, fields=tuple(fields), is_union=is_union, attrs=attrs), i
            fields.append(self._field(toks))
            toks.expect_end()
        kind = "union" if is_union else "struct"
        raise DescriptionParseError(
            f"unterminated {kind} {name}", filename=self._filename, line=header_line, text=name
        )

    # ── Pieces ────────────────────────────────────────────────────────

    def _field(self, toks: _Tokens) -> Field:
        name = toks.expect_ident()
        typ = self._type(toks)
        attrs: Tuple[Type, ...] = ()
        if toks.accept("("):
            attrs = self._type_list(toks, ")")
        return Field(name=name, type=typ, attrs=attrs)

    def _type(self, toks: _Tokens) -> Type:
        kind, value = toks.next()
        if kind == "ident":
            base = Type(ident=value)
        elif kind == "number":
            base = Type(number=value)
        elif kind == "string":
            base = Type(string=value[1:-1])
        else:
            raise toks.error(f"expected type, got {value!r}")
        colon: List[Type] = []
        while toks.accept(":"):
            kind, value = toks.next()
            if kind == "ident":
                colon.append(Type(ident=value))
            elif kind == "number":
                colon.append(Type(number=value))
            else:
                raise toks.error(f"unexpected {value!r} after ':'")
        args: Tuple[Type, ...] = ()
        if toks.accept("["):
            args = self._type_list(toks, "]")
        return Type(
            ident=base.ident,
            number=base.number,
            string=base.string,
            colon=tuple(colon),
            args=args,
        )

    def _type_list(self, toks: _Tokens, closer: str) -> Tuple[Type, ...]:
        items: List[Type] = []
        if toks.accept(closer):
            return ()
        while True:
            items.append(self._type(toks))
            if toks.accept(closer):
                return tuple(items)
            toks.expect(",")

    def _comma_list(self, toks: _Tokens) -> Tuple[Type, ...]:
        items = [self._type(toks)]
        while toks.accept(","):
            items.append(self._type(toks))
        return tuple(items)

    def _tokenize(self, s: str, lineno: int) -> _Tokens:
        tokens: List[Tuple[str, str]] = []
        pos = 0
        while pos < len(s):
            if s[pos].isspace():
                pos += 1
                continue
            if s[pos] == "#":
                break
            m = _TOKEN_RE.match(s, pos)
            if m is None or m.end() == pos:
                raise DescriptionParseError(
                    f"unexpected character {s[pos]!r}",
                    filename=self._filename,
                    line=lineno,
                    text=s,
                )
            kind = m.lastgroup or ""
            tokens.append((kind, m.group(kind)))
            pos = m.end()
        return _Tokens(tokens, self._filename, lineno, s)


def parse(text: str, filename: str = "") -> Description:
    """Parse description *text*; raises ``DescriptionParseError`` on bad input."""
    return _Parser(text, filename).parse()
