"""JSON text parsing into the immutable node tree, built on a Lark LALR grammar."""

from __future__ import annotations

import re

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from pyjson2obj._errors import ERR_MSG_MALFORMED_JSON, ParseError
from pyjson2obj.node import JsonArray, JsonNode, JsonObject, JsonScalar, ScalarKind

_GRAMMAR = r"""
?start: value

?value: object
      | array
      | STRING    -> string
      | NUMBER    -> number
      | "true"    -> true
      | "false"   -> false
      | "null"    -> null

array  : "[" [value ("," value)*] "]"
object : "{" [pair ("," pair)*] "}"
pair   : STRING ":" value

STRING: /"(?:[^"\\\x00-\x1f]|\\["\\\/bfnrt]|\\u[0-9a-fA-F]{4})*"/
NUMBER: /-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?/

%ignore /[ \t\r\n]+/
"""

_ESCAPE_RE = re.compile(r'\\(?:u([0-9a-fA-F]{4})|(["\\/bfnrt]))')

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _replace_escape(match: re.Match[str]) -> str:
    if match.group(1) is not None:
        return chr(int(match.group(1), 16))
    return _SIMPLE_ESCAPES[match.group(2)]


def _decode_string(lexeme: str) -> str:
    """Decode a JSON string token, quotes included, into its text value."""
    body = lexeme[1:-1]
    if "\\" not in body:
        return body
    decoded = _ESCAPE_RE.sub(_replace_escape, body)
    if "\\u" in body:
        # Join UTF-16 surrogate pairs produced by consecutive \uXXXX escapes.
        decoded = decoded.encode("utf-16", "surrogatepass").decode(
            "utf-16", "surrogatepass"
        )
    return decoded


class _NodeBuilder(Transformer):
    """Builds node objects bottom-up while the LALR parser reduces."""

    def string(self, children: list[Token]) -> JsonScalar:
        return JsonScalar(ScalarKind.STRING, _decode_string(str(children[0])))

    def number(self, children: list[Token]) -> JsonScalar:
        return JsonScalar(ScalarKind.NUMBER, str(children[0]))

    def true(self, _: list) -> JsonScalar:
        return JsonScalar(ScalarKind.BOOL, "true")

    def false(self, _: list) -> JsonScalar:
        return JsonScalar(ScalarKind.BOOL, "false")

    def null(self, _: list) -> JsonScalar:
        return JsonScalar(ScalarKind.NULL)

    def array(self, children: list[JsonNode]) -> JsonArray:
        return JsonArray(tuple(children))

    def pair(self, children: list) -> tuple[str, JsonNode]:
        name, value = children
        return _decode_string(str(name)), value

    def object(self, children: list[tuple[str, JsonNode]]) -> JsonObject:
        return JsonObject(tuple(children))


_parser = Lark(
    _GRAMMAR,
    parser="lalr",
    transformer=_NodeBuilder(),
    maybe_placeholders=False,
)


def parse(content: str | bytes) -> JsonNode:
    """Parse JSON text into an immutable node tree.

    Args:
        content: JSON document text. Bytes are decoded as UTF-8 (a leading
            byte-order mark is ignored).

    Returns:
        The root node of the document.

    Raises:
        ParseError: If the text is not well-formed JSON.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(
                ERR_MSG_MALFORMED_JSON,
                f"document is not valid UTF-8: {e}",
                wrapped=e,
            ) from e

    try:
        return _parser.parse(content)
    except UnexpectedInput as e:
        raise ParseError(
            ERR_MSG_MALFORMED_JSON,
            f"unexpected input at line {e.line}, column {e.column}: "
            f"{e.get_context(content).strip()!r}",
            wrapped=e,
        ) from e
