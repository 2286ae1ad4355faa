"""
Prisma schema grammar engine.

Tokenizes and parses schema text into the native "datamodel" shape
(a dict with ``models`` and ``enums`` lists, keyed the way Prisma's DMMF
is), or raises :class:`DatamodelError` with a line-numbered diagnostic.
The parser adapter in :mod:`.parser` turns that shape into a
:class:`~.schema.SchemaModel`.
"""

import asyncio
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Iterator

from ...logging_config import get_logger
from .schema import SCALAR_TYPES

logger = get_logger(__name__)


class DatamodelError(Exception):
    """Raised when schema text cannot be parsed or validated."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        self.reason = message
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


RECORD_KEYWORDS = {"model": "model", "type": "composite type", "view": "view"}
CONFIG_KEYWORDS = {"datasource", "generator"}

TOKEN_SPEC = [
    ("DOC", r"///(?!/)[^\n]*"),
    ("COMMENT", r"//[^\n]*"),
    ("NEWLINE", r"\n"),
    ("SKIP", r"[ \t\r]+"),
    ("STRING", r'"(?:[^"\\\n]|\\.)*"'),
    ("NUMBER", r"-?\d+(?:\.\d+)?"),
    ("ATAT", r"@@"),
    ("AT", r"@"),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("PUNCT", r"[{}()\[\]?=,:.!]"),
    ("MISMATCH", r"."),
]
TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_SPEC))


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int


def tokenize(text: str) -> Iterator[Token]:
    """Split schema text into tokens, dropping whitespace and ``//`` comments."""
    line = 1
    for match in TOKEN_RE.finditer(text):
        kind = match.lastgroup
        value = match.group()

        if kind == "NEWLINE":
            yield Token(kind, value, line)
            line += 1
            continue
        if kind in ("SKIP", "COMMENT"):
            continue
        if kind == "DOC":
            value = value[3:].strip()
        elif kind == "MISMATCH":
            if value == '"':
                raise DatamodelError("Unterminated string literal", line)
            raise DatamodelError(f'Unexpected character "{value}"', line)

        yield Token(kind, value, line)

    yield Token("EOF", "", line)


@dataclass
class _RawField:
    name: str
    type: str
    line: int
    is_required: bool = True
    is_list: bool = False
    is_id: bool = False
    is_unique: bool = False
    is_updated_at: bool = False
    has_default_value: bool = False
    relation_name: Optional[str] = None
    documentation: Optional[str] = None


@dataclass
class _RawBlock:
    keyword: str
    name: str
    line: int
    documentation: Optional[str] = None
    fields: List[_RawField] = field(default_factory=list)
    values: List[str] = field(default_factory=list)


class DatamodelParser:
    """Recursive-descent parser over the token stream."""

    def __init__(self, text: str):
        self.tokens = list(tokenize(text))
        self.pos = 0
        self._pending_docs: List[str] = []

    # Token helpers

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != "EOF":
            self.pos += 1
        return token

    def _check(self, kind: str, value: Optional[str] = None) -> bool:
        token = self.current
        return token.kind == kind and (value is None or token.value == value)

    def _accept(self, kind: str, value: Optional[str] = None) -> Optional[Token]:
        if self._check(kind, value):
            return self._advance()
        return None

    def _expect(self, kind: str, value: Optional[str] = None, what: str = "") -> Token:
        if self._check(kind, value):
            return self._advance()
        token = self.current
        expected = what or (f'"{value}"' if value else kind.lower())
        found = "end of file" if token.kind == "EOF" else f'"{token.value}"'
        raise DatamodelError(f"Expected {expected}, found {found}", token.line)

    def _take_docs(self) -> Optional[str]:
        if not self._pending_docs:
            return None
        docs = "\n".join(self._pending_docs)
        self._pending_docs = []
        return docs

    def _skip_newlines(self):
        while self._accept("NEWLINE"):
            pass

    def _end_of_line(self, context: str):
        """A declaration ends at a newline or right before the closing brace."""
        if self._accept("NEWLINE") or self._check("PUNCT", "}") or self._check("EOF"):
            return
        token = self.current
        raise DatamodelError(f'Unexpected "{token.value}" after {context}', token.line)

    # Grammar

    def parse(self) -> List[_RawBlock]:
        blocks = []

        while True:
            self._skip_newlines()
            token = self.current

            if token.kind == "EOF":
                break
            if token.kind == "DOC":
                self._pending_docs.append(self._advance().value)
                continue
            if token.kind != "IDENT":
                raise DatamodelError(
                    f'Unexpected "{token.value}", expected a block declaration',
                    token.line,
                )

            keyword = token.value
            if keyword in RECORD_KEYWORDS or keyword == "enum":
                blocks.append(self._parse_block(keyword))
            elif keyword in CONFIG_KEYWORDS:
                self._skip_config_block()
            else:
                raise DatamodelError(
                    f'Unknown block type "{keyword}". Expected one of: model, '
                    "type, view, enum, datasource, generator",
                    token.line,
                )

        return blocks

    def _parse_block(self, keyword: str) -> _RawBlock:
        start = self._advance()
        documentation = self._take_docs()
        name = self._expect("IDENT", what=f"a name for the {keyword}").value
        self._expect("PUNCT", "{")
        block = _RawBlock(keyword, name, start.line, documentation)

        while True:
            token = self.current

            if token.kind == "NEWLINE":
                self._advance()
            elif token.kind == "DOC":
                self._pending_docs.append(self._advance().value)
            elif token.kind == "PUNCT" and token.value == "}":
                self._advance()
                self._pending_docs = []
                return block
            elif token.kind == "ATAT":
                self._advance()
                self._pending_docs = []
                self._parse_attribute_tail()
                self._end_of_line("block attribute")
            elif token.kind == "IDENT":
                if keyword == "enum":
                    self._parse_enum_value(block)
                else:
                    self._parse_field(block)
            elif token.kind == "EOF":
                raise DatamodelError(
                    f'Missing closing "}}" for {keyword} "{name}"', start.line
                )
            else:
                raise DatamodelError(
                    f'Unexpected "{token.value}" in {keyword} "{name}"', token.line
                )

    def _parse_field(self, block: _RawBlock):
        name_token = self._advance()
        if not self._check("IDENT"):
            raise DatamodelError(
                f'Field "{name_token.value}" in {block.keyword} "{block.name}" '
                "is missing a type",
                name_token.line,
            )

        type_name = self._advance().value
        if type_name == "Unsupported" and self._check("PUNCT", "("):
            self._parse_arguments()

        raw = _RawField(
            name=name_token.value,
            type=type_name,
            line=name_token.line,
            documentation=self._take_docs(),
        )

        if self._accept("PUNCT", "["):
            self._expect("PUNCT", "]")
            raw.is_list = True
        if self._accept("PUNCT", "?"):
            if raw.is_list:
                raise DatamodelError(
                    f'Field "{raw.name}": optional lists are not supported', raw.line
                )
            raw.is_required = False
        if self._check("PUNCT", "[") and not raw.is_list:
            raise DatamodelError(
                f'Field "{raw.name}": optional lists are not supported', raw.line
            )

        while self._accept("AT"):
            attribute, arguments = self._parse_attribute_tail()
            self._apply_field_attribute(raw, attribute, arguments)

        if self._check("DOC"):
            trailing = self._advance().value
            raw.documentation = (
                f"{raw.documentation}\n{trailing}" if raw.documentation else trailing
            )

        self._end_of_line(f'field "{raw.name}"')
        block.fields.append(raw)

    def _parse_enum_value(self, block: _RawBlock):
        token = self._advance()
        self._pending_docs = []
        while self._accept("AT"):
            self._parse_attribute_tail()
        self._accept("DOC")
        self._end_of_line(f'enum value "{token.value}"')

        if token.value in block.values:
            raise DatamodelError(
                f'Value "{token.value}" is already defined on enum "{block.name}"',
                token.line,
            )
        block.values.append(token.value)

    def _parse_attribute_tail(self):
        """Parse ``name[.name]*[(args)]`` after an ``@`` or ``@@``."""
        parts = [self._expect("IDENT", what="an attribute name").value]
        while self._accept("PUNCT", "."):
            parts.append(self._expect("IDENT", what="an attribute name").value)

        arguments: List[Token] = []
        if self._check("PUNCT", "("):
            arguments = self._parse_arguments()
        return ".".join(parts), arguments

    def _parse_arguments(self) -> List[Token]:
        """Consume a balanced parenthesized argument list; return inner tokens."""
        opening = self._expect("PUNCT", "(")
        depth = 1
        inner: List[Token] = []

        while depth:
            token = self.current
            if token.kind == "EOF":
                raise DatamodelError('Missing closing ")" in argument list', opening.line)
            self._advance()
            if token.kind == "NEWLINE":
                continue
            if token.kind == "PUNCT" and token.value in "([":
                depth += 1
            elif token.kind == "PUNCT" and token.value in ")]":
                depth -= 1
                if depth == 0:
                    break
            inner.append(token)

        return inner

    def _apply_field_attribute(self, raw: _RawField, attribute: str, arguments: List[Token]):
        if attribute == "id":
            raw.is_id = True
        elif attribute == "unique":
            raw.is_unique = True
        elif attribute == "default":
            raw.has_default_value = True
        elif attribute == "updatedAt":
            raw.is_updated_at = True
        elif attribute == "relation":
            raw.relation_name = _relation_name(arguments)

    def _skip_config_block(self):
        start = self._advance()
        self._expect("IDENT", what=f"a name for the {start.value}")
        self._expect("PUNCT", "{")
        self._pending_docs = []

        while not self._accept("PUNCT", "}"):
            if self._check("EOF"):
                raise DatamodelError(
                    f'Missing closing "}}" for {start.value} block', start.line
                )
            self._advance()


def _relation_name(arguments: List[Token]) -> Optional[str]:
    """Pick the relation name from ``@relation("x", ...)`` or ``name: "x"``."""
    if arguments and arguments[0].kind == "STRING":
        return _unquote(arguments[0].value)

    for index, token in enumerate(arguments[:-2]):
        if (
            token.kind == "IDENT"
            and token.value == "name"
            and arguments[index + 1].value == ":"
            and arguments[index + 2].kind == "STRING"
        ):
            return _unquote(arguments[index + 2].value)
    return None


def _unquote(literal: str) -> str:
    return re.sub(r"\\(.)", r"\1", literal[1:-1])


def _validate_blocks(blocks: List[_RawBlock]) -> Dict[str, str]:
    """Check names and field types; return the name -> field kind namespace."""
    seen: Dict[str, _RawBlock] = {}
    for block in blocks:
        if block.name in seen:
            existing = seen[block.name]
            raise DatamodelError(
                f'The {_describe(block)} "{block.name}" cannot be defined because '
                f"{_with_article(_describe(existing))} with that name already exists",
                block.line,
            )
        seen[block.name] = block

    namespace = {
        name: ("enum" if block.keyword == "enum" else "object")
        for name, block in seen.items()
    }

    for block in blocks:
        field_names = set()
        for raw in block.fields:
            if raw.name in field_names:
                raise DatamodelError(
                    f'Field "{raw.name}" is already defined on '
                    f'{_describe(block)} "{block.name}"',
                    raw.line,
                )
            field_names.add(raw.name)

            if raw.type not in namespace and raw.type not in SCALAR_TYPES:
                raise DatamodelError(
                    f'Type "{raw.type}" is neither a built-in type, nor refers to '
                    "another model, composite type, or enum",
                    raw.line,
                )

    return namespace


def _describe(block: _RawBlock) -> str:
    return RECORD_KEYWORDS.get(block.keyword, block.keyword)


def _with_article(noun: str) -> str:
    return f"an {noun}" if noun[0] in "aeiou" else f"a {noun}"


def parse_datamodel(text: str) -> Dict[str, List[Dict[str, Any]]]:
    """
    Parse schema text into the native datamodel shape.

    Args:
        text: Schema source text

    Returns:
        Dict with ``models`` and ``enums`` lists in declaration order

    Raises:
        DatamodelError: If the text is not a valid schema
    """
    blocks = DatamodelParser(text).parse()
    namespace = _validate_blocks(blocks)

    models = []
    enums = []
    for block in blocks:
        if block.keyword == "enum":
            enums.append(
                {
                    "name": block.name,
                    "values": [{"name": value} for value in block.values],
                    "documentation": block.documentation,
                }
            )
            continue

        models.append(
            {
                "name": block.name,
                "documentation": block.documentation,
                "fields": [
                    {
                        "name": raw.name,
                        "kind": namespace.get(raw.type, "scalar"),
                        "type": raw.type,
                        "isRequired": raw.is_required,
                        "isList": raw.is_list,
                        "isId": raw.is_id,
                        "isUnique": raw.is_unique,
                        "isUpdatedAt": raw.is_updated_at,
                        "hasDefaultValue": raw.has_default_value,
                        "relationName": raw.relation_name,
                        "documentation": raw.documentation,
                    }
                    for raw in block.fields
                ],
            }
        )

    logger.debug("Parsed datamodel: %d models, %d enums", len(models), len(enums))
    return {"models": models, "enums": enums}


async def get_datamodel(text: str) -> Dict[str, List[Dict[str, Any]]]:
    """Parse schema text without blocking the event loop."""
    return await asyncio.to_thread(parse_datamodel, text)
