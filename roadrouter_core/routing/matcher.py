"""Route Matcher - Path template compilation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Templates use the familiar path-to-regexp syntax:

    /users/:id            named parameter
    /users/:id(\\d+)      named parameter with a custom pattern
    /files(.*)            unnamed parameter (catch-all)
    /users/:id?           optional parameter (prefix "/" included)
    /tags/:tag+           one or more segments
    /users{/:id}?         group with explicit prefix
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

DEFAULT_DELIMITER = "/#?"
DEFAULT_PREFIXES = "./"
RESERVED_CHARS = "[]"


class InvalidPatternError(ValueError):
    """Raised when a path template cannot be compiled."""

    def __init__(self, message: str, template: str = "", index: int = -1):
        super().__init__(message)
        self.message = message
        self.template = template
        self.index = index


class ParameterError(TypeError):
    """Raised when parameters cannot be rendered into a template."""


class TokenType(Enum):
    """Lexical token types."""

    OPEN = auto()
    CLOSE = auto()
    PATTERN = auto()
    NAME = auto()
    CHAR = auto()
    ESCAPED_CHAR = auto()
    MODIFIER = auto()
    END = auto()


@dataclass(frozen=True)
class LexToken:
    """Lexical token."""

    type: TokenType
    index: int
    value: str


@dataclass(frozen=True)
class Key:
    """Parameter descriptor produced by template parsing."""

    name: str
    prefix: str = ""
    suffix: str = ""
    pattern: str = ""
    modifier: str = ""

    @property
    def optional(self) -> bool:
        return self.modifier in ("?", "*")

    @property
    def repeat(self) -> bool:
        return self.modifier in ("*", "+")


Token = Union[str, Key]
Params = Mapping[str, Any]


def _is_name_char(char: str) -> bool:
    return char == "_" or (char.isascii() and char.isalnum())


def lex(template: str) -> List[LexToken]:
    """Split a template into lexical tokens.

    Raises:
        InvalidPatternError: On malformed names, patterns or reserved chars
    """
    tokens: List[LexToken] = []
    i = 0
    length = len(template)

    while i < length:
        char = template[i]

        if char in "*+?":
            tokens.append(LexToken(TokenType.MODIFIER, i, char))
            i += 1
            continue

        if char == "\\":
            if i + 1 >= length:
                raise InvalidPatternError(
                    f"Trailing escape at {i}", template, i
                )
            tokens.append(LexToken(TokenType.ESCAPED_CHAR, i, template[i + 1]))
            i += 2
            continue

        if char == "{":
            tokens.append(LexToken(TokenType.OPEN, i, char))
            i += 1
            continue

        if char == "}":
            tokens.append(LexToken(TokenType.CLOSE, i, char))
            i += 1
            continue

        if char == ":":
            j = i + 1
            while j < length and _is_name_char(template[j]):
                j += 1
            name = template[i + 1:j]
            if not name:
                raise InvalidPatternError(
                    f"Missing parameter name at {i}", template, i
                )
            tokens.append(LexToken(TokenType.NAME, i, name))
            i = j
            continue

        if char == "(":
            pattern, end = _lex_pattern(template, i)
            tokens.append(LexToken(TokenType.PATTERN, i, pattern))
            i = end
            continue

        if char in RESERVED_CHARS:
            raise InvalidPatternError(
                f"Unexpected reserved character {char!r} at {i}", template, i
            )

        tokens.append(LexToken(TokenType.CHAR, i, char))
        i += 1

    tokens.append(LexToken(TokenType.END, i, ""))
    return tokens


def _lex_pattern(template: str, start: int) -> Tuple[str, int]:
    """Read a parenthesised pattern starting at ``start``."""
    count = 1
    pattern = ""
    j = start + 1
    length = len(template)

    if j < length and template[j] == "?":
        raise InvalidPatternError(
            f'Pattern cannot start with "?" at {j}', template, j
        )

    while j < length:
        char = template[j]

        if char == "\\":
            pattern += template[j:j + 2]
            j += 2
            continue

        if char == ")":
            count -= 1
            if count == 0:
                j += 1
                break
        elif char == "(":
            count += 1
            if not _is_non_capturing(template, j):
                raise InvalidPatternError(
                    f"Capturing groups are not allowed at {j}", template, j
                )

        pattern += char
        j += 1

    if count:
        raise InvalidPatternError(
            f"Unbalanced pattern at {start}", template, start
        )
    if not pattern:
        raise InvalidPatternError(
            f"Missing pattern at {start}", template, start
        )

    return pattern, j


def _is_non_capturing(template: str, index: int) -> bool:
    """Check the group opened at ``index`` does not capture."""
    rest = template[index + 1:index + 4]
    if not rest.startswith("?"):
        return False
    # (?P<name>...) and (?<name>...) capture; lookbehinds do not
    if rest.startswith("?P"):
        return False
    if rest.startswith("?<") and rest[2:3] not in ("=", "!"):
        return False
    return True


class _TokenReader:
    """Cursor over lexical tokens."""

    def __init__(self, template: str, tokens: List[LexToken]):
        self.template = template
        self.tokens = tokens
        self.index = 0

    def try_consume(self, token_type: TokenType) -> Optional[str]:
        if self.index < len(self.tokens) and self.tokens[self.index].type == token_type:
            value = self.tokens[self.index].value
            self.index += 1
            return value
        return None

    def must_consume(self, token_type: TokenType) -> str:
        value = self.try_consume(token_type)
        if value is not None:
            return value
        token = self.tokens[self.index]
        raise InvalidPatternError(
            f"Unexpected {token.type.name} at {token.index}, expected {token_type.name}",
            self.template,
            token.index,
        )

    def consume_text(self) -> str:
        result = ""
        while True:
            value = self.try_consume(TokenType.CHAR)
            if value is None:
                value = self.try_consume(TokenType.ESCAPED_CHAR)
            if value is None:
                return result
            result += value

    @property
    def done(self) -> bool:
        return self.index >= len(self.tokens)


def parse(
    template: str,
    delimiter: str = DEFAULT_DELIMITER,
    prefixes: str = DEFAULT_PREFIXES,
) -> List[Token]:
    """Parse a template into literal strings and parameter keys.

    Args:
        template: Path template
        delimiter: Characters that end a default parameter
        prefixes: Characters automatically taken as a parameter prefix

    Returns:
        List of literal path strings and Key descriptors
    """
    reader = _TokenReader(template, lex(template))
    default_pattern = f"[^{re.escape(delimiter)}]+?"
    result: List[Token] = []
    key_index = 0
    path = ""

    while not reader.done:
        char = reader.try_consume(TokenType.CHAR)
        name = reader.try_consume(TokenType.NAME)
        pattern = reader.try_consume(TokenType.PATTERN)

        if name or pattern:
            prefix = char or ""
            if prefix not in prefixes:
                path += prefix
                prefix = ""

            if path:
                result.append(path)
                path = ""

            if not name:
                name = str(key_index)
                key_index += 1

            result.append(Key(
                name=name,
                prefix=prefix,
                pattern=pattern or default_pattern,
                modifier=reader.try_consume(TokenType.MODIFIER) or "",
            ))
            continue

        value = char if char is not None else reader.try_consume(TokenType.ESCAPED_CHAR)
        if value is not None:
            path += value
            continue

        if path:
            result.append(path)
            path = ""

        if reader.try_consume(TokenType.OPEN) is not None:
            prefix = reader.consume_text()
            name = reader.try_consume(TokenType.NAME) or ""
            pattern = reader.try_consume(TokenType.PATTERN) or ""
            suffix = reader.consume_text()
            reader.must_consume(TokenType.CLOSE)

            if not name and pattern:
                name = str(key_index)
                key_index += 1
            if name and not pattern:
                pattern = default_pattern

            result.append(Key(
                name=name,
                prefix=prefix,
                suffix=suffix,
                pattern=pattern,
                modifier=reader.try_consume(TokenType.MODIFIER) or "",
            ))
            continue

        reader.must_consume(TokenType.END)

    return result


@dataclass
class CompiledPattern:
    """Compiled matcher for a single template."""

    template: str
    regex: re.Pattern
    keys: List[Key] = field(default_factory=list)

    def test(self, url: str) -> bool:
        """Check if url matches the template."""
        return self.regex.match(url) is not None

    def exec(self, url: str) -> Optional[List[Optional[str]]]:
        """Return captured values in key order, or None on mismatch."""
        match = self.regex.match(url)
        if match is None:
            return None
        return list(match.groups())

    def extract(self, url: str) -> Optional[Dict[str, str]]:
        """Return the named parameters of url, or None on mismatch."""
        captures = self.exec(url)
        if captures is None:
            return None
        return {
            key.name: value
            for key, value in zip(self.keys, captures)
            if value is not None
        }


def tokens_to_regex(
    template: str,
    tokens: List[Token],
    sensitive: bool = False,
    strict: bool = False,
    end: bool = True,
    delimiter: str = DEFAULT_DELIMITER,
) -> CompiledPattern:
    """Build a compiled matcher from parsed tokens."""
    delimiter_re = f"[{re.escape(delimiter)}]"
    keys: List[Key] = []
    route = "^"

    for token in tokens:
        if isinstance(token, str):
            route += re.escape(token)
            continue

        prefix = re.escape(token.prefix)
        suffix = re.escape(token.suffix)

        if not token.pattern:
            route += f"(?:{prefix}{suffix}){token.modifier}"
            continue

        keys.append(token)

        if prefix or suffix:
            if token.repeat:
                modifier = "?" if token.modifier == "*" else ""
                route += (
                    f"(?:{prefix}((?:{token.pattern})"
                    f"(?:{suffix}{prefix}(?:{token.pattern}))*){suffix}){modifier}"
                )
            else:
                route += f"(?:{prefix}({token.pattern}){suffix}){token.modifier}"
        else:
            if token.repeat:
                raise InvalidPatternError(
                    f'Can not repeat "{token.name}" without a prefix and suffix',
                    template,
                )
            route += f"({token.pattern}){token.modifier}"

    if end:
        if not strict:
            route += f"{delimiter_re}?"
        route += "$"
    else:
        last = tokens[-1] if tokens else None
        if isinstance(last, str):
            end_delimited = last[-1] in delimiter
        else:
            end_delimited = last is None

        if not strict:
            route += f"(?:{delimiter_re}(?=$))?"
        if not end_delimited:
            route += f"(?={delimiter_re}|$)"

    flags = 0 if sensitive else re.IGNORECASE
    try:
        regex = re.compile(route, flags)
    except re.error as e:
        raise InvalidPatternError(f"Invalid regular expression: {e}", template) from e

    return CompiledPattern(template=template, regex=regex, keys=keys)


def compile_pattern(
    template: str,
    sensitive: bool = False,
    strict: bool = False,
    end: bool = True,
) -> CompiledPattern:
    """Compile a template into a matcher.

    Raises:
        InvalidPatternError: If the template is malformed
    """
    return tokens_to_regex(
        template,
        parse(template),
        sensitive=sensitive,
        strict=strict,
        end=end,
    )


def tokens_to_function(
    tokens: List[Token],
    sensitive: bool = False,
) -> Callable[[Optional[Params]], str]:
    """Build a renderer turning parameters into a concrete path."""
    flags = 0 if sensitive else re.IGNORECASE
    validators = {
        token.name: re.compile(f"^(?:{token.pattern})$", flags)
        for token in tokens
        if isinstance(token, Key) and token.pattern
    }

    def render(params: Optional[Params] = None) -> str:
        data = params or {}
        path = ""

        for token in tokens:
            if isinstance(token, str):
                path += token
                continue

            if not token.pattern:
                if not token.optional:
                    path += token.prefix + token.suffix
                continue

            value = data.get(token.name)

            if isinstance(value, (list, tuple)):
                if not token.repeat:
                    raise ParameterError(
                        f'Expected "{token.name}" to not repeat, but got a list'
                    )
                if not value:
                    if token.optional:
                        continue
                    raise ParameterError(f'Expected "{token.name}" to not be empty')
                for item in value:
                    path += token.prefix + _segment(token, item, validators) + token.suffix
                continue

            if isinstance(value, (str, int)) and not isinstance(value, bool):
                path += token.prefix + _segment(token, value, validators) + token.suffix
                continue

            if token.optional:
                continue

            expected = "a list" if token.repeat else "a string"
            raise ParameterError(f'Expected "{token.name}" to be {expected}')

        return path

    return render


def _segment(key: Key, value: Any, validators: Dict[str, re.Pattern]) -> str:
    segment = str(value)
    if not validators[key.name].match(segment):
        raise ParameterError(
            f'Expected "{key.name}" to match "{key.pattern}", but got "{segment}"'
        )
    return segment


def compile_path(
    template: str,
    sensitive: bool = False,
) -> Callable[[Optional[Params]], str]:
    """Compile a template into a parameters -> path renderer."""
    return tokens_to_function(parse(template), sensitive=sensitive)


class PatternCompiler:
    """Caching template compiler.

    Usage:
        compiler = PatternCompiler()
        matcher = compiler.compile("/users/:id")
        matcher.test("/users/42")                  # True
        compiler.to_path("/users/:id")({"id": 7})  # "/users/7"
    """

    def __init__(
        self,
        sensitive: bool = False,
        strict: bool = False,
        end: bool = True,
    ):
        self.sensitive = sensitive
        self.strict = strict
        self.end = end
        self._patterns: Dict[str, CompiledPattern] = {}
        self._renderers: Dict[str, Callable[[Optional[Params]], str]] = {}

    def compile(self, template: str) -> CompiledPattern:
        """Get compiled matcher (cached)."""
        if template not in self._patterns:
            self._patterns[template] = compile_pattern(
                template,
                sensitive=self.sensitive,
                strict=self.strict,
                end=self.end,
            )
        return self._patterns[template]

    def to_path(self, template: str) -> Callable[[Optional[Params]], str]:
        """Get compiled renderer (cached)."""
        if template not in self._renderers:
            self._renderers[template] = compile_path(
                template, sensitive=self.sensitive
            )
        return self._renderers[template]


__all__ = [
    "InvalidPatternError",
    "ParameterError",
    "Key",
    "CompiledPattern",
    "PatternCompiler",
    "lex",
    "parse",
    "compile_pattern",
    "compile_path",
    "tokens_to_regex",
    "tokens_to_function",
]
