"""
JavaScript Object Literal Parser
Recursive-descent scanner for the subset of JavaScript object literal syntax
used by Tailwind configuration files: objects, arrays, strings, numbers,
keywords and bare expressions that are kept as raw source text.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Tuple

KEY_PATTERN = re.compile(r'[A-Za-z_$][\w$]*|\d+(?:\.\d+)?')
NUMBER_PATTERN = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
KEYWORD_VALUES = {'true': True, 'false': False, 'null': None, 'undefined': None}
QUOTES = ('"', "'", '`')
OPENERS = {'(': ')', '[': ']', '{': '}'}
CLOSERS = (')', ']', '}')
VALUE_TERMINATORS = ('', ',', ')', ']', '}')
ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', 'b': '\b', 'f': '\f', 'v': '\v', '0': '\0'}


class JSSyntaxError(ValueError):
    """Raised when the text does not fit the supported literal grammar."""

    def __init__(self, message: str, position: int):
        super().__init__(f'{message} at position {position}')
        self.position = position


@dataclass(frozen=True)
class RawExpression:
    """JavaScript source text kept verbatim because it is not a plain literal."""
    text: str

    def __str__(self) -> str:
        return self.text


class JSObjectScanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def skip_whitespace(self) -> None:
        """Skip whitespace, line comments and block comments."""
        text = self.text
        while self.pos < len(text):
            if text[self.pos].isspace():
                self.pos += 1
            elif text.startswith('//', self.pos):
                end = text.find('\n', self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith('/*', self.pos):
                end = text.find('*/', self.pos + 2)
                if end == -1:
                    raise JSSyntaxError('Unterminated comment', self.pos)
                self.pos = end + 2
            else:
                break

    def peek(self) -> str:
        self.skip_whitespace()
        return self.text[self.pos] if self.pos < len(self.text) else ''

    def expect(self, char: str) -> None:
        found = self.peek()
        if found != char:
            raise JSSyntaxError(f"Expected '{char}' but found '{found or 'end of input'}'", self.pos)
        self.pos += 1

    def end_of_entry(self, closer: str) -> None:
        char = self.peek()
        if char == ',':
            self.pos += 1
        elif char != closer:
            raise JSSyntaxError(f"Expected ',' or '{closer}' but found '{char or 'end of input'}'", self.pos)

    def parse_value(self) -> Any:
        char = self.peek()
        if not char:
            raise JSSyntaxError('Unexpected end of input', self.pos)
        if char == '{':
            return self.parse_object()
        if char == '[':
            return self.parse_array()
        if char in QUOTES:
            start = self.pos
            value = self.parse_string()
            if self.peek() in VALUE_TERMINATORS:
                return value
            # String concatenation, template tags and the like
            self.pos = start
            return RawExpression(self.scan_expression())
        return self.parse_bare()

    def parse_object(self) -> Dict[str, Any]:
        return dict(self.object_entries(self.parse_value))

    def parse_array(self) -> List[Any]:
        return list(self.array_elements(self.parse_value))

    def object_entries(self, read_value: Callable[[], Any]) -> Iterator[Tuple[str, Any]]:
        """Yield (key, value) pairs of the object starting at the current position."""
        self.expect('{')
        while self.peek() != '}':
            if self.text.startswith('...', self.pos):
                self.pos += 3
                expression = self.scan_expression()
                yield f'...{expression}', RawExpression(expression)
            else:
                key = self.parse_key()
                char = self.peek()
                if char == ':':
                    self.pos += 1
                    yield key, read_value()
                elif char in (',', '}'):
                    # Shorthand property
                    yield key, RawExpression(key)
                else:
                    raise JSSyntaxError(f"Expected ':' after '{key}'", self.pos)
            self.end_of_entry('}')
        self.pos += 1

    def array_elements(self, read_value: Callable[[], Any]) -> Iterator[Any]:
        self.expect('[')
        while self.peek() != ']':
            if self.text.startswith('...', self.pos):
                self.pos += 3
                yield RawExpression(f'...{self.scan_expression()}')
            else:
                yield read_value()
            self.end_of_entry(']')
        self.pos += 1

    def parse_key(self) -> str:
        char = self.peek()
        if char in QUOTES:
            return self.parse_string()
        match = KEY_PATTERN.match(self.text, self.pos)
        if not match:
            raise JSSyntaxError(f"Expected property key but found '{char or 'end of input'}'", self.pos)
        self.pos = match.end()
        return match.group(0)

    def parse_string(self) -> str:
        text = self.text
        start = self.pos
        quote = text[self.pos]
        self.pos += 1
        chars = []
        while self.pos < len(text):
            char = text[self.pos]
            if char == '\\':
                escaped = text[self.pos + 1:self.pos + 2]
                if escaped == 'u' and re.fullmatch(r'[0-9a-fA-F]{4}', text[self.pos + 2:self.pos + 6]):
                    chars.append(chr(int(text[self.pos + 2:self.pos + 6], 16)))
                    self.pos += 6
                    continue
                if escaped != '\n':
                    chars.append(ESCAPES.get(escaped, escaped))
                self.pos += 2
                continue
            if char == quote:
                self.pos += 1
                return ''.join(chars)
            if char == '\n' and quote != '`':
                break
            chars.append(char)
            self.pos += 1
        raise JSSyntaxError('Unterminated string', start)

    def parse_bare(self) -> Any:
        expression = self.scan_expression()
        if expression in KEYWORD_VALUES:
            return KEYWORD_VALUES[expression]
        if NUMBER_PATTERN.fullmatch(expression):
            return _to_number(expression)
        return RawExpression(expression)

    def scan_expression(self) -> str:
        """
        Consume one expression without interpreting it.

        Stops at a comma or closing bracket at nesting depth zero; strings,
        comments and nested brackets are skipped as units.
        """
        self.skip_whitespace()
        text = self.text
        start = self.pos
        stack = []
        while self.pos < len(text):
            char = text[self.pos]
            if char in QUOTES:
                self.parse_string()
                continue
            if text.startswith('//', self.pos) or text.startswith('/*', self.pos):
                self.skip_whitespace()
                continue
            if char in OPENERS:
                stack.append(OPENERS[char])
            elif char in CLOSERS:
                if not stack:
                    break
                expected = stack.pop()
                if char != expected:
                    raise JSSyntaxError(f"Expected '{expected}' but found '{char}'", self.pos)
            elif char == ',' and not stack:
                break
            self.pos += 1
        if stack:
            raise JSSyntaxError(f"Missing '{stack[-1]}'", self.pos)
        expression = text[start:self.pos].strip()
        if not expression:
            raise JSSyntaxError('Expected a value', start)
        return expression

    def finish(self) -> None:
        if self.peek() == ';':
            self.pos += 1
        if self.peek():
            raise JSSyntaxError(f"Unexpected '{self.peek()}'", self.pos)


def _to_number(literal: str):
    value = float(literal)
    if value.is_integer() and re.fullmatch(r'[+-]?\d+', literal):
        return int(literal)
    return value


def parse_js_literal(text: str) -> Any:
    """Parse a single JavaScript literal into Python values."""
    scanner = JSObjectScanner(text)
    value = scanner.parse_value()
    scanner.finish()
    return value


def iter_properties(object_text: str) -> Iterator[Tuple[str, str]]:
    """
    Yield (key, raw value text) for each property of an object literal.

    Values are skipped with the balanced scanner instead of being parsed, so a
    value outside the supported grammar does not affect its siblings.
    """
    scanner = JSObjectScanner(object_text)
    for key, raw in scanner.object_entries(scanner.scan_expression):
        yield key, str(raw)


def iter_elements(array_text: str) -> Iterator[str]:
    """Yield the raw source text of each element of an array literal."""
    scanner = JSObjectScanner(array_text)
    for raw in scanner.array_elements(scanner.scan_expression):
        yield str(raw)
