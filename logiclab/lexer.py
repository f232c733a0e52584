"""
Tokenizer for Boolean expressions.

Supported spellings for each operator (keywords are case-insensitive):

- AND:  AND, &, ., *, ∧
- OR:   OR, |, +, ∨
- NOT:  NOT, ~, !, ¬, postfix '
- XOR:  XOR, ^, ⊕
- NAND: NAND, ↑
- NOR:  NOR, ↓
- XNOR: XNOR, ⊙, ↔

Literals are 0, 1, true and false. Variables are a letter followed by
letters, digits or underscores and are normalized to uppercase, so ``a``
and ``A`` name the same input.
"""

import re
from dataclasses import dataclass
from typing import Optional
from enum import Enum

from .errors import LexicalError


class TokenType(Enum):
    VARIABLE = "VARIABLE"
    LITERAL = "LITERAL"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    NAND = "NAND"
    NOR = "NOR"
    XNOR = "XNOR"
    NOT = "NOT"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A single lexical unit with its location in the source text."""

    kind: TokenType
    text: str
    position: int
    length: int

    @property
    def is_postfix_not(self) -> bool:
        return self.kind is TokenType.NOT and self.text == "'"

    def __str__(self):
        return f"Token({self.kind.value}, {self.text!r}, pos={self.position})"


_IDENT_TAIL = r"(?![A-Za-z0-9_])"

# Order matters: keywords and literals are tried before the variable pattern.
TOKEN_PATTERNS: list[tuple[re.Pattern, Optional[TokenType]]] = [
    (re.compile(r"\s+"), None),
    (re.compile(r"XNOR" + _IDENT_TAIL, re.IGNORECASE), TokenType.XNOR),
    (re.compile(r"NAND" + _IDENT_TAIL, re.IGNORECASE), TokenType.NAND),
    (re.compile(r"NOR" + _IDENT_TAIL, re.IGNORECASE), TokenType.NOR),
    (re.compile(r"XOR" + _IDENT_TAIL, re.IGNORECASE), TokenType.XOR),
    (re.compile(r"AND" + _IDENT_TAIL, re.IGNORECASE), TokenType.AND),
    (re.compile(r"OR" + _IDENT_TAIL, re.IGNORECASE), TokenType.OR),
    (re.compile(r"NOT" + _IDENT_TAIL, re.IGNORECASE), TokenType.NOT),
    (re.compile(r"(?:true|false)" + _IDENT_TAIL, re.IGNORECASE), TokenType.LITERAL),
    (re.compile(r"[01]" + _IDENT_TAIL), TokenType.LITERAL),
    (re.compile(r"[A-Za-z][A-Za-z0-9_]*"), TokenType.VARIABLE),
    (re.compile(r"\("), TokenType.LPAREN),
    (re.compile(r"\)"), TokenType.RPAREN),
    (re.compile(r"[&∧*]"), TokenType.AND),
    (re.compile(r"\.(?![0-9])"), TokenType.AND),
    (re.compile(r"[|∨+]"), TokenType.OR),
    (re.compile(r"[~!¬']"), TokenType.NOT),
    (re.compile(r"[\^⊕]"), TokenType.XOR),
    (re.compile(r"↑"), TokenType.NAND),
    (re.compile(r"↓"), TokenType.NOR),
    (re.compile(r"[⊙↔]"), TokenType.XNOR),
]

SUGGESTIONS = {
    "[": "Use parentheses () instead of brackets []",
    "]": "Use parentheses () instead of brackets []",
    "{": "Use parentheses () instead of braces {}",
    "}": "Use parentheses () instead of braces {}",
    "=": "Use AND (&), OR (|), or XOR (^) operators",
    "<": "Invalid operator. Did you mean NOR (↓)?",
    ">": "Invalid operator. Did you mean NAND (↑)?",
    "@": "Unknown symbol. Supported: AND (&), OR (|), NOT (~), XOR (^)",
    "#": "Unknown symbol. Supported: AND (&), OR (|), NOT (~), XOR (^)",
    "$": "Unknown symbol. Supported: AND (&), OR (|), NOT (~), XOR (^)",
}

BINARY_OPERATORS = frozenset({
    TokenType.AND,
    TokenType.OR,
    TokenType.XOR,
    TokenType.NAND,
    TokenType.NOR,
    TokenType.XNOR,
})

# Higher binds tighter
PRECEDENCE = {
    TokenType.OR: 1,
    TokenType.NOR: 1,
    TokenType.XOR: 2,
    TokenType.XNOR: 2,
    TokenType.AND: 3,
    TokenType.NAND: 3,
    TokenType.NOT: 4,
}


def _normalize(kind: TokenType, text: str) -> str:
    if kind is TokenType.VARIABLE:
        return text.upper()
    if kind is TokenType.LITERAL:
        return "1" if text.lower() in ("1", "true") else "0"
    return text


def tokenize(text: str) -> list[Token]:
    """
    Split an expression into tokens.

    Whitespace is skipped and an EOF token is always appended.

    Raises:
        LexicalError: on the first character no pattern accepts
    """
    tokens = []
    position = 0

    while position < len(text):
        for pattern, kind in TOKEN_PATTERNS:
            match = pattern.match(text, position)
            if match is None:
                continue

            lexeme = match.group(0)
            if kind is not None:
                tokens.append(Token(
                    kind=kind,
                    text=_normalize(kind, lexeme),
                    position=position,
                    length=len(lexeme),
                ))
            position = match.end()
            break
        else:
            char = text[position]
            raise LexicalError(
                f"Unexpected character: '{char}'",
                position,
                suggestion=SUGGESTIONS.get(char),
            )

    tokens.append(Token(TokenType.EOF, "", position, 0))
    return tokens


def is_binary_operator(kind: TokenType) -> bool:
    return kind in BINARY_OPERATORS


def operator_precedence(kind: TokenType) -> int:
    """Precedence tier of an operator token, 0 for non-operators."""
    return PRECEDENCE.get(kind, 0)
