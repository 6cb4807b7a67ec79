# lexer.py
# Pattern-driven lexer for the toy begin/end statement language
#
# =============================================================================
#  LEXER IMPLEMENTATION: ONE COMBINED PATTERN, ORDERED CLASSIFICATION
# =============================================================================
#
# Candidates are cut out of the text by a single compiled regex whose
# alternatives are tried in priority order: operators, identifiers, numbers,
# the semicolon. Each candidate is then classified on its own by classify(),
# which checks the fixed vocabularies before the open-ended patterns.
#
# Reserved words and datatype names also match the identifier pattern, so
# classify() must look them up first.
#
# The lexer never fails. Anything it cannot place becomes an UNKNOWN token
# and the parser rejects it wherever a specific token is required.
# =============================================================================

import re
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional

# ---------------------------------------------------------------------------
# GRAMMAR VOCABULARY
# ---------------------------------------------------------------------------
RESERVED_WORDS = frozenset({"read", "write", "begin", "end", "declare", "set"})
DATATYPES      = frozenset({"integer", "float", "string", "boolean"})
OPERATORS      = ("=", "+", "-", "*", "/")

IDENTIFIER_PATTERN = r"[a-zA-Z][a-zA-Z0-9]*"
NUMBER_PATTERN     = r"[0-9]+(?:\.[0-9]+)?"
SEMICOLON          = ";"

EOF_LEXEME = "EOF"

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
_OPERATOR = "|".join(re.escape(op) for op in OPERATORS)

_CANDIDATE_RE = re.compile(
    rf"(?P<OPERATOR>{_OPERATOR})|"
    rf"(?P<IDENTIFIER>{IDENTIFIER_PATTERN})|"
    rf"(?P<NUMBER>{NUMBER_PATTERN})|"
    rf"(?P<SEMICOLON>{re.escape(SEMICOLON)})|"
    r"(?P<WHITESPACE>\s+)|"
    r"(?P<OTHER>\S)",          # stray character, surfaces as UNKNOWN
)

_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)
_NUMBER_RE     = re.compile(NUMBER_PATTERN)

# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class TokenKind(Enum):
    RESERVED_WORD = "RESERVED_WORD"
    DATATYPE      = "DATATYPE"
    IDENTIFIER    = "IDENTIFIER"
    NUMBER        = "NUMBER"
    SEMICOLON     = "SEMI-COLON"
    OPERATOR      = "OPERATOR"
    UNKNOWN       = "UNKNOWN"
    EOF           = "EOF"

    def __str__(self) -> str:
        return self.value


class Token(NamedTuple):
    """
    Immutable token record: (lexeme, kind, offset).

    offset is the absolute position of the lexeme in the source text and is
    only used for diagnostics.
    """
    lexeme: str
    kind: TokenKind
    offset: int


class TokenStream:
    """
    Ordered, read-only token sequence closed by an EOF sentinel.

    len() and iteration cover the real tokens only. at(i) never runs off the
    end: any index past the last token yields the sentinel. Without an
    explicit end_offset the sentinel sits right after the last token.
    """
    def __init__(self, tokens: List[Token], end_offset: Optional[int] = None):
        self._tokens = tuple(tokens)
        if end_offset is None:
            last = self._tokens[-1] if self._tokens else None
            end_offset = last.offset + len(last.lexeme) if last else 0
        self._eof = Token(EOF_LEXEME, TokenKind.EOF, end_offset)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({list(self._tokens)!r})"

    def at(self, index: int) -> Token:
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return self._eof

# ---------------------------------------------------------------------------
# CLASSIFICATION
# ---------------------------------------------------------------------------
def classify(lexeme: str) -> TokenKind:
    """
    Resolve the category of one candidate lexeme. First rule that holds wins.
    """
    if lexeme in RESERVED_WORDS:
        return TokenKind.RESERVED_WORD
    if lexeme in DATATYPES:
        return TokenKind.DATATYPE
    if _IDENTIFIER_RE.fullmatch(lexeme):
        return TokenKind.IDENTIFIER
    if _NUMBER_RE.fullmatch(lexeme):
        return TokenKind.NUMBER
    if lexeme == SEMICOLON:
        return TokenKind.SEMICOLON
    if lexeme in OPERATORS:
        return TokenKind.OPERATOR
    return TokenKind.UNKNOWN


def category_label(token: Token) -> str:
    """Console name for a token's category, e.g. 'begin (reserved word)'."""
    if token.kind is TokenKind.RESERVED_WORD:
        return f"{token.lexeme} (reserved word)"
    return str(token.kind)

# ---------------------------------------------------------------------------
# SCANNER
# ---------------------------------------------------------------------------
def iter_tokens(text: str) -> Iterator[Token]:
    """Single-pass generator over the non-whitespace candidates of text."""
    for m in _CANDIDATE_RE.finditer(text):
        if m.lastgroup == "WHITESPACE":
            continue
        value = m.group()
        yield Token(value, classify(value), m.start())


def lex(text: str) -> TokenStream:
    """
    Tokenize already case-normalized text.

    Never raises; unrecognized characters come back as UNKNOWN tokens.
    """
    return TokenStream(list(iter_tokens(text)), end_offset=len(text))


__all__ = [
    "RESERVED_WORDS",
    "DATATYPES",
    "OPERATORS",
    "IDENTIFIER_PATTERN",
    "NUMBER_PATTERN",
    "SEMICOLON",
    "TokenKind",
    "Token",
    "TokenStream",
    "classify",
    "category_label",
    "iter_tokens",
    "lex",
]
