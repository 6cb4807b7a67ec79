# toy_parser.py
# Recursive-descent validator for the toy begin/end statement language
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER A FLAT STATEMENT LIST
# =============================================================================
#
#   Program        := "begin" StatementBlock "end"
#   StatementBlock := { Statement }
#   Statement      := DeclareStmt | AssignStmt | ReadStmt | WriteStmt
#   DeclareStmt    := "declare" Identifier ";"
#   AssignStmt     := "set" Identifier "=" Expression ";"
#   Expression     := Identifier Operator Identifier
#   ReadStmt       := "read" Identifier ";"
#   WriteStmt      := "write" Identifier ";"
#
# One method per nonterminal. match() is the only consuming primitive: every
# rule is a sequence of match() calls plus dispatch on the current token.
# The cursor only moves forward.
#
# There is no error recovery. The first mismatch raises StructuralMismatch
# and the whole parse stops; trace lines already emitted stay emitted.
# =============================================================================

import argparse
import sys
from typing import Callable, List, Optional, Union

from lexer import Token, TokenKind, TokenStream, category_label, lex

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEFAULT_SOURCE = "code.txt"   # input path used when none is given

TRACE_DECLARE  = "Declare statement: declare IDENTIFIER ;"
TRACE_ASSIGN   = "Assign statement: set IDENTIFIER = expression ;"
TRACE_READ     = "Read statement: read IDENTIFIER ;"
TRACE_WRITE    = "Write statement: write IDENTIFIER ;"
TRACE_ACCEPTED = "Program accepted: begin ... end"

Expected = Union[str, TokenKind]

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class StructuralMismatch(SyntaxError):
    """
    The current token does not satisfy the active grammar rule.

    expected is a literal lexeme, a TokenKind, or None when no single token
    would have been acceptable (an unrecognized statement keyword, trailing
    input after "end"). actual is the offending token.
    """
    def __init__(self, expected: Optional[Expected], actual: Token):
        self.expected = expected
        self.actual = actual
        if expected is None:
            msg = f"Unexpected token: '{actual.lexeme}' at offset {actual.offset}"
        else:
            msg = f"Expected '{expected}', but got '{actual.lexeme}' at offset {actual.offset}."
        super().__init__(msg)

# ---------------------------------------------------------------------------
# PARSER
# ---------------------------------------------------------------------------
class Parser:
    """
    Single-cursor recursive-descent parser over one TokenStream.

    The cursor is placed on the first token at construction, so the first
    rule already compares against real input.
    """
    def __init__(self, stream: TokenStream, emit: Optional[Callable[[str], None]] = None):
        self._stream = stream
        self._index = 0
        self.current: Token = stream.at(0)
        self.trace: List[str] = []
        self._emit = emit

    def _advance(self) -> None:
        self._index += 1
        self.current = self._stream.at(self._index)

    def _at(self, lexeme: str) -> bool:
        return self.current.kind is not TokenKind.EOF and self.current.lexeme == lexeme

    def _report(self, line: str) -> None:
        self.trace.append(line)
        if self._emit is not None:
            self._emit(line)

    def match(self, expected: Expected) -> Token:
        """
        Consume the current token if it equals expected, else raise.

        A TokenKind is compared against the token's category, a string
        against its lexeme.
        """
        tok = self.current
        if isinstance(expected, TokenKind):
            ok = tok.kind is expected
        else:
            ok = self._at(expected)
        if not ok:
            raise StructuralMismatch(expected, tok)
        self._advance()
        return tok

    # -- nonterminals -------------------------------------------------------

    def program(self) -> None:
        self.match("begin")
        self.statement_block()
        self.match("end")

    def statement_block(self) -> None:
        while not self._at("end"):
            self.statement()

    def statement(self) -> None:
        if self._at("declare"):
            self.declare_statement()
        elif self._at("set"):
            self.assign_statement()
        elif self._at("read"):
            self.read_statement()
        elif self._at("write"):
            self.write_statement()
        else:
            raise StructuralMismatch(None, self.current)

    def declare_statement(self) -> None:
        self.match("declare")
        self.match(TokenKind.IDENTIFIER)
        self.match(";")
        self._report(TRACE_DECLARE)

    def assign_statement(self) -> None:
        self.match("set")
        self.match(TokenKind.IDENTIFIER)
        self.match("=")
        self.expression()
        self.match(";")
        self._report(TRACE_ASSIGN)

    def expression(self) -> None:
        self.match(TokenKind.IDENTIFIER)
        self.match(TokenKind.OPERATOR)
        self.match(TokenKind.IDENTIFIER)

    def read_statement(self) -> None:
        self.match("read")
        self.match(TokenKind.IDENTIFIER)
        self.match(";")
        self._report(TRACE_READ)

    def write_statement(self) -> None:
        self.match("write")
        self.match(TokenKind.IDENTIFIER)
        self.match(";")
        self._report(TRACE_WRITE)

    # -- entry --------------------------------------------------------------

    def parse(self) -> List[str]:
        """
        Validate the whole stream. Input must end right after "end".
        """
        self.program()
        if self.current.kind is not TokenKind.EOF:
            raise StructuralMismatch(None, self.current)
        self._report(TRACE_ACCEPTED)
        return self.trace

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(stream: TokenStream, emit: Optional[Callable[[str], None]] = None) -> List[str]:
    """
    Validates a token stream and returns the trace of recognized statements
    followed by the acceptance line.

    emit, if given, receives each trace line as soon as it is produced, so
    lines for statements recognized before a failure are not lost.
    """
    return Parser(stream, emit).parse()


def check(text: str) -> List[str]:
    """Lex and parse source text in one step. Text is lower-cased first."""
    return parse(lex(text.lower()))

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _print_tokens(stream: TokenStream) -> None:
    for tok in stream:
        print(f"{tok.lexeme} : {category_label(tok)}")


def _cli(argv: List[str]) -> int:
    """
    Command-line interface: list tokens, then validate.

    Exit codes: 0 accepted, 1 parse error, 2 unreadable input.
    """
    ap = argparse.ArgumentParser(description="Toy program lexer and grammar checker")
    ap.add_argument("file", nargs="?", default=DEFAULT_SOURCE,
                    help=f"program text to check (default: {DEFAULT_SOURCE})")
    ap.add_argument("--debug", action="store_true", help="dump token stream and exit")
    ap.add_argument("--no-tokens", action="store_true", help="do not list tokens before parsing")
    args = ap.parse_args(argv)

    try:
        with open(args.file, "r", encoding="utf-8") as fh:
            data = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        ap.error(f"cannot read {args.file}: {getattr(exc, 'strerror', None) or exc}")

    stream = lex(data.lower())

    if args.debug or not args.no_tokens:
        _print_tokens(stream)
    if args.debug:
        return 0

    try:
        parse(stream, emit=print)
        return 0
    except StructuralMismatch as exc:
        print(f"Parser error: {exc}", file=sys.stderr)
        return 1


def main() -> int:
    return _cli(sys.argv[1:])

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
