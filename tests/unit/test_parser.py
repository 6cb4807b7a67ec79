import pytest

import toy_parser as tp
from lexer import TokenKind, lex

def run(text):
    return tp.parse(lex(text))

def test_empty_program_accepted():
    assert run("begin end") == [tp.TRACE_ACCEPTED]

def test_declare_statement():
    assert run("begin declare x ; end") == [tp.TRACE_DECLARE, tp.TRACE_ACCEPTED]

def test_assign_statement():
    assert run("begin set x = y + z ; end") == [tp.TRACE_ASSIGN, tp.TRACE_ACCEPTED]

def test_read_then_write_in_order():
    assert run("begin read x ; write x ; end") == [
        tp.TRACE_READ, tp.TRACE_WRITE, tp.TRACE_ACCEPTED,
    ]

@pytest.mark.parametrize("op", ["+", "-", "*", "/"])
def test_every_binary_operator(op):
    assert run(f"begin set a = b {op} c ; end")[0] == tp.TRACE_ASSIGN

def test_missing_semicolon_reports_expected_and_actual():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin declare x end")
    assert ei.value.expected == ";"
    assert ei.value.actual.lexeme == "end"
    assert "Expected ';', but got 'end'" in str(ei.value)

def test_unknown_statement_keyword():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin foo ; end")
    assert ei.value.expected is None
    assert ei.value.actual.lexeme == "foo"
    assert "Unexpected token: 'foo'" in str(ei.value)

def test_trailing_tokens_rejected():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin end end")
    assert "Unexpected token: 'end'" in str(ei.value)

def test_missing_end_hits_sentinel():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin declare x ;")
    assert ei.value.actual.kind is TokenKind.EOF

def test_empty_input_expects_begin():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("")
    assert "Expected 'begin', but got 'EOF'" in str(ei.value)

def test_expression_needs_operator():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin set x = y z ; end")
    assert ei.value.expected is TokenKind.OPERATOR
    assert "Expected 'OPERATOR', but got 'z'" in str(ei.value)

def test_expression_rejects_number_operand():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin set x = 5 + y ; end")
    assert ei.value.expected is TokenKind.IDENTIFIER
    assert ei.value.actual.kind is TokenKind.NUMBER

def test_datatype_is_not_an_identifier():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin declare integer ; end")
    assert ei.value.actual.kind is TokenKind.DATATYPE

def test_unknown_token_rejected_by_parser():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin write $ ; end")
    assert ei.value.actual.kind is TokenKind.UNKNOWN
    assert ei.value.actual.offset == 12

def test_assignment_needs_equals_sign():
    with pytest.raises(tp.StructuralMismatch) as ei:
        run("begin set x + y + z ; end")
    assert ei.value.expected == "="

def test_emit_sees_lines_before_failure():
    seen = []
    with pytest.raises(tp.StructuralMismatch):
        tp.parse(lex("begin read x ; declare ; end"), emit=seen.append)
    assert seen == [tp.TRACE_READ]

def test_cursor_primed_on_first_token():
    p = tp.Parser(lex("begin end"))
    assert p.current.lexeme == "begin"
    assert p._index == 0

def test_cursor_consumes_whole_stream():
    stream = lex("begin declare a ; set a = b - c ; end")
    p = tp.Parser(stream)
    p.parse()
    assert p._index == len(stream)
    assert p.current.kind is TokenKind.EOF

def test_mismatch_is_a_syntax_error():
    assert issubclass(tp.StructuralMismatch, SyntaxError)

def test_check_lowercases_source():
    assert tp.check("BEGIN Declare X ; END") == [tp.TRACE_DECLARE, tp.TRACE_ACCEPTED]
