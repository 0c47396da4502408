from pathlib import Path

import pytest

from lox.errors import ErrorCode, LoxError
from lox.interpreter import parse_program, run_source, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_runtime_error_halts(capsys):
    source = (EXAMPLES / 'program_8.lox').read_text(encoding='utf-8')
    statements = parse_program(source)
    interp = Interpreter()
    with pytest.raises(LoxError) as excinfo:
        interp.interpret(statements)
    assert excinfo.value.code == ErrorCode.TYPE_MISMATCH
    assert excinfo.value.line == 2
    # "after" is never printed
    assert capsys.readouterr().out.splitlines() == ['before']


def test_program_8_run_source_reports(capsys):
    source = (EXAMPLES / 'program_8.lox').read_text(encoding='utf-8')
    status = run_source(source)
    captured = capsys.readouterr()
    assert status == 70
    assert captured.out.splitlines() == ['before']
    assert captured.err.splitlines() == ['Operands must be two numbers or two strings.', '[line 2]']
