from pathlib import Path

from lox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_concatenation(capsys):
    source = (EXAMPLES / 'program_3.lox').read_text(encoding='utf-8')
    statements = parse_program(source)
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out
    # the second print writes an empty line
    assert out.splitlines() == ['Hello, Lox!', '']
