from pathlib import Path

from lox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10_comments_and_numbers(capsys):
    source = (EXAMPLES / 'program_10.lox').read_text(encoding='utf-8')
    statements = parse_program(source)
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out
    assert out.splitlines() == ['multi', 'line', 'inf', '0.30000000000000004']
