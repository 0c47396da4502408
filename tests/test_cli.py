import json

import pytest

from lox.__main__ import main


def write(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_runs_script(tmp_path, capsys):
    script = write(tmp_path, 'ok.lox', 'var x = 10;\nx = 20;\nprint x;\n')
    main([str(script)])
    assert capsys.readouterr().out == '20\n'


def test_parse_error_exit_status(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'var ;\nprint ;\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == 65
    assert capsys.readouterr().err.splitlines() == [
        "[line 1] Error at ';': Expect variable name.",
        "[line 2] Error at ';': Expect expression.",
    ]


def test_scan_error_exit_status(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'print 1 @ 2;')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == 65
    assert '[line 1] Error: Unexpected character.' in capsys.readouterr().err


def test_runtime_error_exit_status(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'print 1;\nprint y;\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == 70
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert captured.err.splitlines() == ["Undefined variable 'y'.", '[line 2]']


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.lox')])
    assert excinfo.value.code == 66


def test_print_ast(tmp_path, capsys):
    script = write(tmp_path, 'ast.lox', 'var a = 1 + 2 * 3;\nprint (a);\n')
    main(['--print-ast', str(script)])
    assert capsys.readouterr().out.splitlines() == ['var a = (1 + (2 * 3))', 'print a']


def test_emit_then_run_ast(tmp_path, capsys):
    script = write(tmp_path, 'prog.lox', 'var a = "x";\nprint a + "y";\n')
    main(['--emit-ast', str(script)])
    out_path = tmp_path / 'prog.lox.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert [node['type'] for node in data] == ['Var', 'Print']
    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == 'xy\n'


def test_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    script = write(tmp_path, 'v.lox', 'print 1;')
    main(['-v', str(script)])
    assert capsys.readouterr().out == '1\n'
    assert (tmp_path / 'debug.txt').read_text(encoding='utf-8') == 'execute print 1\n'


def test_prompt_keeps_state_and_survives_errors(monkeypatch, capsys):
    lines = iter(['var a = 1;', 'print b;', 'print a + 1;'])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr('builtins.input', fake_input)
    main([])
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['2', '']
    assert "Undefined variable 'b'." in captured.err


def test_malformed_ast_json(tmp_path, capsys):
    broken = write(tmp_path, 'broken.json', '[{"type": "Print", ')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(broken)])
    assert excinfo.value.code == 64
    assert 'malformed AST file' in capsys.readouterr().err


def test_ast_json_with_bad_token(tmp_path, capsys):
    bad = write(tmp_path, 'bad.json', json.dumps([{"type": "Var", "name": "x", "initializer": None}]))
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(bad)])
    assert excinfo.value.code == 64
    assert 'malformed AST file' in capsys.readouterr().err


@pytest.mark.parametrize('flag', ['--print-ast', '--emit-ast'])
def test_ast_modes_report_every_error(tmp_path, capsys, flag):
    script = write(tmp_path, 'bad.lox', 'print 1 @ 2;\nvar ;\nprint ;\n')
    with pytest.raises(SystemExit) as excinfo:
        main([flag, str(script)])
    assert excinfo.value.code == 65
    assert capsys.readouterr().err.splitlines() == [
        '[line 1] Error: Unexpected character.',
        "[line 1] Error at '2': Expect ';' after value.",
        "[line 2] Error at ';': Expect variable name.",
        "[line 3] Error at ';': Expect expression.",
    ]
    assert not (tmp_path / 'bad.lox.ast.json').exists()


def test_print_ast_too_deep(tmp_path, capsys):
    script = write(tmp_path, 'long.lox', 'print ' + ' + '.join(['1'] * 5000) + ';')
    with pytest.raises(SystemExit) as excinfo:
        main(['--print-ast', str(script)])
    assert excinfo.value.code == 65
    assert 'nested too deeply' in capsys.readouterr().err


def test_long_script_exits_with_runtime_status(tmp_path, capsys):
    script = write(tmp_path, 'long.lox', 'print ' + ' + '.join(['1'] * 5000) + ';')
    with pytest.raises(SystemExit) as excinfo:
        main([str(script)])
    assert excinfo.value.code == 70
    assert capsys.readouterr().err.splitlines() == ['Expression nesting too deep to evaluate.', '[line 1]']
