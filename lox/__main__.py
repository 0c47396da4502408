"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [script]
    python -m lox --print-ast <script>
    python -m lox --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --print-ast   Parse the script and print one rendered statement per line
  --emit-ast    Parse the script and write its AST to a JSON file
  --ast         Execute a previously emitted AST JSON file

Without a script an interactive prompt is started; each line is run in
the same interpreter, so variables persist between lines. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, statements_from_obj
from .errors import LoxError
from .interpreter import (
    EXIT_RUNTIME_ERROR, EXIT_STATIC_ERROR, Interpreter, report, run_source, scan_and_parse,
)

EXIT_USAGE = 64
EXIT_NO_INPUT = 66


def read_source(path_arg: str) -> str:
    path = Path(path_arg)
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EXIT_NO_INPUT)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    statements, errors = scan_and_parse(source)
    for error in errors:
        report(error)
    if errors:
        sys.exit(EXIT_STATIC_ERROR)
    return statements


def too_deep(path: Path):
    print(f"Error: {path} is nested too deeply to render", file=sys.stderr)
    sys.exit(EXIT_STATIC_ERROR)


def run_prompt(interpreter: Interpreter) -> None:
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            break
        # Errors are reported by run_source; the prompt keeps going.
        run_source(line, interpreter)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--print-ast', metavar='LOX_FILE', help='print the parsed statements of the given file')
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Lox script to execute')
    args = parser.parse_args(argv)

    if args.print_ast:
        statements = parse_or_exit(read_source(args.print_ast))
        try:
            lines = [str(stmt) for stmt in statements]
        except RecursionError:
            too_deep(Path(args.print_ast))
        for line in lines:
            print(line)
        return

    if args.emit_ast:
        program_file = Path(args.emit_ast)
        statements = parse_or_exit(read_source(args.emit_ast))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        try:
            text = json.dumps(ast_to_obj(statements), ensure_ascii=False, indent=2)
        except RecursionError:
            too_deep(program_file)
        with open(out_path, 'w', encoding='utf-8') as out:
            out.write(text)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)

    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(EXIT_NO_INPUT)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            statements = statements_from_obj(data)
        except (KeyError, TypeError, ValueError, RecursionError) as e:
            print(f"Error: malformed AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(EXIT_USAGE)
        try:
            interpreter.interpret(statements)
        except LoxError as e:
            report(e)
            sys.exit(EXIT_RUNTIME_ERROR)
        return

    if not args.script:
        run_prompt(interpreter)
        return

    status = run_source(read_source(args.script), interpreter)
    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()
