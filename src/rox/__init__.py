#!/usr/bin/env python3
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from rox.ast_printer import AstPrinter
from rox.environment import Environment
from rox.interpreter import Interpreter
from rox.parser import ParseError, Parser
from rox.rox import Rox
from rox.runtime_error import RoxRuntimeError
from rox.scanner import ScanError, Scanner
from rox.stmt import Stmt
from rox.token import Token


def scan(source: str) -> Tuple[List[Token], List[ScanError]]:
    """Scan source text into Tokens.

    Args:
        source: str. Rox source text.

    Returns:
        result: Tuple[List[Token], List[ScanError]]. The Tokens, always ending
            with EOF, and any errors found along the way.
    """

    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return tokens, scanner.errors


def parse(tokens: List[Token]) -> Tuple[List[Stmt], List[ParseError]]:
    """Parse Tokens into statements.

    Args:
        tokens: List[Token]. Tokens from scan().

    Returns:
        result: Tuple[List[Stmt], List[ParseError]]. Statements which parsed
            cleanly and the errors found. If there are any errors the
            statements must not be run.
    """

    parser = Parser(tokens)
    statements = parser.parse()
    return statements, parser.errors


def run(
    statements: List[Stmt],
    environment: Optional[Environment] = None,
    output: Optional[TextIO] = None,
) -> Optional[RoxRuntimeError]:
    """Execute statements against an Environment.

    Args:
        statements: List[Stmt]. Statements from an error free parse().
        environment: Optional[Environment]. Namespace to run against, a fresh
            one is used if not provided.
        output: Optional[TextIO]. Stream for print statements, stdout by
            default.

    Returns:
        error: Optional[RoxRuntimeError]. The error which aborted the run, if
            any.
    """

    return Interpreter(environment, output).interpret(statements)


def main() -> None:
    """Main entrypoint for the rox interpreter.

    This function is invoked if this __init__.py is executed directly, or via
    the rox CLI entrypoint.

    With no arguments it will start an interactive REPL.

    If the argument is a file, it will be executed by the interpreter.

    Otherwise, the following commands are provided:
    rox run_prompt <- Run the interactive REPL
    rox run <source_or_stdin> <- Execute a source string, - for stdin.
    rox run_file <file> <- Execute the rox source at a given path.
    rox print_ast <file> <- Print the AST of the rox source at a given path.
    rox tokens <file> <- Print the tokens of the rox source at a given path.
    """

    argv = sys.argv

    if len(argv) == 2:
        if argv[1] == "run_prompt":
            run_prompt()
            return

        run_file(argv[1])
    elif len(argv) == 3:
        command = argv[1]
        match command:
            case "run":
                source = argv[2]
                if source == "-":
                    try:
                        source = sys.stdin.read()
                    except KeyboardInterrupt:
                        return

                run_source(source, Interpreter())
                exit_on_error()
            case "run_file":
                run_file(argv[2])
            case "print_ast":
                print_ast(argv[2])
            case "tokens":
                print_tokens(argv[2])
            case _:
                print(f"unrecognized command: {command}", file=sys.stderr)
                sys.exit(66)
    elif len(argv) > 3:
        print("Usage: rox [command] [script]")
        sys.exit(64)
    else:
        run_prompt()


def read_script(path: str) -> str:
    script_path = Path(path)
    if not script_path.is_file():
        print(f"File at {script_path} not found", file=sys.stderr)
        sys.exit(66)

    return script_path.read_text()


def exit_on_error() -> None:
    if Rox.had_error:
        sys.exit(65)
    elif Rox.had_runtime_error:
        sys.exit(70)


def run_file(path: str) -> None:
    run_source(read_script(path), Interpreter())
    exit_on_error()


def run_prompt() -> None:
    """Run the interactive REPL.

    Every line is run against the same Interpreter, so variables declared on
    one line are visible on the next. An empty line, a line holding just "c",
    end of input or Ctrl-C ends the session.
    """

    interpreter = Interpreter()

    try:
        while True:
            try:
                line = input("> ")
            except EOFError:
                break

            if not line or line.strip() == "c":
                break

            run_source(line, interpreter)

            # Errors on one line don't end an interactive session.
            Rox.reset()
    except KeyboardInterrupt:
        return


def run_source(source: str, interpreter: Interpreter) -> None:
    """Scan, parse and run a source, reporting any errors to stderr.

    Statements are only run when scanning and parsing found no errors.

    Args:
        source: str. Rox source text.
        interpreter: Interpreter. Interpreter to run the statements with.
    """

    tokens, scan_errors = scan(source)
    Rox.scan_errors(scan_errors)

    statements, parse_errors = parse(tokens)
    Rox.parse_errors(parse_errors)

    if Rox.had_error:
        return

    error = interpreter.interpret(statements)
    if error is not None:
        Rox.runtime_error(error)


def print_ast(path: str) -> None:
    tokens, scan_errors = scan(read_script(path))
    Rox.scan_errors(scan_errors)

    statements, parse_errors = parse(tokens)
    Rox.parse_errors(parse_errors)

    if Rox.had_error:
        sys.exit(65)

    printer = AstPrinter()
    for i, statement in enumerate(statements, 1):
        print(f"{i}: {printer.print(statement)}")


def print_tokens(path: str) -> None:
    tokens, scan_errors = scan(read_script(path))
    Rox.scan_errors(scan_errors)

    for token in tokens:
        print(f"{token.line}: {token.to_string()}")

    exit_on_error()


if __name__ == "__main__":
    main()
