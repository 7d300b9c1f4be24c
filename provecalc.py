#!/usr/bin/env python3
"""
provecalc.py — CLI narzędzie ProveCalc.

Działa całkowicie lokalnie, nie wymaga uruchomionego serwera API.

Konfiguracja: zmienne środowiskowe z prefiksem PROVE_CALC_
lub plik .env (np. PROVE_CALC_MAX_NESTING=300).

Podkomendy:
    eval: oblicz wyrażenie i wypisz wynik
    ast : wypisz drzewo wyrażenia jako JSON
    repl: interaktywna pętla (pusta linia kończy)

Użycie:
    python provecalc.py eval "2+3*4"
    python provecalc.py eval --steps "(1+2)*3"
    python provecalc.py eval -- "-2^2"
    echo "10/3" | python provecalc.py eval
    python provecalc.py ast "2^3^2"
    python provecalc.py repl

Kody wyjścia: 0 sukces, 1 dowolny błąd wyrażenia.
"""
from __future__ import annotations

import argparse
import logging
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from adapters.calculator import Calculator
from config import Settings
from contracts import CalcError, CalcFailure, CalcResult, ErrorKind


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _read_expression(args: argparse.Namespace) -> str:
    if args.expression is not None:
        return args.expression
    # Usuwa tylko znak końca linii
    return sys.stdin.readline().rstrip("\r\n")


def _error_text(failure: CalcFailure) -> str:
    if failure.kind == ErrorKind.SYNTAX:
        return "Syntax error."
    if failure.kind == ErrorKind.UNSUPPORTED_OPERAND:
        return "Cannot do mod on double"
    return f"Error: {failure.message}"


def _print_failure(failure: CalcFailure, text: str, verbose: bool) -> None:
    print(_error_text(failure), file=sys.stderr)
    if verbose:
        print(f"  {failure.kind.value}: {failure.message}", file=sys.stderr)
        if failure.position is not None:
            print(f"  {text}", file=sys.stderr)
            print(f"  {' ' * failure.position}^", file=sys.stderr)


def _print_steps_table(steps: list[str]) -> None:
    table = Table(title=f"Steps [{len(steps)}]", box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("#", no_wrap=True, style="bold cyan", justify="right")
    table.add_column("Step")
    for i, step in enumerate(steps, start=1):
        table.add_row(str(i), step)
    _console().print(table)


def _configure(args: argparse.Namespace) -> Calculator:
    settings = Settings()
    level = "DEBUG" if getattr(args, "verbose", False) else settings.log_level
    logging.basicConfig(level=level.upper())
    return Calculator.from_settings(settings)


# -- podkomendy ------------------------------------------------------------

def _eval(args: argparse.Namespace) -> int:
    calculator = _configure(args)
    text = _read_expression(args)
    result: CalcResult = calculator.calc(text)

    if result.is_error:
        _print_failure(result.error, text, args.verbose)  # type: ignore[arg-type]
        return 1

    print(result.display())
    if args.steps:
        _print_steps_table(result.steps)
    return 0


def _ast(args: argparse.Namespace) -> int:
    calculator = _configure(args)
    text = _read_expression(args)
    try:
        ast = calculator.ast(text)
    except CalcError as exc:
        failure = CalcFailure(kind=exc.kind, message=exc.message, position=exc.position)
        _print_failure(failure, text, args.verbose)
        return 1

    _console().print_json(ast.model_dump_json())
    return 0


def _repl(args: argparse.Namespace) -> int:
    calculator = _configure(args)
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if line == "":
            break
        result = calculator.calc(line)
        if result.is_error:
            _print_failure(result.error, line, args.verbose)  # type: ignore[arg-type]
        else:
            print(result.display())
    return 0


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="provecalc",
        description="ProveCalc: kalkulator wyrażeń arytmetycznych (int64 / float)",
        epilog='Wyrażenia zaczynające się od "-" podaj po "--", np. eval -- "-2^2".',
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Oblicz wyrażenie")
    p.add_argument("expression", nargs="?", help="Wyrażenie (lub stdin)")
    p.add_argument("--steps", "-s", action="store_true",
                   help="Wyświetl kolejne kroki obliczeń")
    p.add_argument("--verbose", "-v", action="store_true",
                   help="Szczegóły błędu i logi DEBUG")

    # ast
    p = sub.add_parser("ast", help="Wypisz drzewo wyrażenia jako JSON")
    p.add_argument("expression", nargs="?", help="Wyrażenie (lub stdin)")
    p.add_argument("--verbose", "-v", action="store_true",
                   help="Szczegóły błędu i logi DEBUG")

    # repl
    p = sub.add_parser("repl", help="Interaktywna pętla; pusta linia kończy")
    p.add_argument("--verbose", "-v", action="store_true",
                   help="Szczegóły błędu i logi DEBUG")

    args = parser.parse_args(argv)

    cmds = {
        "eval": _eval,
        "ast":  _ast,
        "repl": _repl,
    }
    sys.exit(cmds[args.command](args))


if __name__ == "__main__":
    main()
