"""Configuration value shared by the grammar, automaton, scanner and parser."""

import re
import sys
from dataclasses import dataclass, field
from typing import Any, Optional, TextIO

__all__ = ("DEBUG", "INFO", "WARNING", "ERROR", "PlainLogger", "GrammarConfig")


DEBUG = 10
INFO = 20
WARNING = 30
ERROR = 40


class PlainLogger:
    """A stand-in for a logging object created by the logging module.

    Extended Summary
    ----------------
    Messages below `level` are dropped; everything else is written to `f`, one message per line. Any object with the
    same method surface, such as a `logging.Logger`, can be used in its place.
    """

    def __init__(self, f: TextIO, level: int = WARNING) -> None:
        self.f = f
        self.level = level

    def _write(self, level: int, prefix: str, msg: str, args: tuple[object, ...]) -> None:
        if level >= self.level:
            self.f.write(prefix + (msg % args if args else msg) + "\n")

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._write(DEBUG, "", msg, args)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._write(INFO, "", msg, args)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._write(WARNING, "WARNING: ", msg, args)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._write(ERROR, "ERROR: ", msg, args)

    critical = error


def _default_log() -> PlainLogger:
    return PlainLogger(sys.stderr)


@dataclass(frozen=True)
class GrammarConfig:
    """Symbol conventions and diagnostics settings.

    Parameters
    ----------
    empty_symbol: str, default="e"
        The symbol that denotes an epsilon alternative in grammar source.
    end_marker: str, default="#"
        Appended to every parse input; also the bottom-of-stack sentinel.
    start_symbol: str, default="S'"
        Reserved left-hand side of the augmented production.
    number_symbol: str, default="n"
        Terminal that stands for any numeric literal.
    number_pattern: str, default=r"\\d+"
        Regular expression a lexeme must fully match to count as a numeric literal.
    ignore: str, default=" \\t\\r\\n"
        Characters skipped between symbols.
    substitutions: tuple[tuple[str, str], ...]
        Multi-character symbol names and the single-character codes they are rewritten to when grammar text is loaded.
    log: Any
        Logger receiving construction and parse diagnostics.
    debugfile: str, optional
        If set, the grammar and automaton descriptions are written there after the automaton is built.
    """

    empty_symbol: str = "e"
    end_marker: str = "#"
    start_symbol: str = "S'"
    number_symbol: str = "n"
    number_pattern: str = r"\d+"
    ignore: str = " \t\r\n"
    substitutions: tuple[tuple[str, str], ...] = (("E'", "R"), ("T'", "Y"))
    log: Any = field(default_factory=_default_log, compare=False, repr=False)
    debugfile: Optional[str] = field(default=None, compare=False)

    def is_empty(self, sym: str) -> bool:
        return sym == self.empty_symbol

    def is_nonterminal(self, sym: str) -> bool:
        return not self.is_empty(sym) and "A" <= sym[:1] <= "Z"

    def is_terminal(self, sym: str) -> bool:
        return not (self.is_empty(sym) or self.is_nonterminal(sym))

    def is_number(self, sym: str) -> bool:
        return re.fullmatch(self.number_pattern, sym) is not None
