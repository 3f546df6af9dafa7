"""Read grammar source text of the form "X -> alt1 | alt2" into a `Grammar`."""

import os
from typing import Optional, Union

from ._misc import TypeAlias
from .config import GrammarConfig
from .grammar import Grammar, GrammarFormatError

__all__ = ("load_grammar", "load_grammar_file")

_StrPath: TypeAlias = Union[str, os.PathLike[str]]


def _normalize(line: str, config: GrammarConfig) -> str:
    for ch in config.ignore:
        line = line.replace(ch, "")
    for name, code in config.substitutions:
        line = line.replace(name, code)
    return line


def load_grammar(source: str, config: Optional[GrammarConfig] = None, start: Optional[str] = None) -> Grammar:
    """Build an augmented grammar from grammar source text.

    Extended Summary
    ----------------
    Each non-blank line defines alternatives for one nonterminal. Whitespace is removed and the configured
    substitution table is applied before the line is split, so every remaining character is one symbol. An
    alternative consisting of the empty symbol is an epsilon production. Lines starting with "//" are comments.

    Parameters
    ----------
    source: str
        The grammar text.
    config: GrammarConfig, optional
        Symbol conventions. Defaults to `GrammarConfig()`.
    start: str, optional
        The start symbol. Defaults to the left hand side of the first line.

    Raises
    ------
    GrammarFormatError
        If a line doesn't have exactly one "->", has a left hand side that isn't a single symbol, or has an empty
        alternative.
    GrammarError
        If the rules themselves are invalid (see `Grammar.add_production()` and `Grammar.set_start()`).
    """

    grammar = Grammar(config)
    config = grammar.config

    for lineno, raw in enumerate(source.splitlines(), start=1):
        if raw.lstrip().startswith("//"):
            continue
        line = _normalize(raw, config)
        if not line:
            continue

        parts = line.split("->")
        if len(parts) != 2:
            msg = f"line {lineno}: expected exactly one '->' in {raw!r}."
            raise GrammarFormatError(msg, lineno, raw)

        lhs, rhs = parts
        if len(lhs) != 1:
            msg = f"line {lineno}: left hand side {lhs!r} must be a single symbol."
            raise GrammarFormatError(msg, lineno, raw)

        for alt in rhs.split("|"):
            if not alt:
                msg = f"line {lineno}: empty alternative for {lhs!r}; use {config.empty_symbol!r} for epsilon."
                raise GrammarFormatError(msg, lineno, raw)
            grammar.add_production(lhs, list(alt))

    grammar.set_start(start)
    config.log.debug("Loaded grammar with %d rules, start symbol %r", len(grammar) - 1, grammar.start)
    return grammar


def load_grammar_file(
    file: _StrPath,
    config: Optional[GrammarConfig] = None,
    start: Optional[str] = None,
    encoding: str = "utf-8",
) -> Grammar:
    with open(file, encoding=encoding) as fp:
        source = fp.read()

    return load_grammar(source, config, start)
