import os
from typing import Optional, Union

from .automaton import Automaton
from ._misc import TypeAlias
from .config import GrammarConfig
from .grammar import Grammar
from .lex import Scanner
from .loader import load_grammar, load_grammar_file
from .parser import Parser, ParseStep

__all__ = ("LRContext", "parse")

_StrPath: TypeAlias = Union[str, os.PathLike[str]]


class LRContext:
    """A grammar together with its automaton, scanner and parser."""

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar
        self.config = grammar.config
        self.automaton = Automaton(grammar).build()
        self.scanner = Scanner(grammar.terminals, self.config)
        self.parser = Parser(self.automaton)

    @classmethod
    def from_source(
        cls, source: str, config: Optional[GrammarConfig] = None, start: Optional[str] = None
    ) -> "LRContext":
        return cls(load_grammar(source, config, start))

    @classmethod
    def from_file(
        cls, file: _StrPath, config: Optional[GrammarConfig] = None, start: Optional[str] = None
    ) -> "LRContext":
        return cls(load_grammar_file(file, config, start))

    def parse(self, text: str) -> list[ParseStep]:
        """Scan and parse `text`, returning the shift/reduce trace."""

        return self.parser.parse(self.scanner.tokenize(text))

    def accepts(self, text: str) -> bool:
        return self.parser.accepts(self.scanner.tokenize(text))


def parse(text: str, grammar_source: str, config: Optional[GrammarConfig] = None) -> list[ParseStep]:
    return LRContext.from_source(grammar_source, config).parse(text)
