"""LR(0) automaton construction and shift-reduce parsing for small single-character grammars."""

from .automaton import Automaton, AutomatonNotReady, State, build_automaton
from .closure import expand_closure, goto_transition, symbols_at_dot
from .config import GrammarConfig, PlainLogger
from .context import LRContext, parse
from .grammar import Grammar, GrammarError, GrammarFormatError, LRError, Production, UnknownSymbolError
from .items import Item
from .lex import Scanner, ScanError, Token
from .loader import load_grammar, load_grammar_file
from .parser import ParseAction, ParseRejected, Parser, ParseStep

__all__ = (
    "Automaton",
    "AutomatonNotReady",
    "Grammar",
    "GrammarConfig",
    "GrammarError",
    "GrammarFormatError",
    "Item",
    "LRContext",
    "LRError",
    "ParseAction",
    "ParseRejected",
    "ParseStep",
    "Parser",
    "PlainLogger",
    "Production",
    "ScanError",
    "Scanner",
    "State",
    "Token",
    "UnknownSymbolError",
    "build_automaton",
    "expand_closure",
    "goto_transition",
    "load_grammar",
    "load_grammar_file",
    "parse",
    "symbols_at_dot",
)

__version__ = "0.1.0"
