import io

import pytest
from lrzero import Automaton, Grammar, GrammarConfig, PlainLogger, load_grammar

SUM_GRAMMAR = "S -> S+n | S*n | n"

PAREN_GRAMMAR = """
S -> S+F | S*F | F
F -> (S) | n
"""

EXPR_GRAMMAR = """
E -> E+T | T
T -> T*n | n
"""


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def config(log_stream: io.StringIO) -> GrammarConfig:
    return GrammarConfig(log=PlainLogger(log_stream))


@pytest.fixture
def sum_grammar(config: GrammarConfig) -> Grammar:
    return load_grammar(SUM_GRAMMAR, config)


@pytest.fixture
def paren_grammar(config: GrammarConfig) -> Grammar:
    return load_grammar(PAREN_GRAMMAR, config)


@pytest.fixture
def expr_grammar(config: GrammarConfig) -> Grammar:
    return load_grammar(EXPR_GRAMMAR, config)


@pytest.fixture
def sum_automaton(sum_grammar: Grammar) -> Automaton:
    return Automaton(sum_grammar).build()


@pytest.fixture
def paren_automaton(paren_grammar: Grammar) -> Automaton:
    return Automaton(paren_grammar).build()


@pytest.fixture
def expr_automaton(expr_grammar: Grammar) -> Automaton:
    return Automaton(expr_grammar).build()
