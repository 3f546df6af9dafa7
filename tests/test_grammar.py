import pytest
from lrzero import Grammar, GrammarConfig, GrammarError, UnknownSymbolError

# ============================================================================
# region -------- Symbol classification
# ============================================================================


@pytest.mark.parametrize(
    ("sym", "expected"),
    [
        ("E", "nonterminal"),
        ("R", "nonterminal"),
        ("S'", "nonterminal"),
        ("n", "terminal"),
        ("+", "terminal"),
        ("(", "terminal"),
        ("7", "terminal"),
        ("e", "empty"),
    ],
)
def test_classification_is_exclusive(sym: str, expected: str):
    config = GrammarConfig()
    kinds = {
        "terminal": config.is_terminal(sym),
        "nonterminal": config.is_nonterminal(sym),
        "empty": config.is_empty(sym),
    }
    assert [kind for kind, hit in kinds.items() if hit] == [expected]


def test_custom_empty_symbol():
    config = GrammarConfig(empty_symbol="~")
    assert config.is_empty("~")
    assert config.is_terminal("e")


@pytest.mark.parametrize(
    ("sym", "expected"),
    [("3", True), ("42", True), ("n", False), ("4a", False)],
)
def test_is_number(sym: str, expected: bool):
    assert GrammarConfig().is_number(sym) is expected


# endregion


# ============================================================================
# region -------- Construction
# ============================================================================


def test_add_production_records_usage():
    grammar = Grammar()
    grammar.add_production("E", ["E", "+", "T"])
    grammar.add_production("E", ["T"])
    grammar.add_production("T", ["n"])
    grammar.set_start()

    assert grammar.start == "E"
    assert [str(p) for p in grammar.productions_of("E")] == ["E -> E + T", "E -> T"]
    assert grammar.terminals == {"+": [1], "n": [3]}
    assert grammar.nonterminals["T"] == [1, 2]
    assert str(grammar.start_production) == "S' -> E"
    assert grammar.productions_of("S'") == (grammar.start_production,)


def test_epsilon_production():
    grammar = Grammar()
    p = grammar.add_production("A", ["e"])
    assert p.prod == ()
    assert len(p) == 0
    assert str(p) == "A -> <empty>"


@pytest.mark.parametrize(
    ("name", "syms", "match"),
    [
        pytest.param("a", ["n"], "Illegal rule name", id="terminal name"),
        pytest.param("S'", ["n"], "reserved", id="reserved name"),
        pytest.param("A", ["e", "n"], "must stand alone", id="mixed epsilon"),
        pytest.param("A", ["S'"], "reserved symbol", id="reserved on rhs"),
    ],
)
def test_add_production_errors(name: str, syms: list[str], match: str):
    grammar = Grammar()
    with pytest.raises(GrammarError, match=match):
        grammar.add_production(name, syms)


def test_duplicate_rule():
    grammar = Grammar()
    grammar.add_production("A", ["n"])
    with pytest.raises(GrammarError, match="Duplicate rule"):
        grammar.add_production("A", ["n"])


def test_productions_of_unknown():
    grammar = Grammar()
    grammar.add_production("A", ["n"])
    with pytest.raises(UnknownSymbolError) as exc_info:
        grammar.productions_of("B")
    assert exc_info.value.symbol == "B"


def test_set_start_undefined_symbol():
    grammar = Grammar()
    grammar.add_production("A", ["B", "n"])
    with pytest.raises(UnknownSymbolError, match="'B' used in rule") as exc_info:
        grammar.set_start()
    assert exc_info.value.symbol == "B"


def test_set_start_unknown_start():
    grammar = Grammar()
    grammar.add_production("A", ["n"])
    with pytest.raises(UnknownSymbolError, match="Start symbol 'Z' undefined"):
        grammar.set_start("Z")


def test_set_start_without_rules():
    with pytest.raises(GrammarError, match="No grammar rules"):
        Grammar().set_start()


def test_start_production_before_set_start():
    grammar = Grammar()
    grammar.add_production("A", ["n"])
    with pytest.raises(GrammarError, match="No start symbol"):
        grammar.start_production  # noqa: B018


# endregion


# ============================================================================
# region -------- Analysis
# ============================================================================


def test_first_and_follow(expr_grammar: Grammar):
    first = expr_grammar.compute_first()
    assert first["E"] == ["n"]
    assert first["T"] == ["n"]

    follow = expr_grammar.compute_follow()
    assert sorted(follow["E"]) == sorted(["#", "+"])
    assert sorted(follow["T"]) == sorted(["#", "+", "*"])


def test_first_with_epsilon():
    grammar = Grammar()
    grammar.add_production("S", ["A", "b"])
    grammar.add_production("A", ["a"])
    grammar.add_production("A", ["e"])
    grammar.set_start()

    first = grammar.compute_first()
    assert sorted(first["A"]) == ["a", "e"]
    assert sorted(first["S"]) == ["a", "b"]
    assert grammar.compute_follow()["A"] == ["b"]


def test_find_unreachable():
    grammar = Grammar()
    grammar.add_production("S", ["n"])
    grammar.add_production("U", ["n"])
    grammar.set_start()
    assert grammar.find_unreachable() == ["U"]


def test_str_lists_rules(sum_grammar: Grammar):
    text = str(sum_grammar)
    assert "Rule     0 S' -> S" in text
    assert "Rule     3 S -> n" in text


# endregion
