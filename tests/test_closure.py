import pytest
from lrzero import (
    Grammar,
    GrammarConfig,
    Item,
    PlainLogger,
    expand_closure,
    goto_transition,
    load_grammar,
    symbols_at_dot,
)
from lrzero.config import DEBUG
from lrzero.items import same_item_set, unique_items


def render(items) -> list[str]:
    return [str(item) for item in items]


# ============================================================================
# region -------- Items
# ============================================================================


def test_item_basics(sum_grammar: Grammar):
    p = sum_grammar.productions[1]
    item = Item.start(p)
    assert str(item) == "S -> . S + n"
    assert item.at_dot == "S"
    assert not item.is_complete

    done = item.advance().advance().advance()
    assert str(done) == "S -> S + n ."
    assert done.at_dot is None
    assert done.is_complete
    # Advancing never touches the original item.
    assert item.dot == 0


def test_item_equality_ignores_number():
    assert Item(("n",), 0, "S", 3) == Item(("n",), 0, "S", 7)
    assert Item(("n",), 0, "S") != Item(("n",), 0, "T")
    assert Item(("n",), 0, "S") != Item(("n",), 1, "S")


def test_advance_completed_item():
    with pytest.raises(ValueError, match="Can't advance"):
        Item(("n",), 1, "S").advance()


@pytest.mark.parametrize("dot", [-1, 2])
def test_dot_out_of_range(dot: int):
    with pytest.raises(ValueError, match="outside"):
        Item(("n",), dot, "S")


def test_unique_items_keeps_first():
    a = Item(("n",), 0, "S")
    b = Item(("n",), 1, "S")
    assert unique_items([a, b, a, b]) == (a, b)
    assert same_item_set([a, b], [b, a, b])
    assert not same_item_set([a], [a, b])


# endregion


# ============================================================================
# region -------- Closure and goto
# ============================================================================


def test_initial_closure_order(paren_grammar: Grammar):
    closure = expand_closure([Item.start(paren_grammar.start_production)], paren_grammar)
    assert render(closure) == [
        "S' -> . S",
        "S -> . S + F",
        "S -> . S * F",
        "S -> . F",
        "F -> . ( S )",
        "F -> . n",
    ]
    assert symbols_at_dot(closure) == ["S", "F", "(", "n"]


def test_closure_is_idempotent(paren_grammar: Grammar):
    closure = expand_closure([Item.start(paren_grammar.start_production)], paren_grammar)
    assert expand_closure(closure, paren_grammar) == closure


def test_closure_of_terminal_item_is_itself(sum_grammar: Grammar):
    item = Item(("S", "+", "n"), 2, "S")
    assert expand_closure([item], sum_grammar) == (item,)


def test_closure_expands_advanced_right_recursion(config: GrammarConfig):
    grammar = load_grammar("E -> T+E | T\nT -> n", config)
    kernel = [Item(("T", "+", "E"), 2, "E")]
    assert render(expand_closure(kernel, grammar)) == [
        "E -> T + . E",
        "E -> . T + E",
        "E -> . T",
        "T -> . n",
    ]


def test_closure_with_epsilon(config: GrammarConfig):
    grammar = load_grammar("S -> AS | e\nA -> a", config)
    closure = expand_closure([Item.start(grammar.start_production)], grammar)
    assert render(closure) == ["S' -> . S", "S -> . A S", "S -> .", "A -> . a"]
    assert [item.is_complete for item in closure] == [False, False, True, False]


def test_goto(paren_grammar: Grammar):
    closure = expand_closure([Item.start(paren_grammar.start_production)], paren_grammar)
    snapshot = render(closure)

    assert render(goto_transition(closure, "S", paren_grammar)) == ["S' -> S .", "S -> S . + F", "S -> S . * F"]
    assert render(goto_transition(closure, "(", paren_grammar)) == [
        "F -> ( . S )",
        "S -> . S + F",
        "S -> . S * F",
        "S -> . F",
        "F -> . ( S )",
        "F -> . n",
    ]
    assert goto_transition(closure, ")", paren_grammar) == ()
    assert render(closure) == snapshot


def test_closure_logs_added_items(log_stream):
    grammar = load_grammar("S -> n", GrammarConfig(log=PlainLogger(log_stream, DEBUG)))
    expand_closure([Item.start(grammar.start_production)], grammar)
    assert "closure: add (S -> . n)" in log_stream.getvalue()


# endregion
