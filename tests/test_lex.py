import pytest
from lrzero import GrammarConfig, Scanner, ScanError


def types(scanner: Scanner, text: str) -> list[str]:
    return [tok.type for tok in scanner.tokenize(text)]


@pytest.fixture
def scanner() -> Scanner:
    return Scanner(["n", "+", "*", "(", ")"])


def test_numbers_become_number_terminal(scanner: Scanner):
    toks = list(scanner.tokenize("12 + 3*(45)"))
    assert [tok.type for tok in toks] == ["n", "+", "n", "*", "(", "n", ")"]
    assert [tok.value for tok in toks] == ["12", "+", "3", "*", "(", "45", ")"]
    assert [tok.index for tok in toks] == [0, 3, 5, 6, 7, 8, 10]
    assert toks[0].end == 2


def test_literal_number_terminal(scanner: Scanner):
    assert types(scanner, "n+n") == ["n", "+", "n"]


def test_line_numbers(scanner: Scanner):
    toks = list(scanner.tokenize("1 +\n2\n* 3"))
    assert [tok.lineno for tok in toks] == [1, 1, 2, 3, 3]


def test_illegal_character(scanner: Scanner):
    with pytest.raises(ScanError, match="Illegal character '-' at index 2") as exc_info:
        list(scanner.tokenize("1 - 2"))
    assert exc_info.value.error_index == 2
    assert exc_info.value.text == "- 2"


def test_digits_without_number_terminal():
    scanner = Scanner(["a", "b"])
    with pytest.raises(ScanError):
        list(scanner.tokenize("a1"))


def test_longest_literal_wins():
    scanner = Scanner(["=", "=="], GrammarConfig())
    assert [tok.value for tok in scanner.tokenize("===")] == ["==", "="]


def test_custom_number_pattern():
    config = GrammarConfig(number_pattern=r"\d+(?:\.\d+)?")
    scanner = Scanner(["n", "+"], config)
    assert [tok.value for tok in scanner.tokenize("1.5+2")] == ["1.5", "+", "2"]


def test_empty_alphabet():
    scanner = Scanner([])
    assert list(scanner.tokenize("  \n")) == []
    with pytest.raises(ScanError):
        list(scanner.tokenize("x"))


def test_token_repr(scanner: Scanner):
    tok = next(scanner.tokenize("7"))
    assert repr(tok) == "Token(type='n', value='7', lineno=1, index=0, end=1)"


def test_digit_terminal_keeps_its_type():
    scanner = Scanner(["n", "0", "+"])
    assert types(scanner, "0+10+0") == ["0", "+", "n", "+", "0"]
