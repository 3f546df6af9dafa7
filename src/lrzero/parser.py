# region License
# -----------------------------------------------------------------------------
# lrzero: parser.py
#
# Copyright (C) 2016-2018
# David M. Beazley (Dabeaz LLC)
# Copyright (C) 2024, Sachaa-Thanasius
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are
# met:
#
# * Redistributions of source code must retain the above copyright notice,
#   this list of conditions and the following disclaimer.
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
# * Neither the name of the David Beazley or Dabeaz LLC may be used to
#   endorse or promote products derived from this software without
#  specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR
# A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
# OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
# SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
# DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
# THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
# (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# -----------------------------------------------------------------------------
# endregion

import enum
from collections.abc import Generator, Iterable
from typing import Optional, Union

from ._misc import TypeAlias, override
from .automaton import Automaton, AutomatonNotReady
from .grammar import LRError
from .items import Item
from .lex import Token

__all__ = ("ParseRejected", "ParseAction", "ParseStep", "ParseConfiguration", "Parser")


class ParseRejected(LRError):
    """Exception raised when the input is not a sentence of the grammar.

    Attributes
    ----------
    symbol: str
        The input symbol that couldn't be accepted (the end marker at end of input).
    state: int
        Id of the automaton state the parser was in.
    position: int
        Index of the rejected symbol in the input.
    """

    def __init__(self, symbol: str, state: int, position: int = -1) -> None:
        super().__init__(f"cannot accept {symbol} at state {state}")
        self.symbol = symbol
        self.state = state
        self.position = position

    def trace_line(self) -> str:
        return str(self)


class ParseAction(enum.Enum):
    SHIFT = "shift"
    REDUCE = "reduce"
    ACCEPT = "accept"


class ParseStep:
    """One step of a parse, with snapshots of both stacks taken after the step.

    Extended Summary
    ----------------
    The augmented reduction is never carried out: the ACCEPT step shows the stacks holding the start symbol, just as
    the last reduction left them, so both stacks always have the same length.

    Attributes
    ----------
    action: ParseAction
        What the parser did.
    symbol: str
        The shifted terminal, the nonterminal a reduction produced, or the augmented start symbol on ACCEPT.
    item: Item | None
        The completed item used by a reduction, or the completed augmented item on ACCEPT.
    symbols: tuple[str, ...]
        The symbol stack, bottom first.
    states: tuple[int, ...]
        The state stack, bottom first.
    position: int
        Index of the next unread input symbol.
    """

    __slots__ = ("action", "symbol", "item", "symbols", "states", "position")

    def __init__(
        self,
        action: ParseAction,
        symbol: str,
        item: Optional[Item],
        symbols: tuple[str, ...],
        states: tuple[int, ...],
        position: int,
    ) -> None:
        self.action = action
        self.symbol = symbol
        self.item = item
        self.symbols = symbols
        self.states = states
        self.position = position

    @override
    def __repr__(self) -> str:
        return f"ParseStep({self.action.value} {self.symbol!r}, symbols={self.symbols}, states={self.states})"


_Tokens: TypeAlias = Union[str, Iterable[Union[str, Token]]]


class ParseConfiguration:
    """The mutable runtime state of a single parse.

    Extended Summary
    ----------------
    `statestack[k]` is the automaton state reached after the first `k` symbols of `symstack` above the bottom
    sentinel. Right after a shift or a reduction the symbol stack is one longer than the state stack; the parser
    resolves the missing state before the step is reported.
    """

    def __init__(self, symbols: list[str], end_marker: str) -> None:
        self.input = [*symbols, end_marker]
        self.index = 0
        self.symstack: list[str] = [end_marker]
        self.statestack: list[int] = [0]

    @property
    def lookahead(self) -> str:
        return self.input[self.index]

    @property
    def at_end(self) -> bool:
        return self.index == len(self.input) - 1

    def snapshot(self, action: ParseAction, symbol: str, item: Optional[Item] = None) -> ParseStep:
        return ParseStep(action, symbol, item, tuple(self.symstack), tuple(self.statestack), self.index)


class Parser:
    """Shift-reduce recognizer driven by a built LR(0) automaton.

    Extended Summary
    ----------------
    The parser only reads the automaton, so one automaton can back any number of parsers and parses. Every call to
    `steps()`, `parse()` or `accepts()` works on a fresh `ParseConfiguration`.

    Shift is preferred whenever the lookahead labels a terminal transition of the current state. Otherwise the
    state's first completed item is reduced. The augmented production is only reduced at the end of the input,
    which accepts.
    """

    def __init__(self, automaton: Automaton) -> None:
        self.automaton = automaton
        self.config = automaton.config

    def _symbols(self, tokens: _Tokens) -> list[str]:
        config = self.config
        ignore = config.ignore if isinstance(tokens, str) else ""
        symbols: list[str] = []
        for tok in tokens:
            sym = tok.type if isinstance(tok, Token) else tok
            if sym in ignore:
                continue
            symbols.append(sym)
        return symbols

    def _terminal(self, sym: str) -> str:
        """Map an input symbol to the terminal it matches.

        A numeric literal matches the number terminal, unless the grammar has no number terminal or uses the literal
        as a terminal of its own.
        """

        config = self.config
        terminals = self.automaton.grammar.terminals
        if sym in terminals or config.number_symbol not in terminals:
            return sym
        if config.is_number(sym):
            return config.number_symbol
        return sym

    def steps(self, tokens: _Tokens) -> Generator[ParseStep]:
        """Parse the given input, yielding every step.

        Raises
        ------
        AutomatonNotReady
            If the automaton hasn't been built.
        ParseRejected
            At the first symbol that can't be accepted.
        """

        automaton = self.automaton
        if not automaton.ready:
            msg = "The automaton must be built before parsing."
            raise AutomatonNotReady(msg)

        states = automaton.states
        grammar = automaton.grammar
        log = self.config.log
        start = self.config.start_symbol
        end = self.config.end_marker

        conf = ParseConfiguration(self._symbols(tokens), end)
        symstack = conf.symstack
        statestack = conf.statestack
        last: Optional[tuple[ParseAction, str, Optional[Item]]] = None

        while True:
            top = statestack[-1]

            if len(statestack) < len(symstack):
                # Go to the state reached by the symbol just pushed.
                sym = symstack[-1]
                target = states[top].transitions.get(sym)
                if target is None:
                    raise ParseRejected(sym, top, conf.index)
                statestack.append(target)

                assert last is not None
                step = conf.snapshot(*last)
                log.debug("%-8s %-10s symbols=%s states=%s", step.action.value, step.symbol, step.symbols, step.states)
                yield step
                continue

            lookahead = conf.lookahead
            terminal = self._terminal(lookahead)
            state = states[top]

            if grammar.is_terminal(terminal) and terminal in state.transitions:
                symstack.append(terminal)
                conf.index += 1
                last = (ParseAction.SHIFT, terminal, None)

            elif state.can_reduce:
                item = state.reduce_item
                assert item is not None
                if item.origin == start:
                    if not conf.at_end:
                        raise ParseRejected(lookahead, top, conf.index)
                    log.debug("accept")
                    yield conf.snapshot(ParseAction.ACCEPT, start, item)
                    return

                plen = len(item.prod)
                if plen:
                    del symstack[-plen:]
                    del statestack[-plen:]
                symstack.append(item.origin)
                last = (ParseAction.REDUCE, item.origin, item)

            else:
                raise ParseRejected(lookahead, top, conf.index)

    def parse(self, tokens: _Tokens) -> list[ParseStep]:
        """Parse the given input and return the shift/reduce trace. Rejected input raises `ParseRejected`."""

        return list(self.steps(tokens))

    def accepts(self, tokens: _Tokens) -> bool:
        try:
            self.parse(tokens)
        except ParseRejected:
            return False
        return True
