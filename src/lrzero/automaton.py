# region License
# -----------------------------------------------------------------------------
# lrzero: automaton.py
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

from typing import Optional

from ._misc import override
from .closure import expand_closure, goto_transition, symbols_at_dot
from .grammar import Grammar, LRError
from .items import Item, item_set_key

__all__ = ("AutomatonNotReady", "State", "Automaton", "build_automaton")


class AutomatonNotReady(LRError):
    """Exception raised when an automaton is used before its construction completed."""


class State:
    """One state of the LR(0) automaton.

    Attributes
    ----------
    id: int
        Position of the state in `Automaton.states`.
    items: tuple[Item, ...]
        Kernel items followed by their closure, without duplicates.
    transitions: dict[str, int]
        Maps a grammar symbol to the id of the state reached by shifting (or going to) that symbol.
    can_reduce: bool
        Whether at least one item is complete.
    """

    __slots__ = ("id", "items", "transitions", "can_reduce")

    def __init__(self, id: int, items: tuple[Item, ...]) -> None:  # noqa: A002
        self.id = id
        self.items = items
        self.transitions: dict[str, int] = {}
        self.can_reduce = any(item.is_complete for item in items)

    @property
    def completed_items(self) -> list[Item]:
        return [item for item in self.items if item.is_complete]

    @property
    def reduce_item(self) -> Optional[Item]:
        """The completed item used for reductions: the first one in stored order."""

        return next((item for item in self.items if item.is_complete), None)

    @override
    def __repr__(self) -> str:
        return f"State(id={self.id}, items={len(self.items)}, can_reduce={self.can_reduce})"


class Automaton:
    """This class implements the LR(0) automaton construction.

    Extended Summary
    ----------------
    The automaton starts out empty and not ready. `build()` discovers every state reachable from the augmented start
    item and freezes the automaton. States are only ever appended, so ids are dense and follow discovery order, and
    states refer to each other by id only.

    Attributes
    ----------
    grammar: Grammar
        The augmented grammar the automaton is built from.
    states: list[State]
        All states, indexed by id. State 0 is the initial state.
    ready: bool
        True once construction finished.
    sr_conflicts: list[tuple[int, str, Item]]
        (state, terminal, completed item) for every state that can both shift a terminal and reduce.
    rr_conflicts: list[tuple[int, Item, Item]]
        (state, chosen item, rejected item) for every state with more than one completed item.
    """

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar
        self.config = grammar.config
        self.states: list[State] = []
        self.ready = False

        # Structural index of the states: item set -> state id
        self._index: dict[frozenset[Item], int] = {}

        # Diagnostic information filled in by the builder
        self.state_descriptions: dict[int, str] = {}
        self.sr_conflicts: list[tuple[int, str, Item]] = []
        self.rr_conflicts: list[tuple[int, Item, Item]] = []

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, state_id: int) -> State:
        return self.states[state_id]

    def _add_state(self, items: tuple[Item, ...]) -> int:
        state_id = len(self.states)
        self.states.append(State(state_id, items))
        self._index[item_set_key(items)] = state_id
        self.config.log.debug("add new state id: %d", state_id)
        return state_id

    def find_state(self, items: tuple[Item, ...]) -> Optional[int]:
        """Return the id of the state whose item set equals `items`, if there is one."""

        return self._index.get(item_set_key(items))

    def build(self) -> "Automaton":
        """Compute the canonical collection of LR(0) item sets and their transitions."""

        if self.ready:
            return self

        grammar = self.grammar
        log = self.config.log

        self._add_state(expand_closure([Item.start(grammar.start_production)], grammar))

        # Loop over the states, including the ones appended along the way
        i = 0
        while i < len(self.states):
            state = self.states[i]
            i += 1

            for sym in symbols_at_dot(state.items):
                g = goto_transition(state.items, sym, grammar)
                if not g:
                    continue
                j = self.find_state(g)
                if j is None:
                    j = self._add_state(g)
                else:
                    log.debug("state %d on %r: existing state %d", state.id, sym, j)
                state.transitions[sym] = j

        self.ready = True
        self._record_conflicts()
        self._describe_states()
        self._report()
        return self

    def _record_conflicts(self) -> None:
        start = self.config.start_symbol
        for state in self.states:
            completed = state.completed_items
            if not completed:
                continue
            chosen = completed[0]
            self.rr_conflicts.extend((state.id, chosen, rejected) for rejected in completed[1:])
            if chosen.origin == start:
                continue
            self.sr_conflicts.extend(
                (state.id, sym, chosen) for sym in state.transitions if self.grammar.is_terminal(sym)
            )

    def _report(self) -> None:
        log = self.config.log
        log.info("LR(0) automaton built with %d states", len(self.states))

        for sym in self.grammar.find_unreachable():
            log.warning("Symbol %r is unreachable", sym)

        num_sr = len(self.sr_conflicts)
        if num_sr == 1:
            log.warning("1 shift/reduce conflict")
        elif num_sr > 1:
            log.warning("%d shift/reduce conflicts", num_sr)

        num_rr = len(self.rr_conflicts)
        if num_rr == 1:
            log.warning("1 reduce/reduce conflict")
        elif num_rr > 1:
            log.warning("%d reduce/reduce conflicts", num_rr)

        if self.config.debugfile:
            with open(self.config.debugfile, "w") as f:
                f.write(str(self.grammar))
                f.write("\n")
                f.write(str(self))
            log.info("Automaton debugging written to %s", self.config.debugfile)

    def _describe_states(self) -> None:
        for state in self.states:
            descrip = [f"\nstate {state.id}\n"]
            descrip.extend(f"    ({item.number}) {item}" for item in state.items)
            descrip.append("")
            descrip.extend(f"    {sym:<15s} go to state {j}" for sym, j in state.transitions.items())
            if state.can_reduce:
                descrip.append(f"    {'':<15s} reduce using ({state.reduce_item})")
            descrip.append("")
            self.state_descriptions[state.id] = "\n".join(descrip)

    def symbols(self) -> tuple[list[str], list[str]]:
        """Every terminal of the grammar followed by the end marker, and every defined nonterminal.

        Both lists follow the order in which the symbols first appear in the grammar, whether or not a state
        reaches them.
        """

        terms = list(dict.fromkeys([*self.grammar.terminals, self.config.end_marker]))
        nonterms = list(self.grammar.prodnames)
        return terms, nonterms

    def table(self) -> str:
        """Render every state's id, reduce capability and transitions, terminal columns first."""

        if not self.ready:
            msg = "The automaton has not been built yet."
            raise AutomatonNotReady(msg)

        terms, nonterms = self.symbols()
        columns = terms + nonterms
        lines = ["state  reduce" + "".join(f"{sym:>5s}" for sym in columns)]
        for state in self.states:
            row = f"{state.id:<7d}{'yes' if state.can_reduce else 'no':<6s}"
            for sym in columns:
                j = state.transitions.get(sym)
                row += f"{'' if j is None else j:>5}"
            lines.append(row.rstrip())
        return "\n".join(lines)

    def describe(self, state_id: Optional[int] = None) -> str:
        """List the items, transitions and reduction of one state, or of every state when no id is given."""

        if state_id is not None:
            return self.state_descriptions[state_id]
        return "\n".join(self.state_descriptions.values())

    @override
    def __str__(self) -> str:
        """Return str(self).

        Extended Summary
        ----------------
        Serves as debugging output: a listing of all of the states followed by the conflicts.
        """

        out = [self.describe()]

        if self.sr_conflicts or self.rr_conflicts:
            out.append("\nConflicts:\n")
            out.extend(
                f"shift/reduce conflict for {sym} in state {state} (reduce using ({item}))"
                for state, sym, item in self.sr_conflicts
            )
            for state, chosen, rejected in self.rr_conflicts:
                out.append(f"reduce/reduce conflict in state {state} resolved using ({chosen})")
                out.append(f"rejected ({rejected}) in state {state}")

        return "\n".join(out)


def build_automaton(grammar: Grammar) -> Automaton:
    return Automaton(grammar).build()
