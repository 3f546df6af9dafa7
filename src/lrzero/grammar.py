# region License
# -----------------------------------------------------------------------------
# lrzero: grammar.py
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

from collections.abc import Iterable, Sequence
from typing import Optional

from ._misc import override
from .config import GrammarConfig

__all__ = ("LRError", "GrammarError", "GrammarFormatError", "UnknownSymbolError", "Production", "Grammar")


# ============================================================================
# region -------- Exceptions --------
# ============================================================================


class LRError(Exception):
    """Base class for every error raised by lrzero while building or running a parser."""


class GrammarError(LRError):
    """Exception raised when something goes wrong in constructing the grammar."""


class GrammarFormatError(GrammarError):
    """Exception raised for a malformed line of grammar source.

    Attributes
    ----------
    lineno: int
        1-based line number of the offending line.
    line: str
        The offending line, as read.
    """

    def __init__(self, message: str, lineno: int = 0, line: str = "") -> None:
        super().__init__(message)
        self.lineno = lineno
        self.line = line


class UnknownSymbolError(GrammarError):
    """Exception raised when a symbol is neither a terminal nor a defined nonterminal."""

    def __init__(self, message: str, symbol: str) -> None:
        super().__init__(message)
        self.symbol = symbol


# endregion


# ============================================================================
# region -------- Grammar Representation --------
# ============================================================================


class Production:
    """This class stores the raw information about a single production or grammar rule.

    Extended Summary
    ----------------
    A grammar rule refers to a specification such as this: "E -> E + T".

    Parameters
    ----------
    number: int
        Production number. Number 0 is the augmented start production.
    name: str
        Name of the production, e.g. "E".
    prod: Iterable[str]
        The symbols on the right side, e.g. ["E", "+", "T"]. Empty for an epsilon production.

    Attributes
    ----------
    len: int
        Length of the production (number of symbols on right hand side).
    """

    def __init__(self, number: int, name: str, prod: Iterable[str]) -> None:
        self.number = number
        self.name = name
        self.prod: tuple[str, ...] = tuple(prod)
        self.len = len(self.prod)

    @override
    def __str__(self) -> str:
        if self.prod:
            return f'{self.name} -> {" ".join(self.prod)}'
        return f"{self.name} -> <empty>"

    @override
    def __repr__(self) -> str:
        return f"Production({self})"

    def __len__(self) -> int:
        return self.len

    def __getitem__(self, index: int) -> str:
        return self.prod[index]


class Grammar:
    """This class represents the contents of a grammar.

    Extended Summary
    ----------------
    More specifically, it represents the productions of the grammar along with symbol classification and a few
    computed properties (FIRST and FOLLOW sets, reachability). The automaton builder only relies on
    `productions_of()`, the symbol predicates and the augmented production.

    Attributes
    ----------
    config: GrammarConfig
        Symbol conventions in effect.
    productions: list[Production | None]
        All productions. The first entry is reserved for the augmented start production and stays None until
        `set_start()` is called.
    prodnames: dict[str, list[Production]]
        Maps the name of each nonterminal to its alternatives, in insertion order.
    terminals: dict[str, list[int]]
        Maps each terminal to the numbers of the rules it appears in.
    nonterminals: dict[str, list[int]]
        Maps each nonterminal to the numbers of the rules it appears in (on the right hand side).
    first: dict[str, list[str]]
        Precomputed FIRST(x) sets. Empty until `compute_first()`.
    follow: dict[str, list[str]]
        Precomputed FOLLOW(x) sets. Empty until `compute_follow()`.
    start: str | None
        The user start symbol, once set.
    """

    def __init__(self, config: Optional[GrammarConfig] = None) -> None:
        self.config = config or GrammarConfig()
        # fmt: off
        self.productions:   list[Optional[Production]]  = [None]
        self.prodnames:     dict[str, list[Production]] = {}
        self.prodmap:       dict[tuple[str, tuple[str, ...]], Production] = {}
        self.terminals:     dict[str, list[int]]        = {}
        self.nonterminals:  dict[str, list[int]]        = {}
        self.first:         dict[str, list[str]]        = {}
        self.follow:        dict[str, list[str]]        = {}
        self.start:         Optional[str]               = None
        # fmt: on

    def __len__(self) -> int:
        return len(self.productions)

    def __getitem__(self, index: int) -> Optional[Production]:
        return self.productions[index]

    # ---- Symbol classification

    def is_terminal(self, sym: str) -> bool:
        return self.config.is_terminal(sym)

    def is_nonterminal(self, sym: str) -> bool:
        return self.config.is_nonterminal(sym)

    def is_empty(self, sym: str) -> bool:
        return self.config.is_empty(sym)

    @property
    def start_production(self) -> Production:
        """The augmented production "S' -> start"."""

        prod = self.productions[0]
        if prod is None:
            msg = "No start symbol has been set."
            raise GrammarError(msg)
        return prod

    def productions_of(self, nonterminal: str) -> tuple[Production, ...]:
        """Return the alternatives of a nonterminal, in definition order.

        Raises
        ------
        UnknownSymbolError
            If the nonterminal was never defined.
        """

        if nonterminal == self.config.start_symbol and self.productions[0] is not None:
            return (self.productions[0],)
        try:
            return tuple(self.prodnames[nonterminal])
        except KeyError:
            msg = f"Unknown nonterminal {nonterminal!r}."
            raise UnknownSymbolError(msg, nonterminal) from None

    # ---- Construction

    def add_production(self, prodname: str, syms: Sequence[str]) -> Production:
        """Assemble a production rule and add it to the grammar.

        Parameters
        ----------
        prodname: str
            The left hand side, e.g. "E" for the rule "E -> E + T".
        syms: Sequence[str]
            The right hand side, e.g. ["E", "+", "T"]. A sequence holding only the empty symbol (or nothing at all)
            creates an epsilon production.

        Raises
        ------
        GrammarError
            If the rule name is not a nonterminal or is reserved, if the empty symbol is mixed with other symbols, or
            if the rule is a duplicate.
        """

        config = self.config
        if not config.is_nonterminal(prodname):
            msg = f"Illegal rule name {prodname!r}. Rule names must be nonterminals."
            raise GrammarError(msg)
        if prodname == config.start_symbol:
            msg = f"Illegal rule name {prodname!r}. It is reserved for the augmented start production."
            raise GrammarError(msg)

        syms = list(syms)
        if config.empty_symbol in syms:
            if len(syms) != 1:
                msg = f"Rule {prodname!r}: the empty symbol {config.empty_symbol!r} must stand alone."
                raise GrammarError(msg)
            syms = []
        if config.start_symbol in syms:
            msg = f"Rule {prodname!r}: reserved symbol {config.start_symbol!r} can't appear on a right hand side."
            raise GrammarError(msg)

        key = (prodname, tuple(syms))
        if key in self.prodmap:
            msg = f"Duplicate rule {self.prodmap[key]}."
            raise GrammarError(msg)

        pnumber = len(self.productions)
        self.nonterminals.setdefault(prodname, [])

        for t in syms:
            if config.is_terminal(t):
                self.terminals.setdefault(t, []).append(pnumber)
            else:
                self.nonterminals.setdefault(t, []).append(pnumber)

        p = Production(pnumber, prodname, syms)
        self.productions.append(p)
        self.prodmap[key] = p
        self.prodnames.setdefault(prodname, []).append(p)
        return p

    def set_start(self, start: Optional[str] = None) -> None:
        """Set the starting symbol and create the augmented grammar.

        Extended Summary
        ----------------
        Production rule 0 becomes "S' -> start". If no start is given, the first defined nonterminal is used.

        Raises
        ------
        GrammarError
            If the grammar has no rules.
        UnknownSymbolError
            If the start symbol, or any nonterminal used on a right hand side, is undefined.
        """

        if len(self.productions) < 2:
            msg = "No grammar rules are defined."
            raise GrammarError(msg)

        if not start:
            start = next(iter(self.prodnames))

        if start not in self.prodnames:
            msg = f"Start symbol {start!r} undefined."
            raise UnknownSymbolError(msg, start)

        undefined = self.undefined_symbols()
        if undefined:
            sym, prod = undefined[0]
            msg = f"Symbol {sym!r} used in rule ({prod}), but not defined as a rule."
            raise UnknownSymbolError(msg, sym)

        self.productions[0] = Production(0, self.config.start_symbol, [start])
        self.nonterminals[start].append(0)
        self.start = start
        self.first.clear()
        self.follow.clear()

    # ---- Analysis

    def undefined_symbols(self) -> list[tuple[str, Production]]:
        """Find all nonterminals used in the grammar, but never defined by a rule.

        Returns
        -------
        result: list[tuple[str, Production]]
            A list of tuples (sym, prod) where sym is the symbol and prod is the production where the symbol was used.
        """

        result: list[tuple[str, Production]] = []
        for p in self.productions[1:]:
            assert p is not None
            result.extend((s, p) for s in p.prod if self.config.is_nonterminal(s) and s not in self.prodnames)
        return result

    def find_unreachable(self) -> list[str]:
        """Find all of the nonterminal symbols that can't be reached from the starting symbol."""

        if self.start is None:
            return []

        reachable: set[str] = set()
        pending = [self.start]
        while pending:
            s = pending.pop()
            if s in reachable:
                continue
            reachable.add(s)
            for p in self.prodnames.get(s, []):
                pending.extend(sym for sym in p.prod if self.config.is_nonterminal(sym))

        return [s for s in self.prodnames if s not in reachable]

    def first_of(self, beta: Sequence[str]) -> list[str]:
        """Compute the value of FIRST1(beta) where beta is a sequence of symbols.

        Extended Summary
        ----------------
        The empty symbol in the result means beta can derive the empty string. During `compute_first()` the result
        may be incomplete; afterwards it is complete.
        """

        empty = self.config.empty_symbol
        result: list[str] = []
        for x in beta:
            x_produces_empty = False
            for f in self.first[x]:
                if f == empty:
                    x_produces_empty = True
                elif f not in result:
                    result.append(f)
            if not x_produces_empty:
                break
        else:
            # Every symbol of beta (possibly none) derives empty.
            result.append(empty)

        return result

    def compute_first(self) -> dict[str, list[str]]:
        """Compute the value of FIRST1(X) for all symbols."""

        if self.first:
            return self.first

        end = self.config.end_marker
        self.first.update({t: [t] for t in self.terminals})
        self.first[end] = [end]
        self.first.update({n: [] for n in self.prodnames})

        # Propagate symbols until no change.
        while True:
            some_change = False
            for n, prods in self.prodnames.items():
                for p in prods:
                    for f in self.first_of(p.prod):
                        if f not in self.first[n]:
                            self.first[n].append(f)
                            some_change = True
            if not some_change:
                break

        return self.first

    def compute_follow(self) -> dict[str, list[str]]:
        """Compute the follow sets of every nonterminal.

        Notes
        -----
        The follow set is the set of all terminals that might follow a given nonterminal. The end marker follows
        the start symbol. See the Dragon book, 2nd Ed. p. 189.
        """

        if self.follow:
            return self.follow

        if not self.first:
            self.compute_first()

        empty = self.config.empty_symbol
        for k in self.prodnames:
            self.follow[k] = []

        if self.start is not None:
            self.follow[self.start] = [self.config.end_marker]

        while True:
            didadd = False
            for p in self.productions[1:]:
                assert p is not None
                for i, b in enumerate(p.prod):
                    if b not in self.prodnames:
                        continue
                    fst = self.first_of(p.prod[i + 1 :])
                    for f in fst:
                        if f != empty and f not in self.follow[b]:
                            self.follow[b].append(f)
                            didadd = True
                    if empty in fst:
                        # Whatever follows the rule also follows b.
                        for f in self.follow[p.name]:
                            if f not in self.follow[b]:
                                self.follow[b].append(f)
                                didadd = True
            if not didadd:
                break

        return self.follow

    @override
    def __str__(self) -> str:
        """Return str(self).

        Extended Summary
        ----------------
        Serves as debugging output: numbered rules followed by terminal and nonterminal usage.
        """

        out: list[str] = ["Grammar:\n"]
        out.extend(f"Rule {n:5d} {p}" for n, p in enumerate(self.productions) if p is not None)

        out.append("\nTerminals, with rules where they appear:\n")
        out.extend(f'{term} : {" ".join(str(s) for s in self.terminals[term])}' for term in sorted(self.terminals))

        out.append("\nNonterminals, with rules where they appear:\n")
        out.extend(
            f'{nonterm} : {" ".join(str(s) for s in self.nonterminals[nonterm])}'
            for nonterm in sorted(self.nonterminals)
        )

        out.append("")
        return "\n".join(out)


# endregion
