# region License
# -----------------------------------------------------------------------------
# lrzero: closure.py
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

from collections.abc import Iterable

from .grammar import Grammar
from .items import Item, unique_items

__all__ = ("expand_closure", "goto_transition", "symbols_at_dot")


def expand_closure(items: Iterable[Item], grammar: Grammar) -> tuple[Item, ...]:
    """Compute the LR(0) closure operation on a set of LR(0) items.

    Extended Summary
    ----------------
    Whenever the symbol after an item's dot is a nonterminal N, the items "N -> . alpha" for every alternative of N
    are added. The items are kept in an ordered arena that doubles as the worklist: the loop re-reads its length
    after every item, so newly added items get expanded too. Each nonterminal is expanded at most once per closure,
    which makes the result duplicate-free and guarantees termination. Unlike the "skip N when N is the item's own
    origin" rule, an advanced self-recursive item such as "E -> T + . E" still has E expanded.

    Parameters
    ----------
    items: Iterable[Item]
        The kernel items.
    grammar: Grammar
        The grammar providing the alternatives of each nonterminal.

    Returns
    -------
    tuple[Item, ...]
        The kernel items followed by the added items, in discovery order.
    """

    closure = list(unique_items(items))
    seen = set(closure)
    expanded: set[str] = set()
    log = grammar.config.log

    i = 0
    while i < len(closure):
        sym = closure[i].at_dot
        i += 1
        if sym is None or sym in expanded or not grammar.is_nonterminal(sym):
            continue
        expanded.add(sym)
        for p in grammar.productions_of(sym):
            item = Item.start(p)
            if item not in seen:
                seen.add(item)
                closure.append(item)
                log.debug("closure: add (%s)", item)

    return tuple(closure)


def goto_transition(items: Iterable[Item], symbol: str, grammar: Grammar) -> tuple[Item, ...]:
    """Compute the LR(0) goto function goto(I, X) where I is a set of LR(0) items and X is a grammar symbol.

    Notes
    -----
    Advancing an item produces a new item; the items of I are left untouched. An empty result means there is no
    transition on `symbol`.
    """

    kernel = [item.advance() for item in items if item.at_dot == symbol]
    if not kernel:
        return ()
    return expand_closure(kernel, grammar)


def symbols_at_dot(items: Iterable[Item]) -> list[str]:
    """Collect the distinct symbols appearing right after a dot, in order of first appearance."""

    return list(dict.fromkeys(item.at_dot for item in items if item.at_dot is not None))
