# region License
# -----------------------------------------------------------------------------
# lrzero: lex.py
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

import re
from collections.abc import Collection, Generator
from typing import Any, Optional

from ._misc import MISSING, override
from .config import GrammarConfig

__all__ = ("ScanError", "Token", "Scanner")


# ============================================================================
# region -------- Exceptions --------
# ============================================================================


class ScanError(Exception):
    """Exception raised if a character outside of the terminal alphabet is encountered.

    Parameters
    ----------
    message: str
        The message to put in the exception.
    text: str
        All remaining unscanned text.
    error_index: int
        The index location of the error.
    """

    def __init__(self, message: str, text: str, error_index: int) -> None:
        super().__init__(message)
        self.text = text
        self.error_index = error_index


# endregion


# ============================================================================
# region -------- Token Structures --------
# ============================================================================


class Token:
    """Representation of a single token.

    Attributes
    ----------
    type: str
        The terminal symbol the parser sees, e.g. "n" for the lexeme "42".
    value: str
        The matched text.
    lineno: int
        Line number the token starts on.
    index: int
        Offset of the token in the scanned text.
    end: int
        Offset one past the token. May not exist.
    """

    __slots__ = ("type", "value", "lineno", "index", "end")

    def __init__(self, *, lineno: int, index: int) -> None:
        self.lineno = lineno
        self.index = index

    @override
    def __repr__(self) -> str:
        return (
            f"Token(type={self.type!r}, value={self.value!r}, lineno={self.lineno}, index={self.index}, "
            f'end={getattr(self, "end", -1)})'
        )

    def update(self, *, type: str, value: Any, end: int = MISSING) -> None:  # noqa: A002
        self.type = type
        self.value = value

        # end doesn't always get initialized.
        if end is not MISSING:
            self.end = end


# endregion


# ============================================================================
# region -------- Scanner --------
# ============================================================================


class Scanner:
    """Break expression text into terminal tokens of a grammar.

    Extended Summary
    ----------------
    Every terminal of the grammar matches itself literally, except that any lexeme fully matching the configured
    number pattern becomes the number terminal when the alphabet has one and the lexeme is not a terminal itself.
    Ignored characters are skipped; newlines advance the line number.
    Only symbols from `terminals` are ever emitted.

    Parameters
    ----------
    terminals: Collection[str]
        The terminal alphabet, usually `grammar.terminals`.
    config: GrammarConfig, optional
        Symbol conventions. Defaults to `GrammarConfig()`.
    """

    def __init__(self, terminals: Collection[str], config: Optional[GrammarConfig] = None) -> None:
        self.config = config or GrammarConfig()
        self.terminals = frozenset(terminals)

        parts: list[str] = []
        if self.config.number_symbol in self.terminals:
            parts.append(f"(?P<NUMBER>{self.config.number_pattern})")

        # Longest literals first so that multi-character terminals win.
        literals = sorted(self.terminals, key=len, reverse=True)
        if literals:
            parts.append("(?P<LITERAL>" + "|".join(re.escape(lit) for lit in literals) + ")")

        self._master_re: Optional[re.Pattern[str]] = re.compile("|".join(parts)) if parts else None

    def tokenize(self, text: str, lineno: int = 1, index: int = 0) -> Generator[Token]:
        """Tokenize the given text."""

        ignore = self.config.ignore
        master_re = self._master_re
        number_symbol = self.config.number_symbol

        while index < len(text):
            ch = text[index]
            if ch in ignore:
                if ch == "\n":
                    lineno += 1
                index += 1
                continue

            tok = Token(lineno=lineno, index=index)
            m = master_re.match(text, index) if master_re else None
            if not m:
                msg = f"Illegal character {ch!r} at index {index}."
                raise ScanError(msg, text[index:], index)

            value = m.group()
            index = m.end()
            is_number = m.lastgroup == "NUMBER" and value not in self.terminals
            tok.update(type=number_symbol if is_number else value, value=value, end=index)
            yield tok


# endregion
