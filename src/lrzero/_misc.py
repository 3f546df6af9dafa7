"""Typing shims and internal sentinels."""

import sys
from typing import TYPE_CHECKING, Any, Final

__all__ = ("MISSING", "TypeAlias", "override")


if sys.version_info >= (3, 12):  # pragma: >=3.12 cover
    from typing import override
elif TYPE_CHECKING:
    from typing_extensions import override
else:  # pragma: <3.12 cover

    def override(arg: object) -> Any:
        try:
            arg.__override__ = True
        except AttributeError:  # pragma: no cover
            pass
        return arg


if sys.version_info >= (3, 10):  # pragma: >=3.10 cover
    from typing import TypeAlias
elif TYPE_CHECKING:
    from typing_extensions import TypeAlias
else:  # pragma: <3.10 cover
    TypeAlias = Any


class _Missing:
    __slots__ = ()

    @override
    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING: Final[Any] = _Missing()
"""Internal sentinel for "no value given"."""
