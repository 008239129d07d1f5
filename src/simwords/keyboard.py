from __future__ import annotations
import logging
import math
from typing import Dict, Optional, Protocol, Sequence, Tuple

from .errors import UnknownKeyError

log = logging.getLogger(__name__)


class KeyboardDistance(Protocol):
    """Anything that can tell how far apart two keys are."""
    name: str

    def distance(self, a: str, b: str) -> float: ...


# (keys, horizontal offset of the row in key widths)
KeyRow = Tuple[str, float]

# German ISO QWERTZ, number row to bottom row
QWERTZ_ROWS: Sequence[KeyRow] = (
    ("1234567890ß", 0.0),
    ("qwertzuiopü+", 0.5),
    ("asdfghjklöä#", 0.75),
    ("<yxcvbnm,.-", 0.25),
)

# US ANSI QWERTY
QWERTY_ROWS: Sequence[KeyRow] = (
    ("1234567890-=", 0.0),
    ("qwertyuiop[]", 0.5),
    ("asdfghjkl;'", 0.75),
    ("zxcvbnm,./", 1.25),
)


class RowLayoutDistance:
    """
    Euclidean distance between key centres of a row-staggered keyboard,
    measured in key widths. Letters are looked up lower-cased: 'M' and 'm'
    are the same physical key.
    """

    def __init__(self, rows: Sequence[KeyRow], *, name: str = "custom",
                 unknown_distance: Optional[float] = None) -> None:
        self.name = name
        self.unknown_distance = unknown_distance
        self._pos: Dict[str, Tuple[float, float]] = {}
        for row_no, (keys, offset) in enumerate(rows):
            for col, key in enumerate(keys):
                if key in self._pos:
                    raise ValueError(f"duplicate key {key!r} in layout {name!r}")
                self._pos[key] = (offset + col, float(row_no))

    def position(self, ch: str) -> Tuple[float, float]:
        pos = self._pos.get(ch)
        if pos is None:
            pos = self._pos.get(ch.lower())
        if pos is None:
            raise UnknownKeyError(f"no key for {ch!r} on the {self.name} layout")
        return pos

    def distance(self, a: str, b: str) -> float:
        if a == b or a.lower() == b.lower():
            return 0.0
        try:
            (x1, y1), (x2, y2) = self.position(a), self.position(b)
        except UnknownKeyError:
            if self.unknown_distance is None:
                raise
            log.debug("unknown key in (%r, %r); using %s", a, b, self.unknown_distance)
            return float(self.unknown_distance)
        return math.hypot(x1 - x2, y1 - y2)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, keys={len(self._pos)})"


class GermanQwertzKeyboardDistance(RowLayoutDistance):
    def __init__(self, *, unknown_distance: Optional[float] = None) -> None:
        super().__init__(QWERTZ_ROWS, name="qwertz", unknown_distance=unknown_distance)


class QwertyKeyboardDistance(RowLayoutDistance):
    def __init__(self, *, unknown_distance: Optional[float] = None) -> None:
        super().__init__(QWERTY_ROWS, name="qwerty", unknown_distance=unknown_distance)


LAYOUTS = {
    "qwertz": GermanQwertzKeyboardDistance,
    "qwerty": QwertyKeyboardDistance,
}


def get_layout(name: str, *, unknown_distance: Optional[float] = None) -> RowLayoutDistance:
    try:
        cls = LAYOUTS[name.lower()]
    except KeyError:
        raise ValueError(f"Unsupported keyboard layout: {name}") from None
    return cls(unknown_distance=unknown_distance)
