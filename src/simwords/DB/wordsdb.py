from __future__ import annotations
import mmap
import os
import struct
from typing import Iterable

from ..errors import IndexReadError

# File format:
#   0..3   : b"WDB1"
#   4..7   : M (uint32) = number of records
#   Table  : M entries of off:uint64, in record id order (id = position)
#   Records region at variable offsets:
#       word_len:u32 | word:utf8

_MAGIC = b"WDB1"
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_HEADER = len(_MAGIC) + _U32.size


class WordsDB:
    """Flat-file word store; loads only header/table on open; O(1) random access."""

    def __init__(self, db_path: str):
        self.db_path = os.path.abspath(db_path)
        self._fd = open(self.db_path, "rb")
        try:
            if os.fstat(self._fd.fileno()).st_size < _HEADER:
                raise IndexReadError(f"Truncated word file: {self.db_path}")
            self._mm = mmap.mmap(self._fd.fileno(), length=0, access=mmap.ACCESS_READ)
        except BaseException:
            self._fd.close()
            raise
        self._offs: list[int] = []
        try:
            self._parse_header()
        except BaseException:
            self.close()
            raise

    @classmethod
    def build_from_words(cls, words: Iterable[str], db_path: str) -> int:
        """Write every word in order (duplicates included); return the record count."""
        db_path = os.path.abspath(db_path)
        items = list(words)
        M = len(items)

        tmp = f"{db_path}.tmp"
        with open(tmp, "wb") as f:
            f.write(_MAGIC)
            f.write(_U32.pack(M))
            # Placeholder table (M * off:u64)
            table_pos = f.tell()
            f.write(b"\x00" * (M * _U64.size))

            offsets: list[int] = []
            for word in items:
                offsets.append(f.tell())
                _write_record(f, word)

            f.seek(table_pos)
            for off in offsets:
                f.write(_U64.pack(off))
        os.replace(tmp, db_path)
        return M

    def count(self) -> int:
        return len(self._offs)

    def get_word(self, wid: int) -> str:
        wid = int(wid)
        if not 0 <= wid < len(self._offs):
            raise IndexReadError(f"Word id {wid} out of range in {self.db_path}")
        return _read_record(self._mm, self._offs[wid])

    def close(self) -> None:
        try:
            mm = getattr(self, "_mm", None)
            if mm is not None:
                mm.close()
        finally:
            self._fd.close()

    # ---- internals ----
    def _parse_header(self) -> None:
        mm = self._mm
        if mm.read(4) != _MAGIC:
            raise IndexReadError(f"Invalid word file: {self.db_path}")
        try:
            M = _U32.unpack(mm.read(4))[0]
            table = mm.read(M * _U64.size)
            offs = [o for (o,) in _U64.iter_unpack(table)] if table else []
        except struct.error as exc:
            raise IndexReadError(f"Truncated word file: {self.db_path}") from exc
        if len(offs) != M:
            raise IndexReadError(f"Truncated word file: {self.db_path}")
        size = len(mm)
        for off in offs:
            if off + _U32.size > size:
                raise IndexReadError(f"Corrupt record table in {self.db_path}")
        self._offs = offs


def _write_record(f, word: str) -> None:
    b = word.encode("utf-8")
    f.write(_U32.pack(len(b)))
    f.write(b)


def _read_record(mm: mmap.mmap, off: int) -> str:
    try:
        ln = _U32.unpack_from(mm, off)[0]
        start = off + _U32.size
        b = mm[start:start+ln]
        if len(b) != ln:
            raise IndexReadError("Truncated word record")
        return b.decode("utf-8")
    except (struct.error, UnicodeDecodeError) as exc:
        raise IndexReadError(f"Corrupt word record at offset {off}") from exc

