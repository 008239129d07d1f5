from __future__ import annotations
import bisect
import io
import mmap
import os
import struct
from typing import Iterable, List, Tuple

from ..errors import IndexReadError

_MAGIC = b"ACX1"
_U32 = struct.Struct("<I")  # little-endian uint32


class ACXWriter:
    """
    Write a memory-mappable postings file (key -> ascending word ids).
    Layout:
      0..3   : 'ACX1'
      4..7   : K (uint32) gram size the keys were produced with (0 = not grams)
      8..11  : N (uint32) number of keys
      Then N entries, sorted by key:
         [len:u1][key:len bytes][off:u32][cnt:u32]
      Then postings region:
         concatenated uint32 word IDs (little-endian)
    """
    def __init__(self, k: int) -> None:
        self.k = k

    def save(self, path: str, items: Iterable[Tuple[str, Iterable[int]]]) -> int:
        keys: List[bytes] = []
        offs: List[int] = []
        cnts: List[int] = []
        postings: List[int] = []

        off = 0
        for key, ids in sorted(items, key=lambda kv: kv[0]):
            kb = key.encode("utf-8")
            if len(kb) > 255:
                raise ValueError("Key too long for ACX (max 255 bytes)")
            id_list = sorted(ids)
            keys.append(kb)
            offs.append(off)
            cnts.append(len(id_list))
            postings.extend(id_list)
            off += len(id_list)

        with open(path, "wb") as f:
            f.write(_MAGIC)
            f.write(_U32.pack(self.k))
            f.write(_U32.pack(len(keys)))
            for kb, off, cnt in zip(keys, offs, cnts):
                f.write(bytes([len(kb)]))
                f.write(kb)
                f.write(_U32.pack(off))
                f.write(_U32.pack(cnt))
            buf = io.BytesIO()
            for wid in postings:
                buf.write(_U32.pack(wid))
            f.write(buf.getvalue())
        return len(keys)


class ACXIndex:
    """
    Read-only memory-mapped postings. get(key) -> ascending list of ids.
    Keeps only keys/metadata in Python; postings are read via mmap slice.
    """
    def __init__(self, path: str):
        self._path = os.path.abspath(path)
        self._fd = open(self._path, "rb")
        self._mm = None
        self.k = 0
        self.keys: List[str] = []
        self._offs: List[int] = []
        self._cnts: List[int] = []
        self._postings_base = 0
        try:
            if os.fstat(self._fd.fileno()).st_size < 12:
                raise IndexReadError(f"Truncated ACX file: {self._path}")
            self._mm = mmap.mmap(self._fd.fileno(), length=0, access=mmap.ACCESS_READ)
            self._parse_header()
        except BaseException:
            self.close()
            raise

    def _parse_header(self) -> None:
        mm = self._mm
        if mm.read(4) != _MAGIC:
            raise IndexReadError(f"Invalid ACX file: {self._path}")
        try:
            self.k = _U32.unpack(mm.read(4))[0]
            n = _U32.unpack(mm.read(4))[0]
            keys: List[str] = []
            offs: List[int] = []
            cnts: List[int] = []
            for _ in range(n):
                ln = mm.read(1)[0]
                kb = mm.read(ln)
                keys.append(kb.decode("utf-8"))
                offs.append(_U32.unpack(mm.read(4))[0])
                cnts.append(_U32.unpack(mm.read(4))[0])
        except (struct.error, IndexError, UnicodeDecodeError) as exc:
            raise IndexReadError(f"Truncated ACX file: {self._path}") from exc
        if any(a >= b for a, b in zip(keys, keys[1:])):
            raise IndexReadError(f"Unsorted ACX keys: {self._path}")
        self.keys = keys
        self._offs = offs
        self._cnts = cnts
        self._postings_base = mm.tell()
        total = sum(cnts)
        if self._postings_base + total * 4 > len(mm):
            raise IndexReadError(f"Truncated ACX postings: {self._path}")

    def get(self, key: str) -> List[int]:
        i = bisect.bisect_left(self.keys, key)
        if i == len(self.keys) or self.keys[i] != key:
            return []
        cnt = self._cnts[i]
        if cnt == 0:
            return []
        start = self._postings_base + self._offs[i] * 4
        return [wid for (wid,) in _U32.iter_unpack(self._mm[start:start + cnt * 4])]

    def __len__(self) -> int:
        return len(self.keys)

    def close(self) -> None:
        try:
            if self._mm is not None:
                self._mm.close()
        finally:
            self._fd.close()
