# DB/storage.py
from __future__ import annotations
import json
import logging
import os
import shutil
import tempfile
from typing import Any, Dict

from .. import config as CFG
from ..errors import IndexReadError, IOFailure, NotFoundError

log = logging.getLogger(__name__)


def make_staging_dir(destination: str) -> str:
    """Create an empty sibling directory to build into before publishing."""
    dest = os.path.abspath(destination)
    parent = os.path.dirname(dest) or "."
    try:
        os.makedirs(parent, exist_ok=True)
        return tempfile.mkdtemp(prefix=f".{os.path.basename(dest)}.", suffix=".tmp", dir=parent)
    except OSError as exc:
        raise IOFailure(f"Cannot create index directory next to {dest}: {exc}") from exc


def remove_existing(destination: str) -> None:
    """Delete whatever is at destination (file or directory); no-op when absent."""
    if os.path.isdir(destination) and not os.path.islink(destination):
        shutil.rmtree(destination)
    elif os.path.lexists(destination):
        os.remove(destination)


def publish(staging: str, destination: str) -> None:
    """
    Replace destination with the fully written staging directory.
    The old index is removed right before the rename; a crash in between
    leaves no index rather than a half-written one.
    """
    try:
        remove_existing(destination)
        os.replace(staging, destination)
    except OSError as exc:
        raise IOFailure(f"Cannot publish index to {destination}: {exc}") from exc
    log.info("Published index to %s", destination)


def discard(staging: str) -> None:
    shutil.rmtree(staging, ignore_errors=True)


def write_meta(directory: str, *, words: int, gram: int) -> None:
    meta = {
        "format": CFG.FORMAT_NAME,
        "version": CFG.FORMAT_VERSION,
        "gram": gram,
        "words": words,
    }
    tmp = os.path.join(directory, f"{CFG.META_FILE}.tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)
    os.replace(tmp, os.path.join(directory, CFG.META_FILE))


def read_meta(directory: str) -> Dict[str, Any]:
    if not os.path.isdir(directory):
        raise NotFoundError(f"No index at {directory}")
    path = os.path.join(directory, CFG.META_FILE)
    try:
        with open(path, "r", encoding="utf-8") as f:
            meta = json.load(f)
    except FileNotFoundError:
        raise NotFoundError(f"No index at {directory} (missing {CFG.META_FILE})") from None
    except (OSError, ValueError) as exc:
        raise IndexReadError(f"Unreadable index metadata in {directory}: {exc}") from exc

    if not isinstance(meta, dict) or meta.get("format") != CFG.FORMAT_NAME:
        raise IndexReadError(f"{directory} does not hold a {CFG.FORMAT_NAME}")
    if meta.get("version") != CFG.FORMAT_VERSION:
        raise IndexReadError(
            f"Incompatible index version {meta.get('version')!r} in {directory} "
            f"(expected {CFG.FORMAT_VERSION}); rebuild the index"
        )
    if not isinstance(meta.get("gram"), int) or not isinstance(meta.get("words"), int):
        raise IndexReadError(f"Malformed index metadata in {directory}")
    return meta
