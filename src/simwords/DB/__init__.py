from .api import WordSequence, WordStore
from .index import WordIndex, build_index, open_index
from .memory_store import MemoryWordIndex

__all__ = ["WordIndex", "WordSequence", "WordStore", "MemoryWordIndex", "build_index", "open_index"]
