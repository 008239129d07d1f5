# Retrieval (pre-filter) tuning
MAX_EDIT_DISTANCE: int = 2     # weighted edit budget for candidate retrieval
RESULT_LIMIT: int = 10         # candidates returned per query
SUBSTITUTION_COST: int = 1
INDEL_COST: int = 2            # a missing/extra char costs twice a substitution

# q-gram size for the inverted index (words are padded with boundary markers)
GRAM: int = 2
PAD_START: str = "\x02"
PAD_END: str = "\x03"

# Typo scoring
MAX_TYPO_DISTANCE: int = 1     # plain Levenshtein limit for emitted pairs
REJECT_PREFIX_EXTENSIONS: bool = True
SORT_BY_DISTANCE: bool = False

# Keyboard model: "qwertz" or "qwerty"
DEFAULT_LAYOUT: str = "qwertz"
UNKNOWN_KEY_DISTANCE: float | None = None   # None -> raise on unknown chars

# On-disk index layout
FORMAT_NAME: str = "simwords-index"
FORMAT_VERSION: int = 1
META_FILE: str = "meta.json"
WORDS_FILE: str = "words.wdb"
GRAMS_FILE: str = "grams.acx"
LENGTHS_FILE: str = "lengths.acx"

# Progress logging
PROGRESS_EVERY_WORDS: int = 100_000
