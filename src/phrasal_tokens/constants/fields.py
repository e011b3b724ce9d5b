"""Token field names and DataFrame column name constants."""

# Token wire keys (JSON hand-off format between pipeline stages)
VALUE = "value"
NORMAL = "normal"
LEMMA = "lemma"
POS = "pos"
TAG = "tag"
CONTEXT_ID = "contextId"
START_OFFSET = "startOffset"
END_OFFSET = "endOffset"
TOKENS = "tokens"
FREQUENCY = "frequency"
DEFINITION = "definition"
RANK = "rank"

# Tag marker of a compound token
TAG_WORD = "word"

# DataFrame columns
CONTEXT_ID_COLUMN = "context_id"
START_OFFSET_COLUMN = "start_offset"
END_OFFSET_COLUMN = "end_offset"
IS_COMPOUND = "is_compound"
CONSTITUENT_COUNT = "constituent_count"

# Statistics columns
PHRASAL = "phrasal"
BOOK_FREQ = "book_freq"
SCORE = "score"
ITEM_TYPE = "item_type"
ITEM_TYPE_PHRASAL_VERB = "phrasal_verb"

# Glossary CSV columns
PHRASE = "phrase"

# Column groups
TOKEN_COLUMNS = [
    VALUE,
    NORMAL,
    LEMMA,
    POS,
    CONTEXT_ID_COLUMN,
    START_OFFSET_COLUMN,
    END_OFFSET_COLUMN,
    IS_COMPOUND,
    CONSTITUENT_COUNT,
    FREQUENCY,
    DEFINITION,
    RANK,
]
PHRASAL_STATS_COLUMNS = [PHRASAL, BOOK_FREQ, ITEM_TYPE]
