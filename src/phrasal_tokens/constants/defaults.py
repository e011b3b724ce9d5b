"""Default values for functions and processing."""

# Language code
LANGUAGE_EN = "en"

# File encoding
ENCODING_UTF8 = "utf-8"

# Separator used when joining token fields into a compound
JOIN_SEPARATOR = " "

# Grouping option defaults
WITH_DEFINITIONS_DEFAULT = True
SKIP_DEFINITION_POINTERS_DEFAULT = True
WITH_OFFSET_DEFAULT = True
WITH_FREQUENCY_DEFAULT = True

# Only lemmas occurring more than this many times get a frequency field
FREQUENCY_MIN_COUNT = 2

# spaCy text limits
SPACY_MAX_LENGTH = 2_500_000

# Logging
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
