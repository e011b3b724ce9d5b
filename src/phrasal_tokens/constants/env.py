"""Environment variable names read by load_options_from_env."""

ENV_WITH_DEFINITIONS = "PHRASAL_WITH_DEFINITIONS"
ENV_SKIP_DEFINITION_POINTERS = "PHRASAL_SKIP_DEFINITION_POINTERS"
ENV_WITH_OFFSET = "PHRASAL_WITH_OFFSET"
ENV_WITH_FREQUENCY = "PHRASAL_WITH_FREQUENCY"
ENV_WORDS_RANK_TOP_N = "PHRASAL_WORDS_RANK_TOP_N"

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})
