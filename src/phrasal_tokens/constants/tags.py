"""Penn Treebank part-of-speech tag constants."""

# Any tag starting with this prefix is a verb (VB, VBD, VBG, VBN, VBP, VBZ)
POS_VERB_PREFIX = "VB"

# Particle ("up" in "look it up")
POS_PARTICLE = "RP"

# Preposition or subordinating conjunction
POS_PREPOSITION = "IN"

# Penn tag prefixes to WordNet POS tags
PENN_TO_WORDNET_POS: dict[str, str] = {
    "VB": "v",
    "NN": "n",
    "JJ": "a",
    "RB": "r",
    "RP": "r",
}
