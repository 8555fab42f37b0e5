"""DataFrame column name constants."""

# Token columns
DOCUMENT = "document"
SENTENCE_ID = "sentence_id"
OCCURRENCE_ID = "occurrence_id"
SURFACE = "surface"
LEMMA = "lemma"
POS = "pos"

# Lexicon columns
COUNT = "count"
TOTAL_OCCURRENCES = "total_occurrences"
RELATIVE_DIFFICULTY = "relative_difficulty"
FIRST_DISCOVERY_PROGRESS = "first_discovery_progress"
IMPLICIT_SCORE = "implicit_score"
EXPLICIT_SCORE = "explicit_score"
MASTERY_SCORE = "mastery_score"
FAMILIARITY = "familiarity"
REVIEW_COUNT = "review_count"
DEFINITION = "definition"
BAND = "band"

# Landscape columns
X = "x"
Y = "y"
OPACITY = "opacity"
VISUAL_CLASS = "visual_class"
FREQ_RANK = "freq_rank"
DISCOVERY_RANK = "discovery_rank"
IS_DISCOVERED = "is_discovered"
ZONE = "zone"

# Column groups (for DataFrame creation)
TOKEN_COLUMNS = [DOCUMENT, SENTENCE_ID, OCCURRENCE_ID, SURFACE, LEMMA, POS]

LEXICON_COLUMNS = [
    LEMMA,
    COUNT,
    TOTAL_OCCURRENCES,
    RELATIVE_DIFFICULTY,
    FIRST_DISCOVERY_PROGRESS,
    IMPLICIT_SCORE,
    EXPLICIT_SCORE,
    MASTERY_SCORE,
    FAMILIARITY,
    REVIEW_COUNT,
    DEFINITION,
]

BANDED_LEXICON_COLUMNS = LEXICON_COLUMNS + [BAND]

PLOT_COLUMNS = [
    LEMMA,
    X,
    Y,
    OPACITY,
    VISUAL_CLASS,
    FREQ_RANK,
    DISCOVERY_RANK,
    IS_DISCOVERED,
    ZONE,
]
