"""Default values for scoring, classification and projection."""

# File encoding
ENCODING_UTF8 = "utf-8"

# Tokenization
LEMMA_STRIP_CHARS = '.,!?;:«»"()'
POS_UNKNOWN = "unknown"

# Mastery composite (explicit evidence weighs more than passive exposure)
IMPLICIT_WEIGHT = 0.4
EXPLICIT_WEIGHT = 0.6
SCORE_MIN = 0.0
SCORE_MAX = 1.0

# relative_difficulty = 1 / ln(count + DIFFICULTY_LOG_OFFSET)
DIFFICULTY_LOG_OFFSET = 1.1

# Interaction weights
IMPLICIT_READ_WEIGHT = 0.05
LOOKUP_WEIGHT = -0.1
DECK_REVIEW_WEIGHT = 0.5
DECK_REVIEW_OCCURRENCE_ID = "deck-review"

# Lexicon items keep at most this many context sentences
MAX_CACHED_OCCURRENCES = 3

# Frequency bands (cumulative rank share)
CORE_BAND_SHARE = 0.15
ESSENTIAL_BAND_SHARE = 0.60

# Study sessions
STUDY_QUEUE_LIMIT = 10

# Landscape zones (freq_rank cut points, visualization only)
ZONE_SLOPES_START = 0.25
ZONE_CANYONS_START = 0.70

# Landscape opacity and classes
MASTERED_SCORE_THRESHOLD = 0.7
OPACITY_DISCOVERED = 0.9
OPACITY_CONTENT_HIDDEN = 0.15
OPACITY_REALITY_HIDDEN = 0.05
OPACITY_MEMORY_FLOOR = 0.1
POINT_SIZE_LOG_OFFSET = 1.2
POINT_SIZE_SCALE = 2.5
POINT_SIZE_BASE = 1.5

# Reading emphasis tiers (mastery score upper bounds)
EMPHASIS_HIGHLIGHT_BELOW = 0.3
EMPHASIS_NORMAL_BELOW = 0.7

# Definition fetch
DEFINITION_TIMEOUT_SECONDS = 20.0
DEFINITION_UNAVAILABLE = "Definition unavailable."
