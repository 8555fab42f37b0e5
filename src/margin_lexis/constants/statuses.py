"""Enumerations and status values."""

from enum import IntEnum


class Familiarity(IntEnum):
    """Discrete flashcard ladder, independent of the continuous mastery score."""

    UNKNOWN = 0
    SEEN = 1
    FAMILIAR = 2
    MASTERED = 3


# Interaction kinds
KIND_IMPLICIT = "implicit"
KIND_EXPLICIT = "explicit"
INTERACTION_KINDS = (KIND_IMPLICIT, KIND_EXPLICIT)

# Frequency bands
BAND_CORE = "core"
BAND_ESSENTIAL = "essential"
BAND_NICHE = "niche"
BAND_ALL = "all"
BANDS = (BAND_CORE, BAND_ESSENTIAL, BAND_NICHE)

# Study filter statuses
STATUS_NEW = "new"
STATUS_REVIEW = "review"
STATUS_MASTERED = "mastered"
STATUS_ALL = "all"
STUDY_STATUSES = (STATUS_NEW, STATUS_REVIEW, STATUS_MASTERED, STATUS_ALL)

# Landscape views
VIEW_CONTENT = "content"
VIEW_MEMORY = "memory"
VIEW_REALITY = "reality"
VIEWS = (VIEW_CONTENT, VIEW_MEMORY, VIEW_REALITY)

# Landscape zones
ZONE_CORE = "core"
ZONE_SLOPES = "slopes"
ZONE_CANYONS = "canyons"
ZONES = (ZONE_CORE, ZONE_SLOPES, ZONE_CANYONS)

# Reality-view visual classes
CLASS_UNDISCOVERED = "undiscovered"
CLASS_LEARNING = "learning"
CLASS_MASTERED = "mastered"

# Reading emphasis
EMPHASIS_HIGHLIGHT = "highlight"
EMPHASIS_NORMAL = "normal"
EMPHASIS_MUTED = "muted"

# Paragraph types
PARAGRAPH_PROSE = "prose"
PARAGRAPH_DIALOGUE = "dialogue"
