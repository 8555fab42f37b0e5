"""Project-wide constants: column names, defaults, statuses, LLM config, paths."""

from .columns import *  # noqa: F401,F403
from .defaults import *  # noqa: F401,F403
from .paths import *  # noqa: F401,F403
from .statuses import *  # noqa: F401,F403
