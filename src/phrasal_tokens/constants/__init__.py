"""Project-wide constants."""

from .defaults import *  # noqa: F401,F403
from .env import *  # noqa: F401,F403
from .fields import *  # noqa: F401,F403
from .spacy_config import *  # noqa: F401,F403
from .tags import *  # noqa: F401,F403
