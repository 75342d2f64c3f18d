"""gitreview - Interactive branch review.

Turn the difference between two branches into uncommitted changes on a
disposable review branch, keep what you want, and replace the source branch
with the reviewed result.
"""

__version__ = "1.0.0"

from gitreview.engine import ReviewEngine, create_engine
from gitreview.models import ReviewOptions, ReviewSession

__all__ = [
    "__version__",
    "ReviewEngine",
    "create_engine",
    "ReviewOptions",
    "ReviewSession",
]
