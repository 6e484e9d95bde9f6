"""engine — run orchestration, navigation retry, cancellation and pooling."""
from .errors import (  # noqa: F401
    ExtractionError,
    InputShapeError,
    NavigationExhaustedError,
    RunCancelledError,
    ScraperError,
    ScraperSignal,
)
from .cancel import CancelToken, settle  # noqa: F401
from .navigation import open_with_retry  # noqa: F401
from .failure_bundle import BundleVerbosity, FailureBundle, capture_failure_bundle, save_failure_bundle  # noqa: F401
from .orchestrator import RunState, ScrapeSession, scrape  # noqa: F401
from .pool import RunOutcome, ScrapePool  # noqa: F401
