"""telemetry — structured per-run event logging."""
from .logger import RunEventLogger  # noqa: F401
