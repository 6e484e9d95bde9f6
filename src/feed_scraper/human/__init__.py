"""human — simulated user interaction that reveals lazily-loaded content."""
from .reveal import reveal_content  # noqa: F401
