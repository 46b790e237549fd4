from dataclasses import dataclass, field


@dataclass
class JobMetrics:
    """Track scraping metrics for each job."""
    name: str
    events_today: int = 0
    errors: int = 0
    error_messages: list = field(default_factory=list)
    duration_ms: float = 0.0
