"""Monitoring configuration for the scheduler."""
from prometheus_client import Counter, Histogram, start_http_server

# Practice metrics
answers_recorded = Counter(
    "sightwords_answers_total",
    "Total number of answers recorded",
    ["result"],
)

words_mastered = Counter(
    "sightwords_words_mastered_total",
    "Total number of words that reached mastery",
)

sessions_started = Counter(
    "sightwords_sessions_started_total",
    "Total number of practice sessions started",
)

sessions_completed = Counter(
    "sightwords_sessions_completed_total",
    "Total number of practice sessions completed",
    ["reason"],
)

session_duration = Histogram(
    "sightwords_session_duration_seconds",
    "Duration of practice sessions in seconds",
    buckets=[60, 180, 300, 600, 900],  # 1min, 3min, 5min, 10min, 15min
)

# Storage metrics
state_load_fallbacks = Counter(
    "sightwords_state_load_fallbacks_total",
    "Number of times persisted progress was unusable and fresh state was used",
    ["reason"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
