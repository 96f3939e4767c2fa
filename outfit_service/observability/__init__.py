# Observability module
from outfit_service.observability.logger import log_request, is_logging_enabled
from outfit_service.observability.metrics import (
    record_generation,
    record_feedback,
    record_tokens,
    get_metrics,
    reset_metrics,
    estimate_cost,
)
