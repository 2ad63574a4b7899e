# Standard Library
import os

# App Runner
DEFAULT_HEALTH_CHECK_PATH = os.getenv("DEFAULT_HEALTH_CHECK_PATH", "/health")
DEFAULT_CONTAINER_PORT = int(os.getenv("DEFAULT_CONTAINER_PORT", "8080"))

# S3 bucket metrics
DEFAULT_BUCKET_METRICS_ID = os.getenv(
    "DEFAULT_BUCKET_METRICS_ID", "EntireBucket"
)
