import os

MAX_UPLOAD_BYTES = int(os.getenv("PAIRWORK_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("PAIRWORK_CORS_ORIGINS", "http://localhost:4200").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("PAIRWORK_LOG_LEVEL", "INFO").upper()
