# common/paths.py
from pathlib import Path

UPLOAD_DIR   = Path("uploads")
DOWNLOAD_DIR = Path("downloads")

# Límite en memoria por parte del multipart (32 MB)
MAX_FORM_MEMORY = 32 << 20

HOST      = "0.0.0.0"
PORT      = 8080
LOG_LEVEL = "INFO"
