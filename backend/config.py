# config.py
import os

# --- Cloud Functions runtime ---
# Set by the (legacy) Cloud Functions runtime; all three are needed to reach Cloud Logging.
GCP_PROJECT = os.environ.get("GCP_PROJECT")
FUNCTION_NAME = os.environ.get("FUNCTION_NAME")
FUNCTION_REGION = os.environ.get("FUNCTION_REGION")

# --- Cloud Logging ---
LOG_NAME = "cloudfunctions.googleapis.com/cloud-functions"
RESOURCE_TYPE = "cloud_function"

# Buffered entries are sent once either limit is reached (or on flush)
LOG_BATCH_SIZE = 10
LOG_MAX_LATENCY = 5.0  # seconds

# Header the runtime adds to every HTTP invocation
EXECUTION_ID_HEADER = "Function-Execution-Id"
EXECUTION_ID_LABEL = "execution_id"

# --- Backend Settings ---
FLASK_PORT = 8080
