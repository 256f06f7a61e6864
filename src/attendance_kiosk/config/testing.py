import os

SECRET_KEY = "test-secret"

DB_PATH = os.getenv("DB_PATH", "instance/test_attendance.db")

RECOGNITION_API_KEY = None
RECOGNITION_MODEL = "gemini-2.5-flash"
RECOGNITION_ENROLL_MODEL = "gemini-2.5-pro"
RECOGNITION_TIMEOUT = 5.0

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

LATE_HOUR = 9
SCAN_COOLDOWN_SECONDS = 8
LIVENESS_SAMPLES = 5
LIVENESS_MIN_CONFIDENCE = 0.7
DEVICE_ID = "TEST_GATE"

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = True
