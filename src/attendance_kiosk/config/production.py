import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_PATH = os.getenv("DB_PATH", "instance/attendance.db")

RECOGNITION_API_KEY = os.getenv("RECOGNITION_API_KEY") or os.getenv("GEMINI_API_KEY")
RECOGNITION_MODEL = os.getenv("RECOGNITION_MODEL", "gemini-2.5-flash")
RECOGNITION_ENROLL_MODEL = os.getenv("RECOGNITION_ENROLL_MODEL", "gemini-2.5-pro")
RECOGNITION_TIMEOUT = float(os.getenv("RECOGNITION_TIMEOUT", "30"))

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

LATE_HOUR = int(os.getenv("LATE_HOUR", "9"))
SCAN_COOLDOWN_SECONDS = int(os.getenv("SCAN_COOLDOWN_SECONDS", "8"))
LIVENESS_SAMPLES = int(os.getenv("LIVENESS_SAMPLES", "5"))
LIVENESS_MIN_CONFIDENCE = float(os.getenv("LIVENESS_MIN_CONFIDENCE", "0.7"))
DEVICE_ID = os.getenv("DEVICE_ID", "CAMPUS_GATE_01")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
