import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Config:
    # --- Live Calculation ---
    TICK_INTERVAL_MS = int(os.getenv("TICK_INTERVAL_MS", "100"))
    LATEST_VALUE_MAX_AGE_MS = int(os.getenv("LATEST_VALUE_MAX_AGE_MS", "5000"))
    # Ticks slower than this are logged as slow (defaults to one tick interval)
    SLOW_TICK_WARNING_MS = float(os.getenv("SLOW_TICK_WARNING_MS", str(TICK_INTERVAL_MS)))

    # --- Training Load (PMC) ---
    CTL_DAYS = int(os.getenv("CTL_DAYS", "42"))
    ATL_DAYS = int(os.getenv("ATL_DAYS", "7"))
    # Calendar used when bucketing workouts into days
    TIMEZONE = os.getenv("TIMEZONE", "UTC")

    # --- Sensor Noise Filters ---
    MOVING_SPEED_THRESHOLD = float(os.getenv("MOVING_SPEED_THRESHOLD", "0.5"))  # m/s
    ELEVATION_NOISE_THRESHOLD = float(os.getenv("ELEVATION_NOISE_THRESHOLD", "2.0"))  # m
    MIN_SAMPLES_NP = int(os.getenv("MIN_SAMPLES_NP", "30"))
