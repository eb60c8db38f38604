# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Paths default to a gitignored local directory, so nothing needs to be set for a first run.
"""

ENV_VARS = {
    # App / logging
    "TIME_TRACER_APP_NAME": "App display name (default: time-tracer).",
    "TIME_TRACER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TIME_TRACER_DATA_DIR": "Local data directory, also holds time_tracer.log (default: .local/time_tracer).",
    "TIME_TRACER_SAVE_FILE_PATH": "Append-only record of ended tasks (default: <data_dir>/time_tracer_save).",
    "TIME_TRACER_CACHE_FILE_PATH": "Next-id counter kept across restarts (default: <data_dir>/time_tracer_cache).",
    # Switches
    "TIME_TRACER_PERSIST_RECORDS": "Write ended tasks to the save file (true/false, default: true).",
    "TIME_TRACER_PERSIST_IDS": "Keep ids unique across restarts via the cache file (true/false, default: true).",
}
