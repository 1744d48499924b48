"""Central MLflow configuration for consistent experiment tracking."""
import os

# ─── MLflow configuration ──────────────────────────────────────────────────
# Point MLFLOW_TRACKING_URI at a server (http://...) or a file store (file:...).
# Defaults to a file store under the working directory.
TRACKING_URI = os.getenv("MLFLOW_TRACKING_URI", "file:./mlruns")
EXPERIMENT_NAME = os.getenv("MLFLOW_EXPERIMENT_NAME", "nfl_play_type")

# ─── Run naming ────────────────────────────────────────────────────────────
PIPELINE_RUN_NAME = "play_type_pipeline"
