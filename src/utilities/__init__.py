"""Cross-project utilities (Hydra/MLflow tracking)."""

# Keep __init__ lightweight to avoid circular imports during Hydra callback loading.
