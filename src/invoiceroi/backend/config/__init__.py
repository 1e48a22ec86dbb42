"""Configuration loading for the ROI simulator backend."""
