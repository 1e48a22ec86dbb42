"""Invoice automation ROI simulator."""
