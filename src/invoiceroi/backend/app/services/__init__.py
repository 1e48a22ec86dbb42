"""Domain services: ROI calculation, scenario storage, and report export."""
