"""Backend services for the invoice ROI simulator."""
