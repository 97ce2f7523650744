"""proVision FC AI answer service."""
