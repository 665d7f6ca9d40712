"""SpendSight - recurring payment, anomaly and budget analytics."""
