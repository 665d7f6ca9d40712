"""SpendSight command-line interface."""
