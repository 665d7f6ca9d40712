"""SpendSight HTTP API."""
