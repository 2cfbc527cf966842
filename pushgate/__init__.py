"""Push notification dispatch service package."""
