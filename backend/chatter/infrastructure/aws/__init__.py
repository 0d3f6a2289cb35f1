"""AWS / S3-compatible implementations."""
