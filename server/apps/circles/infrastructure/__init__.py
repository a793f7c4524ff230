"""Infrastructure layer for circles app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO/R2) for circle media
- Upload metadata helpers (file type, storage keys, download headers)

Keep infrastructure concerns separate from business logic.
"""
