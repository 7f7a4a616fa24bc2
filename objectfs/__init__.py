"""
Key-addressed file storage over S3-compatible object stores.
"""
