"""Product catalog API.

An async FastAPI service that stores nested product documents in MongoDB and
attaches S3-hosted product images to them.
"""

__version__ = "0.1.0"
