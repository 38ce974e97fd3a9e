"""
Campus Card Verification Pipeline

This package contains the complete pipeline for verifying a claimed identity
against a photographed campus card:
- Image normalization into a size-bounded JPEG payload
- Request signing for the Tencent AI OCR API
- Submission to the remote business card OCR service
- Matching of the extracted text against the claim
"""

__version__ = "1.0.0"
