"""
BookCreator - automated book assembly from metadata and content files

Builds the plan for a desktop-published book: which layout template each
content file goes into, which output document it fills, and which metadata
and barcodes are injected along the way. The host layout application only
applies the plan.

Architecture:
- Metadata Context: front-matter parsing, serialization and field canonicalization
- Identifiers Context: ISBN/EAN-13 validation and bar pattern encoding
- Matching Context: keyword extraction, template classification and scoring
- Assembly Context: book projects, generation plans and placeholder filling
"""

__version__ = "1.0.0"
