"""Link extraction from rendered pages."""

from booklinkcheck.extract.extractor import ExtractionResult, classify_link_type, extract_links, mask_code
from booklinkcheck.extract.positions import LineIndex, PositionMapper

__all__ = ["ExtractionResult", "LineIndex", "PositionMapper", "classify_link_type", "extract_links", "mask_code"]
