"""
Field marker system for cartridge header fields
"""

# =============================================================================
# Field Marker System for the Cartridge Header
# =============================================================================

class FieldMarker:
    """Base class for annotation markers"""
    pass

class FieldDescription(FieldMarker):
    """Human readable description of a header field"""
    def __init__(self, text: str):
        self.text = text

class ChecksumCoverage(FieldMarker):
    """Marker for fields whose bytes feed the header checksum"""
    pass

def describe(text: str) -> FieldDescription:
    """Attach a description to a field"""
    return FieldDescription(text)

def checksummed() -> ChecksumCoverage:
    """Mark a field as covered by the header checksum"""
    return ChecksumCoverage()
