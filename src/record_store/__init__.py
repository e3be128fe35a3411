"""Record Store - fixed-width binary record persistence.

Plain data records are encoded into constant-size byte blocks and stored
back to back in a flat file, so every record is addressable by index
(offset = index * stride) without scanning.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
