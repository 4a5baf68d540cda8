"""
Adaptateurs de partage de fichiers pour CineScan.

- SMBShare: Partage SMB distant (smbprotocol)
- LocalShare: Repertoire local ou deja monte
"""

from cinescan.adapters.share.local_share import LocalShare
from cinescan.adapters.share.smb_share import SMBShare, parse_unc_address

__all__ = [
    "LocalShare",
    "SMBShare",
    "parse_unc_address",
]
