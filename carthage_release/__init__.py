"""Package Carthage binary framework releases.

Archives framework directories into a versioned zip and keeps the
version -> download URL manifest that Carthage binary specs point at.
"""

__version__ = "0.3.0"
