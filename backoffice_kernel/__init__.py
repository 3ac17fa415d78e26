"""
Back-office Kernel

Pure building blocks shared by the lifecycle and permission-gate layers:
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Immutable lifecycle and permission value objects
"""

__version__ = "0.1.0"
