"""
Stock Kernel

Shared foundation for the stock calculation engines:
- Immutable item and status value objects
- Decimal-only quantity and money helpers
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
