__title__ = "httpq"
__description__ = "A minimal, synchronous HTTP client for Python."
__version__ = "0.1.0"
