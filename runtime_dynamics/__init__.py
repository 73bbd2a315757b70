"""
runtime-dynamics - minimal FastAPI web server
Static assets, HTML pages and environment configuration.
"""

__version__ = "0.1.0"
