__version__ = "1.0.0"
__description__ = "sanitizable : allowlist-filtered model extraction and patching for Flask-SQLAlchemy"
