"""ditakit - render topic sequences into publications with DITA Open Toolkit."""

__version__ = "0.3.0"
