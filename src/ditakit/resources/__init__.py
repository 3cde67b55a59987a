"""Packaged resources.

Place a DITA-OT distribution archive here as ``dita-ot.zip`` to have it
unpacked on first start when the install directory is empty.
"""
