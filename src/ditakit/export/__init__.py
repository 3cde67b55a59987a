"""Intermediate document export."""

from ditakit.export.dita import DitaMapExporter, DocumentExporter, map_path

__all__ = ["DitaMapExporter", "DocumentExporter", "map_path"]
