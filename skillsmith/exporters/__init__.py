"""Exporters for pipeline artifacts"""

from .json_exporter import JSONExporter

__all__ = ["JSONExporter"]
