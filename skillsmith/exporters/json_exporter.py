"""JSON Exporter - structured export of pipeline artifacts"""

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Union

from .. import __version__
from ..models import (
    AnalyzerResult,
    ConversionResult,
    GeneratedSkill,
    ParsedDocument,
    PipelineResult,
    QuickCheckResult,
    SecurityScanResult,
    SkillSpec,
    ValidationResult,
)
from ..spec_builder import spec_to_dict

Exportable = Union[
    AnalyzerResult,
    ConversionResult,
    GeneratedSkill,
    ParsedDocument,
    PipelineResult,
    QuickCheckResult,
    SecurityScanResult,
    SkillSpec,
    ValidationResult,
]


class JSONExporter:
    """Export specs, generated skills and scan results as structured JSON"""

    def __init__(self, pretty: bool = True, include_metadata: bool = True):
        self.pretty = pretty
        self.include_metadata = include_metadata

    def export(self, item: Exportable) -> str:
        """Export any pipeline artifact to JSON"""
        return self._to_json(self._wrap(self.serialize(item)))

    def export_pipeline_result(self, result: PipelineResult) -> str:
        """Export a full pipeline run with a short summary block"""
        data = self.serialize(result)
        data["summary"] = {
            "success": result.success,
            "name": result.spec.name if result.spec else None,
            "format": result.generated.format if result.generated else None,
            "risk": result.scan.risk if result.scan else None,
            "blocked": result.scan.blocked if result.scan else None,
        }
        return self._to_json(self._wrap(data))

    def export_to_file(self, item: Exportable, output_path: Path):
        """Export to a JSON file"""
        if isinstance(item, PipelineResult):
            json_str = self.export_pipeline_result(item)
        else:
            json_str = self.export(item)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(json_str)

    def serialize(self, item: Exportable) -> Dict[str, Any]:
        """Serialize an artifact to a dictionary"""
        if isinstance(item, SkillSpec):
            return spec_to_dict(item)

        if isinstance(item, AnalyzerResult):
            data = asdict(item)
            data["length"] = item.length
            return data

        if isinstance(item, PipelineResult):
            data = asdict(item)
            # Specs use the list-based view, not nested tuples
            if item.spec is not None:
                data["spec"] = spec_to_dict(item.spec)
            if item.analysis is not None:
                data["analysis"]["length"] = item.analysis.length
            return data

        return asdict(item)

    def _wrap(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not self.include_metadata:
            return data
        return {
            "version": __version__,
            "generated_at": datetime.now().isoformat(),
            "data": data,
        }

    def _to_json(self, data: Dict[str, Any]) -> str:
        """Convert to JSON string"""
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return json.dumps(data, ensure_ascii=False, default=str)
