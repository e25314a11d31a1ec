from __future__ import annotations

"""High-level conversion service for table definition to DMN transformation.

Entry-point for any front-end (CLI, scripts, API) that keeps decision tables
as YAML or JSON files and needs DMN documents out of them. The generator
itself stays a pure function; this service owns the file handling around it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from dmn_builder.core.exceptions import DefinitionLoadError
from dmn_builder.core.generators import construct_dmn_xml
from dmn_builder.core.models import (
    DEFAULT_HIT_POLICY,
    HIT_POLICIES,
    DecisionTableDefinition,
    ParamDef,
)
from dmn_builder.core.utils import save_dmn_file

logger = logging.getLogger(__name__)

__all__ = ["DmnConversionService"]

_YAML_SUFFIXES = {".yml", ".yaml"}
_JSON_SUFFIXES = {".json"}


class DmnConversionService:
    """Business-logic façade with no presentation dependencies."""

    def __init__(
        self,
        default_hit_policy: str = DEFAULT_HIT_POLICY,
        check_well_formed: bool = True,
        encoding: str = "utf-8",
    ) -> None:
        self.default_hit_policy = default_hit_policy
        self.check_well_formed = check_well_formed
        self.encoding = encoding
        self.logger = logger

    @classmethod
    def from_config(cls, builder_config: Optional[Mapping[str, Any]] = None) -> "DmnConversionService":
        """Create a service from the ``builder`` configuration section."""
        if builder_config is None:
            from dmn_builder.config import ConfigManager

            builder_config = ConfigManager().get_builder_config()
        return cls(
            default_hit_policy=str(builder_config.get("default_hit_policy") or DEFAULT_HIT_POLICY),
            check_well_formed=bool(builder_config.get("check_well_formed", True)),
            encoding=str(builder_config.get("output_encoding") or "utf-8"),
        )

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def load_definition(self, file_path: str | Path) -> DecisionTableDefinition:
        """Read a decision table definition from a YAML or JSON file.

        Expected top-level keys are ``inputs``, ``outputs`` and ``rules``
        (all optional lists) plus an optional ``hitPolicy`` (or
        ``hit_policy``).

        Raises:
            DefinitionLoadError: If the file is missing, has an unsupported
                extension, cannot be parsed or has sections of the wrong shape.
        """
        file_path = Path(file_path)
        self.logger.debug("Load definition: %s", file_path)

        if not file_path.exists():
            raise DefinitionLoadError("Definition file not found", path=str(file_path))

        suffix = file_path.suffix.lower()
        if suffix not in _YAML_SUFFIXES | _JSON_SUFFIXES:
            raise DefinitionLoadError(
                f"Unsupported definition format '{suffix or '(none)'}'", path=str(file_path)
            )

        try:
            text = file_path.read_text(encoding="utf-8")
            if suffix in _YAML_SUFFIXES:
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
            raise DefinitionLoadError(
                f"Could not parse definition: {exc}", path=str(file_path), cause=exc
            ) from exc

        definition = self.parse_definition(data, source=str(file_path))
        self.logger.info(
            "Loaded definition %s: %d input(s), %d output(s), %d rule(s)",
            file_path.name, len(definition.inputs), len(definition.outputs), len(definition.rules),
        )
        return definition

    def parse_definition(self, data: Any, source: Optional[str] = None) -> DecisionTableDefinition:
        """Build a :class:`DecisionTableDefinition` from already-parsed data."""
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise DefinitionLoadError("Definition must be a mapping", path=source)

        inputs = self._parse_params(data.get("inputs"), "inputs", source)
        outputs = self._parse_params(data.get("outputs"), "outputs", source)
        rules = self._parse_rules(data.get("rules"), source)

        hit_policy = data.get("hitPolicy", data.get("hit_policy"))
        if hit_policy is None:
            hit_policy = self.default_hit_policy
        hit_policy = str(hit_policy)
        if hit_policy not in HIT_POLICIES:
            # Passed through as-is; the rules engine decides
            self.logger.warning("Non-standard hit policy '%s' in %s", hit_policy, source or "definition")

        return DecisionTableDefinition(
            rules=rules,
            inputs=inputs,
            outputs=outputs,
            hit_policy=hit_policy,
            source=source,
        )

    def build_xml(self, definition: DecisionTableDefinition) -> str:
        """Generate the DMN document for *definition*."""
        return construct_dmn_xml(
            definition.rules,
            definition.inputs,
            definition.outputs,
            definition.hit_policy,
        )

    def convert(
        self,
        file_path: str | Path,
        output_path: str | Path | None = None,
        *,
        hit_policy: Optional[str] = None,
    ) -> str:
        """Load *file_path*, generate its DMN document and optionally save it.

        Args:
            file_path: Definition file (YAML or JSON).
            output_path: Where to write the document; nothing is written
                when omitted.
            hit_policy: Overrides the hit policy found in the file.

        Returns:
            The generated DMN XML string.
        """
        self.logger.info("Convert: %s", file_path)
        definition = self.load_definition(file_path)
        if hit_policy is not None:
            definition.hit_policy = hit_policy

        xml = self.build_xml(definition)

        if output_path is not None:
            saved = save_dmn_file(
                xml,
                output_path,
                check_well_formed=self.check_well_formed,
                encoding=self.encoding,
            )
            self.logger.info("Convert: saved %s", saved)
        return xml

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    @staticmethod
    def _parse_params(raw: Any, section: str, source: Optional[str]) -> List[ParamDef]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise DefinitionLoadError(f"'{section}' must be a list", path=source)

        params: List[ParamDef] = []
        for position, item in enumerate(raw, start=1):
            if isinstance(item, str):
                # Bare names default to string columns
                params.append(ParamDef(name=item, type="string"))
            elif isinstance(item, Mapping):
                params.append(ParamDef.coerce(item))
            else:
                raise DefinitionLoadError(
                    f"'{section}' entry {position} must be a name or a mapping", path=source
                )
        return params

    @staticmethod
    def _parse_rules(raw: Any, source: Optional[str]) -> List[Dict[str, Any]]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise DefinitionLoadError("'rules' must be a list", path=source)

        rules: List[Dict[str, Any]] = []
        for position, row in enumerate(raw, start=1):
            if not isinstance(row, Mapping):
                raise DefinitionLoadError(f"Rule {position} must be a mapping", path=source)
            rules.append({str(key): value for key, value in row.items()})
        return rules
