"""Test configuration and shared fixtures for the DMN builder tests.

All tests that load configuration get an isolated user config directory so
nothing is written to the real home directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from dmn_builder.config import ConfigManager
from dmn_builder.core.models import ParamDef

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config directory at a temp dir and reset the singleton."""
    config_dir = tmp_path / "user_config"
    monkeypatch.setenv("DMN_BUILDER_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("DMN_BUILDER_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("DMN_BUILDER_DEBUG", raising=False)
    monkeypatch.delenv("DMN_BUILDER_DEBUG_MODULES", raising=False)
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo whatever ``setup_logging`` did to the package logger."""
    yield
    package_logger = logging.getLogger("dmn_builder")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def loan_inputs():
    """Two input columns of different types."""
    return [ParamDef("age", "number"), ParamDef("status", "string")]


@pytest.fixture
def loan_outputs():
    return [ParamDef("decision", "string"), ParamDef("approved", "boolean")]


@pytest.fixture
def loan_definition() -> Dict[str, Any]:
    """A small definition document as stored in YAML/JSON files."""
    return {
        "hitPolicy": "FIRST",
        "inputs": [
            {"name": "age", "type": "number"},
            {"name": "status", "type": "string"},
        ],
        "outputs": [
            {"name": "decision", "type": "string"},
        ],
        "rules": [
            {"age": ">= 18", "status": "active", "decision": "approve"},
            {"age": "< 18", "status": None, "decision": "reject"},
        ],
    }


@pytest.fixture
def yaml_definition_file(tmp_path, loan_definition) -> Path:
    path = tmp_path / "loan.yml"
    path.write_text(yaml.safe_dump(loan_definition, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def json_definition_file(tmp_path, loan_definition) -> Path:
    path = tmp_path / "loan.json"
    path.write_text(json.dumps(loan_definition), encoding="utf-8")
    return path
