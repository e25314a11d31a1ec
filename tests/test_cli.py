"""Command-line entry point tests."""

import pytest
from lxml import etree as ET

from dmn_builder.__main__ import build_parser, main


@pytest.mark.integration
class TestCli:
    """Running ``dmn-builder`` end to end."""

    def test_prints_document_to_stdout(self, yaml_definition_file, capsys):
        assert main([str(yaml_definition_file)]) == 0

        out = capsys.readouterr().out
        assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert 'hitPolicy="FIRST"' in out

    def test_writes_output_file(self, json_definition_file, tmp_path, capsys):
        target = tmp_path / "table.dmn"

        assert main([str(json_definition_file), "-o", str(target)]) == 0

        assert capsys.readouterr().out == ""
        root = ET.parse(str(target)).getroot()
        assert root.get("id") == "definitions_dynamicDecision"

    def test_hit_policy_flag(self, yaml_definition_file, capsys):
        assert main([str(yaml_definition_file), "--hit-policy", "RULE ORDER"]) == 0
        assert 'hitPolicy="RULE ORDER"' in capsys.readouterr().out

    def test_config_default_hit_policy(self, isolated_config, tmp_path, capsys):
        isolated_config.mkdir(parents=True)
        (isolated_config / "builder.yml").write_text("default_hit_policy: COLLECT\n", encoding="utf-8")
        definition = tmp_path / "plain.yml"
        definition.write_text("inputs: [region]\nrules:\n  - region: north\n", encoding="utf-8")

        assert main([str(definition)]) == 0

        out = capsys.readouterr().out
        assert 'hitPolicy="COLLECT"' in out
        assert '<inputEntry id="InputEntry_1_1"><text>"north"</text></inputEntry>' in out

    def test_missing_definition_exits_with_error(self, tmp_path):
        assert main([str(tmp_path / "missing.yml")]) == 1

    def test_no_check_flag(self, yaml_definition_file, tmp_path):
        target = tmp_path / "unchecked.dmn"
        assert main([str(yaml_definition_file), "-o", str(target), "--no-check"]) == 0
        assert target.exists()

    def test_parser_requires_definition(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
