"""Tests for the command-line interface"""

import pytest

from modulartype import cli, config

BASE_STEP_PX = "clamp(16.00px,  0.33vw + 14.95px , 20.00px)"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user defaults and config discovery inside tmp_path"""
    monkeypatch.setenv("MODULARTYPE_CONFIG_DIR", str(tmp_path / "user-config"))
    monkeypatch.setattr(config, "_data_manager", None)
    monkeypatch.chdir(tmp_path)


class TestPrintScale:
    """--print-scale output"""

    def test_css_format(self, capsys):
        assert cli.main(["--print-scale", "--unit", "px"]) == 0

        out = capsys.readouterr().out
        assert out.startswith(":root {\n")
        assert f"  --font-size-0: {BASE_STEP_PX};\n" in out
        assert out.count("--font-size-") == 8

    def test_table_format(self, capsys):
        assert cli.main(["--print-scale", "--format", "table", "--min-step", "0", "--max-step", "1"]) == 0

        lines = capsys.readouterr().out.strip().split("\n")
        assert lines[0].startswith("variable")
        assert lines[1].startswith("--font-size-0")
        assert "1.00rem" in lines[1]
        assert len(lines) == 3

    def test_config_error(self, tmp_path, capsys):
        (tmp_path / "modulartype.yaml").write_text(
            "suffixType: values\nminStep: 3\n", encoding="utf-8"
        )
        assert cli.main(["--print-scale"]) == 1
        assert "Insufficient suffixes passed." in capsys.readouterr().err

    def test_user_defaults_applied(self, tmp_path, capsys):
        user_dir = tmp_path / "user-config"
        user_dir.mkdir()
        (user_dir / "defaults.yaml").write_text("prefix: fs-\n", encoding="utf-8")

        assert cli.main(["--print-scale"]) == 0
        assert "--fs-0:" in capsys.readouterr().out

    def test_equal_screen_widths(self, tmp_path, capsys):
        """Division by zero is reported like any other option problem"""
        (tmp_path / "modulartype.yaml").write_text(
            "minScreenWidth: 800\nmaxScreenWidth: 800\n", encoding="utf-8"
        )
        assert cli.main(["--print-scale"]) == 1
        assert "division by zero" in capsys.readouterr().err


class TestProcessFile:
    """Processing stylesheet files"""

    def test_directive_to_output_file(self, tmp_path):
        source = tmp_path / "style.css"
        source.write_text(":root {\n  /* postcss-modular-type-generate */\n}\n", encoding="utf-8")
        target = tmp_path / "out.css"

        assert cli.main([str(source), "-o", str(target), "--unit", "px"]) == 0

        result = target.read_text(encoding="utf-8")
        assert f"  --font-size-0: {BASE_STEP_PX};\n" in result
        assert "postcss-modular-type-generate" not in result
        assert list((tmp_path / "user-config" / "logs").glob("modulartype_style_*.log"))
        assert not (tmp_path / "logs").exists()

    def test_inline_to_stdout(self, tmp_path, capsys):
        source = tmp_path / "style.css"
        source.write_text("h1 { font-size: var(--font-size-0); }\n", encoding="utf-8")

        assert cli.main([str(source), "--inline", "--unit", "px"]) == 0
        assert capsys.readouterr().out == f"h1 {{ font-size: {BASE_STEP_PX}; }}\n"

    def test_config_file_next_to_input(self, tmp_path, capsys):
        project = tmp_path / "project"
        project.mkdir()
        (project / "modulartype.yml").write_text("replaceInline: true\nunit: px\n", encoding="utf-8")
        source = project / "style.css"
        source.write_text("h1 { font-size: var(--font-size-0); }\n", encoding="utf-8")

        assert cli.main([str(source)]) == 0
        assert BASE_STEP_PX in capsys.readouterr().out

    def test_flags_override_config_file(self, tmp_path, capsys):
        config_file = tmp_path / "options.json"
        config_file.write_text('{"unit": "rem", "replaceInline": true}', encoding="utf-8")
        source = tmp_path / "style.css"
        source.write_text("h1 { font-size: var(--font-size-0); }\n", encoding="utf-8")

        assert cli.main([str(source), "-c", str(config_file), "--unit", "px"]) == 0
        assert BASE_STEP_PX in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "missing.css")]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_input_required(self, capsys):
        assert cli.main([]) == 1
        assert "Input file is required" in capsys.readouterr().err

    def test_syntax_error(self, tmp_path, capsys):
        source = tmp_path / "broken.css"
        source.write_text("h1 { color: red;\n", encoding="utf-8")

        assert cli.main([str(source)]) == 1
        assert "Unclosed block" in capsys.readouterr().err


class TestShowConfigDir:
    def test_prints_user_dir(self, tmp_path, capsys):
        assert cli.main(["--show-config-dir"]) == 0
        assert capsys.readouterr().out.strip() == str(tmp_path / "user-config")


class TestLogging:
    """Run logs"""

    def test_log_outside_stylesheet_directory(self, tmp_path, capsys):
        project = tmp_path / "project"
        project.mkdir()
        source = project / "style.css"
        source.write_text("a { color: red; }\n", encoding="utf-8")

        assert cli.main([str(source)]) == 0

        assert sorted(p.name for p in project.iterdir()) == ["style.css"]
        logs = list((tmp_path / "user-config" / "logs").glob("modulartype_style_*.log"))
        assert len(logs) == 1
        assert f"Log file: {logs[0]}" in capsys.readouterr().err

    def test_verbose_writes_debug_lines(self, tmp_path):
        source = tmp_path / "style.css"
        source.write_text(":root {\n  /* postcss-modular-type-generate */\n}\n", encoding="utf-8")

        assert cli.main([str(source), "-v", "-o", str(tmp_path / "out.css")]) == 0

        log_file = next((tmp_path / "user-config" / "logs").glob("modulartype_style_*.log"))
        assert " - DEBUG - " in log_file.read_text(encoding="utf-8")

    def test_old_logs_pruned(self, tmp_path):
        logs_dir = tmp_path / "user-config" / "logs"
        logs_dir.mkdir(parents=True)
        for i in range(7):
            (logs_dir / f"modulartype_old_{i}.log").write_text("", encoding="utf-8")
        source = tmp_path / "style.css"
        source.write_text("a { color: red; }\n", encoding="utf-8")

        assert cli.main([str(source)]) == 0
        assert len(list(logs_dir.glob("modulartype_*.log"))) == 5
