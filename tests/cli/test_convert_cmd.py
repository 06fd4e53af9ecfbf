"""
Tests for the 'convert' command.

Verifies that:
1. Files are rewritten in place and a summary is printed.
2. --dry-run and --diff report without writing.
3. --ignore, --max-files and --map reach the batch driver.
4. Failures produce a report table and a non-zero exit code.
"""

import pytest

from steal_to_amd.cli.__main__ import main

HEADER = "/*global steal:false */\nsteal('can/util', 'lodash', function(can, _) {});\n"


@pytest.fixture
def project(tmp_path, monkeypatch):
  monkeypatch.chdir(tmp_path)
  app = tmp_path / "app"
  app.mkdir()
  (app / "main.js").write_text(HEADER, encoding="utf-8")
  (app / "plain.js").write_text("var x = 1;\n", encoding="utf-8")
  return tmp_path


def test_convert_directory(project, recorded_console):
  exit_code = main(["convert", "app"])

  assert exit_code == 0
  assert (project / "app/main.js").read_text(encoding="utf-8") == (
    "/*global define:false */\ndefine(['can/util/jquery', 'lodash/lodash'], function(can, _) {});\n"
  )
  assert (project / "app/plain.js").read_text(encoding="utf-8") == "var x = 1;\n"

  output = recorded_console.export_text()
  assert "Batch Complete: 1 converted, 1 unchanged, 0 ignored, 0 skipped." in output


def test_convert_with_map(project):
  assert main(["convert", "app/main.js", "--map", "lodash=vendor/lodash"]) == 0

  code = (project / "app/main.js").read_text(encoding="utf-8")
  assert "define(['can/util/jquery', 'vendor/lodash']" in code


def test_dry_run_with_diff(project, recorded_console):
  exit_code = main(["convert", "app", "--dry-run", "--diff"])

  assert exit_code == 0
  assert (project / "app/main.js").read_text(encoding="utf-8") == HEADER

  output = recorded_console.export_text()
  assert "--- a/app/main.js" in output
  assert "+define(['can/util/jquery', 'lodash/lodash'], function(can, _) {});" in output
  assert "1 would be converted" in output


def test_ignore_prefix(project, recorded_console):
  assert main(["convert", "app", "--ignore", "app/main"]) == 0

  assert (project / "app/main.js").read_text(encoding="utf-8") == HEADER
  assert "1 ignored" in recorded_console.export_text()


def test_max_files(project, recorded_console):
  assert main(["convert", "app", "--max-files", "1"]) == 0

  # Directory contents are sorted: main.js first
  assert (project / "app/main.js").read_text(encoding="utf-8") != HEADER
  assert "1 skipped" in recorded_console.export_text()


def test_max_files_must_be_positive(project):
  with pytest.raises(SystemExit):
    main(["convert", "app", "--max-files", "0"])


def test_failure_report(project, recorded_console):
  (project / "app/bad.js").write_text("steal(dep, function() {});\n", encoding="utf-8")

  exit_code = main(["convert", "app"])

  assert exit_code == 1
  assert (project / "app/bad.js").read_text(encoding="utf-8") == "steal(dep, function() {});\n"

  output = recorded_console.export_text()
  assert "Conversion Report" in output
  assert "app/bad.js" in output
  assert "1 failed" in output


def test_missing_input(project, recorded_console):
  assert main(["convert", "nope"]) == 1
  assert "Input not found: nope" in recorded_console.export_text()


def test_no_js_files(project, recorded_console):
  (project / "empty").mkdir()
  assert main(["convert", "empty"]) == 1
  assert "No .js files found." in recorded_console.export_text()


def test_invalid_configuration(project, recorded_console):
  (project / "app/pyproject.toml").write_text('[tool.steal_to_amd]\ntarget_loader = "not valid"\n', encoding="utf-8")

  assert main(["convert", "app"]) == 1
  assert "Invalid configuration" in recorded_console.export_text()


def test_diff_of_crlf_file_only_shows_header(project, recorded_console):
  source = "// hdr\r\nvar x = 1;\r\nsteal('./a', function(a) {});\r\nvar y = 2;\r\n"
  (project / "app/crlf.js").write_bytes(source.encode("utf-8"))

  assert main(["convert", "app/crlf.js", "--dry-run", "--diff"]) == 0

  output = recorded_console.export_text()
  assert "+define(['./a'], function(a) {});" in output
  assert "-steal('./a', function(a) {});" in output
  assert "-var x = 1;" not in output
  assert "-// hdr" not in output
  assert "-var y = 2;" not in output
