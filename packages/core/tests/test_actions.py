"""Tests for workflow outputs and annotations."""

import pytest

from prlabel_core.actions import annotate, set_output, write_outputs


def test_set_output_appends_to_output_file(tmp_path):
    out = tmp_path / "github_output"
    out.write_text("existing=1\n")
    set_output("isApproved", "true", str(out))
    assert out.read_text() == "existing=1\nisApproved=true\n"


def test_set_output_without_file_only_prints(capsys):
    set_output("isApproved", "false")
    assert "Setting output: isApproved: false" in capsys.readouterr().out


def test_write_outputs_writes_all(tmp_path):
    out = tmp_path / "github_output"
    write_outputs({"isApproved": "true", "shouldLabelBeSet": "false"}, str(out))
    assert out.read_text().splitlines() == ["isApproved=true", "shouldLabelBeSet=false"]


def test_annotate_inside_actions(monkeypatch, capsys):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    annotate("warning", "line one\nline two 100%")
    assert capsys.readouterr().out == "::warning::line one%0Aline two 100%25\n"


def test_annotate_outside_actions_is_silent(monkeypatch, capsys):
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    annotate("error", "boom")
    assert capsys.readouterr().out == ""


def test_annotate_rejects_unknown_level():
    with pytest.raises(ValueError):
        annotate("fatal", "boom")
