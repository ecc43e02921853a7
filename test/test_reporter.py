"""Tests for feature reporting and serialization helpers."""

import io
import json

from core.context import ProjectContext
from features.base import ClassFeature, MethodFeature, Visibility, public_only
from reporter import OutputMode, report_features, format_outline


def _ctx():
    ctx = ProjectContext(["a.rb", "b.rb"])
    ctx.source_files["a.rb"].features = (
        ClassFeature(
            "Main",
            "a.rb:1",
            (
                MethodFeature("build", "a.rb:2", "Main", static=True),
                MethodFeature("secret", "a.rb:5", "Main", visibility=Visibility.PRIVATE),
            ),
        ),
    )
    ctx.source_files["b.rb"].features = (MethodFeature("helper", "b.rb:1"),)
    return ctx


class TestJsonReport:
    def test_all_files_in_order(self, capsys):
        count = report_features(_ctx(), OutputMode.JSON)
        data = json.loads(capsys.readouterr().out)

        assert count == 2
        assert [f["name"] for f in data] == ["Main", "helper"]
        assert data[0]["children"][1]["visibility"] == "private"
        assert data[1] == {
            "name": "helper",
            "location": "b.rb:1",
            "type": "function",
            "class_name": "",
            "static": False,
        }

    def test_public_only(self, capsys):
        report_features(_ctx(), OutputMode.JSON, only_public=True)
        data = json.loads(capsys.readouterr().out)
        assert [c["name"] for c in data[0]["children"]] == ["build"]

    def test_output_file(self, capsys):
        out = io.StringIO()
        report_features(_ctx(), OutputMode.JSON, out)
        assert json.loads(out.getvalue()) == json.loads(capsys.readouterr().out)


class TestShortReport:
    def test_outline(self, capsys):
        count = report_features(_ctx())
        out = capsys.readouterr().out

        assert count == 2
        assert "a.rb" in out
        assert "Main.build" in out
        assert "Main#secret" in out
        assert "static" in out
        assert "private" in out

    def test_empty(self, capsys):
        assert report_features(ProjectContext(["x.rb"])) == 0
        assert "No features found" in capsys.readouterr().out

    def test_outline_nesting(self):
        lines = format_outline(_ctx().source_files["a.rb"].features)
        assert len(lines) == 3
        assert lines[1].startswith("    ")


class TestPublicOnly:
    def test_keeps_structure(self):
        features = public_only(_ctx().source_files["a.rb"].features)
        assert features[0].name == "Main"
        assert [c.name for c in features[0].children] == ["build"]

    def test_protected_is_dropped(self):
        features = (MethodFeature("guarded", "a.rb:1", visibility=Visibility.PROTECTED),)
        assert public_only(features) == ()
