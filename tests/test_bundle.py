"""Tests for .mwtheme bundle export and import."""

import json

import pytest

from themestudio import __version__
from themestudio.bundle import (
    build_bundle, dump_bundle, load_bundle, apply_bundle, BUNDLE_VERSION, APP_NAME
)
from themestudio.color_codec import ColorValue
from themestudio.scanner import scan_documents


class TestBuildBundle:
    """Test bundle creation."""

    def test_envelope(self, documents):
        studies = scan_documents(documents).studies
        bundle = build_bundle(studies, "Main")
        assert bundle["version"] == BUNDLE_VERSION
        assert bundle["source"]["app"] == APP_NAME
        assert bundle["source"]["app_version"] == __version__
        assert bundle["source"]["workspace"] == "Main"
        assert "created_at" in bundle["source"]
        assert len(bundle["studies"]) == len(studies)

    def test_dump_is_json(self, documents):
        text = dump_bundle(build_bundle(scan_documents(documents).studies))
        assert json.loads(text)["studies"][0]["displayName"]


class TestLoadBundle:
    """Test bundle parsing and validation."""

    def test_round_trip_keeps_studies(self, documents):
        studies = scan_documents(documents).studies
        loaded = load_bundle(dump_bundle(build_bundle(studies)))
        assert [s.merge_key for s in loaded] == [s.merge_key for s in studies]
        vwap = next(s for s in loaded if s.name == "VWAP")
        assert vwap.color("upperBand").value == ColorValue(0, 128, 255, 128)
        assert vwap.color("upperBand").enabled is False

    def test_not_json(self):
        with pytest.raises(ValueError, match="Invalid theme bundle"):
            load_bundle("{oops")

    def test_missing_studies(self):
        with pytest.raises(ValueError, match="no studies"):
            load_bundle(json.dumps({"version": 1}))

    def test_newer_version_rejected(self):
        with pytest.raises(ValueError, match="Unsupported"):
            load_bundle(json.dumps({"version": BUNDLE_VERSION + 1, "studies": []}))

    def test_alpha_given_as_text(self):
        studies = load_bundle(json.dumps({"version": 1, "studies": [
            {"type": "study", "identifier": "VWAP",
             "colors": [{"key": "a", "color": "#ff0000", "alpha": "128"}]},
        ]}))
        assert studies[0].color("a").value == ColorValue(255, 0, 0, 128)

    def test_unusable_alpha_is_a_value_error(self):
        text = json.dumps({"version": 1, "studies": [
            {"type": "study", "identifier": "VWAP",
             "colors": [{"key": "a", "color": "#ff0000", "alpha": "half"}]},
        ]})
        with pytest.raises(ValueError, match="invalid alpha"):
            load_bundle(text)

    def test_colors_must_be_a_list(self):
        text = json.dumps({"version": 1, "studies": [
            {"type": "study", "identifier": "VWAP", "colors": 5},
        ]})
        with pytest.raises(ValueError, match="no color list"):
            load_bundle(text)

    def test_non_object_entries_are_ignored(self):
        studies = load_bundle(json.dumps({"version": 1, "studies": [
            "junk",
            {"type": "study", "identifier": "RSI", "displayName": "RSI",
             "colors": [{"key": "line", "color": "#ff0000", "alpha": 255}]},
        ]}))
        assert len(studies) == 1
        assert studies[0].color("line").value == ColorValue(255, 0, 0)


class TestApplyBundle:
    """Test applying a bundle to a document set."""

    def test_apply_exported_edits(self, documents):
        studies = scan_documents(documents).studies
        for study in studies:
            for record in study.colors:
                record.value = ColorValue(1, 2, 3, record.value.alpha)
        written = []
        results = apply_bundle(documents, studies, writer=lambda source, doc: written.append(source))
        assert all(r.complete for r in results)
        assert sorted(written) == ["config", "defaults", "settings"]
        assert len(written) == 3
        assert documents["config"]["table"]["upText"] == "010203"
        assert documents["settings"]["barThemes"][0]["upFill"] == "1,2,3,210"

    def test_missing_colors_are_reported(self, documents):
        studies = load_bundle(json.dumps({"version": 1, "studies": [
            {"type": "study", "identifier": "VWAP", "displayName": "VWAP",
             "colors": [{"key": "vwapLine", "color": "#000000"},
                        {"key": "gone", "color": "#000000"}]},
        ]}))
        results = apply_bundle(documents, studies)
        assert results[0].applied == 2
        assert results[0].missing_keys == ["gone"]
