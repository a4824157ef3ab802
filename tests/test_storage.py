"""
Tests for JSON loading, script export and search filtering.
"""

import os

import pytest

from tuxmate.search import filter_apps
from tuxmate.storage import load_json, script_filename, write_script


class TestLoadJson:
    def test_missing_and_blank_files_give_default(self, tmp_path):
        assert load_json(str(tmp_path / "nope.json"), {"a": 1}) == {"a": 1}
        blank = tmp_path / "blank.json"
        blank.write_text("  \n", encoding="utf-8")
        assert load_json(str(blank), []) == []

    def test_broken_json_raises(self, tmp_path):
        p = tmp_path / "x.json"
        p.write_text("{", encoding="utf-8")
        with pytest.raises(ValueError):
            load_json(str(p), {})


class TestWriteScript:
    def test_name_and_mode(self, tmp_path):
        path = write_script(str(tmp_path / "exports"), "arch", "#!/usr/bin/env bash\n")
        assert os.path.basename(path) == script_filename("arch") == "tuxmate-arch.sh"
        assert os.access(path, os.X_OK)
        with open(path, encoding="utf-8") as f:
            assert f.read() == "#!/usr/bin/env bash\n"


class TestSearch:
    def test_blank_query_is_no_filter(self, catalog):
        assert filter_apps(catalog, "") is None
        assert filter_apps(catalog, "   ") is None

    def test_matches_id_name_and_description(self, catalog):
        assert filter_apps(catalog, "sublime") == {"sublime"}
        assert filter_apps(catalog, "EDITOR") == {"vim", "sublime"}
        assert filter_apps(catalog, "zzz") == set()
