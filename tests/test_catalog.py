"""
Tests for catalog parsing, validation and availability lookups.
"""

import json

import pytest

from tuxmate.catalog import DEFAULT_CATALOG, CatalogError, load_catalog, parse_catalog
from tuxmate.models import Family, Mechanism


class TestParse:
    def test_distros_and_categories_keep_file_order(self, catalog):
        assert [d.id for d in catalog.distros] == ["arch", "ubuntu", "snap", "nix"]
        assert [c.name for c in catalog.categories] == ["editors", "tools", "empty"]
        assert catalog.distro("arch").family is Family.PACMAN

    def test_catalog_order(self, catalog):
        assert catalog.app_ids() == ["vim", "sublime", "git", "flatpak", "slack"]
        assert catalog.in_catalog_order({"slack", "vim", "nope"}) == ["vim", "slack"]

    def test_string_target_is_repo_package_list(self, catalog):
        spec = catalog.install_spec("sublime", "snap")
        assert spec.mechanism is Mechanism.REPO
        assert spec.packages == ("sublime-text", "--classic")

    def test_shorthand_targets(self, catalog):
        aur = catalog.install_spec("sublime", "arch")
        assert aur.mechanism is Mechanism.AUR
        assert aur.packages == ("sublime-text",)
        manual = catalog.install_spec("slack", "ubuntu")
        assert manual.mechanism is Mechanism.MANUAL
        assert manual.note == "download the .deb from slack.com"

    def test_prerequisite_flag(self, catalog):
        assert catalog.install_spec("flatpak", "ubuntu").prerequisite is True
        assert catalog.install_spec("git", "ubuntu").prerequisite is False

    def test_ui_defaults_merged(self, catalog):
        assert catalog.ui["title"] == "tuxmate test"
        assert "tagline" in catalog.ui


class TestAvailability:
    def test_missing_target_means_unavailable(self, catalog):
        assert catalog.is_available("sublime", "arch")
        assert not catalog.is_available("sublime", "ubuntu")

    def test_unknown_ids_are_unavailable(self, catalog):
        assert not catalog.is_available("emacs", "arch")
        assert not catalog.is_available("vim", "gentoo")
        assert catalog.install_spec("vim", "gentoo") is None


class TestValidation:
    def test_duplicate_app_id(self, catalog_data):
        catalog_data["categories"][1]["apps"].append({"id": "vim", "targets": {}})
        with pytest.raises(CatalogError, match="duplicate app id 'vim'"):
            parse_catalog(catalog_data)

    def test_duplicate_distro(self, catalog_data):
        catalog_data["distros"].append({"id": "arch", "family": "pacman"})
        with pytest.raises(CatalogError, match="duplicate distro"):
            parse_catalog(catalog_data)

    def test_unknown_family(self, catalog_data):
        catalog_data["distros"].append({"id": "gentoo", "family": "portage"})
        with pytest.raises(CatalogError, match="unknown family"):
            parse_catalog(catalog_data)

    def test_unknown_distro_in_targets(self, catalog_data):
        catalog_data["categories"][0]["apps"][0]["targets"]["gentoo"] = "vim"
        with pytest.raises(CatalogError, match="unknown distro 'gentoo'"):
            parse_catalog(catalog_data)

    def test_aur_only_on_pacman(self, catalog_data):
        catalog_data["categories"][0]["apps"][0]["targets"]["ubuntu"] = {"aur": "vim-git"}
        with pytest.raises(CatalogError, match="pacman-family"):
            parse_catalog(catalog_data)

    def test_empty_packages(self, catalog_data):
        catalog_data["categories"][0]["apps"][0]["targets"]["ubuntu"] = "   "
        with pytest.raises(CatalogError, match="no packages"):
            parse_catalog(catalog_data)

    def test_unknown_mechanism(self, catalog_data):
        catalog_data["categories"][0]["apps"][0]["targets"]["ubuntu"] = {"packages": "vim", "mechanism": "ppa"}
        with pytest.raises(CatalogError, match="unknown mechanism"):
            parse_catalog(catalog_data)

    def test_root_must_be_object(self):
        with pytest.raises(CatalogError):
            parse_catalog([])

    def test_catalog_error_is_value_error(self):
        assert issubclass(CatalogError, ValueError)


class TestLoad:
    def test_bundled_catalog_loads(self):
        cat = load_catalog()
        assert cat.distros
        assert cat.categories
        assert len(cat.app_ids()) == len(set(cat.app_ids()))

    def test_bundled_catalog_is_the_default_path(self):
        assert load_catalog(DEFAULT_CATALOG).app_ids() == load_catalog().app_ids()

    def test_load_from_file(self, tmp_path, catalog_data):
        p = tmp_path / "catalog.json"
        p.write_text(json.dumps(catalog_data), encoding="utf-8")
        assert load_catalog(str(p)).app_ids() == ["vim", "sublime", "git", "flatpak", "slack"]

    def test_broken_json(self, tmp_path):
        p = tmp_path / "catalog.json"
        p.write_text("{ not json", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(str(p))

    def test_missing_file_is_empty_catalog(self, tmp_path):
        cat = load_catalog(str(tmp_path / "missing.json"))
        assert cat.distros == ()
        assert cat.app_ids() == []
