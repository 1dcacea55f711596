"""
Tests for the main entry point.

The real argument parser, layout checks and pipeline run end to end; only
the tool lookup is pointed at a directory of placeholder executables and
``subprocess.run`` is replaced by the ``fake_gettext`` fixture.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path

import pytest

from locale_updater.config.manager import SAMPLE_CONFIG, ConfigManager
from locale_updater.config.schema import LocaleUpdaterConfig, LoggingConfig, ToolsConfig
from locale_updater.main import LOGGER_NAME, main, setup_logging
from locale_updater.tools.resolver import SearchPathResolver


@pytest.fixture
def resolver_on(monkeypatch: pytest.MonkeyPatch):
    """Point tool discovery at a given directory instead of the real PATH."""

    def _install(bin_dir: Path) -> None:
        def _select(tools_config: ToolsConfig) -> SearchPathResolver:
            return SearchPathResolver(tools_config, path=str(bin_dir))

        # The package rebinds ``main`` to the console entry function
        main_module = importlib.import_module("locale_updater.main")
        monkeypatch.setattr(main_module, "select_resolver", _select)

    return _install


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers installed by setup_logging between tests."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


def _files(root: Path) -> set[Path]:
    return set(root.rglob("*"))


class TestMainScenarios:
    """End-to-end runs of main()."""

    def test_dotted_module_example(
        self, tmp_path: Path, fake_bin_dir: Path, fake_gettext, resolver_on
    ) -> None:
        """app.i18n: locale dir and app_i18n.pot are created, nothing else runs."""
        project = tmp_path / "src"
        (project / "app.i18n" / "app" / "i18n").mkdir(parents=True)
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=app.i18n", f"--project-dir={project}"])

        locale = project / "app.i18n" / "app" / "i18n" / "locale"
        assert exit_code == 0
        assert locale.is_dir()
        assert (locale / "app_i18n.pot").is_file()
        assert fake_gettext.calls == []

    def test_initialize_new_language(
        self, project_dir: Path, fake_bin_dir: Path, fake_gettext, resolver_on
    ) -> None:
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=my-module", "--lang=fr", f"--project-dir={project_dir}"])

        catalog_dir = project_dir / "my-module" / "my_module" / "locale" / "fr" / "LC_MESSAGES"
        assert exit_code == 0
        assert (catalog_dir / "my_module.po").is_file()
        assert (catalog_dir / "my_module.mo").is_file()
        assert [Path(call[0]).name for call in fake_gettext.calls] == [
            "msginit",
            "xgettext",
            "msgmerge",
            "msgfmt",
        ]
        assert fake_gettext.calls[0][0] == str(fake_bin_dir / "msginit")

    def test_existing_language_fails(
        self,
        project_dir: Path,
        fake_bin_dir: Path,
        fake_gettext,
        resolver_on,
        layout,
        make_catalog,
    ) -> None:
        """Re-initializing exits 1 and leaves the tree untouched."""
        _ = make_catalog(layout, "fr")
        resolver_on(fake_bin_dir)
        before = _files(project_dir)

        exit_code = main(["--module=my-module", "--lang=fr", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert _files(project_dir) == before
        assert fake_gettext.calls == []

    def test_existing_language_without_template_creates_nothing(
        self, project_dir: Path, fake_bin_dir: Path, fake_gettext, resolver_on
    ) -> None:
        """The language check runs before the locale layout is created."""
        locale = project_dir / "my-module" / "my_module" / "locale"
        (locale / "fr" / "LC_MESSAGES").mkdir(parents=True)
        resolver_on(fake_bin_dir)
        before = _files(project_dir)

        exit_code = main(["--module=my-module", "--lang=fr", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert _files(project_dir) == before
        assert not (locale / "my_module.pot").exists()
        assert fake_gettext.calls == []

    def test_existing_catalogs_are_compiled(
        self,
        project_dir: Path,
        fake_bin_dir: Path,
        fake_gettext,
        resolver_on,
        layout,
        make_catalog,
    ) -> None:
        catalogs = [make_catalog(layout, language) for language in ("de", "fr", "en_GB")]
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=my-module", f"--project-dir={project_dir}"])

        assert exit_code == 0
        for po_file in catalogs:
            assert po_file.with_suffix(".mo").is_file()

    def test_missing_tool_fails_before_any_change(
        self, project_dir: Path, fake_bin_dir: Path, fake_gettext, resolver_on
    ) -> None:
        (fake_bin_dir / "xgettext").unlink()
        resolver_on(fake_bin_dir)
        before = _files(project_dir)

        exit_code = main(["--module=my-module", "--lang=fr", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert _files(project_dir) == before

    def test_missing_module_dir(
        self, project_dir: Path, fake_bin_dir: Path, fake_gettext, resolver_on
    ) -> None:
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=other-module", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert not (project_dir / "other-module").exists()

    def test_missing_search_path(
        self, project_dir: Path, fake_bin_dir: Path, fake_gettext, resolver_on
    ) -> None:
        (project_dir / "half-module").mkdir()
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=half-module", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert list((project_dir / "half-module").iterdir()) == []

    def test_invalid_language_exits(self, project_dir: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = main(["--module=my-module", "--lang=en-GB", f"--project-dir={project_dir}"])

        assert exc_info.value.code == 1

    def test_failed_tool_sets_exit_code(
        self,
        project_dir: Path,
        fake_bin_dir: Path,
        fake_gettext,
        resolver_on,
        layout,
        make_catalog,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Failures are not silent: the run continues but exits 1."""
        de = make_catalog(layout, "de")
        fr = make_catalog(layout, "fr")
        fake_gettext.fail("msgfmt", match="/de/", stderr="de.po:4: end-of-line within string")
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=my-module", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert fr.with_suffix(".mo").is_file()
        assert not de.with_suffix(".mo").exists()
        err = capsys.readouterr().err
        assert "end-of-line within string" in err
        assert "1 gettext command(s) failed" in err

    def test_failed_combined_extraction_counts_one_command(
        self,
        project_dir: Path,
        fake_bin_dir: Path,
        fake_gettext,
        resolver_on,
        layout,
        make_catalog,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """One xgettext call over three catalogs is reported as one command."""
        for language in ("de", "fr", "en_GB"):
            _ = make_catalog(layout, language)
        fake_gettext.fail("xgettext")
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=my-module", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert len(fake_gettext.calls_for("xgettext")) == 1
        err = capsys.readouterr().err
        assert "1 gettext command(s) failed" in err
        assert "3 gettext command(s) failed" not in err

    def test_fail_fast_flag(
        self,
        project_dir: Path,
        fake_bin_dir: Path,
        fake_gettext,
        resolver_on,
        layout,
        make_catalog,
    ) -> None:
        _ = make_catalog(layout, "fr")
        fake_gettext.fail("xgettext")
        resolver_on(fake_bin_dir)

        exit_code = main(["--module=my-module", "--fail-fast", f"--project-dir={project_dir}"])

        assert exit_code == 1
        assert fake_gettext.calls_for("msgmerge") == []

    def test_dry_run_changes_nothing(
        self, project_dir: Path, fake_bin_dir: Path, fake_gettext, resolver_on
    ) -> None:
        resolver_on(fake_bin_dir)
        before = _files(project_dir)

        exit_code = main(
            ["--module=my-module", "--lang=fr", "--dry-run", f"--project-dir={project_dir}"]
        )

        assert exit_code == 0
        assert _files(project_dir) == before
        assert fake_gettext.calls == []

    def test_config_file_selects_tools(
        self,
        tmp_path: Path,
        project_dir: Path,
        fake_bin_dir: Path,
        fake_gettext,
        resolver_on,
    ) -> None:
        _ = (fake_bin_dir / "msginit").rename(fake_bin_dir / "gmsginit")
        config_file = tmp_path / "settings.yml"
        _ = config_file.write_text("tools:\n  msginit: gmsginit\n", encoding="utf-8")
        resolver_on(fake_bin_dir)

        exit_code = main(
            [
                "--module=my-module",
                "--lang=de",
                f"--project-dir={project_dir}",
                f"--config-file={config_file}",
            ]
        )

        assert exit_code == 0
        assert fake_gettext.calls[0][0] == str(fake_bin_dir / "gmsginit")

    def test_invalid_config_file(
        self, tmp_path: Path, project_dir: Path, fake_bin_dir: Path, resolver_on
    ) -> None:
        config_file = tmp_path / "settings.yml"
        _ = config_file.write_text("pipeline:\n  workers: 4\n", encoding="utf-8")
        resolver_on(fake_bin_dir)

        exit_code = main(
            ["--module=my-module", f"--project-dir={project_dir}", f"--config-file={config_file}"]
        )

        assert exit_code == 1
        assert not (project_dir / "my-module" / "my_module" / "locale").exists()


class TestSampleConfigOption:
    """Test --create-sample-config."""

    def test_writes_loadable_sample(self, tmp_path: Path) -> None:
        sample = tmp_path / "conf" / "locale-updater.yml"

        exit_code = main([f"--create-sample-config={sample}"])

        assert exit_code == 0
        assert sample.read_text(encoding="utf-8") == SAMPLE_CONFIG
        assert ConfigManager.load_config(sample) == LocaleUpdaterConfig()

    def test_does_not_overwrite(self, tmp_path: Path) -> None:
        sample = tmp_path / "locale-updater.yml"
        _ = sample.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")

        exit_code = main([f"--create-sample-config={sample}"])

        assert exit_code == 1
        assert sample.read_text(encoding="utf-8") == "logging:\n  level: DEBUG\n"

    def test_skips_catalog_update(
        self, tmp_path: Path, project_dir: Path, fake_gettext
    ) -> None:
        sample = tmp_path / "locale-updater.yml"

        exit_code = main(
            [
                "--module=my-module",
                f"--project-dir={project_dir}",
                f"--create-sample-config={sample}",
            ]
        )

        assert exit_code == 0
        assert sample.is_file()
        assert not (project_dir / "my-module" / "my_module" / "locale").exists()
        assert fake_gettext.calls == []


class TestSetupLogging:
    """Test logging configuration."""

    def test_console_handler_only(self) -> None:
        setup_logging(LoggingConfig())

        package_logger = logging.getLogger(LOGGER_NAME)
        assert package_logger.level == logging.INFO
        assert len(package_logger.handlers) == 1

    def test_repeated_setup_replaces_handlers(self) -> None:
        setup_logging(LoggingConfig())
        setup_logging(LoggingConfig(level="DEBUG"))

        package_logger = logging.getLogger(LOGGER_NAME)
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "locale-updater.log"

        setup_logging(LoggingConfig(log_file=str(log_file)))
        logging.getLogger("locale_updater.catalog").debug("written to file only")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        assert "written to file only" in log_file.read_text(encoding="utf-8")
