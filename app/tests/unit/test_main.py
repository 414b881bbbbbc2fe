"""Unit tests for the command line entry point."""

import json

import pytest

import main
from modules.resources.errors import TransportError


@pytest.fixture
def config_path(tmp_path, settings_data):
    path = tmp_path / "transifex-config.resjson"
    path.write_text(json.dumps(settings_data), encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda: False)


@pytest.mark.unit
class TestParser:
    """Test suite for build_parser()."""

    def test_command_required(self):
        """Running without a command is an argparse error."""
        with pytest.raises(SystemExit):
            main.build_parser().parse_args([])

    def test_push_translation_key_arguments(self):
        """Positional arguments are parsed in order."""
        args = main.build_parser().parse_args(
            ["push-translation-key", "main", "app.title", "fi-FI,sv-SE"]
        )
        assert (args.resource, args.key, args.locales) == ("main", "app.title", "fi-FI,sv-SE")

    def test_split(self):
        """Comma separated lists are split and trimmed."""
        assert main._split("fi-FI, sv-SE,") == ["fi-FI", "sv-SE"]
        assert main._split(None) is None


@pytest.mark.unit
class TestMain:
    """Test suite for main() dispatch and exit status."""

    def test_missing_config(self, tmp_path, fake_provider, capsys):
        """A missing config file exits with status 1 before any call."""
        status = main.main(
            ["--config", str(tmp_path / "nope.resjson"), "push-resources"],
            provider=fake_provider,
        )
        assert status == 1
        assert "ERROR" in capsys.readouterr().err
        assert fake_provider.calls == []

    def test_push_resources_success(self, config_path, fake_provider, capsys):
        """A fully successful batch exits with 0."""
        status = main.main(["--config", config_path, "push-resources"], provider=fake_provider)
        assert status == 0
        assert "2 succeeded, 0 failed" in capsys.readouterr().out

    def test_push_resources_partial_failure(self, config_path, make_provider, capsys):
        """Any failed unit makes the exit status 1."""
        provider = make_provider(
            failures={("update_resource_content", "other"): TransportError("down")}
        )
        status = main.main(["--config", config_path, "push-resources"], provider=provider)

        assert status == 1
        err = capsys.readouterr().err
        assert "resource=other" in err
        assert "TRANSPORT_ERROR" in err

    def test_usage_error(self, config_path, fake_provider, capsys):
        """Usage errors are reported and exit with 1."""
        status = main.main(
            ["--config", config_path, "push-translation-key", "main", "app.unknown"],
            provider=fake_provider,
        )
        assert status == 1
        assert "No keys for app.unknown" in capsys.readouterr().err
        assert fake_provider.calls == []

    def test_pull_translations_orders_after_pull(self, config_path, make_provider, strings_dir):
        """Pulled files are reordered into the source layout."""
        provider = make_provider(
            details={"teams": ["fi_FI"], "resources": [{"slug": "main"}]},
            files={("main", "fi_FI"): '{"app.greeting": "Terve", "app.title": "Otsikko"}'},
        )
        status = main.main(
            ["--config", config_path, "pull-translations", "fi-FI"], provider=provider
        )

        assert status == 0
        text = (strings_dir / "fi-FI" / "main.resjson").read_text(encoding="utf-8")
        assert "// Main application strings" in text
        assert text.index("Otsikko") < text.index("Terve")

    def test_pull_translations_no_order(self, config_path, make_provider, strings_dir):
        """--no-order keeps the file as downloaded."""
        body = '{"app.greeting": "Terve", "app.title": "Otsikko"}'
        provider = make_provider(
            details={"teams": ["fi_FI"], "resources": [{"slug": "main"}]},
            files={("main", "fi_FI"): body},
        )
        main.main(
            ["--config", config_path, "pull-translations", "--no-order"], provider=provider
        )
        assert (strings_dir / "fi-FI" / "main.resjson").read_text(encoding="utf-8") == body

    def test_translation_mode_override(self, config_path, make_provider):
        """--translation-mode replaces the configured mode."""
        provider = make_provider(
            details={"teams": ["fi_FI"], "resources": [{"slug": "main"}]},
            files={("main", "fi_FI"): "{}"},
        )
        main.main(
            ["--config", config_path, "--translation-mode", "reviewed", "pull-translations"],
            provider=provider,
        )
        assert provider.calls_to("get_translation_file") == [("main", "fi_FI", "reviewed")]

    def test_add_instruction(self, config_path, fake_provider):
        """add-instruction updates the source comment."""
        status = main.main(
            ["--config", config_path, "add-instruction", "main", "app.title", "Title"],
            provider=fake_provider,
        )
        assert status == 0
        assert len(fake_provider.calls_to("update_source_comment")) == 1

    def test_project_resources(self, config_path, make_provider, capsys):
        """project-resources prints each resource name."""
        provider = make_provider(details={"resources": [{"slug": "main", "name": "Main"}]})
        assert main.main(["--config", config_path, "project-resources"], provider=provider) == 0
        assert "Main" in capsys.readouterr().out

    def test_create_language_all(self, config_path, fake_provider):
        """create-language all provisions every translation directory."""
        assert main.main(["--config", config_path, "create-language", "all"], provider=fake_provider) == 0
        assert sorted(a[0] for a in fake_provider.calls_to("create_language")) == ["fi_FI", "sv_SE"]

    def test_undecodable_translation(self, config_path, fake_provider, strings_dir, capsys):
        """A translation file that is not UTF-8 exits with 1 and a message."""
        (strings_dir / "fi-FI" / "main.resjson").write_bytes(b'{"app.title": "\xff"}')
        status = main.main(
            ["--config", config_path, "push-translation-key", "main", "app.title"],
            provider=fake_provider,
        )
        assert status == 1
        assert "not valid UTF-8" in capsys.readouterr().err
        assert fake_provider.calls == []
