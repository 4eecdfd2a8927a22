import pytest
from unittest.mock import patch
from autocreds.aws_config.profiles import ProfileInfo
from autocreds.cli import build_parser, format_profile_list, main
from autocreds.errors import ProfileExistsError, UnsupportedProviderError


@pytest.fixture(autouse=True)
def no_logger_setup():
    with patch('autocreds.cli.setup_logger') as mock_setup_logger:
        yield mock_setup_logger


@patch('autocreds.cli.setup_command')
def test_setup_is_default_command(mock_setup):
    """Test that running without a command starts setup."""
    assert main([]) == 0

    options = mock_setup.call_args[0][0]
    assert options.force is False
    assert options.dry_run is False
    assert options.script_path is None


@patch('autocreds.cli.setup_command')
def test_setup_options_without_command(mock_setup):
    """Test that setup options work without naming the command."""
    assert main(["-v", "--force", "--dry-run", "--script-path", "~/bin"]) == 0

    options = mock_setup.call_args[0][0]
    assert options.force is True
    assert options.dry_run is True
    assert options.script_path == "~/bin"


@patch('autocreds.cli.setup_command')
def test_setup_oidc_options(mock_setup):
    """Test passing OIDC options."""
    main(["setup", "--oidc-provider", "google", "--oidc-client-id", "client",
          "--role-arn", "arn:aws:iam::123456789012:role/R", "--skip-login", "--verify"])

    options = mock_setup.call_args[0][0]
    assert options.oidc_provider == "google"
    assert options.oidc_client_id == "client"
    assert options.role_arn == "arn:aws:iam::123456789012:role/R"
    assert options.skip_login is True
    assert options.verify is True


@patch('autocreds.cli.setup_command')
def test_errors_map_to_exit_code(mock_setup, capsys):
    """Test that expected errors exit with 1 and a message."""
    mock_setup.side_effect = UnsupportedProviderError("azure")

    assert main(["setup"]) == 1
    assert "❌ OIDC provider 'azure' is not supported" in capsys.readouterr().out

    mock_setup.side_effect = ProfileExistsError("profile eng-sso")
    assert main(["setup"]) == 1


@patch('autocreds.cli.setup_command')
def test_file_errors_map_to_exit_code(mock_setup, capsys):
    """Test that file system errors exit with 1."""
    mock_setup.side_effect = PermissionError("Permission denied: '/root/.aws/config'")

    assert main(["setup"]) == 1
    assert "File error" in capsys.readouterr().out


@patch('autocreds.cli.setup_command')
def test_keyboard_interrupt(mock_setup):
    """Test that Ctrl+C exits with 130."""
    mock_setup.side_effect = KeyboardInterrupt()

    assert main(["setup"]) == 130


def test_verbose_enables_debug_logging(no_logger_setup):
    """Test that --verbose turns on debug logging."""
    with patch('autocreds.cli.setup_command'):
        main(["--verbose", "setup"])

    assert no_logger_setup.call_args[1]["level"] == 10


@patch('autocreds.cli.validate_profile')
def test_validate_command(mock_validate, capsys):
    """Test the validate command exit codes."""
    mock_validate.return_value = (True, "Credentials are valid (arn, account 123456789012)")
    assert main(["validate", "--profile", "eng-auto-credentials"]) == 0
    mock_validate.assert_called_with("eng-auto-credentials")

    mock_validate.return_value = (False, "Credential validation failed: expired")
    assert main(["validate"]) == 1
    mock_validate.assert_called_with(None)
    assert "❌ Credential validation failed" in capsys.readouterr().out


def test_list_command(tmp_path, monkeypatch, capsys):
    """Test listing profiles from AWS_CONFIG_FILE."""
    config = tmp_path / "config"
    config.write_text(
        "[profile eng-sso]\nsso_session = s\nregion = us-east-1\n\n"
        "[profile eng-auto-credentials]\ncredential_process = bash /x.sh --json\n\n"
        "[profile static]\naws_access_key_id = AKIA\n"
    )
    monkeypatch.setenv("AWS_CONFIG_FILE", str(config))
    monkeypatch.setenv("AWS_PROFILE", "eng-sso")

    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "→ eng-sso - us-east-1 [sso] (ACTIVE)" in out
    assert "eng-auto-credentials" in out
    assert "static" not in out
    assert "Active profile: eng-sso" in out

    assert main(["list", "--all"]) == 0
    assert "static" in capsys.readouterr().out


def test_format_profile_list_empty():
    """Test the message for an empty config."""
    assert format_profile_list([]) == "No AWS profiles found."


def test_format_profile_list_marks_active():
    """Test the active profile marker."""
    output = format_profile_list([ProfileInfo("a", is_active=True), ProfileInfo("b")])

    assert output == "→ a\n  b"


def test_parser_commands():
    """Test the available subcommands."""
    parser = build_parser()

    assert parser.parse_args(["list", "-a"]).all is True
    assert parser.parse_args(["validate"]).profile is None


def test_undecodable_config_is_file_error(tmp_path, monkeypatch, capsys):
    """Test that a config file that is not UTF-8 exits with 1 instead of a traceback."""
    config = tmp_path / "config"
    config.write_bytes(b"# caf\xe9\n[profile dev]\nregion = us-east-1\n")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(config))

    assert main(["list"]) == 1
    assert "❌ File error" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [
    ["setup", "--verbose"],
    ["--verbose", "setup"],
    ["setup", "-v", "--force"],
    ["--force", "-v"],
])
def test_verbose_before_or_after_command(argv, no_logger_setup):
    """Test that --verbose is accepted on either side of the command."""
    with patch('autocreds.cli.setup_command'):
        assert main(argv) == 0

    assert no_logger_setup.call_args[1]["level"] == 10


@patch('autocreds.cli.setup_command')
def test_not_verbose_by_default(mock_setup, no_logger_setup):
    """Test that logging stays at the default level without --verbose."""
    assert main(["setup"]) == 0

    no_logger_setup.assert_called_once_with()


@patch('autocreds.cli.validate_profile')
def test_validate_verbose_after_command(mock_validate, no_logger_setup):
    """Test --verbose after the validate command."""
    mock_validate.return_value = (True, "Credentials are valid")

    assert main(["validate", "--profile", "p", "--verbose"]) == 0
    assert no_logger_setup.call_args[1]["level"] == 10
