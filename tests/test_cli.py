from typer.testing import CliRunner

from ttl_file_cache.cli import app
from ttl_file_cache.util.hashing import hash_key

runner = CliRunner()


def _invoke(root, *args: str):
    return runner.invoke(app, ["--root", str(root), *args])


def test_cli_set_get_has_delete(tmp_path) -> None:
    root = tmp_path / "c"

    result = _invoke(root, "set", "film", '{"title": "Heat"}')
    assert result.exit_code == 0, result.output
    assert hash_key("film") in result.output

    result = _invoke(root, "get", "film")
    assert result.exit_code == 0
    assert '"title": "Heat"' in result.output

    assert _invoke(root, "has", "film").exit_code == 0

    result = _invoke(root, "delete", "film")
    assert result.exit_code == 0
    assert "Deleted" in result.output

    assert _invoke(root, "has", "film").exit_code == 1
    result = _invoke(root, "get", "film")
    assert result.exit_code == 1
    assert "miss" in result.output


def test_cli_plain_text_value_and_keys(tmp_path) -> None:
    root = tmp_path / "c"
    assert _invoke(root, "set", "note", "hello world", "--ttl", "60").exit_code == 0

    result = _invoke(root, "keys")
    assert result.exit_code == 0
    assert hash_key("note") in result.output

    result = _invoke(root, "get", "note")
    assert "hello world" in result.output


def test_cli_clear_and_delete_all(tmp_path) -> None:
    root = tmp_path / "c"
    _invoke(root, "set", "a", "1")

    assert _invoke(root, "clear").exit_code == 0
    assert root.is_dir()
    assert list(root.iterdir()) == []

    assert _invoke(root, "delete-all").exit_code == 0
    assert not root.exists()


def test_cli_prune(tmp_path) -> None:
    root = tmp_path / "c"
    result = _invoke(root, "prune")
    assert result.exit_code == 0
    assert "Pruned: 0" in result.output


def test_cli_missing_config_fails(tmp_path) -> None:
    result = runner.invoke(app, ["--config", str(tmp_path / "nope.toml"), "keys"])
    assert result.exit_code == 1
