from pathlib import Path

from tool_catalog.config import AppConfig, FetchConfig, get_github_token, load_config


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.sources.github.delay_seconds == 2.0
    assert cfg.sources.github.page_size == 100
    assert cfg.sources.vscode.delay_seconds == 1.5
    assert cfg.sources.npm.delay_seconds == 1.0
    assert cfg.sources.manual.enabled is False
    assert cfg.quality.min_description_length == 10


def test_load_config_merges_sections_over_defaults(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "sources:",
                "  github:",
                "    delay_seconds: 0.5",
                "  manual:",
                "    enabled: true",
                "    path: tools.yaml",
                "quality:",
                "  min_repo_stars: 5",
                "seed_user:",
                "  username: catalog_bot",
                "unknown_section:",
                "  key: value",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.sources.github.delay_seconds == 0.5
    assert cfg.sources.github.page_size == 100
    assert cfg.sources.vscode.delay_seconds == 1.5
    assert cfg.sources.manual.enabled is True
    assert cfg.sources.manual.path == "tools.yaml"
    assert cfg.quality.min_repo_stars == 5
    assert cfg.quality.min_name_length == 2
    assert cfg.seed_user.username == "catalog_bot"
    assert cfg.seed_user.email == "bot@winterline.dev"


def test_empty_config_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_loaded_configs_do_not_share_state():
    first = load_config(None)
    first.sources.npm.enabled = False
    assert load_config(None).sources.npm.enabled is True


def test_github_token_from_environment(monkeypatch):
    monkeypatch.setenv("CATALOG_GH_TOKEN", "secret")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    assert get_github_token(FetchConfig(github_token_env="CATALOG_GH_TOKEN")) == "secret"
    assert get_github_token(FetchConfig()) is None
    assert get_github_token(FetchConfig(github_token_env="")) is None
