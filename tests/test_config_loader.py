from eyewear_catalog.utils.config_loader import load_catalog_config, normalize_connection_string


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_catalog_config(tmp_path / "absent.yml", environ={})
    assert cfg.client.products_api_url is None
    assert cfg.client.default_port == 5004
    assert cfg.backup.key == "eyewear_products_backup"
    assert cfg.server.database_url is None


def test_yaml_values_and_env_overrides(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(
        "client:\n  products_api_url: https://from-yaml/api\nbackup:\n  path: data/b.json\nserver:\n",
        encoding="utf-8",
    )

    cfg = load_catalog_config(
        path,
        environ={"PRODUCTS_API_URL": "https://from-env/api", "DATABASE_URL": "'postgresql://u@h/db'", "PORT": "8080"},
    )

    assert cfg.client.products_api_url == "https://from-env/api"
    assert cfg.backup.path == "data/b.json"
    assert cfg.server.database_url == "postgresql://u@h/db"
    assert cfg.server.port == 8080


def test_bundled_config_loads():
    cfg = load_catalog_config(environ={})
    assert cfg.backup.path == "data/products_backup.json"


def test_normalize_connection_string():
    assert normalize_connection_string("  psql 'postgresql://u:p@h/db?sslmode=require' ") == (
        "postgresql://u:p@h/db?sslmode=require"
    )
