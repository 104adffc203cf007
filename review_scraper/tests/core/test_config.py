import pytest
import os
import yaml

from review_scraper.core.config import ConfigurationManager, ConfigFileNotFoundError, InvalidYamlError, DEFAULT_ENV


@pytest.fixture(scope="function") # Use function scope to ensure clean state for each test
def temp_config_files(tmp_path):
    """
    Creates temporary YAML config files and points the ConfigurationManager singleton at them.
    The packaged configuration is reloaded afterwards so other tests see the real settings.
    """
    original_config_dir = ConfigurationManager.CONFIG_DIR

    # ConfigurationManager is a singleton; reset its state for isolated tests.
    if ConfigurationManager._instance:
        ConfigurationManager._instance._config = {}
        ConfigurationManager._instance._current_env = ""

    ConfigurationManager.CONFIG_DIR = str(tmp_path)

    dev_config_content = {
        "components": {
            "scraper": {"max_pages": None, "timeouts": {"consent_ms": 300}},
            "playwright_manager": {"browser_type": "chromium", "headless": False},
        },
        "retry": {"max_attempts": 5, "backoff_base": 3},
    }
    prod_config_content = {
        "components": {"playwright_manager": {"browser_type": "firefox", "headless": True}},
        "retry": {"max_attempts": 3},
    }
    invalid_yaml_content = "retry: {max_attempts: 5, backoff_base: 3" # Missing closing brace

    with open(tmp_path / "development.yaml", "w") as f:
        yaml.dump(dev_config_content, f)
    with open(tmp_path / "production.yaml", "w") as f:
        yaml.dump(prod_config_content, f)
    with open(tmp_path / "invalid.yaml", "w") as f:
        f.write(invalid_yaml_content)
    # Non-dict YAML content
    with open(tmp_path / "not_dict.yaml", "w") as f:
        yaml.dump(["list", "instead", "of", "dict"], f)

    yield tmp_path

    ConfigurationManager.CONFIG_DIR = original_config_dir
    ConfigurationManager().load_config(DEFAULT_ENV)


def test_load_development_config_default(temp_config_files, monkeypatch):
    """Test loading development configuration by default (APP_ENV not set)."""
    monkeypatch.delenv("APP_ENV", raising=False) # Ensure APP_ENV is not set

    config_manager = ConfigurationManager()
    config_manager.load_config()

    assert config_manager.current_environment == "development"
    assert config_manager.get("retry.max_attempts") == 5
    assert config_manager.get("components.playwright_manager.headless") is False
    assert config_manager.get("non_existent_key") is None
    assert config_manager.get("non_existent_key", "default_val") == "default_val"

def test_load_production_config_env_var(temp_config_files, monkeypatch):
    """Test loading production configuration using APP_ENV."""
    monkeypatch.setenv("APP_ENV", "production")

    config_manager = ConfigurationManager()
    config_manager.load_config()

    assert config_manager.current_environment == "production"
    assert config_manager.get("components.playwright_manager.browser_type") == "firefox"
    assert config_manager.get("retry.max_attempts") == 3

def test_load_config_explicit_env_param(temp_config_files, monkeypatch):
    """Test that the 'env' parameter wins over APP_ENV."""
    monkeypatch.setenv("APP_ENV", "development")

    config_manager = ConfigurationManager()
    config_manager.load_config(env="production")

    assert config_manager.current_environment == "production"
    assert config_manager.get("retry.max_attempts") == 3

def test_get_nested_value(temp_config_files):
    config_manager = ConfigurationManager()
    config_manager.load_config("development")

    assert config_manager.get("components.scraper.timeouts.consent_ms") == 300
    assert config_manager.get("retry") == {"max_attempts": 5, "backoff_base": 3}

def test_get_explicit_null_is_not_replaced_by_default(temp_config_files):
    """A key that is present with a null value returns None, not the default."""
    config_manager = ConfigurationManager()
    config_manager.load_config("development")

    assert config_manager.get("components.scraper.max_pages", 10) is None

def test_get_non_existent_nested_value(temp_config_files):
    """Test getting non-existent nested values returns default."""
    config_manager = ConfigurationManager()
    config_manager.load_config("development")

    assert config_manager.get("retry.non_existent_sub_key") is None
    assert config_manager.get("retry.max_attempts.deeper", "fallback") == "fallback"
    assert config_manager.get("completely.made.up.path", "fallback") == "fallback"

def test_reload_config(temp_config_files, monkeypatch):
    """Test reloading configuration."""
    monkeypatch.setenv("APP_ENV", "development")
    config_manager = ConfigurationManager()
    config_manager.load_config() # Initial load (development)
    assert config_manager.get("retry.max_attempts") == 5

    # Modify the development.yaml content directly for testing reload
    with open(temp_config_files / "development.yaml", "w") as f:
        yaml.dump({"retry": {"max_attempts": 7}}, f)

    config_manager.reload_config() # Reload the current environment (development)
    assert config_manager.get("retry.max_attempts") == 7

    config_manager.reload_config(env="production")
    assert config_manager.current_environment == "production"
    assert config_manager.get("retry.max_attempts") == 3


def test_config_file_not_found_error(temp_config_files, monkeypatch):
    """Test ConfigFileNotFoundError for non-existent environment."""
    monkeypatch.setenv("APP_ENV", "staging") # staging.yaml does not exist
    config_manager = ConfigurationManager()

    with pytest.raises(ConfigFileNotFoundError) as excinfo:
        config_manager.load_config()
    assert "Configuration file not found for environment 'staging'" in str(excinfo.value)
    assert "staging.yaml" in str(excinfo.value)

def test_invalid_yaml_error(temp_config_files, monkeypatch):
    """Test InvalidYamlError for malformed YAML file."""
    monkeypatch.setenv("APP_ENV", "invalid")
    config_manager = ConfigurationManager()

    with pytest.raises(InvalidYamlError) as excinfo:
        config_manager.load_config()
    assert "Error parsing YAML" in str(excinfo.value)
    assert "invalid.yaml" in str(excinfo.value)

def test_yaml_not_dict_error(temp_config_files, monkeypatch):
    """Test InvalidYamlError if YAML content is not a dictionary."""
    monkeypatch.setenv("APP_ENV", "not_dict")
    config_manager = ConfigurationManager()

    with pytest.raises(InvalidYamlError) as excinfo:
        config_manager.load_config()
    assert "does not contain a valid YAML dictionary" in str(excinfo.value)
    assert "not_dict.yaml" in str(excinfo.value)

def test_singleton_behavior(temp_config_files):
    """Test that ConfigurationManager is a singleton."""
    config_manager1 = ConfigurationManager()
    config_manager1.load_config("development")

    config_manager2 = ConfigurationManager() # Should be the same instance

    assert config_manager1 is config_manager2
    assert config_manager2.get("retry.max_attempts") == 5 # State is preserved

    config_manager2.load_config("production")
    assert config_manager1.get("retry.max_attempts") == 3
    assert config_manager1.current_environment == "production"

def test_packaged_configs_load():
    """The shipped development and production files parse and carry the retry budget."""
    for env in ("development", "production"):
        path = os.path.join(ConfigurationManager.CONFIG_DIR, f"{env}.yaml")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        assert data["retry"] == {"max_attempts": 5, "backoff_base": 3}
        assert data["components"]["scraper"]["timeouts"]["consent_ms"] == 300
