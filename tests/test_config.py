import logging

import pytest
from pydantic import ValidationError

from backend.config import Settings, TestingSettings
from backend.projects.factory import ProjectStoreFactory
from backend.projects.local import LocalProjectStore
from backend.projects.memory import InMemoryProjectStore
from backend.utils.logging_utils import log_pipeline_action


def test_comma_separated_hosts_and_origins():
    settings = Settings(CORS_ORIGINS="http://a.test, http://b.test", ALLOWED_HOSTS="a.test,b.test")

    assert settings.CORS_ORIGINS == ["http://a.test", "http://b.test"]
    assert settings.ALLOWED_HOSTS == ["a.test", "b.test"]


def test_log_level_is_normalised_and_checked():
    assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="chatty")


def test_docs_follow_debug_unless_set():
    assert Settings(DEBUG=True).docs_enabled is True
    assert Settings(DEBUG=False).docs_enabled is False
    assert Settings(DEBUG=True, API_DOCS_ENABLED=False).docs_enabled is False


def test_testing_profile_uses_memory_store():
    settings = TestingSettings()

    assert settings.TESTING is True
    assert isinstance(ProjectStoreFactory.create(settings), InMemoryProjectStore)


def test_local_store_from_settings(tmp_path):
    settings = Settings(PROJECT_STORAGE_TYPE="local", PROJECT_STORAGE_PATH=str(tmp_path / "projects"))

    store = ProjectStoreFactory.create(settings)

    assert isinstance(store, LocalProjectStore)
    assert (tmp_path / "projects").is_dir()


def test_log_pipeline_action_format(caplog):
    with caplog.at_level(logging.INFO, logger="pipeline_actions"):
        log_pipeline_action("export_notebook", details="churn.ipynb")
        log_pipeline_action("save_project", success=False)

    assert caplog.records[0].getMessage() == (
        "Action: export_notebook | Details: churn.ipynb | Status: SUCCESS"
    )
    assert caplog.records[1].levelno == logging.ERROR
    assert caplog.records[1].getMessage().endswith("Status: FAILED")
