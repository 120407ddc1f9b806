import os

import pytest

LRUKIT_ENV_VARS = ("LRUKIT_DEFAULT_CAPACITY", "LRUKIT_LOG_LEVEL", "LRUKIT_PROGRESS")


@pytest.fixture(autouse=True)
def clean_lrukit_env():
    """
    Temporarily remove LRUKIT_* variables so tests don't depend on the developer's
    shell or a stray .env file.
    """
    original = {name: os.environ.get(name) for name in LRUKIT_ENV_VARS}
    for name in LRUKIT_ENV_VARS:
        os.environ.pop(name, None)

    try:
        yield
    finally:
        for name, value in original.items():
            if value is not None:
                os.environ[name] = value
            else:
                os.environ.pop(name, None)


@pytest.fixture
def no_dotenv(monkeypatch, tmp_path):
    """Run from an empty directory so find_dotenv() has nothing to pick up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
