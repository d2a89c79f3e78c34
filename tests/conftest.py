"""Shared fixtures for the edit preview backend tests"""

import pytest

from services.config_manager import ConfigManager


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def files():
    """In-memory file contents keyed by file identity"""
    return {
        "git://github.com/acme/app?main#src/app.py": "import os\n\n\ndef main():\n    print('hi')\n",
        "git://github.com/acme/app?main#README.md": "# App\n\nSome docs.\n",
    }


@pytest.fixture
def read_file(files):
    async def read(uri: str) -> str:
        if uri not in files:
            raise FileNotFoundError(uri)
        return files[uri]

    return read


@pytest.fixture
def config_manager(tmp_path):
    """Isolated config singleton pointing at a temporary workspace"""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    manager = ConfigManager(config_dir=str(tmp_path / "config"))
    manager.save_config({"workspace": {"root": str(workspace)}})
    ConfigManager._instance = manager
    yield manager
    ConfigManager.reset_instance()
